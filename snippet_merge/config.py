"""
Configuration for snippet merging.

Covers the parser dialect, the merge policies left open by the merge
algorithm, the optional prettier post-processing and output file handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Overwrite without merging
    MERGE = "merge"  # Default: merge into the existing file


class AnchorFallback(str, Enum):
    """Where new bindings go when the target has no default export."""

    APPEND = "append"  # Default: append at the end of the file
    SKIP = "skip"  # Drop the binding (reported in MergeReport.skipped)


DIALECTS = ("tsx", "typescript")


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.MERGE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the prettier formatter."""

    # Whether formatting is enabled (falls back to unformatted code without prettier)
    enabled: bool = True

    # Executable (and leading arguments) used to invoke prettier
    command: list[str] = field(default_factory=lambda: ["prettier"])

    # Prettier parser name
    parser: str = "babel-ts"

    # Prefer single quotes
    single_quote: bool = True

    # Seconds before a prettier run is abandoned
    timeout: int = 30


@dataclass
class MergeConfig:
    """Configuration options for merging."""

    # Grammar used to parse snippets ("tsx" or "typescript")
    dialect: str = "tsx"

    # Policy for new bindings when the target has no default export
    anchor_fallback: AnchorFallback = AnchorFallback.APPEND

    # Annotate diverged definitions even when no history baseline exists
    annotate_without_baseline: bool = False

    # Re-parse merged code before returning it from merge_files
    validate_result: bool = True

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.dialect not in DIALECTS:
            raise ValueError(f"Unknown dialect {self.dialect!r}, expected one of {', '.join(DIALECTS)}")

    @staticmethod
    def from_dict(d: dict) -> MergeConfig:
        """Create a config from a dictionary."""
        config = MergeConfig()
        for k, v in d.items():
            if k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.MERGE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "anchor_fallback":
                config.anchor_fallback = AnchorFallback(v)
            elif k == "dialect":
                if v not in DIALECTS:
                    raise ValueError(f"Unknown dialect {v!r}, expected one of {', '.join(DIALECTS)}")
                config.dialect = v
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "dialect": self.dialect,
            "anchor_fallback": self.anchor_fallback.value,
            "annotate_without_baseline": self.annotate_without_baseline,
            "validate_result": self.validate_result,
            "formatter": {
                "enabled": self.formatter.enabled,
                "command": list(self.formatter.command),
                "parser": self.formatter.parser,
                "single_quote": self.formatter.single_quote,
                "timeout": self.formatter.timeout,
            },
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
