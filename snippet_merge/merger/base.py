"""
Result containers for snippet merging.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import CodeMergeError, EmptySourceError, SnippetParseError

__all__ = [
    "CodeMergeError",
    "EmptySourceError",
    "MergeConflict",
    "MergeReport",
    "MergeResult",
    "SnippetParseError",
]


@dataclass
class MergeConflict:
    """A manual edit that was overwritten and preserved as a comment.

    Attributes:
        name: Binding name
        existing: Rendered code found in the target
        baseline: Rendered code of the last generated version, if any
        incoming: Rendered code that replaced it
    """

    name: str
    existing: str
    baseline: str | None
    incoming: str


@dataclass
class MergeReport:
    """What a merge changed in the target.

    Attributes:
        added_imports: Module paths of import declarations inserted whole
        added_specifiers: (module path, local name) of specifiers appended to existing imports
        inserted: Names of bindings that were new to the target
        replaced: Names of bindings whose declaration was replaced
        skipped: Names of new bindings dropped for lack of an insertion anchor
        conflicts: Manual edits preserved as leading comments
    """

    added_imports: list[str] = field(default_factory=list)
    added_specifiers: list[tuple[str, str]] = field(default_factory=list)
    inserted: list[str] = field(default_factory=list)
    replaced: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    conflicts: list[MergeConflict] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True if the merge added anything. Replacements count as changes."""
        return bool(self.added_imports or self.added_specifiers or self.inserted or self.replaced)

    def summary(self) -> str:
        parts = [
            f"{len(self.added_imports)} imports added",
            f"{len(self.added_specifiers)} specifiers added",
            f"{len(self.inserted)} definitions inserted",
            f"{len(self.replaced)} definitions replaced",
        ]
        if self.skipped:
            parts.append(f"{len(self.skipped)} definitions skipped")
        if self.conflicts:
            parts.append(f"{len(self.conflicts)} manual edits preserved")
        return ", ".join(parts)


@dataclass
class MergeResult:
    """Merged code together with the report of the merge that produced it."""

    code: str
    report: MergeReport
