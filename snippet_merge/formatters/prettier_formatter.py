"""
Prettier formatter for TypeScript/JavaScript code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class PrettierFormatter(Formatter):
    """Formatter piping code through the prettier executable."""

    def __init__(self, config: FormatterConfig | None = None):
        self.config = config or FormatterConfig(enabled=True)
        self._available = None
        self._cache: dict[str, str] = {}

    def is_available(self) -> bool:
        """Check if prettier is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [*self.config.command, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=self.config.timeout,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, OSError):
                self._available = False
            if not self._available:
                logger.debug("prettier is not available via %s, code stays unformatted", " ".join(self.config.command))
        return self._available

    def format(self, code: str) -> str:
        """
        Format code using prettier.

        Args:
            code: Source code to format

        Returns:
            Formatted code
        """
        if not self.is_available():
            # Return unformatted code if prettier is not available
            return code

        if code in self._cache:
            return self._cache[code]

        cmd = [*self.config.command, "--parser", self.config.parser]
        if self.config.single_quote:
            cmd.append("--single-quote")

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("prettier failed: %s", e)
            return code

        if result.returncode != 0:
            # If formatting fails, return original code
            logger.debug("prettier rejected code: %s", result.stderr.strip())
            return code

        self._cache[code] = result.stdout
        return result.stdout


def create_formatter(config: FormatterConfig) -> Formatter | None:
    """Formatter for a config, or None when formatting is disabled."""
    if not config.enabled:
        return None
    return PrettierFormatter(config)
