"""
Post-processing formatters for rendered code.
"""

from __future__ import annotations

from .base import Formatter
from .prettier_formatter import PrettierFormatter, create_formatter

__all__ = [
    "Formatter",
    "PrettierFormatter",
    "create_formatter",
]
