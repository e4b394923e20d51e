"""
Exceptions raised while building and merging snippets.
"""

from __future__ import annotations


class CodeMergeError(Exception):
    """Raised when code merging fails.

    This can happen when:
    - A snippet is built from empty source
    - A snippet or the merged result cannot be parsed
    - An output file cannot be written in the requested mode
    """

    pass


class EmptySourceError(CodeMergeError, ValueError):
    """Raised when a snippet is constructed from empty or missing text."""

    def __init__(self, message: str = "Empty source is provided"):
        super().__init__(message)


class SnippetParseError(CodeMergeError):
    """Raised when the parser rejects a source snippet.

    Attributes:
        line: 1-based line of the first syntax error, if known
        column: 1-based column of the first syntax error, if known
        source: The rejected source text
    """

    def __init__(self, message: str, source: str = "", line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.source = source
        self.line = line
        self.column = column
