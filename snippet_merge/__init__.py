"""Snippet Merge

Semantic, history-aware merging of generated TypeScript/JavaScript
snippets into existing source files. Imports and top-level constants are
reconciled on the syntax tree; manual edits to generated constants are
kept visible as comments.
"""

__version__ = "1.0.0"

from .config import AnchorFallback, FormatterConfig, MergeConfig, OutputConfig, OutputMode
from .errors import CodeMergeError, EmptySourceError, SnippetParseError
from .history import HistoryChain
from .merger import AtomicWriter, MergeConflict, MergeReport, MergeResult, SnippetMerger
from .snippet import Binding, SourceSnippet
from .templates import SnippetTemplates

__all__ = [
    "AnchorFallback",
    "AtomicWriter",
    "Binding",
    "CodeMergeError",
    "EmptySourceError",
    "FormatterConfig",
    "HistoryChain",
    "MergeConfig",
    "MergeConflict",
    "MergeReport",
    "MergeResult",
    "OutputConfig",
    "OutputMode",
    "SnippetMerger",
    "SnippetParseError",
    "SnippetTemplates",
    "SourceSnippet",
]
