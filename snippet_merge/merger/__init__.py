"""
Merger module.

Provides syntax-tree level merging of generated snippets into existing
files, preserving manual edits to generated definitions.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .base import CodeMergeError, EmptySourceError, MergeConflict, MergeReport, MergeResult, SnippetParseError
from .definitions import DefinitionReconciler
from .imports import ImportReconciler
from .orchestrator import SnippetMerger

__all__ = [
    "AtomicWriter",
    "CodeMergeError",
    "DefinitionReconciler",
    "EmptySourceError",
    "ImportReconciler",
    "MergeConflict",
    "MergeReport",
    "MergeResult",
    "SnippetMerger",
    "SnippetParseError",
]
