"""
Merge orchestration: imports first, then definitions, then cache refresh.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import MergeConfig
from ..errors import CodeMergeError, SnippetParseError
from ..history import HistoryChain
from ..snippet import SourceSnippet, default_parser
from .base import MergeReport, MergeResult
from .definitions import DefinitionReconciler
from .imports import ImportReconciler

logger = logging.getLogger(__name__)


class SnippetMerger:
    """Merges a generated snippet into a target snippet.

    The target is mutated in place. The incoming snippet and its history
    are only read. There is no rollback: if a step fails, the target keeps
    the edits made so far.
    """

    def __init__(self, config: MergeConfig | None = None):
        self.config = config or MergeConfig()
        self.import_reconciler = ImportReconciler()
        self.definition_reconciler = DefinitionReconciler(self.config)

    def merge(self, incoming: SourceSnippet, target: SourceSnippet) -> MergeReport:
        """Merge incoming's imports and definitions into target.

        Args:
            incoming: Newly generated snippet, carrying the history chain
            target: Snippet to merge into

        Returns:
            MergeReport describing the edits
        """
        report = MergeReport()
        history_index = HistoryChain(incoming.history).index_by_name()

        incoming.refresh()
        target.refresh()

        for import_id in incoming.imports:
            self.import_reconciler.merge_import(target, incoming, import_id, report)

        for declaration_id in incoming.definitions:
            self.definition_reconciler.merge_definition(target, incoming, declaration_id, history_index, report)

        target.refresh()
        logger.debug("Merge finished: %s", report.summary())
        return report

    def snippet(self, code: str, history: Iterable[SourceSnippet] = ()) -> SourceSnippet:
        """Build a snippet with this merger's parser dialect and formatter."""
        return SourceSnippet.from_config(code, self.config, history)

    def merge_files(self, generated_code: str, existing_code: str, history_codes: Iterable[str] = ()) -> MergeResult:
        """High-level merge operation on source text.

        Args:
            generated_code: The newly generated code
            existing_code: The existing file contents
            history_codes: Previously generated versions, oldest first

        Returns:
            MergeResult with the merged code and the report

        Raises:
            CodeMergeError: If any input cannot be parsed or the result is invalid
        """
        history = [self.snippet(code) for code in history_codes]
        incoming = self.snippet(generated_code, history)
        target = self.snippet(existing_code)

        report = self.merge(incoming, target)
        merged = target.source

        if self.config.validate_result:
            self.validate(merged)

        return MergeResult(merged, report)

    def validate(self, code: str) -> None:
        """Validate that merged code parses.

        Raises:
            CodeMergeError: If validation fails
        """
        try:
            default_parser(self.config.dialect).parse(code)
        except SnippetParseError as e:
            raise CodeMergeError(f"Merged code is not valid: {e}") from e
