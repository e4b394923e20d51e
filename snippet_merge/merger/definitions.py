"""
Top-level definition reconciliation.

Each incoming binding either is new to the target (inserted before the
default export) or replaces the target's binding of the same name. The
history baseline decides whether the replaced code was a manual edit that
must stay visible as a comment on the replacement.
"""

from __future__ import annotations

import logging

from ..config import AnchorFallback, MergeConfig
from ..snippet import Binding, SourceSnippet
from ..syntax import NodeId, VariableDeclaration, block_comment
from .base import MergeConflict, MergeReport

logger = logging.getLogger(__name__)


def binding_label(binding: Binding) -> str:
    if binding.is_identifier:
        return binding.name
    return binding.node.id.bare


class DefinitionReconciler:
    """Merges incoming variable declarations into a target snippet."""

    def __init__(self, config: MergeConfig | None = None):
        self.config = config or MergeConfig()

    def merge_definition(
        self,
        target: SourceSnippet,
        incoming: SourceSnippet,
        declaration_id: NodeId,
        history_index: dict[str, Binding],
        report: MergeReport,
    ) -> None:
        """Merge every binding of one incoming declaration into target.

        Args:
            target: Snippet being merged into (mutated)
            incoming: Snippet owning the declaration (unchanged)
            declaration_id: Id of the VariableDeclaration in incoming's tree
            history_index: Baseline binding per name
            report: Collects what changed
        """
        declaration = incoming.tree[declaration_id]
        for declarator_id in declaration.declarators:
            binding = Binding(incoming, declaration_id, declarator_id)
            existing = target.find_binding(binding.name) if binding.is_identifier else None

            if existing is None:
                self.insert_definition(target, binding, report)
            else:
                self.handle_existing_merge(target, existing, binding, history_index.get(binding.name), report)

            target.find_all_definitions()

    def insert_definition(self, target: SourceSnippet, binding: Binding, report: MergeReport) -> None:
        label = binding_label(binding)
        anchor = target.default_export

        if anchor is None and self.config.anchor_fallback is AnchorFallback.SKIP:
            logger.warning("No default export to insert %r before, skipping it", label)
            report.skipped.append(label)
            return

        new_id = self.new_declaration(target, binding)
        target.tree[new_id].blank_line_before = True
        if anchor is not None:
            target.tree.insert_before(anchor, new_id)
        else:
            target.tree.append(new_id)

        report.inserted.append(label)
        logger.debug("Inserted definition %r", label)

    def handle_existing_merge(
        self,
        target: SourceSnippet,
        existing: Binding,
        incoming: Binding,
        baseline: Binding | None,
        report: MergeReport,
    ) -> None:
        """Replace an existing binding, preserving it as a comment if it was edited by hand.

        The existing code is preserved when it differs both from the last
        generated baseline and from the incoming code.
        """
        snippet = incoming.snippet
        name = incoming.name

        diverged = (
            (baseline is not None or self.config.annotate_without_baseline)
            and not snippet.equal_bindings(existing, baseline)
            and not snippet.equal_bindings(existing, incoming)
        )

        new_id = self.new_declaration(target, incoming)
        replacement = target.tree[new_id]
        replaced = existing.statement
        annotations = []

        if diverged:
            existing_code = snippet.render(existing, comments=False)
            annotations.append(block_comment(existing_code))
            report.conflicts.append(
                MergeConflict(
                    name=name,
                    existing=existing_code,
                    baseline=snippet.render(baseline, comments=False) if baseline is not None else None,
                    incoming=snippet.render(incoming, comments=False),
                )
            )
            logger.warning("Definition %r was edited by hand, preserving it as a comment", name)

        if len(replaced.declarators) == 1:
            replacement.leading_comments = [*replaced.leading_comments, *annotations]
            replacement.trailing_comments = list(replaced.trailing_comments)
            replacement.blank_line_before = replaced.blank_line_before
            target.tree.replace_with(existing.declaration, new_id)
        else:
            # Keep the sibling bindings in their original statement; the
            # statement's header moves up to the replacement
            replacement.leading_comments = [*replaced.leading_comments, *annotations]
            replacement.blank_line_before = replaced.blank_line_before
            replaced.leading_comments = []
            replaced.blank_line_before = False
            target.tree.insert_before(existing.declaration, new_id)
            target.tree.remove_child(existing.declaration, existing.declarator)

        report.replaced.append(name)
        logger.debug("Replaced definition %r", name)

    def new_declaration(self, target: SourceSnippet, binding: Binding) -> NodeId:
        """Single-binding const declaration holding a copy of binding's declarator."""
        declarator_id = target.tree.adopt(binding.snippet.tree, binding.declarator)
        return target.tree.add(VariableDeclaration(kind="const", declarators=[declarator_id]))
