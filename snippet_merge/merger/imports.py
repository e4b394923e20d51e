"""
Import reconciliation.

Merging is additive: an incoming import either joins the target's
declaration for the same module and first-specifier kind, or is inserted
as a new declaration after the target's last import.
"""

from __future__ import annotations

import logging

from ..snippet import SourceSnippet
from ..syntax import ImportDeclaration, ImportSpecifier, NodeId, OpaqueStatement, SpecifierKind, SyntaxTree
from .base import MergeReport

logger = logging.getLogger(__name__)


def first_specifier_kind(tree: SyntaxTree, declaration: ImportDeclaration) -> SpecifierKind | None:
    """Kind of the first specifier, None for side-effect imports."""
    if not declaration.specifiers:
        return None
    return tree[declaration.specifiers[0]].kind


def accepts(tree: SyntaxTree, declaration: ImportDeclaration, specifier: ImportSpecifier) -> bool:
    """Whether appending the specifier keeps the declaration valid syntax."""
    kinds = [tree[s].kind for s in declaration.specifiers]
    if specifier.kind is SpecifierKind.DEFAULT:
        # A default import has to come first
        return not kinds
    if specifier.kind is SpecifierKind.NAMESPACE:
        return all(k is SpecifierKind.DEFAULT for k in kinds)
    return SpecifierKind.NAMESPACE not in kinds


class ImportReconciler:
    """Merges incoming import declarations into a target snippet."""

    def find_matching(self, target: SourceSnippet, source: str, kind: SpecifierKind | None) -> NodeId | None:
        for import_id in target.imports:
            declaration = target.tree[import_id]
            if declaration.source == source and first_specifier_kind(target.tree, declaration) == kind:
                return import_id
        return None

    def merge_import(self, target: SourceSnippet, incoming: SourceSnippet, import_id: NodeId, report: MergeReport) -> None:
        """Merge one of incoming's import declarations into target.

        Args:
            target: Snippet being merged into (mutated)
            incoming: Snippet owning the declaration (unchanged)
            import_id: Id of the declaration in incoming's tree
            report: Collects what changed
        """
        declaration = incoming.tree[import_id]
        kind = first_specifier_kind(incoming.tree, declaration)
        match_id = self.find_matching(target, declaration.source, kind)

        if match_id is None:
            self.insert_import(target, target.tree.adopt(incoming.tree, import_id))
            report.added_imports.append(declaration.source)
            logger.debug("Added import from %r", declaration.source)
            return

        matched = target.tree[match_id]
        existing_keys = {target.tree[s].key for s in matched.specifiers}
        rejected: list[NodeId] = []

        for specifier_id in declaration.specifiers:
            specifier = incoming.tree[specifier_id]
            if specifier.key in existing_keys:
                continue
            if not accepts(target.tree, matched, specifier):
                rejected.append(specifier_id)
                continue
            target.tree.push_child(match_id, target.tree.adopt(incoming.tree, specifier_id))
            existing_keys.add(specifier.key)
            report.added_specifiers.append((declaration.source, specifier.local))
            logger.debug("Added %r to import from %r", specifier.local, declaration.source)

        if rejected:
            # Cannot share a declaration with the matched one, import separately
            split = ImportDeclaration(
                source=declaration.source,
                quote=declaration.quote,
                import_kind=declaration.import_kind,
                attributes=declaration.attributes,
            )
            split_id = target.tree.add(split)
            for specifier_id in rejected:
                target.tree.push_child(split_id, target.tree.adopt(incoming.tree, specifier_id))
            self.insert_import(target, split_id)
            report.added_imports.append(declaration.source)
            logger.debug("Added separate import from %r for %d specifiers", declaration.source, len(rejected))

    def insert_import(self, target: SourceSnippet, import_id: NodeId) -> None:
        """Insert after the last import, else after the directive prologue."""
        target.tree[import_id].blank_line_before = False
        if target.imports:
            target.tree.insert_after(target.imports[-1], import_id)
        else:
            index = 0
            for _, statement in target.tree.statements():
                if not (isinstance(statement, OpaqueStatement) and statement.directive):
                    break
                index += 1
            target.tree.insert_at(index, import_id)
        target.find_all_imports()
