"""
Source snippets: a source text paired with its syntax tree.

A SourceSnippet caches the ids of its top-level import declarations and
variable declarations. The caches are only valid right after
find_all_imports()/find_all_definitions() (or refresh()); any structural
edit of the tree invalidates them until they are recomputed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from .config import MergeConfig
from .errors import EmptySourceError
from .formatters import Formatter
from .syntax import (
    ImportDeclaration,
    NodeId,
    OpaqueStatement,
    SyntaxTree,
    TypeScriptParser,
    VariableDeclaration,
    VariableDeclarator,
    print_binding,
    print_program,
    print_statement,
)


@lru_cache(maxsize=None)
def default_parser(dialect: str = "tsx") -> TypeScriptParser:
    return TypeScriptParser(dialect)


@dataclass(frozen=True, eq=False)
class Binding:
    """One name-to-initializer pair inside a variable declaration.

    Attributes:
        snippet: Snippet whose tree holds the binding
        declaration: Id of the enclosing VariableDeclaration
        declarator: Id of the VariableDeclarator
    """

    snippet: SourceSnippet
    declaration: NodeId
    declarator: NodeId

    @property
    def node(self) -> VariableDeclarator:
        return self.snippet.tree[self.declarator]

    @property
    def statement(self) -> VariableDeclaration:
        return self.snippet.tree[self.declaration]

    @property
    def name(self) -> str | None:
        """Identifier name, None for destructuring patterns."""
        return self.node.name

    @property
    def is_identifier(self) -> bool:
        return self.node.name is not None


class SourceSnippet:
    """A unit of source code and its parsed tree.

    Args:
        source: Source text; must be non-empty and parseable
        history: Previously merged generations of this snippet, oldest first
        parser: Parser to use (defaults to the shared tsx parser)
        formatter: Formatter applied by render(); None renders raw printer output

    Raises:
        EmptySourceError: If source is empty or None
        SnippetParseError: If the parser rejects source
    """

    def __init__(
        self,
        source: str | None,
        history: Iterable[SourceSnippet] = (),
        parser: TypeScriptParser | None = None,
        formatter: Formatter | None = None,
    ):
        self.parser = parser or default_parser()
        self.formatter = formatter
        self.history: tuple[SourceSnippet, ...] = tuple(history)
        self.imports: list[NodeId] = []
        self.definitions: list[NodeId] = []
        self.bindings: list[Binding] = []
        self.source = source

    @classmethod
    def from_config(cls, source: str | None, config: MergeConfig, history: Iterable[SourceSnippet] = ()) -> SourceSnippet:
        """Build a snippet with the parser dialect and formatter a config asks for."""
        from .formatters import create_formatter

        return cls(
            source,
            history=history,
            parser=default_parser(config.dialect),
            formatter=create_formatter(config.formatter),
        )

    @property
    def source(self) -> str:
        """Printed code of the current tree."""
        return print_program(self.tree)

    @source.setter
    def source(self, source: str | None) -> None:
        if not source:
            raise EmptySourceError()
        self.tree: SyntaxTree = self.parser.parse(source)
        self.refresh()

    @property
    def default_export(self) -> NodeId | None:
        """Id of the first `export default` statement, the insertion anchor."""
        for node_id, node in self.tree.statements(OpaqueStatement):
            if node.default_export:
                return node_id
        return None

    def find_imports(self) -> list[NodeId]:
        return [node_id for node_id, _ in self.tree.statements(ImportDeclaration)]

    def find_definitions(self) -> list[NodeId]:
        return [node_id for node_id, _ in self.tree.statements(VariableDeclaration)]

    def find_bindings(self) -> list[Binding]:
        return [Binding(self, declaration_id, declarator_id) for declaration_id in self.find_definitions() for declarator_id in self.tree[declaration_id].declarators]

    def find_all_imports(self) -> list[NodeId]:
        self.imports = self.find_imports()
        return self.imports

    def find_all_definitions(self) -> list[NodeId]:
        self.definitions = self.find_definitions()
        self.bindings = self.find_bindings()
        return self.definitions

    def refresh(self) -> None:
        self.find_all_imports()
        self.find_all_definitions()

    def find_binding(self, name: str) -> Binding | None:
        """First cached binding declared with this identifier name."""
        for binding in self.bindings:
            if binding.is_identifier and binding.name == name:
                return binding
        return None

    def render(self, node: NodeId | Binding, comments: bool = True) -> str:
        """Render a statement or binding through the printer and formatter.

        A binding is rendered as a single-binding declaration of its
        enclosing statement's kind. Used for equality checks, not output.
        """
        if isinstance(node, Binding):
            code = print_binding(node.snippet.tree, node.declaration, node.declarator, comments)
        else:
            code = print_statement(self.tree, node, comments)
        return self.format_code(code)

    def format_code(self, code: str) -> str:
        if self.formatter is None:
            return code
        # Printer output for one statement has no final newline
        return self.formatter.format(code).rstrip("\n")

    def canonical(self, node: NodeId | Binding) -> str:
        """Comment-free rendering reduced to its layout-independent token form."""
        return self.parser.canonical(self.render(node, comments=False))

    def equal_bindings(self, a: Binding | None, b: Binding | None) -> bool:
        """Two bindings are equal iff their comment-free code has the same canonical form.

        Whitespace, quote style and trailing separators do not count, whether
        or not a formatter is configured.
        """
        if a is None or b is None:
            return False
        return self.canonical(a) == self.canonical(b)

    def merge_to(self, target: SourceSnippet, config: MergeConfig | None = None):
        """Merge this snippet into target in place; returns the MergeReport."""
        from .merger import SnippetMerger

        return SnippetMerger(config).merge(self, target)

    def __repr__(self) -> str:
        return f"SourceSnippet(imports={len(self.imports)}, definitions={len(self.definitions)}, history={len(self.history)})"
