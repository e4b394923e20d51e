"""
Node variants of the snippet syntax tree.

Only the shapes the merge consults are modelled: the program, import
declarations and their specifiers, variable declarations and their
declarators, identifiers. Everything else is kept as opaque source text.
Child nodes that the merge edits (specifiers, declarators, statements) are
referenced by NodeId inside the owning SyntaxTree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NodeId = int


class SpecifierKind(str, Enum):
    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


@dataclass
class Identifier:
    name: str


@dataclass
class Opaque:
    """Uninterpreted source text.

    Attributes:
        text: Original text, comments included
        bare: The same text with every comment removed
    """

    text: str
    bare: str | None = None

    def __post_init__(self):
        if self.bare is None:
            self.bare = self.text

    def render(self, comments: bool = True) -> str:
        return self.text if comments else self.bare


@dataclass(kw_only=True)
class Statement:
    """Base for top-level statements: comment and spacing trivia."""

    leading_comments: list[str] = field(default_factory=list)
    trailing_comments: list[str] = field(default_factory=list)
    blank_line_before: bool = False


@dataclass(kw_only=True)
class ImportSpecifier:
    kind: SpecifierKind
    local: str
    imported: str | None = None
    type_only: bool = False

    @property
    def key(self) -> tuple[str | None, str]:
        return (self.imported, self.local)


@dataclass(kw_only=True)
class ImportDeclaration(Statement):
    """An `import ... from '...'` statement.

    `raw` and `bare` hold the original text while the declaration is
    untouched; a structural edit clears them so the printer regenerates it.
    """

    source: str
    quote: str = "'"
    specifiers: list[NodeId] = field(default_factory=list)
    import_kind: str | None = None
    attributes: str | None = None
    raw: str | None = None
    bare: str | None = None


@dataclass(kw_only=True)
class VariableDeclarator:
    id: Identifier | Opaque
    init: Opaque | None = None
    type_annotation: Opaque | None = None
    definite: bool = False

    @property
    def name(self) -> str | None:
        if isinstance(self.id, Identifier):
            return self.id.name
        return None


@dataclass(kw_only=True)
class VariableDeclaration(Statement):
    kind: str = "const"
    declarators: list[NodeId] = field(default_factory=list)
    raw: str | None = None
    bare: str | None = None


@dataclass(kw_only=True)
class OpaqueStatement(Statement):
    """Any other top-level statement.

    Attributes:
        default_export: True for `export default ...`
        directive: True for a prologue string such as 'use client'
    """

    code: Opaque
    default_export: bool = False
    directive: bool = False


@dataclass(kw_only=True)
class Program:
    body: list[NodeId] = field(default_factory=list)
    trailing_comments: list[str] = field(default_factory=list)


Node = Program | ImportDeclaration | ImportSpecifier | VariableDeclaration | VariableDeclarator | OpaqueStatement
