"""
TypeScript/JSX parser built on tree-sitter.

Parses source text with tree-sitter-typescript and lowers the concrete
syntax tree into a SyntaxTree holding only the node variants the merge
needs. Comments attached to top-level statements become leading or
trailing trivia; comments inside code are kept in the opaque text and
excised from its comment-free rendition.
"""

from __future__ import annotations

import re
from typing import Any

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from ..errors import SnippetParseError
from .nodes import (
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    Opaque,
    OpaqueStatement,
    SpecifierKind,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)
from .tree import SyntaxTree

COMMENT_TYPES = {"comment", "html_comment"}

# Compared by their whole text, not by their children
ATOMIC_TYPES = {"string", "template_string", "regex", "jsx_text"}

CLOSING_TOKENS = {"}", "]", ")"}

_STRING_ESCAPE = re.compile(r"\\(.)|'", re.S)

_LANGUAGES = {
    "tsx": ts_typescript.language_tsx,
    "typescript": ts_typescript.language_typescript,
}


class TypeScriptParser:
    """Parser for module-syntax TypeScript, JSX and legacy decorators.

    The "tsx" dialect accepts JSX; the "typescript" dialect accepts
    angle-bracket type assertions instead.
    """

    def __init__(self, dialect: str = "tsx"):
        if dialect not in _LANGUAGES:
            raise ValueError(f"Unknown dialect {dialect!r}, expected one of {', '.join(_LANGUAGES)}")
        self.dialect = dialect
        self._parser = Parser(Language(_LANGUAGES[dialect]()))

    def parse(self, code: str) -> SyntaxTree:
        """Parse source code into a SyntaxTree.

        Args:
            code: TypeScript/JavaScript source code string

        Returns:
            SyntaxTree of the top-level statements

        Raises:
            SnippetParseError: If the code cannot be parsed
        """
        data, root = self._parse_checked(code)
        return _TreeBuilder(data).build(root)

    def canonical(self, code: str) -> str:
        """Layout-independent rendition of code, used to compare code for equality.

        Comments are dropped and the remaining tokens are joined by single
        spaces. String literals are requoted with single quotes, and commas
        or semicolons right before a closing bracket (or at the end) are
        dropped. Code that differs only in whitespace, quote style or
        trailing separators therefore has the same canonical form.

        Raises:
            SnippetParseError: If the code cannot be parsed
        """
        data, root = self._parse_checked(code)
        tokens = _tokens(data, root)
        kept = [
            token
            for index, token in enumerate(tokens)
            if not (token in (",", ";") and (index + 1 == len(tokens) or tokens[index + 1] in CLOSING_TOKENS))
        ]
        return " ".join(kept)

    def _parse_checked(self, code: str) -> tuple[bytes, Any]:
        data = code.encode("utf8")
        ts_tree = self._parser.parse(data)

        if ts_tree.root_node.has_error:
            errors = self._find_errors(ts_tree.root_node)
            if errors:
                first_error = errors[0]
                line = first_error.start_point[0] + 1
                column = first_error.start_point[1] + 1
                if first_error.is_missing:
                    detail = f"missing '{first_error.type}'"
                else:
                    detail = f"syntax error near '{first_error.text.decode('utf8')[:50]}'"
                raise SnippetParseError(
                    f"Can't parse source snippet: {detail} at line {line}, column {column}\n{code}",
                    source=code,
                    line=line,
                    column=column,
                )
            raise SnippetParseError(f"Can't parse source snippet\n{code}", source=code)

        return data, ts_tree.root_node

    def _find_errors(self, node: Any) -> list[Any]:
        """Find all ERROR and MISSING nodes in the tree."""
        errors = []
        for child in node.children:
            if child.type == "ERROR" or child.is_missing:
                errors.append(child)
            elif child.has_error:
                errors.extend(self._find_errors(child))
        return errors


def _blank_between(previous_end_row: int | None, row: int) -> bool:
    return previous_end_row is not None and row - previous_end_row > 1


class _TreeBuilder:
    """Lowers one tree-sitter tree into a SyntaxTree."""

    def __init__(self, data: bytes):
        self.data = data
        self.tree = SyntaxTree()

    def build(self, root: Any) -> SyntaxTree:
        pending: list[str] = []
        pending_blank = False
        last_id = None
        previous_end_row = None

        for child in root.children:
            row = child.start_point[0]

            if child.type in COMMENT_TYPES:
                text = self.text(child)
                if last_id is not None and not pending and row == previous_end_row:
                    # Same line as the previous statement
                    self.tree[last_id].trailing_comments.append(text)
                else:
                    if not pending:
                        pending_blank = _blank_between(previous_end_row, row)
                    pending.append(text)
                previous_end_row = child.end_point[0]
                continue

            statement = self.statement(child)
            statement.leading_comments = pending
            statement.blank_line_before = pending_blank if pending else _blank_between(previous_end_row, row)
            last_id = self.tree.add(statement)
            self.tree.append(last_id)

            pending = []
            previous_end_row = child.end_point[0]

        self.tree.program.trailing_comments = pending
        return self.tree

    def statement(self, node: Any) -> Statement:
        if node.type == "import_statement":
            declaration = self.import_declaration(node)
            if declaration is not None:
                return declaration
        elif node.type in ("lexical_declaration", "variable_declaration"):
            declaration = self.variable_declaration(node)
            if declaration is not None:
                return declaration
        return self.opaque_statement(node)

    def import_declaration(self, node: Any) -> ImportDeclaration | None:
        source = node.child_by_field_name("source")
        if source is None or source.type != "string":
            # import x = require('...') and friends
            return None

        source_text = self.text(source)
        quote = source_text[0] if source_text[:1] in ("'", '"') else "'"
        import_kind = next((c.type for c in node.children if c.type in ("type", "typeof")), None)
        attributes = next((self.text(c) for c in node.named_children if c.type == "import_attribute"), None)

        specifiers = []
        for clause in node.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    specifiers.append(ImportSpecifier(kind=SpecifierKind.DEFAULT, local=self.text(part)))
                elif part.type == "namespace_import":
                    local = next(c for c in part.named_children if c.type == "identifier")
                    specifiers.append(ImportSpecifier(kind=SpecifierKind.NAMESPACE, local=self.text(local)))
                elif part.type == "named_imports":
                    for specifier in part.named_children:
                        if specifier.type == "import_specifier":
                            specifiers.append(self.import_specifier(specifier))

        return ImportDeclaration(
            source=source_text[1:-1],
            quote=quote,
            specifiers=[self.tree.add(s) for s in specifiers],
            import_kind=import_kind,
            attributes=attributes,
            raw=self.text(node),
            bare=self.bare(node),
        )

    def import_specifier(self, node: Any) -> ImportSpecifier:
        imported = self.text(node.child_by_field_name("name"))
        alias = node.child_by_field_name("alias")
        return ImportSpecifier(
            kind=SpecifierKind.NAMED,
            imported=imported,
            local=self.text(alias) if alias is not None else imported,
            type_only=any(c.type in ("type", "typeof") for c in node.children),
        )

    def variable_declaration(self, node: Any) -> VariableDeclaration | None:
        if node.type == "lexical_declaration":
            kind_node = node.child_by_field_name("kind")
            kind = self.text(kind_node if kind_node is not None else node.children[0])
        else:
            kind = "var"

        declarators = [self.tree.add(self.variable_declarator(c)) for c in node.named_children if c.type == "variable_declarator"]
        if not declarators:
            return None

        return VariableDeclaration(
            kind=kind,
            declarators=declarators,
            raw=self.text(node),
            bare=self.bare(node),
        )

    def variable_declarator(self, node: Any) -> VariableDeclarator:
        name = node.child_by_field_name("name")
        type_node = node.child_by_field_name("type")
        value = node.child_by_field_name("value")

        if name.type == "identifier":
            binding_id = Identifier(self.text(name))
        else:
            # Destructuring pattern, never matched by name
            binding_id = self.opaque(name)

        return VariableDeclarator(
            id=binding_id,
            type_annotation=self.opaque(type_node) if type_node is not None else None,
            init=self.opaque(value) if value is not None else None,
            definite=any(c.type == "!" for c in node.children),
        )

    def opaque_statement(self, node: Any) -> OpaqueStatement:
        default_export = node.type == "export_statement" and any(c.type == "default" for c in node.children)
        directive = node.type == "expression_statement" and node.named_child_count > 0 and node.named_children[0].type == "string"
        return OpaqueStatement(code=self.opaque(node), default_export=default_export, directive=directive)

    def opaque(self, node: Any) -> Opaque:
        return Opaque(self.text(node), self.bare(node))

    def text(self, node: Any) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf8")

    def bare(self, node: Any) -> str:
        """Node text with every nested comment cut out."""
        comments = _comments_within(node)
        if not comments:
            return self.text(node)

        parts = []
        position = node.start_byte
        for comment in comments:
            chunk = self.data[position : comment.start_byte].rstrip(b" \t")
            end = comment.end_byte
            if (not chunk or chunk.endswith(b"\n")) and self.data[end : end + 1] == b"\n":
                # Comment filled its own line
                end += 1
            parts.append(chunk)
            position = end
        parts.append(self.data[position : node.end_byte])
        return b"".join(parts).decode("utf8")


def _comments_within(node: Any) -> list[Any]:
    found = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in COMMENT_TYPES:
            found.append(current)
            continue
        stack.extend(reversed(current.children))
    return found


def _tokens(data: bytes, node: Any) -> list[str]:
    """Leaf token texts of a tree in source order, comments excluded."""
    tokens = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in COMMENT_TYPES:
            continue
        if current.type in ATOMIC_TYPES or current.child_count == 0:
            text = data[current.start_byte : current.end_byte].decode("utf8")
            if current.type == "string":
                text = _single_quoted(text)
            elif current.type == "jsx_text":
                text = " ".join(text.split())
            if text:
                tokens.append(text)
            continue
        stack.extend(reversed(current.children))
    return tokens


def _single_quoted(literal: str) -> str:
    """Requote a string literal with single quotes."""

    def replace(match: re.Match) -> str:
        escaped = match.group(1)
        if escaped is None or escaped == "'":
            return "\\'"
        if escaped == '"':
            return '"'
        return match.group(0)

    return "'" + _STRING_ESCAPE.sub(replace, literal[1:-1]) + "'"
