"""
Source printer for SyntaxTree.

Statements that still hold their original text are reproduced from it;
edited or synthesised statements are regenerated from their parts.
Output is raw: canonical formatting is the formatter's job.
"""

from __future__ import annotations

from .nodes import (
    ImportDeclaration,
    ImportSpecifier,
    NodeId,
    OpaqueStatement,
    SpecifierKind,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)
from .tree import SyntaxTree


def print_program(tree: SyntaxTree, comments: bool = True) -> str:
    """Print the whole tree, one statement per line."""
    lines = []
    for index, statement_id in enumerate(tree.program.body):
        statement = tree[statement_id]
        if index and statement.blank_line_before:
            lines.append("")
        lines.append(print_statement(tree, statement_id, comments))

    if comments and tree.program.trailing_comments:
        lines.extend(tree.program.trailing_comments)

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def print_statement(tree: SyntaxTree, statement_id: NodeId, comments: bool = True) -> str:
    statement = tree[statement_id]

    if isinstance(statement, ImportDeclaration):
        code = _original(statement, comments) or print_import(tree, statement)
    elif isinstance(statement, VariableDeclaration):
        code = _original(statement, comments) or print_declaration(
            statement.kind, [tree[d] for d in statement.declarators], comments
        )
    elif isinstance(statement, OpaqueStatement):
        code = statement.code.render(comments)
    else:
        raise TypeError(f"Not a statement: {type(statement).__name__}")

    return _with_comments(statement, code) if comments else code


def print_binding(tree: SyntaxTree, declaration_id: NodeId, declarator_id: NodeId, comments: bool = True) -> str:
    """Print one binding as a single-binding declaration of its statement's kind."""
    declaration = tree[declaration_id]
    code = print_declaration(declaration.kind, [tree[declarator_id]], comments)
    return _with_comments(declaration, code) if comments else code


def print_import(tree: SyntaxTree, declaration: ImportDeclaration) -> str:
    specifiers = [tree[s] for s in declaration.specifiers]
    source = f"{declaration.quote}{declaration.source}{declaration.quote}"

    head = ["import"]
    if declaration.import_kind:
        head.append(declaration.import_kind)

    clause = []
    named = []
    for specifier in specifiers:
        if specifier.kind is SpecifierKind.DEFAULT:
            clause.append(specifier.local)
        elif specifier.kind is SpecifierKind.NAMESPACE:
            clause.append(f"* as {specifier.local}")
        else:
            named.append(_print_specifier(specifier))
    if named:
        clause.append("{ " + ", ".join(named) + " }")

    if clause:
        head.append(", ".join(clause))
        head.append("from")
    head.append(source)
    if declaration.attributes:
        head.append(declaration.attributes)

    return " ".join(head) + ";"


def print_declaration(kind: str, declarators: list[VariableDeclarator], comments: bool = True) -> str:
    return f"{kind} " + ", ".join(print_declarator(d, comments) for d in declarators) + ";"


def print_declarator(declarator: VariableDeclarator, comments: bool = True) -> str:
    if declarator.name is not None:
        code = declarator.name
    else:
        code = declarator.id.render(comments)
    if declarator.definite:
        code += "!"
    if declarator.type_annotation is not None:
        code += declarator.type_annotation.render(comments)
    if declarator.init is not None:
        code += " = " + declarator.init.render(comments)
    return code


def block_comment(text: str) -> str:
    """Wrap code in a block comment on its own lines."""
    body = text.rstrip("\n").replace("*/", "*\\/")
    return f"/*\n{body}\n*/"


def _print_specifier(specifier: ImportSpecifier) -> str:
    prefix = "type " if specifier.type_only else ""
    if specifier.imported is None or specifier.imported == specifier.local:
        return prefix + specifier.local
    return f"{prefix}{specifier.imported} as {specifier.local}"


def _original(statement: ImportDeclaration | VariableDeclaration, comments: bool) -> str | None:
    return statement.raw if comments else statement.bare


def _with_comments(statement: Statement, code: str) -> str:
    lines = list(statement.leading_comments)
    if statement.trailing_comments:
        code = code + " " + " ".join(statement.trailing_comments)
    lines.append(code)
    return "\n".join(lines)
