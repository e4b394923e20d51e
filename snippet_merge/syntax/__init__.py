"""
Syntax tree capability: parse TypeScript/JSX into a SyntaxTree and print it back.
"""

from __future__ import annotations

from .nodes import (
    Identifier,
    ImportDeclaration,
    ImportSpecifier,
    NodeId,
    Opaque,
    OpaqueStatement,
    Program,
    SpecifierKind,
    VariableDeclaration,
    VariableDeclarator,
)
from .parser import TypeScriptParser
from .printer import block_comment, print_binding, print_program, print_statement
from .tree import SyntaxTree

__all__ = [
    "Identifier",
    "ImportDeclaration",
    "ImportSpecifier",
    "NodeId",
    "Opaque",
    "OpaqueStatement",
    "Program",
    "SpecifierKind",
    "SyntaxTree",
    "TypeScriptParser",
    "VariableDeclaration",
    "VariableDeclarator",
    "block_comment",
    "print_binding",
    "print_program",
    "print_statement",
]
