"""
Tests for the syntax tree capability: parser, arena edits and printer.
"""

from __future__ import annotations

import pytest

from snippet_merge.errors import SnippetParseError
from snippet_merge.syntax import (
    Identifier,
    ImportDeclaration,
    Opaque,
    OpaqueStatement,
    SpecifierKind,
    SyntaxTree,
    TypeScriptParser,
    VariableDeclaration,
    VariableDeclarator,
    block_comment,
    print_program,
    print_statement,
)


@pytest.fixture(scope="module")
def parser():
    return TypeScriptParser()


def top_level(tree, node_type):
    return [node for _, node in tree.statements(node_type)]


class TestTypeScriptParser:
    """Tests for TypeScriptParser."""

    def test_unknown_dialect_raises(self):
        with pytest.raises(ValueError):
            TypeScriptParser("coffeescript")

    def test_parse_invalid_code_raises(self, parser):
        with pytest.raises(SnippetParseError) as exc_info:
            parser.parse("const = ;")

        assert exc_info.value.line == 1
        assert "Can't parse source snippet" in str(exc_info.value)
        assert exc_info.value.source == "const = ;"

    def test_parse_error_reports_line(self, parser):
        with pytest.raises(SnippetParseError) as exc_info:
            parser.parse("const a = 1;\nconst b = {;\n")

        assert exc_info.value.line == 2

    def test_import_specifier_kinds(self, parser):
        tree = parser.parse("import React, { useState as useS, useEffect } from 'react';\nimport * as path from \"path\";\n")
        react, path = top_level(tree, ImportDeclaration)

        assert react.source == "react"
        specifiers = [tree[s] for s in react.specifiers]
        assert [s.kind for s in specifiers] == [SpecifierKind.DEFAULT, SpecifierKind.NAMED, SpecifierKind.NAMED]
        assert specifiers[0].imported is None
        assert specifiers[0].local == "React"
        assert specifiers[1].key == ("useState", "useS")
        assert specifiers[2].key == ("useEffect", "useEffect")

        assert path.quote == '"'
        namespace = tree[path.specifiers[0]]
        assert namespace.kind is SpecifierKind.NAMESPACE
        assert namespace.local == "path"

    def test_side_effect_and_type_imports(self, parser):
        tree = parser.parse("import './styles.css';\nimport type { Props } from './types';\n")
        styles, types = top_level(tree, ImportDeclaration)

        assert styles.specifiers == []
        assert styles.source == "./styles.css"
        assert types.import_kind == "type"
        assert tree[types.specifiers[0]].local == "Props"

    def test_only_top_level_declarations_are_definitions(self, parser):
        code = """
const a = 1, b = 2;
let c;
export const d = 3;
function f() {
  const e = 4;
}
"""
        tree = parser.parse(code)
        declarations = top_level(tree, VariableDeclaration)

        assert [d.kind for d in declarations] == ["const", "let"]
        names = [tree[x].name for d in declarations for x in d.declarators]
        assert names == ["a", "b", "c"]

    def test_declarator_parts(self, parser):
        tree = parser.parse("const routes: Route[] = [{ path: '/' }];\nconst { x, y } = point;\n")
        typed, pattern = top_level(tree, VariableDeclaration)

        declarator = tree[typed.declarators[0]]
        assert declarator.id == Identifier("routes")
        assert declarator.type_annotation.text == ": Route[]"
        assert declarator.init.text == "[{ path: '/' }]"

        destructured = tree[pattern.declarators[0]]
        assert destructured.name is None
        assert isinstance(destructured.id, Opaque)

    def test_default_export_and_directive(self, parser):
        tree = parser.parse("'use client';\nexport const a = 1;\nexport default function App() {\n  return <div>{a}</div>;\n}\n")
        directive, named_export, default_export = top_level(tree, OpaqueStatement)

        assert directive.directive
        assert not named_export.default_export
        assert default_export.default_export

    def test_decorated_default_export(self, parser):
        tree = parser.parse("@Component({ selector: 'app' })\nexport default class App {}\n")
        (statement,) = top_level(tree, OpaqueStatement)

        assert statement.default_export

    def test_comments_become_trivia(self, parser):
        tree = parser.parse("// header\nconst a = 1; // trailing\n\n/* block */\nconst b = 2;\n// end\n")
        a, b = top_level(tree, VariableDeclaration)

        assert a.leading_comments == ["// header"]
        assert a.trailing_comments == ["// trailing"]
        assert b.leading_comments == ["/* block */"]
        assert b.blank_line_before
        assert tree.program.trailing_comments == ["// end"]

    def test_comments_inside_code_are_excised_from_bare_text(self, parser):
        tree = parser.parse("const cfg = {\n  a: 1, // tuned\n  /* note */ b: 2,\n};\n")
        (declaration,) = top_level(tree, VariableDeclaration)
        init = tree[declaration.declarators[0]].init

        assert "// tuned" in init.text
        assert "tuned" not in init.bare
        assert "note" not in init.bare
        assert init.bare == "{\n  a: 1,\n b: 2,\n}"


class TestCanonical:
    """Tests for the layout-independent token form used by equality checks."""

    def test_tokens_are_joined_by_single_spaces(self, parser):
        assert parser.canonical("const cfg = {a:1};") == "const cfg = { a : 1 }"
        assert parser.canonical("const cfg   =   { a: 1 }") == "const cfg = { a : 1 }"

    def test_trailing_separators_are_dropped(self, parser):
        assert parser.canonical("const cfg = {\n  a: 1,\n  b: [1, 2,],\n};\n") == parser.canonical("const cfg = {a:1, b:[1,2]};")

    def test_strings_are_requoted(self, parser):
        assert parser.canonical('const s = "x";') == "const s = 'x'"
        assert parser.canonical('const s = "it\'s";') == parser.canonical("const s = 'it\\'s';")
        assert parser.canonical("const s = 'say \"hi\"';") == parser.canonical('const s = "say \\"hi\\"";')

    def test_comments_are_ignored(self, parser):
        assert parser.canonical("const a = /* n */ 1; // x") == "const a = 1"

    def test_string_contents_and_values_still_count(self, parser):
        assert parser.canonical("const s = 'a b';") != parser.canonical("const s = 'a  b';")
        assert parser.canonical("const cfg = {a:1};") != parser.canonical("const cfg = {a:2};")

    def test_invalid_code_raises(self, parser):
        with pytest.raises(SnippetParseError):
            parser.canonical("const = ;")


class TestPrinter:
    """Tests for the printer."""

    def test_untouched_source_round_trips(self, parser):
        code = "import a from 'a';\n\n// note\nconst x = 1; // trailing\n\nexport default x;\n"
        assert print_program(parser.parse(code)) == code

    def test_print_without_comments(self, parser):
        tree = parser.parse("// note\nconst x = {a: 1 /* inline */};\n")
        assert print_program(tree, comments=False) == "const x = {a: 1};\n"

    def test_edited_import_is_regenerated(self, parser):
        tree = parser.parse("import   Def ,{a}   from \"m\"\n")
        (import_id, _) = next(tree.statements(ImportDeclaration))
        other = parser.parse("import { b as c } from 'x';")
        (other_id, other_import) = next(other.statements(ImportDeclaration))

        tree.push_child(import_id, tree.adopt(other, other_import.specifiers[0]))

        assert print_statement(tree, import_id) == 'import Def, { a, b as c } from "m";'

    def test_synthesised_declaration(self):
        tree = SyntaxTree()
        declarator = tree.add(VariableDeclarator(id=Identifier("n"), type_annotation=Opaque(": number"), init=Opaque("42")))
        statement = tree.add(VariableDeclaration(kind="const", declarators=[declarator], leading_comments=["// answer"]))
        tree.append(statement)

        assert print_program(tree) == "// answer\nconst n: number = 42;\n"
        assert print_program(tree, comments=False) == "const n: number = 42;\n"

    def test_empty_program_prints_nothing(self):
        assert print_program(SyntaxTree()) == ""

    def test_block_comment_escapes_terminator(self):
        assert block_comment("const a = '*/';\n") == "/*\nconst a = '*\\/';\n*/"


class TestSyntaxTree:
    """Tests for arena edits."""

    def test_insert_replace_remove(self, parser):
        tree = parser.parse("const a = 1;\nconst b = 2;\n")
        a_id, b_id = tree.body
        other = parser.parse("const c = 3;\nconst d = 4;\n")
        c_id, d_id = (tree.adopt(other, node_id) for node_id in other.body)

        tree.insert_before(b_id, c_id)
        tree.insert_after(b_id, d_id)
        assert tree.body == [a_id, c_id, b_id, d_id]

        e_id = tree.adopt(other, other.body[0])
        tree.replace_with(a_id, e_id)
        assert tree.body == [e_id, c_id, b_id, d_id]
        assert a_id not in tree

        tree.remove(d_id)
        assert print_program(tree) == "const c = 3;\nconst c = 3;\nconst b = 2;\n"

    def test_adopt_copies_children(self, parser):
        source = parser.parse("const a = 1, b = 2;\n")
        target = SyntaxTree()
        adopted = target.adopt(source, source.body[0])

        declaration = target[adopted]
        assert [target[x].name for x in declaration.declarators] == ["a", "b"]

        target[declaration.declarators[0]].init = Opaque("10")
        assert source[source[source.body[0]].declarators[0]].init.text == "1"

    def test_remove_child_regenerates_statement(self, parser):
        tree = parser.parse("let a = 1,   b = 2;\n")
        (statement_id,) = tree.body
        tree.remove_child(statement_id, tree[statement_id].declarators[0])

        assert print_program(tree) == "let b = 2;\n"

    def test_index_of_unknown_statement(self, parser):
        tree = parser.parse("const a = 1;\n")
        with pytest.raises(KeyError):
            tree.index_of(999)
