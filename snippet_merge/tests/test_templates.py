from __future__ import annotations

from pathlib import Path

import jinja2
import pytest

from snippet_merge import SnippetTemplates, SourceSnippet

TEMPLATE_DIR = Path(__file__).parent / "test_data" / "templates"

CONTEXT = {
    "client_module": "./client",
    "api_url": "https://api.example.com",
    "flags": {"debug": "true", "retries": "3"},
}


class TestSnippetTemplates:
    """Tests for rendering generator templates."""

    def test_render(self):
        code = SnippetTemplates(TEMPLATE_DIR).render("constants.ts.jinja2", CONTEXT)

        assert code == (
            "import { createClient } from './client';\n"
            "\n"
            "const apiUrl = 'https://api.example.com';\n"
            "const debug = true;\n"
            "const retries = 3;\n"
            "\n"
            "export default createClient(apiUrl);\n"
        )

    def test_missing_variable_raises(self):
        with pytest.raises(jinja2.UndefinedError):
            SnippetTemplates(TEMPLATE_DIR).render("constants.ts.jinja2", {"flags": {}})

    def test_render_snippet_with_history(self):
        templates = SnippetTemplates(TEMPLATE_DIR)
        previous = templates.render_snippet("constants.ts.jinja2", {**CONTEXT, "flags": {}})
        snippet = templates.render_snippet("constants.ts.jinja2", CONTEXT, history=[previous])

        assert [b.name for b in snippet.bindings] == ["apiUrl", "debug", "retries"]
        assert snippet.history == (previous,)

    def test_rendered_snippet_merges_into_hand_edited_file(self):
        templates = SnippetTemplates(TEMPLATE_DIR)
        previous = templates.render_snippet("constants.ts.jinja2", {**CONTEXT, "flags": {"debug": "false"}})
        incoming = templates.render_snippet("constants.ts.jinja2", CONTEXT, history=[previous])
        target = SourceSnippet(
            "import { createClient } from './client';\n"
            "\n"
            "const apiUrl = 'http://localhost:8080';\n"
            "const debug = false;\n"
            "\n"
            "export default createClient(apiUrl);\n"
        )

        report = incoming.merge_to(target)

        assert target.source == (
            "import { createClient } from './client';\n"
            "\n"
            "/*\nconst apiUrl = 'http://localhost:8080';\n*/\n"
            "const apiUrl = 'https://api.example.com';\n"
            "const debug = true;\n"
            "\n"
            "const retries = 3;\n"
            "\n"
            "export default createClient(apiUrl);\n"
        )
        assert [c.name for c in report.conflicts] == ["apiUrl"]
