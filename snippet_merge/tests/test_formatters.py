"""
Tests for the prettier formatter fallback behaviour.

prettier itself is not required: these tests only exercise the paths
where it is missing or fails.
"""

from __future__ import annotations

from snippet_merge import FormatterConfig, MergeConfig, SourceSnippet
from snippet_merge.formatters import PrettierFormatter, create_formatter


class TestPrettierFormatter:
    """Tests for PrettierFormatter."""

    def test_missing_executable_returns_code(self):
        formatter = PrettierFormatter(FormatterConfig(enabled=True, command=["snippet-merge-no-such-prettier"]))

        assert not formatter.is_available()
        assert formatter.format("const a   =  1") == "const a   =  1"

    def test_failing_command_returns_code(self):
        formatter = PrettierFormatter(FormatterConfig(enabled=True, command=["false"]))
        assert formatter.format("const a   =  1") == "const a   =  1"

    def test_create_formatter(self):
        assert create_formatter(FormatterConfig(enabled=False)) is None
        assert isinstance(create_formatter(FormatterConfig(enabled=True)), PrettierFormatter)

    def test_render_falls_back_to_printer_output(self):
        config = MergeConfig.from_dict({"formatter": {"enabled": True, "command": ["snippet-merge-no-such-prettier"]}})
        snippet = SourceSnippet.from_config("const a   =  {x:1};", config)

        assert snippet.render(snippet.find_binding("a")) == "const a = {x:1};"
