"""
Rendering of generator templates into snippets.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import jinja2

from .config import MergeConfig
from .snippet import SourceSnippet


class SnippetTemplates:
    """Jinja2 templates that produce generated source snippets.

    Undefined template variables are an error, so a missing context key
    never silently generates broken code.
    """

    def __init__(self, template_dir: str | Path):
        self.template_dir = Path(template_dir)
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

    def render(self, name: str, context: dict | None = None) -> str:
        """Render a template to source text."""
        return self.jinja_env.get_template(name).render(**(context or {}))

    def render_snippet(
        self,
        name: str,
        context: dict | None = None,
        history: Iterable[SourceSnippet] = (),
        config: MergeConfig | None = None,
    ) -> SourceSnippet:
        """Render a template and parse the result as a snippet."""
        return SourceSnippet.from_config(self.render(name, context), config or MergeConfig(), history)
