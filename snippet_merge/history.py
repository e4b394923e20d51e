"""
History chain of previously merged generations.
"""

from __future__ import annotations

from collections.abc import Iterable

from .snippet import Binding, SourceSnippet


class HistoryChain:
    """Prior snippets, oldest first, used only as the merge baseline.

    The chain never mutates its snippets.
    """

    def __init__(self, snippets: Iterable[SourceSnippet] = ()):
        self.snippets: tuple[SourceSnippet, ...] = tuple(snippets)

    def __len__(self) -> int:
        return len(self.snippets)

    def __iter__(self):
        return iter(self.snippets)

    def index_by_name(self) -> dict[str, Binding]:
        """Map each binding name to its binding in the newest snippet declaring it."""
        index: dict[str, Binding] = {}
        for snippet in self.snippets:
            seen: set[str] = set()
            for binding in snippet.find_bindings():
                if not binding.is_identifier or binding.name in seen:
                    continue
                seen.add(binding.name)
                index[binding.name] = binding
        return index

    def baseline(self, name: str) -> Binding | None:
        """Last known generated binding for a name."""
        for snippet in reversed(self.snippets):
            for binding in snippet.find_bindings():
                if binding.is_identifier and binding.name == name:
                    return binding
        return None
