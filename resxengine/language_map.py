"""
resxengine/language_map.py -- Shared culture -> language handle.

A ``LanguageMap`` is created once per resource entity and handed, by
reference, to every table entry of that entity.  Languages added later
through the entity are therefore visible to entries that were created
before the language existed.  Keys are compared case-insensitively and
iteration follows insertion order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from resxengine.utils import fold_case

if TYPE_CHECKING:
    from resxengine.resource_language import ResourceLanguage


def _fold(name: str) -> str:
    return fold_case(name)


class LanguageMap:
    """Insertion-ordered, case-insensitive mapping of language name to store."""

    def __init__(self, languages=()):
        self._items: dict[str, "ResourceLanguage"] = {}
        for language in languages:
            self.add(language)

    def add(self, language: "ResourceLanguage") -> None:
        """Insert *language* under its name.

        Raises
        ------
        ValueError
            If a language with the same name (ignoring case) is present.
        """
        key = _fold(language.name)
        if key in self._items:
            raise ValueError(f"Language '{language.name}' is already present")
        self._items[key] = language

    def get(self, name: str, default=None) -> Optional["ResourceLanguage"]:
        if name is None:
            return default
        return self._items.get(_fold(name), default)

    def first(self) -> "ResourceLanguage":
        """Return the first language in iteration order (the neutral one)."""
        return next(iter(self._items.values()))

    def __getitem__(self, name: str) -> "ResourceLanguage":
        language = self.get(name)
        if language is None:
            raise KeyError(name)
        return language

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and _fold(name) in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return (language.name for language in list(self._items.values()))

    def names(self) -> list[str]:
        return list(self)

    def values(self) -> list["ResourceLanguage"]:
        return list(self._items.values())

    def items(self) -> list[tuple[str, "ResourceLanguage"]]:
        return [(language.name, language) for language in self._items.values()]

    def __repr__(self) -> str:
        return f"LanguageMap({self.names()!r})"
