"""
resxengine/resource_table_entry.py -- One key across all languages.

A table entry is a live projection: it holds no values itself and reads
through the entity's shared ``LanguageMap`` on every access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from resxengine.language_map import LanguageMap

if TYPE_CHECKING:
    from resxengine.resource_entity import ResourceEntity


class ResourceTableEntry:
    """A single resource key of an entity, spanning every language.

    Parameters
    ----------
    entity : ResourceEntity
        The entity this entry belongs to.
    key : str
        The resource key.  Immutable for the lifetime of the entry.
    languages : LanguageMap
        The entity's shared language handle.  Languages added to it after
        this entry was created are visible through the entry.
    """

    def __init__(self, entity: "ResourceEntity", key: str, languages: LanguageMap):
        if entity is None:
            raise ValueError("A table entry requires an owning entity")
        if not key:
            raise ValueError("Resource key must be a non-empty string")
        if languages is None:
            raise ValueError("A table entry requires a language map")

        self._entity = entity
        self._key = key
        self._languages = languages

    @property
    def entity(self) -> "ResourceEntity":
        return self._entity

    @property
    def key(self) -> str:
        return self._key

    @property
    def languages(self) -> LanguageMap:
        return self._languages

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_value(self, language_name: str) -> Optional[str]:
        """Return the value in *language_name*, or None if it has none."""
        language = self._languages.get(language_name)
        if language is None:
            return None
        return language.get_value(self._key)

    def set_value(self, language_name: str, value: Optional[str]) -> bool:
        """Write the value for *language_name*.

        Returns False when the language does not exist or the write was
        vetoed.
        """
        language = self._languages.get(language_name)
        if language is None:
            return False
        return language.set_value(self._key, value)

    @property
    def values(self) -> dict[str, Optional[str]]:
        """Language name -> value, over the languages present right now."""
        return {name: language.get_value(self._key) for name, language in self._languages.items()}

    @property
    def missing_languages(self) -> list[str]:
        """Names of the languages with no (or an empty) value for this key."""
        return [name for name, language in self._languages.items() if not language.get_value(self._key)]

    # ------------------------------------------------------------------
    # Comment (stored with the neutral language)
    # ------------------------------------------------------------------

    @property
    def comment(self) -> str:
        return self._languages.first().get_comment(self._key) or ""

    @comment.setter
    def comment(self, value: Optional[str]) -> None:
        self._languages.first().set_comment(self._key, value)

    def __repr__(self) -> str:
        return f"ResourceTableEntry({self._key!r})"
