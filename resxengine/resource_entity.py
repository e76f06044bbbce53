"""
resxengine/resource_entity.py -- The logical resource entity.

A logical resource entity is one named group of localizable strings, e.g.
"Resources", physically backed by one file per language:

    Resources.resx  Resources.de.resx  Resources.fr.resx
    de/Resources.resw  en-us/Resources.resw      (Windows Store layout)

The entity aggregates those per-language stores into one coherent view:

    - ``languages``  the shared, case-insensitive language map, ordered by
      language name at construction, so the neutral language comes first.
    - ``entries``    one ``ResourceTableEntry`` per distinct key found in
      any language, sorted by the case-folded key at construction.

Changes made to any language are forwarded as entity-level notifications:

    language_changing   ``callback(LanguageChangingEvent) -> ChangeDecision``
                        A VETO from any subscriber aborts the write in the
                        originating language.
    language_changed    ``callback(LanguageChangedEvent)``

Usage::

    from resxengine.resource_entity import ResourceEntity

    entity = ResourceEntity(manager, "MyProj", "Strings", "/src/MyProj", files)
    entity.language_changing.subscribe(lambda event: ChangeDecision.PROCEED)
    entry = entity.add_new_key()
    entry.set_value("de", "Hallo")
"""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Iterable, Optional

from resxengine.events import (
    ChangeDecision,
    LanguageChangedEvent,
    LanguageChangingEvent,
    Subscribers,
)
from resxengine.language_map import LanguageMap
from resxengine.models.project_file import ProjectFile
from resxengine.models.settings import DEFAULT_NEW_KEY_TEMPLATE
from resxengine.resource_language import ResourceLanguage
from resxengine.resource_table_entry import ResourceTableEntry
from resxengine.utils import fold_case, to_forward_slashes

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fold(text: str) -> str:
    """Case-insensitive comparison form of *text*."""
    return fold_case(text)


def get_relative_path(directory: str, files: Iterable[ProjectFile]) -> str:
    """Return *directory* relative to the root of the owning project.

    The first file's ``unique_project_name`` (e.g. ``"MyProj/MyProj.csproj"``)
    names the project folder; the part of *directory* after the last
    occurrence of that folder is the relative path, ending in ``/``.
    Returns ``""`` if no project name is known or the folder is not found.

    Examples:
        ("/src/MyProj/sub", "MyProj/MyProj.csproj") -> "sub/"
        ("/src/MyProj",     "MyProj/MyProj.csproj") -> ""
        ("/elsewhere",      "MyProj/MyProj.csproj") -> ""
    """
    first = next(iter(files), None)
    unique_project_name = first.unique_project_name if first is not None else None
    if not unique_project_name:
        return ""

    directory = to_forward_slashes(directory).rstrip("/") + "/"
    sub_folder = "/" + posixpath.dirname(to_forward_slashes(unique_project_name)) + "/"

    pos = _fold(directory).rfind(_fold(sub_folder))
    if pos < 0:
        return ""
    return directory[pos + len(sub_folder):]


def compare_entities(left: Optional["ResourceEntity"], right: Optional["ResourceEntity"]) -> int:
    """Total order over resource entities.

    Entities are ordered by their sort key, compared ordinally ignoring
    case.  ``None`` sorts before any entity.  Equality, hashing and every
    rich comparison operator of ``ResourceEntity`` go through here.

    Returns a negative number, zero, or a positive number.
    """
    if left is right:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1

    a = _fold(left.sort_key)
    b = _fold(right.sort_key)
    return (a > b) - (a < b)


# ---------------------------------------------------------------------------
# ResourceEntity
# ---------------------------------------------------------------------------

class ResourceEntity:
    """A logical resource file spanning one physical file per language.

    Parameters
    ----------
    owner
        The owning manager.  Kept only as a back-reference.
    project_name : str
        Name of the containing project.
    base_name : str
        Language-independent name of the resource, e.g. ``"Resources"``.
    directory : str
        Absolute directory of the physical files.
    files : collection of ProjectFile
        One file per language.  Must not be empty.
    new_key_template : str, optional
        Base name used by :meth:`add_new_key`.

    Raises
    ------
    ValueError
        If any argument is missing or empty, or two files map to the same
        language.
    """

    def __init__(
        self,
        owner: Any,
        project_name: str,
        base_name: str,
        directory: str,
        files: Iterable[ProjectFile],
        new_key_template: str = DEFAULT_NEW_KEY_TEMPLATE,
    ):
        if owner is None:
            raise ValueError("A resource entity requires an owner")
        if not project_name:
            raise ValueError("project_name must not be empty")
        if not base_name:
            raise ValueError("base_name must not be empty")
        if not directory:
            raise ValueError("directory must not be empty")
        if files is None:
            raise ValueError("files must not be None")
        files = list(files)
        if not files:
            raise ValueError(
                f"Resource entity '{project_name} - {base_name}' needs at least one language file"
            )
        if not new_key_template:
            raise ValueError("new_key_template must not be empty")

        self._owner = owner
        self._project_name = project_name
        self._base_name = base_name
        self._directory = directory
        self._new_key_template = new_key_template
        self._relative_path = get_relative_path(directory, files)
        self._display_name = f"{project_name} - {self._relative_path}{base_name}"
        self._sort_key = f" - {self._display_name}{directory}"

        self.language_changing = Subscribers()
        self.language_changed = Subscribers()

        ordered = sorted(
            (ResourceLanguage(file.get_language_name(), file) for file in files),
            key=lambda language: (_fold(language.name), language.name),
        )
        self._languages = LanguageMap(ordered)
        for language in self._languages.values():
            self._attach(language)

        self._entries: list[ResourceTableEntry] = [
            ResourceTableEntry(self, key, self._languages)
            for key in sorted(self._distinct_keys(), key=_fold)
        ]

        logger.debug(
            "Created entity '%s' with %d language(s) and %d key(s)",
            self._display_name, len(self._languages), len(self._entries),
        )

    def _distinct_keys(self) -> list[str]:
        seen: dict[str, None] = {}
        for language in self._languages.values():
            for key in language.keys:
                seen.setdefault(key, None)
        return list(seen)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def owner(self) -> Any:
        return self._owner

    @property
    def project_name(self) -> str:
        """The containing project name of the resource entity."""
        return self._project_name

    @property
    def base_name(self) -> str:
        """The base name of the resource entity."""
        return self._base_name

    @property
    def directory(self) -> str:
        """The directory where the physical files are located."""
        return self._directory

    @property
    def relative_path(self) -> str:
        return self._relative_path

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def sort_key(self) -> str:
        return self._sort_key

    @property
    def new_key_template(self) -> str:
        return self._new_key_template

    @property
    def languages(self) -> LanguageMap:
        """The available languages.  Never empty."""
        return self._languages

    @property
    def neutral_language(self) -> ResourceLanguage:
        """The first language in iteration order."""
        return self._languages.first()

    @property
    def entries(self) -> list[ResourceTableEntry]:
        """All entries of this entity.

        Sorted by key right after construction.  Entries created later by
        :meth:`add` are appended at the end, not inserted in key order.
        Mutate through :meth:`add` and :meth:`remove`, not directly.
        """
        return self._entries

    def find_entry(self, key: str) -> Optional[ResourceTableEntry]:
        """Return the entry whose key equals *key* exactly, or None."""
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    # ------------------------------------------------------------------
    # Entry mutation
    # ------------------------------------------------------------------

    def remove(self, entry: ResourceTableEntry) -> None:
        """Remove *entry*'s key from every language, then drop the entry."""
        if entry is None:
            raise ValueError("entry must not be None")

        for language in self._languages.values():
            if not language.remove_key(entry.key):
                logger.warning(
                    "Key '%s' was kept in language '%s' of %s (change vetoed)",
                    entry.key, language.name, self._display_name,
                )

        if entry in self._entries:
            self._entries.remove(entry)

    def add(self, key: str) -> Optional[ResourceTableEntry]:
        """Create *key* and append a new entry for it.

        The key is written with an empty value to the neutral language so
        that it has at least one physical backing.  The new entry goes to
        the end of :attr:`entries`.

        Returns the new entry, or None if the write was vetoed.
        """
        if not key:
            raise ValueError("Resource key must be a non-empty string")
        if self.find_entry(key) is not None:
            raise ValueError(f"Key '{key}' already exists in {self._display_name}")

        if not self.neutral_language.force_value(key, ""):
            logger.info("Adding key '%s' to %s was vetoed", key, self._display_name)
            return None

        entry = ResourceTableEntry(self, key, self._languages)
        self._entries.append(entry)
        return entry

    def add_new_key(self) -> Optional[ResourceTableEntry]:
        """Add a key derived from the template that collides with no entry.

        Tries ``Template``, ``Template_1``, ``Template_2`` ... comparing
        case-insensitively.
        """
        template = self._new_key_template
        existing = {_fold(entry.key) for entry in self._entries}

        key = template
        index = 1
        while _fold(key) in existing:
            key = f"{template}_{index}"
            index += 1

        return self.add(key)

    def add_language(self, file: ProjectFile) -> ResourceLanguage:
        """Add the language represented by *file*.

        Existing entries see the new language at once, because they share
        the entity's language map.
        """
        if file is None:
            raise ValueError("file must not be None")

        language = ResourceLanguage(file.get_language_name(), file)
        self._languages.add(language)
        self._attach(language)

        logger.debug("Added language '%s' to %s", language.name, self._display_name)
        return language

    # ------------------------------------------------------------------
    # Change / veto protocol
    # ------------------------------------------------------------------

    def can_edit(self, culture: Optional[str]) -> bool:
        """Ask the Changing subscribers whether *culture* may be edited.

        Without any subscriber nobody ever granted permission, so the
        answer is False.
        """
        if not self.language_changing:
            return False
        event = LanguageChangingEvent(self, culture)
        return self.language_changing.decide(event) is ChangeDecision.PROCEED

    def _attach(self, language: ResourceLanguage) -> None:
        language.before_change.subscribe(self._on_language_changing)
        language.changed.subscribe(self._on_language_changed)

    def _on_language_changing(self, language: ResourceLanguage) -> ChangeDecision:
        if not self.language_changing:
            return ChangeDecision.PROCEED
        return self.language_changing.decide(LanguageChangingEvent(self, language.culture))

    def _on_language_changed(self, language: ResourceLanguage) -> None:
        if self.language_changed:
            self.language_changed.notify(LanguageChangedEvent(self, language))

    # ------------------------------------------------------------------
    # Identity and ordering
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self._display_name

    def __repr__(self) -> str:
        return f"ResourceEntity({self._display_name!r}, languages={self._languages.names()!r})"

    def __hash__(self) -> int:
        return hash(_fold(self._sort_key))

    def __eq__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) == 0

    def __ne__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) != 0

    def __lt__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) < 0

    def __le__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) <= 0

    def __gt__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) > 0

    def __ge__(self, other) -> bool:
        if other is not None and not isinstance(other, ResourceEntity):
            return NotImplemented
        return compare_entities(self, other) >= 0
