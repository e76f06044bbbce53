"""
resxengine/resource_manager.py -- Discovery and ownership of resource entities.

The ResourceManager walks a source tree, finds every ResX/ResW file, works
out which project each file belongs to, and groups the files into
``ResourceEntity`` objects.  It owns those entities and relays their
change notifications, so a host only has to subscribe once.

Usage:
    from resxengine.resource_manager import ResourceManager

    rm = ResourceManager()
    rm.language_changing.subscribe(lambda event: ChangeDecision.PROCEED)
    rm.load("C:/src/MySolution")
    for entity in rm.resource_entities:
        print(entity.display_name, rm.cultures)
"""

import logging
import os
from pathlib import Path

from resxengine.events import ChangeDecision, Subscribers
from resxengine.models.project_file import ProjectFile
from resxengine.models.settings import EngineSettings
from resxengine.resource_entity import ResourceEntity
from resxengine.utils import fold_case, to_forward_slashes

logger = logging.getLogger(__name__)


class ResourceManager:
    """Owns every resource entity found under one root folder.

    Parameters
    ----------
    settings : EngineSettings, optional
        Discovery and naming settings.  Defaults are used when omitted.
    """

    def __init__(self, settings=None):
        self.settings = settings or EngineSettings()
        self.root = None
        self._entities: list[ResourceEntity] = []

        self.language_changing = Subscribers()
        self.language_changed = Subscribers()
        self.loaded = Subscribers()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def resource_entities(self) -> list[ResourceEntity]:
        return list(self._entities)

    @property
    def table_entries(self) -> list:
        """Every entry of every entity, entity by entity."""
        return [entry for entity in self._entities for entry in entity.entries]

    @property
    def cultures(self) -> list[str]:
        """Sorted union of the language names of all entities."""
        names = {}
        for entity in self._entities:
            for name in entity.languages:
                names.setdefault(fold_case(name), name)
        return sorted(names.values(), key=fold_case)

    def find_entity(self, project_name: str, base_name: str):
        """Return the entities with the given project and base name."""
        return [
            entity for entity in self._entities
            if fold_case(entity.project_name) == fold_case(project_name)
            and fold_case(entity.base_name) == fold_case(base_name)
        ]

    def can_edit(self, entity: ResourceEntity, culture) -> bool:
        if entity is None:
            raise ValueError("entity must not be None")
        return entity.can_edit(culture)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, root_folder) -> list[ResourceEntity]:
        """Discover all resource files under *root_folder* and build entities.

        Replaces any previously loaded entities.

        Raises
        ------
        FileNotFoundError
            If *root_folder* is not an existing directory.
        """
        root = Path(root_folder).resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Resource folder not found: {root_folder}")

        for entity in self._entities:
            self._detach(entity)
        self._entities = []
        self.root = root

        groups: dict[tuple[str, str, str], list[ProjectFile]] = {}
        for project_file in self._discover(root):
            group_key = (
                project_file.project_name,
                fold_case(project_file.directory),
                fold_case(project_file.base_name),
            )
            groups.setdefault(group_key, []).append(project_file)

        entities = []
        for files in groups.values():
            first = files[0]
            try:
                entity = ResourceEntity(
                    self,
                    first.project_name,
                    first.base_name,
                    first.directory,
                    files,
                    new_key_template=self.settings.new_key_template,
                )
            except ValueError:
                logger.exception(
                    "Failed to load resource entity '%s' in %s", first.base_name, first.directory,
                )
                continue
            self._attach(entity)
            entities.append(entity)

        self._entities = sorted(entities)
        logger.info(
            "Loaded %d resource entities (%d languages) from %s",
            len(self._entities), len(self.cultures), root,
        )
        self.loaded.notify(self)
        return self.resource_entities

    def _discover(self, root: Path):
        """Yield a ProjectFile for every resource file under *root*."""
        excluded = {fold_case(name) for name in self.settings.excluded_directories}
        resource_extensions = set(self.settings.resource_extensions)
        project_extensions = set(self.settings.project_extensions)

        # Directory -> (project name, unique project name) of the nearest project.
        projects: dict[str, tuple[str, str]] = {}

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if fold_case(d) not in excluded)

            project = projects.get(os.path.dirname(dirpath))
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1].lower() in project_extensions:
                    project_path = os.path.join(dirpath, filename)
                    project = (
                        os.path.splitext(filename)[0],
                        to_forward_slashes(os.path.relpath(project_path, root)),
                    )
                    break
            if project is None:
                project = (root.name, None)
            projects[dirpath] = project

            for filename in sorted(filenames):
                if os.path.splitext(filename)[1].lower() not in resource_extensions:
                    continue
                yield ProjectFile(
                    file_path=os.path.join(dirpath, filename),
                    project_name=project[0],
                    unique_project_name=project[1],
                )

    # ------------------------------------------------------------------
    # Event relay
    # ------------------------------------------------------------------

    def _attach(self, entity: ResourceEntity) -> None:
        entity.language_changing.subscribe(self._on_language_changing)
        entity.language_changed.subscribe(self._on_language_changed)

    def _detach(self, entity: ResourceEntity) -> None:
        entity.language_changing.unsubscribe(self._on_language_changing)
        entity.language_changed.unsubscribe(self._on_language_changed)

    def _on_language_changing(self, event) -> ChangeDecision:
        if not self.language_changing:
            return ChangeDecision.PROCEED
        return self.language_changing.decide(event)

    def _on_language_changed(self, event) -> None:
        self.language_changed.notify(event)

    def __repr__(self) -> str:
        return f"ResourceManager(root={str(self.root)!r}, entities={len(self._entities)})"
