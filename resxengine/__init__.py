"""
resxengine -- Model of localizable ResX resources.

Modules:
    resource_manager     Discovers resource files and owns the entities.
    resource_entity      One logical resource spanning all its languages.
    resource_language    One language, backed by one ResX file.
    resource_table_entry One key, projected across all languages.
    language_map         The shared language handle used by entries.
    events               Subscriber lists and change/veto payloads.
    models/              Pydantic models (project files, settings).
"""

from resxengine.events import ChangeDecision, LanguageChangedEvent, LanguageChangingEvent, Subscribers
from resxengine.resource_entity import ResourceEntity, compare_entities
from resxengine.resource_language import ResourceLanguage
from resxengine.resource_manager import ResourceManager
from resxengine.resource_table_entry import ResourceTableEntry

__all__ = [
    "ChangeDecision",
    "LanguageChangedEvent",
    "LanguageChangingEvent",
    "ResourceEntity",
    "ResourceLanguage",
    "ResourceManager",
    "ResourceTableEntry",
    "Subscribers",
    "compare_entities",
]
