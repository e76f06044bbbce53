"""
Tests for resxengine/resource_manager.py -- discovery, grouping and event relay.
"""

from unittest.mock import MagicMock

import pytest

from resxengine.events import ChangeDecision, LanguageChangedEvent
from resxengine.models.settings import EngineSettings
from resxengine.resource_manager import ResourceManager


@pytest.fixture
def solution(tmp_path, write_resx):
    """A solution with two projects, a resw resource and an excluded folder.

    Layout::

        solution/
            Loose.resx
            App/App.csproj
            App/Strings.resx, Strings.de.resx
            App/sub/Errors.resx
            App/bin/Strings.resx          (excluded)
            Lib/Lib.vbproj
            Lib/Strings/en-US/Resources.resw
            Lib/Strings/de/Resources.resw
    """
    root = tmp_path / "solution"
    (root / "App").mkdir(parents=True)
    (root / "Lib").mkdir(parents=True)
    (root / "App" / "App.csproj").write_text("<Project />", encoding="utf-8")
    (root / "Lib" / "Lib.vbproj").write_text("<Project />", encoding="utf-8")

    write_resx(root / "Loose.resx", {"Key": "Value"})
    write_resx(root / "App" / "Strings.resx", {"Title": "Title", "Ok": "OK"})
    write_resx(root / "App" / "Strings.de.resx", {"Title": "Titel"})
    write_resx(root / "App" / "sub" / "Errors.resx", {"NotFound": "Not found"})
    write_resx(root / "App" / "bin" / "Strings.resx", {"Stale": "copy"})
    write_resx(root / "Lib" / "Strings" / "en-US" / "Resources.resw", {"Hello": "Hello"})
    write_resx(root / "Lib" / "Strings" / "de" / "Resources.resw", {"Hello": "Hallo"})
    return root


class TestLoad:
    def test_entities_are_grouped_and_sorted(self, solution):
        rm = ResourceManager()
        entities = rm.load(solution)
        assert [e.display_name for e in entities] == [
            "App - Strings",
            "App - sub/Errors",
            "Lib - Strings/Resources",
            "solution - Loose",
        ]
        assert entities == sorted(entities)

    def test_languages_per_entity(self, solution):
        rm = ResourceManager()
        rm.load(solution)
        (strings,) = rm.find_entity("App", "Strings")
        (resources,) = rm.find_entity("lib", "resources")
        assert strings.languages.names() == ["", "de"]
        assert resources.languages.names() == ["de", "en-US"]

    def test_owner_is_the_manager(self, solution):
        rm = ResourceManager()
        rm.load(solution)
        assert all(entity.owner is rm for entity in rm.resource_entities)

    def test_excluded_directories_are_skipped(self, solution):
        rm = ResourceManager()
        rm.load(solution)
        assert all("Stale" not in entity.languages.first().keys for entity in rm.resource_entities)

    def test_cultures_and_table_entries(self, solution):
        rm = ResourceManager()
        rm.load(solution)
        assert rm.cultures == ["", "de", "en-US"]
        assert sorted(entry.key for entry in rm.table_entries) == ["Hello", "Key", "NotFound", "Ok", "Title"]

    def test_settings_template_reaches_entities(self, solution):
        rm = ResourceManager(EngineSettings(new_key_template="Item"))
        rm.load(solution)
        (strings,) = rm.find_entity("App", "Strings")
        assert strings.add_new_key().key == "Item"

    def test_custom_extensions(self, solution):
        rm = ResourceManager(EngineSettings(resource_extensions=[".resw"]))
        rm.load(solution)
        assert [e.base_name for e in rm.resource_entities] == ["Resources"]

    def test_broken_file_skips_only_its_entity(self, solution):
        (solution / "App" / "Broken.resx").write_text("<root><data", encoding="utf-8")
        rm = ResourceManager()
        rm.load(solution)
        assert rm.find_entity("App", "Broken") == []
        assert len(rm.resource_entities) == 4

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ResourceManager().load(tmp_path / "nope")

    def test_reload_replaces_entities(self, solution):
        rm = ResourceManager()
        first = rm.load(solution)
        second = rm.load(solution)
        assert first == second
        assert all(a is not b for a, b in zip(first, second))

    def test_loaded_notification(self, solution):
        rm = ResourceManager()
        receiver = MagicMock()
        rm.loaded.subscribe(receiver)
        rm.load(solution)
        receiver.assert_called_once_with(rm)


class TestEventRelay:
    def test_changed_relayed(self, solution):
        rm = ResourceManager()
        receiver = MagicMock()
        rm.language_changed.subscribe(receiver)
        rm.load(solution)
        (strings,) = rm.find_entity("App", "Strings")

        strings.find_entry("Ok").set_value("de", "OK")
        receiver.assert_called_once_with(LanguageChangedEvent(strings, strings.languages["de"]))

    def test_veto_relayed(self, solution):
        rm = ResourceManager()
        rm.language_changing.subscribe(lambda event: ChangeDecision.VETO)
        rm.load(solution)
        (strings,) = rm.find_entity("App", "Strings")

        assert strings.find_entry("Title").set_value("de", "Neu") is False
        assert rm.can_edit(strings, "de") is False

    def test_without_host_subscribers_edits_proceed(self, solution):
        rm = ResourceManager()
        rm.load(solution)
        (strings,) = rm.find_entity("App", "Strings")

        assert rm.can_edit(strings, "de") is True
        assert strings.find_entry("Title").set_value("de", "Neu") is True

    def test_old_entities_detached_on_reload(self, solution):
        rm = ResourceManager()
        receiver = MagicMock()
        rm.language_changed.subscribe(receiver)
        (old, *_) = rm.load(solution)
        rm.load(solution)

        old.languages.first().set_value("Brand-new", "x")
        receiver.assert_not_called()

    def test_can_edit_requires_entity(self):
        with pytest.raises(ValueError):
            ResourceManager().can_edit(None, "de")
