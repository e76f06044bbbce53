"""
Tests for resxengine/models/project_file.py -- file naming and language detection.
"""

import pytest
from pydantic import ValidationError

from resxengine.models.project_file import ProjectFile, is_culture_name


class TestLanguageName:
    """Tests for ProjectFile.get_language_name."""

    @pytest.mark.parametrize(
        "file_name, expected",
        [
            ("Strings.resx", ""),
            ("Strings.de.resx", "de"),
            ("Strings.en-US.resx", "en-US"),
            ("Strings.zh-Hans.resx", "zh-Hans"),
            ("Strings.Designer.resx", ""),
            ("My.Strings.resx", ""),
        ],
    )
    def test_resx(self, file_name, expected):
        pf = ProjectFile(file_path=f"/src/App/{file_name}")
        assert pf.get_language_name() == expected

    def test_resw_uses_folder(self):
        pf = ProjectFile(file_path="/src/App/Strings/de-DE/Resources.resw")
        assert pf.get_language_name() == "de-DE"

    def test_resw_outside_culture_folder_is_neutral(self):
        pf = ProjectFile(file_path="/src/App/Strings/Resources.resw")
        assert pf.get_language_name() == ""


class TestDerivedNames:
    """Tests for base_name, directory and extension."""

    def test_base_name_strips_culture(self):
        assert ProjectFile(file_path="/src/App/Strings.de.resx").base_name == "Strings"
        assert ProjectFile(file_path="/src/App/Strings.resx").base_name == "Strings"
        assert ProjectFile(file_path="/src/App/Strings.Designer.resx").base_name == "Strings.Designer"

    def test_resx_directory(self):
        assert ProjectFile(file_path="/src/App/Strings.de.resx").directory == "/src/App"

    def test_resw_directory_skips_culture_folder(self):
        de = ProjectFile(file_path="/src/App/Strings/de/Resources.resw")
        en = ProjectFile(file_path="/src/App/Strings/en-US/Resources.resw")
        assert de.directory == en.directory == "/src/App/Strings"
        assert de.base_name == en.base_name == "Resources"

    def test_extension_is_lowercase(self):
        assert ProjectFile(file_path="/src/App/Strings.RESX").extension == ".resx"

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            ProjectFile(file_path="")

    def test_is_frozen(self):
        pf = ProjectFile(file_path="/src/App/Strings.resx")
        with pytest.raises(ValidationError):
            pf.project_name = "Other"


class TestCultureName:
    @pytest.mark.parametrize("name", ["de", "en-US", "sr-Latn-RS", "haw"])
    def test_valid(self, name):
        assert is_culture_name(name)

    @pytest.mark.parametrize("name", ["", "Designer", "d", "en_US", "-de"])
    def test_invalid(self, name):
        assert not is_culture_name(name)
