"""
resxengine/models/project_file.py -- The physical file behind one language.

A ``ProjectFile`` knows where a resource file lives, which project owns it,
and how to derive the language name from its location:

    Strings.resx          -> ""       (neutral)
    Strings.de.resx       -> "de"
    Strings.en-US.resx    -> "en-US"
    de/Strings.resw       -> "de"     (Windows Store layout)

Usage::

    from resxengine.models.project_file import ProjectFile

    pf = ProjectFile(file_path="/src/App/Strings.de.resx", project_name="App")
    pf.get_language_name()   # "de"
    pf.base_name             # "Strings"
"""

from __future__ import annotations

import os
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from resxengine.utils import to_forward_slashes

# Language tags like "de", "en-US", "zh-Hans", "sr-Latn-RS".
_CULTURE_NAME_RE = re.compile(r"^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$")

RESW_EXTENSION = ".resw"


def is_culture_name(name: str) -> bool:
    """Return True if *name* looks like a well-formed culture name."""
    return bool(name) and bool(_CULTURE_NAME_RE.match(name))


class ProjectFile(BaseModel):
    """One physical resource file, as discovered inside a project."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    project_name: str = ""
    unique_project_name: Optional[str] = None

    @field_validator("file_path")
    @classmethod
    def file_path_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("file_path must not be empty")
        return value

    # ------------------------------------------------------------------
    # Derived names
    # ------------------------------------------------------------------

    @property
    def file_name(self) -> str:
        return os.path.basename(self.file_path)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.file_path)[1].lower()

    @property
    def is_resw(self) -> bool:
        return self.extension == RESW_EXTENSION

    def get_language_name(self) -> str:
        """Return the language name encoded in the file location.

        An empty string denotes the neutral (default) language.
        """
        if self.is_resw:
            folder = os.path.basename(os.path.dirname(self.file_path))
            return folder if is_culture_name(folder) else ""

        stem = os.path.splitext(self.file_name)[0]
        candidate = os.path.splitext(stem)[1].lstrip(".")
        return candidate if is_culture_name(candidate) else ""

    @property
    def base_name(self) -> str:
        """File name without extension and without the culture part."""
        stem = os.path.splitext(self.file_name)[0]
        if self.is_resw:
            return stem
        language = self.get_language_name()
        if language:
            return stem[: -(len(language) + 1)]
        return stem

    @property
    def directory(self) -> str:
        """Logical directory of the resource entity this file belongs to.

        For ``.resw`` files in a culture folder this is the folder above
        the culture folder, so that all languages group together.
        """
        parent = os.path.dirname(self.file_path)
        if self.is_resw and self.get_language_name():
            parent = os.path.dirname(parent)
        return to_forward_slashes(parent)
