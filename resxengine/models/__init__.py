"""
resxengine/models/ -- Pydantic v2 models for the ResX resource engine.

Submodules:
    project_file  The physical file abstraction (path, project, language).
    settings      Engine configuration and its JSON persistence.
"""

from resxengine.models.project_file import ProjectFile
from resxengine.models.settings import EngineSettings, load_settings, save_settings

__all__ = ["EngineSettings", "ProjectFile", "load_settings", "save_settings"]
