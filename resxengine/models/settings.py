"""
resxengine/models/settings.py -- Engine configuration.

Settings live in a small JSON file.  A missing or corrupt file is not an
error: the engine falls back to defaults and logs a warning.

Usage::

    from resxengine.models.settings import load_settings

    settings = load_settings("/home/me/.config/ResXEngine/settings.json")
    settings.new_key_template   # "Resource"
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resxengine.utils import safe_read_json, safe_write_json

logger = logging.getLogger(__name__)

DEFAULT_NEW_KEY_TEMPLATE = "Resource"


class EngineSettings(BaseModel):
    """User-tunable engine settings."""

    model_config = ConfigDict(extra="ignore")

    new_key_template: str = Field(
        default=DEFAULT_NEW_KEY_TEMPLATE,
        min_length=1,
        description="Base name for keys created by 'add new key'.",
    )
    resource_extensions: list[str] = Field(
        default_factory=lambda: [".resx", ".resw"],
    )
    project_extensions: list[str] = Field(
        default_factory=lambda: [".csproj", ".vbproj", ".fsproj"],
    )
    excluded_directories: list[str] = Field(
        default_factory=lambda: ["bin", "obj", ".git", ".vs", "node_modules"],
    )

    @field_validator("resource_extensions", "project_extensions")
    @classmethod
    def normalise_extensions(cls, value: list[str]) -> list[str]:
        result = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            result.append(ext)
        return result


def load_settings(path) -> EngineSettings:
    """Load settings from *path*, falling back to defaults on any problem."""
    raw = safe_read_json(path)
    if raw is None:
        return EngineSettings()
    if not isinstance(raw, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return EngineSettings()
    try:
        return EngineSettings.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Ignoring invalid settings file %s: %s", path, exc)
        return EngineSettings()


def save_settings(settings: EngineSettings, path) -> None:
    """Write *settings* to *path* as JSON."""
    safe_write_json(path, settings.model_dump())
