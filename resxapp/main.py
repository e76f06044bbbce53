"""
resxapp/main.py -- Console entry point.

Loads every resource entity under a folder and prints a summary of the
entities, their languages and key counts.

Usage::

    python -m resxapp.main C:/src/MySolution
    python -m resxapp.main ./src --missing -v
    python -m resxapp.main ./src --template Text --save-settings

When a Qt application is already running (the entry point is embedded in
a GUI host), the manager is attached to the ResourceEventBus so that
panels receive its notifications as Qt signals.
"""

from __future__ import annotations

import argparse
import logging
import sys

from PySide6.QtCore import QCoreApplication

from resxapp.paths import get_settings_path
from resxapp.services.event_bus import ResourceEventBus
from resxengine.models.settings import load_settings, save_settings
from resxengine.resource_manager import ResourceManager


def _setup_logging(verbose: bool) -> None:
    """Configure logging for the console application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resxengine",
        description="Summarise the ResX resources found under a folder.",
    )
    parser.add_argument("folder", help="Root folder to scan for .resx/.resw files")
    parser.add_argument(
        "--settings",
        default=None,
        help="Settings JSON file (default: the per-user settings file)",
    )
    parser.add_argument(
        "--missing",
        action="store_true",
        help="List keys that have no value in some language",
    )
    parser.add_argument(
        "--template",
        default=None,
        help="Override the name template used for new keys",
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Write the effective settings back to the settings file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def format_summary(manager: ResourceManager, show_missing: bool = False) -> str:
    """Return a human-readable summary of *manager*'s entities."""
    lines = []
    for entity in manager.resource_entities:
        languages = ", ".join(name or "(neutral)" for name in entity.languages)
        lines.append(f"{entity.display_name}  [{languages}]  {len(entity.entries)} keys")
        if show_missing:
            for entry in entity.entries:
                missing = entry.missing_languages
                if missing:
                    names = ", ".join(name or "(neutral)" for name in missing)
                    lines.append(f"    {entry.key}: missing {names}")
    lines.append(
        f"{len(manager.resource_entities)} entities, "
        f"{len(manager.table_entries)} keys, "
        f"{len(manager.cultures)} languages"
    )
    return "\n".join(lines)


def main(argv=None) -> int:
    """Scan a folder and print its resource summary."""
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    logger = logging.getLogger("resxapp")

    settings_path = args.settings or get_settings_path()
    settings = load_settings(settings_path)
    logger.debug("Settings loaded from %s", settings_path)
    if args.template:
        settings = settings.model_copy(update={"new_key_template": args.template})
    if args.save_settings:
        save_settings(settings, settings_path)
        logger.info("Settings saved to %s", settings_path)

    manager = ResourceManager(settings)
    if QCoreApplication.instance() is not None:
        ResourceEventBus.instance().attach(manager)
        logger.debug("Resource notifications relayed through the Qt event bus")
    try:
        manager.load(args.folder)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    print(format_summary(manager, show_missing=args.missing))
    return 0


if __name__ == "__main__":
    sys.exit(main())
