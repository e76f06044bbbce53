"""
resxapp/services/event_bus.py -- Qt signal bridge for resource changes.

Singleton that re-publishes ResourceManager notifications as Qt signals,
so GUI panels can connect with ``Signal.connect`` instead of subscribing
to engine callbacks directly.

Usage::

    from resxapp.services.event_bus import ResourceEventBus

    bus = ResourceEventBus.instance()
    bus.attach(resource_manager)
    bus.language_changed.connect(my_handler)
"""

from __future__ import annotations

import threading

from PySide6.QtCore import QObject, Signal


class ResourceEventBus(QObject):
    """Application-wide signal bus for resource notifications.

    Signals
    -------
    language_changed(str, str)
        Fired after a language of an entity was written.  Payload is the
        entity display name and the language name ("" for neutral).
    resources_loaded(int)
        Fired after a manager finished loading.  Payload is the number of
        resource entities.
    """

    language_changed = Signal(str, str)
    resources_loaded = Signal(int)

    # Singleton
    _instance: ResourceEventBus | None = None
    _lock = threading.Lock()

    @classmethod
    def instance(cls) -> ResourceEventBus:
        """Return the singleton ResourceEventBus instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        with cls._lock:
            if cls._instance is not None:
                cls._instance.deleteLater()
            cls._instance = None

    # ------------------------------------------------------------------
    # Manager wiring
    # ------------------------------------------------------------------

    def attach(self, manager) -> None:
        """Relay *manager*'s notifications through this bus."""
        manager.language_changed.subscribe(self._on_language_changed)
        manager.loaded.subscribe(self._on_loaded)

    def detach(self, manager) -> None:
        manager.language_changed.unsubscribe(self._on_language_changed)
        manager.loaded.unsubscribe(self._on_loaded)

    def _on_language_changed(self, event) -> None:
        self.language_changed.emit(event.entity.display_name, event.language.name)

    def _on_loaded(self, manager) -> None:
        self.resources_loaded.emit(len(manager.resource_entities))
