"""
resxengine/events.py -- Change notification primitives.

Every notification in the engine is an explicit, ordered list of plain
callbacks.  Subscribers are invoked synchronously, on the caller's thread,
in the order they subscribed.

Two kinds of notification exist:

    before-change   ``callback(...) -> ChangeDecision``.  Any VETO stops the
                    pending mutation.  Returning ``None`` counts as PROCEED.
    after-change    ``callback(...)``, return value ignored.

Usage::

    from resxengine.events import ChangeDecision, Subscribers

    changing = Subscribers()
    changing.subscribe(lambda event: ChangeDecision.VETO)
    changing.decide(event)          # ChangeDecision.VETO
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

if TYPE_CHECKING:
    from resxengine.resource_entity import ResourceEntity
    from resxengine.resource_language import ResourceLanguage

logger = logging.getLogger(__name__)


class ChangeDecision(Enum):
    """Outcome of a before-change callback."""

    PROCEED = "proceed"
    VETO = "veto"


@dataclass(frozen=True)
class LanguageChangingEvent:
    """Payload of an entity-level Changing notification.

    ``culture`` is ``None`` for the neutral language.
    """

    entity: "ResourceEntity"
    culture: Optional[str]


@dataclass(frozen=True)
class LanguageChangedEvent:
    """Payload of an entity-level Changed notification."""

    entity: "ResourceEntity"
    language: "ResourceLanguage"


class Subscribers:
    """An ordered list of callbacks with deterministic dispatch."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def subscribe(self, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Append *callback*; returns it so this can be used as a decorator."""
        if not callable(callback):
            raise ValueError(f"Subscriber must be callable, got {callback!r}")
        self._callbacks.append(callback)
        return callback

    def unsubscribe(self, callback: Callable[..., Any]) -> None:
        """Remove the first registration of *callback* (no-op if absent)."""
        try:
            self._callbacks.remove(callback)
        except ValueError:
            pass

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)

    def __bool__(self) -> bool:
        return bool(self._callbacks)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(list(self._callbacks))

    def notify(self, *args: Any) -> None:
        """Invoke every subscriber with *args*, ignoring return values."""
        for callback in list(self._callbacks):
            callback(*args)

    def decide(self, *args: Any) -> ChangeDecision:
        """Ask every subscriber whether a change may proceed.

        All subscribers are consulted, even after a veto, so that each one
        observes the pending change.  The result is VETO if any of them
        vetoed.
        """
        decision = ChangeDecision.PROCEED
        for callback in list(self._callbacks):
            if callback(*args) is ChangeDecision.VETO:
                logger.debug("Change vetoed by %r", callback)
                decision = ChangeDecision.VETO
        return decision
