"""Listing lifecycle events, and the adapter that reinstalls highlighting on them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dired_rainbow.core.listing import ListingHighlighter
    from dired_rainbow.core.registry import Registry

logger = logging.getLogger(__name__)

Callback = Callable[[], object]


class ListingEvent(Enum):
    """Points at which a listing's text has been (re)displayed or edited."""

    ENTERED = "entered"
    REVERTED = "reverted"
    VIEW_TOGGLED = "view-toggled"
    RENAME_FINISHED = "rename-finished"
    RENAME_ABORTED = "rename-aborted"


class ListingHooks:
    """Subscriptions to listing lifecycle events."""

    def __init__(self) -> None:
        self._subscribers: dict[ListingEvent, list[Callback]] = {event: [] for event in ListingEvent}

    def subscribe(self, event: ListingEvent, callback: Callback) -> None:
        """Run callback whenever event is emitted (once per subscription)."""
        if callback not in self._subscribers[event]:
            self._subscribers[event].append(callback)

    def unsubscribe(self, event: ListingEvent, callback: Callback) -> None:
        if callback in self._subscribers[event]:
            self._subscribers[event].remove(callback)

    def subscribers(self, event: ListingEvent) -> list[Callback]:
        return list(self._subscribers[event])

    def emit(self, event: ListingEvent) -> None:
        """Run every callback subscribed to event, in subscription order."""
        logger.debug("Listing event: %s", event.value)
        for callback in list(self._subscribers[event]):
            callback()


class HighlightInstaller:
    """Reinstalls a registry's patterns into a highlighter."""

    def __init__(self, registry: Registry, highlighter: ListingHighlighter) -> None:
        self.registry = registry
        self.highlighter = highlighter

    def __call__(self) -> int:
        return self.registry.install_all(self.highlighter)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, HighlightInstaller)
            and other.registry is self.registry
            and other.highlighter is self.highlighter
        )

    def __hash__(self) -> int:
        return hash((id(self.registry), id(self.highlighter)))


def attach(registry: Registry, highlighter: ListingHighlighter, hooks: ListingHooks) -> HighlightInstaller:
    """Reinstall the registry's patterns on every listing lifecycle event."""
    installer = HighlightInstaller(registry, highlighter)
    for event in ListingEvent:
        hooks.subscribe(event, installer)
    return installer


def detach(registry: Registry, highlighter: ListingHighlighter, hooks: ListingHooks) -> None:
    """Undo attach."""
    installer = HighlightInstaller(registry, highlighter)
    for event in ListingEvent:
        hooks.unsubscribe(event, installer)
