"""Typed events and the dispatcher that delivers them in arrival order."""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Deque, List, Type, TypeVar

from daumblog.models import AlertRequest, DisplayRecord, SearchResult, SortAction

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class QuerySubmitted:
    text: str


@dataclass(frozen=True)
class SearchCompleted:
    generation: int
    result: SearchResult


@dataclass(frozen=True)
class SortSelected:
    action: SortAction


@dataclass(frozen=True)
class SortRequested:
    pass


@dataclass(frozen=True)
class AlertAnswered:
    action: SortAction


@dataclass(frozen=True)
class RecordsChanged:
    records: tuple[DisplayRecord, ...]
    criterion: SortAction


@dataclass(frozen=True)
class AlertRaised:
    alert: AlertRequest


class EventDispatcher:
    """Synchronous dispatcher keyed by event type.

    Events published from inside a handler are queued and delivered after
    the current event has reached all of its handlers, so every handler
    observes events in the order they were published.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[Any], List[Callable[[Any], None]]] = defaultdict(list)
        self._queue: Deque[Any] = deque()
        self._dispatching = False

    def subscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``; returns an unsubscribe callable."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def publish(self, event: Any) -> None:
        self._queue.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._queue:
                self._deliver(self._queue.popleft())
        finally:
            self._dispatching = False

    def _deliver(self, event: Any) -> None:
        for handler in list(self._handlers.get(type(event), ())):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Handler {handler!r} failed for {type(event).__name__}")
