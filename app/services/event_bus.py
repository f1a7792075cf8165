"""Synchronous notification bus for registry events.

Every published event is appended to an in-memory log (read by
GET /v1/events) and then handed to each subscriber in subscription
order, on the caller's thread.

SUBSCRIBER FAILURES
--------------------
Events describe state the registry has already committed.  A subscriber
(metrics counter, indexer, UI push) is an observer: it cannot veto or undo
the operation that produced the event.  So when a subscriber raises, the
error is logged with its traceback and fan-out continues with the next
subscriber.  The caller still sees its operation succeed, which matches
what actually happened to the registry.

Compare app/api/health.py in spirit: a broken dependency is reported, it
does not take the request down with it.

READING THE LOG
----------------
``history()`` returns a copy.  Pollers pass ``after`` (a 1-based sequence
number they have already seen) and ``limit`` so each poll only copies the
slice it needs instead of the whole log.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from app.models.events import RegistryEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[RegistryEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._log: list[RegistryEvent] = []
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def publish(self, event: RegistryEvent) -> None:
        self._log.append(event)
        logger.info(
            "Event %s %s",
            event.name,
            event.payload(),
            extra={"event": event.name},
        )
        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.exception(
                    "Subscriber %r failed on event=%s",
                    subscriber,
                    event.name,
                    extra={"event": event.name},
                )

    def history(
        self,
        name: str | None = None,
        *,
        after: int = 0,
        limit: int | None = None,
    ) -> list[tuple[int, RegistryEvent]]:
        """Return ``(seq, event)`` pairs with ``seq > after``, oldest first.

        ``seq`` is the 1-based position in the log and never changes.
        ``limit`` caps the number of pairs returned after filtering.
        """
        if after < 0:
            raise ValueError("after must be >= 0")
        if limit is not None and limit < 0:
            raise ValueError("limit must be >= 0")

        result: list[tuple[int, RegistryEvent]] = []
        for seq, event in enumerate(self._log[after:], start=after + 1):
            if limit is not None and len(result) >= limit:
                break
            if name is None or event.name == name:
                result.append((seq, event))
        return result

    def __len__(self) -> int:
        return len(self._log)
