"""AggregateRoot — owns the domain events it raises."""

from __future__ import annotations

from allocation.kernel.messaging import Message


class AggregateRoot:
    """Aggregate root — buffers raised messages until the unit of work drains them.

    Aggregates rehydrated by the ORM bypass ``__init__``; the persistence
    adapter calls :meth:`_reset_events` on load.
    """

    _events: list[Message]

    def __init__(self) -> None:
        self._reset_events()

    def _reset_events(self) -> None:
        self._events = []

    def _raise_event(self, event: Message) -> None:
        """Record a domain event."""
        self._events.append(event)

    def pull_events(self) -> list[Message]:
        """Return and clear pending domain events, oldest first."""
        events = list(self._events)
        self._events.clear()
        return events

    @property
    def pending_events(self) -> tuple[Message, ...]:
        return tuple(self._events)


__all__ = ["AggregateRoot"]
