"""Application – MessageBus: drains commands and the events they cause.

``handle()`` owns a FIFO work queue seeded with one message. Processing a
message may raise new events in the unit of work; they are appended to the
back of the queue, so a command's direct consequences run before the events
those consequences trigger (breadth-first).

Commands have exactly one handler and its failure propagates to the caller.
Events have any number of handlers, run in registration order, each inside
its own failure boundary.
"""
from __future__ import annotations

from collections import deque
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

from allocation.kernel.ddd import UnitOfWork
from allocation.kernel.errors import MessageQueueOverflowError, UnknownMessageError
from allocation.kernel.messaging import Command, Event, Message, MessageKind, message_name
from allocation.observability.logging import get_logger

logger = get_logger(__name__)

CommandHandlers = Mapping[type[Command], Callable[[Any], Any]]
EventHandlers = Mapping[type[Event], Sequence[Callable[[Any], Any]]]

DEFAULT_MAX_MESSAGES = 10_000


class MessageBus:
    """Single-consumer dispatcher for commands and events.

    Handler tables are frozen on construction; the bus itself keeps no
    per-call state, so one instance may serve concurrent ``handle()`` calls.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        event_handlers: EventHandlers,
        command_handlers: CommandHandlers,
        max_messages: int = DEFAULT_MAX_MESSAGES,
    ) -> None:
        self.uow = uow
        self._event_handlers = MappingProxyType(
            {event_type: tuple(handlers) for event_type, handlers in event_handlers.items()}
        )
        self._command_handlers = MappingProxyType(dict(command_handlers))
        self._max_messages = max_messages

    @property
    def event_handlers(self) -> Mapping[type[Event], tuple[Callable[[Any], Any], ...]]:
        return self._event_handlers

    @property
    def command_handlers(self) -> Mapping[type[Command], Callable[[Any], Any]]:
        return self._command_handlers

    async def handle(self, message: Message) -> None:
        """Process *message* and everything it causes until the queue is empty."""
        queue: deque[Message] = deque([message])
        processed = 0
        while queue:
            if processed >= self._max_messages:
                queue.clear()
                logger.error("message_queue.overflow", limit=self._max_messages)
                raise MessageQueueOverflowError(self._max_messages)
            current = queue.popleft()
            processed += 1
            kind = getattr(current, "kind", None)
            if kind is MessageKind.COMMAND:
                try:
                    await self._handle_command(current, queue)  # type: ignore[arg-type]
                except Exception:
                    queue.clear()
                    # events raised by a failed command are dropped
                    for _ in self.uow.collect_new_events():
                        pass
                    raise
            elif kind is MessageKind.EVENT:
                await self._handle_event(current, queue)  # type: ignore[arg-type]
            else:
                raise UnknownMessageError(current)

    async def _handle_command(self, command: Command, queue: deque[Message]) -> None:
        logger.debug("command.handling", command=message_name(command))
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise UnknownMessageError(command)
        try:
            await handler(command)
        except Exception as exc:
            logger.error(
                "command.failed",
                command=message_name(command),
                handler=_handler_name(handler),
                error=repr(exc),
            )
            raise
        queue.extend(self.uow.collect_new_events())

    async def _handle_event(self, event: Event, queue: deque[Message]) -> None:
        for handler in self._event_handlers.get(type(event), ()):
            logger.debug("event.handling", message=message_name(event), handler=_handler_name(handler))
            try:
                await handler(event)
            except Exception as exc:
                logger.exception(
                    "event_handler.failed",
                    message=message_name(event),
                    handler=_handler_name(handler),
                    error=repr(exc),
                )
            queue.extend(self.uow.collect_new_events())


def _handler_name(handler: Any) -> str:
    return getattr(handler, "name", None) or getattr(handler, "__qualname__", repr(handler))


__all__ = ["CommandHandlers", "DEFAULT_MAX_MESSAGES", "EventHandlers", "MessageBus"]
