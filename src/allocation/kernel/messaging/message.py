"""Kernel messaging – the closed Command/Event sum type."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, ClassVar


class MessageKind(enum.Enum):
    """Discriminant of :class:`Message`; the bus switches on it."""

    COMMAND = "command"
    EVENT = "event"


class Message:
    """Base for everything that flows through the message bus.

    Concrete messages are frozen dataclasses deriving from either
    :class:`Command` or :class:`Event`; they carry data only.
    """

    kind: ClassVar[MessageKind]


class Command(Message):
    """Intent to change state. Exactly one handler; failures propagate."""

    kind: ClassVar[MessageKind] = MessageKind.COMMAND


class Event(Message):
    """A fact that already happened. Zero or more handlers; failures are isolated."""

    kind: ClassVar[MessageKind] = MessageKind.EVENT


def message_name(message: Message | type[Message]) -> str:
    """Stable type name used for logging and external topics."""
    cls = message if isinstance(message, type) else type(message)
    return cls.__name__


def message_payload(message: Message) -> dict[str, Any]:
    """Return the message fields as a plain dict."""
    return dataclasses.asdict(message)  # type: ignore[call-overload]


__all__ = ["Command", "Event", "Message", "MessageKind", "message_name", "message_payload"]
