"""Kernel messaging – message primitives."""
from allocation.kernel.messaging.message import (
    Command,
    Event,
    Message,
    MessageKind,
    message_name,
    message_payload,
)

__all__ = ["Command", "Event", "Message", "MessageKind", "message_name", "message_payload"]
