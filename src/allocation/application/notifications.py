"""Application notifications – outbound notification port."""
from __future__ import annotations

from typing import Awaitable, Callable, Protocol, runtime_checkable

#: Shape of the ``send_mail`` dependency handed to handlers.
SendMail = Callable[[str, str], Awaitable[None]]


@runtime_checkable
class Notifications(Protocol):
    """Port: deliver a short text message to a destination address."""

    async def send(self, destination: str, message: str) -> None: ...


__all__ = ["Notifications", "SendMail"]
