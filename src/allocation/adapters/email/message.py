"""Email adapter – EmailMessage value object."""
from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["EmailMessage"]


@dataclass(frozen=True)
class EmailMessage:
    """A fully-resolved plain-text email ready to be sent."""

    to: tuple[str, ...]
    subject: str
    text_body: str
    sender: str
    cc: tuple[str, ...] = field(default_factory=tuple)

    def all_recipients(self) -> list[str]:
        """Return combined to + cc recipient list."""
        return [*self.to, *self.cc]
