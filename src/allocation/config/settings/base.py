"""Config settings – Settings base class and AllocationSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from allocation.config.validation.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AllocationSettings(Settings):
    """Process-wide settings, read from ``ALLOCATION_*`` environment variables."""

    _prefix: ClassVar[str] = "ALLOCATION"

    database_url: str = "sqlite+aiosqlite:///allocation.db"
    redis_url: str = "redis://localhost:6379/0"
    smtp_host: str = "localhost"
    smtp_port: int = 1025
    mail_sender: str = "allocations@example.com"
    out_of_stock_recipient: str = "stock@example.com"
    max_messages_per_handle: int = 10_000
    log_level: str = "INFO"
    http_host: str = "127.0.0.1"
    http_port: int = 8000

    def _validate(self) -> None:
        if self.max_messages_per_handle < 1:
            raise InvalidSettingValueError(
                "max_messages_per_handle", self.max_messages_per_handle, "must be at least 1"
            )
        for name in ("smtp_port", "http_port"):
            port = getattr(self, name)
            if not 0 < port < 65536:
                raise InvalidSettingValueError(name, port, "not a TCP port")


__all__ = ["AllocationSettings", "Settings"]
