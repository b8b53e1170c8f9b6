"""Infrastructure errors — I/O failures in adapters."""

from __future__ import annotations

from typing import Any

from allocation.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class TransportError(InfrastructureError):
    """An outbound transport (pub/sub, mail) failed to deliver."""

    default_code = "transport_error"

    def __init__(
        self,
        transport: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Transport '{transport}' failed", **kwargs)
        self.transport = transport


__all__ = ["InfrastructureError", "TransportError"]
