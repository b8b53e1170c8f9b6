"""Events raised by the Product aggregate."""

from __future__ import annotations

import dataclasses

from allocation.kernel.messaging import Event


@dataclasses.dataclass(frozen=True)
class Allocated(Event):
    order_id: str
    sku: str
    qty: int
    batch_reference: str


@dataclasses.dataclass(frozen=True)
class Deallocated(Event):
    order_id: str
    sku: str
    qty: int


@dataclasses.dataclass(frozen=True)
class OutOfStock(Event):
    """The last available unit of ``sku`` has been allocated."""

    sku: str


__all__ = ["Allocated", "Deallocated", "Event", "OutOfStock"]
