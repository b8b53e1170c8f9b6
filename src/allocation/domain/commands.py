"""Commands accepted by the allocation service."""

from __future__ import annotations

import dataclasses
from datetime import date

from allocation.kernel.messaging import Command


@dataclasses.dataclass(frozen=True)
class CreateBatch(Command):
    ref: str
    sku: str
    qty: int
    eta: date | None = None


@dataclasses.dataclass(frozen=True)
class Allocate(Command):
    order_id: str
    sku: str
    qty: int


@dataclasses.dataclass(frozen=True)
class ChangeBatchQuantity(Command):
    ref: str
    qty: int


__all__ = ["Allocate", "ChangeBatchQuantity", "Command", "CreateBatch"]
