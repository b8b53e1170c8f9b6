"""Allocation domain model: Product aggregate, Batch entity, OrderLine value."""

from __future__ import annotations

import dataclasses
from datetime import date

from allocation.domain import events
from allocation.kernel.ddd import AggregateRoot
from allocation.kernel.errors import OutOfStockError


@dataclasses.dataclass(unsafe_hash=True)
class OrderLine:
    """A customer order line; mutable only so the ORM can instrument it."""

    order_id: str
    sku: str
    qty: int


class Batch:
    """Purchased stock of one SKU, arriving at ``eta`` (``None`` = in the warehouse)."""

    def __init__(self, ref: str, sku: str, qty: int, eta: date | None = None) -> None:
        self.reference = ref
        self.sku = sku
        self.eta = eta
        self._purchased_quantity = qty
        self._allocations: set[OrderLine] = set()

    def __repr__(self) -> str:
        return f"<Batch {self.reference}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Batch):
            return False
        return other.reference == self.reference

    def __hash__(self) -> int:
        return hash(self.reference)

    def __gt__(self, other: "Batch") -> bool:
        if self.eta is None:
            return False
        if other.eta is None:
            return True
        return self.eta > other.eta

    def allocate(self, line: OrderLine) -> None:
        if self.can_allocate(line):
            self._allocations.add(line)

    def deallocate_one(self) -> OrderLine:
        return self._allocations.pop()

    @property
    def allocated_quantity(self) -> int:
        return sum(line.qty for line in self._allocations)

    @property
    def available_quantity(self) -> int:
        return self._purchased_quantity - self.allocated_quantity

    def can_allocate(self, line: OrderLine) -> bool:
        return self.sku == line.sku and self.available_quantity >= line.qty


class Product(AggregateRoot):
    """Consistency boundary for every batch of one SKU."""

    def __init__(self, sku: str, batches: list[Batch], version_number: int = 0) -> None:
        super().__init__()
        self.sku = sku
        self.batches = batches
        self.version_number = version_number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return False
        return other.sku == self.sku

    def __hash__(self) -> int:
        return hash(self.sku)

    def __repr__(self) -> str:
        return f"<Product {self.sku}>"

    def allocate(self, line: OrderLine) -> str:
        """Allocate ``line`` to the earliest batch that can take it.

        Raises :class:`OutOfStockError` (recording nothing) when no batch has
        room. Records :class:`~allocation.domain.events.OutOfStock` after the
        allocation when it used up the last available unit.
        """
        try:
            batch = next(b for b in sorted(self.batches) if b.can_allocate(line))
        except StopIteration:
            raise OutOfStockError(line.sku, line.qty) from None
        batch.allocate(line)
        self.version_number += 1
        self._raise_event(
            events.Allocated(
                order_id=line.order_id,
                sku=line.sku,
                qty=line.qty,
                batch_reference=batch.reference,
            )
        )
        if self.available_quantity == 0:
            self._raise_event(events.OutOfStock(sku=line.sku))
        return batch.reference

    def change_batch_quantity(self, ref: str, qty: int) -> None:
        batch = next(b for b in self.batches if b.reference == ref)
        batch._purchased_quantity = qty
        while batch.available_quantity < 0:
            line = batch.deallocate_one()
            self._raise_event(events.Deallocated(order_id=line.order_id, sku=line.sku, qty=line.qty))

    @property
    def available_quantity(self) -> int:
        return sum(b.available_quantity for b in self.batches)


__all__ = ["Batch", "OrderLine", "Product"]
