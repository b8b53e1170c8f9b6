"""Application – read-side queries.

Views answer from the allocations read model only: no write-side tables, no
domain objects.
"""
from __future__ import annotations

from allocation.application.read_model import AllocationRow
from allocation.kernel.ddd import UnitOfWork


async def allocations_for_order(order_id: str, uow: UnitOfWork) -> list[AllocationRow]:
    """Return ``[{"sku", "batch_reference"}, ...]`` for *order_id*, or ``[]``."""
    async with uow:
        return await uow.read_model.for_order(order_id)


async def order_is_known(order_id: str, uow: UnitOfWork) -> bool:
    """True once any line of *order_id* has been allocated, even if since deallocated."""
    async with uow:
        return await uow.read_model.has_order(order_id)


__all__ = ["allocations_for_order", "order_is_known"]
