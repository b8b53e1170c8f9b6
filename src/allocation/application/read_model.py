"""Application – allocations read model: port, projection handlers, rebuild.

The read model is a flat ``(order_id, sku, batch_reference)`` projection of
Allocated/Deallocated events, plus the set of order ids seen in Allocated.
Rows are inserted and deleted, never updated, so replaying the event history
against an empty store reproduces it.
"""
from __future__ import annotations

import abc
from typing import Iterable, TypedDict

from allocation.domain import events
from allocation.kernel.ddd import UnitOfWork
from allocation.kernel.messaging import Message
from allocation.observability.logging import get_logger

logger = get_logger(__name__)


class AllocationRow(TypedDict):
    sku: str
    batch_reference: str


class AllocationsReadModel(abc.ABC):
    """Port: denormalised allocations store, unique on ``(order_id, sku)``."""

    @abc.abstractmethod
    async def add(self, order_id: str, sku: str, batch_reference: str) -> bool:
        """Insert a row and record *order_id* as known.

        Returns ``False`` when ``(order_id, sku)`` already exists.
        """

    @abc.abstractmethod
    async def remove(self, order_id: str, sku: str) -> bool:
        """Delete the matching row; return ``False`` when there was none."""

    @abc.abstractmethod
    async def for_order(self, order_id: str) -> list[AllocationRow]: ...

    @abc.abstractmethod
    async def has_order(self, order_id: str) -> bool:
        """Whether any line of *order_id* was ever allocated, deallocated or not."""

    @abc.abstractmethod
    async def clear(self) -> None:
        """Drop every row and every known order."""


async def add_allocation_to_read_model(event: events.Allocated, uow: UnitOfWork) -> None:
    async with uow:
        inserted = await uow.read_model.add(event.order_id, event.sku, event.batch_reference)
        await uow.commit()
    if not inserted:
        logger.info("read_model.duplicate_ignored", order_id=event.order_id, sku=event.sku)


async def remove_allocation_from_read_model(event: events.Deallocated, uow: UnitOfWork) -> None:
    async with uow:
        await uow.read_model.remove(event.order_id, event.sku)
        await uow.commit()


async def rebuild_read_model(history: Iterable[Message], uow: UnitOfWork) -> int:
    """Empty the store and replay *history* into it in one transaction.

    Messages other than Allocated/Deallocated are skipped. Returns the number
    of events applied.
    """
    applied = 0
    async with uow:
        await uow.read_model.clear()
        for message in history:
            if isinstance(message, events.Allocated):
                await uow.read_model.add(message.order_id, message.sku, message.batch_reference)
            elif isinstance(message, events.Deallocated):
                await uow.read_model.remove(message.order_id, message.sku)
            else:
                continue
            applied += 1
        await uow.commit()
    logger.info("read_model.rebuilt", events_applied=applied)
    return applied


__all__ = [
    "AllocationRow",
    "AllocationsReadModel",
    "add_allocation_to_read_model",
    "rebuild_read_model",
    "remove_allocation_from_read_model",
]
