"""Application – command and event handlers.

Each handler takes the message first and names its collaborators as further
parameters (``uow``, ``send_mail``, ``publish``); :mod:`allocation.application.bootstrap`
binds them.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable

from allocation.application.notifications import SendMail
from allocation.domain import commands, events, model
from allocation.kernel.ddd import UnitOfWork
from allocation.kernel.errors import InvalidSkuError, UnknownBatchError

Publish = Callable[[str, Any], Awaitable[None]]

ALLOCATED_TOPIC = "line_allocated"
DEFAULT_OUT_OF_STOCK_RECIPIENT = "stock@example.com"


async def add_batch(cmd: commands.CreateBatch, uow: UnitOfWork) -> None:
    async with uow:
        product = await uow.products.get(cmd.sku)
        if product is None:
            product = model.Product(cmd.sku, batches=[])
            await uow.products.add(product)
        product.batches.append(model.Batch(cmd.ref, cmd.sku, cmd.qty, cmd.eta))
        await uow.commit()


async def allocate(cmd: commands.Allocate, uow: UnitOfWork) -> str:
    line = model.OrderLine(cmd.order_id, cmd.sku, cmd.qty)
    async with uow:
        product = await uow.products.get(line.sku)
        if product is None:
            raise InvalidSkuError(line.sku)
        batchref = product.allocate(line)
        await uow.commit()
    return batchref


async def change_batch_quantity(cmd: commands.ChangeBatchQuantity, uow: UnitOfWork) -> None:
    async with uow:
        product = await uow.products.get_by_batchref(cmd.ref)
        if product is None:
            raise UnknownBatchError(cmd.ref)
        product.change_batch_quantity(ref=cmd.ref, qty=cmd.qty)
        await uow.commit()


async def reallocate(event: events.Deallocated, uow: UnitOfWork) -> None:
    await allocate(commands.Allocate(order_id=event.order_id, sku=event.sku, qty=event.qty), uow=uow)


async def publish_allocated_event(event: events.Allocated, publish: Publish) -> None:
    await publish(ALLOCATED_TOPIC, event)


async def send_out_of_stock_notification(
    event: events.OutOfStock,
    send_mail: SendMail,
    out_of_stock_recipient: str = DEFAULT_OUT_OF_STOCK_RECIPIENT,
) -> None:
    await send_mail(out_of_stock_recipient, f"Out of stock for {event.sku}")


__all__ = [
    "ALLOCATED_TOPIC",
    "DEFAULT_OUT_OF_STOCK_RECIPIENT",
    "Publish",
    "add_batch",
    "allocate",
    "change_batch_quantity",
    "publish_allocated_event",
    "reallocate",
    "send_out_of_stock_notification",
]
