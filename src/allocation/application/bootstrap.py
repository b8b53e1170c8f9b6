"""Application – bootstrap: the composition root.

The only place that builds a unit of work or a transport client. Everything
else receives a ready :class:`MessageBus` from :func:`bootstrap`::

    bus = bootstrap()                                  # production wiring
    bus = bootstrap(
        start_persistence_mappings=False,
        unit_of_work=FakeUnitOfWork(),
        send_mail=fake_notifications.send,
        publish=fake_publisher.publish,
    )                                                  # tests
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

import redis.asyncio as aioredis

from allocation.adapters.email import EmailNotifications, SmtpConfig
from allocation.adapters.redis import RedisCommandConsumer, RedisEventPublisher
from allocation.adapters.sqlalchemy import SqlAlchemySessionFactory, SqlAlchemyUnitOfWork, start_mappers
from allocation.application import handlers, read_model
from allocation.application.handlers import Publish
from allocation.application.injector import BoundHandler, inject
from allocation.application.messagebus import MessageBus
from allocation.application.notifications import SendMail
from allocation.config import AllocationSettings, get_settings
from allocation.domain import commands, events
from allocation.kernel.ddd import UnitOfWork
from allocation.kernel.errors import MissingDependencyError, UnknownBootstrapOptionError
from allocation.kernel.messaging import Command, Event
from allocation.observability.logging import get_logger

logger = get_logger(__name__)

RECOGNISED_OPTIONS = frozenset({"start_persistence_mappings", "unit_of_work", "send_mail", "publish"})

EVENT_HANDLERS: Mapping[type[Event], Sequence[Callable[..., Any]]] = {
    events.Allocated: [
        handlers.publish_allocated_event,
        read_model.add_allocation_to_read_model,
    ],
    events.Deallocated: [
        read_model.remove_allocation_from_read_model,
        handlers.reallocate,
    ],
    events.OutOfStock: [handlers.send_out_of_stock_notification],
}

COMMAND_HANDLERS: Mapping[type[Command], Callable[..., Any]] = {
    commands.CreateBatch: handlers.add_batch,
    commands.Allocate: handlers.allocate,
    commands.ChangeBatchQuantity: handlers.change_batch_quantity,
}


def bootstrap(
    *,
    start_persistence_mappings: bool = True,
    unit_of_work: UnitOfWork | None = None,
    send_mail: SendMail | None = None,
    publish: Publish | None = None,
    **unrecognised: Any,
) -> MessageBus:
    """Assemble a :class:`MessageBus`; omitted options get production defaults.

    Raises :class:`UnknownBootstrapOptionError` for options outside
    :data:`RECOGNISED_OPTIONS` and :class:`MissingDependencyError` when a
    registered handler asks for a collaborator nobody provides.
    ``start_persistence_mappings`` may be passed repeatedly; mapping happens
    once per process.
    """
    if unrecognised:
        raise UnknownBootstrapOptionError(unrecognised)

    settings = get_settings()

    if start_persistence_mappings:
        start_mappers()

    if unit_of_work is None:
        unit_of_work = SqlAlchemyUnitOfWork(SqlAlchemySessionFactory(settings.database_url))
    if send_mail is None:
        send_mail = _default_notifications(settings).send
    if publish is None:
        publish = RedisEventPublisher(client=redis_client(settings)).publish

    dependencies: dict[str, Any] = {
        "uow": unit_of_work,
        "send_mail": send_mail,
        "publish": publish,
        "out_of_stock_recipient": settings.out_of_stock_recipient,
    }
    event_handlers, command_handlers = build_handler_tables(dependencies)

    logger.debug(
        "bus.bootstrapped",
        commands=len(command_handlers),
        events=len(event_handlers),
        dependencies=sorted(dependencies),
    )
    return MessageBus(
        uow=unit_of_work,
        event_handlers=event_handlers,
        command_handlers=command_handlers,
        max_messages=settings.max_messages_per_handle,
    )


def build_handler_tables(
    dependencies: Mapping[str, Any],
) -> tuple[dict[type[Event], list[BoundHandler]], dict[type[Command], BoundHandler]]:
    """Inject every registered handler against *dependencies*.

    Raises :class:`MissingDependencyError` for the first handler left with
    unbound required parameters.
    """
    event_handlers = {
        event_type: [inject(handler, dependencies) for handler in registered]
        for event_type, registered in EVENT_HANDLERS.items()
    }
    command_handlers = {
        command_type: inject(handler, dependencies)
        for command_type, handler in COMMAND_HANDLERS.items()
    }
    for bound in [*command_handlers.values(), *(h for hs in event_handlers.values() for h in hs)]:
        if bound.missing:
            raise MissingDependencyError(bound.name, bound.missing)
    return event_handlers, command_handlers


def bootstrap_command_consumer(
    bus: MessageBus | None = None, *, client: Any | None = None
) -> RedisCommandConsumer:
    """Assemble the inbound Redis consumer around *bus* (``bootstrap()`` when omitted)."""
    if bus is None:
        bus = bootstrap()
    if client is None:
        client = redis_client(get_settings())
    return RedisCommandConsumer(bus, client=client)


def redis_client(settings: AllocationSettings) -> Any:
    return aioredis.from_url(settings.redis_url)


def _default_notifications(settings: AllocationSettings) -> EmailNotifications:
    return EmailNotifications(
        SmtpConfig(hostname=settings.smtp_host, port=settings.smtp_port),
        sender=settings.mail_sender,
    )


__all__ = [
    "COMMAND_HANDLERS",
    "EVENT_HANDLERS",
    "RECOGNISED_OPTIONS",
    "bootstrap",
    "bootstrap_command_consumer",
    "build_handler_tables",
    "redis_client",
]
