"""SQLAlchemy adapter – write-side tables and imperative mapping of the domain model."""
from __future__ import annotations

import threading
from typing import Any

from sqlalchemy import Column, Date, ForeignKey, Integer, MetaData, String, Table, event
from sqlalchemy.orm import registry, relationship

from allocation.domain import model
from allocation.observability.logging import get_logger

logger = get_logger(__name__)

metadata = MetaData()
mapper_registry = registry(metadata=metadata)

order_lines = Table(
    "order_lines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("sku", String(255)),
    Column("qty", Integer, nullable=False),
    Column("order_id", String(255)),
)

products = Table(
    "products",
    metadata,
    Column("sku", String(255), primary_key=True),
    Column("version_number", Integer, nullable=False, server_default="0"),
)

batches = Table(
    "batches",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reference", String(255), unique=True),
    Column("sku", ForeignKey("products.sku")),
    Column("_purchased_quantity", Integer, nullable=False),
    Column("eta", Date, nullable=True),
)

allocations = Table(
    "allocations",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("orderline_id", ForeignKey("order_lines.id")),
    Column("batch_id", ForeignKey("batches.id")),
)

_mappers_started = False
_mappers_lock = threading.Lock()


def start_mappers() -> bool:
    """Map the domain classes onto the tables above.

    Idempotent: a second call in the same process is a no-op and returns
    ``False``.
    """
    global _mappers_started
    with _mappers_lock:
        if _mappers_started:
            logger.debug("orm.mappers_already_started")
            return False
        _map_domain()
        _mappers_started = True
    logger.info("orm.mappers_started")
    return True


def _map_domain() -> None:
    lines_mapper = mapper_registry.map_imperatively(model.OrderLine, order_lines)
    batches_mapper = mapper_registry.map_imperatively(
        model.Batch,
        batches,
        properties={
            "_allocations": relationship(
                lines_mapper,
                secondary=allocations,
                collection_class=set,
                lazy="selectin",
            )
        },
    )
    mapper_registry.map_imperatively(
        model.Product,
        products,
        properties={"batches": relationship(batches_mapper, lazy="selectin")},
    )
    event.listen(model.Product, "load", _receive_load)


def mappers_started() -> bool:
    return _mappers_started


def _receive_load(product: model.Product, _: Any) -> None:
    product._reset_events()


__all__ = [
    "allocations",
    "batches",
    "mapper_registry",
    "mappers_started",
    "metadata",
    "order_lines",
    "products",
    "start_mappers",
]
