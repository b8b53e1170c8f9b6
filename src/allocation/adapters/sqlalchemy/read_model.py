"""SQLAlchemy adapter – allocations_view read-model tables and store."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Column, MetaData, String, Table, and_, delete, insert, select
from sqlalchemy.dialects import postgresql, sqlite

from allocation.application.read_model import AllocationRow, AllocationsReadModel

# Separate metadata: the read model has no foreign keys into the write schema.
read_metadata = MetaData()

allocations_view = Table(
    "allocations_view",
    read_metadata,
    Column("order_id", String(255), primary_key=True),
    Column("sku", String(255), primary_key=True),
    Column("batch_reference", String(255), nullable=False),
)

# Orders that ever had a line allocated; survives deallocation.
known_orders = Table(
    "allocations_known_orders",
    read_metadata,
    Column("order_id", String(255), primary_key=True),
)

_UPSERT_DIALECTS: dict[str, Any] = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlAlchemyAllocationsReadModel(AllocationsReadModel):
    """Read-model store over ``allocations_view`` bound to one session."""

    def __init__(self, session: Any) -> None:
        self._session = session

    async def _insert_if_absent(self, table: Table, values: dict[str, str]) -> bool:
        keys = [column.name for column in table.primary_key.columns]
        dialect_insert = _UPSERT_DIALECTS.get(self._session.get_bind().dialect.name)
        if dialect_insert is not None:
            stmt = dialect_insert(table).values(**values).on_conflict_do_nothing(index_elements=keys)
            result = await self._session.execute(stmt)
            return result.rowcount == 1
        existing = await self._session.execute(
            select(*table.primary_key.columns).where(and_(*(table.c[key] == values[key] for key in keys)))
        )
        if existing.first() is not None:
            return False
        await self._session.execute(insert(table).values(**values))
        return True

    async def add(self, order_id: str, sku: str, batch_reference: str) -> bool:
        await self._insert_if_absent(known_orders, {"order_id": order_id})
        return await self._insert_if_absent(
            allocations_view,
            {"order_id": order_id, "sku": sku, "batch_reference": batch_reference},
        )

    async def remove(self, order_id: str, sku: str) -> bool:
        result = await self._session.execute(
            delete(allocations_view).where(
                allocations_view.c.order_id == order_id,
                allocations_view.c.sku == sku,
            )
        )
        return result.rowcount > 0

    async def for_order(self, order_id: str) -> list[AllocationRow]:
        result = await self._session.execute(
            select(allocations_view.c.sku, allocations_view.c.batch_reference)
            .where(allocations_view.c.order_id == order_id)
            .order_by(allocations_view.c.sku)
        )
        return [AllocationRow(sku=row.sku, batch_reference=row.batch_reference) for row in result]

    async def has_order(self, order_id: str) -> bool:
        result = await self._session.execute(
            select(known_orders.c.order_id).where(known_orders.c.order_id == order_id)
        )
        return result.first() is not None

    async def clear(self) -> None:
        await self._session.execute(delete(allocations_view))
        await self._session.execute(delete(known_orders))


__all__ = ["SqlAlchemyAllocationsReadModel", "allocations_view", "known_orders", "read_metadata"]
