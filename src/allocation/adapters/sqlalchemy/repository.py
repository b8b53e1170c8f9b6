"""SQLAlchemy adapter – SqlAlchemyProductRepository."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select

from allocation.adapters.sqlalchemy import orm
from allocation.domain import model
from allocation.kernel.ddd import Repository


class SqlAlchemyProductRepository(Repository[model.Product]):
    """Product repository over an ``AsyncSession``; requires :func:`orm.start_mappers`."""

    def __init__(self, session: Any) -> None:
        super().__init__()
        self._session = session

    async def _add(self, product: model.Product) -> None:
        self._session.add(product)

    async def _get(self, sku: str) -> model.Product | None:
        return await self._session.get(model.Product, sku)

    async def _get_by_batchref(self, batchref: str) -> model.Product | None:
        result = await self._session.execute(
            select(model.Product)
            .join(orm.batches, orm.batches.c.sku == orm.products.c.sku)
            .where(orm.batches.c.reference == batchref)
        )
        return result.scalars().first()


__all__ = ["SqlAlchemyProductRepository"]
