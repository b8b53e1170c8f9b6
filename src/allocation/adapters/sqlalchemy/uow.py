"""SQLAlchemy adapter – SqlAlchemyUnitOfWork."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from typing import Any, Iterator

from allocation.adapters.sqlalchemy.read_model import SqlAlchemyAllocationsReadModel
from allocation.adapters.sqlalchemy.repository import SqlAlchemyProductRepository
from allocation.kernel.ddd import UnitOfWork
from allocation.kernel.messaging import Message


@dataclasses.dataclass
class _Scope:
    session: Any
    products: SqlAlchemyProductRepository
    read_model: SqlAlchemyAllocationsReadModel


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy async unit of work.

    Each ``async with`` opens a fresh session. The current scope lives in a
    :class:`~contextvars.ContextVar`, so one instance can be shared by
    concurrent asyncio tasks without them seeing each other's sessions.
    The scope stays readable after exit so the bus can harvest its events.
    """

    def __init__(self, session_factory: Any) -> None:
        self._factory = session_factory
        self._scope: ContextVar[_Scope | None] = ContextVar(f"sqlalchemy_uow_{id(self)}", default=None)

    def _current(self) -> _Scope:
        scope = self._scope.get()
        if scope is None:
            raise RuntimeError("SqlAlchemyUnitOfWork used outside 'async with'")
        return scope

    @property
    def session(self) -> Any:
        return self._current().session

    @property
    def products(self) -> SqlAlchemyProductRepository:  # type: ignore[override]
        return self._current().products

    @property
    def read_model(self) -> SqlAlchemyAllocationsReadModel:  # type: ignore[override]
        return self._current().read_model

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        session = self._factory()
        self._scope.set(
            _Scope(
                session=session,
                products=SqlAlchemyProductRepository(session),
                read_model=SqlAlchemyAllocationsReadModel(session),
            )
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            await self.session.close()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    def collect_new_events(self) -> Iterator[Message]:
        if self._scope.get() is None:
            return
        yield from super().collect_new_events()


__all__ = ["SqlAlchemyUnitOfWork"]
