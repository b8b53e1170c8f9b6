"""Repository port — tracks the aggregates it hands out."""

from __future__ import annotations

import abc
from typing import Generic, TypeVar

from allocation.kernel.ddd.aggregate import AggregateRoot

TAggregate = TypeVar("TAggregate", bound=AggregateRoot)


class Repository(abc.ABC, Generic[TAggregate]):
    """Port: repository for aggregate roots.

    Every aggregate added or loaded is remembered, in first-seen order, so the
    unit of work can collect the events it raises. Subclasses implement the
    ``_``-prefixed storage hooks.
    """

    def __init__(self) -> None:
        self._seen: dict[TAggregate, None] = {}

    @property
    def seen(self) -> tuple[TAggregate, ...]:
        return tuple(self._seen)

    async def add(self, aggregate: TAggregate) -> None:
        await self._add(aggregate)
        self._track(aggregate)

    async def get(self, key: str) -> TAggregate | None:
        aggregate = await self._get(key)
        if aggregate is not None:
            self._track(aggregate)
        return aggregate

    async def get_by_batchref(self, batchref: str) -> TAggregate | None:
        aggregate = await self._get_by_batchref(batchref)
        if aggregate is not None:
            self._track(aggregate)
        return aggregate

    def _track(self, aggregate: TAggregate) -> None:
        self._seen.setdefault(aggregate, None)

    @abc.abstractmethod
    async def _add(self, aggregate: TAggregate) -> None: ...

    @abc.abstractmethod
    async def _get(self, key: str) -> TAggregate | None: ...

    @abc.abstractmethod
    async def _get_by_batchref(self, batchref: str) -> TAggregate | None: ...


__all__ = ["Repository"]
