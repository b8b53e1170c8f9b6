"""Unit of Work port — transactional boundary and event harvest point."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Any, Iterator

from allocation.kernel.messaging import Message

if TYPE_CHECKING:
    from allocation.application.read_model import AllocationsReadModel
    from allocation.kernel.ddd.repository import Repository


class UnitOfWork(abc.ABC):
    """Port: transactional unit of work.

    Used as ``async with uow:``. A clean exit commits, an exception rolls
    back, so the writes of one scope land together or not at all.

    ``products`` is the write-side repository and ``read_model`` the
    denormalised allocations store of the current scope.
    """

    products: "Repository[Any]"
    read_model: "AllocationsReadModel"

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()

    @abc.abstractmethod
    async def commit(self) -> None: ...

    @abc.abstractmethod
    async def rollback(self) -> None: ...

    def collect_new_events(self) -> Iterator[Message]:
        """Drain events raised by every aggregate seen since the last drain.

        Each event is yielded once, in the order its aggregate raised it.
        """
        for aggregate in self.products.seen:
            yield from aggregate.pull_events()


__all__ = ["UnitOfWork"]
