"""DDD building blocks — public re-export surface."""

from allocation.kernel.ddd.aggregate import AggregateRoot
from allocation.kernel.ddd.repository import Repository
from allocation.kernel.ddd.unit_of_work import UnitOfWork

__all__ = ["AggregateRoot", "Repository", "UnitOfWork"]
