"""Testing fakes – in-memory stand-ins for every port."""
from allocation.testing.fakes.notifications import InMemoryNotifications
from allocation.testing.fakes.publisher import InMemoryEventPublisher
from allocation.testing.fakes.unit_of_work import (
    FakeProductRepository,
    FakeUnitOfWork,
    InMemoryAllocationsReadModel,
)

__all__ = [
    "FakeProductRepository",
    "FakeUnitOfWork",
    "InMemoryAllocationsReadModel",
    "InMemoryEventPublisher",
    "InMemoryNotifications",
]
