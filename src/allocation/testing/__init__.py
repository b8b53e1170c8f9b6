"""Testing support – in-memory fakes and pytest fixtures.

Import in your ``conftest.py``::

    pytest_plugins = ["allocation.testing.fixtures"]
"""

from allocation.testing.fakes import (
    FakeProductRepository,
    FakeUnitOfWork,
    InMemoryAllocationsReadModel,
    InMemoryEventPublisher,
    InMemoryNotifications,
)

__all__ = [
    "FakeProductRepository",
    "FakeUnitOfWork",
    "InMemoryAllocationsReadModel",
    "InMemoryEventPublisher",
    "InMemoryNotifications",
]
