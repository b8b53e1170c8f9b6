"""Testing fixtures – fake_uow, fake_notifications, fake_publisher, fake_bus.

Load in ``conftest.py``::

    pytest_plugins = ["allocation.testing.fixtures"]
"""
from __future__ import annotations

import pytest

from allocation.application.messagebus import MessageBus
from allocation.testing.fakes import FakeUnitOfWork, InMemoryEventPublisher, InMemoryNotifications


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def fake_notifications() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def fake_publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def fake_bus(
    fake_uow: FakeUnitOfWork,
    fake_notifications: InMemoryNotifications,
    fake_publisher: InMemoryEventPublisher,
) -> MessageBus:
    from allocation.application.bootstrap import bootstrap

    return bootstrap(
        start_persistence_mappings=False,
        unit_of_work=fake_uow,
        send_mail=fake_notifications.send,
        publish=fake_publisher.publish,
    )


__all__ = ["fake_bus", "fake_notifications", "fake_publisher", "fake_uow"]
