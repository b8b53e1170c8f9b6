"""Application layer – message bus, handlers, read model, views, bootstrap.

``bootstrap`` lives in :mod:`allocation.application.bootstrap`.
"""
from allocation.application.injector import BoundHandler, inject
from allocation.application.messagebus import MessageBus

__all__ = ["BoundHandler", "MessageBus", "inject"]
