"""
allocation – CQRS message core for the order-allocation service.

Import path convention::

    from allocation.application.bootstrap import bootstrap
    from allocation.domain import commands, events
    from allocation.application import views
    from allocation.kernel.errors import DomainError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
