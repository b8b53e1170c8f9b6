"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   ├── ValidationError
    │   │   ├── InvalidSkuError
    │   │   └── UnknownBatchError
    │   └── ConflictError
    │       └── OutOfStockError
    ├── ApplicationError             (application.py)
    │   ├── MissingDependencyError
    │   ├── UnknownMessageError
    │   ├── MessageQueueOverflowError
    │   └── BootstrapError
    │       └── UnknownBootstrapOptionError
    └── InfrastructureError          (infrastructure.py)
        └── TransportError
"""

from allocation.kernel.errors.application import (
    ApplicationError,
    BootstrapError,
    MessageQueueOverflowError,
    MissingDependencyError,
    UnknownBootstrapOptionError,
    UnknownMessageError,
)
from allocation.kernel.errors.base import BaseError
from allocation.kernel.errors.domain import (
    ConflictError,
    DomainError,
    InvalidSkuError,
    OutOfStockError,
    UnknownBatchError,
    ValidationError,
)
from allocation.kernel.errors.infrastructure import InfrastructureError, TransportError

__all__ = [
    "ApplicationError",
    "BaseError",
    "BootstrapError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "InvalidSkuError",
    "MessageQueueOverflowError",
    "MissingDependencyError",
    "OutOfStockError",
    "TransportError",
    "UnknownBatchError",
    "UnknownBootstrapOptionError",
    "UnknownMessageError",
    "ValidationError",
]
