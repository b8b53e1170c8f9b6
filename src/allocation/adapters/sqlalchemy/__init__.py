"""SQLAlchemy adapter – session factory, ORM mapping, repository, read model, UoW."""
from allocation.adapters.sqlalchemy.orm import metadata, start_mappers
from allocation.adapters.sqlalchemy.read_model import (
    SqlAlchemyAllocationsReadModel,
    allocations_view,
    known_orders,
    read_metadata,
)
from allocation.adapters.sqlalchemy.repository import SqlAlchemyProductRepository
from allocation.adapters.sqlalchemy.session import SqlAlchemySessionFactory, create_tables
from allocation.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork

__all__ = [
    "SqlAlchemyAllocationsReadModel",
    "SqlAlchemyProductRepository",
    "SqlAlchemySessionFactory",
    "SqlAlchemyUnitOfWork",
    "allocations_view",
    "create_tables",
    "known_orders",
    "metadata",
    "read_metadata",
    "start_mappers",
]
