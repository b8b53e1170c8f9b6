"""Allocation domain – model, commands and events."""
from allocation.domain import commands, events
from allocation.domain.model import Batch, OrderLine, Product

__all__ = ["Batch", "OrderLine", "Product", "commands", "events"]
