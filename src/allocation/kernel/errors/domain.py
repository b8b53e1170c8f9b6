"""Domain errors — business rule violations raised by the allocation model."""

from __future__ import annotations

from typing import Any

from allocation.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules."""

    default_code = "validation_error"


class ConflictError(DomainError):
    """The operation conflicts with existing state."""

    default_code = "conflict"


class InvalidSkuError(ValidationError):
    """No product exists for the requested SKU."""

    default_code = "invalid_sku"

    def __init__(self, sku: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid sku {sku}", detail={"sku": sku}, **kwargs)
        self.sku = sku


class UnknownBatchError(ValidationError):
    """No product owns a batch with the given reference."""

    default_code = "unknown_batch"

    def __init__(self, reference: str, **kwargs: Any) -> None:
        super().__init__(f"Unknown batch {reference}", detail={"reference": reference}, **kwargs)
        self.reference = reference


class OutOfStockError(ConflictError):
    """No batch has enough available quantity for the order line."""

    default_code = "out_of_stock"

    def __init__(self, sku: str, qty: int | None = None, **kwargs: Any) -> None:
        detail: dict[str, Any] = {"sku": sku}
        if qty is not None:
            detail["qty"] = qty
        super().__init__(f"Out of stock for sku {sku}", detail=detail, **kwargs)
        self.sku = sku
        self.qty = qty


__all__ = [
    "ConflictError",
    "DomainError",
    "InvalidSkuError",
    "OutOfStockError",
    "UnknownBatchError",
    "ValidationError",
]
