"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from allocation.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from allocation.observability.logging import get_logger

logger = get_logger(__name__)


class FastAPIExceptionMapper:
    """Register allocation error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"code": "out_of_stock", "message": "...", "detail": {...}}

    Mappings
    --------
    ``ValidationError``     → 400
    ``ConflictError``       → 409
    ``DomainError``         → 422
    ``InfrastructureError`` → 503
    ``ApplicationError``    → 500
    """

    def __init__(self) -> None:
        # more-specific subtypes first
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (ConflictError, 409),
            (DomainError, 422),
            (InfrastructureError, 503),
            (ApplicationError, 500),
        ]

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: FastAPI) -> None:
        """Register all error handlers on *app*."""
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._make_handler(status))

    @staticmethod
    def _make_handler(code: int) -> Callable[[Request, Any], JSONResponse]:
        def handler(request: Request, exc: Any) -> JSONResponse:
            if isinstance(exc, BaseError):
                body = exc.to_dict()
            else:
                body = {"code": "error", "message": str(exc)}
            logger.info("http.error_mapped", path=request.url.path, status=code, code=body["code"])
            return JSONResponse(status_code=code, content=body)

        return handler


__all__ = ["FastAPIExceptionMapper"]
