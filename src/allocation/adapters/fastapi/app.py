"""FastAPI adapter – HTTP entrypoint over the message bus.

Writes answer with an acknowledgement only; clients confirm through the read
endpoint (Post/Redirect/Get).
"""
from __future__ import annotations

from datetime import date

from fastapi import FastAPI, HTTPException, Request, Response, status
from pydantic import BaseModel

from allocation.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from allocation.application import views
from allocation.application.messagebus import MessageBus
from allocation.config import get_settings
from allocation.domain import commands
from allocation.observability.logging import configure_logging


class BatchIn(BaseModel):
    ref: str
    sku: str
    qty: int
    eta: date | None = None


class AllocateIn(BaseModel):
    order_id: str
    sku: str
    qty: int


class AllocationOut(BaseModel):
    sku: str
    batch_reference: str


def create_app(bus: MessageBus | None = None) -> FastAPI:
    """Build the HTTP app around *bus* (``bootstrap()`` when omitted)."""
    if bus is None:
        from allocation.application.bootstrap import bootstrap

        configure_logging(get_settings().log_level)
        bus = bootstrap()

    app = FastAPI(title="allocation")
    app.state.bus = bus
    FastAPIExceptionMapper().register(app)

    @app.post("/batches", status_code=status.HTTP_201_CREATED)
    async def add_batch(body: BatchIn, request: Request) -> dict[str, str]:
        await request.app.state.bus.handle(
            commands.CreateBatch(ref=body.ref, sku=body.sku, qty=body.qty, eta=body.eta)
        )
        return {"ref": body.ref}

    @app.post("/allocate", status_code=status.HTTP_202_ACCEPTED)
    async def allocate(body: AllocateIn, request: Request) -> Response:
        await request.app.state.bus.handle(
            commands.Allocate(order_id=body.order_id, sku=body.sku, qty=body.qty)
        )
        return Response(status_code=status.HTTP_202_ACCEPTED)

    @app.get("/allocations/{order_id}", response_model=list[AllocationOut])
    async def allocations_for_order(order_id: str, request: Request) -> list[dict[str, str]]:
        uow = request.app.state.bus.uow
        result = await views.allocations_for_order(order_id, uow)
        if not result and not await views.order_is_known(order_id, uow):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="not found")
        return [dict(row) for row in result]

    return app


def serve() -> None:
    """Console entrypoint: serve :func:`create_app` with uvicorn."""
    import uvicorn

    settings = get_settings()
    # log_config=None keeps uvicorn on the root handler configure_logging installs.
    uvicorn.run(create_app(), host=settings.http_host, port=settings.http_port, log_config=None)


__all__ = ["AllocateIn", "AllocationOut", "BatchIn", "create_app", "serve"]
