"""Unit tests for the FastAPI adapter, backed by a bus wired to fakes."""
from __future__ import annotations

import asyncio

import pytest
import uvicorn
from fastapi import FastAPI
from fastapi.testclient import TestClient

from allocation.adapters.fastapi import FastAPIExceptionMapper, create_app
from allocation.adapters.fastapi import app as app_module
from allocation.application.messagebus import MessageBus
from allocation.domain import commands
from allocation.kernel.errors import (
    ApplicationError,
    InfrastructureError,
    InvalidSkuError,
    OutOfStockError,
    TransportError,
    UnknownMessageError,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def client_for(bus: MessageBus) -> TestClient:
    return TestClient(create_app(bus))


def post_batch(client: TestClient, ref: str, sku: str, qty: int, eta: str | None = None) -> None:
    resp = client.post("/batches", json={"ref": ref, "sku": sku, "qty": qty, "eta": eta})
    assert resp.status_code == 201, resp.text


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


class TestRoutes:
    def test_add_batch_returns_created(self, fake_bus: MessageBus) -> None:
        resp = client_for(fake_bus).post("/batches", json={"ref": "b1", "sku": "CHAIR", "qty": 10})
        assert resp.status_code == 201
        assert resp.json() == {"ref": "b1"}

    def test_add_batch_parses_eta(self, fake_bus: MessageBus) -> None:
        client = client_for(fake_bus)
        post_batch(client, "b-late", "CHAIR", 10, "2011-01-02")
        post_batch(client, "b-now", "CHAIR", 10)
        assert client.post("/allocate", json={"order_id": "o1", "sku": "CHAIR", "qty": 1}).status_code == 202
        assert client.get("/allocations/o1").json() == [{"sku": "CHAIR", "batch_reference": "b-now"}]

    def test_happy_path_returns_202_and_is_readable(self, fake_bus: MessageBus) -> None:
        client = client_for(fake_bus)
        post_batch(client, "batch-001", "CHAIR", 100)

        resp = client.post("/allocate", json={"order_id": "order-1", "sku": "CHAIR", "qty": 10})
        assert resp.status_code == 202
        assert resp.content == b""

        resp = client.get("/allocations/order-1")
        assert resp.status_code == 200
        assert resp.json() == [{"sku": "CHAIR", "batch_reference": "batch-001"}]

    def test_unknown_order_returns_404(self, fake_bus: MessageBus) -> None:
        assert client_for(fake_bus).get("/allocations/nobody").status_code == 404

    def test_fully_deallocated_order_returns_empty_list(self, fake_bus: MessageBus) -> None:
        client = client_for(fake_bus)
        post_batch(client, "batch-001", "CHAIR", 10)
        assert client.post("/allocate", json={"order_id": "order-1", "sku": "CHAIR", "qty": 2}).status_code == 202
        asyncio.run(fake_bus.handle(commands.ChangeBatchQuantity("batch-001", 1)))

        resp = client.get("/allocations/order-1")
        assert resp.status_code == 200
        assert resp.json() == []
        assert client.get("/allocations/never-seen").status_code == 404

    def test_invalid_sku_returns_400(self, fake_bus: MessageBus) -> None:
        resp = client_for(fake_bus).post("/allocate", json={"order_id": "o1", "sku": "NOPE", "qty": 1})
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "invalid_sku"
        assert body["message"] == "Invalid sku NOPE"

    def test_out_of_stock_returns_409(self, fake_bus: MessageBus) -> None:
        client = client_for(fake_bus)
        post_batch(client, "b1", "CHAIR", 5)
        resp = client.post("/allocate", json={"order_id": "o1", "sku": "CHAIR", "qty": 6})
        assert resp.status_code == 409
        assert resp.json()["code"] == "out_of_stock"

    def test_malformed_body_returns_422(self, fake_bus: MessageBus) -> None:
        resp = client_for(fake_bus).post("/allocate", json={"order_id": "o1"})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# FastAPIExceptionMapper
# ---------------------------------------------------------------------------


class TestFastAPIExceptionMapper:
    def test_status_for(self) -> None:
        mapper = FastAPIExceptionMapper()
        assert mapper.status_for(InvalidSkuError("X")) == 400
        assert mapper.status_for(OutOfStockError("X")) == 409
        assert mapper.status_for(TransportError("redis")) == 503
        assert mapper.status_for(UnknownMessageError(object())) == 500
        assert mapper.status_for(RuntimeError()) == 500

    def test_infrastructure_error_returns_503(self) -> None:
        app = FastAPI()
        FastAPIExceptionMapper().register(app)

        @app.get("/boom")
        async def boom() -> None:
            raise TransportError("smtp", "mail server unreachable")

        resp = TestClient(app).get("/boom")
        assert resp.status_code == 503
        assert resp.json()["code"] == "transport_error"

    def test_application_error_returns_500(self) -> None:
        app = FastAPI()
        FastAPIExceptionMapper().register(app)

        @app.get("/boom")
        async def boom() -> None:
            raise ApplicationError("wiring broke")

        resp = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert resp.status_code == 500
        assert resp.json()["code"] == "application_error"

    def test_mapping_covers_infrastructure(self) -> None:
        assert FastAPIExceptionMapper().status_for(InfrastructureError("down")) == 503


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


class TestServe:
    def test_runs_production_app_on_configured_address(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOCATION_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        monkeypatch.setenv("ALLOCATION_HTTP_HOST", "0.0.0.0")
        monkeypatch.setenv("ALLOCATION_HTTP_PORT", "9001")
        levels: list[str] = []
        calls: list[tuple] = []
        monkeypatch.setattr(app_module, "configure_logging", levels.append)
        monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

        app_module.serve()

        assert levels == ["INFO"]
        [(app, kwargs)] = calls
        assert isinstance(app, FastAPI)
        assert kwargs == {"host": "0.0.0.0", "port": 9001, "log_config": None}
