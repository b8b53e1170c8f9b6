"""Unit tests for Redis adapters — no running Redis required."""
from __future__ import annotations

import asyncio
import json
from datetime import date
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from structlog.testing import capture_logs

from allocation.adapters.redis import RedisCommandConsumer, RedisEventPublisher, encode_event
from allocation.adapters.redis.consumer import CHANGE_BATCH_QUANTITY_CHANNEL, decode_change_batch_quantity
from allocation.domain import commands, events
from allocation.kernel.errors import TransportError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


ALLOCATED = events.Allocated(order_id="o1", sku="CHAIR", qty=3, batch_reference="b1")


def _mock_client(**publish_kwargs: Any) -> MagicMock:
    client = MagicMock()
    client.publish = AsyncMock(**publish_kwargs)
    client.aclose = AsyncMock()
    return client


def _pubsub_with(messages: list[dict[str, Any]]) -> MagicMock:
    async def listen() -> Any:
        for message in messages:
            yield message

    pubsub = MagicMock()
    pubsub.subscribe = AsyncMock()
    pubsub.aclose = AsyncMock()
    pubsub.listen = listen
    return pubsub


# ---------------------------------------------------------------------------
# RedisEventPublisher
# ---------------------------------------------------------------------------


class TestEncodeEvent:
    def test_includes_type_tag(self) -> None:
        assert json.loads(encode_event(ALLOCATED)) == {
            "type": "Allocated",
            "order_id": "o1",
            "sku": "CHAIR",
            "qty": 3,
            "batch_reference": "b1",
        }

    def test_dates_are_stringified(self) -> None:
        body = json.loads(encode_event(commands.CreateBatch("b1", "CHAIR", 1, date(2024, 5, 1))))
        assert body["eta"] == "2024-05-01"


class TestRedisEventPublisher:
    def test_publishes_json_on_topic(self) -> None:
        client = _mock_client()
        asyncio.run(RedisEventPublisher(client=client).publish("line_allocated", ALLOCATED))
        client.publish.assert_awaited_once_with("line_allocated", encode_event(ALLOCATED))

    def test_retries_connection_errors(self) -> None:
        client = _mock_client(side_effect=[RedisConnectionError("blip"), 1])
        publisher = RedisEventPublisher(client=client, max_attempts=3, max_wait_seconds=0.01)
        with capture_logs() as logs:
            asyncio.run(publisher.publish("line_allocated", ALLOCATED))
        assert client.publish.await_count == 2
        assert [entry["event"] for entry in logs].count("publish.retrying") == 1

    def test_exhausted_retries_raise_transport_error(self) -> None:
        client = _mock_client(side_effect=RedisConnectionError("down"))
        publisher = RedisEventPublisher(client=client, max_attempts=2, max_wait_seconds=0.01)
        with pytest.raises(TransportError) as excinfo:
            asyncio.run(publisher.publish("line_allocated", ALLOCATED))
        assert excinfo.value.transport == "redis"
        assert isinstance(excinfo.value.cause, RedisConnectionError)
        assert client.publish.await_count == 2

    def test_other_errors_are_not_retried(self) -> None:
        client = _mock_client(side_effect=ValueError("bad payload"))
        with pytest.raises(ValueError):
            asyncio.run(RedisEventPublisher(client=client).publish("t", ALLOCATED))
        assert client.publish.await_count == 1

    def test_close(self) -> None:
        client = _mock_client()
        asyncio.run(RedisEventPublisher(client=client).close())
        client.aclose.assert_awaited_once()


# ---------------------------------------------------------------------------
# RedisCommandConsumer
# ---------------------------------------------------------------------------


class TestDecodeChangeBatchQuantity:
    def test_decodes_str_and_bytes(self) -> None:
        expected = commands.ChangeBatchQuantity(ref="b1", qty=5)
        assert decode_change_batch_quantity('{"batchref": "b1", "qty": 5}') == expected
        assert decode_change_batch_quantity(b'{"batchref": "b1", "qty": "5"}') == expected

    @pytest.mark.parametrize("data", ["not json", '{"qty": 1}', '{"batchref": "b1", "qty": "many"}', "[]"])
    def test_rejects_malformed(self, data: str) -> None:
        with pytest.raises(ValueError):
            decode_change_batch_quantity(data)


class TestRedisCommandConsumer:
    def test_dispatches_command(self) -> None:
        bus = AsyncMock()
        consumer = RedisCommandConsumer(bus, client=MagicMock())
        message = {"type": "message", "channel": b"change_batch_quantity", "data": b'{"batchref": "b1", "qty": 7}'}
        assert asyncio.run(consumer.handle_message(message)) is True
        bus.handle.assert_awaited_once_with(commands.ChangeBatchQuantity(ref="b1", qty=7))

    def test_skips_non_data_messages(self) -> None:
        bus = AsyncMock()
        consumer = RedisCommandConsumer(bus, client=MagicMock())
        assert asyncio.run(consumer.handle_message({"type": "subscribe", "data": 1})) is False
        bus.handle.assert_not_awaited()

    def test_malformed_payload_is_logged_and_dropped(self) -> None:
        bus = AsyncMock()
        consumer = RedisCommandConsumer(bus, client=MagicMock())
        with capture_logs() as logs:
            handled = asyncio.run(consumer.handle_message({"type": "message", "data": b"garbage"}))
        assert handled is False
        bus.handle.assert_not_awaited()
        assert logs[0]["event"] == "consumer.malformed_message"

    def test_run_survives_failing_commands(self) -> None:
        bus = AsyncMock()
        bus.handle.side_effect = [RuntimeError("boom"), None]
        pubsub = _pubsub_with(
            [
                {"type": "message", "data": b'{"batchref": "b1", "qty": 1}'},
                {"type": "message", "data": b'{"batchref": "b2", "qty": 2}'},
            ]
        )
        client = MagicMock()
        client.pubsub.return_value = pubsub
        with capture_logs() as logs:
            asyncio.run(RedisCommandConsumer(bus, client=client).run())

        pubsub.subscribe.assert_awaited_once_with(CHANGE_BATCH_QUANTITY_CHANNEL)
        pubsub.aclose.assert_awaited_once()
        assert bus.handle.await_count == 2
        assert any(entry["event"] == "consumer.command_failed" for entry in logs)
