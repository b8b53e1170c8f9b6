"""Redis adapter – RedisCommandConsumer: pub/sub channel → bus commands."""
from __future__ import annotations

import asyncio
import json
from typing import Any

from allocation.application.messagebus import MessageBus
from allocation.config import get_settings
from allocation.domain import commands
from allocation.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)

CHANGE_BATCH_QUANTITY_CHANNEL = "change_batch_quantity"


def decode_change_batch_quantity(data: bytes | str) -> commands.ChangeBatchQuantity:
    """Decode ``{"batchref": ..., "qty": ...}``; raises ``ValueError`` on bad input."""
    try:
        payload = json.loads(data)
        return commands.ChangeBatchQuantity(ref=str(payload["batchref"]), qty=int(payload["qty"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed change_batch_quantity payload: {data!r}") from exc


class RedisCommandConsumer:
    """Subscribe to external channels and feed the decoded commands to the bus.

    *client* is a ``redis.asyncio`` client built by the composition root.
    """

    def __init__(self, bus: MessageBus, *, client: Any) -> None:
        self._bus = bus
        self._client = client

    async def handle_message(self, message: dict[str, Any]) -> bool:
        """Handle one pub/sub message; returns ``False`` when it was skipped."""
        if message.get("type") != "message":
            return False
        try:
            cmd = decode_change_batch_quantity(message["data"])
        except ValueError as exc:
            logger.warning("consumer.malformed_message", channel=message.get("channel"), error=str(exc))
            return False
        logger.info("consumer.command_received", command=type(cmd).__name__, ref=cmd.ref, qty=cmd.qty)
        await self._bus.handle(cmd)
        return True

    async def run(self) -> None:
        """Listen forever on :data:`CHANGE_BATCH_QUANTITY_CHANNEL`."""
        pubsub = self._client.pubsub(ignore_subscribe_messages=True)
        await pubsub.subscribe(CHANGE_BATCH_QUANTITY_CHANNEL)
        logger.info("consumer.started", channel=CHANGE_BATCH_QUANTITY_CHANNEL)
        try:
            async for message in pubsub.listen():
                try:
                    await self.handle_message(message)
                except Exception:
                    logger.exception("consumer.command_failed", channel=CHANGE_BATCH_QUANTITY_CHANNEL)
        finally:
            await pubsub.aclose()


async def main() -> None:
    """Entrypoint: bootstrap a production bus and consume forever."""
    from allocation.application.bootstrap import bootstrap_command_consumer

    configure_logging(get_settings().log_level)
    await bootstrap_command_consumer().run()


def run() -> None:
    asyncio.run(main())


__all__ = ["CHANGE_BATCH_QUANTITY_CHANNEL", "RedisCommandConsumer", "decode_change_batch_quantity", "main", "run"]
