"""Redis adapter – RedisEventPublisher (at-least-once pub/sub fan-out)."""
from __future__ import annotations

import json
from typing import Any

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from allocation.kernel.errors import TransportError
from allocation.kernel.messaging import Message, message_name, message_payload
from allocation.observability.logging import get_logger

logger = get_logger(__name__)


def encode_event(event: Message) -> str:
    """JSON body published for *event*: its fields plus a ``type`` tag."""
    body = {"type": message_name(event), **message_payload(event)}
    return json.dumps(body, default=str)


class RedisEventPublisher:
    """Publish events as JSON on a Redis channel named after the topic.

    Connection and timeout errors are retried with exponential back-off;
    the final failure surfaces as :class:`TransportError`.
    """

    def __init__(
        self,
        *,
        client: Any,
        max_attempts: int = 3,
        max_wait_seconds: float = 2.0,
    ) -> None:
        self._client = client
        self._max_attempts = max_attempts
        self._max_wait = max_wait_seconds

    async def publish(self, topic: str, event: Message) -> None:
        body = encode_event(event)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=0.1, max=self._max_wait),
            retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
            before_sleep=self._log_retry,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await self._client.publish(topic, body)
        except RetryError as exc:
            cause = exc.last_attempt.exception()
            raise TransportError("redis", f"Could not publish to {topic!r}", cause=cause) from cause
        logger.debug("event.published", topic=topic, message=message_name(event))

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _log_retry(retry_state: Any) -> None:
        logger.warning(
            "publish.retrying",
            attempt=retry_state.attempt_number,
            error=repr(retry_state.outcome.exception()),
        )


__all__ = ["RedisEventPublisher", "encode_event"]
