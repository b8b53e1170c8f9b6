"""Redis adapter – event publisher and command consumer."""
from allocation.adapters.redis.consumer import RedisCommandConsumer
from allocation.adapters.redis.publisher import RedisEventPublisher, encode_event

__all__ = ["RedisCommandConsumer", "RedisEventPublisher", "encode_event"]
