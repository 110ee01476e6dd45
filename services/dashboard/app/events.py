"""
Dashboard Service — 注文イベント

注文の状態変更を Redis Pub/Sub の order_events チャネルへ通知する。
イベントは過去形で命名し、不変(immutable)として扱う。
"""

import json
import logging
from datetime import datetime, timezone

import redis.asyncio as aioredis
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

ORDER_EVENTS_CHANNEL = "order_events"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatusUpdated(BaseModel):
    """注文ステータスが更新された"""
    model_config = ConfigDict(frozen=True)

    order_id: int
    previous_status: str
    status: str
    timestamp: datetime = Field(default_factory=_now)


class OrderDeleted(BaseModel):
    """注文が削除された"""
    model_config = ConfigDict(frozen=True)

    order_id: int
    timestamp: datetime = Field(default_factory=_now)


class EventPublisher:
    """イベントを {"event_type", "data"} の JSON にして Pub/Sub へ発行する。"""

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str = ORDER_EVENTS_CHANNEL,
    ) -> None:
        self.redis = redis
        self.channel = channel

    async def publish(self, event: BaseModel) -> None:
        event_type = type(event).__name__
        await self.redis.publish(self.channel, json.dumps({
            "event_type": event_type,
            "data": event.model_dump(mode="json"),
        }))
        logger.debug("Published %s to %s", event_type, self.channel)
