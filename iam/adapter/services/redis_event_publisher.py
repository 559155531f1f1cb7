import json
import logging
from typing import Any, Dict
from uuid import uuid4

import redis.asyncio as aioredis

from iam.app.services.event_publisher import SOURCE_SERVICE_IAM, IEventPublisher
from iam.domain.base import utcnow

logger = logging.getLogger(__name__)


def build_envelope(topic: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Generic event envelope shared by every topic"""
    return {
        "eventId": str(uuid4()),
        "topic": topic,
        "sourceService": SOURCE_SERVICE_IAM,
        "timestamp": utcnow().isoformat(),
        "payload": payload,
    }


class RedisEventPublisher(IEventPublisher):
    """Publishes JSON envelopes on redis pub/sub channels named after the topic"""

    def __init__(self, client: aioredis.Redis):
        self.client = client

    async def publish(self, topic: str, payload: Dict[str, Any]) -> None:
        envelope = build_envelope(topic, payload)
        receivers = await self.client.publish(topic, json.dumps(envelope, default=str))
        logger.debug("Published %s event %s to %d receivers", topic, envelope["eventId"], receivers)
