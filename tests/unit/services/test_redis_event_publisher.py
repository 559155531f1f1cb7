import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.adapter.services.redis_event_publisher import RedisEventPublisher, build_envelope


def test_envelope_shape():
    envelope = build_envelope("user.created", {"userId": "u-1"})

    assert envelope["topic"] == "user.created"
    assert envelope["sourceService"] == "iam_service"
    assert envelope["payload"] == {"userId": "u-1"}
    assert envelope["eventId"]
    assert envelope["timestamp"].endswith("+00:00")


def test_event_ids_are_unique():
    first = build_envelope("user.login", {})
    second = build_envelope("user.login", {})

    assert first["eventId"] != second["eventId"]


@pytest.mark.asyncio
async def test_publish_sends_json_on_topic_channel():
    client = MagicMock()
    client.publish = AsyncMock(return_value=1)
    publisher = RedisEventPublisher(client)

    await publisher.publish("workspace.created", {"workspaceId": "w-1", "slug": "acme"})

    channel, message = client.publish.await_args.args
    assert channel == "workspace.created"
    body = json.loads(message)
    assert body["topic"] == "workspace.created"
    assert body["payload"]["slug"] == "acme"


@pytest.mark.asyncio
async def test_publish_propagates_errors():
    client = MagicMock()
    client.publish = AsyncMock(side_effect=ConnectionError("down"))
    publisher = RedisEventPublisher(client)

    with pytest.raises(ConnectionError):
        await publisher.publish("user.login", {"userId": "u-1"})
