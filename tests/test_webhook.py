"""Tests for relayed gateway event handling."""

from fastapi.testclient import TestClient

from event_logger.api.app import create_app
from event_logger.domain.audit import PlainText
from tests.conftest import FakeDiscordClient


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_ban_event_is_logged(container, discord_client: FakeDiscordClient) -> None:
    client = TestClient(create_app(container))

    payload = {
        "t": "GUILD_BAN_ADD",
        "d": {"guild_id": "111", "user": {"id": "42", "username": "alice"}},
    }

    response = client.post("/events", json=payload)

    assert response.status_code == 200
    assert response.json() == {"status": "delivered"}
    assert discord_client.messages == [
        ("5001", PlainText(content="User banned: alice"))
    ]


def test_channel_update_with_old_snapshot(
    container, discord_client: FakeDiscordClient
) -> None:
    client = TestClient(create_app(container))

    payload = {
        "t": "CHANNEL_UPDATE",
        "d": {
            "guild_id": "222",
            "id": "9",
            "name": "announcements",
            "last_message_id": "900",
        },
        "old": {"guild_id": "222", "id": "9", "name": "news", "last_message_id": "1"},
    }

    response = client.post("/events", json=payload)

    assert response.json() == {"status": "delivered"}
    _, message = discord_client.messages[0]
    assert message == PlainText(
        content="name changed:\nOld: `news`\nNew: `announcements`"
    )


def test_unknown_event_is_ignored(container, discord_client: FakeDiscordClient) -> None:
    client = TestClient(create_app(container))

    response = client.post("/events", json={"t": "TYPING_START", "d": {}})

    assert response.json() == {"status": "ignored"}
    assert discord_client.messages == []


def test_unconfigured_guild_is_reported(
    container, discord_client: FakeDiscordClient
) -> None:
    client = TestClient(create_app(container))

    payload = {"t": "GUILD_MEMBER_REMOVE", "d": {"guild_id": "999", "user": "bob"}}

    response = client.post("/events", json=payload)

    assert response.status_code == 200
    assert response.json() == {"status": "not_configured"}
    assert discord_client.messages == []
