"""Tests for the event dispatcher."""

import asyncio

from event_logger.containers import AppContainer
from event_logger.domain.audit import FileAttachment, PlainText, RichBlock
from event_logger.domain.records import Modified, PartialRecord
from event_logger.services.differ import RecordDiffer
from event_logger.services.dispatcher import DispatchStatus
from tests.conftest import FakeDiscordClient


def test_ban_is_sent_as_plain_text(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    result = asyncio.run(
        container.dispatcher.handle("GUILD_BAN_ADD", "111", {"user": "alice"}, None)
    )

    assert result.status is DispatchStatus.DELIVERED
    assert result.ok
    assert discord_client.messages == [
        ("5001", PlainText(content="User banned: alice"))
    ]


def test_role_update_reports_modified_color(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    new_role = {"name": "Mod", "color": 1}
    old_role = {"name": "Mod", "color": 2}

    changes = RecordDiffer().diff(new_role, old_role)
    result = asyncio.run(
        container.dispatcher.handle("GUILD_ROLE_UPDATE", "222", new_role, old_role)
    )

    assert changes == {"color": Modified(path="color", old=2, new=1)}
    assert result.status is DispatchStatus.DELIVERED
    channel_id, payload = discord_client.messages[0]
    assert channel_id == "5002"
    assert isinstance(payload, PlainText)
    assert payload.content


def test_unregistered_tenant_is_not_configured(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    result = asyncio.run(
        container.dispatcher.handle(
            "CHANNEL_UPDATE", "999", {"name": "a"}, {"name": "b"}
        )
    )

    assert result.status is DispatchStatus.NOT_CONFIGURED
    assert not result.ok
    assert discord_client.messages == []


def test_empty_body_is_nothing_to_log(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    result = asyncio.run(container.dispatcher.handle("CHANNEL_UPDATE", "111", {}))

    assert result.status is DispatchStatus.NOTHING_TO_LOG
    assert result.ok
    assert result.destination_id == "5001"
    assert discord_client.messages == []


def test_whitespace_body_is_delivered(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    result = asyncio.run(container.dispatcher.handle("MESSAGE_DELETE", "111", "   "))

    assert result.status is DispatchStatus.DELIVERED
    assert discord_client.messages == [("5001", PlainText(content="   "))]


def test_missing_channel_is_destination_unavailable(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    discord_client.missing_channels.add("5001")

    result = asyncio.run(
        container.dispatcher.handle("MESSAGE_DELETE", "111", "Message 1 deleted")
    )

    assert result.status is DispatchStatus.DESTINATION_UNAVAILABLE
    assert container.registry.resolve("111") == "5001"


def test_send_failure_is_surfaced(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    discord_client.fail_with = "429 Too Many Requests"

    result = asyncio.run(
        container.dispatcher.handle("MESSAGE_DELETE", "111", "Message 1 deleted")
    )

    assert result.status is DispatchStatus.SEND_FAILED
    assert result.detail == "429 Too Many Requests"
    assert isinstance(result.payload, PlainText)


def test_long_bodies_use_embed_then_file(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    asyncio.run(container.dispatcher.handle("CHANNEL_UPDATE", "111", "x" * 3000))
    asyncio.run(container.dispatcher.handle("CHANNEL_UPDATE", "111", "x" * 5000))

    embed = discord_client.messages[0][1]
    attachment = discord_client.messages[1][1]
    assert isinstance(embed, RichBlock)
    assert embed.color == container.settings.embed_color
    assert embed.footer == container.settings.embed_footer
    assert attachment == FileAttachment(
        filename="CHANNEL_UPDATE.txt", content="x" * 5000
    )


def test_partial_ban_record(
    container: AppContainer, discord_client: FakeDiscordClient
) -> None:
    record = PartialRecord({"user": {"id": "9", "username": "carol"}})

    asyncio.run(container.dispatcher.handle("GUILD_BAN_REMOVE", "111", record))

    assert discord_client.messages[0][1] == PlainText(content="User unbanned: carol")
