"""Pytest configuration and fixtures."""

import os
import sys
from itertools import count
from unittest.mock import AsyncMock, Mock

import discord
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domains.traffic.config import TrafficSettings  # noqa: E402

GIB = 1024 ** 3


def not_found() -> discord.NotFound:
    """Build the error discord.py raises for a deleted message."""
    return discord.NotFound(Mock(status=404, reason="Not Found"), "Unknown Message")


def forbidden() -> discord.Forbidden:
    """Build the error discord.py raises when a permission is missing."""
    return discord.Forbidden(Mock(status=403, reason="Forbidden"), "Missing Access")


def http_error(status: int = 500) -> discord.HTTPException:
    return discord.HTTPException(Mock(status=status, reason="Server Error"), "Something broke")


class MockMessage:
    """Mock Discord message that records edits."""

    def __init__(self, channel, message_id: int, embed=None, created_at=None):
        self.channel = channel
        self.id = message_id
        self.embed = embed
        self.created_at = created_at or discord.utils.utcnow()
        self.edits = []
        self.deleted = False
        self.delete_error = None

    async def edit(self, embed=None):
        if self.deleted:
            raise not_found()
        self.edits.append(embed)
        self.embed = embed
        return self

    async def delete(self):
        if self.delete_error:
            raise self.delete_error
        self.deleted = True
        self.channel.messages.pop(self.id, None)


class MockChannel:
    """Mock Discord text channel keeping messages in memory."""

    def __init__(self, start_id: int = 1000):
        self.id = 42
        self.name = "hetzner-usage"
        self.messages: dict[int, MockMessage] = {}
        self.sent = []
        self.bulk_deleted = []
        self.bulk_delete_error = None
        self._ids = count(start_id)

    def add_message(self, created_at=None) -> MockMessage:
        message = MockMessage(self, next(self._ids), created_at=created_at)
        self.messages[message.id] = message
        return message

    async def send(self, embed=None):
        message = self.add_message()
        message.embed = embed
        self.sent.append(message)
        return message

    async def fetch_message(self, message_id: int):
        if message_id not in self.messages:
            raise not_found()
        return self.messages[message_id]

    async def history(self, limit: int = 100):
        newest_first = sorted(self.messages.values(), key=lambda m: m.id, reverse=True)
        for message in newest_first[:limit]:
            yield message

    async def delete_messages(self, messages):
        if self.bulk_delete_error:
            raise self.bulk_delete_error
        self.bulk_deleted.append([m.id for m in messages])
        for message in messages:
            message.deleted = True
            self.messages.pop(message.id, None)

    def live_messages(self) -> list[MockMessage]:
        return list(self.messages.values())


@pytest.fixture
def channel():
    """In-memory Discord channel."""
    return MockChannel()


@pytest.fixture
def settings(tmp_path):
    """Traffic settings pointing at a temp data file."""
    return TrafficSettings(
        channel_id=42,
        api_tokens=["token-a"],
        threshold_notify=50,
        threshold_kill=90,
        data_file=tmp_path / "data.json",
    )


@pytest.fixture
def mock_hetzner_client():
    """Hetzner client with async methods mocked out."""
    client = Mock()
    client.list_all_servers = AsyncMock(return_value=[])
    client.shutdown_server = AsyncMock(return_value={"id": 1, "status": "running"})
    return client
