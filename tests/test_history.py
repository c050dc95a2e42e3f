"""Tests for the startup channel reset."""

from datetime import timedelta

import discord
import pytest

from conftest import forbidden, http_error
from domains.traffic.history import clear_channel_history


def _days_ago(days):
    return discord.utils.utcnow() - timedelta(days=days)


@pytest.mark.asyncio
async def test_recent_messages_bulk_deleted(channel):
    for _ in range(3):
        channel.add_message()

    deleted = await clear_channel_history(channel)

    assert deleted == 3
    assert channel.live_messages() == []
    assert len(channel.bulk_deleted) == 1


@pytest.mark.asyncio
async def test_old_messages_deleted_individually(channel):
    old = channel.add_message(created_at=_days_ago(30))
    recent = channel.add_message()

    await clear_channel_history(channel)

    assert channel.bulk_deleted == [[recent.id]]
    assert old.deleted
    assert channel.live_messages() == []


@pytest.mark.asyncio
async def test_kept_message_survives(channel):
    keep = channel.add_message()
    channel.add_message()

    await clear_channel_history(channel, keep={keep.id})

    assert channel.live_messages() == [keep]


@pytest.mark.asyncio
async def test_more_than_one_batch(channel):
    for _ in range(250):
        channel.add_message()

    deleted = await clear_channel_history(channel)

    assert deleted == 250
    assert len(channel.bulk_deleted) == 3


@pytest.mark.asyncio
async def test_failed_deletes_are_skipped_without_looping(channel):
    stuck = channel.add_message(created_at=_days_ago(30))
    stuck.delete_error = http_error(403)
    channel.add_message()

    deleted = await clear_channel_history(channel)

    assert deleted == 1
    assert channel.live_messages() == [stuck]


@pytest.mark.asyncio
async def test_bulk_delete_failure_gives_up(channel):
    channel.add_message()
    channel.bulk_delete_error = http_error(500)

    assert await clear_channel_history(channel) == 0


@pytest.mark.asyncio
async def test_unreadable_history_skips_reset(channel):
    """Missing Read Message History permission is logged, not raised."""
    kept = channel.add_message()

    async def no_access(limit=100):
        raise forbidden()
        yield  # pragma: no cover

    channel.history = no_access

    assert await clear_channel_history(channel) == 0
    assert channel.live_messages() == [kept]
