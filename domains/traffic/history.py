"""Channel reset - removes stale reports left by a previous run."""

from datetime import timedelta

import discord

from logger import logger
from .config import BULK_DELETE_MAX_AGE_DAYS, HISTORY_BATCH_SIZE


async def clear_channel_history(channel, keep: set[int] | None = None) -> int:
    """Delete every message in the channel except those in ``keep``.

    Messages younger than Discord's bulk-delete window go in one bulk
    request per batch; older ones are deleted one by one. Failures are
    logged and skipped. Stops once a pass deletes nothing.

    Returns:
        Number of messages deleted
    """
    keep = keep or set()
    deleted = 0

    while True:
        cutoff = discord.utils.utcnow() - timedelta(days=BULK_DELETE_MAX_AGE_DAYS)
        try:
            messages = [
                msg async for msg in channel.history(limit=HISTORY_BATCH_SIZE)
                if msg.id not in keep
            ]
        except discord.HTTPException as e:
            logger.error(f"Could not read channel history, skipping reset: {e}")
            break
        if not messages:
            break

        recent = [msg for msg in messages if msg.created_at > cutoff]
        old = [msg for msg in messages if msg.created_at <= cutoff]
        deleted_this_pass = 0

        if recent:
            try:
                await channel.delete_messages(recent)
                deleted_this_pass += len(recent)
            except discord.HTTPException as e:
                logger.error(f"Bulk delete of {len(recent)} messages failed: {e}")

        for msg in old:
            try:
                await msg.delete()
                deleted_this_pass += 1
            except discord.HTTPException as e:
                logger.error(f"Failed to delete message {msg.id}: {e}")

        deleted += deleted_this_pass
        if deleted_this_pass == 0:
            logger.warning(f"{len(messages)} messages could not be deleted - giving up")
            break

    logger.info(f"Cleared {deleted} messages from channel history")
    return deleted
