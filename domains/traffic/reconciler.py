"""Keeps one live Discord message per report slot.

Each slot moves UNINITIALIZED -> CREATED -> UPDATED -> UPDATED ...: the first
reconcile sends a message, later ones edit it in place. If the message was
deleted behind our back the edit fails with NotFound and a new message is
sent. The summary slot is durable: its message id is written to disk after
every create and restored on startup.
"""

import asyncio

import discord

from logger import logger
from registry import SlotRegistry
from .config import SUMMARY_SLOT
from .message_store import MessageStore


class MessageReconciler:
    """Creates or edits the message behind each report slot."""

    def __init__(
        self,
        channel: discord.abc.Messageable,
        store: MessageStore | None = None,
        registry: SlotRegistry | None = None,
        durable_slots: tuple[str, ...] = (SUMMARY_SLOT,),
    ):
        self.channel = channel
        self.store = store
        self.registry = registry if registry is not None else SlotRegistry()
        self.durable_slots = durable_slots

    async def restore(self) -> discord.Message | None:
        """Re-attach the summary slot to its persisted message, if still live.

        Must run before the first reconcile of the summary slot.
        """
        if self.store is None:
            return None

        message_id = self.store.load()
        if message_id is None:
            logger.info("No persisted summary message - a new one will be created")
            return None

        try:
            message = await self.channel.fetch_message(message_id)
        except discord.NotFound:
            logger.info(f"Persisted summary message {message_id} no longer exists")
            return None
        except discord.HTTPException as e:
            logger.warning(f"Could not fetch persisted summary message {message_id}: {e}")
            return None

        self.registry.register(SUMMARY_SLOT, message)
        logger.info(f"Resuming summary message {message_id}")
        return message

    async def reconcile(self, slot: str, embed: discord.Embed) -> discord.Message:
        """Bring a slot's message in line with ``embed``.

        Raises:
            discord.HTTPException: If sending the new message fails
        """
        message = self.registry.get(slot)

        if message is not None:
            try:
                await message.edit(embed=embed)
                logger.debug(f"Updated message {message.id} for slot '{slot}'")
                return message
            except discord.NotFound:
                logger.warning(f"Message {message.id} for slot '{slot}' was deleted - recreating")
                self.registry.remove(slot)

        # Send and record complete together even if the cycle is cancelled
        return await asyncio.shield(self._create(slot, embed))

    async def _create(self, slot: str, embed: discord.Embed) -> discord.Message:
        message = await self.channel.send(embed=embed)
        self.registry.register(slot, message)
        logger.info(f"Created message {message.id} for slot '{slot}'")

        if slot in self.durable_slots and self.store is not None:
            self.store.save(message.id)

        return message
