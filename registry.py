"""Slot registry - maps report slots to their live Discord messages."""

import discord


class SlotRegistry:
    """Tracks at most one live message per report slot."""

    def __init__(self):
        self._messages: dict[str, discord.Message] = {}  # slot → message

    def get(self, slot: str) -> discord.Message | None:
        """Get the live message for a slot."""
        return self._messages.get(slot)

    def register(self, slot: str, message: discord.Message) -> None:
        """Record the live message for a slot."""
        self._messages[slot] = message

    def remove(self, slot: str) -> None:
        """Forget a slot's message (e.g. it was deleted)."""
        self._messages.pop(slot, None)

    def message_ids(self) -> set[int]:
        """IDs of all tracked messages."""
        return {message.id for message in self._messages.values()}

    def slots(self) -> list[str]:
        """Get all populated slots."""
        return list(self._messages)

    def __contains__(self, slot: str) -> bool:
        return slot in self._messages

    def __len__(self) -> int:
        return len(self._messages)
