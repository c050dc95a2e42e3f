"""
Persistent summary message pointer - survives bot restarts.
Stores: the Discord message id of the summary report as {"messageId": "..."}.
"""

import json
from pathlib import Path
from typing import Optional

from logger import logger
from .errors import PersistenceError


class MessageStore:
    """JSON file holding the summary message id."""

    def __init__(self, path: Path, seeded_id: Optional[int] = None):
        self.path = Path(path)
        self.seeded_id = seeded_id

    def _read(self) -> Optional[int]:
        """Read the stored id, raising PersistenceError on bad data."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            message_id = data.get("messageId")
            return int(message_id) if message_id else None
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise PersistenceError(f"Unreadable message pointer {self.path}: {e}") from e

    def load(self) -> Optional[int]:
        """Get the summary message id, falling back to the pre-seeded id."""
        try:
            message_id = self._read()
        except PersistenceError as e:
            logger.warning(f"{e} - ignoring it")
            message_id = None

        if message_id is None and self.seeded_id:
            logger.info(f"Using pre-seeded summary message id {self.seeded_id}")
            return self.seeded_id
        return message_id

    def save(self, message_id: int):
        """Persist the summary message id (logs and continues on failure)."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"messageId": str(message_id)}, indent=2), encoding="utf-8"
            )
        except OSError as e:
            logger.error(f"Failed to persist summary message id {message_id} to {self.path}: {e}")
