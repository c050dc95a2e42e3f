"""Shutdown actions for servers over the kill threshold."""

import asyncio
from dataclasses import dataclass

from logger import logger
from .errors import ShutdownError
from .services.hetzner import HetznerClient
from .usage import UsageRecord, obfuscate_name


@dataclass
class ActionResult:
    """Outcome of one shutdown attempt."""
    record: UsageRecord
    succeeded: bool


class ActionExecutor:
    """Shuts down servers, one best-effort attempt per server per cycle."""

    def __init__(self, client: HetznerClient, dry_run: bool = False, obfuscate: bool = False):
        self.client = client
        self.dry_run = dry_run
        self.obfuscate = obfuscate

    async def execute(self, candidates: list[UsageRecord]) -> list[ActionResult]:
        """Shut down every candidate concurrently.

        A failure only marks that server as not killed; it is retried on the
        next cycle if it is still over the threshold.
        """
        if not candidates:
            return []

        outcomes = await asyncio.gather(*(self._shutdown(record) for record in candidates))
        return [ActionResult(record=r, succeeded=ok) for r, ok in zip(candidates, outcomes)]

    async def _shutdown(self, record: UsageRecord) -> bool:
        name = obfuscate_name(record.name, self.obfuscate)

        if self.dry_run:
            logger.warning(f"[dry run] Would shut down server {record.id} ({name}) at {record.usage_percent}%")
            return False

        try:
            await self.client.shutdown_server(record.id, record.credential)
        except ShutdownError as e:
            logger.error(f"❌ Failed to shut down server {record.id} ({name}): {e}")
            return False
        except Exception as e:
            logger.error(f"❌ Unexpected error shutting down server {record.id} ({name}): {e}")
            return False

        logger.warning(f"🚨 Shut down server {record.id} ({name}) at {record.usage_percent}% of included traffic")
        return True
