"""Traffic monitor - one check cycle from fetch to Discord report."""

from dataclasses import dataclass, field

import discord

from logger import logger
from .actions import ActionExecutor, ActionResult
from .config import SUMMARY_SLOT, TrafficSettings
from .history import clear_channel_history
from .reconciler import MessageReconciler
from .report import compose
from .services.hetzner import HetznerClient
from .usage import Bucket, UsageRecord, classify


@dataclass
class CycleResult:
    """What happened during one check cycle."""
    records: list[UsageRecord] = field(default_factory=list)
    results: list[ActionResult] = field(default_factory=list)
    updated_slots: list[str] = field(default_factory=list)
    failed_slots: list[str] = field(default_factory=list)

    @property
    def killed(self) -> list[UsageRecord]:
        return [r.record for r in self.results if r.succeeded]

    def summary_line(self) -> str:
        notify = sum(1 for r in self.records if r.bucket is Bucket.NOTIFY)
        over_kill = sum(1 for r in self.records if r.bucket is Bucket.KILL)
        return (
            f"{len(self.records)} servers, {notify} over notify, {over_kill} over kill, "
            f"{len(self.killed)} killed, {len(self.updated_slots)} slots updated"
        )


class TrafficMonitor:
    """Runs traffic check cycles against one report channel."""

    def __init__(
        self,
        settings: TrafficSettings,
        client: HetznerClient,
        reconciler: MessageReconciler,
        executor: ActionExecutor | None = None,
    ):
        self.settings = settings
        self.client = client
        self.reconciler = reconciler
        self.executor = executor or ActionExecutor(
            client, dry_run=settings.dry_run, obfuscate=settings.obfuscate_names
        )
        self._started = False

    async def startup(self):
        """Restore the summary message and reset the channel, once per process."""
        if self._started:
            return
        self._started = True

        if self.settings.resume_summary_message:
            await self.reconciler.restore()

        if self.settings.clear_channel_on_startup:
            await clear_channel_history(
                self.reconciler.channel, keep=self.reconciler.registry.message_ids()
            )

    async def check_and_update(self) -> CycleResult:
        """Run one cycle: fetch, classify, act, compose, reconcile."""
        settings = self.settings
        snapshots = await self.client.list_all_servers(settings.api_tokens)

        records = [
            classify(s, settings.threshold_notify, settings.threshold_kill)
            for s in snapshots
        ]
        candidates = [r for r in records if r.bucket is Bucket.KILL]
        results = await self.executor.execute(candidates)

        report = compose(
            records,
            results,
            send_always=settings.send_always,
            per_server=settings.per_server_embeds,
            obfuscate=settings.obfuscate_names,
            unit=settings.display_unit,
        )

        cycle = CycleResult(records=records, results=results)

        payloads = list(report.server_embeds)
        if report.summary is not None:
            payloads.append((SUMMARY_SLOT, report.summary))

        for slot, embed in payloads:
            try:
                await self.reconciler.reconcile(slot, embed)
                cycle.updated_slots.append(slot)
            except discord.HTTPException as e:
                logger.error(f"Failed to update slot '{slot}': {e}")
                cycle.failed_slots.append(slot)

        logger.info(f"Traffic check complete: {cycle.summary_line()}")
        return cycle
