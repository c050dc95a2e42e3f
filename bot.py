"""Hetzner Traffic Guard - Main Bot.

Watches outbound traffic of Hetzner Cloud servers, shuts down servers that
cross the kill threshold and keeps a usage report up to date in a Discord
channel.
"""

import sys

import discord
from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from logger import logger
from config import DISCORD_TOKEN
from domains.traffic import TrafficMonitor, TrafficSettings, load_settings
from domains.traffic.message_store import MessageStore
from domains.traffic.reconciler import MessageReconciler
from domains.traffic.services import HetznerClient
from jobs import register_traffic_check


class TrafficBot(discord.Client):
    """Discord client that owns the scheduler and the traffic monitor."""

    def __init__(self, settings: TrafficSettings):
        # Guilds + guild messages are all we need to post and clean up reports
        super().__init__(intents=discord.Intents.default())
        self.settings = settings
        self.scheduler = AsyncIOScheduler()
        self.monitor: TrafficMonitor | None = None
        self.traffic_job: Job | None = None

    async def on_ready(self):
        """Called when bot is connected and ready."""
        logger.info(f"✅ Logged in as {self.user}")

        # on_ready fires again after reconnects
        if self.monitor is not None:
            logger.info("Reconnected - traffic monitor already running")
            return

        channel_id = self.settings.channel_id
        channel = self.get_channel(channel_id)
        if not channel:
            try:
                channel = await self.fetch_channel(channel_id)
            except discord.HTTPException as e:
                logger.error(f"Could not find or fetch report channel {channel_id}: {e}")
                await self.close()
                return

        if not hasattr(channel, "send") or not hasattr(channel, "history"):
            logger.error(f"Channel {channel_id} is not a text channel")
            await self.close()
            return
        logger.info(f"Found channel: {getattr(channel, 'name', channel_id)}")

        reconciler = MessageReconciler(
            channel,
            store=MessageStore(self.settings.data_file, self.settings.seeded_message_id),
        )
        client = HetznerClient(self.settings.api_url, self.settings.api_timeout)
        self.monitor = TrafficMonitor(self.settings, client, reconciler)

        # The kill switch must run even if the channel reset fails
        try:
            await self.monitor.startup()
        except Exception as e:
            logger.error(f"Traffic monitor startup failed, continuing with checks: {e}")

        self.traffic_job = register_traffic_check(self.scheduler, self.monitor)
        self.scheduler.start()
        logger.info(f"Scheduler started with {len(self.scheduler.get_jobs())} jobs")

    async def close(self):
        """Cancel the traffic job before disconnecting."""
        if self.traffic_job is not None:
            self.traffic_job.remove()
            self.traffic_job = None
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        await super().close()


def main():
    """Entry point."""
    if not DISCORD_TOKEN:
        logger.error("DISCORD_TOKEN not set")
        sys.exit(1)

    try:
        settings = load_settings()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if not settings.api_tokens:
        logger.warning("HETZNER_API_TOKEN not set - no servers will be checked")

    logger.info(
        f"Starting Hetzner Traffic Guard (notify {settings.threshold_notify:g}%, "
        f"kill {settings.threshold_kill:g}%, {len(settings.api_tokens)} tokens)"
    )

    bot = TrafficBot(settings)
    try:
        bot.run(DISCORD_TOKEN, log_handler=None)
    except discord.LoginFailure as e:
        logger.error(f"Discord login failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
