"""Traffic check scheduled job.

Runs every REFRESH_TIME_IN_MINUTES to check Hetzner server traffic,
shut down servers over the kill threshold and refresh the report channel.
"""

import asyncio
from datetime import datetime

from apscheduler.job import Job
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from logger import logger
from domains.traffic import TrafficMonitor

JOB_ID = "hetzner_traffic_check"


async def traffic_check(monitor: TrafficMonitor):
    """Run one cycle, never letting an error escape into the scheduler."""
    try:
        await asyncio.wait_for(
            monitor.check_and_update(), timeout=monitor.settings.cycle_timeout
        )
    except asyncio.TimeoutError:
        logger.error(f"Traffic check timed out after {monitor.settings.cycle_timeout}s")
    except Exception as e:
        logger.exception(f"Traffic check failed: {e}")


def register_traffic_check(scheduler: AsyncIOScheduler, monitor: TrafficMonitor) -> Job:
    """Register the traffic check with the scheduler.

    The first run fires immediately. ``max_instances=1`` keeps cycles from
    overlapping. Returns the job, which can be cancelled with ``job.remove()``.
    """
    minutes = monitor.settings.refresh_minutes
    job = scheduler.add_job(
        traffic_check,
        'interval',
        args=[monitor],
        minutes=minutes,
        next_run_time=datetime.now(),
        max_instances=1,
        coalesce=True,
        id=JOB_ID,
        replace_existing=True,
    )
    logger.info(f"Registered traffic check job (every {minutes:g} mins)")
    return job
