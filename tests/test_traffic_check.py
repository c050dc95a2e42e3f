"""Tests for the scheduled traffic check job."""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from jobs.traffic_check import JOB_ID, register_traffic_check, traffic_check


def _monitor(settings, check=None):
    monitor = Mock()
    monitor.settings = settings
    monitor.check_and_update = check or AsyncMock()
    return monitor


def test_registration(settings):
    scheduler = AsyncIOScheduler()
    settings.refresh_minutes = 10

    job = register_traffic_check(scheduler, _monitor(settings))

    assert job.id == JOB_ID
    assert [j.id for j in scheduler.get_jobs()] == [JOB_ID]
    assert job.trigger.interval == timedelta(minutes=10)
    assert job.max_instances == 1


def test_job_handle_cancels(settings):
    scheduler = AsyncIOScheduler()
    job = register_traffic_check(scheduler, _monitor(settings))

    job.remove()

    assert scheduler.get_jobs() == []


@pytest.mark.asyncio
async def test_traffic_check_swallows_cycle_errors(settings):
    monitor = _monitor(settings, AsyncMock(side_effect=RuntimeError("boom")))

    await traffic_check(monitor)

    monitor.check_and_update.assert_awaited_once()


@pytest.mark.asyncio
async def test_traffic_check_times_out(settings):
    settings.cycle_timeout = 0.01

    async def hang():
        await asyncio.sleep(5)

    await traffic_check(_monitor(settings, hang))
