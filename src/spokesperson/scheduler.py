"""Scheduler load aggregation."""

from __future__ import annotations

from typing import List, Sequence

from .models import ALL, HOURS_PER_DAY, HourlyMetric, JobStatus, ScheduleJob

HEALTHY_LATENCY_LIMIT = 15
WARNING_LATENCY_LIMIT = 25


def derive_job_status(latency_minutes: float) -> JobStatus:
    """Classify a job by latency: under 15 minutes healthy, under 25 warning."""
    if latency_minutes < HEALTHY_LATENCY_LIMIT:
        return JobStatus.HEALTHY
    if latency_minutes < WARNING_LATENCY_LIMIT:
        return JobStatus.WARNING
    return JobStatus.CRITICAL


def _job_matches(job: ScheduleJob, channel_selector: str) -> bool:
    if channel_selector == ALL:
        return True
    return job.channel_id == channel_selector or job.channel == channel_selector


def jobs_for_channel(jobs: Sequence[ScheduleJob], channel_selector: str = ALL) -> List[ScheduleJob]:
    """Return the jobs attached to a channel, matched by id or display name."""
    return [job for job in jobs if _job_matches(job, channel_selector)]


def scheduler_hourly_metrics(
    jobs: Sequence[ScheduleJob],
    channel_selector: str = ALL,
) -> List[HourlyMetric]:
    """Sum the hourly load of the selected jobs into 24 hour-of-day slots.

    Args:
        jobs: Schedule jobs to aggregate
        channel_selector: ``"all"`` or a channel id or display name

    Returns:
        Exactly 24 entries ordered by hour, zero-filled when nothing matches
    """
    success = [0] * HOURS_PER_DAY
    queued = [0] * HOURS_PER_DAY
    failed = [0] * HOURS_PER_DAY

    for job in jobs_for_channel(jobs, channel_selector):
        for slot in job.hourly_load:
            success[slot.hour] += slot.success
            queued[slot.hour] += slot.queued
            failed[slot.hour] += slot.failed

    return [
        HourlyMetric(hour=hour, success=success[hour], queued=queued[hour], failed=failed[hour])
        for hour in range(HOURS_PER_DAY)
    ]
