"""Tests for scheduler load aggregation."""

import pytest

from src.spokesperson.models import JobStatus
from src.spokesperson.scheduler import derive_job_status, jobs_for_channel, scheduler_hourly_metrics


def test_no_jobs_yields_24_zero_entries():
    metrics = scheduler_hourly_metrics([], "all")

    assert len(metrics) == 24
    assert [slot.hour for slot in metrics] == list(range(24))
    assert all(slot.total == 0 for slot in metrics)


def test_sums_all_jobs(make_job):
    jobs = [make_job(1, load=(2, 1, 0)), make_job(2, "fortune", "Fortune", load=(1, 0, 3))]

    metrics = scheduler_hourly_metrics(jobs)

    assert len(metrics) == 24
    assert metrics[5].success == 3
    assert metrics[5].queued == 1
    assert metrics[5].failed == 3


def test_selects_by_channel_id_or_name(make_job):
    jobs = [make_job(1, load=(2, 0, 0)), make_job(2, "fortune", "Fortune", load=(5, 0, 0))]

    by_id = scheduler_hourly_metrics(jobs, "fortune")
    by_name = scheduler_hourly_metrics(jobs, "Fortune")

    assert by_id[0].success == 5
    assert by_name == by_id


def test_unknown_selector_is_all_zero(make_job):
    metrics = scheduler_hourly_metrics([make_job(1)], "nowhere")

    assert len(metrics) == 24
    assert sum(slot.total for slot in metrics) == 0


def test_hour_labels(make_job):
    metrics = scheduler_hourly_metrics([make_job(1)])

    assert metrics[0].label == "00:00"
    assert metrics[23].label == "23:00"


@pytest.mark.parametrize(
    "latency, expected",
    [
        (3, JobStatus.HEALTHY),
        (14.9, JobStatus.HEALTHY),
        (15, JobStatus.WARNING),
        (24, JobStatus.WARNING),
        (25, JobStatus.CRITICAL),
        (40, JobStatus.CRITICAL),
    ],
)
def test_derive_job_status(latency, expected):
    assert derive_job_status(latency) is expected


def test_jobs_for_channel(make_job):
    jobs = [make_job(1), make_job(2, "fortune", "Fortune")]

    assert jobs_for_channel(jobs, "all") == jobs
    assert [job.id for job in jobs_for_channel(jobs, "fortune")] == [2]
    assert jobs_for_channel(jobs, "missing") == []
