"""Filtering, summaries and paging text for the jobs of a workflow."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

ALL_STATUSES = "All"
ALL_DURATIONS = "All durations"

STATUS_OPTIONS = (ALL_STATUSES, "success", "running", "failed", "pending", "blocked")
DURATION_OPTIONS = (
    ALL_DURATIONS,
    "Quick (< 1min)",
    "Short (1-5min)",
    "Medium (5-15min)",
    "Long (15-30min)",
    "Very Long (>30min)",
)

PREFETCH_AHEAD = 3
PREFETCH_BEHIND = 3

# Raw job statuses grouped under the filter name they belong to.
_STATUS_GROUPS: dict[str, frozenset[str]] = {
    "success": frozenset({"success", "passed", "fixed", "successful"}),
    "running": frozenset({"running", "in_progress", "in-progress"}),
    "failed": frozenset({"failed", "error", "failure"}),
    "pending": frozenset({"pending", "queued"}),
    "blocked": frozenset({"blocked", "waiting"}),
}

# Half-open duration windows in seconds; None means unbounded.
_DURATION_WINDOWS: dict[str, tuple[int, int | None]] = {
    "Quick (< 1min)": (0, 60),
    "Short (1-5min)": (60, 300),
    "Medium (5-15min)": (300, 900),
    "Long (15-30min)": (900, 1800),
    "Very Long (>30min)": (1800, None),
}

_STATUS_MESSAGES = {
    "success": "Completed successfully",
    "failed": "Connection timeout",
    "running": "In progress...",
    "blocked": "Waiting for dependencies",
    "pending": "Queued",
}


@dataclass
class JobRecord:
    """A job of a workflow as shown in the jobs table."""

    id: str
    name: str
    status: str
    job_number: int
    workflow_id: str = ""
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    duration: int | None = None
    executor_type: str = "docker"


def _status_group(status: str) -> str | None:
    for group, members in _STATUS_GROUPS.items():
        if status in members:
            return group
    return None


def matches_status(status: str, status_filter: str) -> bool:
    """Whether a job status passes the status filter.

    Statuses that belong to no known group are always shown.
    """
    if status_filter == ALL_STATUSES:
        return True
    group = _status_group(status)
    if group is None:
        return True
    return group == status_filter


def matches_duration(duration: int | None, duration_filter: str) -> bool:
    """Whether a job duration in seconds passes the duration filter.

    Jobs without a duration only pass "All durations" and unknown filters.
    """
    window = _DURATION_WINDOWS.get(duration_filter)
    if window is None:
        return True
    if duration is None:
        return False
    low, high = window
    if duration_filter == "Quick (< 1min)":
        return duration < 60
    return duration >= low and (high is None or duration < high)


def filter_jobs(
    jobs: Iterable[JobRecord], status_filter: str, duration_filter: str
) -> list[JobRecord]:
    """Jobs passing both filters, in their original order."""
    return [
        job
        for job in jobs
        if matches_status(job.status, status_filter)
        and matches_duration(job.duration, duration_filter)
    ]


def job_status_summary(jobs: Iterable[JobRecord]) -> str:
    """Fixed-width summary such as "│ ✓  4  ●  1  ✗  2"; empty when nothing counts."""
    counts = {"success": 0, "running": 0, "failed": 0}
    for job in jobs:
        group = _status_group(job.status)
        if group in counts:
            counts[group] += 1
    parts = [
        f"{symbol} {counts[group]:>2}"
        for symbol, group in (("✓", "success"), ("●", "running"), ("✗", "failed"))
        if counts[group] > 0
    ]
    if not parts:
        return ""
    return "│ " + "  ".join(parts)


def job_status_message(status: str) -> str:
    """Short description shown under a job's name."""
    return _STATUS_MESSAGES.get(status, status)


def pagination_info(
    loaded_count: int,
    filtered_count: int,
    total_count: int | None,
    has_more: bool,
    has_filter: bool,
) -> str:
    """Text describing how many jobs are loaded and shown."""
    if total_count is not None:
        if has_filter:
            return f"(Showing {filtered_count} of {total_count} total jobs)"
        return f"(Showing {loaded_count} of {total_count})"
    if has_more:
        if has_filter:
            return f"(Showing {filtered_count} of {loaded_count}+ total jobs)"
        return f"(Showing {loaded_count} of {loaded_count}+)"
    if has_filter:
        return f"(Showing {filtered_count} of {loaded_count} total jobs)"
    return f"(All {loaded_count} jobs loaded)"


def visible_job_numbers(jobs: Sequence[JobRecord], selected: int | None) -> list[int]:
    """Job numbers around the selection whose logs are worth prefetching."""
    if not jobs:
        return []
    current = selected if selected is not None else 0
    start = max(current - PREFETCH_BEHIND, 0)
    end = min(current + PREFETCH_AHEAD + 1, len(jobs))
    return [job.job_number for job in jobs[start:end]]