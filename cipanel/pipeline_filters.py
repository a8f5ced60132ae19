"""Client-side filtering and display helpers for the pipeline list."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

ALL_TIME = "All time"
ALL_STATUSES = "All"

DATE_WINDOWS: dict[str, timedelta] = {
    "Last 24 hours": timedelta(hours=24),
    "Last 7 days": timedelta(days=7),
    "Last 30 days": timedelta(days=30),
    "Last 90 days": timedelta(days=90),
}

MAX_STAGES = 5
SHORT_SHA_LEN = 7
METADATA_SEPARATOR = "  ∙  "
SCHEDULED_TRIGGER = "scheduled"

_SUCCESS_STATES = frozenset({"success"})
_FAILED_STATES = frozenset({"failed", "error"})
_RUNNING_STATES = frozenset({"running"})


@dataclass
class PipelineRecord:
    """A pipeline as shown in the list, with its commit information."""

    id: str
    number: int
    state: str
    created_at: datetime
    branch: str
    revision: str
    commit_subject: str
    commit_author_name: str
    trigger_type: str = "webhook"
    project_slug: str = ""

    @property
    def short_sha(self) -> str:
        return self.revision[:SHORT_SHA_LEN]


def matches_search(pipeline: PipelineRecord, search_text: str) -> bool:
    """Case-insensitive match on number, branch, commit subject or author."""
    needle = search_text.lower()
    if not needle:
        return True
    haystacks = (
        str(pipeline.number),
        pipeline.branch.lower(),
        pipeline.commit_subject.lower(),
        pipeline.commit_author_name.lower(),
    )
    return any(needle in hay for hay in haystacks)


def matches_date(pipeline: PipelineRecord, date_filter: str, now: datetime) -> bool:
    """Whether the pipeline was created within the chosen date window.

    Unknown filter names, like "All time", let every pipeline through.
    """
    window = DATE_WINDOWS.get(date_filter)
    if window is None:
        return True
    return pipeline.created_at >= now - window


def filter_pipelines(
    pipelines: Iterable[PipelineRecord],
    search_text: str,
    date_filter: str,
    status_filter: str,
    now: datetime,
) -> list[PipelineRecord]:
    """Apply text search, date window and status filters, keeping order."""
    return [
        p
        for p in pipelines
        if matches_search(p, search_text)
        and matches_date(p, date_filter, now)
        and (status_filter == ALL_STATUSES or p.state == status_filter)
    ]


def pipeline_status_summary(pipelines: Iterable[PipelineRecord]) -> str:
    """Summary such as "✓ 10 ● 2 ✗ 3"; empty when nothing counts."""
    success = failed = running = 0
    for pipeline in pipelines:
        if pipeline.state in _SUCCESS_STATES:
            success += 1
        elif pipeline.state in _FAILED_STATES:
            failed += 1
        elif pipeline.state in _RUNNING_STATES:
            running += 1
    parts = [
        f"{symbol} {count}"
        for symbol, count in (("✓", success), ("●", running), ("✗", failed))
        if count > 0
    ]
    return " ".join(parts)


def unique_branches(pipelines: Iterable[PipelineRecord]) -> list[str]:
    """Sorted distinct branch names."""
    return sorted({p.branch for p in pipelines})


def format_time_ago(timestamp: datetime, now: datetime) -> str:
    """Relative age such as "45s ago", "12m ago", "3h ago" or "2d ago"."""
    secs = int((now - timestamp).total_seconds())
    if secs < 60:
        return f"{secs}s ago"
    if secs < 3600:
        return f"{secs // 60}m ago"
    if secs < 86400:
        return f"{secs // 3600}h ago"
    return f"{secs // 86400}d ago"


def format_metadata(pipeline: PipelineRecord) -> str:
    """Second line of a pipeline row: branch, sha, author, tag and number."""
    parts = [
        f"⎇  {pipeline.branch}",
        pipeline.short_sha,
        f"@{pipeline.commit_author_name}",
    ]
    if pipeline.trigger_type == SCHEDULED_TRIGGER:
        parts.append("🏷 scheduled")
    parts.append(f"#{pipeline.number}")
    return METADATA_SEPARATOR.join(parts)


def stage_icons(statuses: Sequence[str] | None) -> str:
    """Join per-workflow status markers, showing at most five.

    ``None`` means workflows are still loading.
    """
    if statuses is None:
        return "· · · ·"
    markers = [str(s) for s in statuses]
    shown = " ".join(markers[:MAX_STAGES])
    if len(markers) > MAX_STAGES:
        return f"{shown} …"
    if not markers:
        return "----"
    return shown