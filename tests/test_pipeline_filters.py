from datetime import datetime, timedelta, timezone

import pytest

from cipanel.pipeline_filters import (
    PipelineRecord,
    filter_pipelines,
    format_metadata,
    format_time_ago,
    matches_date,
    matches_search,
    pipeline_status_summary,
    stage_icons,
    unique_branches,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make(number=1234, state="success", age=timedelta(hours=1), branch="main",
         subject="feat: add webhook retry logic", author="alice",
         revision="a1b2c3d4e5f6", trigger="webhook"):
    return PipelineRecord(
        id=f"p{number}",
        number=number,
        state=state,
        created_at=NOW - age,
        branch=branch,
        revision=revision,
        commit_subject=subject,
        commit_author_name=author,
        trigger_type=trigger,
        project_slug="gh/acme/api-service",
    )


def test_search_empty_matches_everything():
    assert matches_search(make(), "") is True


@pytest.mark.parametrize("text", ["1234", "MAIN", "Webhook", "ALI"])
def test_search_matches_fields_case_insensitive(text):
    assert matches_search(make(), text) is True


def test_search_no_match():
    assert matches_search(make(), "zzz-nothing") is False


def test_date_all_time_and_unknown():
    old = make(age=timedelta(days=1000))
    assert matches_date(old, "All time", NOW) is True
    assert matches_date(old, "whatever", NOW) is True


def test_date_windows():
    recent = make(age=timedelta(hours=2))
    week_old = make(age=timedelta(days=8))
    assert matches_date(recent, "Last 24 hours", NOW) is True
    assert matches_date(week_old, "Last 24 hours", NOW) is False
    assert matches_date(week_old, "Last 7 days", NOW) is False
    assert matches_date(week_old, "Last 30 days", NOW) is True


def test_date_boundary_inclusive():
    edge = make(age=timedelta(days=7))
    assert matches_date(edge, "Last 7 days", NOW) is True


def test_filter_pipelines_combines_filters_and_keeps_order():
    pipes = [
        make(1, "success", branch="main"),
        make(2, "failed", branch="dev"),
        make(3, "success", branch="dev", age=timedelta(days=40)),
        make(4, "success", branch="dev"),
    ]
    result = filter_pipelines(pipes, "dev", "Last 30 days", "success", NOW)
    assert [p.number for p in result] == [4]
    everything = filter_pipelines(pipes, "", "All time", "All", NOW)
    assert everything == pipes


def test_filter_status_only():
    pipes = [make(1, "success"), make(2, "failed"), make(3, "failed")]
    result = filter_pipelines(pipes, "", "All time", "failed", NOW)
    assert all(p.state == "failed" for p in result)
    assert len(result) == 2


def test_status_summary():
    pipes = [make(state=s) for s in
             ["success", "success", "failed", "error", "running", "pending"]]
    assert pipeline_status_summary(pipes) == "✓ 2 ● 1 ✗ 2"


def test_status_summary_empty():
    assert pipeline_status_summary([]) == ""
    assert pipeline_status_summary([make(state="pending")]) == ""


def test_unique_branches_sorted_distinct():
    pipes = [make(branch=b) for b in ["main", "dev", "main", "feature/x"]]
    result = unique_branches(pipes)
    assert result == sorted(set(result))
    assert set(result) == {"main", "dev", "feature/x"}


@pytest.mark.parametrize("seconds", [0, 1, 59])
def test_time_ago_seconds(seconds):
    assert format_time_ago(NOW - timedelta(seconds=seconds), NOW) == f"{seconds}s ago"


@pytest.mark.parametrize("minutes", [1, 30, 59])
def test_time_ago_minutes(minutes):
    assert format_time_ago(NOW - timedelta(minutes=minutes), NOW) == f"{minutes}m ago"


@pytest.mark.parametrize("hours", [1, 23])
def test_time_ago_hours(hours):
    assert format_time_ago(NOW - timedelta(hours=hours), NOW) == f"{hours}h ago"


@pytest.mark.parametrize("days", [1, 45])
def test_time_ago_days(days):
    assert format_time_ago(NOW - timedelta(days=days), NOW) == f"{days}d ago"


def test_metadata_line():
    assert format_metadata(make()) == "⎇  main  ∙  a1b2c3d  ∙  @alice  ∙  #1234"


def test_metadata_scheduled_tag_and_short_revision():
    text = format_metadata(make(trigger="scheduled", revision="abc"))
    parts = text.split("  ∙  ")
    assert parts[1] == "abc"
    assert "🏷 scheduled" in parts
    assert parts[-1] == "#1234"


def test_stage_icons_loading_and_empty():
    assert stage_icons(None) == "· · · ·"
    assert stage_icons([]) == "----"


def test_stage_icons_join_and_overflow():
    assert stage_icons(["✓", "✗"]) == "✓ ✗"
    many = ["a", "b", "c", "d", "e", "f", "g"]
    result = stage_icons(many)
    assert result.endswith(" …")
    assert result[: -len(" …")] == " ".join(many[:5])


def test_stage_icons_exactly_five_no_overflow():
    five = ["a", "b", "c", "d", "e"]
    assert stage_icons(five) == " ".join(five)