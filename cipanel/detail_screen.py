"""State and keyboard handling for the pipeline detail screen.

The screen shows the workflows of one pipeline on the left and the jobs of
the selected workflow on the right, with status and duration filters.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from cipanel.job_filters import (
    DURATION_OPTIONS,
    STATUS_OPTIONS,
    JobRecord,
    filter_jobs,
    job_status_summary,
    pagination_info,
    visible_job_numbers,
)
from cipanel.keys import Key
from cipanel.line_range import (
    LineRangeError,
    extract_line_range,
    format_copy_message,
    parse_line_range,
)
from cipanel.pipeline_filters import PipelineRecord

SUCCESS = "success"
ERROR = "error"

_FACETS = (STATUS_OPTIONS, DURATION_OPTIONS)


class PanelFocus(Enum):
    """Which part of the screen receives keyboard input."""

    WORKFLOWS = "workflows"
    JOBS = "jobs"
    FILTERS = "filters"


@dataclass(frozen=True)
class DetailAction:
    """What the application should do after a key press on this screen.

    ``payload`` holds the job, workflow id or job number the action needs.
    """

    kind: str = "none"
    payload: object = None

    NONE = "none"
    OPEN_JOB_LOG = "open_job_log"
    OPEN_SSH = "open_ssh"
    BACK = "back"
    LOAD_MORE_JOBS = "load_more_jobs"
    RERUN_WORKFLOW = "rerun_workflow"
    LOAD_JOBS = "load_jobs"
    COPY_LOGS = "copy_logs"


@dataclass
class WorkflowRecord:
    """A workflow belonging to a pipeline."""

    id: str
    name: str
    status: str
    created_at: datetime
    stopped_at: datetime | None = None
    pipeline_id: str = ""


@dataclass
class DetailFilterPrefs:
    """Saved filter choices for the detail screen."""

    status_index: int = 0
    duration_index: int = 0


class PipelineDetailScreen:
    """Workflows and jobs of a single pipeline."""

    def __init__(
        self,
        pipeline: PipelineRecord,
        *,
        clipboard: Callable[[str], None] | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.workflows: list[WorkflowRecord] = []
        self.jobs: list[JobRecord] = []
        self.selected_workflow_index = 0
        self.selected_job_index: int | None = None
        self.focus = PanelFocus.WORKFLOWS
        self.status_index = 0
        self.duration_index = 0
        self.focused_facet = 0
        self.loading_workflows = False
        self.loading_jobs = False
        self.loading_more_jobs = False
        self.next_page_token: str | None = None
        self.total_jobs_count: int | None = None
        self.log_cache: dict[int, list[str]] = {}
        self.pending_log_fetch: int | None = None
        self.pending_copy_job: int | None = None
        self.range_prompt: int | None = None
        self.range_input = ""
        self.loading_message: str | None = None
        self.notification: tuple[str, str] | None = None
        self._clipboard = clipboard

    # -- data ---------------------------------------------------------------

    def set_workflows(self, workflows: Iterable[WorkflowRecord]) -> None:
        """Replace the workflows and select the first one."""
        self.workflows = list(workflows)
        if self.workflows:
            self.selected_workflow_index = 0

    def set_jobs(self, jobs: Iterable[JobRecord]) -> None:
        """Replace the jobs, with no further pages."""
        self.set_jobs_with_pagination(jobs, None, None)

    def set_jobs_with_pagination(
        self,
        jobs: Iterable[JobRecord],
        next_page_token: str | None,
        total_count: int | None,
    ) -> None:
        """Replace the jobs and remember how to fetch the next page."""
        self.jobs = list(jobs)
        self.next_page_token = next_page_token
        self.total_jobs_count = total_count
        self.selected_job_index = 0 if self.jobs else None

    def append_jobs(self, jobs: Iterable[JobRecord], next_page_token: str | None) -> None:
        """Add a further page of jobs, keeping the selection."""
        self.jobs.extend(jobs)
        self.next_page_token = next_page_token
        if next_page_token is None:
            self.total_jobs_count = len(self.jobs)

    def can_load_more(self) -> bool:
        return self.next_page_token is not None and not self.loading_more_jobs

    def pagination_text(self) -> str:
        """Text telling how many jobs are loaded and shown."""
        return pagination_info(
            len(self.jobs),
            len(self.filtered_jobs()),
            self.total_jobs_count,
            self.next_page_token is not None,
            self.is_filtered,
        )

    def status_summary(self) -> str:
        """Counts of passed, running and failed jobs of the workflow."""
        return job_status_summary(self.jobs)

    # -- filters ------------------------------------------------------------

    @property
    def status_filter(self) -> str:
        return STATUS_OPTIONS[self.status_index]

    @property
    def duration_filter(self) -> str:
        return DURATION_OPTIONS[self.duration_index]

    @property
    def is_filtered(self) -> bool:
        return self.status_index != 0 or self.duration_index != 0

    def filtered_jobs(self) -> list[JobRecord]:
        """Jobs passing the current status and duration filters."""
        return filter_jobs(self.jobs, self.status_filter, self.duration_filter)

    def set_filters(self, status_index: int, duration_index: int) -> None:
        """Choose the status and duration filters by option index."""
        if not 0 <= status_index < len(STATUS_OPTIONS):
            raise ValueError(f"status filter index out of range: {status_index}")
        if not 0 <= duration_index < len(DURATION_OPTIONS):
            raise ValueError(f"duration filter index out of range: {duration_index}")
        self.status_index = status_index
        self.duration_index = duration_index

    def filter_preferences(self) -> DetailFilterPrefs:
        """Current filter choices, ready to be saved."""
        return DetailFilterPrefs(self.status_index, self.duration_index)

    def apply_filter_preferences(self, prefs: DetailFilterPrefs) -> None:
        """Restore saved filter choices; out-of-range indices are ignored."""
        if 0 <= prefs.status_index < len(STATUS_OPTIONS):
            self.status_index = prefs.status_index
        if 0 <= prefs.duration_index < len(DURATION_OPTIONS):
            self.duration_index = prefs.duration_index

    def _reset_job_selection(self) -> None:
        self.selected_job_index = 0 if self.filtered_jobs() else None

    # -- selection ----------------------------------------------------------

    def select_workflow(self, index: int) -> None:
        """Select a workflow and clear the jobs until they are reloaded."""
        if not 0 <= index < len(self.workflows):
            return
        self.selected_workflow_index = index
        self.jobs.clear()
        self.selected_job_index = None

    def select_next_workflow(self) -> None:
        if not self.workflows:
            return
        self.select_workflow((self.selected_workflow_index + 1) % len(self.workflows))

    def select_previous_workflow(self) -> None:
        if not self.workflows:
            return
        self.select_workflow((self.selected_workflow_index - 1) % len(self.workflows))

    def select_next_job(self) -> None:
        count = len(self.filtered_jobs())
        if not count:
            return
        if self.selected_job_index is None or self.selected_job_index >= count - 1:
            self.selected_job_index = 0
        else:
            self.selected_job_index += 1

    def select_previous_job(self) -> None:
        count = len(self.filtered_jobs())
        if not count:
            return
        if self.selected_job_index is None:
            self.selected_job_index = 0
        elif self.selected_job_index == 0:
            self.selected_job_index = count - 1
        else:
            self.selected_job_index -= 1

    def selected_job(self) -> JobRecord | None:
        """The job under the cursor in the filtered list, if any."""
        if self.selected_job_index is None:
            return None
        filtered = self.filtered_jobs()
        if self.selected_job_index >= len(filtered):
            return None
        return filtered[self.selected_job_index]

    def visible_job_numbers(self) -> list[int]:
        """Job numbers near the selection whose logs should be prefetched."""
        return visible_job_numbers(self.filtered_jobs(), self.selected_job_index)

    def _current_workflow_id(self) -> str | None:
        if not self.workflows:
            return None
        return self.workflows[self.selected_workflow_index].id

    # -- input --------------------------------------------------------------

    def handle_input(self, key: Key) -> DetailAction:
        """React to a key press and tell the application what to do."""
        if self.range_prompt is not None:
            self._handle_range_input(key)
            return DetailAction()
        if self.focus is PanelFocus.FILTERS:
            self._handle_filter_input(key)
            return DetailAction()

        match key:
            case Key(code="tab"):
                self.focus = (
                    PanelFocus.JOBS if self.focus is PanelFocus.WORKFLOWS else PanelFocus.WORKFLOWS
                )
            case Key(code="up" | "down" as direction):
                return self._move(direction == "down")
            case Key(code="enter"):
                job = self.selected_job() if self.focus is PanelFocus.JOBS else None
                if job is not None:
                    return DetailAction(DetailAction.OPEN_JOB_LOG, job)
            case Key(code="char", char="f"):
                self.focus = PanelFocus.FILTERS
            case Key(code="char", char="l"):
                if self.focus is PanelFocus.JOBS and self.can_load_more():
                    return DetailAction(DetailAction.LOAD_MORE_JOBS)
            case Key(code="char", char="R"):
                workflow_id = self._current_workflow_id()
                if self.focus is PanelFocus.WORKFLOWS and workflow_id is not None:
                    return DetailAction(DetailAction.RERUN_WORKFLOW, workflow_id)
            case Key(code="char", char="s"):
                job = self.selected_job() if self.focus is PanelFocus.JOBS else None
                if job is not None:
                    return DetailAction(DetailAction.OPEN_SSH, job)
            case Key(code="char", char="y"):
                if self.focus is PanelFocus.JOBS:
                    return self._start_copy()
            case Key(code="esc"):
                return DetailAction(DetailAction.BACK)
        return DetailAction()

    def _move(self, down: bool) -> DetailAction:
        if self.focus is PanelFocus.WORKFLOWS:
            if down:
                self.select_next_workflow()
            else:
                self.select_previous_workflow()
            workflow_id = self._current_workflow_id()
            if workflow_id is not None:
                return DetailAction(DetailAction.LOAD_JOBS, workflow_id)
        elif self.focus is PanelFocus.JOBS:
            if down:
                self.select_next_job()
            else:
                self.select_previous_job()
        return DetailAction()

    def _start_copy(self) -> DetailAction:
        job = self.selected_job()
        if job is None:
            return DetailAction()
        number = job.job_number
        self.pending_copy_job = number
        logs = self.log_cache.get(number)
        if logs is not None:
            self._show_range_prompt(len(logs))
            return DetailAction()
        self.loading_message = "Loading logs..."
        self.pending_log_fetch = number
        return DetailAction(DetailAction.COPY_LOGS, number)

    def _handle_filter_input(self, key: Key) -> None:
        match key:
            case Key(code="esc") | Key(code="char", char="f"):
                self.focus = PanelFocus.JOBS
                return
            case Key(code="left"):
                self.focused_facet = (self.focused_facet - 1) % len(_FACETS)
                return
            case Key(code="right") | Key(code="tab"):
                self.focused_facet = (self.focused_facet + 1) % len(_FACETS)
                return
            case Key(code="down"):
                self._step_facet(1)
            case Key(code="up"):
                self._step_facet(-1)
            case _:
                return
        self._reset_job_selection()

    def _step_facet(self, step: int) -> None:
        count = len(_FACETS[self.focused_facet])
        if self.focused_facet == 0:
            self.status_index = (self.status_index + step) % count
        else:
            self.duration_index = (self.duration_index + step) % count

    # -- copying logs -------------------------------------------------------

    def _show_range_prompt(self, total_lines: int) -> None:
        self.range_prompt = total_lines
        self.range_input = ""

    def _hide_range_prompt(self) -> None:
        self.range_prompt = None
        self.range_input = ""

    def _handle_range_input(self, key: Key) -> None:
        match key:
            case Key(code="enter"):
                text = self.range_input
                job_number = self.pending_copy_job
                self.pending_copy_job = None
                self._hide_range_prompt()
                if job_number is not None:
                    self.copy_range(job_number, text)
            case Key(code="esc"):
                self.pending_copy_job = None
                self._hide_range_prompt()
            case Key(code="backspace"):
                self.range_input = self.range_input[:-1]
            case Key(code="char", char=char):
                self.range_input += char

    def set_logs_for_job(self, job_number: int, logs: Iterable[str]) -> None:
        """Cache fetched logs and open the range prompt if a copy was waiting."""
        lines = list(logs)
        self.log_cache[job_number] = lines
        self.pending_log_fetch = None
        if self.pending_copy_job == job_number:
            self.loading_message = None
            self._show_range_prompt(len(lines))

    def copy_range(self, job_number: int, range_text: str) -> bool:
        """Copy a range of a job's cached log lines to the clipboard.

        The outcome is reported in ``notification``; returns True on success.
        """
        logs = self.log_cache.get(job_number)
        if logs is None:
            return False
        try:
            start, end = parse_line_range(range_text, len(logs))
        except LineRangeError as err:
            self.notification = (ERROR, f"Invalid range: {err}")
            return False
        lines = extract_line_range(logs, start, end)
        if not lines:
            self.notification = (ERROR, "No lines to copy")
            return False
        if self._clipboard is None:
            self.notification = (ERROR, "Clipboard unavailable")
            return False
        try:
            self._clipboard("\n".join(lines))
        except Exception as err:  # the clipboard backend is supplied by the caller
            self.notification = (ERROR, f"Failed to copy: {err}")
            return False
        self.notification = (SUCCESS, format_copy_message(start, end, len(lines)))
        return True