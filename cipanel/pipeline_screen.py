"""State and keyboard handling for the pipeline list screen."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum

from cipanel.keys import Key
from cipanel.pipeline_filters import (
    ALL_STATUSES,
    ALL_TIME,
    PipelineRecord,
    filter_pipelines,
    pipeline_status_summary,
    unique_branches,
)

ALL_BRANCHES = "All"
OWNER_OPTIONS = ("All pipelines", "Mine")
DATE_OPTIONS = ("Last 24 hours", "Last 7 days", "Last 30 days", "Last 90 days", ALL_TIME)
STATUS_OPTIONS = (ALL_STATUSES, "success", "failed", "running", "pending")
DEFAULT_DATE_INDEX = DATE_OPTIONS.index(ALL_TIME)


class _Facet(IntEnum):
    OWNER = 0
    BRANCH = 1
    DATE = 2
    STATUS = 3


@dataclass
class PipelineFilterPrefs:
    """Saved filter choices for the pipeline list."""

    owner_index: int = 0
    branch: str | None = None
    date_index: int = DEFAULT_DATE_INDEX
    status_index: int = 0
    search_text: str = ""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PipelineScreen:
    """The list of pipelines with a search box and four filter facets.

    Owner and branch choices are only recorded here; they are applied by
    whoever fetches pipelines. Search text, date window and status are
    applied locally by :meth:`apply_filters`.
    """

    def __init__(
        self,
        pipelines: Iterable[PipelineRecord] = (),
        *,
        authenticated_user: str | None = None,
        authenticated_user_name: str | None = None,
        loader: Callable[[], Iterable[PipelineRecord]] | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.pipelines: list[PipelineRecord] = list(pipelines)
        self.filtered_pipelines: list[PipelineRecord] = list(self.pipelines)
        self.selected_index: int | None = 0
        self.authenticated_user = authenticated_user
        self.authenticated_user_name = authenticated_user_name
        self.pipeline_workflows: dict[str, list] = {}
        self.loading = False
        self.loading_workflows = False
        self.refreshing = False
        self.search_focused = False
        self.filter_active = False
        self.focused_facet = _Facet.OWNER
        self.search_text = ""
        self.owner_index = 0
        self.branch = ALL_BRANCHES
        self.branch_options: list[str] = [ALL_BRANCHES, *unique_branches(self.pipelines)]
        self.date_index = DEFAULT_DATE_INDEX
        self.status_index = 0
        self._loader = loader
        self._clock = clock
        self.apply_filters()

    # -- data ---------------------------------------------------------------

    def set_pipelines(self, pipelines: Iterable[PipelineRecord]) -> None:
        """Replace the pipelines, refresh branch choices and refilter."""
        self.pipelines = list(pipelines)
        self._update_branch_options()
        self.apply_filters()

    def _update_branch_options(self) -> None:
        self.branch_options = [ALL_BRANCHES, *unique_branches(self.pipelines)]
        if self.branch not in self.branch_options:
            self.branch = ALL_BRANCHES

    @property
    def date_filter(self) -> str:
        return DATE_OPTIONS[self.date_index]

    @property
    def status_filter(self) -> str:
        return STATUS_OPTIONS[self.status_index]

    @property
    def status_summary(self) -> str:
        return pipeline_status_summary(self.filtered_pipelines)

    def apply_filters(self) -> None:
        """Recompute the filtered list and keep the selection within it."""
        self.filtered_pipelines = filter_pipelines(
            self.pipelines,
            self.search_text,
            self.date_filter,
            self.status_filter,
            self._clock(),
        )
        if not self.filtered_pipelines:
            self.selected_index = None
        elif self.selected_index is not None:
            self.selected_index = min(self.selected_index, len(self.filtered_pipelines) - 1)

    # -- preferences --------------------------------------------------------

    def filter_preferences(self) -> PipelineFilterPrefs:
        """Current filter choices, ready to be saved."""
        return PipelineFilterPrefs(
            owner_index=self.owner_index,
            branch=None if self.branch == ALL_BRANCHES else self.branch,
            date_index=self.date_index,
            status_index=self.status_index,
            search_text=self.search_text,
        )

    def apply_preferences(self, prefs: PipelineFilterPrefs) -> None:
        """Restore saved filter choices and refilter."""
        self._select(_Facet.OWNER, prefs.owner_index)
        self._select(_Facet.DATE, prefs.date_index)
        self._select(_Facet.STATUS, prefs.status_index)
        if prefs.branch is not None:
            if prefs.branch not in self.branch_options:
                self.branch_options.append(prefs.branch)
            self.branch = prefs.branch
        self.search_text = prefs.search_text
        self.apply_filters()

    def reset_filters(self) -> None:
        """Put every facet back to its default, clear the search and refilter."""
        self.owner_index = 0
        self.branch = ALL_BRANCHES
        self.date_index = DEFAULT_DATE_INDEX
        self.status_index = 0
        self.search_text = ""
        self.apply_filters()

    # -- facets -------------------------------------------------------------

    def _options(self, facet: _Facet) -> Sequence[str]:
        return {
            _Facet.OWNER: OWNER_OPTIONS,
            _Facet.BRANCH: self.branch_options,
            _Facet.DATE: DATE_OPTIONS,
            _Facet.STATUS: STATUS_OPTIONS,
        }[facet]

    def _selection(self, facet: _Facet) -> int:
        match facet:
            case _Facet.OWNER:
                return self.owner_index
            case _Facet.BRANCH:
                return self.branch_options.index(self.branch)
            case _Facet.DATE:
                return self.date_index
            case _:
                return self.status_index

    def _select(self, facet: _Facet, index: int) -> None:
        options = self._options(facet)
        if not 0 <= index < len(options):
            return
        match facet:
            case _Facet.OWNER:
                self.owner_index = index
            case _Facet.BRANCH:
                self.branch = options[index]
            case _Facet.DATE:
                self.date_index = index
            case _:
                self.status_index = index

    def _step_selection(self, step: int) -> None:
        count = len(self._options(self.focused_facet))
        self._select(self.focused_facet, (self._selection(self.focused_facet) + step) % count)

    # -- input --------------------------------------------------------------

    def handle_input(self, key: Key) -> bool:
        """React to a key press; True means the selected pipeline should open."""
        if self.search_focused:
            self._handle_search_input(key)
            return False
        if self.filter_active:
            self._handle_filter_input(key)
            return False
        match key:
            case Key(code="up"):
                self.select_previous()
            case Key(code="down"):
                self.select_next()
            case Key(code="enter"):
                return self.selected_index is not None
            case Key(code="char", char="r"):
                self.refreshing = True
                if self._loader is not None:
                    self.pipelines = list(self._loader())
                self.apply_filters()
            case Key(code="char", char="/"):
                self.search_focused = True
            case Key(code="char", char="f"):
                self.filter_active = True
            case Key(code="esc"):
                self.reset_filters()
        return False

    def _handle_search_input(self, key: Key) -> None:
        match key:
            case Key(code="esc"):
                if self.search_text:
                    self.search_text = ""
                    self.apply_filters()
                else:
                    self.search_focused = False
            case Key(code="tab"):
                self.search_focused = False
                self.filter_active = True
            case Key(code="char", char=char):
                self.search_text += char
                self.apply_filters()
            case Key(code="backspace") if self.search_text:
                self.search_text = self.search_text[:-1]
                self.apply_filters()

    def _handle_filter_input(self, key: Key) -> None:
        match key:
            case Key(code="esc"):
                self.filter_active = False
                self.apply_filters()
            case Key(code="backtab"):
                self.filter_active = False
                self.search_focused = True
            case Key(code="left"):
                self.focused_facet = _Facet((self.focused_facet - 1) % len(_Facet))
            case Key(code="right") | Key(code="tab"):
                self.focused_facet = _Facet((self.focused_facet + 1) % len(_Facet))
            case Key(code="down"):
                self._step_selection(1)
                self.apply_filters()
            case Key(code="up"):
                self._step_selection(-1)
                self.apply_filters()

    # -- selection ----------------------------------------------------------

    def select_next(self) -> None:
        """Move the selection down, wrapping to the top."""
        if not self.filtered_pipelines:
            return
        if self.selected_index is None or self.selected_index >= len(self.filtered_pipelines) - 1:
            self.selected_index = 0
        else:
            self.selected_index += 1

    def select_previous(self) -> None:
        """Move the selection up, wrapping to the bottom."""
        if not self.filtered_pipelines:
            return
        if self.selected_index is None:
            self.selected_index = 0
        elif self.selected_index == 0:
            self.selected_index = len(self.filtered_pipelines) - 1
        else:
            self.selected_index -= 1

    def selected_pipeline(self) -> PipelineRecord | None:
        """The pipeline under the cursor in the filtered list, if any."""
        if self.selected_index is None or self.selected_index >= len(self.filtered_pipelines):
            return None
        return self.filtered_pipelines[self.selected_index]