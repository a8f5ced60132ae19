# cipanel

`cipanel` holds the state and keyboard handling for a panel that browses CI
pipelines, the workflows in each pipeline, and the jobs in each workflow. It
keeps track of selection, filters, pagination, a log cache and small dialogs.
A front end feeds it `Key` values and data records, then reads back the state
it needs to draw.

## Installation

```
pip install cipanel
```

With the test dependencies:

```
pip install "cipanel[test]"
```

## Modules

- `cipanel.keys`: `Key` (a named key such as `"enter"` or `"backtab"`, or a
  single character built with `Key.from_char`) and `parse_key`, which accepts
  names like `"enter"`, `"escape"`, `"shift+tab"`, `"space"` or `"y"`.
- `cipanel.layout`: `Rect` and `centered_rect(percent_x, percent_y, area)`,
  which places a popup in the middle of an area.
- `cipanel.utils.truncate_string`: cuts text to a length and ends it in `...`.
- `cipanel.breadcrumb.render_breadcrumb`: joins segments with ` › `.
- `cipanel.confirm_modal`: `ConfirmModal` maps `y`/Enter to
  `ConfirmAction.YES`, `n`/Esc to `ConfirmAction.NO`, and Left, Right and Tab
  to moving between the two buttons.
- `cipanel.error_modal`: `ErrorModal` closes on `c`, Enter or Esc, retries on
  `r` once `with_retry()` was called, and toggles details on `d` when built
  with `ErrorModal.with_details`. `modal_height()` gives the popup height as a
  percentage of the screen.
- `cipanel.pipeline_filters`: `PipelineRecord` and pure helpers:
  `filter_pipelines`, `matches_search`, `matches_date`,
  `pipeline_status_summary`, `unique_branches`, `format_time_ago`,
  `format_metadata` and `stage_icons`.
- `cipanel.pipeline_screen`: `PipelineScreen`, the pipeline list. `/` focuses
  the search text, `f` the filter facets (owner, branch, date, status), the
  arrow keys move the selection with wrap-around, Enter reports that the
  selected pipeline should open, `r` reloads through an optional `loader`
  callable, and Esc resets all filters. Search text, date window and status
  are applied locally; owner and branch choices are only recorded, for
  whoever fetches the pipelines. `filter_preferences()` and
  `apply_preferences()` work with `PipelineFilterPrefs`.
- `cipanel.job_filters`: `JobRecord` and helpers for status and duration
  filters, summaries, status messages, paging text and the job numbers worth
  prefetching around a selection.
- `cipanel.line_range`: `parse_line_range` reads ranges the way Vim writes
  them (`1,100`, `1:100`, `100,$`, `%`, or a count such as `50`) and raises
  `LineRangeError` on bad input; `extract_line_range` and
  `format_copy_message` go with it.
- `cipanel.detail_screen`: `PipelineDetailScreen`, the view of one pipeline.
  Tab switches between the workflow and job panels, the arrow keys move the
  selection, `f` enters the status and duration filters, and key presses
  return a `DetailAction` such as `LOAD_JOBS`, `OPEN_JOB_LOG`, `OPEN_SSH`,
  `RERUN_WORKFLOW`, `LOAD_MORE_JOBS`, `COPY_LOGS` or `BACK`. Pressing `y` on a
  job asks for a line range. Once the logs are given through
  `set_logs_for_job`, the chosen lines go to a `clipboard` callable that the
  caller supplies. The result is reported in `notification`.

## Example

```python
from cipanel.line_range import parse_line_range, extract_line_range
from cipanel.utils import truncate_string

start, end = parse_line_range("2,$", max_lines=4)    # (2, 4)
extract_line_range(["a", "b", "c", "d"], start, end)  # ["b", "c", "d"]

truncate_string("this is a very long string", 10)    # "this is..."
```

```python
from cipanel.confirm_modal import ConfirmAction, ConfirmModal
from cipanel.keys import parse_key

modal = ConfirmModal("Rerun workflow?")
assert modal.handle_input(parse_key("y")) is ConfirmAction.YES
```

## What it does not do

- It draws nothing. There is no terminal rendering and no command to start.
- It does not talk to any CI service. Pipelines, workflows, jobs and logs
  come from the caller, and the actions it returns are for the caller to
  carry out.
- It does not store preferences. `PipelineFilterPrefs` and
  `DetailFilterPrefs` are plain values for the caller to save and restore.
- It has no clipboard of its own. Copying works only when a `clipboard`
  callable is passed to `PipelineDetailScreen`.

## Running the tests

```
pytest
```