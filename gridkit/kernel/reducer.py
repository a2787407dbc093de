"""
gridkit Kernel — Reducer

Pure function: (state, action) → ReduceResult
No side effects. No IO. Deterministic.

Given the same sequence of actions, produces the same state every time.
Signals describing each transition travel back in the result; the engine
delivers them to listeners.

Invariant held after every applied action: current_page is inside
[1, total_pages] for the state's filtered rows.
"""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import Any

from gridkit.kernel import selection
from gridkit.kernel.models import (
    ColumnDescriptor,
    FilterChanged,
    PageChanged,
    SelectionChanged,
    SortChanged,
)
from gridkit.kernel.pipeline import apply_filter, clamp_page, derive, total_pages
from gridkit.kernel.types import (
    ASCENDING,
    DESCENDING,
    FILTER_CHANGED,
    PAGE_CHANGED,
    SELECTION_CHANGED,
    SORT_CHANGED,
    UNSORTED,
    Action,
    GridState,
    ReduceResult,
    Signal,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state(page_size: int = 10) -> GridState:
    """The state of a grid that has received no attributes yet."""
    return GridState(page_size=page_size)


def reduce(state: GridState, action: Action) -> ReduceResult:
    """
    Apply one action to the current state.
    Returns new state + applied flag + signals/error.

    Pure function. The input state is never modified; rows are shared
    between states since they are only ever replaced, never patched.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return ReduceResult(
            state=state,
            applied=False,
            error=f"UNKNOWN_ACTION: {action.type}",
        )

    result = handler(state, action)
    if result.applied:
        result.state = _clamped(result.state)
    return result


def replay(actions: list[Action], initial: GridState | None = None) -> GridState:
    """
    Rebuild state by reducing over all actions.
    Rejected actions are skipped.
    """
    state = initial if initial is not None else empty_state()
    for action in actions:
        result = reduce(state, action)
        if result.applied:
            state = result.state
    return state


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: GridState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: GridState, signals: list[Signal] | None = None) -> ReduceResult:
    return ReduceResult(state=state, applied=True, signals=signals or [])


def _page_count(state: GridState) -> int:
    matched = apply_filter(state.rows, state.columns, state.search_query)
    return total_pages(len(matched), state.page_size)


def _clamped(state: GridState) -> GridState:
    page = clamp_page(state.current_page, _page_count(state))
    if page != state.current_page:
        return replace(state, current_page=page)
    return state


def _find_column(state: GridState, key: str) -> ColumnDescriptor | None:
    for col in state.columns:
        if col.key == key:
            return col
    return None


def _selection_signal(state: GridState) -> Signal:
    return Signal(
        SELECTION_CHANGED,
        SelectionChanged(
            selected_positions=list(state.selected),
            selected_rows=selection.selected_rows(state.rows, state.selected),
        ),
    )


def _sort_signal(state: GridState) -> Signal:
    return Signal(SORT_CHANGED, SortChanged(column=state.sort_column, direction=state.sort_direction))


# ---------------------------------------------------------------------------
# Data source
# ---------------------------------------------------------------------------


def _handle_data_set(state: GridState, action: Action) -> ReduceResult:
    # Own copy: later edits to the host's dicts must not reach the state
    rows = tuple(copy.deepcopy(list(action.payload["data"])))
    new = replace(state, rows=rows, current_page=1, selected=())
    # Old positions identify nothing in the new rows
    signals = [_selection_signal(new)] if state.selected else []
    return _ok(new, signals)


def _handle_columns_set(state: GridState, action: Action) -> ReduceResult:
    columns = tuple(
        c if isinstance(c, ColumnDescriptor) else ColumnDescriptor.model_validate(c)
        for c in action.payload["columns"]
    )
    return _ok(replace(state, columns=columns, current_page=1))


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


def _handle_search_set(state: GridState, action: Action) -> ReduceResult:
    query = action.payload["query"]
    new = replace(state, search_query=query, current_page=1)
    matched = apply_filter(new.rows, new.columns, query)
    return _ok(new, [Signal(FILTER_CHANGED, FilterChanged(query=query, match_count=len(matched)))])


# ---------------------------------------------------------------------------
# Sort
# ---------------------------------------------------------------------------


def _handle_sort_toggle(state: GridState, action: Action) -> ReduceResult:
    """
    Header click:
      other column          → that column, ascending
      same column ascending → descending
      same column otherwise → ascending
    """
    column = action.payload["column"]
    if not state.sortable:
        return _reject(state, "SORT_DISABLED", "grid is not sortable")
    descriptor = _find_column(state, column)
    if descriptor is not None and descriptor.sortable is False:
        return _reject(state, "COLUMN_NOT_SORTABLE", f"column '{column}' is not sortable")

    if state.sort_column == column and state.sort_direction == ASCENDING:
        direction = DESCENDING
    else:
        direction = ASCENDING

    new = replace(state, sort_column=column, sort_direction=direction)
    return _ok(new, [_sort_signal(new)])


def _handle_sort_set(state: GridState, action: Action) -> ReduceResult:
    direction = action.payload["direction"]
    column = None if direction == UNSORTED else action.payload["column"]
    new = replace(state, sort_column=column, sort_direction=direction)
    return _ok(new, [_sort_signal(new)])


# ---------------------------------------------------------------------------
# Paginator
# ---------------------------------------------------------------------------


def _navigate(state: GridState, target: int, pages: int) -> ReduceResult:
    page = clamp_page(target, pages)
    if page == state.current_page:
        return _ok(state)
    new = replace(state, current_page=page)
    return _ok(
        new,
        [Signal(PAGE_CHANGED, PageChanged(page=page, page_size=state.page_size, total_pages=pages))],
    )


def _handle_page_first(state: GridState, action: Action) -> ReduceResult:
    return _navigate(state, 1, _page_count(state))


def _handle_page_previous(state: GridState, action: Action) -> ReduceResult:
    return _navigate(state, state.current_page - 1, _page_count(state))


def _handle_page_next(state: GridState, action: Action) -> ReduceResult:
    return _navigate(state, state.current_page + 1, _page_count(state))


def _handle_page_last(state: GridState, action: Action) -> ReduceResult:
    pages = _page_count(state)
    return _navigate(state, pages, pages)


def _handle_page_goto(state: GridState, action: Action) -> ReduceResult:
    return _navigate(state, action.payload["page"], _page_count(state))


def _handle_page_set(state: GridState, action: Action) -> ReduceResult:
    # Attribute write: clamped by reduce(), no signal
    return _ok(replace(state, current_page=action.payload["page"]))


def _handle_page_size_set(state: GridState, action: Action) -> ReduceResult:
    return _ok(replace(state, page_size=action.payload["page_size"]))


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def _handle_row_click(state: GridState, action: Action) -> ReduceResult:
    """Click on the row at `index` within the current page window."""
    if state.selection_mode == "none":
        return _reject(state, "SELECTION_DISABLED", "selection mode is 'none'")

    index = action.payload["index"]
    window = derive(state).window
    if index >= len(window):
        return _reject(state, "ROW_OUT_OF_RANGE", f"no row {index} on page {state.current_page}")

    selected = selection.click(state.selection_mode, state.selected, window[index].position)
    new = replace(state, selected=selected)
    return _ok(new, [_selection_signal(new)])


def _handle_selection_set(state: GridState, action: Action) -> ReduceResult:
    if state.selection_mode == "none":
        return _reject(state, "SELECTION_DISABLED", "selection mode is 'none'")
    selected = selection.replace(state.selection_mode, action.payload["positions"], len(state.rows))
    if selected == state.selected:
        return _ok(state)
    new = replace(state, selected=selected)
    return _ok(new, [_selection_signal(new)])


def _handle_selection_clear(state: GridState, action: Action) -> ReduceResult:
    if not state.selected:
        return _ok(state)
    new = replace(state, selected=())
    return _ok(new, [_selection_signal(new)])


def _handle_selection_mode_set(state: GridState, action: Action) -> ReduceResult:
    mode = action.payload["mode"]
    selected = selection.change_mode(state.selected, mode)
    new = replace(state, selection_mode=mode, selected=selected)
    signals = [_selection_signal(new)] if selected != state.selected else []
    return _ok(new, signals)


# ---------------------------------------------------------------------------
# Affordances
# ---------------------------------------------------------------------------


def _handle_flags_set(state: GridState, action: Action) -> ReduceResult:
    return _ok(replace(state, **action.payload))


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    "data.set": _handle_data_set,
    "columns.set": _handle_columns_set,
    "search.set": _handle_search_set,
    "sort.toggle": _handle_sort_toggle,
    "sort.set": _handle_sort_set,
    "page.first": _handle_page_first,
    "page.previous": _handle_page_previous,
    "page.next": _handle_page_next,
    "page.last": _handle_page_last,
    "page.goto": _handle_page_goto,
    "page.set": _handle_page_set,
    "page_size.set": _handle_page_size_set,
    "row.click": _handle_row_click,
    "selection.set": _handle_selection_set,
    "selection.clear": _handle_selection_clear,
    "selection_mode.set": _handle_selection_mode_set,
    "flags.set": _handle_flags_set,
}
