"""
gridkit Kernel — Action Validation

Validates action payloads before they reach the reducer.
Validation is structural (well-formed?) not semantic (will it apply?).
The reducer handles semantic checks (is selection enabled? is the column
sortable? is the clicked row on the page?).
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from gridkit.kernel.models import ColumnDescriptor
from gridkit.kernel.types import (
    ACTION_TYPES,
    FLAG_NAMES,
    SELECTION_MODES,
    SORT_DIRECTIONS,
    UNSORTED,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_action(type: str, payload: dict[str, Any]) -> list[str]:
    """
    Validate an action's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    This checks structural validity only:
    - Is the type recognized?
    - Is the payload a dict?
    - Are required fields present and of the right kind?

    It does NOT check whether the action will change anything.
    That's the reducer's job.
    """
    errors: list[str] = []

    if type not in ACTION_TYPES:
        errors.append(f"Unknown action type: {type}")
        return errors

    if not isinstance(payload, dict):
        errors.append("Payload must be a non-null object")
        return errors

    validator = _VALIDATORS.get(type)
    if validator:
        errors.extend(validator(payload))

    return errors


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Per-action validators
# ---------------------------------------------------------------------------


def _validate_data_set(p: dict) -> list[str]:
    if "data" not in p:
        return ["data.set requires 'data'"]
    data = p["data"]
    if not isinstance(data, (list, tuple)):
        return ["'data' must be a list of objects"]
    for i, row in enumerate(data):
        if not isinstance(row, dict):
            return [f"'data' item {i} must be an object"]
    return []


def _validate_columns_set(p: dict) -> list[str]:
    if "columns" not in p:
        return ["columns.set requires 'columns'"]
    columns = p["columns"]
    if not isinstance(columns, (list, tuple)):
        return ["'columns' must be a list of column descriptors"]

    errors: list[str] = []
    for i, col in enumerate(columns):
        if isinstance(col, ColumnDescriptor):
            continue
        try:
            ColumnDescriptor.model_validate(col)
        except ValidationError as e:
            errors.append(f"Invalid column {i}: {e.errors()[0]['msg']}")
    return errors


def _validate_search_set(p: dict) -> list[str]:
    if "query" not in p:
        return ["search.set requires 'query'"]
    if not isinstance(p["query"], str):
        return ["'query' must be a string"]
    return []


def _validate_sort_toggle(p: dict) -> list[str]:
    column = p.get("column")
    if not isinstance(column, str) or not column:
        return ["sort.toggle requires a non-empty 'column'"]
    return []


def _validate_sort_set(p: dict) -> list[str]:
    errors: list[str] = []
    direction = p.get("direction")
    if direction not in SORT_DIRECTIONS:
        errors.append(f"Invalid sort direction: {direction}")
    column = p.get("column")
    if direction != UNSORTED and (not isinstance(column, str) or not column):
        errors.append("sort.set requires a non-empty 'column' unless direction is 'none'")
    return errors


def _validate_page(p: dict) -> list[str]:
    if "page" not in p:
        return ["page action requires 'page'"]
    if not _is_int(p["page"]):
        return ["'page' must be an integer"]
    return []


def _validate_page_size_set(p: dict) -> list[str]:
    size = p.get("page_size")
    if not _is_int(size) or size <= 0:
        return ["page_size.set requires a positive integer 'page_size'"]
    return []


def _validate_row_click(p: dict) -> list[str]:
    index = p.get("index")
    if not _is_int(index) or index < 0:
        return ["row.click requires a non-negative integer 'index'"]
    return []


def _validate_selection_set(p: dict) -> list[str]:
    positions = p.get("positions")
    if not isinstance(positions, (list, tuple)):
        return ["selection.set requires a list 'positions'"]
    if not all(_is_int(x) for x in positions):
        return ["'positions' must contain only integers"]
    return []


def _validate_selection_mode_set(p: dict) -> list[str]:
    mode = p.get("mode")
    if mode not in SELECTION_MODES:
        return [f"Invalid selection mode: {mode}"]
    return []


def _validate_flags_set(p: dict) -> list[str]:
    if not p:
        return ["flags.set requires at least one flag"]
    errors: list[str] = []
    for name, value in p.items():
        if name not in FLAG_NAMES:
            errors.append(f"Unknown flag: {name}")
        elif not isinstance(value, bool):
            errors.append(f"Flag '{name}' must be a boolean")
    return errors


_VALIDATORS: dict[str, Any] = {
    "data.set": _validate_data_set,
    "columns.set": _validate_columns_set,
    "search.set": _validate_search_set,
    "sort.toggle": _validate_sort_toggle,
    "sort.set": _validate_sort_set,
    "page.goto": _validate_page,
    "page.set": _validate_page,
    "page_size.set": _validate_page_size_set,
    "row.click": _validate_row_click,
    "selection.set": _validate_selection_set,
    "selection_mode.set": _validate_selection_mode_set,
    "flags.set": _validate_flags_set,
}


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


def validate_snapshot(snapshot: Any) -> list[str]:
    """
    Validate a state snapshot (GridState.to_dict shape) before it is restored.
    Returns a list of error strings. Empty list = valid.

    Each field goes through the same check as the action that writes it.
    Missing fields are allowed; they take the empty-state default.
    """
    if not isinstance(snapshot, dict):
        return ["Snapshot must be an object"]

    errors: list[str] = []
    if "rows" in snapshot:
        errors.extend(_validate_data_set({"data": snapshot["rows"]}))
    if "columns" in snapshot:
        errors.extend(_validate_columns_set({"columns": snapshot["columns"]}))
    if "search_query" in snapshot:
        errors.extend(_validate_search_set({"query": snapshot["search_query"]}))
    if "sort_column" in snapshot or "sort_direction" in snapshot:
        errors.extend(
            _validate_sort_set(
                {
                    "column": snapshot.get("sort_column"),
                    "direction": snapshot.get("sort_direction", UNSORTED),
                }
            )
        )
    if "current_page" in snapshot:
        errors.extend(_validate_page({"page": snapshot["current_page"]}))
    if "page_size" in snapshot:
        errors.extend(_validate_page_size_set({"page_size": snapshot["page_size"]}))
    if "selection_mode" in snapshot:
        errors.extend(_validate_selection_mode_set({"mode": snapshot["selection_mode"]}))
    if "selected" in snapshot:
        errors.extend(_validate_selection_set({"positions": snapshot["selected"]}))

    flags = {name: snapshot[name] for name in sorted(FLAG_NAMES) if name in snapshot}
    if flags:
        errors.extend(_validate_flags_set(flags))
    return errors
