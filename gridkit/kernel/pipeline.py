"""
gridkit Kernel — View Pipeline

Pure functions: rows -> filter -> sort -> page window.
No state, no IO, deterministic. The reducer and the projection both derive
the visible rows through `derive()`, so the displayed rows are always
exactly paginate(sort(filter(rows))).

Every derived row keeps its source position (its index in the raw rows),
which is the identity the selection tracker uses.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, NamedTuple, Sequence, TypeVar

from gridkit.kernel.models import ColumnDescriptor
from gridkit.kernel.types import ASCENDING, DESCENDING, GridState, Row

T = TypeVar("T")


class SourceRow(NamedTuple):
    """A row plus its index in the raw dataset."""

    position: int
    row: Row


@dataclass
class Derived:
    """The pipeline's output for one state."""

    filtered: list[SourceRow]
    ordered: list[SourceRow]
    window: list[SourceRow]
    page: int
    total_pages: int
    start: int  # window offset into `ordered`
    end: int


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


def stringify(value: Any) -> str:
    """Text form of a cell value, used for searching and display."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def row_matches(row: Row, columns: Sequence[ColumnDescriptor], query: str) -> bool:
    """True if any column's value contains `query` (already casefolded)."""
    return any(query in stringify(row.get(col.key)).casefold() for col in columns)


def apply_filter(
    rows: Sequence[Row],
    columns: Sequence[ColumnDescriptor],
    query: str,
) -> list[SourceRow]:
    """
    Keep rows where at least one column contains `query`, case-insensitively.
    Empty query keeps everything. Order is always the raw order.
    """
    if not query:
        return [SourceRow(i, row) for i, row in enumerate(rows)]
    folded = query.casefold()
    return [SourceRow(i, row) for i, row in enumerate(rows) if row_matches(row, columns, folded)]


# ---------------------------------------------------------------------------
# Sort
# ---------------------------------------------------------------------------


def is_missing(value: Any) -> bool:
    """None and NaN carry no order; they sort after every present value."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _kind(value: Any) -> tuple[int, str]:
    # numbers, then text, then anything else grouped by type name
    if isinstance(value, numbers.Number):
        return (0, "")
    if isinstance(value, str):
        return (1, "")
    return (2, type(value).__name__)


def compare_values(a: Any, b: Any) -> int:
    """
    Three-way comparison without coercion, total over any mix of values.

    Missing values order last. Present values order by kind first (numbers,
    then text, then other types by type name) and by raw `<`/`>` within a
    kind. Same-kind values that cannot be ordered (two dicts) compare equal.
    """
    a_missing, b_missing = is_missing(a), is_missing(b)
    if a_missing or b_missing:
        return int(a_missing) - int(b_missing)

    kind_a, kind_b = _kind(a), _kind(b)
    if kind_a != kind_b:
        return -1 if kind_a < kind_b else 1

    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        pass
    return 0


def apply_sort(entries: Sequence[SourceRow], column: str | None, direction: str) -> list[SourceRow]:
    """
    Stable sort by one column. Unsorted (no column, or direction "none")
    returns the input order. Ties keep their input order in both directions,
    and rows missing the value stay at the end in both directions.
    """
    if not column or direction not in (ASCENDING, DESCENDING):
        return list(entries)

    sign = 1 if direction == ASCENDING else -1

    def cmp(x: SourceRow, y: SourceRow) -> int:
        a, b = x.row.get(column), y.row.get(column)
        if is_missing(a) or is_missing(b):
            return compare_values(a, b)
        return sign * compare_values(a, b)

    return sorted(entries, key=cmp_to_key(cmp))


# ---------------------------------------------------------------------------
# Paginate
# ---------------------------------------------------------------------------


def total_pages(count: int, page_size: int) -> int:
    """max(1, ceil(count / page_size)). An empty view still has one page."""
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, pages))


def page_bounds(page: int, page_size: int, count: int) -> tuple[int, int]:
    """Slice bounds [start, end) of `page` within `count` items."""
    start = min((page - 1) * page_size, count)
    end = min(page * page_size, count)
    return start, end


def paginate(items: Sequence[T], page: int, page_size: int) -> list[T]:
    start, end = page_bounds(page, page_size, len(items))
    return list(items[start:end])


# ---------------------------------------------------------------------------
# Whole pipeline
# ---------------------------------------------------------------------------


def derive(state: GridState) -> Derived:
    """Run filter -> sort -> paginate for a state."""
    filtered = apply_filter(state.rows, state.columns, state.search_query)
    ordered = apply_sort(filtered, state.sort_column, state.sort_direction)
    pages = total_pages(len(ordered), state.page_size)
    page = clamp_page(state.current_page, pages)
    start, end = page_bounds(page, state.page_size, len(ordered))
    return Derived(
        filtered=filtered,
        ordered=ordered,
        window=ordered[start:end],
        page=page,
        total_pages=pages,
        start=start,
        end=end,
    )
