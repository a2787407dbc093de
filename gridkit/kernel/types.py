"""
gridkit Kernel — Shared Types

Data classes used across validation, pipeline, reducer, projection, and engine.
These are the contracts that bind the kernel together.

GridState holds only inputs: rows, columns, and the view settings the user
has chosen. Filtered, sorted, and paged rows are always derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from gridkit.kernel.models import ColumnDescriptor

Row = dict[str, Any]

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

ASCENDING = "ascending"
DESCENDING = "descending"
UNSORTED = "none"

SORT_DIRECTIONS: set[str] = {ASCENDING, DESCENDING, UNSORTED}

SELECTION_MODES: set[str] = {"none", "single", "multiple"}

FLAG_NAMES: set[str] = {"sortable", "searchable", "pageable", "virtual_scroll"}

# ---------------------------------------------------------------------------
# Action type registry
# ---------------------------------------------------------------------------

ACTION_TYPES: set[str] = {
    # Data source
    "data.set",
    "columns.set",
    # Filter
    "search.set",
    # Sort
    "sort.toggle",
    "sort.set",
    # Paginator
    "page.first",
    "page.previous",
    "page.next",
    "page.last",
    "page.goto",
    "page.set",
    "page_size.set",
    # Selection
    "row.click",
    "selection.set",
    "selection.clear",
    "selection_mode.set",
    # Affordances
    "flags.set",
}

# Signal names, as the host listens for them
SORT_CHANGED = "sort-changed"
SELECTION_CHANGED = "selection-changed"
PAGE_CHANGED = "page-changed"
FILTER_CHANGED = "filter-changed"

SIGNAL_NAMES: set[str] = {SORT_CHANGED, SELECTION_CHANGED, PAGE_CHANGED, FILTER_CHANGED}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass
class GridState:
    """
    Everything one grid knows.

    - rows: the raw dataset, replaced wholesale, never patched
    - columns: column descriptors in display order
    - search_query: substring to match, empty = no filter
    - sort_column / sort_direction: at most one sorted column
    - current_page / page_size: paginator position, 1-indexed
    - selection_mode / selected: selected source positions (indexes into rows)
    - sortable / searchable / pageable / virtual_scroll: affordance flags
    """

    rows: tuple[Row, ...] = ()
    columns: tuple[ColumnDescriptor, ...] = ()
    search_query: str = ""
    sort_column: str | None = None
    sort_direction: str = UNSORTED
    current_page: int = 1
    page_size: int = 10
    selection_mode: str = "none"
    selected: tuple[int, ...] = ()
    sortable: bool = False
    searchable: bool = False
    pageable: bool = False
    virtual_scroll: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": list(self.rows),
            "columns": [c.model_dump(exclude_none=True) for c in self.columns],
            "search_query": self.search_query,
            "sort_column": self.sort_column,
            "sort_direction": self.sort_direction,
            "current_page": self.current_page,
            "page_size": self.page_size,
            "selection_mode": self.selection_mode,
            "selected": list(self.selected),
            "sortable": self.sortable,
            "searchable": self.searchable,
            "pageable": self.pageable,
            "virtual_scroll": self.virtual_scroll,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GridState:
        return cls(
            rows=tuple(d.get("rows", [])),
            columns=tuple(ColumnDescriptor.model_validate(c) for c in d.get("columns", [])),
            search_query=d.get("search_query", ""),
            sort_column=d.get("sort_column"),
            sort_direction=d.get("sort_direction", UNSORTED),
            current_page=d.get("current_page", 1),
            page_size=d.get("page_size", 10),
            selection_mode=d.get("selection_mode", "none"),
            selected=tuple(d.get("selected", [])),
            sortable=d.get("sortable", False),
            searchable=d.get("searchable", False),
            pageable=d.get("pageable", False),
            virtual_scroll=d.get("virtual_scroll", False),
        )


@dataclass
class Action:
    """
    One user gesture or host write, as an explicit value.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)
    source: str = "host"  # "host" (attribute/API) or "user" (gesture)


@dataclass
class Signal:
    """An outgoing event: a name the host listens for plus its payload."""

    name: str
    payload: BaseModel

    @property
    def detail(self) -> dict[str, Any]:
        return self.payload.model_dump(by_alias=True)


@dataclass
class ReduceResult:
    """
    Result of applying one action to a state.
    The reducer never throws — it always returns one of these.
    """

    state: GridState
    applied: bool
    signals: list[Signal] = field(default_factory=list)
    error: str | None = None
