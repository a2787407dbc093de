"""
gridkit Kernel — Projection

Pure function: state → TableView
Everything a renderer needs to paint header, body, and footer, with no
decisions left to make. Rebuilt in full after every applied action.
"""

from __future__ import annotations

from dataclasses import dataclass

from gridkit.kernel.models import ColumnDescriptor
from gridkit.kernel.pipeline import derive, stringify
from gridkit.kernel.types import ASCENDING, DESCENDING, GridState, Row

EMPTY_MESSAGE = "No data available"

SORT_INDICATORS: dict[str, str] = {
    ASCENDING: "▲",
    DESCENDING: "▼",
}
UNSORTED_INDICATOR = "⇅"


@dataclass
class HeaderCell:
    key: str
    label: str
    sortable: bool = False
    sort_direction: str | None = None  # only on the sorted column
    indicator: str | None = None  # None when the header is not sortable
    width: str | None = None
    align: str | None = None

    @property
    def aria_sort(self) -> str | None:
        return self.sort_direction


@dataclass
class DisplayRow:
    index: int  # within the page window; what row.click addresses
    position: int  # source position in the raw rows
    cells: list[str]
    row: Row
    selected: bool = False
    selectable: bool = False


@dataclass
class Footer:
    page_start: int  # 1-based, 0 when there are no rows
    page_end: int
    total_rows: int
    current_page: int
    total_pages: int
    first_disabled: bool
    previous_disabled: bool
    next_disabled: bool
    last_disabled: bool

    @property
    def summary(self) -> str:
        return f"Showing {self.page_start} to {self.page_end} of {self.total_rows}"

    @property
    def page_label(self) -> str:
        return f"Page {self.current_page} of {self.total_pages}"


@dataclass
class TableView:
    headers: list[HeaderCell]
    rows: list[DisplayRow]
    footer: Footer
    search_query: str = ""
    search_visible: bool = False
    pagination_visible: bool = False

    @property
    def empty(self) -> bool:
        return not self.rows

    @property
    def empty_message(self) -> str | None:
        return EMPTY_MESSAGE if self.empty else None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def project(state: GridState) -> TableView:
    derived = derive(state)
    selectable = state.selection_mode != "none"
    chosen = set(state.selected)

    rows = [
        DisplayRow(
            index=i,
            position=entry.position,
            cells=[stringify(entry.row.get(col.key)) for col in state.columns],
            row=entry.row,
            selected=entry.position in chosen,
            selectable=selectable,
        )
        for i, entry in enumerate(derived.window)
    ]

    total = len(derived.ordered)
    on_first = derived.page == 1
    on_last = derived.page == derived.total_pages
    footer = Footer(
        page_start=0 if total == 0 else derived.start + 1,
        page_end=derived.end,
        total_rows=total,
        current_page=derived.page,
        total_pages=derived.total_pages,
        first_disabled=on_first,
        previous_disabled=on_first,
        next_disabled=on_last,
        last_disabled=on_last,
    )

    return TableView(
        headers=[_header_cell(col, state) for col in state.columns],
        rows=rows,
        footer=footer,
        search_query=state.search_query,
        search_visible=state.searchable,
        pagination_visible=state.pageable,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _header_cell(col: ColumnDescriptor, state: GridState) -> HeaderCell:
    cell = HeaderCell(key=col.key, label=col.label, width=col.width, align=col.align)
    if not state.sortable or col.sortable is False:
        return cell

    cell.sortable = True
    if state.sort_column == col.key and state.sort_direction in SORT_INDICATORS:
        cell.sort_direction = state.sort_direction
        cell.indicator = SORT_INDICATORS[state.sort_direction]
    else:
        cell.indicator = UNSORTED_INDICATOR
    return cell
