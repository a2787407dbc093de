"""Column descriptors and event payloads for the grid engine."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

SortDirection = Literal["ascending", "descending", "none"]


class ColumnDescriptor(BaseModel):
    """One column of the grid: which row key it reads and how it is labelled."""

    model_config = {"extra": "ignore", "frozen": True}

    key: str = Field(min_length=1)
    label: str = ""
    sortable: bool | None = None
    width: str | None = None
    align: Literal["left", "center", "right"] | None = None

    @field_validator("width", mode="before")
    @classmethod
    def _width_as_text(cls, value: Any) -> Any:
        # Numeric widths are common in hand-written column JSON
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value}px"
        return value

    @model_validator(mode="before")
    @classmethod
    def _label_defaults_to_key(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("label") and isinstance(data.get("key"), str):
            return {**data, "label": data["key"]}
        return data


# ---------------------------------------------------------------------------
# Event payloads
# ---------------------------------------------------------------------------


class _Payload(BaseModel):
    # Constructed by field name, dumped by alias (the host's camelCase keys)
    model_config = {"populate_by_name": True, "frozen": True}


class SortChanged(_Payload):
    """Fired on every accepted header click or programmatic sort."""

    column: str | None
    direction: SortDirection


class SelectionChanged(_Payload):
    """Full current selection: source positions and the rows at them."""

    selected_positions: list[int] = Field(alias="selectedPositions")
    selected_rows: list[dict[str, Any]] = Field(alias="selectedRows")


class PageChanged(_Payload):
    page: int
    page_size: int = Field(alias="pageSize")
    total_pages: int = Field(alias="totalPages")


class FilterChanged(_Payload):
    query: str
    match_count: int = Field(alias="matchCount")
