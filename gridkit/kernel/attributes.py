"""
gridkit Kernel — Attribute Boundary

Converts untyped attribute values (strings, JSON blobs, whatever the host
hands over) into typed actions. This is the only place configuration is
parsed; everything downstream works on GridState.

Malformed input falls back to the attribute's default with a warning.
With strict=True it raises AttributeParseError instead. Well-formed input
behaves the same either way.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from gridkit.kernel.actions import make_action
from gridkit.kernel.models import ColumnDescriptor
from gridkit.kernel.types import SELECTION_MODES, Action, Row

logger = logging.getLogger(__name__)

# attribute name → flag field on GridState
_FLAG_ATTRIBUTES: dict[str, str] = {
    "sortable": "sortable",
    "searchable": "searchable",
    "filterable": "searchable",
    "pageable": "pageable",
    "virtual-scroll": "virtual_scroll",
}

ATTRIBUTE_NAMES: set[str] = {
    "data",
    "columns",
    "page-size",
    "current-page",
    "selectable",
    *_FLAG_ATTRIBUTES,
}


class AttributeParseError(ValueError):
    """An attribute value could not be parsed (strict mode only)."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid '{name}' attribute: {reason}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_attribute(
    name: str,
    value: Any,
    *,
    strict: bool = False,
    default_page_size: int = 10,
) -> Action | None:
    """
    Turn one attribute write into the action that applies it.
    Returns None for attribute names the grid does not observe.
    """
    if name == "data":
        return make_action("data.set", data=parse_rows(value, strict=strict))
    if name == "columns":
        return make_action("columns.set", columns=parse_columns(value, strict=strict))
    if name == "page-size":
        return make_action("page_size.set", page_size=parse_page_size(value, default_page_size, strict=strict))
    if name == "current-page":
        return make_action("page.set", page=parse_page(value, strict=strict))
    if name == "selectable":
        return make_action("selection_mode.set", mode=parse_selection_mode(value, strict=strict))
    if name in _FLAG_ATTRIBUTES:
        enabled = parse_flag(value)
        if name == "virtual-scroll" and enabled:
            logger.debug("attributes: virtual-scroll accepted; rows are not virtualized")
        return make_action("flags.set", {_FLAG_ATTRIBUTES[name]: enabled})

    logger.debug("attributes: ignoring unobserved attribute %r", name)
    return None


def parse_rows(value: Any, *, strict: bool = False) -> list[Row]:
    """`data`: a JSON array of objects, or an already-decoded list."""
    decoded = _decode_json("data", value, strict)
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        return _fallback("data", value, "expected an array", [], strict)
    if not all(isinstance(row, dict) for row in decoded):
        return _fallback("data", value, "every row must be an object", [], strict)
    return decoded


def parse_columns(value: Any, *, strict: bool = False) -> list[ColumnDescriptor]:
    """`columns`: a JSON array of column descriptors."""
    decoded = _decode_json("columns", value, strict)
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        return _fallback("columns", value, "expected an array", [], strict)
    try:
        return [
            c if isinstance(c, ColumnDescriptor) else ColumnDescriptor.model_validate(c)
            for c in decoded
        ]
    except ValidationError as e:
        return _fallback("columns", value, e.errors()[0]["msg"], [], strict)


def parse_page_size(value: Any, default: int, *, strict: bool = False) -> int:
    if value is None or value == "":
        return default
    size = _as_int(value)
    if size is None or size <= 0:
        return _fallback("page-size", value, "expected a positive integer", default, strict)
    return size


def parse_page(value: Any, *, strict: bool = False) -> int:
    """`current-page`: any integer; the reducer clamps it into range."""
    if value is None or value == "":
        return 1
    page = _as_int(value)
    if page is None:
        return _fallback("current-page", value, "expected an integer", 1, strict)
    return page


def parse_selection_mode(value: Any, *, strict: bool = False) -> str:
    if value is None or value == "":
        return "none"
    mode = str(value).strip().lower()
    if mode not in SELECTION_MODES:
        return _fallback("selectable", value, "expected none, single or multiple", "none", strict)
    return mode


def parse_flag(value: Any) -> bool:
    """Boolean attribute: present (any string, even empty) means on."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return True
    return bool(value)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fallback(name: str, value: Any, reason: str, default: Any, strict: bool) -> Any:
    if strict:
        raise AttributeParseError(name, value, reason)
    logger.warning("attributes: malformed %s (%s), using %r: %r", name, reason, default, _preview(value))
    return default


def _decode_json(name: str, value: Any, strict: bool) -> Any:
    """Decoded JSON for string values, the value itself otherwise. None = empty."""
    if value is None or value == "":
        return None
    if isinstance(value, (bytes, str)):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return _fallback(name, value, "not valid JSON", None, strict)
    if isinstance(value, tuple):
        return list(value)
    return value


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _preview(value: Any) -> str:
    text = value if isinstance(value, str) else repr(value)
    return text[:200]
