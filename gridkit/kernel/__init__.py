"""
gridkit Kernel — the data grid's view engine.

Components:
  pipeline    — filter → sort → page window  (pure)
  selection   — selected source positions    (pure)
  reducer     — (state, action) → state       (pure, deterministic)
  projection  — state → TableView             (pure)
  attributes  — untyped attribute values → typed actions
  engine      — owns one state; dispatch, render hooks, events
"""

from gridkit.kernel.actions import make_action
from gridkit.kernel.attributes import AttributeParseError, parse_attribute
from gridkit.kernel.engine import GridEngine, InvalidSnapshotError, ReentrantDispatchError
from gridkit.kernel.models import ColumnDescriptor
from gridkit.kernel.pipeline import apply_filter, apply_sort, derive, paginate, total_pages
from gridkit.kernel.projection import TableView, project
from gridkit.kernel.reducer import empty_state, reduce, replay
from gridkit.kernel.types import Action, GridState, ReduceResult, Signal
from gridkit.kernel.validation import validate_action, validate_snapshot

__all__ = [
    "GridEngine",
    "ReentrantDispatchError",
    "InvalidSnapshotError",
    "AttributeParseError",
    "parse_attribute",
    "make_action",
    "validate_action",
    "validate_snapshot",
    "reduce",
    "replay",
    "empty_state",
    "apply_filter",
    "apply_sort",
    "paginate",
    "total_pages",
    "derive",
    "project",
    "TableView",
    "ColumnDescriptor",
    "Action",
    "GridState",
    "ReduceResult",
    "Signal",
]
