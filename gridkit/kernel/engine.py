"""
gridkit Kernel — Engine

Sits between the pure functions (reducer, projection) and the host
(attribute writes, user gestures, event listeners). Owns one GridState.

Every dispatch runs validate → reduce → commit → project → render hooks as
one synchronous pass, then delivers signals to listeners. A dispatch started
from inside a pass (e.g. from a render hook) is refused.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Any, Callable, Iterable

from gridkit.config import settings
from gridkit.kernel import selection
from gridkit.kernel.actions import make_action
from gridkit.kernel.attributes import parse_attribute
from gridkit.kernel.projection import TableView, project
from gridkit.kernel.reducer import empty_state, reduce
from gridkit.kernel.types import (
    ASCENDING,
    SIGNAL_NAMES,
    Action,
    GridState,
    ReduceResult,
    Row,
    Signal,
)
from gridkit.kernel.validation import validate_action, validate_snapshot

logger = logging.getLogger(__name__)

Listener = Callable[[Signal], None]
RenderHook = Callable[[TableView], None]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ReentrantDispatchError(RuntimeError):
    """An action was dispatched while another dispatch was still in progress."""

    pass


class InvalidSnapshotError(ValueError):
    """A snapshot handed to restore() is malformed. Nothing was restored."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Invalid snapshot: " + "; ".join(errors))


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class GridEngine:
    """
    One data grid's engine.

    Usage:
        engine = GridEngine(attributes={"data": rows_json, "columns": cols_json, "sortable": ""})
        engine.on("sort-changed", lambda signal: print(signal.detail))
        engine.click_header("name")
        engine.view.rows
    """

    def __init__(
        self,
        *,
        attributes: dict[str, Any] | None = None,
        page_size: int | None = None,
        strict: bool | None = None,
    ) -> None:
        self.default_page_size = page_size or settings.DEFAULT_PAGE_SIZE
        self.strict = settings.STRICT_ATTRIBUTES if strict is None else strict
        self._state = empty_state(self.default_page_size)
        self._view: TableView | None = None
        self._listeners: dict[str, list[Listener]] = {name: [] for name in SIGNAL_NAMES}
        self._render_hooks: list[RenderHook] = []
        self._dispatching = False

        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    # -- state --

    @property
    def state(self) -> GridState:
        return self._state

    @property
    def view(self) -> TableView:
        if self._view is None:
            self._view = project(self._state)
        return self._view

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def total_pages(self) -> int:
        return self.view.footer.total_pages

    @property
    def selected_positions(self) -> list[int]:
        return list(self._state.selected)

    @property
    def selected_rows(self) -> list[Row]:
        return copy.deepcopy(selection.selected_rows(self._state.rows, self._state.selected))

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready copy of the current state; shares nothing with it."""
        return copy.deepcopy(self._state.to_dict())

    def restore(self, snapshot: dict[str, Any]) -> None:
        """
        Replace the state with one taken by snapshot(). The page is clamped
        and the selection trimmed to valid rows; no events fire and render
        hooks are not called. Raises InvalidSnapshotError, leaving the state
        untouched, when any field is malformed.
        """
        if self._dispatching:
            raise ReentrantDispatchError("cannot restore while a dispatch is in progress")

        snap = copy.deepcopy(snapshot)
        errors = validate_snapshot(snap)
        if errors:
            logger.warning("engine: rejected snapshot: %s", "; ".join(errors))
            raise InvalidSnapshotError(errors)

        state = GridState.from_dict(snap)
        state = replace(
            state,
            selected=selection.replace(state.selection_mode, state.selected, len(state.rows)),
        )
        self._state = reduce(state, make_action("page.set", page=state.current_page)).state
        self._view = None

    # -- subscriptions --

    def on(self, event: str, callback: Listener) -> None:
        """Listen for one of the grid's events (see types.SIGNAL_NAMES)."""
        if event not in self._listeners:
            raise ValueError(f"Unknown grid event: {event}")
        if callback not in self._listeners[event]:
            self._listeners[event].append(callback)

    def off(self, event: str, callback: Listener) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def on_render(self, hook: RenderHook) -> None:
        """Called with the rebuilt TableView after every applied action."""
        if hook not in self._render_hooks:
            self._render_hooks.append(hook)

    # -- dispatch --

    def set_attribute(self, name: str, value: Any) -> ReduceResult | None:
        """Apply an attribute write. Returns None for unobserved attributes."""
        action = parse_attribute(
            name,
            value,
            strict=self.strict,
            default_page_size=self.default_page_size,
        )
        if action is None:
            return None
        return self.dispatch(action)

    def dispatch(self, action: Action) -> ReduceResult:
        """
        Validate → reduce → commit → project → render hooks, then signals.
        Rejected actions leave state untouched and emit nothing. Once the
        state is committed its signals are delivered even if a render hook
        raises; the hook's exception propagates afterwards.
        """
        if self._dispatching:
            raise ReentrantDispatchError(
                f"cannot dispatch {action.type!r} while another dispatch is in progress"
            )

        self._dispatching = True
        committed = False
        try:
            errors = validate_action(action.type, action.payload)
            if errors:
                logger.warning("engine: rejected %s: %s", action.type, "; ".join(errors))
                return ReduceResult(state=self._state, applied=False, error="; ".join(errors))

            result = reduce(self._state, action)
            if not result.applied:
                logger.debug("engine: %s not applied: %s", action.type, result.error)
                return result

            self._state = result.state
            self._view = project(self._state)
            committed = True
            for hook in list(self._render_hooks):
                hook(self._view)
        finally:
            self._dispatching = False
            if committed:
                self._emit(result.signals)

        return result

    def _emit(self, signals: list[Signal]) -> None:
        for signal in signals:
            logger.debug("engine: %s %s", signal.name, signal.detail)
            for callback in list(self._listeners.get(signal.name, [])):
                try:
                    callback(signal)
                except Exception:
                    logger.exception("engine: %s listener failed", signal.name)

    # -- data source --

    def set_data(self, rows: list[Row] | str) -> ReduceResult | None:
        return self.set_attribute("data", rows)

    def set_columns(self, columns: list[dict[str, Any]] | str) -> ReduceResult | None:
        return self.set_attribute("columns", columns)

    # -- gestures --

    def search(self, query: str) -> ReduceResult:
        return self.dispatch(make_action("search.set", query=query, source="user"))

    def click_header(self, column: str) -> ReduceResult:
        return self.dispatch(make_action("sort.toggle", column=column, source="user"))

    def sort_by(self, column: str | None, direction: str = ASCENDING) -> ReduceResult:
        return self.dispatch(make_action("sort.set", column=column, direction=direction))

    def first_page(self) -> ReduceResult:
        return self.dispatch(make_action("page.first", source="user"))

    def previous_page(self) -> ReduceResult:
        return self.dispatch(make_action("page.previous", source="user"))

    def next_page(self) -> ReduceResult:
        return self.dispatch(make_action("page.next", source="user"))

    def last_page(self) -> ReduceResult:
        return self.dispatch(make_action("page.last", source="user"))

    def go_to_page(self, page: int) -> ReduceResult:
        return self.dispatch(make_action("page.goto", page=page, source="user"))

    def click_row(self, index: int) -> ReduceResult:
        """Click the row at `index` within the current page."""
        return self.dispatch(make_action("row.click", index=index, source="user"))

    # -- selection --

    def select_positions(self, positions: Iterable[int]) -> ReduceResult:
        return self.dispatch(make_action("selection.set", positions=list(positions)))

    def clear_selection(self) -> ReduceResult:
        return self.dispatch(make_action("selection.clear"))

    def set_selection_mode(self, mode: str) -> ReduceResult | None:
        return self.set_attribute("selectable", mode)
