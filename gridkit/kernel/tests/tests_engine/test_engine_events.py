"""
gridkit Engine — Event Tests

Listeners receive each signal after the pass that produced it. Rejected
and no-op actions emit nothing. A failing listener is logged and does not
stop the others.
"""

import logging

import pytest

from gridkit.kernel.engine import GridEngine


@pytest.fixture
def grid(people_attributes):
    return GridEngine(attributes={**people_attributes, "page-size": "2", "selectable": "multiple"})


@pytest.fixture
def events(grid):
    received = []
    for name in ("sort-changed", "selection-changed", "page-changed", "filter-changed"):
        grid.on(name, received.append)
    return received


def test_sort_changed(grid, events):
    grid.click_header("name")
    grid.click_header("name")
    assert [(s.name, s.detail) for s in events] == [
        ("sort-changed", {"column": "name", "direction": "ascending"}),
        ("sort-changed", {"column": "name", "direction": "descending"}),
    ]


def test_page_changed(grid, events):
    grid.next_page()
    assert [s.detail for s in events] == [{"page": 2, "pageSize": 2, "totalPages": 3}]


def test_no_event_when_page_does_not_move(grid, events):
    grid.previous_page()
    grid.go_to_page(1)
    assert events == []


def test_selection_changed_reports_clicked_rows(grid, events):
    grid.click_header("name")  # Alice, Bob | Charlie, Dana | Eve
    grid.next_page()
    grid.click_row(1)
    selection = [s for s in events if s.name == "selection-changed"]
    assert selection[-1].detail == {
        "selectedPositions": [3],
        "selectedRows": [{"id": 4, "name": "Dana", "email": "dana.bobson@example.com"}],
    }


def test_filter_changed(grid, events):
    grid.search("BOB")
    assert [(s.name, s.detail) for s in events] == [("filter-changed", {"query": "BOB", "matchCount": 2})]


def test_rejected_action_emits_nothing(events):
    engine = GridEngine()
    engine.on("sort-changed", events.append)
    result = engine.click_header("name")
    assert result.applied is False
    assert result.error.startswith("SORT_DISABLED")
    assert events == []


def test_invalid_payload_is_logged(grid, caplog):
    with caplog.at_level(logging.WARNING, logger="gridkit.kernel.engine"):
        result = grid.go_to_page("two")
    assert result.applied is False
    assert "'page' must be an integer" in result.error
    assert any("rejected page.goto" in r.getMessage() for r in caplog.records)


def test_off_stops_delivery(grid):
    received = []
    grid.on("page-changed", received.append)
    grid.next_page()
    grid.off("page-changed", received.append)
    grid.next_page()
    assert len(received) == 1


def test_listener_registered_once(grid):
    received = []
    grid.on("page-changed", received.append)
    grid.on("page-changed", received.append)
    grid.next_page()
    assert len(received) == 1


def test_unknown_event_name(grid):
    with pytest.raises(ValueError, match="Unknown grid event"):
        grid.on("row-clicked", print)


def test_failing_listener_is_logged_and_others_still_run(grid, caplog):
    received = []

    def broken(signal):
        raise RuntimeError("listener bug")

    grid.on("page-changed", broken)
    grid.on("page-changed", received.append)
    with caplog.at_level(logging.ERROR, logger="gridkit.kernel.engine"):
        result = grid.next_page()

    assert result.applied
    assert grid.current_page == 2
    assert len(received) == 1
    assert any("page-changed listener failed" in r.getMessage() for r in caplog.records)


def test_events_follow_render(grid):
    order = []
    grid.on_render(lambda view: order.append("render"))
    grid.on("page-changed", lambda signal: order.append("event"))
    grid.next_page()
    assert order == ["render", "event"]
