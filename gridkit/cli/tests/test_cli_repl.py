"""
gridkit CLI — REPL Tests

Drive the REPL with scripted input and check what reaches the engine and
the terminal.
"""

import pytest

from gridkit.cli.repl import Repl
from gridkit.kernel.engine import GridEngine

ROWS = [
    {"id": 3, "name": "Charlie"},
    {"id": 1, "name": "Alice"},
    {"id": 2, "name": "Bob"},
]


@pytest.fixture
def engine():
    engine = GridEngine(page_size=2)
    for flag in ("sortable", "searchable", "pageable"):
        engine.set_attribute(flag, "")
    engine.set_attribute("selectable", "multiple")
    engine.set_data(ROWS)
    engine.set_columns([{"key": "id"}, {"key": "name", "label": "Name"}])
    return engine


def run(repl, monkeypatch, *lines):
    script = iter(lines)

    def fake_input(prompt):
        try:
            return next(script)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    repl.start()


class TestCommands:
    def test_sort_and_page(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=False), monkeypatch, "/sort name", "/next")
        assert engine.state.sort_column == "name"
        assert engine.current_page == 2
        out = capsys.readouterr().out
        assert "sort-changed:" in out
        assert "page-changed:" in out

    def test_plain_text_searches(self, engine, monkeypatch):
        run(Repl(engine, watch=False), monkeypatch, "ali")
        assert engine.state.search_query == "ali"
        assert [r.row["name"] for r in engine.view.rows] == ["Alice"]

    def test_search_command_without_text_clears(self, engine, monkeypatch):
        run(Repl(engine, watch=False), monkeypatch, "/search bob", "/search")
        assert engine.state.search_query == ""

    def test_select_and_clear(self, engine, monkeypatch):
        repl = Repl(engine, watch=False)
        run(repl, monkeypatch, "/select 0", "/select 1")
        assert engine.selected_positions == [0, 1]
        run(repl, monkeypatch, "/clear")
        assert engine.selected_positions == []

    def test_mode_and_size(self, engine, monkeypatch):
        run(Repl(engine, watch=False), monkeypatch, "/mode single", "/size 1")
        assert engine.state.selection_mode == "single"
        assert engine.total_pages == 3

    def test_navigation_commands(self, engine, monkeypatch):
        repl = Repl(engine, watch=False)
        run(repl, monkeypatch, "/last")
        assert engine.current_page == 2
        run(repl, monkeypatch, "/prev")
        assert engine.current_page == 1
        run(repl, monkeypatch, "/page 2", "/first")
        assert engine.current_page == 1

    def test_quit_stops_loop(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=False), monkeypatch, "/quit", "/next")
        assert engine.current_page == 1
        assert "Goodbye." in capsys.readouterr().out


class TestFeedback:
    def test_rejection_is_reported(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=False), monkeypatch, "/select 9")
        assert "(not applied: ROW_OUT_OF_RANGE" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "line, usage",
        [
            ("/sort", "Usage: /sort"),
            ("/page two", "Usage: /page"),
            ("/select -1", "Usage: /select"),
            ("/mode all", "Usage: /mode"),
            ("/size 0", "Usage: /size"),
        ],
    )
    def test_usage_messages(self, engine, monkeypatch, capsys, line, usage):
        run(Repl(engine, watch=False), monkeypatch, line)
        assert usage in capsys.readouterr().out

    def test_unknown_command(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=False), monkeypatch, "/dance")
        assert "Unknown command: /dance" in capsys.readouterr().out

    def test_help(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=False), monkeypatch, "/help")
        assert "/select <i>" in capsys.readouterr().out


class TestWatch:
    def test_watch_prints_table_after_change(self, engine, monkeypatch, capsys):
        run(Repl(engine, watch=True), monkeypatch, "/next")
        out = capsys.readouterr().out
        assert "Page 1 of 2" in out
        assert "Page 2 of 2" in out

    def test_watch_toggle(self, engine, monkeypatch, capsys):
        repl = Repl(engine, watch=True)
        run(repl, monkeypatch, "/watch off")
        assert repl.watch_mode is False
        run(repl, monkeypatch, "/watch")
        assert repl.watch_mode is True
        assert "Watch mode on." in capsys.readouterr().out
