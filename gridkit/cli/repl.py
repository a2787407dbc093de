"""REPL for the gridkit CLI."""

from __future__ import annotations

from gridkit.cli.render import render_text
from gridkit.kernel.engine import GridEngine
from gridkit.kernel.projection import TableView
from gridkit.kernel.types import SIGNAL_NAMES, ReduceResult, Signal

HELP = """
  /search <text>    Filter rows (no text clears the search)
  /sort <key>       Click a column header
  /page <n>         Go to page n
  /first /prev /next /last
                    Page navigation
  /select <i>       Click row i of the current page
  /clear            Clear the selection
  /mode <m>         Selection mode: none, single, multiple
  /size <n>         Rows per page
  /view             Print the table
  /watch [on|off]   Print the table after every change
  /help             Show this help
  /quit             Exit

  Any other text is used as the search query.
"""


class Repl:
    """Interactive REPL driving one GridEngine."""

    def __init__(self, engine: GridEngine, watch: bool = True):
        self.engine = engine
        self.running = True
        self.watch_mode = watch

        for name in sorted(SIGNAL_NAMES):
            engine.on(name, self._print_signal)
        engine.on_render(self._on_render)

    def start(self):
        """Start the REPL."""
        self._view_table()

        while self.running:
            try:
                line = input("grid > ").strip()

                if not line:
                    continue

                if line.startswith("/"):
                    self._handle_command(line)
                else:
                    self._report(self.engine.search(line))

            except (EOFError, KeyboardInterrupt):
                print()
                break

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1] if len(parts) > 1 else None

        if cmd == "/quit":
            self.running = False
            print("Goodbye.")
        elif cmd == "/search":
            self._report(self.engine.search(arg or ""))
        elif cmd == "/sort":
            if arg:
                self._report(self.engine.click_header(arg))
            else:
                print("Usage: /sort <column key>")
        elif cmd == "/page":
            number = _parse_int(arg)
            if number is None:
                print("Usage: /page <number>")
            else:
                self._report(self.engine.go_to_page(number))
        elif cmd == "/first":
            self._report(self.engine.first_page())
        elif cmd == "/prev":
            self._report(self.engine.previous_page())
        elif cmd == "/next":
            self._report(self.engine.next_page())
        elif cmd == "/last":
            self._report(self.engine.last_page())
        elif cmd == "/select":
            index = _parse_int(arg)
            if index is None or index < 0:
                print("Usage: /select <row index>")
            else:
                self._report(self.engine.click_row(index))
        elif cmd == "/clear":
            self._report(self.engine.clear_selection())
        elif cmd == "/mode":
            if arg and arg.lower() in ("none", "single", "multiple"):
                self._report(self.engine.set_selection_mode(arg.lower()))
            else:
                print("Usage: /mode none|single|multiple")
        elif cmd == "/size":
            size = _parse_int(arg)
            if size is None or size <= 0:
                print("Usage: /size <positive number>")
            else:
                self._report(self.engine.set_attribute("page-size", size))
        elif cmd == "/view":
            self._view_table()
        elif cmd == "/watch":
            if arg and arg.lower() in ["on", "off"]:
                self._toggle_watch(arg.lower() == "on")
            else:
                self._toggle_watch(not self.watch_mode)
        elif cmd == "/help":
            self._show_help()
        else:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")

    def _report(self, result: ReduceResult | None):
        if result is not None and not result.applied:
            print(f"  (not applied: {result.error})")

    def _print_signal(self, signal: Signal):
        print(f"  \033[32m{signal.name}:\033[0m {signal.detail}")

    def _on_render(self, view: TableView):
        if self.watch_mode:
            print(render_text(view))

    def _view_table(self):
        print(render_text(self.engine.view))

    def _toggle_watch(self, enable: bool):
        self.watch_mode = enable
        print(f"  Watch mode {'on' if enable else 'off'}.")

    def _show_help(self):
        print(HELP)


def _parse_int(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None
