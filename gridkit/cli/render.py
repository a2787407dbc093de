"""Plain-text rendering of a TableView (terminal channel)."""

from __future__ import annotations

from gridkit.kernel.projection import TableView

MAX_CELL_WIDTH = 32


def _fit(text: str, width: int, align: str | None) -> str:
    if len(text) > width:
        text = text[: width - 1] + "…"
    if align == "right":
        return text.rjust(width)
    if align == "center":
        return text.center(width)
    return text.ljust(width)


def render_text(view: TableView) -> str:
    """
    Render the view as an aligned text table.

    The leading column is the page-relative row index (what /select takes);
    selected rows are marked with '*'.
    """
    parts: list[str] = []

    if view.search_query:
        parts.append(f"Search: {view.search_query}")

    labels = []
    for cell in view.headers:
        label = cell.label
        if cell.indicator:
            label = f"{label} {cell.indicator}"
        labels.append(label)

    widths = [len(label) for label in labels]
    for row in view.rows:
        for i, text in enumerate(row.cells):
            widths[i] = max(widths[i], min(len(text), MAX_CELL_WIDTH))

    index_width = max(len(str(len(view.rows) - 1)), 1) + 1
    aligns = [cell.align for cell in view.headers]

    header = " " * index_width + "  " + "  ".join(
        _fit(label, widths[i], aligns[i]) for i, label in enumerate(labels)
    )
    parts.append(header.rstrip())
    parts.append("-" * len(header.rstrip()))

    if view.empty:
        parts.append(view.empty_message or "")
    for row in view.rows:
        marker = "*" if row.selected else " "
        lead = f"{row.index}{marker}".rjust(index_width)
        cells = "  ".join(_fit(text, widths[i], aligns[i]) for i, text in enumerate(row.cells))
        parts.append(f"{lead}  {cells}".rstrip())

    footer = view.footer
    parts.append("")
    parts.append(f"{footer.summary} · {footer.page_label}")

    return "\n".join(parts)
