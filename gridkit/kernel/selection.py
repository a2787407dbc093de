"""
gridkit Kernel — Selection Tracker

Pure helpers over a selection: a tuple of source positions in the order they
were selected. Independent of filter, sort, and page; positions index the
raw rows, so the reported rows are always the ones that were clicked.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from gridkit.kernel.types import Row


def click(mode: str, selected: tuple[int, ...], position: int) -> tuple[int, ...]:
    """
    Apply a row click.

    single:   the clicked row replaces the selection
    multiple: the clicked row's membership is toggled
    none:     nothing changes
    """
    if mode == "single":
        return (position,)
    if mode == "multiple":
        if position in selected:
            return tuple(p for p in selected if p != position)
        return selected + (position,)
    return selected


def replace(mode: str, positions: Iterable[int], count: int) -> tuple[int, ...]:
    """Selection set programmatically: valid, de-duplicated, in given order."""
    result: list[int] = []
    for p in positions:
        if 0 <= p < count and p not in result:
            result.append(p)
    if mode == "none":
        return ()
    if mode == "single":
        return tuple(result[-1:])
    return tuple(result)


def change_mode(selected: tuple[int, ...], mode: str) -> tuple[int, ...]:
    """Selection after switching modes. Single keeps the most recent pick."""
    if mode == "none":
        return ()
    if mode == "single":
        return selected[-1:]
    return selected


def selected_rows(rows: Sequence[Row], selected: Sequence[int]) -> list[Row]:
    return [rows[p] for p in selected if 0 <= p < len(rows)]
