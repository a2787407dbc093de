"""
gridkit Kernel — Action Construction

Factory for well-formed actions. Used by the engine's convenience methods,
the attribute boundary, and tests to build actions concisely.
"""

from __future__ import annotations

from typing import Any

from gridkit.kernel.types import Action


def make_action(
    type: str,
    payload: dict[str, Any] | None = None,
    *,
    source: str = "host",
    **fields: Any,
) -> Action:
    """
    Build an Action from a type plus payload fields.

    Fields may be given as a dict, as keyword arguments, or both:
        make_action("search.set", query="bob")
        make_action("page.goto", {"page": 3}, source="user")
    """
    merged: dict[str, Any] = dict(payload or {})
    merged.update(fields)
    return Action(type=type, payload=merged, source=source)
