"""
Domain: deliverer registry.

A set of unique names kept in insertion order. Names are compared by exact,
case-sensitive string match only: "Carlos", "carlos" and "Carlos " are three
different entries.

Removing a name never touches deliveries that already copied it.
"""

from __future__ import annotations

from dataclasses import replace

from .state import AppState


def add_deliverer(state: AppState, name: str) -> AppState:
    """Append `name` unless it is empty or already registered."""

    if not name or name in state.deliverers:
        return state
    return replace(state, deliverers=state.deliverers + (name,))


def remove_deliverer(state: AppState, name: str) -> AppState:
    if name not in state.deliverers:
        return state
    return replace(state, deliverers=tuple(n for n in state.deliverers if n != name))
