"""
Tests for `domain/deliverers.py`.

Covers contract rules:
- Names are appended in order; empty and duplicate names are ignored.
- Matching is exact and case-sensitive (near-duplicates are distinct).
- Removing an absent name is a no-op.
"""

from __future__ import annotations

from domain.deliverers import add_deliverer, remove_deliverer
from domain.state import AppState


def test_add_deliverer_appends_unique_names() -> None:
    state = add_deliverer(add_deliverer(AppState(), "Carlos"), "Bruno")

    assert state.deliverers == ("Carlos", "Bruno")


def test_add_deliverer_ignores_empty_and_duplicates() -> None:
    state = add_deliverer(AppState(), "Carlos")

    assert add_deliverer(state, "") is state
    assert add_deliverer(state, "Carlos") is state


def test_near_duplicates_are_distinct() -> None:
    state = AppState()
    for name in ("Carlos", "carlos", "Carlos "):
        state = add_deliverer(state, name)

    assert state.deliverers == ("Carlos", "carlos", "Carlos ")


def test_remove_deliverer() -> None:
    state = add_deliverer(add_deliverer(AppState(), "Carlos"), "Bruno")

    assert remove_deliverer(state, "Carlos").deliverers == ("Bruno",)
    assert remove_deliverer(state, "Nobody") is state
