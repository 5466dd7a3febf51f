"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cardbinder.toml only contains
overrides. A missing file behaves exactly like an empty one.
"""

from __future__ import annotations

from pydantic import BaseModel

from cardbinder.domain.nonzero import PositiveU32
from cardbinder.domain.state import (
    DEFAULT_CAPACITY,
    DEFAULT_CARD_NUMBER,
    DEFAULT_COLS,
    DEFAULT_PAGES,
    DEFAULT_ROWS,
    BinderState,
)


class BinderConfig(BaseModel):
    """[binder] section — geometry for a fresh state."""

    model_config = {"frozen": True}

    rows: PositiveU32 = DEFAULT_ROWS
    cols: PositiveU32 = DEFAULT_COLS
    pages: PositiveU32 = DEFAULT_PAGES


class CardsConfig(BaseModel):
    """[cards] section."""

    model_config = {"frozen": True}

    capacity: PositiveU32 = DEFAULT_CAPACITY
    start: PositiveU32 = DEFAULT_CARD_NUMBER


class StateConfig(BaseModel):
    """[state] section — where the state record lives."""

    model_config = {"frozen": True}

    path: str = ".cardbinder/state.json"
    autosave: bool = True


def default_state(binder: BinderConfig, cards: CardsConfig) -> BinderState:
    """State used when nothing has been saved yet.

    A start card beyond the capacity is pulled down to the capacity.
    """
    return BinderState(
        card_number=min(cards.start, cards.capacity),
        capacity=cards.capacity,
        rows=binder.rows,
        cols=binder.cols,
        pages=binder.pages,
    )
