"""BinderState — the flat record a front-end keeps between sessions.

Holds the current card number, its capacity, and the binder geometry as
plain integers. Every field has a default so records written by older
versions, with fields missing, still load.

INVARIANT: ``1 <= card_number <= capacity`` for every constructed state.
"""

from __future__ import annotations

from typing import Final, Self

from pydantic import BaseModel, model_validator

from cardbinder.domain.binder import Binder
from cardbinder.domain.card_number import CardNumber
from cardbinder.domain.nonzero import NonZero, PositiveU32

DEFAULT_CARD_NUMBER: Final[int] = 1
DEFAULT_CAPACITY: Final[int] = 300
DEFAULT_ROWS: Final[int] = 3
DEFAULT_COLS: Final[int] = 3
DEFAULT_PAGES: Final[int] = 20


class BinderState(BaseModel):
    """Persisted card-number and binder-geometry record."""

    model_config = {"frozen": True, "extra": "ignore"}

    card_number: PositiveU32 = DEFAULT_CARD_NUMBER
    capacity: PositiveU32 = DEFAULT_CAPACITY
    rows: PositiveU32 = DEFAULT_ROWS
    cols: PositiveU32 = DEFAULT_COLS
    pages: PositiveU32 = DEFAULT_PAGES

    @model_validator(mode="after")
    def _card_within_capacity(self) -> Self:
        if self.card_number > self.capacity:
            msg = f"card_number {self.card_number} exceeds capacity {self.capacity}"
            raise ValueError(msg)
        return self

    @classmethod
    def default(cls) -> BinderState:
        return cls()

    def binder(self) -> Binder:
        """A fresh, independently mutable Binder with this geometry."""
        return Binder(rows=self.rows, cols=self.cols, pages=self.pages)

    def current_card(self) -> CardNumber:
        return CardNumber(self.card_number)

    def with_card_number(self, card_number: int) -> BinderState | None:
        """Copy with a new card number, or None if it is outside ``[1, capacity]``."""
        card = CardNumber.try_new(card_number, self.capacity)
        if card is None:
            return None
        return self.model_copy(update={"card_number": card.get()})

    def with_capacity(self, capacity: int) -> BinderState | None:
        """Copy with a new capacity, pulling the card number down to fit.

        Returns None for a zero or out-of-range capacity.
        """
        limit = NonZero.new(capacity)
        if limit is None:
            return None
        return self.model_copy(
            update={
                "capacity": limit.get(),
                "card_number": min(self.card_number, limit.get()),
            }
        )

    def with_binder(self, binder: Binder) -> BinderState:
        return self.model_copy(
            update={"rows": binder.rows, "cols": binder.cols, "pages": binder.pages}
        )

    def step(self, delta: int) -> BinderState:
        """Move the card number by *delta*, clamped to ``[1, capacity]``."""
        target = max(1, min(self.card_number + delta, self.capacity))
        return self.model_copy(update={"card_number": target})
