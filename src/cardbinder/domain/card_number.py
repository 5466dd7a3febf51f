"""Card numbers and slot indices.

Two views of the same position, offset by exactly one:

- CardNumber: user-facing, 1-based, bounded by a capacity.
- SlotIndex: internal, 0-based, counted from the start of the first page.

``SlotIndex = CardNumber - 1`` and ``CardNumber = SlotIndex + 1``.
"""

from __future__ import annotations

import functools

from pydantic import RootModel

from cardbinder.domain.nonzero import U32, U32_MAX, NonZero, PositiveU32


@functools.total_ordering
class CardNumber(RootModel[PositiveU32]):
    """A 1-based card number.

    Build through :meth:`try_new` so the capacity bound is checked.
    Serializes transparently as its integer value.
    """

    model_config = {"frozen": True}

    @classmethod
    def try_new(cls, raw: int, capacity: int) -> CardNumber | None:
        """Return the card number *raw*, or None unless ``1 <= raw <= capacity``.

        A capacity of zero rejects every value.
        """
        limit = NonZero.new(capacity)
        value = NonZero.new(raw)
        if limit is None or value is None or value.get() > limit.get():
            return None
        return cls(value.get())

    def get(self) -> int:
        return self.root

    def to_index(self) -> SlotIndex:
        # root >= 1, so this never underflows
        return SlotIndex(self.root - 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CardNumber):
            return NotImplemented
        return self.root < other.root


@functools.total_ordering
class SlotIndex(RootModel[U32]):
    """A 0-based slot position.

    Any value in ``[0, U32_MAX]`` is structurally valid; whether it falls
    inside a particular binder is up to the caller.
    """

    model_config = {"frozen": True}

    @classmethod
    def new(cls, raw: int) -> SlotIndex:
        return cls(raw)

    def get(self) -> int:
        return self.root

    def checked_to_card_number(self) -> CardNumber | None:
        """Card number for this slot, or None at ``U32_MAX`` where ``+1`` overflows."""
        if self.root >= U32_MAX:
            return None
        return CardNumber(self.root + 1)

    def to_card_number(self) -> CardNumber:
        """Card number for this slot, ignoring any capacity.

        Requires ``index < U32_MAX``; use :meth:`checked_to_card_number` when
        the index may sit on the boundary.

        Raises:
            OverflowError: If the index is ``U32_MAX``.
        """
        card = self.checked_to_card_number()
        if card is None:
            msg = f"Slot index {self.root} has no card number (exceeds {U32_MAX})"
            raise OverflowError(msg)
        return card

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SlotIndex):
            return NotImplemented
        return self.root < other.root
