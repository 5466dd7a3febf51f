"""Binder geometry and slot coordinates.

A binder is ``pages`` pages, each a ``rows x cols`` grid of slots. Slots
are numbered row-major within a page, pages one after another:

    page = index // (rows * cols) + 1
    row  = (index % (rows * cols)) // cols + 1
    col  = (index % (rows * cols)) % cols + 1

INVARIANT: rows, cols and pages are always >= 1. A rejected setter call
leaves every field unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from cardbinder.domain.card_number import CardNumber, SlotIndex
from cardbinder.domain.nonzero import U32_MAX, NonZero, PositiveU32, saturating_mul
from cardbinder.domain.validation import ValidationResult

_LABELS: dict[str, str] = {
    "rows": "Rows",
    "cols": "Columns",
    "pages": "Pages",
}


class Binder(BaseModel):
    """Page geometry of a card binder.

    Constructing a Binder directly with a zero dimension is a programming
    error and raises ``pydantic.ValidationError``. Input that may be invalid
    goes through :meth:`try_new` and the ``set_*`` methods instead.
    """

    model_config = {"validate_assignment": True}

    rows: PositiveU32 = Field(description="Rows on each page")
    cols: PositiveU32 = Field(description="Columns on each page")
    pages: PositiveU32 = Field(description="Pages in the binder")

    @classmethod
    def new(cls, rows: int, cols: int, pages: int) -> Binder:
        return cls(rows=rows, cols=cols, pages=pages)

    @classmethod
    def try_new(cls, rows: int, cols: int, pages: int) -> Binder | None:
        """Build a binder, or return None if any dimension is zero or out of range."""
        if any(NonZero.new(v) is None for v in (rows, cols, pages)):
            return None
        return cls(rows=rows, cols=cols, pages=pages)

    def set_rows(self, rows: int) -> ValidationResult:
        return self._set_dimension("rows", rows)

    def set_cols(self, cols: int) -> ValidationResult:
        return self._set_dimension("cols", cols)

    def set_pages(self, pages: int) -> ValidationResult:
        return self._set_dimension("pages", pages)

    def _set_dimension(self, name: str, value: int) -> ValidationResult:
        checked = NonZero.new(value)
        if checked is None:
            label = _LABELS[name]
            if value < 1:
                error = f"{label} should be non-zero"
            else:
                error = f"{label} should be at most {U32_MAX}"
            return ValidationResult(valid=False, errors=[error])
        setattr(self, name, checked.get())
        return ValidationResult(valid=True)

    def total_page_slots(self) -> int:
        """Slots on one page, saturating at ``U32_MAX``."""
        return saturating_mul(self.rows, self.cols)

    def total_slots(self) -> int:
        """Slots in the whole binder, saturating at ``U32_MAX``."""
        return saturating_mul(self.rows, self.cols, self.pages)


class BinderSlot(BaseModel):
    """Where a slot index falls in a binder.

    A query result: produced by :meth:`from_index` or
    :meth:`from_card_number`, never edited. ``page`` may exceed the
    binder's page count when the index lies past its last slot; see
    :meth:`is_within`.
    """

    model_config = {"frozen": True}

    page: int = Field(ge=1, description="1-based page number")
    row: PositiveU32 = Field(description="1-based row on the page")
    col: PositiveU32 = Field(description="1-based column on the page")
    page_slot: int = Field(ge=1, description="1-based position on the page")
    index: SlotIndex

    @classmethod
    def from_index(cls, binder: Binder, index: SlotIndex) -> BinderSlot:
        # Exact product: total_page_slots() saturates and would misplace the slot.
        page_slots = binder.rows * binder.cols
        offset = index.get() % page_slots
        return cls(
            page=index.get() // page_slots + 1,
            row=offset // binder.cols + 1,
            col=offset % binder.cols + 1,
            page_slot=offset + 1,
            index=index,
        )

    @classmethod
    def from_card_number(cls, binder: Binder, card_number: CardNumber) -> BinderSlot:
        return cls.from_index(binder, card_number.to_index())

    def is_within(self, binder: Binder) -> bool:
        """Whether this slot lies on one of *binder*'s pages."""
        return self.page <= binder.pages

    def card_number(self) -> CardNumber:
        return self.index.to_card_number()
