"""LocatorService — the API a front-end drives.

Read surfaces:
- locate: where the current card sits in the binder
- locate_index: which card a 0-based slot index holds, and where

Write surfaces (each validated; a rejection keeps the prior state):
- set_card_number / step / next_card / previous_card
- set_capacity
- set_rows / set_cols / set_pages
- save
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cardbinder.domain.binder import Binder, BinderSlot
from cardbinder.domain.card_number import SlotIndex
from cardbinder.domain.nonzero import U32_MAX
from cardbinder.domain.state import BinderState
from cardbinder.domain.validation import ValidationResult
from cardbinder.infrastructure.state_store import StateStore
from cardbinder.services.base import BaseService
from cardbinder.services.result import ServiceResult
from cardbinder.services.telemetry import disable_telemetry, enable_telemetry, traced

if TYPE_CHECKING:
    from cardbinder.config.settings import CardBinderSettings

logger = logging.getLogger(__name__)


def _slot_data(binder: Binder, slot: BinderSlot) -> dict[str, Any]:
    return {
        "index": slot.index.get(),
        "page": slot.page,
        "pages": binder.pages,
        "row": slot.row,
        "col": slot.col,
        "page_slot": slot.page_slot,
        "page_slots": binder.total_page_slots(),
        "in_binder": slot.is_within(binder),
    }


def _past_last_page(binder: Binder, slot: BinderSlot) -> str:
    return f"Slot {slot.index.get()} is on page {slot.page}, past the last page ({binder.pages})"


class LocatorService(BaseService):
    """Locates cards and edits the card number, capacity, and geometry."""

    @classmethod
    def from_settings(cls, settings: CardBinderSettings) -> LocatorService:
        """Load the saved state named by *settings*, falling back to its defaults."""
        store = StateStore(settings.state_path)
        state = store.load(settings.default_state())
        if settings.telemetry:
            enable_telemetry()
        else:
            disable_telemetry()
        return cls(state, store=store, autosave=settings.state.autosave)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @traced
    def locate(self) -> ServiceResult:
        """Page, row, and column of the current card."""
        state = self._state
        binder = state.binder()
        slot = BinderSlot.from_card_number(binder, state.current_card())

        warnings: list[str] = []
        if not slot.is_within(binder):
            warnings.append(_past_last_page(binder, slot))

        data = {
            "card_number": state.card_number,
            "capacity": state.capacity,
            **_slot_data(binder, slot),
        }
        return ServiceResult(ok=True, op="locate", data=data, warnings=warnings)

    @traced
    def locate_index(self, index: int) -> ServiceResult:
        """Card number and position for a 0-based slot *index*.

        The capacity is not enforced here; an index past it is reported
        with a warning.
        """
        op = "locate_index"
        if not 0 <= index <= U32_MAX:
            return ServiceResult.failure(
                op,
                "INDEX_OUT_OF_RANGE",
                f"Slot index must be between 0 and {U32_MAX}",
                index=index,
            )

        binder = self._state.binder()
        slot_index = SlotIndex.new(index)
        slot = BinderSlot.from_index(binder, slot_index)
        card = slot_index.checked_to_card_number()

        warnings: list[str] = []
        if card is None:
            warnings.append(f"Slot index {index} has no card number")
        elif card.get() > self._state.capacity:
            warnings.append(f"Card {card.get()} exceeds the capacity ({self._state.capacity})")
        if not slot.is_within(binder):
            warnings.append(_past_last_page(binder, slot))

        data = {
            "card_number": card.get() if card is not None else None,
            **_slot_data(binder, slot),
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # Card number and capacity
    # ------------------------------------------------------------------

    @traced
    def set_card_number(self, card_number: int) -> ServiceResult:
        op = "set_card_number"
        updated = self._state.with_card_number(card_number)
        if updated is None:
            logger.debug("Rejected card number %s (capacity %s)", card_number, self._state.capacity)
            return ServiceResult.failure(
                op,
                "INVALID_CARD_NUMBER",
                f"Card number must be between 1 and {self._state.capacity}",
                data=self._state.model_dump(),
                card_number=card_number,
            )
        return self._apply(op, updated)

    @traced
    def step(self, delta: int) -> ServiceResult:
        """Move the card number by *delta*, stopping at 1 and the capacity."""
        updated = self._state.step(delta)
        warnings: list[str] = []
        if delta and updated.card_number == self._state.card_number:
            edge = "first" if delta < 0 else "last"
            warnings.append(f"Already at the {edge} card ({updated.card_number})")
        return self._apply("step", updated, warnings)

    def next_card(self) -> ServiceResult:
        return self.step(1)

    def previous_card(self) -> ServiceResult:
        return self.step(-1)

    @traced
    def set_capacity(self, capacity: int) -> ServiceResult:
        """Change the capacity; the current card is pulled down if it no longer fits."""
        op = "set_capacity"
        updated = self._state.with_capacity(capacity)
        if updated is None:
            return ServiceResult.failure(
                op,
                "INVALID_CAPACITY",
                f"Capacity must be between 1 and {U32_MAX}",
                data=self._state.model_dump(),
                capacity=capacity,
            )

        warnings: list[str] = []
        if updated.card_number != self._state.card_number:
            warnings.append(
                f"Card number {self._state.card_number} clamped to {updated.card_number}"
            )
        return self._apply(op, updated, warnings)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @traced
    def set_rows(self, rows: int) -> ServiceResult:
        binder = self._state.binder()
        return self._apply_geometry("set_rows", binder, binder.set_rows(rows))

    @traced
    def set_cols(self, cols: int) -> ServiceResult:
        binder = self._state.binder()
        return self._apply_geometry("set_cols", binder, binder.set_cols(cols))

    @traced
    def set_pages(self, pages: int) -> ServiceResult:
        binder = self._state.binder()
        return self._apply_geometry("set_pages", binder, binder.set_pages(pages))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @traced
    def save(self) -> ServiceResult:
        op = "save"
        if self._store is None:
            return ServiceResult.failure(op, "NO_STORE", "No state store is attached")
        try:
            self._store.save(self._state)
        except OSError as exc:
            logger.warning("Saving state to %s failed", self._store.path, exc_info=True)
            return ServiceResult.failure(
                op, "SAVE_FAILED", str(exc), path=str(self._store.path)
            )
        return ServiceResult(ok=True, op=op, data={"path": str(self._store.path)})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply(
        self,
        op: str,
        state: BinderState,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        warnings = list(warnings or [])
        self._commit(state, warnings)
        return ServiceResult(ok=True, op=op, data=state.model_dump(), warnings=warnings)

    def _apply_geometry(
        self,
        op: str,
        binder: Binder,
        check: ValidationResult,
    ) -> ServiceResult:
        if not check.valid:
            logger.debug("Rejected %s: %s", op, "; ".join(check.errors))
            return ServiceResult.failure(
                op,
                "INVALID_GEOMETRY",
                check.errors[0],
                data=self._state.model_dump(),
            )
        return self._apply(op, self._state.with_binder(binder))
