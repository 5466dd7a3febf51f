"""Domain layer — card numbers, slot indices, and binder geometry.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, or config.
"""

from cardbinder.domain.binder import Binder, BinderSlot
from cardbinder.domain.card_number import CardNumber, SlotIndex
from cardbinder.domain.nonzero import U32_MAX, NonZero
from cardbinder.domain.state import BinderState
from cardbinder.domain.validation import ValidationResult

__all__ = [
    "U32_MAX",
    "Binder",
    "BinderSlot",
    "BinderState",
    "CardNumber",
    "NonZero",
    "SlotIndex",
    "ValidationResult",
]
