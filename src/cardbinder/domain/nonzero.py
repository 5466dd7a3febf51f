"""Bounded integer primitives shared by every domain model.

All quantities live in the unsigned 32-bit range. Geometry dimensions,
capacities and card numbers must additionally be non-zero; the
:class:`NonZero` wrapper carries that guarantee so the guard is written once.

INVARIANT: Arithmetic on these values saturates at ``U32_MAX``, never wraps.
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import Field, RootModel

U32_MAX: Final[int] = 2**32 - 1

# Field types for pydantic models.
U32 = Annotated[int, Field(ge=0, le=U32_MAX)]
PositiveU32 = Annotated[int, Field(ge=1, le=U32_MAX)]


def saturating_mul(*factors: int) -> int:
    """Multiply non-negative *factors*, clamping the product to ``U32_MAX``."""
    product = 1
    for factor in factors:
        product *= factor
    return min(product, U32_MAX)


class NonZero(RootModel[PositiveU32]):
    """An integer in ``[1, U32_MAX]``."""

    model_config = {"frozen": True}

    @classmethod
    def new(cls, raw: int) -> NonZero | None:
        """Wrap *raw*, or return None when it is zero or out of range."""
        if not 1 <= raw <= U32_MAX:
            return None
        return cls(raw)

    def get(self) -> int:
        return self.root

    def saturating_mul(self, other: NonZero) -> NonZero:
        return NonZero(saturating_mul(self.root, other.root))
