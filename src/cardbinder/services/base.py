"""BaseService — shared state handling for cardbinder services.

A service owns the current :class:`BinderState` and, optionally, the
:class:`StateStore` it came from. Mutations replace the state wholesale;
the state itself is immutable.
"""

from __future__ import annotations

import logging

from cardbinder.domain.state import BinderState
from cardbinder.infrastructure.state_store import StateStore

logger = logging.getLogger(__name__)


class BaseService:
    """Holds the current state and persists it after each change.

    Usage::

        class LocatorService(BaseService):
            def next_card(self) -> ServiceResult:
                warnings: list[str] = []
                self._commit(self._state.step(1), warnings)
                ...
    """

    def __init__(
        self,
        state: BinderState | None = None,
        *,
        store: StateStore | None = None,
        autosave: bool = False,
    ) -> None:
        self._state = state if state is not None else BinderState.default()
        self._store = store
        self._autosave = autosave

    @property
    def state(self) -> BinderState:
        return self._state

    @property
    def store(self) -> StateStore | None:
        return self._store

    def _commit(self, state: BinderState, warnings: list[str]) -> None:
        """Adopt *state* and autosave it.

        INVARIANT: A failed save is a warning; the new state is kept.
        """
        self._state = state
        if not self._autosave or self._store is None:
            return
        try:
            self._store.save(state)
        except OSError:
            logger.warning("Autosave to %s failed", self._store.path, exc_info=True)
            warnings.append(f"Could not save state to {self._store.path}")
