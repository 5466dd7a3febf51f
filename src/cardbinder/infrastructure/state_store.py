"""JSON persistence for :class:`BinderState`.

The record on disk is a flat JSON object of plain integers. Loading is
forgiving: a missing file, a partial record, or a corrupt one all yield a
usable state, so a bad save never locks the user out.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cardbinder.domain.state import BinderState

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes one state record at a fixed path."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self, defaults: BinderState | None = None) -> BinderState:
        """Load the saved state.

        Fields missing from the record take their value from *defaults*
        (the built-in defaults when None). An unreadable or invalid record
        is logged and replaced by *defaults* as a whole.
        """
        base = defaults if defaults is not None else BinderState.default()
        if not self.exists():
            logger.debug("No saved state at %s, using defaults", self._path)
            return base

        try:
            raw: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read saved state %s", self._path, exc_info=True)
            return base

        if not isinstance(raw, dict):
            logger.warning("Saved state %s is not a JSON object", self._path)
            return base

        try:
            state = BinderState.model_validate({**base.model_dump(), **raw})
        except ValidationError as exc:
            logger.warning("Saved state %s is invalid: %s", self._path, exc)
            return base

        logger.debug("Loaded state from %s", self._path)
        return state

    def save(self, state: BinderState) -> None:
        """Write *state*, creating parent directories as needed.

        Raises:
            OSError: If the file cannot be written.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(state.model_dump_json(indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved state to %s", self._path)
