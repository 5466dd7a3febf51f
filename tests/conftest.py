"""Shared pytest fixtures for cardbinder tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from cardbinder.config.settings import CardBinderSettings
from cardbinder.domain.state import BinderState
from cardbinder.infrastructure.state_store import StateStore
from cardbinder.services.locator import LocatorService
from cardbinder.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep developer CARDBINDER_* variables out of every test."""
    for key in list(os.environ):
        if key.startswith("CARDBINDER_"):
            monkeypatch.delenv(key)
    yield
    disable_telemetry()


@pytest.fixture
def settings(tmp_path: Path) -> CardBinderSettings:
    """Settings rooted at an empty temp directory (no TOML)."""
    return CardBinderSettings.load(root=tmp_path)


@pytest.fixture
def store(tmp_path: Path) -> StateStore:
    return StateStore(tmp_path / "state.json")


@pytest.fixture
def service() -> LocatorService:
    """In-memory service on the default 3x3x20 binder, capacity 300."""
    return LocatorService(BinderState.default())


@pytest.fixture
def stored_service(store: StateStore) -> LocatorService:
    """Service that autosaves to a temp state file."""
    return LocatorService(BinderState.default(), store=store, autosave=True)
