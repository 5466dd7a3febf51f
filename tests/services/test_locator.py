"""Tests for LocatorService."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cardbinder.config.settings import CardBinderSettings
from cardbinder.domain.nonzero import U32_MAX
from cardbinder.domain.state import BinderState
from cardbinder.infrastructure.state_store import StateStore
from cardbinder.services.locator import LocatorService
from cardbinder.services.telemetry import telemetry_enabled


class TestLocate:
    def test_first_card(self, service: LocatorService) -> None:
        result = service.locate()
        assert result.ok
        assert result.op == "locate"
        assert result.data == {
            "card_number": 1,
            "capacity": 300,
            "index": 0,
            "page": 1,
            "pages": 20,
            "row": 1,
            "col": 1,
            "page_slot": 1,
            "page_slots": 9,
            "in_binder": True,
        }
        assert result.warnings == []

    def test_card_eleven(self, service: LocatorService) -> None:
        service.set_card_number(11)
        data = service.locate().data
        assert (data["index"], data["page"], data["row"], data["col"]) == (10, 2, 1, 2)

    def test_last_card_of_first_page(self, service: LocatorService) -> None:
        service.set_card_number(9)
        data = service.locate().data
        assert (data["page"], data["row"], data["col"], data["page_slot"]) == (1, 3, 3, 9)

    def test_warns_past_last_page(self) -> None:
        service = LocatorService(BinderState(card_number=10, rows=1, cols=3, pages=2))
        result = service.locate()
        assert result.ok
        assert result.data["page"] == 4
        assert result.data["in_binder"] is False
        assert "past the last page" in result.warnings[0]


class TestLocateIndex:
    def test_inverse_lookup(self, service: LocatorService) -> None:
        result = service.locate_index(10)
        assert result.ok
        assert result.data["card_number"] == 11
        assert (result.data["page"], result.data["row"], result.data["col"]) == (2, 1, 2)
        assert result.warnings == []

    def test_beyond_capacity_warns(self, service: LocatorService) -> None:
        result = service.locate_index(300)
        assert result.ok
        assert result.data["card_number"] == 301
        assert any("exceeds the capacity" in w for w in result.warnings)

    def test_boundary_index_has_no_card(self, service: LocatorService) -> None:
        result = service.locate_index(U32_MAX)
        assert result.ok
        assert result.data["card_number"] is None
        assert any("has no card number" in w for w in result.warnings)

    @pytest.mark.parametrize("index", [-1, U32_MAX + 1])
    def test_out_of_range(self, service: LocatorService, index: int) -> None:
        result = service.locate_index(index)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INDEX_OUT_OF_RANGE"


class TestCardNumber:
    def test_set(self, service: LocatorService) -> None:
        result = service.set_card_number(42)
        assert result.ok
        assert result.data["card_number"] == 42
        assert service.state.card_number == 42

    @pytest.mark.parametrize("card_number", [0, 301])
    def test_rejected_keeps_state(self, service: LocatorService, card_number: int) -> None:
        service.set_card_number(5)
        result = service.set_card_number(card_number)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CARD_NUMBER"
        assert result.error.detail == {"card_number": card_number}
        assert result.data["card_number"] == 5
        assert service.state.card_number == 5

    def test_next_and_previous(self, service: LocatorService) -> None:
        service.next_card()
        service.next_card()
        assert service.state.card_number == 3
        service.previous_card()
        assert service.state.card_number == 2

    def test_previous_at_first_card_warns(self, service: LocatorService) -> None:
        result = service.previous_card()
        assert result.ok
        assert service.state.card_number == 1
        assert result.warnings == ["Already at the first card (1)"]

    def test_next_at_capacity_warns(self, service: LocatorService) -> None:
        service.set_card_number(300)
        result = service.next_card()
        assert service.state.card_number == 300
        assert result.warnings == ["Already at the last card (300)"]

    def test_step_clamps(self, service: LocatorService) -> None:
        result = service.step(1000)
        assert result.ok
        assert service.state.card_number == 300


class TestCapacity:
    def test_raise_capacity(self, service: LocatorService) -> None:
        result = service.set_capacity(500)
        assert result.ok
        assert result.data["capacity"] == 500
        assert result.warnings == []

    def test_lower_capacity_clamps_card(self, service: LocatorService) -> None:
        service.set_card_number(200)
        result = service.set_capacity(150)
        assert result.ok
        assert service.state.card_number == 150
        assert result.warnings == ["Card number 200 clamped to 150"]

    def test_zero_rejected(self, service: LocatorService) -> None:
        result = service.set_capacity(0)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CAPACITY"
        assert service.state.capacity == 300


class TestGeometry:
    def test_set_rows(self, service: LocatorService) -> None:
        result = service.set_rows(4)
        assert result.ok
        assert (service.state.rows, service.state.cols, service.state.pages) == (4, 3, 20)

    def test_set_cols(self, service: LocatorService) -> None:
        assert service.set_cols(5).ok
        assert service.state.cols == 5

    def test_set_pages(self, service: LocatorService) -> None:
        assert service.set_pages(2).ok
        assert service.state.pages == 2

    @pytest.mark.parametrize("op", ["set_rows", "set_cols", "set_pages"])
    def test_zero_rejected_keeps_geometry(self, service: LocatorService, op: str) -> None:
        before = service.state
        result = getattr(service, op)(0)
        assert not result.ok
        assert result.op == op
        assert result.error is not None
        assert result.error.code == "INVALID_GEOMETRY"
        assert "non-zero" in result.error.message
        assert service.state == before

    def test_geometry_changes_location(self, service: LocatorService) -> None:
        service.set_card_number(11)
        service.set_cols(4)
        data = service.locate().data
        assert data["page_slots"] == 12
        assert (data["page"], data["row"], data["col"]) == (1, 3, 3)


class TestPersistence:
    def test_save_without_store(self, service: LocatorService) -> None:
        result = service.save()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NO_STORE"

    def test_save(self, store: StateStore) -> None:
        service = LocatorService(BinderState(card_number=12), store=store)
        result = service.save()
        assert result.ok
        assert result.data["path"] == str(store.path)
        assert store.load().card_number == 12

    def test_save_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        service = LocatorService(store=StateStore(blocker / "state.json"))
        result = service.save()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "SAVE_FAILED"

    def test_autosave(self, stored_service: LocatorService, store: StateStore) -> None:
        stored_service.set_card_number(77)
        stored_service.set_pages(5)
        saved = json.loads(store.path.read_text())
        assert saved["card_number"] == 77
        assert saved["pages"] == 5

    def test_rejection_does_not_save(self, stored_service: LocatorService, store: StateStore) -> None:
        stored_service.set_rows(0)
        assert not store.exists()

    def test_autosave_failure_is_warning(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        service = LocatorService(store=StateStore(blocker / "state.json"), autosave=True)
        result = service.set_card_number(3)
        assert result.ok
        assert service.state.card_number == 3
        assert len(result.warnings) == 1
        assert "Could not save state" in result.warnings[0]


class TestFromSettings:
    def test_fresh_state_from_config(self, tmp_path: Path) -> None:
        (tmp_path / "cardbinder.toml").write_text(
            "[binder]\nrows = 4\ncols = 4\n[cards]\ncapacity = 64\nstart = 3\n"
        )
        service = LocatorService.from_settings(CardBinderSettings.load(root=tmp_path))
        assert service.state == BinderState(card_number=3, capacity=64, rows=4, cols=4, pages=20)

    def test_loads_saved_state(self, settings: CardBinderSettings) -> None:
        StateStore(settings.state_path).save(BinderState(card_number=21, rows=2))
        service = LocatorService.from_settings(settings)
        assert service.state.card_number == 21
        assert service.state.rows == 2

    def test_changes_persist_across_sessions(self, settings: CardBinderSettings) -> None:
        LocatorService.from_settings(settings).set_card_number(99)
        assert LocatorService.from_settings(settings).state.card_number == 99

    def test_telemetry_flag(self, tmp_path: Path) -> None:
        settings = CardBinderSettings.load(root=tmp_path, telemetry=True)
        result = LocatorService.from_settings(settings).locate()
        assert result.meta is not None
        assert result.meta["telemetry"]["name"] == "LocatorService.locate"

    def test_telemetry_off_after_enabled_service(self, tmp_path: Path) -> None:
        traced_settings = CardBinderSettings.load(root=tmp_path, telemetry=True)
        LocatorService.from_settings(traced_settings)
        quiet_settings = CardBinderSettings.load(root=tmp_path, telemetry=False)
        result = LocatorService.from_settings(quiet_settings).locate()
        assert not telemetry_enabled()
        assert result.meta is None
