"""Tests for restoring and saving settings through SettingsManager."""

from __future__ import annotations

from pathlib import Path

import pytest

from prefstore.bootstrap import capture_factory_defaults
from prefstore.errors import BootstrapError, FileWriteError, SettingsUnsupportedError
from prefstore.items import BinarySetting, ChoiceSetting, IntegerSetting, TextSetting
from prefstore.manager import SettingsManager, restore_settings, save_settings
from prefstore.registry import SettingsRegistry
from prefstore.storage import (
    FailingWriteStorage,
    LocalFileStorage,
    MemoryStorage,
    UnsupportedStorage,
)


def _values(registry: SettingsRegistry) -> dict[str, str]:
    return {item.id: item.encode() for item in registry}


class TestLoad:
    def test_absent_file_gives_empty_model(self, manager: SettingsManager):
        model = manager.load()
        assert len(model) == 0

    def test_parses_lines(self, storage: MemoryStorage, manager: SettingsManager):
        storage.text = "# note\nadv3.notify = off\n"
        model = manager.load()
        assert len(model) == 2
        assert model.lookup("adv3.notify") == "off"

    def test_unsupported_storage(self, registry: SettingsRegistry):
        manager = SettingsManager(UnsupportedStorage(), registry)
        with pytest.raises(SettingsUnsupportedError):
            manager.load()


class TestRestore:
    def test_absent_file_uses_factory_defaults(self, manager: SettingsManager):
        for item in manager.registry:
            item.decode("junk")
        defaulted = manager.restore()
        assert defaulted == manager.registry.ids()
        assert _values(manager.registry) == {
            "adv3.notify": "on",
            "ui.width": "80",
            "ui.exits": "both",
            "player.name": "Nobody",
        }

    def test_decodes_file_values(self, storage: MemoryStorage, manager: SettingsManager):
        storage.text = (
            "adv3.notify = off\n"
            "ui.width = 132\n"
            "ui.exits = ROOM\n"
            "player.name = Sir Robin\n"
        )
        assert manager.restore() == []
        assert _values(manager.registry) == {
            "adv3.notify": "off",
            "ui.width": "132",
            "ui.exits": "room",
            "player.name": "Sir Robin",
        }

    def test_missing_entry_falls_back_to_own_default(
        self, storage: MemoryStorage, manager: SettingsManager
    ):
        width = manager.registry.get("ui.width")
        width.decode("150")
        storage.text = "adv3.notify = off\nother.width = 33\n"
        defaulted = manager.restore()
        assert "ui.width" in defaulted
        assert width.encode() == "80"

    def test_malformed_values_never_raise(self, storage: MemoryStorage, manager: SettingsManager):
        storage.text = "adv3.notify = maybe\nui.width = lots\nui.exits = ???\n"
        manager.restore()
        assert _values(manager.registry)["adv3.notify"] == "off"
        assert _values(manager.registry)["ui.width"] == "80"
        assert _values(manager.registry)["ui.exits"] == "status"

    def test_unsupported_leaves_items_untouched(self, registry: SettingsRegistry):
        registry.get("adv3.notify").decode("off")
        registry.get("ui.width").decode("99")
        before = _values(registry)

        manager = SettingsManager(UnsupportedStorage(), registry)
        with pytest.raises(SettingsUnsupportedError):
            manager.restore()
        assert _values(registry) == before

    def test_requires_bootstrap(self, storage: MemoryStorage):
        reg = SettingsRegistry()
        reg.register(BinarySetting("adv3.notify", True))
        with pytest.raises(BootstrapError):
            SettingsManager(storage, reg).restore()


class TestSave:
    def test_empty_file_gets_one_line_per_item(self, storage: MemoryStorage, manager: SettingsManager):
        manager.restore()
        manager.save()
        assert storage.text == (
            "adv3.notify = on\n"
            "ui.width = 80\n"
            "ui.exits = both\n"
            "player.name = Nobody\n"
        )

    def test_save_is_idempotent(self, storage: MemoryStorage, manager: SettingsManager):
        storage.text = "# header\nforeign.key = 1\nui.width=100\n"
        manager.restore()
        manager.save()
        first = storage.text
        manager.save()
        assert storage.text == first
        assert storage.write_calls == 2

    def test_comment_and_foreign_lines_preserved(
        self, storage: MemoryStorage, manager: SettingsManager
    ):
        storage.text = "# top\nforeign.key = keep me\n\n[odd line]\nadv3.notify = on\n# bottom"
        manager.restore()
        manager.save()
        lines = storage.text.splitlines(keepends=True)
        assert lines[:5] == [
            "# top\n",
            "foreign.key = keep me\n",
            "\n",
            "[odd line]\n",
            "adv3.notify = on\n",
        ]
        assert lines[5] == "# bottom\n"

    def test_changed_value_stays_in_place(self, storage: MemoryStorage, manager: SettingsManager):
        storage.text = "# a\nui.width = 80\n# b\nadv3.notify = on\n"
        manager.restore()
        manager.registry.get("ui.width").decode("120")
        manager.save()
        lines = storage.text.splitlines()
        assert lines[1] == "ui.width = 120"
        assert lines[3] == "adv3.notify = on"

    def test_new_entries_are_appended(self, storage: MemoryStorage, manager: SettingsManager):
        original = ["# settings\n", "adv3.notify = off\n", "foreign.key = x\n"]
        storage.text = "".join(original)
        manager.restore()
        manager.save()
        lines = storage.text.splitlines(keepends=True)
        assert lines[:3] == original
        assert lines[3:] == ["ui.width = 80\n", "ui.exits = both\n", "player.name = Nobody\n"]

    def test_returns_written_model(self, manager: SettingsManager):
        model = manager.save()
        assert model.lookup("ui.exits") == "both"

    def test_open_failure_is_file_write_error(self, registry: SettingsRegistry):
        storage = FailingWriteStorage("adv3.notify = off\n")
        manager = SettingsManager(storage, registry)
        with pytest.raises(FileWriteError) as excinfo:
            manager.save()
        assert isinstance(excinfo.value.original_error, PermissionError)
        assert storage.text == "adv3.notify = off\n"

    def test_mid_write_failure_is_file_write_error(self, registry: SettingsRegistry):
        storage = FailingWriteStorage("adv3.notify = off\n", fail_after=2)
        manager = SettingsManager(storage, registry)
        with pytest.raises(FileWriteError):
            manager.save()
        assert storage.text == "adv3.notify = off\n"

    def test_unsupported_storage(self, registry: SettingsRegistry):
        with pytest.raises(SettingsUnsupportedError):
            SettingsManager(UnsupportedStorage(), registry).save()


class TestScenarios:
    def test_notify_off_with_comment(self, tmp_path: Path):
        path = tmp_path / "settings.txt"
        path.write_text("adv3.notify = off\n# custom note\n")

        reg = SettingsRegistry()
        notify = reg.register(BinarySetting("adv3.notify", True))
        capture_factory_defaults(reg)
        assert notify.factory_default == "on"

        manager = SettingsManager(LocalFileStorage(path), reg)
        restore_settings(manager)
        assert notify.value is False

        save_settings(manager)
        assert path.read_text() == "adv3.notify = off\n# custom note\n"

    def test_non_utf8_comment_survives_restore_and_save(self, tmp_path: Path):
        path = tmp_path / "settings.txt"
        original = b"# caf\xe9 note\nadv3.notify = off\n"
        path.write_bytes(original)

        reg = SettingsRegistry()
        notify = reg.register(BinarySetting("adv3.notify", True))
        capture_factory_defaults(reg)

        manager = SettingsManager(LocalFileStorage(path), reg)
        manager.restore()
        assert notify.value is False

        manager.save()
        assert path.read_bytes() == original

    def test_round_trip_through_file(self, tmp_path: Path):
        def build() -> SettingsRegistry:
            reg = SettingsRegistry()
            reg.register(BinarySetting("adv3.notify", True))
            reg.register(IntegerSetting("ui.width", 80))
            reg.register(ChoiceSetting("ui.exits", ["status", "room"]))
            reg.register(TextSetting("player.name", "Nobody"))
            capture_factory_defaults(reg)
            return reg

        storage = LocalFileStorage(tmp_path / "prefs" / "settings.txt")
        first = build()
        first.get("adv3.notify").decode("off")
        first.get("ui.width").decode("64")
        first.get("ui.exits").decode("room")
        first.get("player.name").decode("Brave Sir Robin")
        SettingsManager(storage, first).save()

        second = build()
        assert SettingsManager(storage, second).restore() == []
        assert _values(second) == _values(first)
