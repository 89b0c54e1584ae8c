"""
Tests for the JSON preference store and environment settings.
"""

import json
from pathlib import Path

from colorchooser.preferences import (CONFIG_DIR_ENV, FONT_SIZE_ENV, PreferencesStore,
                                      config_dir, ui_font_size)


class TestEnvironment:
    """Directory and font size overrides."""

    def test_config_dir_override(self, tmp_path):
        assert config_dir() == tmp_path

    def test_config_dir_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_DIR_ENV)
        assert config_dir() == Path.home() / ".config" / "colorchooser"

    def test_font_size(self, monkeypatch):
        assert ui_font_size() is None
        monkeypatch.setenv(FONT_SIZE_ENV, "14.5")
        assert ui_font_size() == 14.5
        monkeypatch.setenv(FONT_SIZE_ENV, "-2")
        assert ui_font_size() is None

    def test_invalid_font_size_is_logged(self, monkeypatch, caplog):
        monkeypatch.setenv(FONT_SIZE_ENV, "big")
        assert ui_font_size() is None
        assert "Ignoring invalid" in caplog.text


class TestPreferencesStore:
    """Loading, saving and clearing the backing file."""

    def test_round_trip(self, tmp_path):
        store = PreferencesStore("prefs.json")
        store.put("answer", 42)
        store.put("colors", ["FF0000"])
        assert store.save() is None
        assert store.path == tmp_path / "prefs.json"

        again = PreferencesStore("prefs.json")
        assert again.load() is None
        assert again.get("answer") == 42
        assert again.get("colors") == ["FF0000"]
        assert again.get("missing", "default") == "default"

    def test_directory_is_fixed_at_creation(self, tmp_path, monkeypatch):
        store = PreferencesStore("prefs.json")
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path / "elsewhere"))
        assert store.directory == tmp_path
        assert store.path == tmp_path / "prefs.json"
        assert PreferencesStore("prefs.json").path == tmp_path / "elsewhere" / "prefs.json"

    def test_missing_file_is_not_an_error(self):
        store = PreferencesStore("none.json")
        assert store.load() is None
        assert store.values == {}

    def test_save_creates_directory(self, tmp_path):
        store = PreferencesStore("prefs.json", tmp_path / "nested" / "dir")
        store.put("a", 1)
        assert store.save() is None
        assert json.loads((tmp_path / "nested" / "dir" / "prefs.json").read_text()) == {"a": 1}

    def test_corrupt_file_returns_error(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
        store = PreferencesStore("bad.json")
        assert isinstance(store.load(), json.JSONDecodeError)
        assert store.values == {}

    def test_non_object_returns_error(self, tmp_path):
        (tmp_path / "list.json").write_text("[1, 2]", encoding="utf-8")
        assert isinstance(PreferencesStore("list.json").load(), ValueError)

    def test_unserializable_value_returns_error(self):
        store = PreferencesStore("prefs.json")
        store.put("obj", object())
        assert isinstance(store.save(), TypeError)

    def test_clear_removes_file(self, tmp_path):
        store = PreferencesStore("prefs.json")
        store.put("a", 1)
        store.save()
        assert store.clear() is None
        assert store.values == {}
        assert not (tmp_path / "prefs.json").exists()
        assert store.clear() is None
