"""Tests for the persisted key/value config stores."""

import json
from pathlib import Path

import pytest

from serpcheck.config.store import JsonFileConfigStore, MemoryConfigStore
from serpcheck.errors import ConfigurationError


class TestMemoryConfigStore:
    """Tests for MemoryConfigStore."""

    def test_missing_keys_return_defaults(self) -> None:
        store = MemoryConfigStore()
        assert store.get_string("a") is None
        assert store.get_string("a", "x") == "x"
        assert store.get_int("a", 7) == 7
        assert store.get_bool("a", True) is True

    def test_values_are_stored_as_strings(self) -> None:
        store = MemoryConfigStore()
        store.set("n", 42)
        store.set("flag", True)
        assert store.get_string("n") == "42"
        assert store.get_string("flag") == "true"
        assert store.get_int("n", 0) == 42
        assert store.get_bool("flag", False) is True

    def test_set_none_removes_key(self) -> None:
        store = MemoryConfigStore({"a": "1"})
        store.set("a", None)
        assert store.get_string("a") is None
        assert store.snapshot() == {}

    def test_invalid_int_falls_back_to_default(self) -> None:
        store = MemoryConfigStore({"n": "not-a-number"})
        assert store.get_int("n", 5) == 5

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("No", False), ("off", False)])
    def test_bool_parsing(self, raw: str, expected: bool) -> None:
        store = MemoryConfigStore({"b": raw})
        assert store.get_bool("b", not expected) is expected

    def test_invalid_bool_falls_back_to_default(self) -> None:
        store = MemoryConfigStore({"b": "maybe"})
        assert store.get_bool("b", True) is True

    def test_initial_none_values_are_skipped(self) -> None:
        store = MemoryConfigStore({"a": None, "b": 2})
        assert store.snapshot() == {"b": "2"}


class TestJsonFileConfigStore:
    """Tests for JsonFileConfigStore."""

    def test_set_writes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "store.json"
        store = JsonFileConfigStore(path)
        store.set("google.pages", 3)

        assert json.loads(path.read_text()) == {"google.pages": "3"}

    def test_values_survive_reload(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        JsonFileConfigStore(path).set("google.api_key", "secret")

        reloaded = JsonFileConfigStore(path)
        assert reloaded.get_string("google.api_key") == "secret"

    def test_remove_key_persists(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        store = JsonFileConfigStore(path)
        store.set("a", "1")
        store.set("a", None)

        assert JsonFileConfigStore(path).get_string("a") is None

    def test_reads_non_string_json_values(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"n": 4, "flag": False}))
        store = JsonFileConfigStore(path)
        assert store.get_int("n", 0) == 4
        assert store.get_bool("flag", True) is False

    def test_corrupt_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Cannot read config store"):
            JsonFileConfigStore(path)

    def test_non_object_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError, match="JSON object"):
            JsonFileConfigStore(path)

    def test_no_temp_file_left_behind(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        JsonFileConfigStore(path).set("a", "1")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_failed_write_leaves_memory_unchanged(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "store.json"
        store = JsonFileConfigStore(path)
        store.set("a", "1")

        def fail(*args: object) -> None:
            raise OSError("read-only file system")

        monkeypatch.setattr("serpcheck.config.store.os.replace", fail)
        with pytest.raises(OSError):
            store.set("a", "2")
        with pytest.raises(OSError):
            store.set("b", "3")

        assert store.snapshot() == {"a": "1"}
        assert json.loads(path.read_text()) == {"a": "1"}
