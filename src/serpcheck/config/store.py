"""Persisted string-keyed configuration stores."""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol

from serpcheck.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})

StoreValue = str | int | bool | None


class ConfigStore(Protocol):
    """Interface for a persisted key/value configuration store.

    Values are kept as strings. Setting a key to ``None`` removes it, so the
    next read falls back to the caller's default.
    """

    def get_string(self, key: str, default: str | None = None) -> str | None: ...

    def get_int(self, key: str, default: int) -> int: ...

    def get_bool(self, key: str, default: bool) -> bool: ...

    def set(self, key: str, value: StoreValue) -> None: ...


def _to_stored(value: StoreValue) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MemoryConfigStore:
    """Dict-backed store. State lives only as long as the instance."""

    def __init__(self, initial: dict[str, StoreValue] | None = None) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}
        for key, value in (initial or {}).items():
            stored = _to_stored(value)
            if stored is not None:
                self._values[key] = stored

    def get_string(self, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self._values.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        raw = self.get_string(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.warning("Invalid integer for %s: %r, using default %d", key, raw, default)
            return default

    def get_bool(self, key: str, default: bool) -> bool:
        raw = self.get_string(key)
        if raw is None:
            return default
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean for %s: %r, using default %s", key, raw, default)
        return default

    def set(self, key: str, value: StoreValue) -> None:
        stored = _to_stored(value)
        with self._lock:
            self._apply(key, stored)

    def snapshot(self) -> dict[str, str]:
        """Copy of all stored values."""
        with self._lock:
            return dict(self._values)

    def _apply(self, key: str, stored: str | None) -> None:
        if stored is None:
            self._values.pop(key, None)
        else:
            self._values[key] = stored


class JsonFileConfigStore(MemoryConfigStore):
    """Store persisted as a flat JSON object on disk.

    The file is read once at construction and rewritten on every ``set``
    (temp file + rename, so readers never see a half-written file).

    Args:
        path: Location of the JSON file. Created on first write.

    Raises:
        ConfigurationError: If the file exists but is not a JSON object.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self._path = Path(path)
        if self._path.exists():
            try:
                raw = json.loads(self._path.read_text())
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigurationError(f"Cannot read config store {self._path}: {e}") from e
            if not isinstance(raw, dict):
                raise ConfigurationError(f"Config store {self._path} must contain a JSON object")
            for key, value in raw.items():
                stored = _to_stored(value)
                if stored is not None:
                    self._values[str(key)] = stored
            logger.debug("Loaded %d keys from %s", len(self._values), self._path)

    @property
    def path(self) -> Path:
        return self._path

    def set(self, key: str, value: StoreValue) -> None:
        stored = _to_stored(value)
        with self._lock:
            values = dict(self._values)
            if stored is None:
                values.pop(key, None)
            else:
                values[key] = stored
            # Memory only changes once the file does.
            self._flush(values)
            self._values = values

    def _flush(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        tmp_path.write_text(json.dumps(values, indent=2, sort_keys=True))
        os.replace(tmp_path, self._path)
