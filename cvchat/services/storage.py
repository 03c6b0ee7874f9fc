"""Local session persistence.

Values are JSON-compatible and stored under string keys. Per-template values
use ``{prefix}_{templateId}`` keys so several templates can hold independent
sessions side by side.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from cvchat.constants.storage_constants import StorageConstants
from cvchat.error_handling.exceptions import StorageError


def namespaced_key(prefix: str, template_id: str) -> str:
    return f"{prefix}_{template_id}"


def session_key(template_id: str) -> str:
    return namespaced_key(StorageConstants.SESSION_PREFIX, template_id)


def messages_key(template_id: str) -> str:
    return namespaced_key(StorageConstants.MESSAGES_PREFIX, template_id)


def profession_key(template_id: str) -> str:
    return namespaced_key(StorageConstants.PROFESSION_PREFIX, template_id)


def form_key(template_id: str) -> str:
    return namespaced_key(StorageConstants.FORM_PREFIX, template_id)


def form_spec_key(template_id: str) -> str:
    return namespaced_key(StorageConstants.FORM_SPEC_PREFIX, template_id)


def namespaced_keys(template_id: str) -> List[str]:
    """Every key a session for ``template_id`` may write."""
    return [
        namespaced_key(prefix, template_id)
        for prefix in StorageConstants.NAMESPACED_PREFIXES
    ]


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal key-value persistence interface."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...

    def remove_many(self, keys: Iterable[str]) -> None:
        ...


class InMemoryStore:
    """Dict-backed store, used by tests and as a fallback when no file is configured."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = {}
        self._lock = threading.RLock()
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._data.get(key)
        # Hand out copies so callers cannot mutate stored state.
        return json.loads(value) if value is not None else None

    def set(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageError(
                f"Value for '{key}' is not JSON serializable", key=key, original_exception=e
            ) from e
        with self._lock:
            self._data[key] = encoded

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def remove_many(self, keys: Iterable[str]) -> None:
        with self._lock:
            for key in keys:
                self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)


class JsonFileStore:
    """Store that keeps every key in a single JSON document on disk.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace``, so a crash never leaves a half-written store.
    """

    def __init__(self, path: Path, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._cache: Optional[Dict[str, Any]] = None

    def _load(self) -> Dict[str, Any]:
        if self._cache is not None:
            return self._cache
        if not self.path.exists():
            self._cache = {}
            return self._cache
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(
                "Session store %s is corrupt, starting empty: %s", self.path, e
            )
            data = {}
        except OSError as e:
            raise StorageError(
                f"Could not read session store {self.path}", original_exception=e
            ) from e
        if not isinstance(data, dict):
            self.logger.error("Session store %s is not an object, starting empty", self.path)
            data = {}
        self._cache = data
        return self._cache

    def _flush(self, data: Dict[str, Any]) -> None:
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".store-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(
                f"Could not write session store {self.path}", original_exception=e
            ) from e

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._load().get(key)
            return json.loads(json.dumps(value)) if value is not None else None

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = dict(self._load())
            data[key] = value
            self._flush(data)
            self._cache = data

    def remove(self, key: str) -> None:
        self.remove_many([key])

    def remove_many(self, keys: Iterable[str]) -> None:
        with self._lock:
            data = dict(self._load())
            removed = [key for key in keys if data.pop(key, None) is not None]
            if removed:
                self._flush(data)
                self._cache = data
                self.logger.debug("Removed %d keys from session store", len(removed))
