"""String-keyed key/value stores backing locally persisted client data."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from mentor_client.core.log import get_logger


_LOGGER = get_logger(__name__)


class MemoryStorage:
    """Process-local store with browser ``localStorage`` semantics."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._lock = threading.RLock()
        self._items: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._items[key] = self._check_value(key, value)

    @staticmethod
    def _check_value(key: str, value: object) -> str:
        if not isinstance(value, str):
            raise TypeError(f"Storage values must be str, got {type(value).__name__} for {key!r}")
        return value

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        checked = self._check_value(key, value)
        with self._lock:
            self._items[key] = checked
            self._flush()

    def remove_item(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""

        with self._lock:
            if self._items.pop(key, None) is not None:
                self._flush()

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._flush()

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _flush(self) -> None:
        """Hook for durable subclasses; called with the lock held."""


class FileStorage(MemoryStorage):
    """JSON-file backed store that survives process restarts.

    Every mutation rewrites the file. A missing or unreadable file yields an
    empty store; a failed write is logged and the in-memory value stays
    authoritative for the rest of the process.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        super().__init__(self._load(self._path))
        _LOGGER.debug("FileStorage opened at %s with %d item(s)", self._path, len(self))

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def _load(path: Path) -> Dict[str, str]:
        if not path.exists():
            return {}
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _LOGGER.warning("Ignoring unreadable storage file %s: %s", path, exc)
            return {}
        if not isinstance(raw, dict):
            _LOGGER.warning("Ignoring storage file %s: expected a JSON object", path)
            return {}
        return {str(key): value for key, value in raw.items() if isinstance(value, str)}

    def _flush(self) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(self._items, ensure_ascii=False, indent=2, sort_keys=True),
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as exc:
            _LOGGER.error("Failed to write storage file %s: %s", self._path, exc)


__all__ = ["FileStorage", "MemoryStorage"]
