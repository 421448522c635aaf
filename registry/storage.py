"""Local key-value storage backed by a single JSON file."""

from typing import Any, Optional
from pathlib import Path
import json
import os
import tempfile

from loguru import logger

from .errors import PersistenceError

DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class LocalStorage:
    """
    String-to-string key-value store kept in one JSON file.

    Every write replaces the whole file atomically: the new content goes to a
    temporary file beside it, which is then renamed over the old one, so a
    failed write leaves the previous contents in place. Writes that would push
    the file past ``quota_bytes`` are refused with PersistenceError, as are
    OS-level failures.
    """

    def __init__(self, path: str | Path, quota_bytes: Optional[int] = DEFAULT_QUOTA_BYTES):
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: top level is not an object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]):
        content = json.dumps(data, ensure_ascii=False)
        size = len(content.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise PersistenceError(
                f"Storage quota exceeded ({size} > {self.quota_bytes} bytes)",
                error_code="QUOTA_EXCEEDED"
            )
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Could not write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str):
        data = self._read()
        data[key] = value
        self._write(data)


def load_records(storage: LocalStorage, key: str = "students") -> list[dict[str, Any]]:
    """Load the record array stored under ``key``; missing or malformed content yields []."""
    saved = storage.get_item(key)
    if not saved:
        return []
    try:
        records = json.loads(saved)
    except ValueError as e:
        logger.error(f"Error loading students: {e}")
        return []
    if not isinstance(records, list):
        logger.error(f"Error loading students: expected a list, got {type(records).__name__}")
        return []
    return [r for r in records if isinstance(r, dict)]


def save_records(storage: LocalStorage, records: list[dict[str, Any]], key: str = "students"):
    """Overwrite the record array stored under ``key``."""
    storage.set_item(key, json.dumps(records, ensure_ascii=False))
