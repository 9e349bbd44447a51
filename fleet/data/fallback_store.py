"""
Device-local persistence for sample-data mode.

Each collection is one JSON file under the store directory. The store is a
convenience cache, not a system of record: failed writes are logged and
dropped, unreadable or malformed files load as the caller's default.
"""

import json
import logging
from pathlib import Path
from typing import Any

from fleet.data.collections import STORAGE_KEYS

logger = logging.getLogger(__name__)

VERSION_KEY = "fleet_data_version"


def is_record_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(r, dict) for r in value)


def invalid_collections(payload: dict) -> list[str]:
    """Known collection names in `payload` whose value is not a list of records."""
    known = {collection.value for collection in STORAGE_KEYS}
    return sorted(name for name, records in payload.items() if name in known and not is_record_list(records))


class PersistenceFallbackStore:

    def __init__(self, directory: str | Path, data_version: str = "1.0"):
        self._dir = Path(directory)
        self._data_version = data_version
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Fallback store directory {self._dir} unavailable: {e}")
        self._check_version()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    # ─── Schema version gate ──────────────────────────────────────────────────
    def _read(self, key: str) -> Any:
        """Parsed JSON under `key`, or None when missing or unreadable."""
        path = self._path(key)
        try:
            if path.exists():
                return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read '{key}' from fallback store: {e}")
        return None

    @property
    def stored_version(self) -> Any:
        return self._read(VERSION_KEY)

    def _check_version(self) -> None:
        """Discard every stored collection when the marker does not match."""
        stored = self.stored_version
        if stored != self._data_version:
            if stored is not None:
                logger.info(
                    f"Fallback store version {stored!r} != {self._data_version!r}, "
                    f"discarding stored collections"
                )
            self.clear_all()
            self._write(VERSION_KEY, self._data_version)

    # ─── Save / Load ──────────────────────────────────────────────────────────
    def _write(self, key: str, value: Any) -> bool:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            tmp.write_text(json.dumps(value, ensure_ascii=False), encoding="utf-8")
            tmp.replace(path)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to save '{key}' to fallback store: {e}")
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass
            return False

    def save(self, key: str, records: list[dict]) -> bool:
        """Overwrite the stored collection. Never raises."""
        return self._write(key, records)

    def load(self, key: str, default: Any) -> Any:
        """Stored records if present and a list of record objects, otherwise `default` unchanged."""
        stored = self._read(key)
        if stored is None:
            return default
        if not is_record_list(stored):
            logger.warning(f"Ignoring '{key}' in fallback store: expected a list of records")
            return default
        return stored

    # ─── Utilities ────────────────────────────────────────────────────────────
    def clear_all(self) -> None:
        for key in [*STORAGE_KEYS.values(), VERSION_KEY]:
            try:
                self._path(key).unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Failed to remove '{key}' from fallback store: {e}")

    def export_data(self) -> dict[str, list]:
        """Snapshot of every stored collection, keyed by collection name."""
        data = {}
        for collection, key in STORAGE_KEYS.items():
            stored = self.load(key, None)
            if stored is not None:
                data[collection.value] = stored
        return data

    def import_data(self, payload: dict[str, list]) -> bool:
        """
        Write collections from an `export_data()` snapshot. Unknown names are
        ignored; a collection that is not a list of records is skipped and the
        import reports False.
        """
        keys = {collection.value: key for collection, key in STORAGE_KEYS.items()}
        ok = True
        for name, records in payload.items():
            key = keys.get(name)
            if key is None:
                continue
            if not is_record_list(records):
                logger.warning(f"Import skipped '{name}': expected a list of records")
                ok = False
                continue
            ok = self.save(key, records) and ok
        return ok
