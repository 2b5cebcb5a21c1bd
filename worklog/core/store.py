"""
Flat-file persistence for work logs and components.

Each collection is a single JSON array on disk, loaded lazily into memory on
first access and rewritten in full after every mutation. The in-memory list is
authoritative for the life of the process; edits made to the file by another
process are not seen until invalidate() is called.
"""

import json
import threading
from contextlib import contextmanager, nullcontext
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .config import WORKLOGS_FILE, COMPONENTS_FILE, WRITE_LOCK_ENABLED
from .errors import NotFoundError, StorageError
from .schema import (
    Component,
    WorkLog,
    date_sort_key,
    new_id,
    normalize_components,
    normalize_work_logs,
    now_iso,
)
from ..util.logging import logger

Normalizer = Callable[[List[Any]], Tuple[List[Any], int]]


class JsonCollection:
    """A JSON array file fronted by a load-once, write-through cache."""

    def __init__(self, path, normalizer: Normalizer, lock_enabled: bool = WRITE_LOCK_ENABLED):
        self.path = Path(path)
        self._normalize = normalizer
        self._cache: Optional[List[Any]] = None
        # Reentrant so transaction() can load through records()
        self._lock = threading.RLock() if lock_enabled else nullcontext()

    def records(self) -> List[Any]:
        """The cached records, loading (and repairing) the file on first access."""
        with self._lock:
            if self._cache is None:
                self._cache = self._load()
            return self._cache

    def invalidate(self) -> None:
        """Drop the cache so the next access re-reads the file."""
        with self._lock:
            self._cache = None

    @contextmanager
    def transaction(self) -> Iterator[List[Any]]:
        """Yield a working copy of the records; write it back if the block completes with changes."""
        with self._lock:
            original = self.records()
            working = list(original)
            yield working
            if working != original:
                self._write(working)

    def _load(self) -> List[Any]:
        if not self.path.exists():
            return []

        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise StorageError(f"{self.path} does not contain a JSON array")

        records, dropped = self._normalize(raw)
        if [record.to_dict() for record in records] != raw:
            self._write(records)
            logger.log_store_repair(str(self.path), len(records), dropped)
        return records

    def _write(self, records: List[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_dict() for record in records]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        self._cache = records


class WorkLogStore:
    def __init__(self, path=WORKLOGS_FILE, lock_enabled: bool = WRITE_LOCK_ENABLED):
        self._collection = JsonCollection(path, normalize_work_logs, lock_enabled)

    @property
    def path(self) -> Path:
        return self._collection.path

    def list(self) -> List[WorkLog]:
        """All logs, newest first; equal dates keep insertion order."""
        return sorted(self._collection.records(), key=date_sort_key, reverse=True)

    def get(self, log_id: str) -> Optional[WorkLog]:
        for log in self._collection.records():
            if log.id == log_id:
                return log
        return None

    def count(self) -> int:
        return len(self._collection.records())

    def create(self, payload: Dict[str, Any]) -> WorkLog:
        """Append a validated payload as a new log with a fresh id (and date, if absent)."""
        fields = dict(payload)
        date = fields.pop("date", None) or now_iso()
        with self._collection.transaction() as logs:
            existing_ids = {log.id for log in logs}
            log_id = new_id()
            while log_id in existing_ids:
                log_id = new_id()
            log = WorkLog(id=log_id, date=date, **fields)
            logs.append(log)
        return log

    def update(self, log_id: str, changes: Dict[str, Any]) -> WorkLog:
        """Shallow-merge validated changes onto an existing log. Raises NotFoundError."""
        with self._collection.transaction() as logs:
            for index, log in enumerate(logs):
                if log.id == log_id:
                    merged = replace(log, **changes)
                    logs[index] = merged
                    break
            else:
                raise NotFoundError("Work log", log_id)
        return merged

    def delete(self, log_id: str) -> bool:
        """Remove a log if present. Returns whether anything was removed."""
        with self._collection.transaction() as logs:
            remaining = [log for log in logs if log.id != log_id]
            removed = len(remaining) != len(logs)
            logs[:] = remaining
        return removed

    def invalidate(self) -> None:
        self._collection.invalidate()


class ComponentStore:
    def __init__(self, path=COMPONENTS_FILE, lock_enabled: bool = WRITE_LOCK_ENABLED):
        self._collection = JsonCollection(path, normalize_components, lock_enabled)

    @property
    def path(self) -> Path:
        return self._collection.path

    def list(self) -> List[Component]:
        """All components, ordered by name (case-insensitive)."""
        return sorted(self._collection.records(), key=lambda c: c.name.lower())

    @staticmethod
    def _match(components: List[Component], name: str) -> Optional[Component]:
        wanted = name.strip().lower()
        for component in components:
            if component.name.strip().lower() == wanted:
                return component
        return None

    def find_by_name(self, name: str) -> Optional[Component]:
        return self._match(self._collection.records(), name)

    def count(self) -> int:
        return len(self._collection.records())

    def upsert(self, name: str) -> Tuple[Component, bool]:
        """Return the component matching name case-insensitively, creating it if absent.

        The second element is True when a new component was written.
        """
        name = name.strip()
        with self._collection.transaction() as components:
            existing = self._match(components, name)
            if existing is not None:
                return existing, False
            component = Component(id=new_id(), name=name)
            components.append(component)
        return component, True

    def invalidate(self) -> None:
        self._collection.invalidate()


class DataStore:
    """Owns both collections. Built once per application and handed to request handlers."""

    def __init__(self, worklogs_path=None, components_path=None, lock_enabled: bool = None):
        if lock_enabled is None:
            lock_enabled = WRITE_LOCK_ENABLED
        self.worklogs = WorkLogStore(worklogs_path or WORKLOGS_FILE, lock_enabled)
        self.components = ComponentStore(components_path or COMPONENTS_FILE, lock_enabled)

    @classmethod
    def in_directory(cls, data_dir, lock_enabled: bool = None) -> "DataStore":
        data_dir = Path(data_dir)
        return cls(data_dir / "worklogs.json", data_dir / "components.json", lock_enabled)

    def invalidate(self) -> None:
        """Forget both caches; the next access reloads from disk."""
        self.worklogs.invalidate()
        self.components.invalidate()
