from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from ..utils.query import is_number, leading_int, strict_equal
from .json_store import JsonStore


def _numeric_id(record) -> int:
    """Id of a record for counter purposes; missing or non-numeric counts as 0."""
    value = record.get("Id") if isinstance(record, dict) else None
    if is_number(value):
        return int(value)
    if isinstance(value, str):
        return leading_int(value) or 0
    return 0


class Store:
    """
    In-memory collections plus a next-id counter per collection.

    All access goes through ``lock`` so id assignment stays at-most-once when
    requests are served on several threads.
    """

    def __init__(self, persistence: Optional[JsonStore] = None):
        self.persistence = persistence
        self.lock = threading.RLock()
        self._data: Dict[str, Any] = {}
        self._next_ids: Dict[str, int] = {}

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], persistence: Optional[JsonStore] = None) -> "Store":
        store = cls(persistence)
        store.load(snapshot)
        return store

    def load(self, snapshot: Dict[str, Any]):
        with self.lock:
            for name, value in snapshot.items():
                self._data[name] = value
                if isinstance(value, list):
                    self._next_ids[name] = max([0, *(_numeric_id(r) for r in value)]) + 1

    def collections(self) -> List[str]:
        with self.lock:
            return list(self._data)

    def get(self, name: str, default=None):
        with self.lock:
            return self._data.get(name, default)

    def next_id(self, name: str) -> Optional[int]:
        with self.lock:
            return self._next_ids.get(name)

    def find(self, name: str, ident: int) -> Optional[Dict[str, Any]]:
        with self.lock:
            items = self._data.get(name)
            if not isinstance(items, list):
                return None
            for record in items:
                if isinstance(record, dict) and strict_equal(record.get("Id"), ident):
                    return record
            return None

    def snapshot(self) -> Dict[str, Any]:
        with self.lock:
            return dict(self._data)

    def assign_id(self, name: str) -> int:
        with self.lock:
            if not isinstance(self._data.get(name), list):
                self._data[name] = []
                self._next_ids[name] = 1
            ident = self._next_ids.get(name) or 1
            self._next_ids[name] = ident + 1
            return ident

    def insert(self, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Assign the next Id, merge it over ``body`` and append the record."""
        with self.lock:
            ident = self.assign_id(name)
            record = {**body, "Id": ident}
            self._data[name].append(record)
            return record

    def persist(self):
        """Write the full snapshot. Raises PersistenceError; the insert is not rolled back."""
        if self.persistence is None:
            return
        with self.lock:
            self.persistence.save(self._data)
