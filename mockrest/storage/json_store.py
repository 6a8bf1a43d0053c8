from pathlib import Path
import json
import os
from typing import Any, Dict

from ..errors import PersistenceError, SnapshotError


class JsonStore:
    """Single JSON snapshot on disk: collection name -> array of records."""

    def __init__(self, path, atomic: bool = True):
        self.path = Path(path)
        self.atomic = atomic

    def _tmp_path(self) -> Path:
        return self.path.with_name(self.path.name + ".tmp")

    def load(self) -> Dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot file not found: {self.path}") from e
        except (OSError, ValueError) as e:
            raise SnapshotError(f"Could not parse snapshot {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise SnapshotError(f"Snapshot {self.path} must hold a JSON object at the top level")
        return data

    def save(self, snapshot: Dict[str, Any]):
        """Overwrite the whole file; with ``atomic`` the write lands via a temp file + rename."""
        target = self._tmp_path() if self.atomic else self.path
        try:
            with target.open("w", encoding="utf-8") as f:
                json.dump(snapshot, f, indent=2, ensure_ascii=False)
            if self.atomic:
                os.replace(target, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write snapshot {self.path}: {e}") from e
