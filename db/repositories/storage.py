"""
Local JSON cache of domain snapshots.

Read when remote storage cannot be loaded at startup; refreshed after every
successful remote load or save.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Mapping

from app.domain.sales import DomainState
from db.repositories.errors import SnapshotCacheError

logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class LocalSnapshotCache:
    """
    Single-file cache keyed by domain name.
    """

    def __init__(self, path: str | Path = "data/cache/domains.json") -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, DomainState]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SnapshotCacheError(f"Failed to read snapshot cache at {self._path}.") from exc
        if not isinstance(raw, dict):
            raise SnapshotCacheError(f"Snapshot cache at {self._path} is not a JSON object.")

        return {
            str(domain): DomainState.from_payload(payload)
            for domain, payload in raw.items()
            if isinstance(payload, dict)
        }

    def write_all(self, collection: Mapping[str, DomainState]) -> None:
        with self._lock:
            self._write(collection)

    def _write(self, collection: Mapping[str, DomainState]) -> None:
        payload = {domain: state.to_payload() for domain, state in collection.items()}
        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, default=_json_default, ensure_ascii=False)
            tmp_path.replace(self._path)
        except OSError as exc:
            raise SnapshotCacheError(f"Failed to write snapshot cache at {self._path}.") from exc
        finally:
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass

    def update(self, domain: str, state: DomainState) -> None:
        """
        Replace one domain in the cache, keeping the others.
        """

        with self._lock:
            try:
                current = self.load()
            except SnapshotCacheError:
                logger.warning("Snapshot cache unreadable, rewriting path=%s", self._path)
                current = {}
            current[domain] = state
            self._write(current)
