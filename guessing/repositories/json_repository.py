"""Repository for guesses kept in a flat JSON file."""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import StorageError
from ..models import GuessRecord, PopularName
from ..services.aggregator import popular_name
from .base import BaseRepository, CandidatePairs, GuessRepository, next_timestamp


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        stamp = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class JsonGuessRepository(BaseRepository, GuessRepository):
    """Persists guesses to a JSON file.

    Schema::

        [{"guesser": "<text>", "name": "<text>", "time": "<ISO-8601>"}, ...]

    Entries are only ever appended.  Each :meth:`append` rewrites the whole
    file through :meth:`_save`, so a failed batch leaves the previous content
    untouched.  The read-modify-write is serialized by a lock, which covers
    concurrent requests inside one process only.
    """

    backend = 'file'

    def __init__(self, file_path: str = 'guesses.json') -> None:
        super().__init__(file_path)
        self._lock = threading.Lock()

    def _entries(self) -> List[Dict[str, Any]]:
        raw = self._load([])
        if not isinstance(raw, list):
            self._log.error("%s does not contain a JSON array", self._path)
            raise StorageError(f"Unexpected content in {self._path}")
        return raw

    def append(self, pairs: CandidatePairs) -> int:
        pairs = list(pairs)
        if not pairs:
            return 0
        with self._lock:
            entries = self._entries()
            last = None
            if entries and isinstance(entries[-1], dict):
                last = _parse_time(entries[-1].get('time'))
            stamp = next_timestamp(last).isoformat()
            new_entries = [
                {'guesser': guesser, 'name': name, 'time': stamp}
                for guesser, name in pairs
            ]
            self._save(entries + new_entries)
        self._log.debug("Appended %d guess(es) to %s", len(new_entries), self._path)
        return len(new_entries)

    def load_all(self) -> List[GuessRecord]:
        records = []
        for entry in self._entries():
            if not isinstance(entry, dict):
                # Keep the slot so count() and load_all() agree; the
                # aggregator drops it.
                records.append(GuessRecord(None, None, None))
                continue
            records.append(GuessRecord(
                entry.get('guesser'),
                entry.get('name'),
                _parse_time(entry.get('time')),
            ))
        return records

    def count(self) -> int:
        return len(self._entries())

    def top_name(self) -> Optional[PopularName]:
        return popular_name(self.load_all())
