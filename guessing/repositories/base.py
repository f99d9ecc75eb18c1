"""Repository base classes used by the concrete guess stores."""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

from ..errors import StorageError
from ..models import GuessRecord, PopularName

# (guesser, name) pairs as produced by the normalizer
CandidatePairs = Iterable[Tuple[Optional[str], str]]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(last: Optional[datetime]) -> datetime:
    """Return the current UTC time, never earlier than *last*."""
    now = utc_now()
    if last is not None and last > now:
        return last
    return now


class GuessRepository(ABC):
    """Append-only guess store.

    Concrete stores implement every method below.  Callers (the services)
    must not care which store is active, so all of them share the same error
    contract: an empty store is a normal result, anything that prevents
    reading or writing raises :class:`~guessing.errors.StorageError`.
    """

    backend = 'abstract'

    @abstractmethod
    def append(self, pairs: CandidatePairs) -> int:
        """Persist *pairs* as one batch, stamping each with the write time.

        Either every record of the batch becomes visible or none does.

        Returns:
            Number of records written (``0`` for an empty batch).
        """

    @abstractmethod
    def load_all(self) -> List[GuessRecord]:
        """Return every stored record in insertion order."""

    @abstractmethod
    def count(self) -> int:
        """Return the total number of stored records."""

    @abstractmethod
    def top_name(self) -> Optional[PopularName]:
        """Return the most repeated name, or ``None`` when no name repeats.

        Only names occurring more than once qualify; ties go to the name that
        sorts first.
        """


class BaseRepository:
    """Provides JSON-backed persistence for a single data file.

    A missing file means "no data yet" and yields *default*.  A file that
    exists but cannot be read or parsed raises ``StorageError``.

    The atomic write uses a write-then-rename strategy so the file is never
    left in a partially-written state.
    """

    def __init__(self, file_path: str) -> None:
        self._path = file_path
        self._log = logging.getLogger(f'nameguess.repository.{type(self).__name__}')

    @property
    def path(self) -> str:
        return self._path

    def _load(self, default: Any) -> Any:
        """Load JSON from *self._path*, returning *default* if it does not exist."""
        if not os.path.exists(self._path):
            return default
        try:
            with open(self._path, 'r', encoding='utf-8') as fh:
                return json.load(fh)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            self._log.error("Could not load %s: %s", self._path, exc)
            raise StorageError(f"Could not read {self._path}") from exc

    def _save(self, data: Any) -> None:
        """Atomically write *data* as JSON to *self._path*."""
        dir_name = os.path.dirname(os.path.abspath(self._path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix='.tmp')
        except OSError as exc:
            self._log.error("Could not create temp file in %s: %s", dir_name, exc)
            raise StorageError(f"Could not write {self._path}") from exc
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            self._log.error("Could not write %s: %s", self._path, exc)
            raise StorageError(f"Could not write {self._path}") from exc
