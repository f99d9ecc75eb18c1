"""Repository for guesses kept in a SQL database."""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

import database
from ..errors import StorageError
from ..models import GuessRecord, PopularName
from .base import CandidatePairs, GuessRepository, next_timestamp


class DBGuessRepository(GuessRepository):
    """Persists guesses to the ``guesses`` table via the ``database`` module.

    Every public method opens its own session from *session_factory* and
    closes it before returning, so one instance can be shared by concurrent
    request handlers.  Concurrency between writers is left to the database's
    transactions.
    """

    backend = 'database'

    def __init__(self, session_factory, engine=None, create_tables: bool = True) -> None:
        """
        Args:
            session_factory: A ``sessionmaker`` as returned by
                :func:`database.create_session_factory`.
            engine:          Engine used to create the tables when
                *create_tables* is set.
            create_tables:   Run ``CREATE TABLE IF NOT EXISTS`` on start-up.
        """
        self._session_factory = session_factory
        self._engine = engine
        self._log = logging.getLogger(f'nameguess.repository.{type(self).__name__}')
        if create_tables and engine is not None:
            if not database.init_db(engine):
                raise StorageError("Could not initialize the guesses table")

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> 'DBGuessRepository':
        try:
            engine, SessionLocal = database.create_session_factory(database_url, echo=echo)
        except (SQLAlchemyError, ImportError) as exc:
            raise StorageError(f"Could not connect to {database_url!r}") from exc
        return cls(SessionLocal, engine=engine)

    def append(self, pairs: CandidatePairs) -> int:
        pairs = list(pairs)
        if not pairs:
            return 0
        db = self._session_factory()
        try:
            stamp = next_timestamp(database.get_latest_submission_time(db))
            added = database.add_guesses(db, pairs, stamp)
        except SQLAlchemyError as exc:
            raise StorageError("Could not save guesses") from exc
        finally:
            db.close()
        self._log.debug("Inserted %d guess(es)", added)
        return added

    def load_all(self) -> List[GuessRecord]:
        db = self._session_factory()
        try:
            return [
                GuessRecord(row.guesser, row.name, database.as_utc(row.submitted_at))
                for row in database.get_all_guesses(db)
            ]
        except SQLAlchemyError as exc:
            self._log.error("Could not load guesses: %s", exc)
            raise StorageError("Could not load guesses") from exc
        finally:
            db.close()

    def count(self) -> int:
        db = self._session_factory()
        try:
            return database.count_guesses(db)
        except SQLAlchemyError as exc:
            self._log.error("Could not count guesses: %s", exc)
            raise StorageError("Could not count guesses") from exc
        finally:
            db.close()

    def top_name(self) -> Optional[PopularName]:
        db = self._session_factory()
        try:
            row = database.get_top_name(db)
        except SQLAlchemyError as exc:
            self._log.error("Could not query popular name: %s", exc)
            raise StorageError("Could not query popular name") from exc
        finally:
            db.close()
        return PopularName(*row) if row else None
