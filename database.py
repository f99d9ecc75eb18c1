#!/usr/bin/env python3
"""
Database models and helpers for nameguess.
Stores guesses in any SQLAlchemy-supported database (SQLite, PostgreSQL, ...).

Nothing here connects at import time: callers build an engine and a session
factory from the configured URL with :func:`create_session_factory` and pass
sessions into the helper functions.
"""

from datetime import datetime, timezone
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import create_engine, Column, Integer, Text, DateTime, func
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger('nameguess.database')

Base = declarative_base()


class Guess(Base):
    """A single name guess; rows are only ever inserted."""
    __tablename__ = "guesses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    guesser = Column(Text, nullable=True)
    name = Column(Text, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Guess {self.id} {self.guesser!r} -> {self.name!r}>"


def create_session_factory(database_url: str, echo: bool = False):
    """Create an engine and a session factory bound to it.

    Returns:
        ``(engine, SessionLocal)`` tuple.
    """
    engine = create_engine(database_url, echo=echo)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine, SessionLocal


def init_db(engine) -> bool:
    """Initialize database tables."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        return False


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def get_latest_submission_time(db) -> Optional[datetime]:
    """Return the newest ``submitted_at`` in the table, or ``None`` if empty."""
    return as_utc(db.query(func.max(Guess.submitted_at)).scalar())


def add_guesses(db, pairs: Iterable[Tuple[Optional[str], str]],
                submitted_at: datetime) -> int:
    """Insert every (guesser, name) pair in one transaction.

    Args:
        db: Database session
        pairs: Normalized (guesser, name) pairs
        submitted_at: Timestamp stamped on every row of the batch

    Returns:
        Number of rows inserted.

    Raises:
        Exception: Whatever the driver raised; the transaction is rolled back
            first so no row of the batch is committed.
    """
    rows = [Guess(guesser=guesser, name=name, submitted_at=submitted_at)
            for guesser, name in pairs]
    if not rows:
        return 0
    try:
        db.add_all(rows)
        db.commit()
        return len(rows)
    except Exception as e:
        logger.error(f"Error adding guesses: {e}")
        db.rollback()
        raise


def get_all_guesses(db) -> List[Guess]:
    """Get every guess in insertion order.

    Insertion order is ascending ``submitted_at``.  Two writers can commit in
    the opposite order to the one they were stamped in, so ``id`` only breaks
    ties within a timestamp.
    """
    return db.query(Guess).order_by(Guess.submitted_at, Guess.id).all()


def count_guesses(db) -> int:
    """Get the total number of stored guesses."""
    return db.query(func.count(Guess.id)).scalar() or 0


def get_top_name(db) -> Optional[Tuple[str, int]]:
    """Get the most repeated name and its count.

    Only names guessed more than once are considered; ties are broken by the
    name in ascending order.

    Returns:
        ``(name, count)`` or ``None`` if every name is unique.
    """
    occurrences = func.count(Guess.id).label('occurrences')
    row = (
        db.query(Guess.name, occurrences)
        .filter(Guess.name.isnot(None), Guess.name != '')
        .group_by(Guess.name)
        .having(func.count(Guess.id) > 1)
        .order_by(occurrences.desc(), Guess.name.asc())
        .first()
    )
    if row is None:
        return None
    return row[0], int(row[1])
