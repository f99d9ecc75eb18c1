"""Value types passed between the repositories and the services."""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional


@dataclass(frozen=True)
class GuessRecord:
    """One stored guess.

    Attributes:
        guesser: Who made the guess.  Typed loosely on purpose: records read
            back from a shared file may hold anything, and the aggregator
            re-validates them before use.
        name: The guessed name (same caveat as *guesser*).
        submitted_at: UTC time assigned by the store on write.
    """

    guesser: Any
    name: Any
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True)
class GuesserSummary:
    guesser: str
    names: List[str]

    @property
    def count(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class PopularName:
    name: str
    count: int


class GuessStats:
    """Per-guesser summaries in first-seen order plus the headline totals.

    ``total_guesses`` counts only the guesses listed in the summaries;
    ``total_records`` counts every record that was read, including ones
    skipped for a missing guesser or name.
    """

    def __init__(self, summaries: List[GuesserSummary],
                 total_records: Optional[int] = None) -> None:
        self.summaries = summaries
        self.total_records = self.total_guesses if total_records is None else total_records

    @property
    def total_guesses(self) -> int:
        return sum(s.count for s in self.summaries)

    @property
    def total_people(self) -> int:
        return len(self.summaries)

    def __repr__(self) -> str:
        return (f"GuessStats(total_guesses={self.total_guesses}, "
                f"total_people={self.total_people})")
