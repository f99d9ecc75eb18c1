"""Groups stored guesses per guesser and ranks guessed names."""
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import GuessRecord, GuessStats, GuesserSummary, PopularName


def _clean(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def aggregate(records: Iterable[GuessRecord]) -> GuessStats:
    """Group *records* into one :class:`GuesserSummary` per guesser.

    Records are re-validated here even though the normalizer already cleaned
    them on the way in: the data file may be edited or shared by other
    writers.  A record with a non-string or blank guesser or name is skipped.

    Guessers appear in the order they were first seen and each guesser's
    names keep their submission order.
    """
    grouped: Dict[str, List[str]] = {}
    total_records = 0
    for record in records:
        total_records += 1
        guesser = _clean(record.guesser)
        name = _clean(record.name)
        if guesser is None or name is None:
            continue
        grouped.setdefault(guesser, []).append(name)
    return GuessStats([GuesserSummary(g, names) for g, names in grouped.items()],
                      total_records=total_records)


def name_frequencies(records: Iterable[GuessRecord]) -> List[Tuple[str, int]]:
    """Return ``(name, count)`` pairs, most frequent first, ties alphabetical."""
    counts = Counter()
    for record in records:
        name = _clean(record.name)
        if name is not None:
            counts[name] += 1
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def popular_name(records: Iterable[GuessRecord]) -> Optional[PopularName]:
    """Return the most guessed name if it was guessed more than once."""
    ranked = name_frequencies(records)
    if ranked and ranked[0][1] > 1:
        return PopularName(*ranked[0])
    return None
