"""Shapes aggregated guesses for the HTML pages, the JSON API and the CLI."""
from typing import Dict, Optional

from ..models import GuessStats, PopularName


def pluralize(count: int, singular: str, plural: str) -> str:
    """Return e.g. ``'1 guess'`` or ``'3 guesses'``."""
    return f"{count} {singular if count == 1 else plural}"


def summary_line(stats: GuessStats) -> str:
    """Return the headline, e.g. ``'5 guesses from 2 people'``."""
    return (f"{pluralize(stats.total_guesses, 'guess', 'guesses')} from "
            f"{pluralize(stats.total_people, 'person', 'people')}")


def stats_to_dict(stats: GuessStats) -> Dict:
    return {
        'total_guesses': stats.total_guesses,
        'total_people': stats.total_people,
        'total_records': stats.total_records,
        'summary': summary_line(stats),
        'guessers': [
            {'guesser': s.guesser, 'count': s.count, 'names': list(s.names)}
            for s in stats.summaries
        ],
    }


def popular_to_dict(popular: Optional[PopularName]) -> Dict:
    if popular is None:
        return {'name': None, 'count': 0}
    return {'name': popular.name, 'count': popular.count}


def stats_to_lines(stats: GuessStats):
    """Yield plain-text lines for terminal output, headline first."""
    yield summary_line(stats)
    for s in stats.summaries:
        yield f"{s.guesser} : count: {s.count} -- {{{', '.join(s.names)}}}"
