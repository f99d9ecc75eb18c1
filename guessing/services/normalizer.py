"""Turns loosely-typed submission payloads into clean (guesser, name) pairs."""
from typing import Any, List, Mapping, Optional, Tuple


def _clean_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def normalize_submission(payload: Mapping) -> List[Tuple[Optional[str], str]]:
    """Return the (guesser, name) pairs worth storing from *payload*.

    *payload* may carry a ``guesser`` and a ``name`` that is either a single
    string or a list of them.  The guesser is passed through untouched when
    it is a string and becomes ``None`` otherwise.  Non-string names and
    names that are blank after trimming are dropped without complaint, so a
    payload with nothing usable simply yields an empty list.

    Example::

        >>> normalize_submission({'guesser': 'Bob', 'name': ['Leo', ' ', 'Max']})
        [('Bob', 'Leo'), ('Bob', 'Max')]
    """
    if not isinstance(payload, Mapping):
        return []
    guesser = payload.get('guesser')
    if not isinstance(guesser, str):
        guesser = None

    names = payload.get('name')
    if not names:
        return []
    if not isinstance(names, (list, tuple)):
        names = [names]

    pairs = []
    for raw in names:
        name = _clean_name(raw)
        if name is not None:
            pairs.append((guesser, name))
    return pairs


def payload_from_form(form) -> dict:
    """Build a submission payload from an HTML form multi-dict.

    Repeated ``name`` fields and the bracketed ``name[]`` spelling both turn
    into a list; a single field stays a plain string.
    """
    names = list(form.getlist('name')) + list(form.getlist('name[]'))
    payload = {'guesser': form.get('guesser')}
    if len(names) == 1:
        payload['name'] = names[0]
    elif names:
        payload['name'] = names
    return payload
