"""Business logic for submitting guesses and reading them back."""
import logging
from typing import Mapping, Optional

from ..models import GuessStats, PopularName
from .aggregator import aggregate
from .normalizer import normalize_submission


class GuessService:
    """Coordinates the normalizer, a guess repository and the aggregator.

    The repository is any :class:`~guessing.repositories.base.GuessRepository`;
    this class never needs to know which one.  ``StorageError`` raised by the
    repository propagates unchanged so the front end can decide how to
    report it.
    """

    def __init__(self, repository) -> None:
        self._repo = repository
        self._log = logging.getLogger('nameguess.service')

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def backend(self) -> str:
        return getattr(self._repo, 'backend', 'unknown')

    def submit(self, payload: Mapping) -> int:
        """Normalize *payload* and store whatever guesses survive.

        Returns:
            Number of guesses stored; ``0`` when the payload had none.
        """
        pairs = normalize_submission(payload)
        if not pairs:
            self._log.debug("Submission contained no usable guesses")
            return 0
        added = self._repo.append(pairs)
        self._log.info("Stored %d guess(es) from %r", added, pairs[0][0])
        return added

    def stats(self) -> GuessStats:
        return aggregate(self._repo.load_all())

    def count(self) -> int:
        return self._repo.count()

    def popular(self) -> Optional[PopularName]:
        return self._repo.top_name()
