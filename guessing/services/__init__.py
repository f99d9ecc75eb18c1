"""Services package — expose the service and helper functions from one import."""
from .normalizer import normalize_submission, payload_from_form
from .aggregator import aggregate, name_frequencies, popular_name
from .presenter import (
    pluralize, summary_line, stats_to_dict, popular_to_dict, stats_to_lines,
)
from .guess_service import GuessService

__all__ = [
    'normalize_submission',
    'payload_from_form',
    'aggregate',
    'name_frequencies',
    'popular_name',
    'pluralize',
    'summary_line',
    'stats_to_dict',
    'popular_to_dict',
    'stats_to_lines',
    'GuessService',
]
