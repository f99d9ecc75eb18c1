"""Repository package — expose all concrete repositories from one import."""
from .base import GuessRepository
from .json_repository import JsonGuessRepository
from .db_repository import DBGuessRepository

__all__ = [
    'GuessRepository',
    'JsonGuessRepository',
    'DBGuessRepository',
]
