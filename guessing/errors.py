"""Exceptions shared by the repositories, services and front ends."""


class StorageError(Exception):
    """Raised when the guess store cannot be read from or written to.

    Wraps the underlying I/O, decode or database error (available as
    ``__cause__``).  An empty store is never a ``StorageError``.
    """


class ConfigError(Exception):
    """Raised when the configuration file or a setting in it is invalid."""
