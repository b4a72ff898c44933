"""Error taxonomy for the persistence and legacy import paths.

Stores raise these; repositories and the legacy importer catch them, log them
and turn them into a failed Result (or an empty list / no-op).
"""


class StorageError(Exception):
    """Base class for record store failures."""


class StorageReadError(StorageError):
    """The store could not be read (missing permissions, corrupt file...)."""


class StorageWriteError(StorageError):
    """The store could not persist a change."""


class DecodeError(Exception):
    """Legacy data could not be decoded into records."""


__all__ = ['StorageError', 'StorageReadError', 'StorageWriteError', 'DecodeError']
