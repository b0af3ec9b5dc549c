# Rev 0.1.0
from __future__ import annotations


class StorageError(Exception):
    """Any failure from the SQLite store: constraint, I/O or query error."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
