"""Error types for Ideaboard data access.

ValidationError lives in validation.py alongside the validators that raise it.
"""

from __future__ import annotations


class NotFoundError(LookupError):
    """An identifier did not resolve to a row or to a file on disk."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreError(RuntimeError):
    """The underlying SQLite store rejected or failed an operation.

    Never retried. The message is the short driver message, e.g.
    "FOREIGN KEY constraint failed".
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
