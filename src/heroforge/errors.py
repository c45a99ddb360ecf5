"""Errors raised when a progression operation is rejected.

Every error is a precondition failure detected before any state is written,
so a raised error means the call committed nothing. They subclass
``ValueError`` so callers that already treat bad input as ``ValueError``
keep working.
"""

from __future__ import annotations


class ProgressionError(ValueError):
    """Base class for rejected operations."""

    code = "progression_error"

    def __init__(self, message: str, account: str | None = None) -> None:
        super().__init__(message)
        self.account = account


class AlreadyExists(ProgressionError):
    """A profile already exists for the account."""

    code = "already_exists"


class ProfileNotFound(ProgressionError):
    """The account has no profile."""

    code = "profile_not_found"


class BadIndex(ProgressionError):
    """Crate index is outside the account's crate list."""

    code = "bad_index"


class AlreadyClaimed(ProgressionError):
    """The crate at the index has already been claimed."""

    code = "already_claimed"


class InvalidLevel(ProgressionError):
    """Mint level below 1."""

    code = "invalid_level"


class TokenNotFound(ProgressionError):
    """No token has been issued with the identifier."""

    code = "token_not_found"


class NotAuthorized(ProgressionError):
    code = "not_authorized"
