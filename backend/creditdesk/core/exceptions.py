"""Shared exceptions for the credit ledger services.

Every exception carries an ``ErrorKind`` so the operations layer can turn it
into a structured outcome and the HTTP adapter can pick a status code.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    NOT_FOUND = "NotFound"
    INCOMPLETE_PROFILE = "IncompleteProfile"
    INSUFFICIENT_CREDITS = "InsufficientCredits"
    TRANSIENT_STORE_FAILURE = "TransientStoreFailure"
    UNEXPECTED = "Unexpected"


class CreditDeskError(Exception):
    """Base exception for credit ledger services."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None, data: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class InvalidInputError(CreditDeskError):
    """Raised when a required field is missing or malformed."""

    kind = ErrorKind.INVALID_INPUT
    default_message = "Invalid input"


class NotFoundError(CreditDeskError):
    """Raised when the user or one of its records does not exist."""

    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class IncompleteProfileError(CreditDeskError):
    """Raised when the user exists but lacks a linked subscription or credit account."""

    kind = ErrorKind.INCOMPLETE_PROFILE
    default_message = "User subscription or credits not found"


class InsufficientCreditsError(CreditDeskError):
    """Raised when a deduction exceeds the remaining quota.

    ``credits_left`` is the remaining quota at the time of the rejection.
    """

    kind = ErrorKind.INSUFFICIENT_CREDITS
    default_message = "Insufficient credits"

    def __init__(self, credits_left: int, message: str | None = None):
        self.credits_left = credits_left
        super().__init__(message, data={"credits_left": credits_left})


class TransientStoreError(CreditDeskError):
    """Raised when the store times out or reports a conflict. Safe to retry."""

    kind = ErrorKind.TRANSIENT_STORE_FAILURE
    default_message = "Storage temporarily unavailable, please retry"


class UnexpectedError(CreditDeskError):
    kind = ErrorKind.UNEXPECTED
