"""
Error kinds raised by the Termux wrappers.

Every failure is a TermuxError carrying one ErrorKind, so callers branch on
``exc.kind`` rather than on message text.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    invalid_input = "invalid_input"
    collaborator_error = "collaborator_error"
    empty_address_book = "empty_address_book"
    not_found = "not_found"
    selection_cancelled = "selection_cancelled"
    input_cancelled = "input_cancelled"
    no_messages = "no_messages"
    authentication_failed = "authentication_failed"
    no_speech = "no_speech"


class TermuxError(Exception):
    """Base exception for all termuxkit errors"""

    kind: ErrorKind = ErrorKind.collaborator_error

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidInput(TermuxError):
    """Raised when a caller passes an unusable argument (e.g. an empty query)"""

    kind = ErrorKind.invalid_input


class CollaboratorError(TermuxError):
    """Raised when a termux-* command is missing, fails or returns malformed output"""

    kind = ErrorKind.collaborator_error


class EmptyAddressBook(TermuxError):
    """Raised when the device has no contacts at all"""

    kind = ErrorKind.empty_address_book


class NotFound(TermuxError):
    """Raised when no contact name contains the query"""

    kind = ErrorKind.not_found


class SelectionCancelled(TermuxError):
    """Raised when the user dismisses a choice dialog"""

    kind = ErrorKind.selection_cancelled


class InputCancelled(TermuxError):
    """Raised when the user dismisses a text input dialog"""

    kind = ErrorKind.input_cancelled


class NoMessages(TermuxError):
    kind = ErrorKind.no_messages


class AuthenticationFailed(TermuxError):
    kind = ErrorKind.authentication_failed


class NoSpeech(TermuxError):
    kind = ErrorKind.no_speech
