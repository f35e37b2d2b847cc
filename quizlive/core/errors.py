"""Error taxonomy shared by the REST client, the socket client and the views."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    NETWORK = "network"
    UNKNOWN = "unknown"

    @property
    def leaves_view(self) -> bool:
        """Whether a view showing this session should navigate away."""
        return self in (ErrorKind.NOT_FOUND, ErrorKind.INVALID)


# Legacy servers only send a message string; checked in order.
_MESSAGE_MARKERS: tuple[tuple[str, ErrorKind], ...] = (
    ("not found", ErrorKind.NOT_FOUND),
    ("Invalid", ErrorKind.INVALID),
    ("Conflict", ErrorKind.CONFLICT),
    ("version", ErrorKind.CONFLICT),
    ("Unauthorized", ErrorKind.UNAUTHORIZED),
)

_STATUS_KINDS = {
    400: ErrorKind.INVALID,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    422: ErrorKind.INVALID,
}

_KIND_VALUES = {kind.value for kind in ErrorKind}

# Checked on their own, so a message can both close the view and ask for a retry.
_RETRY_MARKERS = ("Conflict", "version")

CONFLICT_HINT = "Your answer wasn't saved. Please try again."


class QuizClientError(Exception):
    """Base class for errors raised by the quiz client."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNKNOWN) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind


class ApiError(QuizClientError):
    """Raised when a REST call fails or the server rejects it."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        if kind is None:
            kind = kind_for_status(status_code) if status_code else classify_message(message)
        super().__init__(message, kind)
        self.status_code = status_code


class SessionError(QuizClientError):
    """A socket ``error`` event pushed by the realtime gateway."""

    @classmethod
    def classify(cls, message: str | None, kind: str | None = None) -> "SessionError":
        message = message or "Unknown error"
        return cls(message, classify_error(message, kind))

    @property
    def hint(self) -> str | None:
        """Retry advice shown after the message when the answer may have been lost."""
        if self.kind == ErrorKind.CONFLICT or any(marker in self.message for marker in _RETRY_MARKERS):
            return CONFLICT_HINT
        return None


class QuizValidationError(QuizClientError):
    """Raised when a quiz draft fails local validation before submission."""

    def __init__(self, message: str, question_index: int | None = None) -> None:
        super().__init__(message, ErrorKind.INVALID)
        self.question_index = question_index


class SessionClosedError(QuizClientError):
    """Raised when a command is issued through a closed session client."""


def classify_message(message: str) -> ErrorKind:
    for marker, kind in _MESSAGE_MARKERS:
        if marker in message:
            return kind
    return ErrorKind.UNKNOWN


def classify_error(message: str, kind: str | None = None) -> ErrorKind:
    """Resolve an error kind, preferring the server's structured ``kind`` field."""
    if kind and str(kind).lower() in _KIND_VALUES:
        return ErrorKind(str(kind).lower())
    return classify_message(message)


def kind_for_status(status_code: int | None) -> ErrorKind:
    if status_code is None:
        return ErrorKind.NETWORK
    return _STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)
