"""
Custom Exceptions

This module defines the exceptions raised by the spoo.me client.
Every failure of a client call is one of these, rooted at SpooMeError.

Taxonomy:
- InvalidRequestError: local validation failed, nothing was sent
- ApiError: the service rejected the request with a known error label
- RateLimitError: the service answered HTTP 429
- TransportError: the HTTP exchange itself failed (connection, TLS, timeout)
- DecodeError: a successful response did not have the expected shape
- UnexpectedResponseError: an error response without a readable error label
- ConfigurationError: the client was configured incorrectly
"""

from enum import Enum
from typing import Optional


class SpooMeError(Exception):
    """Base exception for the spoo.me client."""
    pass


class ConfigurationError(SpooMeError):
    """Raised when the client configuration is invalid."""


class InvalidRequestError(SpooMeError):
    """Raised when a request fails local validation."""

    field = "request"
    # Sensitive values are kept on the exception but left out of its message
    sensitive = False

    def __init__(self, value, reason: str = "Invalid format"):
        self.value = value
        self.reason = reason
        super().__init__(reason if self.sensitive else f"{reason}: {value!r}")


class InvalidPasswordError(InvalidRequestError):
    """Raised when a password does not meet the format requirements."""

    field = "password"
    sensitive = True

    def __init__(self, value: str, reason: str = "Invalid password format"):
        super().__init__(value, reason)


class InvalidURLError(InvalidRequestError):
    """Raised when URL validation fails."""

    field = "url"

    def __init__(self, value: str, reason: str = "Invalid URL format"):
        super().__init__(value, reason)


class InvalidAliasError(InvalidRequestError):
    """Raised when an alias or short code does not meet the format requirements."""

    field = "alias"

    def __init__(self, value: str, reason: str = "Invalid alias format"):
        super().__init__(value, reason)


class InvalidMaxClicksError(InvalidRequestError):
    """Raised when max clicks is not a positive integer."""

    field = "max_clicks"

    def __init__(self, value: int, reason: str = "Max clicks must be a positive integer"):
        super().__init__(value, reason)


class InvalidEmojiSequenceError(InvalidRequestError):
    """Raised when an emoji sequence is not made of emoji."""

    field = "emoji_sequence"

    def __init__(self, value: str, reason: str = "Invalid emoji sequence"):
        super().__init__(value, reason)


class ApiErrorKind(Enum):
    """Error labels reported by the service in the ``error`` field."""
    URL = "UrlError"
    ALIAS = "AliasError"
    PASSWORD = "PasswordError"
    MAX_CLICKS = "MaxClicksError"
    EMOJI = "EmojiError"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str) -> "ApiErrorKind":
        """Map a raw error label to a kind, falling back to OTHER."""
        for kind in cls:
            if kind is not cls.OTHER and kind.value == label:
                return kind
        return cls.OTHER

    @property
    def description(self) -> str:
        return _API_ERROR_DESCRIPTIONS[self]


_API_ERROR_DESCRIPTIONS = {
    ApiErrorKind.URL: "URL does not match the expected format",
    ApiErrorKind.ALIAS: "alias already in use or invalid",
    ApiErrorKind.PASSWORD: "password is incorrect or invalid",
    ApiErrorKind.MAX_CLICKS: "max clicks value is invalid",
    ApiErrorKind.EMOJI: "emoji sequence already in use or invalid",
    ApiErrorKind.OTHER: "unrecognized service error",
}


class ApiError(SpooMeError):
    """Raised when the service reports an error label."""

    def __init__(self, label: str, status_code: Optional[int] = None):
        self.label = label
        self.kind = ApiErrorKind.from_label(label)
        self.status_code = status_code
        if self.kind is ApiErrorKind.OTHER:
            message = f"{self.kind.description}: {label}"
        else:
            message = self.kind.description
        super().__init__(message)


class RateLimitError(SpooMeError):
    """Raised when the service answers HTTP 429."""

    def __init__(self, retry_after: Optional[str] = None, body: str = ""):
        self.status_code = 429
        self.retry_after = retry_after
        self.body = body
        message = "Rate limit exceeded"
        if retry_after:
            message += f" (retry after {retry_after})"
        super().__init__(message)


class TransportError(SpooMeError):
    """Raised when the HTTP exchange fails before a response is read."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Transport error: {message}")


class DecodeError(SpooMeError):
    """Raised when a successful response body cannot be decoded."""

    def __init__(self, message: str, body: str = "", original_error: Exception = None):
        self.body = body
        self.original_error = original_error
        super().__init__(f"Decode error: {message}")


class UnexpectedResponseError(SpooMeError):
    """Raised for error responses that carry no recognizable error label."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text
        super().__init__(f"Unexpected response ({status_code}): {text}")
