"""
Python bindings for the spoo.me URL shortener API.

Provides a blocking client (SpooMeClient) and an async client
(AsyncSpooMeClient) for every spoo.me endpoint, with support for
self-hosted instances.
"""

from spoome.api.schemas import (
    EmojiRequest,
    EmojiResponse,
    ExportFormat,
    ExportRequest,
    ExportResponse,
    ShortenRequest,
    ShortenResponse,
    StatsRequest,
    StatsResponse,
)
from spoome.core.exceptions import (
    ApiError,
    ApiErrorKind,
    ConfigurationError,
    DecodeError,
    InvalidAliasError,
    InvalidEmojiSequenceError,
    InvalidMaxClicksError,
    InvalidPasswordError,
    InvalidRequestError,
    InvalidURLError,
    RateLimitError,
    SpooMeError,
    TransportError,
    UnexpectedResponseError,
)
from spoome.core.setting import VERSION as __version__
from spoome.core.validators import (
    is_valid_alias,
    is_valid_emoji_sequence,
    is_valid_max_clicks,
    is_valid_password,
    is_valid_url,
)
from spoome.services.client import AsyncSpooMeClient, SpooMeClient

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "AsyncSpooMeClient",
    "ConfigurationError",
    "DecodeError",
    "EmojiRequest",
    "EmojiResponse",
    "ExportFormat",
    "ExportRequest",
    "ExportResponse",
    "InvalidAliasError",
    "InvalidEmojiSequenceError",
    "InvalidMaxClicksError",
    "InvalidPasswordError",
    "InvalidRequestError",
    "InvalidURLError",
    "RateLimitError",
    "ShortenRequest",
    "ShortenResponse",
    "SpooMeClient",
    "SpooMeError",
    "StatsRequest",
    "StatsResponse",
    "TransportError",
    "UnexpectedResponseError",
    "is_valid_alias",
    "is_valid_emoji_sequence",
    "is_valid_max_clicks",
    "is_valid_password",
    "is_valid_url",
]
