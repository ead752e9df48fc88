"""
spoo.me API Client

This module holds the clients for the four spoo.me operations:
- shorten: POST {base}/
- emoji: POST {base}/emoji
- stats: POST {base}/stats/{short_code}
- export: POST {base}/export/{short_code}/{export_format}

Design Decisions:
- BaseSpooMeClient owns everything except I/O: configuration, local
  validation, request preparation and response interpretation
- SpooMeClient (blocking, httpx.Client) and AsyncSpooMeClient (httpx.AsyncClient)
  are thin entry points over the same prepared calls
- Validation happens before any network activity
- No retries and no client-side timeouts; the transport timeout surfaces
  as TransportError

Example:
    with SpooMeClient() as client:
        request = ShortenRequest(url="https://example.com/long/url").with_password("Example@123")
        response = client.shorten(request)
        print(response.short_url)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import httpx

from spoome.api.schemas import (
    EmojiRequest,
    EmojiResponse,
    ExportRequest,
    ExportResponse,
    ShortenRequest,
    ShortenResponse,
    StatsRequest,
    StatsResponse,
)
from spoome.core.exceptions import (
    ConfigurationError,
    InvalidAliasError,
    InvalidEmojiSequenceError,
    InvalidMaxClicksError,
    InvalidPasswordError,
    InvalidRequestError,
    InvalidURLError,
    SpooMeError,
    TransportError,
)
from spoome.core.setting import DEFAULT_BASE_URL, settings
from spoome.core.validators import (
    DEFAULT_HOST,
    is_valid_alias,
    is_valid_emoji_sequence,
    is_valid_max_clicks,
    is_valid_password,
    is_valid_url,
)
from spoome.middleware.logging import logging_hooks
from spoome.services.responses import decode_export, decode_model

logger = logging.getLogger("spoome.client")

# httpx.InvalidURL and httpx.StreamError do not derive from httpx.HTTPError
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


@dataclass(frozen=True)
class PreparedCall:
    """A validated request ready to be sent, plus how to read its response."""
    operation: str
    path: str
    form: Dict[str, str]
    decode: Callable[[httpx.Response], object] = field(repr=False)


class BaseSpooMeClient:
    """
    Shared configuration, validation and interpretation logic.

    Subclasses only perform the HTTP exchange.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        allow_custom_base_url: Optional[bool] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the client configuration.

        Args:
            base_url: Base URL of the instance (defaults to settings.BASE_URL)
            allow_custom_base_url: Allow base URLs other than the public instance
                (defaults to settings.ALLOW_CUSTOM_BASE_URL)
            timeout: Transport timeout in seconds (defaults to settings.TIMEOUT)
            headers: Extra headers sent with every request

        Raises:
            ConfigurationError: If the base URL is malformed or not allowed
        """
        if allow_custom_base_url is None:
            allow_custom_base_url = settings.ALLOW_CUSTOM_BASE_URL
        self.allow_custom_base_url = allow_custom_base_url
        self.timeout = settings.TIMEOUT if timeout is None else timeout
        self.headers = {
            "Accept": "application/json",
            "User-Agent": settings.USER_AGENT,
        }
        if headers:
            self.headers.update(headers)
        self._configure_base_url(base_url or settings.BASE_URL)

    def _configure_base_url(self, url: str) -> None:
        url = url.rstrip("/")
        if not url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Base URL must start with http:// or https://: {url}")
        if url != DEFAULT_BASE_URL and not self.allow_custom_base_url:
            raise ConfigurationError(
                f"Custom base URL {url!r} requires allow_custom_base_url=True"
            )
        self.base_url = url
        # URLs pointing back at the shortener are rejected
        self.url_exclusion = DEFAULT_HOST if url == DEFAULT_BASE_URL else url

    def set_base_url(self, url: str) -> None:
        """
        Point the client at another instance.

        Raises:
            ConfigurationError: If the base URL is malformed or not allowed
        """
        self._configure_base_url(url)
        self._http.base_url = self.base_url

    # Validation

    def _reject(self, error: InvalidRequestError) -> InvalidRequestError:
        logger.warning(f"Request rejected before sending ({error.field}): {error}")
        return error

    def _check_password(self, password: Optional[str]) -> None:
        if password is not None and not is_valid_password(password):
            raise self._reject(InvalidPasswordError(password))

    def _check_url(self, url: str) -> None:
        if not is_valid_url(url, self.url_exclusion):
            raise self._reject(InvalidURLError(url))

    def _check_alias(self, alias: Optional[str]) -> None:
        if alias is not None and not is_valid_alias(alias):
            raise self._reject(InvalidAliasError(alias))

    def _check_emoji_sequence(self, emoji_sequence: Optional[str]) -> None:
        if emoji_sequence is not None and not is_valid_emoji_sequence(emoji_sequence):
            raise self._reject(InvalidEmojiSequenceError(emoji_sequence))

    def _check_short_code(self, short_code: str) -> None:
        if not is_valid_alias(short_code):
            raise self._reject(InvalidAliasError(short_code, reason="Invalid short code format"))

    def _check_max_clicks(self, max_clicks: Optional[int]) -> None:
        if max_clicks is not None and not is_valid_max_clicks(max_clicks):
            raise self._reject(InvalidMaxClicksError(max_clicks))

    # Preparation

    def _prepare_shorten(self, request: ShortenRequest) -> PreparedCall:
        self._check_password(request.password)
        self._check_url(request.url)
        self._check_alias(request.alias)
        self._check_max_clicks(request.max_clicks)
        return PreparedCall(
            operation="shorten",
            path="/",
            form=request.to_form(),
            decode=lambda response: decode_model(response, ShortenResponse),
        )

    def _prepare_emoji(self, request: EmojiRequest) -> PreparedCall:
        self._check_password(request.password)
        self._check_url(request.url)
        self._check_emoji_sequence(request.emoji_sequence)
        self._check_max_clicks(request.max_clicks)
        return PreparedCall(
            operation="emoji",
            path="/emoji",
            form=request.to_form(),
            decode=lambda response: decode_model(response, EmojiResponse),
        )

    def _prepare_stats(self, request: StatsRequest) -> PreparedCall:
        self._check_password(request.password)
        self._check_short_code(request.short_code)
        return PreparedCall(
            operation="stats",
            path=f"/stats/{request.short_code}",
            form=request.to_form(),
            decode=lambda response: decode_model(response, StatsResponse),
        )

    def _prepare_export(self, request: ExportRequest) -> PreparedCall:
        self._check_password(request.password)
        self._check_short_code(request.short_code)
        export_format = request.export_format
        return PreparedCall(
            operation="export",
            path=f"/export/{request.short_code}/{export_format.value}",
            form=request.to_form(),
            decode=lambda response: decode_export(response, export_format),
        )

    # Interpretation

    def _transport_error(self, call: PreparedCall, error: Exception) -> TransportError:
        logger.warning(f"{call.operation}: transport failure: {error!r}")
        return TransportError(str(error) or type(error).__name__, original_error=error)

    def _interpret(self, call: PreparedCall, response: httpx.Response):
        try:
            return call.decode(response)
        except SpooMeError as e:
            logger.debug(f"{call.operation}: {type(e).__name__}: {e}")
            raise

    def _http_client_options(self, transport) -> dict:
        options = {
            "base_url": self.base_url,
            "headers": self.headers,
            "timeout": self.timeout,
        }
        if transport is not None:
            options["transport"] = transport
        return options


class SpooMeClient(BaseSpooMeClient):
    """
    Blocking client for the spoo.me API.

    Each call occupies the calling thread until the response is read.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        allow_custom_base_url: Optional[bool] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(base_url, allow_custom_base_url, timeout, headers)
        self._http = httpx.Client(
            event_hooks=logging_hooks(),
            **self._http_client_options(transport),
        )

    def _send(self, call: PreparedCall):
        try:
            response = self._http.post(call.path, data=call.form)
        except TRANSPORT_ERRORS as e:
            raise self._transport_error(call, e) from e
        return self._interpret(call, response)

    def shorten(self, request: ShortenRequest) -> ShortenResponse:
        """
        Shorten a URL.

        Args:
            request: The shorten request

        Returns:
            ShortenResponse with the short URL

        Raises:
            InvalidRequestError: If the request fails local validation
            ApiError, RateLimitError, UnexpectedResponseError: If the service rejects it
            TransportError: If the HTTP exchange fails
            DecodeError: If the response cannot be decoded
        """
        return self._send(self._prepare_shorten(request))

    def emoji(self, request: EmojiRequest) -> EmojiResponse:
        """Shorten a URL with an emoji slug. Raises like shorten()."""
        return self._send(self._prepare_emoji(request))

    def stats(self, request: StatsRequest) -> StatsResponse:
        """Fetch click statistics for a short code. Raises like shorten()."""
        return self._send(self._prepare_stats(request))

    def export(self, request: ExportRequest) -> ExportResponse:
        """Export statistics for a short code as a file. Raises like shorten()."""
        return self._send(self._prepare_export(request))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SpooMeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncSpooMeClient(BaseSpooMeClient):
    """
    Async client for the spoo.me API.

    Calls suspend on network I/O; several calls may be in flight on one client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        allow_custom_base_url: Optional[bool] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, allow_custom_base_url, timeout, headers)
        self._http = httpx.AsyncClient(
            event_hooks=logging_hooks(use_async=True),
            **self._http_client_options(transport),
        )

    async def _send(self, call: PreparedCall):
        try:
            response = await self._http.post(call.path, data=call.form)
        except TRANSPORT_ERRORS as e:
            raise self._transport_error(call, e) from e
        return self._interpret(call, response)

    async def shorten(self, request: ShortenRequest) -> ShortenResponse:
        """Shorten a URL. Raises like SpooMeClient.shorten()."""
        return await self._send(self._prepare_shorten(request))

    async def emoji(self, request: EmojiRequest) -> EmojiResponse:
        """Shorten a URL with an emoji slug."""
        return await self._send(self._prepare_emoji(request))

    async def stats(self, request: StatsRequest) -> StatsResponse:
        """Fetch click statistics for a short code."""
        return await self._send(self._prepare_stats(request))

    async def export(self, request: ExportRequest) -> ExportResponse:
        """Export statistics for a short code as a file."""
        return await self._send(self._prepare_export(request))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncSpooMeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
