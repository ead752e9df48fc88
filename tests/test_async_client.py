"""
Tests for the async spoo.me client.

The async client shares validation and interpretation with the blocking
client, so these tests focus on the end-to-end scenarios and on calls
running concurrently on one client.
"""

import asyncio

import httpx
import pytest

from spoome.api.schemas import (
    EmojiRequest,
    ExportFormat,
    ExportRequest,
    ShortenRequest,
    StatsRequest,
)
from spoome.core.exceptions import (
    ApiError,
    ApiErrorKind,
    ConfigurationError,
    InvalidAliasError,
    InvalidPasswordError,
    RateLimitError,
    TransportError,
    UnexpectedResponseError,
)
from spoome.services.client import AsyncSpooMeClient

from tests.conftest import BASE_URL, shorten_handler, stats_handler, status_handler


@pytest.mark.asyncio
async def test_shorten(make_transport):
    """Shorten with every optional field set."""
    transport = make_transport(shorten_handler)
    request = ShortenRequest(
        url="https://example.com", password="Test@123", max_clicks=10, block_bots=True
    )
    async with AsyncSpooMeClient(transport=transport) as client:
        response = await client.shorten(request)

    assert response.short_url.startswith(BASE_URL)
    assert response.original_url == "https://example.com"
    assert transport.last_form()["block-bots"] == "true"


@pytest.mark.asyncio
async def test_emoji(make_transport):
    transport = make_transport(shorten_handler)
    async with AsyncSpooMeClient(transport=transport) as client:
        response = await client.emoji(
            EmojiRequest(url="https://example.com").with_password("Test@123").with_max_clicks(10)
        )

    assert str(transport.last_request.url) == f"{BASE_URL}/emoji"
    assert response.short_url.startswith(f"{BASE_URL}/")


@pytest.mark.asyncio
async def test_invalid_password_makes_no_network_call(make_transport):
    transport = make_transport(shorten_handler)
    async with AsyncSpooMeClient(transport=transport) as client:
        with pytest.raises(InvalidPasswordError) as exc_info:
            await client.shorten(ShortenRequest(url="https://example.com", password="short"))

    assert exc_info.value.field == "password"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_stats(make_transport):
    transport = make_transport(stats_handler)
    async with AsyncSpooMeClient(transport=transport) as client:
        stats = await client.stats(StatsRequest(short_code="ga"))

    assert stats.total_clicks > 0
    assert stats.creation_date is not None


@pytest.mark.asyncio
async def test_export(make_transport):
    transport = make_transport(lambda request: httpx.Response(200, content=b"<stats/>"))
    async with AsyncSpooMeClient(transport=transport) as client:
        export = await client.export(ExportRequest(short_code="ga", export_format=ExportFormat.XML))

    assert str(transport.last_request.url) == f"{BASE_URL}/export/ga/xml"
    assert export.data == b"<stats/>"


@pytest.mark.asyncio
async def test_rate_limit(make_transport):
    transport = make_transport(status_handler(429, text="slow down"))
    async with AsyncSpooMeClient(transport=transport) as client:
        with pytest.raises(RateLimitError):
            await client.shorten(ShortenRequest(url="https://example.com"))


@pytest.mark.asyncio
async def test_alias_error(make_transport):
    transport = make_transport(status_handler(400, body={"error": "AliasError"}))
    async with AsyncSpooMeClient(transport=transport) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.shorten(ShortenRequest(url="https://example.com", alias="taken"))

    assert exc_info.value.kind is ApiErrorKind.ALIAS


@pytest.mark.asyncio
async def test_unstructured_error(make_transport):
    transport = make_transport(status_handler(502, text="Bad Gateway"))
    async with AsyncSpooMeClient(transport=transport) as client:
        with pytest.raises(UnexpectedResponseError) as exc_info:
            await client.stats(StatsRequest(short_code="ga"))

    assert exc_info.value.text == "Bad Gateway"


@pytest.mark.asyncio
async def test_transport_failure(make_transport):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    async with AsyncSpooMeClient(transport=make_transport(handler)) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.stats(StatsRequest(short_code="ga"))

    assert isinstance(exc_info.value.original_error, httpx.ConnectTimeout)


@pytest.mark.asyncio
async def test_concurrent_calls(make_transport):
    """Several calls can be in flight on the same client."""

    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.01)
        if request.url.path.startswith("/stats/"):
            return stats_handler(request)
        return shorten_handler(request)

    transport = make_transport(handler)
    async with AsyncSpooMeClient(transport=transport) as client:
        results = await asyncio.gather(
            client.shorten(ShortenRequest(url="https://example.com/a", alias="first")),
            client.shorten(ShortenRequest(url="https://example.com/b", alias="second")),
            client.stats(StatsRequest(short_code="ga")),
        )

    assert results[0].short_url == f"{BASE_URL}/first"
    assert results[1].short_url == f"{BASE_URL}/second"
    assert results[2].short_code == "ga"
    assert len(transport.requests) == 3


def test_custom_base_url_requires_flag():
    with pytest.raises(ConfigurationError):
        AsyncSpooMeClient(base_url="http://localhost:8000")


@pytest.mark.asyncio
async def test_invalid_url_error_is_transport_failure(make_transport):
    def handler(request):
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    async with AsyncSpooMeClient(transport=make_transport(handler)) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.stats(StatsRequest(short_code="ga"))

    assert isinstance(exc_info.value.original_error, httpx.InvalidURL)


@pytest.mark.asyncio
async def test_short_code_with_newline_makes_no_network_call(make_transport):
    transport = make_transport(stats_handler)
    async with AsyncSpooMeClient(transport=transport) as client:
        with pytest.raises(InvalidAliasError):
            await client.stats(StatsRequest(short_code="ga\n"))

    assert transport.requests == []
