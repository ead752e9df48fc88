"""
Response Interpretation

Turns a completed httpx response into either a typed model or one of the
classified client exceptions. Shared by the blocking and async clients so
both interpret the service identically.

Order of checks:
1. HTTP 429 -> RateLimitError, body ignored
2. Other non-2xx -> ApiError if the body is {"error": "<label>"},
   UnexpectedResponseError otherwise
3. 2xx -> decoded body
"""

import json
import logging
from typing import Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from spoome.api.schemas import ExportFormat, ExportResponse
from spoome.core.exceptions import (
    ApiError,
    DecodeError,
    RateLimitError,
    UnexpectedResponseError,
)

logger = logging.getLogger("spoome.responses")

ModelT = TypeVar("ModelT", bound=BaseModel)


def raise_for_error(response: httpx.Response) -> None:
    """
    Raise the classified exception for a non-success response.

    Args:
        response: A response whose body has already been read

    Raises:
        RateLimitError: On HTTP 429
        ApiError: When the body names a service error label
        UnexpectedResponseError: For any other error response
    """
    if response.status_code == 429:
        raise RateLimitError(
            retry_after=response.headers.get("Retry-After"),
            body=response.text,
        )

    if response.is_success:
        return

    text = response.text
    try:
        body = json.loads(text)
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("error"), str):
        raise ApiError(body["error"], status_code=response.status_code)

    raise UnexpectedResponseError(response.status_code, text)


def decode_model(response: httpx.Response, model: Type[ModelT]) -> ModelT:
    """
    Decode a JSON response body into ``model``.

    Args:
        response: A response whose body has already been read
        model: Pydantic model describing the expected body

    Returns:
        The validated model instance

    Raises:
        The exceptions of raise_for_error, or DecodeError if a successful
        body is not the expected JSON shape
    """
    raise_for_error(response)
    try:
        return model.model_validate_json(response.content)
    except ValidationError as e:
        logger.debug("Failed to decode %s: %s", model.__name__, e)
        raise DecodeError(
            f"response is not a valid {model.__name__}",
            body=response.text,
            original_error=e,
        )


def decode_export(response: httpx.Response, export_format: ExportFormat) -> ExportResponse:
    """Wrap a successful export body as raw bytes."""
    raise_for_error(response)
    return ExportResponse(
        data=response.content,
        export_format=export_format,
        content_type=response.headers.get("Content-Type"),
    )
