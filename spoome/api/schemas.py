"""
API Request and Response Schemas

This module defines all Pydantic models exchanged with the spoo.me API.

Design Principles:
- Request models: constructed with their required fields only, optional
  fields default to None and are set with chainable ``with_*`` copies
- Request models are frozen; each one is consumed by a single client call
- Request models know their wire form (hyphenated keys, absent fields omitted)
- Response models: absent optional fields stay None, distinct from zero
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FormRequest(BaseModel):
    """Base class for requests sent as URL-encoded forms."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Fields carried in the URL path rather than the form body
    path_fields: ClassVar[FrozenSet[str]] = frozenset()

    def to_form(self) -> Dict[str, str]:
        """
        Build the URL-encoded form body.

        Returns:
            Populated fields keyed by their wire names, rendered as strings.
            Fields left as None are omitted entirely.
        """
        payload = self.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude=set(self.path_fields),
            mode="json",
        )
        return {key: _form_value(value) for key, value in payload.items()}

    def _with(self, **changes):
        # Rebuilt through validation so setter arguments are coerced and checked
        return type(self).model_validate({**self.model_dump(), **changes})


class ShortenRequest(FormRequest):
    """Request model for ``POST /`` (shorten URL)."""
    url: str = Field(..., min_length=1, description="The long URL to shorten")
    alias: Optional[str] = Field(default=None, description="Custom short code")
    password: Optional[str] = Field(default=None, description="Password protecting the short URL")
    max_clicks: Optional[int] = Field(default=None, alias="max-clicks")
    block_bots: Optional[bool] = Field(default=None, alias="block-bots")

    def with_alias(self, alias: str) -> "ShortenRequest":
        return self._with(alias=alias)

    def with_password(self, password: str) -> "ShortenRequest":
        return self._with(password=password)

    def with_max_clicks(self, max_clicks: int) -> "ShortenRequest":
        return self._with(max_clicks=max_clicks)

    def with_block_bots(self, block_bots: bool = True) -> "ShortenRequest":
        return self._with(block_bots=block_bots)


class EmojiRequest(FormRequest):
    """Request model for ``POST /emoji`` (emoji slug instead of an alias)."""
    url: str = Field(..., min_length=1, description="The long URL to shorten")
    emoji_sequence: Optional[str] = Field(default=None, alias="emojies")
    password: Optional[str] = None
    max_clicks: Optional[int] = Field(default=None, alias="max-clicks")
    block_bots: Optional[bool] = Field(default=None, alias="block-bots")

    def with_emoji_sequence(self, emoji_sequence: str) -> "EmojiRequest":
        return self._with(emoji_sequence=emoji_sequence)

    def with_password(self, password: str) -> "EmojiRequest":
        return self._with(password=password)

    def with_max_clicks(self, max_clicks: int) -> "EmojiRequest":
        return self._with(max_clicks=max_clicks)

    def with_block_bots(self, block_bots: bool = True) -> "EmojiRequest":
        return self._with(block_bots=block_bots)


class StatsRequest(FormRequest):
    """Request model for ``POST /stats/{short_code}``."""
    path_fields: ClassVar[FrozenSet[str]] = frozenset({"short_code"})

    short_code: str
    password: Optional[str] = None

    def with_password(self, password: str) -> "StatsRequest":
        return self._with(password=password)


class ExportFormat(str, Enum):
    """Export formats offered by the service."""
    JSON = "json"
    CSV = "csv"  # zipped CSV files
    XLSX = "xlsx"
    XML = "xml"

    def __str__(self) -> str:
        return self.value


class ExportRequest(FormRequest):
    """Request model for ``POST /export/{short_code}/{export_format}``."""
    path_fields: ClassVar[FrozenSet[str]] = frozenset({"short_code", "export_format"})

    short_code: str
    export_format: ExportFormat
    password: Optional[str] = None

    def with_password(self, password: str) -> "ExportRequest":
        return self._with(password=password)


class ShortenResponse(BaseModel):
    """Response model for the URL shortening endpoint."""
    model_config = ConfigDict(frozen=True)

    short_url: str = Field(..., description="The complete short URL")
    domain: str = Field(..., description="Domain of the short URL")
    original_url: str = Field(..., description="The original long URL")


class EmojiResponse(ShortenResponse):
    """Response model for the emoji endpoint, same shape as ShortenResponse."""


ClickCounts = Dict[str, int]


class StatsResponse(BaseModel):
    """
    Response model for the statistics endpoint.

    Only ``short_code``, ``url`` and the click totals are always present.
    Everything else is reported only when the service includes it.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_code: str
    url: str
    total_clicks: int = Field(..., ge=0, alias="total-clicks")
    total_unique_clicks: int = Field(..., ge=0)

    creation_date: Optional[str] = Field(default=None, alias="creation-date")
    expired: Optional[bool] = None
    last_click: Optional[str] = Field(default=None, alias="last-click")
    last_click_browser: Optional[str] = Field(default=None, alias="last-click-browser")
    last_click_os: Optional[str] = Field(default=None, alias="last-click-os")
    max_clicks: Optional[int] = Field(default=None, alias="max-clicks")
    password: Optional[str] = None
    block_bots: Optional[bool] = Field(default=None, alias="block-bots")

    bots: Optional[ClickCounts] = None
    browser: Optional[ClickCounts] = None
    country: Optional[ClickCounts] = None
    counter: Optional[ClickCounts] = None  # clicks per day
    os_name: Optional[ClickCounts] = None
    referrer: Optional[ClickCounts] = None
    unique_browser: Optional[ClickCounts] = None
    unique_country: Optional[ClickCounts] = None
    unique_counter: Optional[ClickCounts] = None
    unique_os_name: Optional[ClickCounts] = None
    unique_referrer: Optional[ClickCounts] = None


class ExportResponse(BaseModel):
    """Raw export file returned by the export endpoint."""
    model_config = ConfigDict(frozen=True)

    data: bytes
    export_format: ExportFormat
    content_type: Optional[str] = None

    def save_to_file(self, path: Union[str, Path]) -> Path:
        """
        Write the exported data to a file.

        Args:
            path: Destination file path

        Returns:
            The path written to
        """
        path = Path(path)
        path.write_bytes(self.data)
        return path
