"""Shared type aliases and helpers for tool parameters."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import Field


def coerce_json_param(value: str | dict | list | None, expected_type: type) -> dict | list | None:
    """Parse MCP JSON-RPC string params back to dict/list.

    MCP JSON-RPC transport may serialize dict/list params as JSON strings.
    Pydantic v2 rejects these, so tools call this before validation.

    Args:
        value: The parameter value (possibly a JSON string).
        expected_type: Expected Python type (``dict`` or ``list``).

    Returns:
        Parsed value if coercion succeeded, original value otherwise.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = json.loads(value)
        if isinstance(parsed, expected_type):
            return parsed
    except (json.JSONDecodeError, TypeError):
        pass
    return value

# ── Literal enums ────────────────────────────────────────────────────────────

LanguageCode = Literal["en", "hi", "ta", "te", "bn", "gu", "mr", "pa", "ml", "kn"]
SloganLanguage = Literal["en", "hi"]
ListingPlatform = Literal["instagram", "whatsapp", "facebook", "etsy"]
BrandTone = Literal["traditional", "royal", "eco-friendly", "luxury", "playful", "minimal-modern"]
CampaignPlatform = Literal["instagram", "whatsapp", "email", "facebook", "twitter"]
ListingChannel = Literal["instagram", "whatsapp", "amazon", "email", "facebook", "twitter"]
CaptionPlatform = Literal["Instagram", "Facebook", "YouTube", "LinkedIn"]
EnhanceVariation = Literal["natural", "white_background", "high_resolution"]
AspectRatio = Literal["9:16", "16:9"]
ModelPreset = Literal["quality", "fast"]

# ── Annotated aliases ────────────────────────────────────────────────────────

ImageDataUri = Annotated[str | None, Field(
    description="Product photo as a data URI (data:image/...;base64,...) or bare base64",
)]
ImagePath = Annotated[str | None, Field(
    description="Path to a local product photo (png, jpg, jpeg, gif, webp)",
)]
AudioDataUri = Annotated[str | None, Field(
    description="Voice note as a data URI (data:audio/...;base64,...) or bare base64",
)]
AudioPath = Annotated[str | None, Field(
    description="Path to a local voice note (wav, mp3, ogg, flac, webm, m4a, aac)",
)]
ProductName = Annotated[str, Field(min_length=1, max_length=200, description="Product name or title")]
FestivalName = Annotated[str, Field(min_length=1, max_length=100, description="Festival, e.g. Diwali or Holi")]
ResponseLanguage = Annotated[str, Field(
    min_length=1, max_length=40, description="Language for the response, e.g. English, Hindi, Odia",
)]
