"""Product listing tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastmcp import FastMCP
from google.genai import types
from mcp.types import ToolAnnotations
from pydantic import Field

from ..client import GeminiClient
from ..config import get_config
from ..errors import AllTasksFailedError, GenerationError, make_tool_error
from ..media import MediaPayload, load_media
from ..models.marketing import ImageVariation, ProductDetailsResult, ProductTextKit
from ..pipeline import GenerationOrchestrator, GenerationRequest, OverallStatus
from ..prompts.product import (
    MOCKUP_VARIATIONS,
    PRODUCT_KIT_SYSTEM,
    PRODUCT_KIT_TEMPERATURE,
    TRANSCRIBE_AUDIO,
    build_mockup_prompts,
    product_kit_prompt,
)
from ..providers import GeminiImageProvider
from ..tracing import trace
from ..types import AudioDataUri, AudioPath, BrandTone, ImageDataUri, ImagePath, LanguageCode, ListingPlatform
from ._results import image_items

logger = logging.getLogger(__name__)
product_server = FastMCP("product")


def _image_provider() -> GeminiImageProvider:
    return GeminiImageProvider(GeminiClient.get(), model=get_config().image_model)


async def _transcribe(audio: MediaPayload, language_code: str) -> str:
    """Transcribe a voice note with Gemini.

    Raises:
        GenerationError: When the model call fails or no speech is found.
    """
    try:
        text = await GeminiClient.generate(
            [audio.to_part(), types.Part(text=TRANSCRIBE_AUDIO.format(language_code=language_code))],
            temperature=0.0,
        )
    except Exception as exc:
        raise GenerationError(f"Transcription failed: {exc}", cause=exc) from exc
    transcript = text.strip()
    if not transcript:
        raise GenerationError("No speech detected")
    return transcript


async def _text_kit(image: MediaPayload, **prompt_fields: str | None) -> ProductTextKit:
    return await GeminiClient.generate_structured(
        [image.to_part(), types.Part(text=product_kit_prompt(**prompt_fields))],
        schema=ProductTextKit,
        system_instruction=PRODUCT_KIT_SYSTEM,
        temperature=PRODUCT_KIT_TEMPERATURE,
    )


async def _mockups(image: MediaPayload) -> tuple[str, list[ImageVariation]]:
    """Run the mockup variations; a total failure is reported, not raised."""
    request = GenerationRequest(media=image, variations=tuple(MOCKUP_VARIATIONS))
    try:
        result = await GenerationOrchestrator(_image_provider(), build_mockup_prompts).run(request)
    except AllTasksFailedError as exc:
        logger.warning("All product mockups failed: %s", exc.summary())
        items = [
            ImageVariation(variation=name, status="failed", error=str(err))
            for name, err in exc.per_task_errors.items()
        ]
        return OverallStatus.ALL_FAILED.value, items
    return result.overall_status.value, image_items(result)


@product_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="transcribe_audio", span_type="TOOL")
async def transcribe_audio(
    audio_data_uri: AudioDataUri = None,
    audio_path: AudioPath = None,
    language_code: Annotated[str, Field(
        min_length=2, max_length=10, description="Expected spoken language, e.g. 'hi' or 'en-IN'",
    )] = "en",
) -> dict:
    """Transcribe an artisan's voice note.

    Args:
        audio_data_uri: Voice note as a data URI.
        audio_path: Local audio file (alternative to audio_data_uri).
        language_code: Expected spoken language.

    Returns:
        Dict with transcript and language_code.
    """
    try:
        audio = load_media(data_uri=audio_data_uri, file_path=audio_path, kind="audio", field_name="audio")
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        transcript = await _transcribe(audio, language_code)
    except Exception as exc:
        return make_tool_error(exc)
    return {"transcript": transcript, "language_code": language_code}


@product_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_product_details", span_type="TOOL")
async def generate_product_details(
    product_category: Annotated[str, Field(
        min_length=1, description='Product category, e.g. "pottery" or "textile"',
    )],
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
    voice_note_data_uri: AudioDataUri = None,
    voice_note_path: AudioPath = None,
    language: LanguageCode = "en",
    platform: ListingPlatform = "instagram",
    brand_tone: BrandTone = "traditional",
) -> dict:
    """Build a complete marketing kit for a product photo.

    The optional voice note is transcribed first. The text kit (title,
    English/Hindi descriptions, caption, hashtags, platforms, engagement
    score) and three image mockups (lifestyle, human interaction, poster)
    are then generated concurrently. If every mockup fails the text kit is
    still returned with ``mockup_status`` set to "all_failed".

    Args:
        product_category: Product category.
        image_data_uri: Product photo as a data URI.
        image_path: Local product photo (alternative to image_data_uri).
        voice_note_data_uri: Optional artisan voice note as a data URI.
        voice_note_path: Optional local voice note.
        language: Base language for the content.
        platform: Target platform for the caption.
        brand_tone: Desired brand tone.

    Returns:
        Dict matching ProductDetailsResult.
    """
    try:
        image = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
        voice_note = None
        if voice_note_data_uri or voice_note_path:
            voice_note = load_media(
                data_uri=voice_note_data_uri, file_path=voice_note_path, kind="audio", field_name="voice_note",
            )
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        transcript = await _transcribe(voice_note, language) if voice_note is not None else None

        kit, mockups = await asyncio.gather(
            _text_kit(
                image,
                transcript=transcript,
                product_category=product_category,
                platform=platform,
                brand_tone=brand_tone,
                language=language,
            ),
            _mockups(image),
            return_exceptions=True,
        )
        for outcome in (kit, mockups):
            if isinstance(outcome, BaseException):
                raise outcome
    except Exception as exc:
        return make_tool_error(exc)

    mockup_status, items = mockups
    return ProductDetailsResult(
        **kit.model_dump(),
        transcript=transcript or "",
        mockup_status=mockup_status,
        image_mockups=items,
    ).model_dump(mode="json")
