"""Product image tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..client import GeminiClient
from ..config import get_config
from ..errors import make_tool_error
from ..media import load_media
from ..models.marketing import EnhanceImageResult, FestivalImagesResult
from ..pipeline import GenerationOrchestrator, GenerationRequest, TaskOutcome, TaskStatus
from ..prompts.enhance import (
    ENHANCE_FALLBACK_DESCRIPTION,
    ENHANCE_VARIATIONS,
    build_enhance_prompts,
)
from ..prompts.festival import FESTIVAL_IMAGE_VARIATIONS, build_festival_image_prompts
from ..providers import GeminiImageProvider
from ..tracing import trace
from ..types import (
    EnhanceVariation,
    FestivalName,
    ImageDataUri,
    ImagePath,
    ProductName,
    SloganLanguage,
)
from ._results import image_items

logger = logging.getLogger(__name__)
image_server = FastMCP("images")


def _image_provider() -> GeminiImageProvider:
    return GeminiImageProvider(GeminiClient.get(), model=get_config().image_model)


def _enhance_description(outcome: TaskOutcome) -> str:
    if outcome.status == TaskStatus.FALLBACK_SUCCEEDED:
        return ENHANCE_FALLBACK_DESCRIPTION
    return ENHANCE_VARIATIONS[outcome.name]["description"]


@image_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="enhance_image", span_type="TOOL")
async def enhance_image(
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
    variations: Annotated[list[EnhanceVariation] | None, Field(
        description="Subset of enhancements to run (default: all three)",
    )] = None,
) -> dict:
    """Enhance a product photo into natural, white-background and high-resolution variants.

    Each variant is generated independently. A variant whose enhancement
    fails is retried once with a gentle brightness/sharpness instruction;
    if that also fails the item carries an ``error`` and no image.

    Args:
        image_data_uri: Product photo as a data URI.
        image_path: Local product photo (alternative to image_data_uri).
        variations: Which enhancements to produce.

    Returns:
        Dict with overall_status and images (variation, status, url, description, error).
    """
    try:
        media = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
        request = GenerationRequest(media=media, variations=tuple(variations or ENHANCE_VARIATIONS))
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        result = await GenerationOrchestrator(_image_provider(), build_enhance_prompts).run(request)
    except Exception as exc:
        return make_tool_error(exc)

    return EnhanceImageResult(
        overall_status=result.overall_status.value,
        images=image_items(result, _enhance_description),
    ).model_dump(mode="json")


@image_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_festival_images", span_type="TOOL")
async def generate_festival_images(
    product_name: ProductName,
    festival: FestivalName,
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
    artisan_name: Annotated[str | None, Field(description="Artisan or shop name for watermarks")] = None,
    language: SloganLanguage = "en",
) -> dict:
    """Create festival marketing images for a product: festive background, mockup, poster.

    Slogans and decorations follow the festival; unknown festivals get a
    neutral celebratory style. Variants that fail are retried once without
    text overlays.

    Args:
        product_name: Product name shown on the poster variant.
        festival: Festival name, e.g. "Diwali".
        image_data_uri: Product photo as a data URI.
        image_path: Local product photo (alternative to image_data_uri).
        artisan_name: Watermark name (default "Artisan").
        language: Slogan language, "en" or "hi".

    Returns:
        Dict with overall_status, festival, language and images.
    """
    try:
        if not product_name.strip() or not festival.strip():
            raise ValueError("Missing required fields: product_name, festival")
        media = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
        request = GenerationRequest(
            media=media,
            params={
                "product_name": product_name.strip(),
                "festival": festival.strip(),
                "artisan_name": (artisan_name or "").strip() or "Artisan",
                "language": language,
            },
            variations=FESTIVAL_IMAGE_VARIATIONS,
        )
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        result = await GenerationOrchestrator(_image_provider(), build_festival_image_prompts).run(request)
    except Exception as exc:
        return make_tool_error(exc)

    logger.info("Festival images for %s: %s", request.params["festival"], result.overall_status.value)
    return FestivalImagesResult(
        overall_status=result.overall_status.value,
        festival=request.params["festival"],
        language=language,
        images=image_items(result),
    ).model_dump(mode="json")
