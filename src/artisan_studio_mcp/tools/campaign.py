"""Festival campaign tools — 3 tools on a FastMCP sub-server."""

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
from ..errors import EmptyResultError, make_tool_error
from ..media import MediaPayload, load_media
from ..models.marketing import CampaignOverview, CampaignResult, PlatformPost, ProductAnalysis, VideoResult
from ..pipeline import GenerationOrchestrator, GenerationRequest, LongRunningTaskClient
from ..prompts.campaign import (
    CAMPAIGN_SYSTEM,
    CAMPAIGN_TEMPERATURE,
    build_platform_prompts,
    campaign_overview_prompt,
    split_email,
)
from ..prompts.video import build_video_prompts, product_analysis_prompt
from ..providers import GeminiTextProvider, VeoVideoProvider
from ..tracing import trace
from ..types import AspectRatio, CampaignPlatform, FestivalName, ImageDataUri, ImagePath, ProductName, coerce_json_param
from ._results import error_text

logger = logging.getLogger(__name__)
campaign_server = FastMCP("campaign")

VIDEO_VARIATION = "video"


def _text_provider() -> GeminiTextProvider:
    return GeminiTextProvider(temperature=CAMPAIGN_TEMPERATURE, system_instruction=CAMPAIGN_SYSTEM)


def _video_provider(aspect_ratio: str = "9:16", duration_seconds: int = 8) -> VeoVideoProvider:
    return VeoVideoProvider(
        GeminiClient.get(),
        model=get_config().video_model,
        aspect_ratio=aspect_ratio,
        duration_seconds=duration_seconds,
    )


async def _overview(params: dict) -> CampaignOverview:
    return await GeminiClient.generate_structured(
        campaign_overview_prompt(params),
        schema=CampaignOverview,
        system_instruction=CAMPAIGN_SYSTEM,
        temperature=CAMPAIGN_TEMPERATURE,
    )


async def _analyze_product(image: MediaPayload, description: str | None, festival: str) -> tuple[ProductAnalysis, str]:
    """Vision analysis of the product photo; the neutral default on any failure."""
    try:
        analysis = await GeminiClient.generate_structured(
            [image.to_part(), types.Part(text=product_analysis_prompt(description, festival))],
            schema=ProductAnalysis,
            model=get_config().vision_model,
        )
        return analysis, "vision"
    except Exception as exc:
        logger.warning("Product analysis failed, using default analysis: %s", exc)
        return ProductAnalysis.default(description), "default"


@campaign_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_festival_campaign", span_type="TOOL")
async def generate_festival_campaign(
    product_title: ProductName,
    festival: FestivalName,
    platforms: Annotated[list[CampaignPlatform], Field(
        description="Platforms to write for: instagram, whatsapp, email, facebook, twitter",
    )],
    product_description: Annotated[str | None, Field(description="What the product is and how it is made")] = None,
    festival_theme: Annotated[str | None, Field(description="Festival theme, e.g. 'festival of lights'")] = None,
    festival_date: Annotated[str | None, Field(description="Festival date as free text")] = None,
    festival_description: Annotated[str | None, Field(description="Extra festival context")] = None,
    language: Annotated[str, Field(
        description="Language for all copy, e.g. English, Hindi, Bengali, Telugu",
    )] = "English",
) -> dict:
    """Write festival campaign copy: caption, hashtags, offer, and one post per platform.

    Each platform post is generated independently; a post that fails is
    retried once with a short generic prompt. Email posts are split into
    subject and body. The campaign fails only if every platform post fails.

    Args:
        product_title: Product being promoted.
        festival: Festival name.
        platforms: Non-empty list of target platforms.
        product_description: Optional product description.
        festival_theme: Optional festival theme.
        festival_date: Optional festival date.
        festival_description: Optional festival context.
        language: Output language.

    Returns:
        Dict matching CampaignResult.
    """
    platforms = coerce_json_param(platforms, list)
    try:
        if not product_title.strip() or not festival.strip():
            raise ValueError("Missing required fields: product_title, festival")
        if not platforms:
            raise ValueError("Missing required field: platforms (at least one platform)")
        params = {
            "product_title": product_title.strip(),
            "product_description": product_description,
            "festival": festival.strip(),
            "festival_theme": festival_theme,
            "festival_date": festival_date,
            "festival_description": festival_description,
            "language": language,
        }
        request = GenerationRequest(media=None, params=params, variations=tuple(platforms))
    except ValueError as exc:
        return make_tool_error(exc)

    orchestrator = GenerationOrchestrator(_text_provider(), build_platform_prompts)
    try:
        overview, result = await asyncio.gather(
            _overview(params), orchestrator.run(request), return_exceptions=True,
        )
        if isinstance(result, BaseException):
            raise result
    except Exception as exc:
        return make_tool_error(exc)

    campaign = CampaignResult(
        festival=params["festival"],
        language=language,
        overall_status=result.overall_status.value,
    )
    if isinstance(overview, BaseException):
        logger.warning("Campaign overview failed: %s", overview)
        campaign.overview_error = str(overview)
    else:
        campaign.caption = overview.caption
        campaign.hashtags = overview.hashtags
        campaign.discount_text = overview.discount_text

    for outcome in result.outcomes:
        post = PlatformPost(platform=outcome.name, status=outcome.status.value, error=error_text(outcome))
        if outcome.succeeded:
            if outcome.name == "email":
                post.subject, post.content = split_email(outcome.payload)
            else:
                post.content = outcome.payload
        campaign.posts.append(post)
    return campaign.model_dump(mode="json")


@campaign_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_festival_video", span_type="TOOL")
async def generate_festival_video(
    product_name: ProductName,
    artisan_name: Annotated[str, Field(min_length=1, description="Artisan or shop name")],
    festival: FestivalName,
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
    product_description: Annotated[str | None, Field(description="Text description of the product")] = None,
    aspect_ratio: AspectRatio = "9:16",
    duration_seconds: Annotated[int, Field(ge=4, le=8, description="Video length in seconds")] = 8,
    branding_text: Annotated[str | None, Field(description="Text to show in the video")] = None,
    call_to_action: Annotated[str | None, Field(description="Closing call to action")] = None,
    color_scheme: Annotated[list[str] | None, Field(description="Colors to incorporate")] = None,
    wait: Annotated[bool, Field(
        description="Wait for the video (up to ~10 minutes). False returns an operation_handle for video_status.",
    )] = True,
) -> dict:
    """Generate a festival marketing video for a product with Veo.

    Provide a product photo, a description, or both. With a photo the
    product is first analysed so the video keeps its exact appearance. The
    festival picks the scene script (Diwali, Holi, Raksha Bandhan, Eid,
    Christmas, Navratri, or a generic festive script).

    Args:
        product_name: Product name.
        artisan_name: Artisan or shop name.
        festival: Festival name.
        image_data_uri: Product photo as a data URI.
        image_path: Local product photo (alternative to image_data_uri).
        product_description: Text description of the product.
        aspect_ratio: "9:16" or "16:9".
        duration_seconds: Video length.
        branding_text: Optional on-screen branding.
        call_to_action: Optional closing line.
        color_scheme: Optional colours.
        wait: Block until the video is ready, or return a handle immediately.

    Returns:
        Dict matching VideoResult.
    """
    color_scheme = coerce_json_param(color_scheme, list)
    try:
        if not (image_data_uri or image_path) and not (product_description or "").strip():
            raise ValueError(
                "Provide either a product photo or a product description (or both for best results)"
            )
        if not product_name.strip() or not artisan_name.strip() or not festival.strip():
            raise ValueError("Missing required fields: product_name, artisan_name, festival")
        image = None
        if image_data_uri or image_path:
            image = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        analysis, analysis_source = None, ""
        if image is not None:
            analysis, analysis_source = await _analyze_product(image, product_description, festival.strip())

        request = GenerationRequest(
            media=image,
            params={
                "product_name": product_name.strip(),
                "artisan_name": artisan_name.strip(),
                "festival": festival.strip(),
                "product_description": product_description,
                "aspect_ratio": aspect_ratio,
                "duration_seconds": duration_seconds,
                "branding_text": branding_text,
                "call_to_action": call_to_action,
                "color_scheme": color_scheme or [],
                "analysis": analysis.model_dump() if analysis else None,
            },
            variations=(VIDEO_VARIATION,),
        )
        prompt = build_video_prompts(request, VIDEO_VARIATION).primary
        provider = _video_provider(aspect_ratio, duration_seconds)
        video = VideoResult(
            status="pending",
            duration_seconds=duration_seconds,
            aspect_ratio=aspect_ratio,
            generated_prompt=prompt,
            product_analysis=analysis,
            analysis_source=analysis_source,
        )

        if not wait:
            video.operation_handle = await provider.generate_async(prompt, image)
            return video.model_dump(mode="json")

        cfg = get_config()
        client = LongRunningTaskClient(
            provider, interval=cfg.video_poll_interval, max_attempts=cfg.video_poll_max_attempts,
        )
        result = await GenerationOrchestrator(client, build_video_prompts).run(request)
    except Exception as exc:
        return make_tool_error(exc)

    outcome = result.get(VIDEO_VARIATION)
    video.status = outcome.status.value
    video.video_url = outcome.payload.url
    return video.model_dump(mode="json")


@campaign_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="video_status", span_type="TOOL")
async def video_status(
    operation_handle: Annotated[str, Field(min_length=1, description="Handle from generate_festival_video")],
) -> dict:
    """Check a video started with ``generate_festival_video(wait=False)`` once.

    Args:
        operation_handle: Operation handle returned at submission.

    Returns:
        Dict with status ("pending", "succeeded" or "failed"), video_url or error.
    """
    try:
        status = await _video_provider().check_status(operation_handle)
        video = VideoResult(status="pending", operation_handle=operation_handle)
        if not status.done:
            return video.model_dump(mode="json")
        if status.error is not None:
            video.status = "failed"
            video.error = str(status.error)
        elif status.response is not None:
            video.status = "succeeded"
            video.video_url = status.response.url
        else:
            raise EmptyResultError(operation_handle)
        return video.model_dump(mode="json")
    except Exception as exc:
        return make_tool_error(exc)
