"""Artisan mentor tools — 7 tools on a FastMCP sub-server."""

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
from ..errors import GenerationError, make_tool_error
from ..media import load_media
from ..models.marketing import (
    AdCampaignContent,
    DesignSuggestions,
    ImageAnalysis,
    ImageAnalysisResult,
    ListingOverview,
    MarketTrendSummary,
    PlatformContentResult,
    PlatformPost,
    SocialCaption,
)
from ..pipeline import GenerationOrchestrator, GenerationRequest
from ..prompts.assistance import (
    IMAGE_ANALYSIS,
    MAX_TWEET_CHARS,
    MENTOR_SYSTEM,
    MENTOR_TEMPERATURE,
    ad_campaign_prompt,
    build_listing_prompts,
    compose_analysis,
    design_improvement_prompt,
    listing_overview_prompt,
    market_trends_prompt,
    recommendations_prompt,
    social_caption_prompt,
)
from ..prompts.campaign import split_email
from ..providers import GeminiTextProvider
from ..tracing import trace
from ..types import CaptionPlatform, ImageDataUri, ImagePath, ListingChannel, ResponseLanguage, coerce_json_param
from ._results import error_text

logger = logging.getLogger(__name__)
assistance_server = FastMCP("assistance")


def _text_provider() -> GeminiTextProvider:
    return GeminiTextProvider(temperature=MENTOR_TEMPERATURE, system_instruction=MENTOR_SYSTEM)


def _require(**fields: str) -> None:
    """Reject blank required text fields, naming every one that is blank."""
    blank = [name for name, value in fields.items() if not value.strip()]
    if blank:
        raise ValueError(f"Missing required fields: {', '.join(blank)}")


async def _mentor(contents, schema):
    return await GeminiClient.generate_structured(
        contents,
        schema=schema,
        system_instruction=MENTOR_SYSTEM,
        temperature=MENTOR_TEMPERATURE,
    )


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="summarize_market_trends", span_type="TOOL")
async def summarize_market_trends(
    craft: Annotated[str, Field(min_length=1, description="Craft, e.g. handloom, pottery, jewelry")],
    region: Annotated[str, Field(min_length=1, description="Local or national region of interest")],
    language: ResponseLanguage = "English",
) -> dict:
    """Summarise trending colours, materials and designs for a craft and region.

    Args:
        craft: The artisan's craft.
        region: Region the artisan sells in.
        language: Response language.

    Returns:
        Dict with trend_summary and seasonal_ideas.
    """
    try:
        _require(craft=craft, region=region)
    except ValueError as exc:
        return make_tool_error(exc)

    try:
        summary = await _mentor(market_trends_prompt(craft.strip(), region.strip(), language), MarketTrendSummary)
    except Exception as exc:
        return make_tool_error(exc)
    return summary.model_dump(mode="json")


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="suggest_design_improvements", span_type="TOOL")
async def suggest_design_improvements(
    design_description: Annotated[str, Field(min_length=1, description="Detailed description of the design")],
    target_audience: Annotated[str | None, Field(description="Who the design is for")] = None,
    preferred_style: Annotated[str | None, Field(description="Preferred style or aesthetic")] = None,
    design_goals: Annotated[str | None, Field(description="Goals or purpose of the design")] = None,
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
    language: ResponseLanguage = "English",
) -> dict:
    """Suggest concrete improvements to an existing design.

    An optional example photo is sent alongside the description.

    Args:
        design_description: The current design.
        target_audience: Optional audience.
        preferred_style: Optional style.
        design_goals: Optional goals.
        image_data_uri: Example photo as a data URI.
        image_path: Local example photo (alternative to image_data_uri).
        language: Response language.

    Returns:
        Dict with suggestions (list) and reasoning.
    """
    try:
        _require(design_description=design_description)
        image = None
        if image_data_uri or image_path:
            image = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    prompt = design_improvement_prompt(
        design_description.strip(),
        language,
        target_audience=target_audience,
        preferred_style=preferred_style,
        design_goals=design_goals,
        has_image=image is not None,
    )
    contents = [image.to_part(), types.Part(text=prompt)] if image is not None else prompt
    try:
        suggestions = await _mentor(contents, DesignSuggestions)
    except Exception as exc:
        return make_tool_error(exc)
    return suggestions.model_dump(mode="json")


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="personalized_recommendations", span_type="TOOL")
async def personalized_recommendations(
    artisan_profile: Annotated[str, Field(min_length=1, description="Craft, skills and interests")],
    past_interactions: Annotated[str, Field(min_length=1, description="Summary of earlier questions and feedback")],
    regional_trends: Annotated[str, Field(min_length=1, description="Trends in the artisan's region")],
    language: ResponseLanguage = "English",
) -> dict:
    """Write a sectioned, plain-text growth plan for one artisan.

    Covers market opportunities, design modernisation, social media and
    digital presentation, ending with a follow-up question.

    Returns:
        Dict with recommendations text.
    """
    try:
        _require(
            artisan_profile=artisan_profile,
            past_interactions=past_interactions,
            regional_trends=regional_trends,
        )
    except ValueError as exc:
        return make_tool_error(exc)

    try:
        text = await GeminiClient.generate(
            recommendations_prompt(artisan_profile, past_interactions, regional_trends, language),
            system_instruction=MENTOR_SYSTEM,
            temperature=MENTOR_TEMPERATURE,
        )
        if not text or not text.strip():
            raise GenerationError("Model returned no recommendations")
    except Exception as exc:
        return make_tool_error(exc)
    return {"recommendations": text.strip()}


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="recommend_ad_campaign_content", span_type="TOOL")
async def recommend_ad_campaign_content(
    craft_type: Annotated[str, Field(min_length=1, description="Craft, e.g. pottery, weaving, jewelry")],
    target_audience: Annotated[str, Field(min_length=1, description="e.g. young adults, tourists, collectors")],
    campaign_goal: Annotated[str, Field(min_length=1, description="e.g. increase sales, brand awareness")],
    preferred_platform: Annotated[str, Field(min_length=1, description="e.g. Instagram, Facebook, YouTube")],
    past_campaign_performance: Annotated[str | None, Field(description="How earlier campaigns did")] = None,
    example_posts: Annotated[str | None, Field(description="Examples of the artisan's posts")] = None,
    language: ResponseLanguage = "English",
) -> dict:
    """Recommend content ideas, captions and hashtags for a social ad campaign.

    Returns:
        Dict with content_ideas, caption_suggestions and hashtag_suggestions.
    """
    try:
        _require(
            craft_type=craft_type,
            target_audience=target_audience,
            campaign_goal=campaign_goal,
            preferred_platform=preferred_platform,
        )
    except ValueError as exc:
        return make_tool_error(exc)

    prompt = ad_campaign_prompt(
        craft_type,
        target_audience,
        campaign_goal,
        preferred_platform,
        language,
        past_campaign_performance=past_campaign_performance,
        example_posts=example_posts,
    )
    try:
        content = await _mentor(prompt, AdCampaignContent)
    except Exception as exc:
        return make_tool_error(exc)
    return content.model_dump(mode="json")


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_social_media_caption", span_type="TOOL")
async def generate_social_media_caption(
    product_name: Annotated[str, Field(min_length=1, max_length=200, description="Product name")],
    craft_type: Annotated[str, Field(min_length=1, description="Craft, e.g. pottery, weaving")],
    product_description: Annotated[str, Field(
        min_length=1, description="Materials, techniques and inspiration",
    )],
    target_platform: CaptionPlatform = "Instagram",
    tone: Annotated[str | None, Field(description="e.g. warm, professional, humorous")] = None,
    language: ResponseLanguage = "English",
) -> dict:
    """Write one caption and hashtags for a product on one platform.

    Returns:
        Dict with caption and hashtags.
    """
    try:
        _require(product_name=product_name, craft_type=craft_type, product_description=product_description)
    except ValueError as exc:
        return make_tool_error(exc)

    prompt = social_caption_prompt(
        product_name.strip(), craft_type, product_description, target_platform, language, tone=tone,
    )
    try:
        caption = await _mentor(prompt, SocialCaption)
    except Exception as exc:
        return make_tool_error(exc)
    return caption.model_dump(mode="json")


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="generate_platform_content", span_type="TOOL")
async def generate_platform_content(
    transcription: Annotated[str, Field(
        min_length=1, description="Product description, typically a voice-note transcript",
    )],
    language: ResponseLanguage,
    platforms: Annotated[list[ListingChannel] | None, Field(
        description="Channels to write for; all six when omitted",
    )] = None,
) -> dict:
    """Turn a product description into a headline, description and per-channel listing copy.

    Each channel is generated independently; a channel that fails is retried
    once with a short prompt. Email is split into subject and body and the
    Twitter post is cut to 280 characters. Fails only if every channel fails.

    Args:
        transcription: Product description.
        language: Output language.
        platforms: Subset of instagram, whatsapp, amazon, email, facebook, twitter.

    Returns:
        Dict matching PlatformContentResult.
    """
    platforms = coerce_json_param(platforms, list)
    try:
        _require(transcription=transcription, language=language)
        if platforms is None:
            platforms = ["instagram", "whatsapp", "amazon", "email", "facebook", "twitter"]
        if not platforms:
            raise ValueError("Missing required field: platforms (at least one platform)")
        params = {"transcription": transcription.strip(), "language": language.strip()}
        request = GenerationRequest(media=None, params=params, variations=tuple(platforms))
    except ValueError as exc:
        return make_tool_error(exc)

    orchestrator = GenerationOrchestrator(_text_provider(), build_listing_prompts)
    try:
        overview, result = await asyncio.gather(
            _mentor(listing_overview_prompt(params["transcription"], params["language"]), ListingOverview),
            orchestrator.run(request),
            return_exceptions=True,
        )
        if isinstance(result, BaseException):
            raise result
    except Exception as exc:
        return make_tool_error(exc)

    content = PlatformContentResult(language=params["language"], overall_status=result.overall_status.value)
    if isinstance(overview, BaseException):
        logger.warning("Listing overview failed: %s", overview)
        content.overview_error = str(overview)
    else:
        content.headline = overview.headline
        content.description = overview.description

    for outcome in result.outcomes:
        post = PlatformPost(platform=outcome.name, status=outcome.status.value, error=error_text(outcome))
        if outcome.succeeded:
            if outcome.name == "email":
                post.subject, post.content = split_email(outcome.payload)
            elif outcome.name == "twitter":
                post.content = outcome.payload[:MAX_TWEET_CHARS]
            else:
                post.content = outcome.payload
        content.posts.append(post)
    return content.model_dump(mode="json")


@assistance_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="analyze_product_image", span_type="TOOL")
async def analyze_product_image(
    image_data_uri: ImageDataUri = None,
    image_path: ImagePath = None,
) -> dict:
    """Describe what a product photo shows: labels, objects, text and colours.

    The summary lists objects, craft-related labels as product type,
    dominant colours, detected text and craftsmanship indicators.

    Args:
        image_data_uri: Product photo as a data URI.
        image_path: Local product photo (alternative to image_data_uri).

    Returns:
        Dict matching ImageAnalysisResult.
    """
    try:
        image = load_media(data_uri=image_data_uri, file_path=image_path, kind="image", field_name="image")
    except (FileNotFoundError, PermissionError, ValueError) as exc:
        return make_tool_error(exc)

    try:
        found = await GeminiClient.generate_structured(
            [image.to_part(), types.Part(text=IMAGE_ANALYSIS)],
            schema=ImageAnalysis,
            model=get_config().vision_model,
            temperature=0.0,
        )
    except Exception as exc:
        return make_tool_error(exc)

    summary = compose_analysis(found.labels, found.objects, found.detected_text, found.dominant_colors)
    logger.info("Image analysis: %d label(s), %d object(s)", len(found.labels), len(found.objects))
    return ImageAnalysisResult(**found.model_dump(), analysis=summary).model_dump(mode="json")
