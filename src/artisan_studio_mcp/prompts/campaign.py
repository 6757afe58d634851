"""Festival campaign copy prompts.

Templates used by tools/campaign.py (generate_festival_campaign):

CAMPAIGN_SYSTEM — copywriter persona shared by every campaign call.
CAMPAIGN_OVERVIEW — structured caption / hashtags / offer.
PLATFORM_POST — one post for one platform, run per platform through the
    orchestrator, with PLATFORM_POST_FALLBACK as the short retry prompt.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..pipeline import GenerationRequest, PromptPair

CAMPAIGN_TEMPERATURE = 0.85

CAMPAIGN_SYSTEM = """\
You are an expert festival marketing copywriter specializing in Indian handcrafted goods and \
artisan products. Your expertise includes:
- Deep understanding of Indian festivals, traditions, and cultural significance
- Crafting emotionally resonant, culturally appropriate messaging
- Creating platform-optimized content (Instagram, WhatsApp, Email, Facebook, Twitter)
- Using appropriate emojis, hashtags, and formatting for each platform
- Connecting products to festival celebrations in authentic, meaningful ways"""

LANGUAGE_INSTRUCTIONS: dict[str, str] = {
    "Hindi": (
        "CRITICAL: You MUST write ALL content in HINDI language only. Use Devanagari script. "
        "Do NOT use English except for hashtags."
    ),
    "Bengali": (
        "CRITICAL: You MUST write ALL content in BENGALI language only. Use Bengali script. "
        "Do NOT use English except for hashtags."
    ),
    "Telugu": (
        "CRITICAL: You MUST write ALL content in TELUGU language only. Use Telugu script. "
        "Do NOT use English except for hashtags."
    ),
    "English": "Write all content in English language.",
}

PLATFORM_INSTRUCTIONS: dict[str, str] = {
    "instagram": (
        "Instagram: Create a visually appealing post with emojis, hashtags, and engaging copy. "
        "Focus on aesthetics and visual storytelling."
    ),
    "whatsapp": (
        "WhatsApp: Create a direct, personal message with clear call-to-action. "
        "Use formatting for emphasis."
    ),
    "email": (
        "Email: Create both subject line and body content. Professional yet warm tone, "
        "clear value proposition. Put the subject on the first line as 'Subject: ...', "
        "then a blank line, then the body."
    ),
    "facebook": (
        "Facebook: Create community-focused content with engaging copy, perfect for sharing "
        "and comments."
    ),
    "twitter": (
        "Twitter: Create concise, impactful content within character limits. "
        "Use trending hashtags."
    ),
}

CAMPAIGN_OVERVIEW = """\
{language_instruction}

USER INPUT:
{product_block}

TASK:
1. Write an engaging, culturally relevant caption (max 200 characters) that connects the \
product to the festival's spirit and traditions{in_language}.
2. Generate 7-10 relevant hashtags mixing English, regional language terms, and trending \
festival tags.
3. Suggest a creative, compelling discount or promotional offer that feels special for the \
festival{in_language}.
Use authentic cultural references and avoid stereotypes. Keep the tone celebratory, warm, \
and persuasive."""

PLATFORM_POST = """\
{language_instruction}

USER INPUT:
{product_block}

PLATFORM:
{platform_instruction}

REQUIREMENTS:
1. Create culturally relevant content that honors the festival's significance
2. Connect the product to festival traditions and celebrations
3. Include festival-specific hashtags and emojis
4. Add a compelling call-to-action for this platform

Return only the finished post text{in_language}, with no commentary."""

PLATFORM_POST_FALLBACK = """\
{language_instruction}
Write a short, warm {platform} message announcing "{product_title}" for {festival}. \
Mention that it is handcrafted and end with a call-to-action. \
Return only the message text."""


def language_instruction(language: str | None) -> str:
    return LANGUAGE_INSTRUCTIONS.get(language or "English", LANGUAGE_INSTRUCTIONS["English"])


def _in_language(language: str | None) -> str:
    if language and language != "English":
        return f" in {language} language"
    return ""


def product_block(params: Mapping[str, Any]) -> str:
    """Render the USER INPUT lines, omitting optional fields that are blank."""
    lines = [f'- Product: "{params["product_title"]}"']
    if params.get("product_description"):
        lines.append(f'- Description: "{params["product_description"]}"')
    lines.append(f'- Festival: "{params["festival"]}"')
    if params.get("festival_theme"):
        lines.append(f'- Festival Theme: "{params["festival_theme"]}"')
    if params.get("festival_date"):
        lines.append(f'- Festival Date: "{params["festival_date"]}"')
    if params.get("festival_description"):
        lines.append(f'- Festival Context: "{params["festival_description"]}"')
    if params.get("language"):
        lines.append(f'- Language: "{params["language"]}"')
    return "\n".join(lines)


def campaign_overview_prompt(params: Mapping[str, Any]) -> str:
    language = params.get("language")
    return CAMPAIGN_OVERVIEW.format(
        language_instruction=language_instruction(language),
        product_block=product_block(params),
        in_language=_in_language(language),
    )


def build_platform_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    params = request.params
    language = params.get("language")
    primary = PLATFORM_POST.format(
        language_instruction=language_instruction(language),
        product_block=product_block(params),
        platform_instruction=PLATFORM_INSTRUCTIONS[variation],
        in_language=_in_language(language),
    )
    fallback = PLATFORM_POST_FALLBACK.format(
        language_instruction=language_instruction(language),
        platform="email" if variation == "email" else variation.capitalize(),
        product_title=params["product_title"],
        festival=params["festival"],
    )
    if variation == "email":
        fallback += " Put the subject on the first line as 'Subject: ...'."
    return PromptPair(primary, fallback)


def split_email(text: str) -> tuple[str, str]:
    """Split generated email text into ``(subject, body)``.

    A leading ``Subject:`` line is used when present; otherwise the first
    non-empty line becomes the subject.
    """
    lines = text.strip().splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return "", ""
    first = lines[0].strip().lstrip("*#").strip()
    if first.lower().startswith("subject:"):
        first = first[len("subject:"):].strip().strip("*").strip()
    return first, "\n".join(lines[1:]).strip()
