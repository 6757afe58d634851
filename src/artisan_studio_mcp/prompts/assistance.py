"""Artisan mentor prompts.

Templates used by tools/assistance.py:

MENTOR_SYSTEM — warm local-mentor persona shared by the advice tools.
MARKET_TRENDS — trend summary. Variables: {craft}, {region}, {language}.
DESIGN_IMPROVEMENT — design critique, optionally with an example image.
RECOMMENDATIONS — free-text personalised plan (not JSON).
AD_CAMPAIGN — ad content ideas, captions and hashtags.
SOCIAL_CAPTION — one caption plus hashtags for one platform.
LISTING_OVERVIEW / LISTING_POST — per-platform listing copy from a product
    description; LISTING_POST runs per platform through the orchestrator with
    LISTING_POST_FALLBACK as the short retry prompt.
IMAGE_ANALYSIS — labels, objects, text and colours seen in a product photo.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..pipeline import GenerationRequest, PromptPair

MENTOR_TEMPERATURE = 0.7
MAX_TWEET_CHARS = 280

MENTOR_SYSTEM = """\
You are an AI mentor for local artisans in India. Keep the communication warm, simple, and \
encouraging, like a local mentor. Be culturally respectful and value traditional art, \
language, and heritage."""

NOT_SPECIFIED = "Not specified"

MARKET_TRENDS = """\
Provide a summary of market trends so that the artisan can make informed decisions about \
their products.

Summarize trending colors, materials, and designs relevant to the artisan's craft and region.

Craft: {craft}
Region: {region}

Also offer seasonal or festival-based product and design ideas related to their craft and \
region, if applicable.

Respond in the requested language: {language}."""

DESIGN_IMPROVEMENT = """\
You are helping an artisan improve an existing design.

Analyze the design based on the following information:
Description: {design_description}
Target Audience: {target_audience}
Preferred Style: {preferred_style}
Design Goals: {design_goals}
{image_line}
Provide a list of specific and actionable suggestions to improve the design, considering \
color palette, composition, uniqueness, and alignment with current market trends.
Explain your reasoning behind the suggestions.

Respond in the requested language: {language}."""

RECOMMENDATIONS = """\
Based on the artisan's profile, past interactions, and regional trends, provide tailored \
recommendations to help them improve their craft and grow their business.

Artisan Profile: {artisan_profile}
Past Interactions: {past_interactions}
Regional Trends: {regional_trends}

Provide your recommendations in a well-formatted, easy-to-read text format with clear \
sections and bullet points. Include sections for:
- Market Trends and Profitable Opportunities
- Design Improvements and Modernization Ideas
- Social Media Strategies and Content Suggestions
- Digital Presentation and Marketing Tips

End with a helpful follow-up question to encourage further interaction.
Respond in a warm, simple, and encouraging tone, in the requested language: {language}.
DO NOT return JSON. Return plain text with sections and bullet points."""

AD_CAMPAIGN = """\
You are helping an artisan create an effective social media ad campaign.

Craft Type: {craft_type}
Target Audience: {target_audience}
Campaign Goal: {campaign_goal}
Past Campaign Performance: {past_campaign_performance}
Preferred Platform: {preferred_platform}
Example Posts: {example_posts}

Provide creative and engaging content ideas that will resonate with the target audience and \
help achieve the campaign goal.
Suggest captions that are attention-grabbing and encourage interaction.
Include relevant hashtags to increase the reach of the ad campaign.
Always use language that is warm and encouraging.
Respond in the requested language: {language}."""

SOCIAL_CAPTION = """\
Given the following information about the artisan's product, create a caption and a list of \
hashtags suitable for the specified social media platform and language.

Product Name: {product_name}
Craft Type: {craft_type}
Product Description: {product_description}
Target Platform: {target_platform}
Tone: {tone}
Language: {language}

Generate an engaging caption and relevant hashtags for this product."""

LISTING_FOCUS = """\
Focus on:
1. Highlighting the craftsmanship and uniqueness of the product
2. Connecting with the cultural significance of handcrafted items
3. Appealing to customers who value authenticity and tradition
4. Creating content that converts browsers into buyers
5. Using appropriate cultural context for {language} speaking customers"""

LISTING_OVERVIEW = """\
Create marketing content for a handcrafted product with this description: "{transcription}". \
The content should be engaging and suitable for artisans selling their products online in \
{language}.

""" + LISTING_FOCUS + """

Write a catchy headline and a detailed product description."""

LISTING_PLATFORMS: dict[str, str] = {
    "instagram": "an Instagram caption with hashtags",
    "whatsapp": "a WhatsApp message for customers",
    "amazon": "an Amazon product description",
    "email": (
        "a marketing email. Put the subject on the first line as 'Subject: ...', "
        "then a blank line, then the email body"
    ),
    "facebook": "a Facebook post",
    "twitter": f"a Twitter post under {MAX_TWEET_CHARS} characters",
}

LISTING_POST = """\
Create marketing content for a handcrafted product with this description: "{transcription}". \
The content should be engaging and suitable for artisans selling their products online in \
{language}.

""" + LISTING_FOCUS + """

Write {platform_instruction}, tailored to that platform. Return only the finished text, \
with no commentary."""

LISTING_POST_FALLBACK = """\
Write {platform_instruction} in {language} for this handcrafted product: "{transcription}". \
Keep it short and warm, and mention that it is handmade. Return only the text."""

IMAGE_ANALYSIS = """\
Analyze this product photo for an artisan marketplace. List up to 10 labels describing the \
product and its craft, up to 10 objects visible in the photo, any text printed on the \
product or packaging, and up to 3 dominant colors."""

CRAFT_LABEL_KEYWORDS = (
    "handmade", "craft", "artisan", "traditional", "pottery", "ceramic", "textile",
    "jewelry", "wood", "metal", "fabric", "clay", "stone",
)
CRAFTSMANSHIP_KEYWORDS = ("handmade", "traditional", "artisan", "craft", "vintage", "antique")
NO_INDICATORS = "No specific product indicators detected in the image."


def _or_default(value: str | None, default: str = NOT_SPECIFIED) -> str:
    return value.strip() if value and value.strip() else default


def market_trends_prompt(craft: str, region: str, language: str) -> str:
    return MARKET_TRENDS.format(craft=craft, region=region, language=language)


def design_improvement_prompt(
    design_description: str,
    language: str,
    *,
    target_audience: str | None = None,
    preferred_style: str | None = None,
    design_goals: str | None = None,
    has_image: bool = False,
) -> str:
    return DESIGN_IMPROVEMENT.format(
        design_description=design_description,
        target_audience=_or_default(target_audience),
        preferred_style=_or_default(preferred_style),
        design_goals=_or_default(design_goals),
        image_line="Example Image: attached\n" if has_image else "",
        language=language,
    )


def recommendations_prompt(artisan_profile: str, past_interactions: str, regional_trends: str, language: str) -> str:
    return RECOMMENDATIONS.format(
        artisan_profile=artisan_profile,
        past_interactions=past_interactions,
        regional_trends=regional_trends,
        language=language,
    )


def ad_campaign_prompt(
    craft_type: str,
    target_audience: str,
    campaign_goal: str,
    preferred_platform: str,
    language: str,
    *,
    past_campaign_performance: str | None = None,
    example_posts: str | None = None,
) -> str:
    return AD_CAMPAIGN.format(
        craft_type=craft_type,
        target_audience=target_audience,
        campaign_goal=campaign_goal,
        past_campaign_performance=_or_default(past_campaign_performance, "Not available"),
        preferred_platform=preferred_platform,
        example_posts=_or_default(example_posts, "Not available"),
        language=language,
    )


def social_caption_prompt(
    product_name: str,
    craft_type: str,
    product_description: str,
    target_platform: str,
    language: str,
    tone: str | None = None,
) -> str:
    return SOCIAL_CAPTION.format(
        product_name=product_name,
        craft_type=craft_type,
        product_description=product_description,
        target_platform=target_platform,
        tone=_or_default(tone, "warm"),
        language=language,
    )


def listing_overview_prompt(transcription: str, language: str) -> str:
    return LISTING_OVERVIEW.format(transcription=transcription, language=language)


def build_listing_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    params = request.params
    instruction = LISTING_PLATFORMS[variation]
    primary = LISTING_POST.format(
        transcription=params["transcription"],
        language=params["language"],
        platform_instruction=instruction,
    )
    fallback = LISTING_POST_FALLBACK.format(
        transcription=params["transcription"],
        language=params["language"],
        platform_instruction=instruction,
    )
    return PromptPair(primary, fallback)


def _matching(labels: Iterable[str], keywords: tuple[str, ...]) -> list[str]:
    return [label for label in labels if any(k in label.lower() for k in keywords)]


def compose_analysis(
    labels: list[str],
    objects: list[str],
    detected_text: str,
    dominant_colors: list[str],
) -> str:
    """Summarise an image analysis as one sentence per finding.

    Only craft-related labels are reported as product type; text is cut to
    100 characters.
    """
    parts = []
    if objects:
        parts.append(f"Objects detected: {', '.join(objects)}")
    product_types = _matching(labels, CRAFT_LABEL_KEYWORDS)
    if product_types:
        parts.append(f"Product type: {', '.join(product_types)}")
    if dominant_colors:
        parts.append(f"Dominant colors: {', '.join(dominant_colors[:3])}")
    text = detected_text.strip()
    if text:
        parts.append(f"Text found: {text[:100]}{'...' if len(text) > 100 else ''}")
    indicators = _matching(labels, CRAFTSMANSHIP_KEYWORDS)
    if indicators:
        parts.append(f"Craftsmanship indicators: {', '.join(indicators)}")
    if not parts:
        return NO_INDICATORS
    return ". ".join(parts) + "."
