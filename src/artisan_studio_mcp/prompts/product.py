"""Product marketing-kit prompts.

Templates used by tools/product.py:

PRODUCT_KIT_SYSTEM — persona for the text kit call.
PRODUCT_KIT — structured text kit. Variables: {transcript}, {product_category},
    {platform}, {brand_tone}, {language}.
MOCKUP_VARIATIONS — image mockups run through the orchestrator.
TRANSCRIBE_AUDIO — voice-note transcription. Variables: {language_code}.
"""

from __future__ import annotations

from ..pipeline import GenerationRequest, PromptPair

PRODUCT_KIT_TEMPERATURE = 0.5

PRODUCT_KIT_SYSTEM = """\
You are KalaSahayak, an advanced AI content engine for Indian artisans. Your goal is to help \
them market their products with beautiful, culturally relevant content. Your tone should be \
authentic, warm, and human."""

PRODUCT_KIT = """\
Analyze the user's input (image, category, tone) and generate a complete marketing kit.

USER INPUT:
- Image: attached
- Artisan's Voice Note Transcript: "{transcript}"
- Product Category: "{product_category}"
- Target Platform: "{platform}"
- Desired Brand Tone: "{brand_tone}"
- Language: "{language}"

TASK:
Based on the input, generate a JSON object that includes:
1. `product_title`: A short, attractive title (max 10 words).
2. `description_en`: An engaging, storytelling description in English (max 100 words), \
covering the craft process, materials, and cultural significance.
3. `description_hi`: A natural translation of the English description into Hindi.
4. `marketing_caption`: A bilingual (Romanized Hindi + English) caption optimized for the \
specified platform. It should have a conversational tone and a call-to-action \
(e.g., "DM to buy", "Shop handmade with love ❤️").
5. `hashtags`: A list of 8-10 SEO-optimized hashtags, mixing English and Hindi.
6. `suggested_platforms`: 2-3 other platforms where this product might sell well.
7. `engagement_score`: Predict the engagement potential of the content on a scale of 1-10.

Return ONLY the valid JSON object."""

MOCKUP_VARIATIONS: dict[str, str] = {
    "lifestyle": (
        "Create a realistic lifestyle mockup. Place the product in a natural, real-world setting "
        "where it would be used. For example, pottery on a dining table, a lamp in a cozy room, "
        "or jewelry on a styled surface. Lighting and shadows must be realistic and warm. "
        "Do not change the product itself."
    ),
    "human_interaction": (
        "Create a mockup showing human interaction with the product. For example, a person "
        "wearing the jewelry, a family using the home decor item, or hands holding the craft. "
        "Ensure the depiction is culturally relevant and respectful. The focus should remain on "
        "the product. Do not change the product itself."
    ),
    "poster": (
        "Create a clean, minimalist marketing poster. Place the product on a solid neutral or "
        "complementary colored background. Add a simple, elegant text overlay with a short, "
        "relevant tagline like 'Crafted with Love' or 'Handmade in India'. The product should "
        "be the hero. Do not change the product itself."
    ),
}

MOCKUP_FALLBACK_PROMPT = (
    "Place the product on a softly lit, neutral surface with a plain background. "
    "Do not add text. Do not change the product itself."
)

TRANSCRIBE_AUDIO = """\
Transcribe the attached audio verbatim. The speaker is an artisan describing their product; \
the expected language code is "{language_code}". Return only the transcript text, with no \
commentary. If there is no intelligible speech, return an empty response."""


def product_kit_prompt(
    *,
    transcript: str | None,
    product_category: str,
    platform: str,
    brand_tone: str,
    language: str,
) -> str:
    return PRODUCT_KIT.format(
        transcript=transcript or "",
        product_category=product_category,
        platform=platform,
        brand_tone=brand_tone,
        language=language,
    )


def build_mockup_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    return PromptPair(MOCKUP_VARIATIONS[variation], MOCKUP_FALLBACK_PROMPT)
