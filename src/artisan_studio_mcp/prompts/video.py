"""Festival marketing video prompts.

Templates used by tools/campaign.py (generate_festival_video):

PRODUCT_ANALYSIS — vision pass over the product photo. Variables: {context}.
FESTIVAL_VIDEO_PROMPTS — per-festival scene scripts; GENERIC_VIDEO_PROMPT for
    any other festival. Variables: {duration}, {product_name},
    {artisan_name}, {festival}.

Every prompt sent to Veo goes through ``sanitize_prompt``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..pipeline import GenerationRequest, PromptPair

MAX_VIDEO_PROMPT_CHARS = 2000

_ANGLE_BRACKETS = re.compile(r"[<>]")
_LINE_BREAKS = re.compile(r"[\r\n\t]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

PRODUCT_ANALYSIS = """\
Analyze this product image for creating a festival marketing video.
{context}
Provide:
1. Detailed visual description of the product
2. Product category/type
3. Dominant colors (list up to 5)
4. Materials/textures visible
5. Any cultural or traditional elements
6. Key features that should be highlighted
7. Suggested styling for video presentation"""

_HEADER = """\
Generate a {duration}-second {mood} {festival} marketing video.
Product: "{product_name}" by artisan "{artisan_name}"
"""

FESTIVAL_VIDEO_PROMPTS: dict[str, str] = {
    "Diwali": _HEADER.replace("{mood}", "cinematic") + """
VISUAL REQUIREMENTS:
- Golden hour lighting with diya-inspired warm glows
- Particle effects: floating embers, sparkles, light bokeh
- Color palette: deep oranges, golds, rich reds, warm yellows
- Background elements: diyas, rangoli patterns, marigold flowers
- Camera work: Slow zoom-ins, elegant product rotations, focus pulls

SCENE PROGRESSION:
1. Opening (0-2s): Darkness slowly illuminated by diyas
2. Product reveal (2-4s): Gentle light reveals product with glow effect
3. Detail shots (4-6s): Close-ups of craftsmanship with festive elements
4. Celebration shot (6-7s): Product in full festive setting
5. Closing (7-8s): Brand message with sparkle effects

ATMOSPHERE: Warm, prosperous, celebratory, elegant, traditional yet modern""",
    "Holi": _HEADER.replace("{mood}", "vibrant") + """
VISUAL REQUIREMENTS:
- Explosive color powder effects and splashes
- Color palette: vivid pink, yellow, green, blue, orange
- Dynamic particle systems for color dust
- High-energy camera movements: quick pans, dynamic zooms
- Slow-motion color splash moments

SCENE PROGRESSION:
1. Opening (0-1s): White/neutral scene
2. Color explosion (1-3s): Colors burst revealing product
3. Dynamic showcase (3-5s): Product with swirling colors
4. Celebration (5-7s): Multiple color splashes with product focus
5. Closing (7-8s): Product clear shot with color settling

ATMOSPHERE: Joyful, energetic, playful, vibrant, celebratory""",
    "Raksha Bandhan": _HEADER.replace("{mood}", "emotional") + """
VISUAL REQUIREMENTS:
- Soft, natural lighting with golden hour warmth
- Color palette: saffron, red, gold, white
- Subtle particle effects: floating threads, gentle sparkles
- Smooth, emotional camera movements
- Bokeh background with traditional elements

SCENE PROGRESSION:
1. Opening (0-2s): Rakhi thread or sibling hands
2. Gift reveal (2-4s): Product presented as perfect gift
3. Emotional moment (4-6s): Product details with warmth
4. Connection (6-7s): Product with rakhi elements
5. Closing (7-8s): Heartfelt message

ATMOSPHERE: Emotional, warm, traditional, caring, precious""",
    "Eid": _HEADER.replace("{mood}", "elegant") + """
VISUAL REQUIREMENTS:
- Soft moonlight-inspired lighting
- Color palette: emerald green, white, gold, silver
- Crescent moon and star motifs as overlays
- Graceful camera movements with gentle arcs
- Islamic geometric patterns in background

SCENE PROGRESSION:
1. Opening (0-2s): Crescent moon transition
2. Elegant reveal (2-4s): Product with soft lighting
3. Detail appreciation (4-6s): Craftsmanship focus
4. Celebration setting (6-7s): Product with Eid elements
5. Closing (7-8s): Eid Mubarak message

ATMOSPHERE: Peaceful, blessed, elegant, spiritual, joyous""",
    "Christmas": _HEADER.replace("{mood}", "magical") + """
VISUAL REQUIREMENTS:
- Warm indoor lighting with twinkling effects
- Color palette: deep red, forest green, gold, snow white
- Particle effects: snow, sparkles, light trails
- Cozy camera work with gentle movements
- Bokeh from Christmas lights throughout

SCENE PROGRESSION:
1. Opening (0-2s): Twinkling lights fade in
2. Gift reveal (2-4s): Product as perfect gift
3. Festive showcase (4-6s): Product with decorations
4. Warmth moment (6-7s): Product in Christmas setting
5. Closing (7-8s): Holiday wishes message

ATMOSPHERE: Warm, magical, cozy, generous, joyful""",
    "Navratri": _HEADER.replace("{mood}", "energetic") + """
VISUAL REQUIREMENTS:
- Vibrant lighting with color transitions (9 colors)
- Dynamic garba-inspired movement patterns
- Traditional decorative elements
- Fast-paced yet elegant camera work
- Festive particle effects

SCENE PROGRESSION:
1. Opening (0-2s): Swirling colors/fabrics
2. Energy reveal (2-4s): Product with movement
3. Traditional showcase (4-6s): Product with cultural elements
4. Dance of colors (6-7s): Dynamic color transitions
5. Closing (7-8s): Festive message

ATMOSPHERE: Energetic, devotional, colorful, traditional, celebratory""",
}

GENERIC_VIDEO_PROMPT = _HEADER.replace("{mood}", "festive") + """
VISUAL REQUIREMENTS:
- Professional cinematic quality
- Festival-appropriate color palette
- Cultural authenticity and respect
- Elegant camera movements
- Appropriate particle effects and overlays

SCENE PROGRESSION:
1. Opening: Festival atmosphere introduction
2. Product reveal: Elegant presentation
3. Detail showcase: Craftsmanship focus
4. Cultural context: Festival elements
5. Closing: Compelling message

ATMOSPHERE: Festive, authentic, celebratory, respectful, engaging"""


def sanitize_prompt(prompt: str) -> str:
    """Strip angle brackets and control characters and cap the length.

    Line breaks and tabs collapse to a single space so adjacent words stay apart.
    """
    text = _ANGLE_BRACKETS.sub("", prompt)
    text = _LINE_BREAKS.sub(" ", text)
    text = _CONTROL_CHARS.sub("", text)
    return text[:MAX_VIDEO_PROMPT_CHARS].strip()


def product_analysis_prompt(description: str | None, festival: str | None) -> str:
    context = []
    if description:
        context.append(f"Additional context: {description}")
    if festival:
        context.append(f"This will be used for {festival} marketing.")
    return PRODUCT_ANALYSIS.format(context="\n".join(context))


def festival_video_prompt(festival: str, product_name: str, artisan_name: str, duration: int = 8) -> str:
    template = FESTIVAL_VIDEO_PROMPTS.get(festival, GENERIC_VIDEO_PROMPT)
    return template.format(
        duration=duration,
        festival=festival,
        product_name=product_name,
        artisan_name=artisan_name,
    )


def enhanced_video_prompt(params: Mapping[str, Any]) -> str:
    """Festival script plus analysis, description, branding, CTA, colours and specs."""
    duration = params.get("duration_seconds") or 8
    prompt = festival_video_prompt(
        params["festival"], params["product_name"], params["artisan_name"], duration
    )

    analysis = params.get("analysis")
    if analysis:
        prompt += f"""

PRODUCT SPECIFICATIONS (MAINTAIN EXACT APPEARANCE):
- Visual Reference: {analysis["visual_description"]}
- Category: {analysis["category"]}
- Color Palette: {", ".join(analysis["colors"])}
- Materials/Textures: {", ".join(analysis["materials"])}
- Cultural Elements: {", ".join(analysis["cultural_elements"])}
- Key Features to Highlight: {", ".join(analysis["key_features"])}
- Presentation Style: {analysis["suggested_styling"]}

IMPORTANT: The product shown in the video MUST match the exact appearance from the uploaded photo.
Do not alter or substitute the product design. Maintain visual consistency throughout."""

    if params.get("product_description"):
        prompt += f"\n\nPRODUCT DESCRIPTION:\n{params['product_description']}"
    if params.get("branding_text"):
        prompt += f'\n\nBRANDING:\nInclude this text in the video: "{params["branding_text"]}"'
    if params.get("call_to_action"):
        prompt += f'\n\nCALL TO ACTION:\nEnd with: "{params["call_to_action"]}"'
    if params.get("color_scheme"):
        prompt += f"\n\nCUSTOM COLOR SCHEME:\nIncorporate these colors: {', '.join(params['color_scheme'])}"

    prompt += f"""

TECHNICAL SPECIFICATIONS:
- Aspect Ratio: {params.get("aspect_ratio") or "9:16"}
- Duration: {duration} seconds
- Quality: High definition, professional grade
- Style: Cinematic with smooth transitions
- Product Focus: Maintain product as central element throughout"""
    return prompt


def build_video_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    params = request.params
    fallback = GENERIC_VIDEO_PROMPT.format(
        duration=params.get("duration_seconds") or 8,
        festival=params["festival"],
        product_name=params["product_name"],
        artisan_name=params["artisan_name"],
    )
    return PromptPair(sanitize_prompt(enhanced_video_prompt(params)), sanitize_prompt(fallback))
