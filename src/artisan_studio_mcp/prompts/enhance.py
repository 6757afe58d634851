"""Product photo enhancement prompts.

Used by tools/images.py (enhance_image). Each variation has its own
instruction and caller-facing description; every variation shares the same
conservative fallback instruction.
"""

from __future__ import annotations

from ..pipeline import GenerationRequest, PromptPair

ENHANCE_VARIATIONS: dict[str, dict[str, str]] = {
    "natural": {
        "prompt": (
            "Enhance this product photo with bright, natural studio lighting. Adjust exposure, "
            "contrast, and white balance to make it look clean and professional. Add soft "
            "shadows. Do not change the background. Keep the product's original colors and texture."
        ),
        "description": "Lighting and colors were adjusted for a bright, natural look.",
    },
    "white_background": {
        "prompt": (
            "Carefully cut out the product from its background and place it on a solid, pure "
            "white background (#FFFFFF). Ensure the edges are smooth and natural. The product "
            "itself should not be distorted or cropped. This is for an e-commerce product listing."
        ),
        "description": "Background removed and replaced with a clean white canvas for e-commerce.",
    },
    "high_resolution": {
        "prompt": (
            "Denoise and upscale this image to 2x its original resolution (max 2048px). Sharpen "
            "the product's edges and enhance its fine textures to make it look high-resolution "
            "and detailed. Preserve the original colors."
        ),
        "description": "Image upscaled and details sharpened for a high-resolution view.",
    },
}

ENHANCE_FALLBACK_PROMPT = (
    "Slightly improve brightness and sharpness of the image. Do not change anything else."
)
ENHANCE_FALLBACK_DESCRIPTION = "Brightness & sharpness enhanced."


def build_enhance_prompts(request: GenerationRequest, variation: str) -> PromptPair:
    return PromptPair(ENHANCE_VARIATIONS[variation]["prompt"], ENHANCE_FALLBACK_PROMPT)
