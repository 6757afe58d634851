"""Marketing content models — tool outputs and structured output schemas for Gemini.

Text-kit, campaign-overview, product-analysis, pricing and mentor models are used with
GeminiClient.generate_structured(); the rest shape tool responses.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImageVariation(BaseModel):
    """One generated image, or the reason it could not be generated."""

    variation: str
    status: str
    url: str = Field(default="", description="Generated image as a data URI")
    description: str = ""
    error: str = ""


class EnhanceImageResult(BaseModel):
    """Output of enhance_image."""

    overall_status: str
    images: list[ImageVariation] = Field(default_factory=list)


class FestivalImagesResult(BaseModel):
    """Output of generate_festival_images."""

    overall_status: str
    festival: str
    language: str
    images: list[ImageVariation] = Field(default_factory=list)


class ProductTextKit(BaseModel):
    """Structured text kit for a single product listing."""

    product_title: str = Field(description="A short, attractive title (<=10 words)")
    description_en: str = Field(
        description="Storytelling description in English (<=100 words), craft process and cultural significance",
    )
    description_hi: str = Field(description="Natural Hindi translation of the English description")
    marketing_caption: str = Field(description="Bilingual caption for the target platform, with a call-to-action")
    hashtags: list[str] = Field(default_factory=list, description="8-10 hashtags mixing English and Hindi")
    suggested_platforms: list[str] = Field(default_factory=list, description="2-3 other platforms to sell on")
    engagement_score: int = Field(ge=1, le=10, description="Predicted engagement from 1 to 10")


class ProductDetailsResult(ProductTextKit):
    """Output of generate_product_details: the text kit plus image mockups."""

    transcript: str = ""
    mockup_status: str
    image_mockups: list[ImageVariation] = Field(default_factory=list)


class CampaignOverview(BaseModel):
    """Campaign-wide copy shared by every platform post."""

    caption: str = Field(description="Festive caption, max 200 characters")
    hashtags: list[str] = Field(default_factory=list, description="7-10 hashtags")
    discount_text: str = Field(default="", description="Festival offer or promotion")


class PlatformPost(BaseModel):
    """Copy for one platform. ``subject`` is only set for email."""

    platform: str
    status: str
    content: str = ""
    subject: str = ""
    error: str = ""


class CampaignResult(BaseModel):
    """Output of generate_festival_campaign."""

    festival: str
    language: str
    overall_status: str
    caption: str = ""
    hashtags: list[str] = Field(default_factory=list)
    discount_text: str = ""
    overview_error: str = ""
    posts: list[PlatformPost] = Field(default_factory=list)


class ProductAnalysis(BaseModel):
    """Vision analysis of a product photo, used to keep the video on-product."""

    visual_description: str = Field(description="Detailed visual description of the product")
    category: str = Field(description="Product category or type")
    colors: list[str] = Field(default_factory=list, description="Dominant colors, up to 5")
    materials: list[str] = Field(default_factory=list, description="Materials and textures visible")
    cultural_elements: list[str] = Field(default_factory=list, description="Cultural or traditional elements")
    key_features: list[str] = Field(default_factory=list, description="Features to highlight")
    suggested_styling: str = Field(default="", description="Styling for the video presentation")

    @classmethod
    def default(cls, description: str | None = None) -> ProductAnalysis:
        """Neutral analysis used when the vision call fails."""
        return cls(
            visual_description=description or "Product for festival marketing",
            category="Artisan Product",
            colors=["traditional"],
            materials=["handcrafted"],
            cultural_elements=["festive"],
            key_features=["authentic", "handmade"],
            suggested_styling="Traditional festive presentation",
        )


class VideoResult(BaseModel):
    """Output of generate_festival_video and video_status."""

    status: str
    video_url: str = ""
    operation_handle: str = ""
    duration_seconds: int | None = None
    aspect_ratio: str = ""
    generated_prompt: str = ""
    product_analysis: ProductAnalysis | None = None
    analysis_source: str = ""
    error: str = ""


class PlatformPrices(BaseModel):
    local: float
    online: float
    premium: float
    wholesale: float


class PricingRecommendations(BaseModel):
    best_selling_price: float
    competitor_analysis: str = ""
    seasonal_adjustment: str = ""
    bulk_discount: str = ""


class PricingResult(BaseModel):
    """Price breakdown in rupees. ``source`` is ``ai`` or ``formula``."""

    material_cost: float
    labor_cost: float
    overhead: float
    suggested_price: float = Field(gt=0)
    platform_prices: PlatformPrices
    recommendations: PricingRecommendations
    source: str = "ai"


class MarketTrendSummary(BaseModel):
    """Trend summary for one craft and region."""

    trend_summary: str = Field(description="Trending colors, materials and designs for the craft and region")
    seasonal_ideas: str = Field(default="", description="Seasonal or festival-based product and design ideas")


class DesignSuggestions(BaseModel):
    """Actionable improvements for an existing design."""

    suggestions: list[str] = Field(description="Specific, actionable improvements")
    reasoning: str = Field(description="Why these improvements were suggested")


class AdCampaignContent(BaseModel):
    """Content ideas for a paid social campaign."""

    content_ideas: list[str] = Field(default_factory=list, description="Content ideas for the ads")
    caption_suggestions: list[str] = Field(default_factory=list, description="Captions for the content ideas")
    hashtag_suggestions: list[str] = Field(default_factory=list, description="Relevant hashtags")


class SocialCaption(BaseModel):
    caption: str = Field(description="Engaging caption for the product")
    hashtags: list[str] = Field(default_factory=list, description="Relevant hashtags")


class ListingOverview(BaseModel):
    headline: str = Field(description="A catchy headline")
    description: str = Field(description="A detailed product description")


class PlatformContentResult(BaseModel):
    """Output of generate_platform_content."""

    language: str
    overall_status: str
    headline: str = ""
    description: str = ""
    overview_error: str = ""
    posts: list[PlatformPost] = Field(default_factory=list)


class ImageAnalysis(BaseModel):
    """What a vision model sees in a product photo."""

    labels: list[str] = Field(default_factory=list, description="Up to 10 labels for the product and its craft")
    objects: list[str] = Field(default_factory=list, description="Up to 10 objects visible in the photo")
    detected_text: str = Field(default="", description="Text printed on the product or packaging")
    dominant_colors: list[str] = Field(default_factory=list, description="Up to 3 dominant colors")


class ImageAnalysisResult(ImageAnalysis):
    """Output of analyze_product_image: the raw findings plus a one-paragraph summary."""

    analysis: str
