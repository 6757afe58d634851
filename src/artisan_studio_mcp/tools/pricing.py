"""Pricing tools — 1 tool on a FastMCP sub-server."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..client import GeminiClient
from ..errors import make_tool_error
from ..models.marketing import PricingResult
from ..pricing import formula_pricing
from ..prompts.pricing import PRICING
from ..tracing import trace

logger = logging.getLogger(__name__)
pricing_server = FastMCP("pricing")


@pricing_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="calculate_pricing", span_type="TOOL")
async def calculate_pricing(
    material_cost: Annotated[float, Field(ge=0, description="Material cost in rupees")],
    hours_worked: Annotated[float, Field(ge=0, description="Hours of labour")],
    product_type: Annotated[str, Field(
        min_length=1,
        description="pottery, textiles, jewelry, woodwork, metalwork, paintings, or other",
    )],
) -> dict:
    """Suggest prices for a handcrafted product across local, online, premium and wholesale channels.

    Asks Gemini for a market-aware suggestion. If that call fails or returns
    an unusable breakdown, a cost-plus formula is used instead; ``source``
    says which one produced the result.

    Args:
        material_cost: Material cost in rupees.
        hours_worked: Hours spent making the product.
        product_type: Craft category.

    Returns:
        Dict matching PricingResult.
    """
    try:
        fallback = formula_pricing(material_cost, hours_worked, product_type)
    except ValueError as exc:
        return make_tool_error(exc)

    try:
        result = await GeminiClient.generate_structured(
            PRICING.format(material_cost=material_cost, hours_worked=hours_worked, product_type=product_type),
            schema=PricingResult,
        )
    except Exception as exc:
        logger.warning("AI pricing unavailable, using formula: %s", exc)
        return fallback.model_dump(mode="json")

    result.source = "ai"
    return result.model_dump(mode="json")
