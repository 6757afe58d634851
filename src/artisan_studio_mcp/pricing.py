"""Deterministic handcraft pricing, used when the model's suggestion is unavailable."""

from __future__ import annotations

import math

from .models.marketing import PlatformPrices, PricingRecommendations, PricingResult

LABOR_RATE_PER_HOUR = 150.0
OVERHEAD_RATE = 0.3

TYPE_MULTIPLIERS: dict[str, float] = {
    "pottery": 1.2,
    "textiles": 1.5,
    "jewelry": 2.0,
    "woodwork": 1.3,
    "metalwork": 1.4,
    "paintings": 1.8,
    "default": 1.2,
}

PLATFORM_MARKUPS: dict[str, float] = {
    "local": 1.0,
    "online": 1.2,
    "premium": 1.5,
    "wholesale": 0.7,
}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def formula_pricing(material_cost: float, hours_worked: float, product_type: str) -> PricingResult:
    """Cost-plus price: materials + ₹150/hour labour + 30% overhead, times a type multiplier.

    Raises:
        ValueError: If cost or hours are negative, or both are zero.
    """
    if material_cost < 0 or hours_worked < 0:
        raise ValueError("material_cost and hours_worked must be non-negative")
    if material_cost == 0 and hours_worked == 0:
        raise ValueError("material_cost and hours_worked cannot both be zero")

    labor_cost = hours_worked * LABOR_RATE_PER_HOUR
    overhead = material_cost * OVERHEAD_RATE
    multiplier = TYPE_MULTIPLIERS.get(product_type.strip().lower(), TYPE_MULTIPLIERS["default"])
    suggested = _round_half_up((material_cost + labor_cost + overhead) * multiplier)

    prices = {name: _round_half_up(suggested * markup) for name, markup in PLATFORM_MARKUPS.items()}
    return PricingResult(
        material_cost=material_cost,
        labor_cost=labor_cost,
        overhead=overhead,
        suggested_price=suggested,
        platform_prices=PlatformPrices(**prices),
        recommendations=PricingRecommendations(
            best_selling_price=suggested,
            competitor_analysis="Based on market analysis for this product type",
            seasonal_adjustment="Consider 10% increase during festive seasons",
            bulk_discount="Offer 15% discount for orders above 5 units",
        ),
        source="formula",
    )
