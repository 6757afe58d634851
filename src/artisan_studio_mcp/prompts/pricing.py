"""Handcraft pricing prompt. Used by tools/pricing.py (calculate_pricing).

PRICING — Variables: {material_cost}, {hours_worked}, {product_type}.
"""

from __future__ import annotations

PRICING = """\
You are an expert in pricing handcrafted products in the Indian market.
Calculate optimal pricing for a handcrafted product with the following details:
- Material cost: ₹{material_cost}
- Hours worked: {hours_worked} hours
- Product type: {product_type}

Consider factors like:
- Artisan skill level
- Market demand for this product type
- Competitor pricing
- Seasonal factors
- Platform-specific pricing strategies

All amounts are in Indian rupees. Report the material cost exactly as given, a labor cost \
based on the hours worked, an overhead cost, the optimal selling price, prices for local, \
online, premium and wholesale channels, and short recommendations on competitor pricing, \
seasonal adjustment and bulk discounts."""
