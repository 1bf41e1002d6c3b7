from __future__ import annotations

import math

from app.multibagger_radar.models.schemas import IntrinsicValueResult, Stock
from app.multibagger_radar.utils.math_utils import clamp, normalize

WEIGHTS = {
    "margin": 0.28,
    "growth": 0.30,
    "quality": 0.18,
    "leverage": 0.10,
    "moat": 0.14,
}

MARGIN_RANGE = (-0.2, 0.6)
CAGR_RANGE = (0.1, 0.6)
ROIC_RANGE = (0.08, 0.35)
DEBT_RANGE = (0.1, 1.2)

TAG_DEEP_VALUE = "Deep Value"
TAG_HIGH_GROWTH = "High Growth"
TAG_HIGH_ROIC = "High ROIC"
TAG_LOW_LEVERAGE = "Low Leverage"
TAG_WIDE_MOAT = "Wide Moat"
TAG_ELITE_MARGINS = "Elite Margins"
TAG_GARP = "Growth At Reasonable Price"
TAG_MULTIBAGGER = "Potential Multibagger"


def score_breakdown(stock: Stock, intrinsic: IntrinsicValueResult) -> dict[str, float]:
    """Each factor scaled to [0, 1]; higher is better for every factor."""
    return {
        "margin": normalize(intrinsic.margin_of_safety, *MARGIN_RANGE),
        "growth": normalize(stock.five_year_cagr, *CAGR_RANGE),
        "quality": normalize(stock.roic, *ROIC_RANGE),
        "leverage": 1.0 - normalize(stock.debt_to_equity, *DEBT_RANGE),
        "moat": clamp(stock.moat_rating, 0.0, 1.0),
    }


def score_stock(stock: Stock, intrinsic: IntrinsicValueResult) -> int:
    factors = score_breakdown(stock, intrinsic)
    weighted = sum(factors[name] * weight for name, weight in WEIGHTS.items())
    # half-up, not banker's rounding
    return int(clamp(math.floor(weighted * 100 + 0.5), 0, 100))


def generate_tags(stock: Stock, intrinsic: IntrinsicValueResult) -> tuple[str, ...]:
    tags: dict[str, None] = {}

    if intrinsic.margin_of_safety > 0.25:
        tags[TAG_DEEP_VALUE] = None
    if stock.five_year_cagr > 0.35:
        tags[TAG_HIGH_GROWTH] = None
    if stock.roic > 0.20:
        tags[TAG_HIGH_ROIC] = None
    if stock.debt_to_equity < 0.40:
        tags[TAG_LOW_LEVERAGE] = None
    if stock.moat_rating > 0.85:
        tags[TAG_WIDE_MOAT] = None
    if stock.profit_margin > 0.25:
        tags[TAG_ELITE_MARGINS] = None
    if stock.pe_ratio < 35 and stock.five_year_cagr > 0.25:
        tags[TAG_GARP] = None
    if intrinsic.intrinsic_value > stock.price * 1.5:
        tags[TAG_MULTIBAGGER] = None

    return tuple(tags)
