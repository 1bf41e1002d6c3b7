from __future__ import annotations

from datetime import date

from app.multibagger_radar.models.schemas import (
    FutureProjectionPoint,
    IntrinsicValueResult,
    Stock,
    ValuationOverrides,
)
from app.multibagger_radar.utils.math_utils import clamp, safe_div

DISCOUNT_RATE_RANGE = (0.06, 0.22)
FCF_GROWTH_RANGE = (0.02, 0.45)
MIN_TERMINAL_GROWTH = 0.01
TERMINAL_SPREAD = 0.01
TERMINAL_GROWTH_SENSITIVITY = 0.35
MARGIN_OF_SAFETY_RANGE = (-0.9, 0.95)

PROJECTION_GROWTH_RANGE = (0.02, 0.6)
OPTIMISTIC_DELTA = 0.06
PESSIMISTIC_DELTA = 0.04
PESSIMISTIC_FLOOR = 0.02


def calculate_intrinsic_value(
    stock: Stock,
    overrides: ValuationOverrides | None = None,
) -> IntrinsicValueResult:
    """Per-share DCF value over the override horizon plus a perpetuity tail.

    The terminal growth rate is always kept at least one point below the
    discount rate so the Gordon growth denominator stays positive.
    """
    overrides = overrides or ValuationOverrides()
    horizon = overrides.horizon_years

    discount_rate = clamp(stock.discount_rate + overrides.discount_rate_delta, *DISCOUNT_RATE_RANGE)
    growth_rate = clamp(stock.fcf_growth_rate + overrides.growth_rate_delta, *FCF_GROWTH_RANGE)
    terminal_growth = clamp(
        stock.terminal_growth + overrides.growth_rate_delta * TERMINAL_GROWTH_SENSITIVITY,
        MIN_TERMINAL_GROWTH,
        discount_rate - TERMINAL_SPREAD,
    )

    projected_cash_flow = stock.fcf_per_share
    cash_flow_sum = 0.0
    for year in range(1, horizon + 1):
        projected_cash_flow *= 1 + growth_rate
        cash_flow_sum += projected_cash_flow / (1 + discount_rate) ** year

    terminal_cash_flow = projected_cash_flow * (1 + terminal_growth)
    undiscounted_terminal = terminal_cash_flow / (discount_rate - terminal_growth)
    terminal_value = undiscounted_terminal / (1 + discount_rate) ** horizon

    intrinsic_value = cash_flow_sum + terminal_value + stock.cash_per_share

    # a zero intrinsic value has no margin; pin it to the floor
    raw_margin = safe_div(intrinsic_value - stock.price, intrinsic_value, default=MARGIN_OF_SAFETY_RANGE[0])
    margin_of_safety = clamp(raw_margin, *MARGIN_OF_SAFETY_RANGE)

    return IntrinsicValueResult(
        intrinsic_value=intrinsic_value,
        terminal_value=terminal_value,
        cash_flow_sum=cash_flow_sum,
        margin_of_safety=margin_of_safety,
    )


def project_future_value(
    stock: Stock,
    overrides: ValuationOverrides | None = None,
    years: int = 10,
    current_year: int | None = None,
) -> list[FutureProjectionPoint]:
    overrides = overrides or ValuationOverrides()
    if current_year is None:
        current_year = date.today().year

    base_growth = clamp(stock.five_year_cagr + overrides.growth_rate_delta, *PROJECTION_GROWTH_RANGE)
    optimistic_growth = base_growth + OPTIMISTIC_DELTA
    pessimistic_growth = max(base_growth - PESSIMISTIC_DELTA, PESSIMISTIC_FLOOR)

    points: list[FutureProjectionPoint] = []
    for year_index in range(1, years + 1):
        points.append(
            FutureProjectionPoint(
                year=current_year + year_index,
                projected_price=stock.price * (1 + base_growth) ** year_index,
                optimistic=stock.price * (1 + optimistic_growth) ** year_index,
                pessimistic=stock.price * (1 + pessimistic_growth) ** year_index,
            )
        )
    return points
