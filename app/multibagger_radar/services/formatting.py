"""Display helpers shared by the dashboard templates and the CLI."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from app.multibagger_radar.models.schemas import FutureProjectionPoint

PLACEHOLDER = "—"


@dataclass(frozen=True)
class NumberFormatter:
    style: str  # "currency", "percent" or "decimal"
    max_fraction_digits: int = 0
    currency_symbol: str = "$"

    def __call__(self, value: float | None) -> str:
        if value is None or not math.isfinite(value):
            return PLACEHOLDER

        if self.style == "percent":
            return f"{value * 100:,.{self.max_fraction_digits}f}%"

        body = f"{abs(value):,.{self.max_fraction_digits}f}"
        sign = "-" if value < 0 and float(body.replace(",", "")) != 0 else ""
        if self.style == "currency":
            return f"{sign}{self.currency_symbol}{body}"
        return f"{sign}{body}"


format_currency = NumberFormatter("currency")
format_percent = NumberFormatter("percent", max_fraction_digits=1)
format_whole_percent = NumberFormatter("percent")
format_ratio = NumberFormatter("decimal", max_fraction_digits=2)


def format_bps(value: float) -> str:
    return f"{round(value * 10000):+d} bps" if value else "0 bps"


def projection_chart(
    points: Sequence[FutureProjectionPoint],
    width: int = 320,
    height: int = 120,
    padding: int = 6,
) -> dict[str, str]:
    """SVG polyline ``points`` attributes for the three projection series."""
    if not points:
        return {"base": "", "optimistic": "", "pessimistic": ""}

    low = min(p.pessimistic for p in points)
    high = max(p.optimistic for p in points)
    span = (high - low) or 1.0
    step = (width - 2 * padding) / max(len(points) - 1, 1)

    def _series(values: list[float]) -> str:
        coords = []
        for i, v in enumerate(values):
            x = padding + i * step
            y = height - padding - (v - low) / span * (height - 2 * padding)
            coords.append(f"{x:.1f},{y:.1f}")
        return " ".join(coords)

    return {
        "base": _series([p.projected_price for p in points]),
        "optimistic": _series([p.optimistic for p in points]),
        "pessimistic": _series([p.pessimistic for p in points]),
    }


def register_filters(env) -> None:
    env.filters["currency"] = format_currency
    env.filters["percent"] = format_percent
    env.filters["whole_percent"] = format_whole_percent
    env.filters["ratio"] = format_ratio
    env.filters["bps"] = format_bps
