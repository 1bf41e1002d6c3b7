from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.multibagger_radar.utils.math_utils import safe_div


class Stock(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    name: str
    sector: str
    price: float = Field(gt=0)
    eps: float
    free_cash_flow: float
    shares_outstanding: float = Field(ge=0)
    revenue: float
    revenue_growth: float
    fcf_growth_rate: float
    profit_margin: float
    roic: float
    debt_to_equity: float
    cash_per_share: float = 0.0
    five_year_cagr: float
    pe_ratio: float
    peg_ratio: float
    discount_rate: float
    terminal_growth: float
    moat_rating: float = Field(ge=0, le=1)

    @property
    def fcf_per_share(self) -> float:
        return safe_div(self.free_cash_flow, self.shares_outstanding)


class ValuationOverrides(BaseModel):
    model_config = ConfigDict(frozen=True)

    horizon_years: int = Field(default=10, ge=5, le=15)
    discount_rate_delta: float = 0.0
    growth_rate_delta: float = 0.0


class IntrinsicValueResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    intrinsic_value: float
    terminal_value: float
    cash_flow_sum: float
    margin_of_safety: float


class FutureProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    projected_price: float
    optimistic: float
    pessimistic: float


class StockAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    stock: Stock
    intrinsic: IntrinsicValueResult
    future: tuple[FutureProjectionPoint, ...]
    score: int = Field(ge=0, le=100)
    tags: tuple[str, ...] = ()

    @property
    def upside(self) -> float:
        return self.intrinsic.intrinsic_value / self.stock.price - 1


class ControlState(BaseModel):
    """Dashboard slider state: filter thresholds plus valuation overrides."""

    min_score: int = Field(default=68, ge=0, le=100)
    min_margin: float = 0.12
    min_cagr: float = 0.22
    max_debt: float = 0.75
    horizon_years: int = Field(default=10, ge=5, le=15)
    discount_rate_delta: float = 0.0
    growth_rate_delta: float = 0.0

    def overrides(self) -> ValuationOverrides:
        return ValuationOverrides(
            horizon_years=self.horizon_years,
            discount_rate_delta=self.discount_rate_delta,
            growth_rate_delta=self.growth_rate_delta,
        )


class AggregateSummary(BaseModel):
    count: int = 0
    avg_margin: float = 0.0
    avg_upside: float = 0.0
    best_intrinsic: float = 0.0
    top_name: str = ""


class ScreenResult(BaseModel):
    controls: ControlState
    universe_size: int
    analyses: list[StockAnalysis]
    summary: AggregateSummary
