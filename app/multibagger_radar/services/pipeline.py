from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from app.multibagger_radar.core.rules import load_rules
from app.multibagger_radar.models.schemas import (
    ControlState,
    ScreenResult,
    Stock,
    StockAnalysis,
    ValuationOverrides,
)
from app.multibagger_radar.providers.base import DataProvider
from app.multibagger_radar.services.factories import build_provider
from app.multibagger_radar.services.scoring import generate_tags, score_stock
from app.multibagger_radar.services.screening import aggregate, apply_filters
from app.multibagger_radar.services.valuation import calculate_intrinsic_value, project_future_value

logger = logging.getLogger(__name__)


class StockNotFoundError(KeyError):
    pass


def analyze_stock(
    stock: Stock,
    overrides: ValuationOverrides,
    current_year: int | None = None,
) -> StockAnalysis:
    intrinsic = calculate_intrinsic_value(stock, overrides)
    future = project_future_value(stock, overrides, years=overrides.horizon_years, current_year=current_year)
    return StockAnalysis(
        stock=stock,
        intrinsic=intrinsic,
        future=tuple(future),
        score=score_stock(stock, intrinsic),
        tags=generate_tags(stock, intrinsic),
    )


class PipelineService:
    def __init__(self, provider: DataProvider | None = None, current_year: int | None = None) -> None:
        self.provider = provider
        self.current_year = current_year
        # keyed by (overrides, year); the snapshot never changes
        self._analyze_cached = lru_cache(maxsize=128)(self._analyze)

    def _get_provider(self) -> DataProvider:
        if self.provider is None:
            self.provider = build_provider(load_rules())
        return self.provider

    def _analyze(self, overrides: ValuationOverrides, year: int) -> tuple[StockAnalysis, ...]:
        stocks = self._get_provider().get_stocks()
        return tuple(analyze_stock(s, overrides, current_year=year) for s in stocks)

    def analyze(self, overrides: ValuationOverrides | None = None) -> list[StockAnalysis]:
        year = self.current_year if self.current_year is not None else date.today().year
        return list(self._analyze_cached(overrides or ValuationOverrides(), year))

    def get_analysis(self, ticker: str, overrides: ValuationOverrides | None = None) -> StockAnalysis:
        wanted = ticker.strip().upper()
        for analysis in self.analyze(overrides):
            if analysis.stock.ticker.upper() == wanted:
                return analysis
        raise StockNotFoundError(ticker)

    def run_screen(self, controls: ControlState | None = None) -> ScreenResult:
        controls = controls or ControlState()
        analyses = self.analyze(controls.overrides())
        filtered = apply_filters(analyses, controls)
        summary = aggregate(filtered)

        logger.info(
            "Screen: %d of %d stocks passed (min_score=%d, horizon=%dy)",
            summary.count,
            len(analyses),
            controls.min_score,
            controls.horizon_years,
        )
        return ScreenResult(
            controls=controls,
            universe_size=len(analyses),
            analyses=filtered,
            summary=summary,
        )
