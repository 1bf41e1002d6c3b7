"""Shared fixtures for Multibagger Radar tests."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from app.multibagger_radar.models.schemas import ControlState, Stock  # noqa: E402
from app.multibagger_radar.providers.base import DataProvider  # noqa: E402
from app.multibagger_radar.services.pipeline import PipelineService  # noqa: E402

BASE_STOCK = {
    "ticker": "TEST",
    "name": "Test Corp",
    "sector": "Technology",
    "price": 100.0,
    "eps": 4.0,
    "free_cash_flow": 5_000_000_000,
    "shares_outstanding": 1_000_000_000,
    "revenue": 20_000_000_000,
    "revenue_growth": 0.18,
    "fcf_growth_rate": 0.20,
    "profit_margin": 0.20,
    "roic": 0.18,
    "debt_to_equity": 0.50,
    "cash_per_share": 2.0,
    "five_year_cagr": 0.25,
    "pe_ratio": 25.0,
    "peg_ratio": 1.2,
    "discount_rate": 0.10,
    "terminal_growth": 0.03,
    "moat_rating": 0.70,
}


class ListProvider(DataProvider):
    def __init__(self, stocks):
        self.stocks = list(stocks)
        self.calls = 0

    def get_stocks(self):
        self.calls += 1
        return list(self.stocks)


@pytest.fixture
def make_stock():
    """Factory: ``make_stock(ticker="X", roic=0.3)`` overrides the base record."""
    def _make(**overrides):
        return Stock(**{**BASE_STOCK, **overrides})
    return _make


@pytest.fixture
def sample_stocks(make_stock):
    """Small universe covering strong, average and weak candidates."""
    return [
        make_stock(ticker="AAA", name="Alpha", five_year_cagr=0.40, roic=0.30, debt_to_equity=0.20, moat_rating=0.90),
        make_stock(ticker="BBB", name="Beta", price=180.0, five_year_cagr=0.28, debt_to_equity=0.60),
        make_stock(ticker="CCC", name="Gamma", five_year_cagr=0.12, roic=0.09, debt_to_equity=1.10, moat_rating=0.40),
        make_stock(ticker="DDD", name="Delta", price=40.0, five_year_cagr=0.33, roic=0.25, debt_to_equity=0.30),
        make_stock(ticker="EEE", name="Epsilon", price=400.0, fcf_growth_rate=0.05, five_year_cagr=0.22),
        make_stock(ticker="FFF", name="Zeta", free_cash_flow=0, shares_outstanding=0, cash_per_share=0.0),
    ]


@pytest.fixture
def provider(sample_stocks):
    return ListProvider(sample_stocks)


@pytest.fixture
def pipeline(provider):
    return PipelineService(provider=provider, current_year=2030)


@pytest.fixture
def open_controls():
    """Controls loose enough that every stock passes."""
    return ControlState(min_score=0, min_margin=-1.0, min_cagr=0.0, max_debt=10.0)
