from __future__ import annotations

from typing import Any

from app.multibagger_radar.core.rules import RuleValidationError
from app.multibagger_radar.core.settings import BASE_DIR
from app.multibagger_radar.providers.base import DataProvider
from app.multibagger_radar.providers.static_provider import StaticDataProvider


def build_provider(rules: dict[str, Any]) -> DataProvider:
    provider_cfg = rules.get("data_provider", {})
    provider_type = str(provider_cfg.get("type", "static")).strip().lower()

    if provider_type != "static":
        raise RuleValidationError(f"Unsupported data_provider.type: {provider_type}")

    stocks_file = provider_cfg.get("stocks_file")
    if stocks_file:
        return StaticDataProvider(stocks_file=BASE_DIR / stocks_file)
    return StaticDataProvider()
