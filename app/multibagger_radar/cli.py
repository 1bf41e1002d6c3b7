from __future__ import annotations

import argparse
import logging
from pathlib import Path

from app.multibagger_radar.core.rules import load_rules
from app.multibagger_radar.core.settings import LOG_LEVEL
from app.multibagger_radar.models.schemas import ControlState
from app.multibagger_radar.services.factories import build_provider
from app.multibagger_radar.services.formatting import format_currency, format_percent
from app.multibagger_radar.services.pipeline import PipelineService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Multibagger Radar: screen the stock snapshot")
    p.add_argument("--rules", type=Path, default=None, help="Path to an alternative rules.yaml")
    p.add_argument("--min-score", type=int, help="Minimum multibagger score (0-100)")
    p.add_argument("--min-margin", type=float, help="Minimum margin of safety, e.g. 0.12")
    p.add_argument("--min-cagr", type=float, help="Minimum five-year CAGR, e.g. 0.22")
    p.add_argument("--max-debt", type=float, help="Maximum debt to equity")
    p.add_argument("--horizon-years", type=int, help="DCF horizon in years (5-15)")
    p.add_argument("--discount-rate-delta", type=float, help="Added to every discount rate")
    p.add_argument("--growth-rate-delta", type=float, help="Added to every growth rate")
    p.add_argument("--top", type=int, default=10, help="How many candidates to print")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    rules = load_rules(args.rules)
    values = dict(rules["controls"])
    for key in ControlState.model_fields:
        override = getattr(args, key)
        if override is not None:
            values[key] = override
    controls = ControlState(**values)

    result = PipelineService(provider=build_provider(rules)).run_screen(controls)
    summary = result.summary

    print(f"{summary.count} of {result.universe_size} stocks qualify")
    for rank, a in enumerate(result.analyses[: args.top], start=1):
        print(
            f"{rank}. {a.stock.ticker:<6} score={a.score:<3} "
            f"intrinsic={format_currency(a.intrinsic.intrinsic_value)} "
            f"price={format_currency(a.stock.price)} "
            f"margin={format_percent(a.intrinsic.margin_of_safety)} "
            f"tags={', '.join(a.tags) or '-'}"
        )
    if summary.count:
        print(
            f"Average margin {format_percent(summary.avg_margin)}, "
            f"average upside {format_percent(summary.avg_upside)}, "
            f"top pick {summary.top_name} at {format_currency(summary.best_intrinsic)}"
        )


if __name__ == "__main__":
    main()
