from __future__ import annotations

from app.multibagger_radar.models.schemas import AggregateSummary, ControlState, StockAnalysis


def passes_filters(analysis: StockAnalysis, controls: ControlState) -> bool:
    return (
        analysis.score >= controls.min_score
        and analysis.intrinsic.margin_of_safety >= controls.min_margin
        and analysis.stock.five_year_cagr >= controls.min_cagr
        and analysis.stock.debt_to_equity <= controls.max_debt
    )


def apply_filters(analyses: list[StockAnalysis], controls: ControlState) -> list[StockAnalysis]:
    """Keep analyses meeting every threshold, best score first.

    ``sorted`` is stable, so equal scores keep their universe order.
    """
    passed = [a for a in analyses if passes_filters(a, controls)]
    return sorted(passed, key=lambda a: a.score, reverse=True)


def aggregate(filtered: list[StockAnalysis]) -> AggregateSummary:
    if not filtered:
        return AggregateSummary()

    count = len(filtered)
    top = filtered[0]
    return AggregateSummary(
        count=count,
        avg_margin=sum(a.intrinsic.margin_of_safety for a in filtered) / count,
        avg_upside=sum(a.upside for a in filtered) / count,
        best_intrinsic=top.intrinsic.intrinsic_value,
        top_name=top.stock.name,
    )
