from __future__ import annotations

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.multibagger_radar.core.rules import load_rules
from app.multibagger_radar.core.settings import STATIC_DIR, TEMPLATE_DIR
from app.multibagger_radar.models.schemas import ControlState
from app.multibagger_radar.services.formatting import projection_chart, register_filters
from app.multibagger_radar.services.pipeline import PipelineService, StockNotFoundError
from app.multibagger_radar.services.scoring import score_breakdown

pipeline = PipelineService()
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
register_filters(templates.env)
templates.env.globals["projection_chart"] = projection_chart

app = FastAPI(title="Multibagger Radar", version="0.1.0")
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def _controls_from_query(request: Request, rules: dict[str, Any]) -> ControlState:
    """Rules-file defaults overlaid with whatever the slider form submitted."""
    values = dict(rules["controls"])
    for key in ControlState.model_fields:
        raw = request.query_params.get(key)
        if raw not in (None, ""):
            values[key] = raw
    return ControlState(**values)


def _json_controls(request: Request) -> ControlState:
    try:
        return _controls_from_query(request, load_rules())
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def dashboard(request: Request):
    rules = load_rules()
    error = None
    status_code = 200
    try:
        controls = _controls_from_query(request, rules)
    except ValidationError as exc:
        error = str(exc)
        status_code = 400
        controls = ControlState(**rules["controls"])

    result = pipeline.run_screen(controls)
    max_cards = int(rules.get("ui", {}).get("max_cards", 24))
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "title": rules.get("ui", {}).get("title", "Multibagger Radar"),
            "controls": controls,
            "sliders": rules["sliders"],
            "result": result,
            "cards": result.analyses[:max_cards],
            "error": error,
        },
        status_code=status_code,
    )


@app.get("/api/controls")
def api_controls() -> JSONResponse:
    rules = load_rules()
    defaults = ControlState(**rules["controls"])
    return JSONResponse(content={"defaults": defaults.model_dump(), "sliders": rules["sliders"]})


@app.get("/api/screen")
def api_screen(request: Request) -> JSONResponse:
    result = pipeline.run_screen(_json_controls(request))
    return JSONResponse(content=result.model_dump(mode="json"))


@app.get("/api/stocks")
def api_stocks(request: Request) -> JSONResponse:
    overrides = _json_controls(request).overrides()
    analyses = pipeline.analyze(overrides)
    return JSONResponse(content={"stocks": [a.model_dump(mode="json") for a in analyses]})


@app.get("/api/stocks/{ticker}")
def api_stock_detail(request: Request, ticker: str) -> JSONResponse:
    overrides = _json_controls(request).overrides()
    try:
        analysis = pipeline.get_analysis(ticker, overrides)
    except StockNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown ticker: {ticker}") from exc

    payload = analysis.model_dump(mode="json")
    payload["upside"] = analysis.upside
    payload["fcf_per_share"] = analysis.stock.fcf_per_share
    payload["score_breakdown"] = score_breakdown(analysis.stock, analysis.intrinsic)
    return JSONResponse(content=payload)
