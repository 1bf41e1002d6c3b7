"""HTTP tests against the shipped rules file and stock snapshot."""

import pytest
from fastapi.testclient import TestClient

from app.multibagger_radar.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_dashboard_renders(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Signal Refinement" in resp.text
    assert "Qualified Candidates" in resp.text


def test_dashboard_with_unreachable_filter(client):
    resp = client.get("/", params={"min_score": 100})
    assert resp.status_code == 200
    assert "No candidates match the current filters." in resp.text


def test_dashboard_lists_everything_when_open(client):
    resp = client.get("/", params={"min_score": 0, "min_margin": -1, "min_cagr": 0, "max_debt": 10})
    assert resp.status_code == 200
    assert "NVLT" in resp.text
    assert "<polyline" in resp.text


def test_dashboard_invalid_controls(client):
    resp = client.get("/", params={"horizon_years": 40})
    assert resp.status_code == 400
    assert "Invalid controls" in resp.text


def test_api_controls(client):
    body = client.get("/api/controls").json()
    assert body["defaults"]["min_score"] == 68
    assert body["defaults"]["horizon_years"] == 10
    assert body["sliders"]["horizon_years"] == {"min": 5, "max": 15, "step": 1}


def test_api_screen_defaults(client):
    body = client.get("/api/screen").json()
    assert body["universe_size"] == 14
    scores = [a["score"] for a in body["analyses"]]
    assert scores == sorted(scores, reverse=True)
    assert all(s >= 68 for s in scores)
    assert body["summary"]["count"] == len(scores)


def test_api_screen_empty(client):
    body = client.get("/api/screen", params={"min_score": 100}).json()
    assert body["analyses"] == []
    assert body["summary"] == {
        "count": 0,
        "avg_margin": 0.0,
        "avg_upside": 0.0,
        "best_intrinsic": 0.0,
        "top_name": "",
    }


def test_api_screen_horizon(client):
    body = client.get("/api/screen", params={"min_score": 0, "min_margin": -1, "min_cagr": 0, "max_debt": 10,
                                              "horizon_years": 7}).json()
    assert all(len(a["future"]) == 7 for a in body["analyses"])


@pytest.mark.parametrize("params", [{"horizon_years": 2}, {"min_score": "abc"}, {"min_score": 101}])
def test_api_screen_rejects_bad_controls(client, params):
    assert client.get("/api/screen", params=params).status_code == 422


def test_api_stocks(client):
    body = client.get("/api/stocks").json()
    assert len(body["stocks"]) == 14


def test_api_stock_detail(client):
    body = client.get("/api/stocks/nvlt").json()
    assert body["stock"]["ticker"] == "NVLT"
    assert set(body["score_breakdown"]) == {"margin", "growth", "quality", "leverage", "moat"}
    assert body["upside"] == pytest.approx(body["intrinsic"]["intrinsic_value"] / body["stock"]["price"] - 1)
    assert body["fcf_per_share"] == pytest.approx(2_760_000_000 / 460_000_000)


def test_api_stock_detail_unknown(client):
    assert client.get("/api/stocks/ZZZZ").status_code == 404
