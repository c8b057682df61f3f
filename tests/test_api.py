"""Tests for solar_potential.main — FastAPI endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from solar_potential.main import app

SCENARIO = {
    "roofArea": 100,
    "exclusionFraction": 0.2,
    "panelArea": 1.6,
    "packingEfficiency": 0.75,
    "irradianceFactor": 150,
    "systemEfficiency": 0.85,
}


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestPanels:
    def test_lists_catalogue(self, client):
        response = client.get("/v1/panels")
        assert response.status_code == 200
        names = {panel["name"]: panel for panel in response.json()}
        assert names["standard-60"]["panelArea"] == 1.6


class TestAnalyse:
    def test_reference_scenario(self, client):
        response = client.post("/v1/analyse", json=SCENARIO)
        assert response.status_code == 200
        body = response.json()
        assert set(body) == {
            "roofArea",
            "availableArea",
            "panelArea",
            "effectivePanelArea",
            "panelCount",
            "totalPanelArea",
            "estimatedPowerOutput",
            "efficiency",
        }
        assert body["panelCount"] == 37
        assert body["availableArea"] == pytest.approx(80.0)
        assert body["estimatedPowerOutput"] == pytest.approx(7548.0)
        assert body["efficiency"] == 0.85

    def test_negative_roof_area(self, client):
        response = client.post("/v1/analyse", json={**SCENARIO, "roofArea": -5})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["field"] == "roofArea"
        assert detail["constraint"] == ">= 0"

    def test_unknown_panel_model(self, client):
        payload = {"roofArea": 100, "exclusionFraction": 0.2, "panelModel": "mystery"}
        response = client.post("/v1/analyse", json=payload)
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "panelModel"

    def test_missing_exclusion_fraction(self, client):
        response = client.post("/v1/analyse", json={"roofArea": 100})
        assert response.status_code == 422


class TestAnalyseBatch:
    def test_mixed_batch(self, client):
        payload = {"roofs": [SCENARIO, {**SCENARIO, "systemEfficiency": 1.5}, {**SCENARIO, "roofArea": 0}]}
        response = client.post("/v1/analyse/batch", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["results"][0]["panelCount"] == 37
        assert body["results"][1] is None
        assert body["results"][2]["panelCount"] == 0
        assert body["errors"] == [
            {
                "index": 1,
                "field": "systemEfficiency",
                "constraint": "in (0, 1]",
                "message": "systemEfficiency must be in (0, 1], got 1.5",
            }
        ]

    def test_empty_batch_rejected(self, client):
        response = client.post("/v1/analyse/batch", json={"roofs": []})
        assert response.status_code == 422
