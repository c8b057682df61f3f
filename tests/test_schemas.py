"""Tests for solar_potential.schemas — SolarAnalysis wire contract."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from solar_potential.schemas import EstimationRequest, SolarAnalysis

WIRE_FIELDS = [
    "roofArea",
    "availableArea",
    "panelArea",
    "effectivePanelArea",
    "panelCount",
    "totalPanelArea",
    "estimatedPowerOutput",
    "efficiency",
]


def _analysis(**overrides) -> SolarAnalysis:
    values = dict(
        roof_area=100.0,
        available_area=80.0,
        panel_area=1.6,
        effective_panel_area=59.2,
        panel_count=37,
        total_panel_area=59.2,
        estimated_power_output=7548.0,
        efficiency=0.85,
    )
    values.update(overrides)
    return SolarAnalysis(**values)


class TestSolarAnalysis:
    def test_serializes_exactly_eight_camel_case_fields(self):
        assert list(_analysis().model_dump(by_alias=True)) == WIRE_FIELDS

    def test_json_round_trip_is_lossless(self):
        original = _analysis(estimated_power_output=7547.999999999999, available_area=80.00000000000001)
        restored = SolarAnalysis.model_validate(json.loads(original.model_dump_json(by_alias=True)))
        assert restored == original

    def test_accepts_camel_case_payload(self):
        payload = _analysis().model_dump(by_alias=True)
        assert SolarAnalysis.model_validate(payload).panel_count == 37

    def test_is_immutable(self):
        analysis = _analysis()
        with pytest.raises(ValidationError):
            analysis.panel_count = 40

    def test_rejects_negative_power(self):
        with pytest.raises(ValidationError):
            _analysis(estimated_power_output=-1.0)

    def test_coverage_ratio(self):
        assert _analysis().coverage_ratio == pytest.approx(59.2 / 80.0)

    def test_coverage_ratio_with_no_available_area(self):
        analysis = _analysis(
            roof_area=0.0,
            available_area=0.0,
            effective_panel_area=0.0,
            panel_count=0,
            total_panel_area=0.0,
            estimated_power_output=0.0,
        )
        assert analysis.coverage_ratio == 0.0

    def test_coverage_ratio_not_serialized(self):
        assert "coverageRatio" not in _analysis().model_dump(by_alias=True)


class TestEstimationRequest:
    def test_camel_case_input(self):
        request = EstimationRequest.model_validate({"roofArea": 90, "exclusionFraction": 0.1, "panelModel": "x"})
        assert request.roof_area == 90.0
        assert request.panel_model == "x"
        assert request.packing_efficiency is None

    def test_exclusion_fraction_required(self):
        with pytest.raises(ValidationError):
            EstimationRequest.model_validate({"roofArea": 90})
