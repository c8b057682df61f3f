"""Pydantic request/response schemas for solar-potential estimation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Accepts snake_case or camelCase input and serializes camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SolarAnalysis(_CamelModel):
    """Immutable result of one roof estimate."""

    model_config = ConfigDict(frozen=True)

    roof_area: float = Field(..., ge=0.0)
    available_area: float = Field(..., ge=0.0)
    panel_area: float = Field(..., gt=0.0)
    effective_panel_area: float = Field(..., ge=0.0)
    panel_count: int = Field(..., ge=0)
    total_panel_area: float = Field(..., ge=0.0)
    estimated_power_output: float = Field(..., ge=0.0)
    efficiency: float = Field(..., gt=0.0, le=1.0)

    @property
    def coverage_ratio(self) -> float:
        """Share of the available area actually covered by panels."""
        if self.available_area == 0:
            return 0.0
        return self.effective_panel_area / self.available_area


class EstimationRequest(_CamelModel):
    """Single-roof estimation input.

    Unset tuning values fall back to the service configuration. ``panel_area``
    takes precedence over ``panel_model`` when both are given.
    """

    roof_area: float = Field(..., examples=[100.0])
    exclusion_fraction: float = Field(..., examples=[0.2])
    panel_model: str | None = Field(default=None, examples=["standard-60"])
    panel_area: float | None = None
    packing_efficiency: float | None = None
    irradiance_factor: float | None = None
    system_efficiency: float | None = None


class BatchEstimationRequest(_CamelModel):
    """Many independent roofs estimated in one call."""

    roofs: list[EstimationRequest] = Field(..., min_length=1)


class BatchError(_CamelModel):
    """A rejected roof within a batch."""

    index: int
    field: str
    constraint: str
    message: str


class BatchEstimationResponse(_CamelModel):
    """Per-roof results aligned with the request order; failed roofs are ``None``."""

    results: list[SolarAnalysis | None]
    errors: list[BatchError]


class PanelModelResponse(_CamelModel):
    """Catalogue entry for a panel model."""

    name: str
    panel_area: float
    rated_power_w: float | None = None
