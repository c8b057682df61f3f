"""Deterministic area → panel → power pipeline for a single roof segment."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple

from ..config import DEFAULT_CONFIG, DEFAULT_PANEL_MODEL, PANEL_MODELS, EstimationConfig, PanelModel
from ..errors import InvalidInput, require_finite
from ..schemas import EstimationRequest, SolarAnalysis

logger = logging.getLogger(__name__)


class PackingResult(NamedTuple):
    """Whole-panel layout realised on the available area."""

    panel_count: int
    effective_panel_area: float
    total_panel_area: float


# --- Pipeline stages --------------------------------------------------------


def reduce_area(roof_area: float, exclusion_fraction: float) -> float:
    """Remove obstructions, setbacks and shading from the roof area.

    Args:
        roof_area: Total roof surface in m².
        exclusion_fraction: Share of the roof lost, in [0, 1].

    Returns:
        Available area in m², clamped to ``[0, roof_area]``.

    Raises:
        InvalidInput: Negative area or fraction outside [0, 1].
    """
    roof_area = require_finite("roofArea", roof_area)
    exclusion_fraction = require_finite("exclusionFraction", exclusion_fraction)
    if roof_area < 0:
        raise InvalidInput("roofArea", ">= 0", roof_area)
    if not 0.0 <= exclusion_fraction <= 1.0:
        raise InvalidInput("exclusionFraction", "in [0, 1]", exclusion_fraction)

    available_area = roof_area * (1.0 - exclusion_fraction)
    return min(max(available_area, 0.0), roof_area)


def pack_panels(available_area: float, panel_area: float, packing_efficiency: float) -> PackingResult:
    """Fit whole panels onto the available area.

    The layout loss is applied first, then the count is floored: a partial
    panel cannot be mounted.

    Raises:
        InvalidInput: Negative available area, non-positive panel footprint or
            packing efficiency outside (0, 1].
    """
    available_area = require_finite("availableArea", available_area)
    panel_area = require_finite("panelArea", panel_area)
    packing_efficiency = require_finite("packingEfficiency", packing_efficiency)
    if available_area < 0:
        raise InvalidInput("availableArea", ">= 0", available_area)
    if panel_area <= 0:
        raise InvalidInput("panelArea", "> 0", panel_area)
    if not 0.0 < packing_efficiency <= 1.0:
        raise InvalidInput("packingEfficiency", "in (0, 1]", packing_efficiency)

    usable_area = available_area * packing_efficiency
    if usable_area < panel_area:
        return PackingResult(0, 0.0, 0.0)

    panel_count = math.floor(usable_area / panel_area)
    # The product can land one float step above the usable area.
    while panel_count > 0 and panel_count * panel_area > usable_area:
        panel_count -= 1
    total_panel_area = panel_count * panel_area
    return PackingResult(panel_count, total_panel_area, total_panel_area)


def estimate_yield(effective_panel_area: float, irradiance_factor: float, system_efficiency: float) -> float:
    """Convert covered area into power using site irradiance and derating.

    Raises:
        InvalidInput: Negative area, non-positive irradiance or efficiency
            outside (0, 1].
    """
    effective_panel_area = require_finite("effectivePanelArea", effective_panel_area)
    irradiance_factor = require_finite("irradianceFactor", irradiance_factor)
    system_efficiency = require_finite("systemEfficiency", system_efficiency)
    if effective_panel_area < 0:
        raise InvalidInput("effectivePanelArea", ">= 0", effective_panel_area)
    if irradiance_factor <= 0:
        raise InvalidInput("irradianceFactor", "> 0", irradiance_factor)
    if not 0.0 < system_efficiency <= 1.0:
        raise InvalidInput("systemEfficiency", "in (0, 1]", system_efficiency)

    return effective_panel_area * irradiance_factor * system_efficiency


def resolve_panel(panel_model: str | None = None, panel_area: float | None = None) -> PanelModel:
    """Pick the panel for a request: explicit footprint, catalogue name, or default.

    Raises:
        InvalidInput: Unknown catalogue name.
    """
    if panel_area is not None:
        return PanelModel(name=panel_model or "custom", panel_area=panel_area)
    if panel_model is None:
        return DEFAULT_PANEL_MODEL
    try:
        return PANEL_MODELS[panel_model]
    except KeyError:
        known = ", ".join(sorted(PANEL_MODELS))
        raise InvalidInput("panelModel", f"one of: {known}", panel_model) from None


# --- Engine -----------------------------------------------------------------


@dataclass(frozen=True)
class SolarEstimationEngine:
    """Stateless runner for the reduce → pack → estimate pipeline."""

    config: EstimationConfig = DEFAULT_CONFIG

    def analyse(
        self,
        roof_area: float,
        panel: PanelModel | None = None,
        *,
        exclusion_fraction: float,
        packing_efficiency: float | None = None,
        irradiance_factor: float | None = None,
        system_efficiency: float | None = None,
    ) -> SolarAnalysis:
        """Estimate panel count and power output for one roof segment.

        Args:
            roof_area: Total roof surface in m².
            panel: Panel model; ``DEFAULT_PANEL_MODEL`` when omitted.
            exclusion_fraction: Share of the roof lost to obstructions and shading.
            packing_efficiency: Layout realism factor; engine config when omitted.
            irradiance_factor: Site solar-resource constant; engine config when omitted.
            system_efficiency: Derating factor, echoed as ``efficiency``.

        Raises:
            InvalidInput: Any stage rejected its inputs; no partial result is produced.
        """
        panel = panel or DEFAULT_PANEL_MODEL
        if packing_efficiency is None:
            packing_efficiency = self.config.packing_efficiency
        if irradiance_factor is None:
            irradiance_factor = self.config.irradiance_factor
        if system_efficiency is None:
            system_efficiency = self.config.system_efficiency

        available_area = reduce_area(roof_area, exclusion_fraction)
        roof_area = float(roof_area)
        packing = pack_panels(available_area, panel.panel_area, packing_efficiency)
        power_output = estimate_yield(packing.effective_panel_area, irradiance_factor, system_efficiency)

        logger.debug(
            "Roof %.2f m² (%s): %d panels, %.2f m² covered, output %.2f",
            roof_area, panel.name, packing.panel_count, packing.effective_panel_area, power_output,
        )
        return SolarAnalysis(
            roof_area=roof_area,
            available_area=available_area,
            panel_area=float(panel.panel_area),
            effective_panel_area=packing.effective_panel_area,
            panel_count=packing.panel_count,
            total_panel_area=packing.total_panel_area,
            estimated_power_output=power_output,
            efficiency=float(system_efficiency),
        )

    def analyse_request(self, request: EstimationRequest) -> SolarAnalysis:
        """Run the pipeline for a validated API/CLI request."""
        return self.analyse(
            request.roof_area,
            resolve_panel(request.panel_model, request.panel_area),
            exclusion_fraction=request.exclusion_fraction,
            packing_efficiency=request.packing_efficiency,
            irradiance_factor=request.irradiance_factor,
            system_efficiency=request.system_efficiency,
        )


def analyse_roof(
    roof_area: float,
    panel: PanelModel | None = None,
    *,
    exclusion_fraction: float,
    packing_efficiency: float | None = None,
    irradiance_factor: float | None = None,
    system_efficiency: float | None = None,
) -> SolarAnalysis:
    """Run the pipeline with the default configuration."""
    return SolarEstimationEngine().analyse(
        roof_area,
        panel,
        exclusion_fraction=exclusion_fraction,
        packing_efficiency=packing_efficiency,
        irradiance_factor=irradiance_factor,
        system_efficiency=system_efficiency,
    )
