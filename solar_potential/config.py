"""Configuration for rooftop solar-potential estimation defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanelModel:
    """Physical panel module offered to the packer."""

    name: str
    panel_area: float
    rated_power_w: float | None = None


@dataclass(frozen=True)
class EstimationConfig:
    """Tuning constants applied to every estimate.

    The exclusion fraction is not configurable: every request supplies its own.

    ``irradiance_factor`` fixes the output unit: W/m² yields watts, kWh/m²/day
    yields daily kWh.
    """

    packing_efficiency: float = 0.75
    irradiance_factor: float = 150.0
    system_efficiency: float = 0.85

    @classmethod
    def from_env(cls) -> EstimationConfig:
        """Build a config from ``SOLAR_*`` environment variables.

        Unset or unparseable variables keep the ``DEFAULT_CONFIG`` value.
        """
        load_dotenv()
        return replace(
            DEFAULT_CONFIG,
            packing_efficiency=_get_float_env("SOLAR_PACKING_EFFICIENCY", DEFAULT_CONFIG.packing_efficiency),
            irradiance_factor=_get_float_env("SOLAR_IRRADIANCE_FACTOR", DEFAULT_CONFIG.irradiance_factor),
            system_efficiency=_get_float_env("SOLAR_SYSTEM_EFFICIENCY", DEFAULT_CONFIG.system_efficiency),
        )


def _get_float_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s.", key, value, default)
        return default


DEFAULT_CONFIG = EstimationConfig()

PANEL_MODELS: dict[str, PanelModel] = {
    model.name: model
    for model in (
        PanelModel("standard-60", panel_area=1.6, rated_power_w=330.0),
        PanelModel("standard-72", panel_area=1.95, rated_power_w=400.0),
        PanelModel("compact-54", panel_area=1.7, rated_power_w=410.0),
        PanelModel("large-format-144", panel_area=2.58, rated_power_w=550.0),
    )
}

DEFAULT_PANEL_MODEL = PANEL_MODELS["standard-60"]
