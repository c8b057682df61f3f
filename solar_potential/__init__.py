"""Rooftop solar-potential estimation: area reduction, panel packing and yield."""

from .errors import InvalidInput
from .schemas import SolarAnalysis
from .services.estimator import SolarEstimationEngine, analyse_roof

__all__ = [
    "InvalidInput",
    "SolarAnalysis",
    "SolarEstimationEngine",
    "analyse_roof",
]
