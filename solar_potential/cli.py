"""Command-line entrypoint (single estimate / CSV batch modes)."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import pandas as pd

from .config import PANEL_MODELS, EstimationConfig
from .errors import InvalidInput
from .schemas import EstimationRequest
from .services.batch import ERROR_COLUMN, analyse_frame
from .services.estimator import SolarEstimationEngine

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure console logging; level from ``SOLAR_LOG_LEVEL`` (default INFO)."""
    logging.basicConfig(
        level=os.getenv("SOLAR_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
        stream=sys.stderr,
    )


def run_estimate(args: argparse.Namespace, engine: SolarEstimationEngine) -> int:
    """Estimate one roof and print the JSON result. Returns the exit code."""
    request = EstimationRequest(
        roof_area=args.roof_area,
        exclusion_fraction=args.exclusion_fraction,
        panel_model=args.panel_model,
        panel_area=args.panel_area,
        packing_efficiency=args.packing_efficiency,
        irradiance_factor=args.irradiance_factor,
        system_efficiency=args.system_efficiency,
    )
    try:
        analysis = engine.analyse_request(request)
    except InvalidInput as exc:
        logger.error("Estimate rejected: %s", exc)
        return 1
    print(analysis.model_dump_json(by_alias=True, indent=2))
    return 0


def run_batch(args: argparse.Namespace, engine: SolarEstimationEngine) -> int:
    """Estimate every row of a CSV file. Returns the exit code."""
    try:
        df = pd.read_csv(args.input)
        results = analyse_frame(df, engine=engine, max_workers=args.workers)
    except (OSError, ValueError) as exc:
        logger.error("Batch failed: %s", exc)
        return 1

    failures = int(results[ERROR_COLUMN].notna().sum())
    if args.output:
        results.to_csv(args.output, index=False)
        logger.info("Wrote %d rows to %s", len(results), args.output)
    else:
        results.to_csv(sys.stdout, index=False)

    if failures:
        logger.warning("%d of %d roofs were rejected.", failures, len(results))
    if len(results) and failures == len(results):
        return 2
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="solar-potential", description="Rooftop panel count and power estimate.")
    sub = p.add_subparsers(dest="mode", required=True)

    est = sub.add_parser("estimate", help="Estimate a single roof.")
    est.add_argument("--roof-area", type=float, required=True, help="Total roof area in m².")
    est.add_argument("--exclusion-fraction", type=float, required=True,
                     help="Share of the roof lost to obstructions and shading, 0-1.")
    est.add_argument("--panel-model", choices=sorted(PANEL_MODELS), default=None)
    est.add_argument("--panel-area", type=float, default=None, help="Custom panel footprint in m².")
    est.add_argument("--packing-efficiency", type=float, default=None)
    est.add_argument("--irradiance-factor", type=float, default=None)
    est.add_argument("--system-efficiency", type=float, default=None)

    batch = sub.add_parser("batch", help="Estimate every roof in a CSV file.")
    batch.add_argument("input", type=Path, help="CSV with roofArea and exclusionFraction columns.")
    batch.add_argument("--output", type=Path, default=None, help="Result CSV; stdout when omitted.")
    batch.add_argument("--workers", type=int, default=None, help="Thread pool size.")
    return p


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args and dispatch to the appropriate mode handler."""
    args = _build_parser().parse_args(argv)
    configure_logging()
    engine = SolarEstimationEngine(config=EstimationConfig.from_env())

    if args.mode == "estimate":
        sys.exit(run_estimate(args, engine))
    sys.exit(run_batch(args, engine))


if __name__ == "__main__":
    main()
