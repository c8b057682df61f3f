"""Fan-out of independent roof estimates (thread pool and DataFrame adapter)."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

import pandas as pd

from ..errors import InvalidInput
from ..schemas import EstimationRequest, SolarAnalysis
from .estimator import SolarEstimationEngine

logger = logging.getLogger(__name__)

RESULT_COLUMNS: tuple[str, ...] = tuple(
    field.alias or name for name, field in SolarAnalysis.model_fields.items()
)
ERROR_COLUMN = "error"

BatchResult = SolarAnalysis | InvalidInput


def _run_one(engine: SolarEstimationEngine, request: EstimationRequest) -> BatchResult:
    try:
        return engine.analyse_request(request)
    except InvalidInput as exc:
        return exc


def analyse_many(
    requests: Iterable[EstimationRequest],
    engine: SolarEstimationEngine | None = None,
    max_workers: int | None = None,
) -> list[BatchResult]:
    """Estimate many roofs concurrently.

    Args:
        requests: Independent roof requests.
        engine: Engine to use; default configuration when omitted.
        max_workers: Thread pool size; ``ThreadPoolExecutor`` default when omitted.

    Returns:
        One entry per request, in input order. Rejected roofs are returned as
        their ``InvalidInput`` so the rest of the batch still completes.
    """
    engine = engine or SolarEstimationEngine()
    requests = list(requests)
    if not requests:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(lambda request: _run_one(engine, request), requests))

    failures = sum(isinstance(result, InvalidInput) for result in results)
    logger.info("Batch finished: %d/%d roofs estimated", len(results) - failures, len(results))
    return results


def _clean_cell(value: Any) -> Any:
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _row_to_request(row: dict[str, Any]) -> EstimationRequest | InvalidInput:
    payload = {key: _clean_cell(value) for key, value in row.items()}
    # Missing required values reach the pipeline as NaN so they fail on their own field.
    for snake, camel in (("roof_area", "roofArea"), ("exclusion_fraction", "exclusionFraction")):
        key = camel if camel in payload else snake
        if payload.get(key) is None:
            payload[key] = math.nan
    try:
        return EstimationRequest.model_validate(payload)
    except ValueError as exc:
        return InvalidInput("row", "a valid estimation request", str(exc))


def analyse_frame(
    df: pd.DataFrame,
    engine: SolarEstimationEngine | None = None,
    max_workers: int | None = None,
) -> pd.DataFrame:
    """Estimate every row of *df*.

    Input columns may be snake_case or camelCase request fields; at least
    ``roofArea`` and ``exclusionFraction`` are required. The result frame keeps
    the input columns, adds the eight ``SolarAnalysis`` columns (camelCase) and
    an ``error`` column that is empty for successful rows. A result column that
    shares a name with an input column overwrites it only for successful rows.

    Raises:
        ValueError: If a required column is missing.
    """
    for snake, camel in (("roof_area", "roofArea"), ("exclusion_fraction", "exclusionFraction")):
        if snake not in df.columns and camel not in df.columns:
            raise ValueError(f"Missing required column: {camel} (or {snake})")

    logger.info("Estimating %d roofs from frame", len(df))
    parsed = [_row_to_request(row) for row in df.to_dict(orient="records")]
    valid = [item for item in parsed if isinstance(item, EstimationRequest)]
    estimated = iter(analyse_many(valid, engine=engine, max_workers=max_workers))

    rows: list[dict[str, Any]] = []
    for item in parsed:
        result = next(estimated) if isinstance(item, EstimationRequest) else item
        if isinstance(result, InvalidInput):
            rows.append({**{column: None for column in RESULT_COLUMNS}, ERROR_COLUMN: str(result)})
        else:
            rows.append({**result.model_dump(by_alias=True), ERROR_COLUMN: None})

    out = df.reset_index(drop=True).copy()
    results = pd.DataFrame(rows, columns=[*RESULT_COLUMNS, ERROR_COLUMN])
    for column in results.columns:
        if column in out.columns:
            # Rejected rows keep their submitted value.
            out[column] = results[column].combine_first(out[column])
        else:
            out[column] = results[column]
    return out
