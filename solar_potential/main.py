"""FastAPI backend exposing rooftop solar-potential estimation endpoints."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import PANEL_MODELS, EstimationConfig
from .errors import InvalidInput
from .schemas import (
    BatchError,
    BatchEstimationRequest,
    BatchEstimationResponse,
    EstimationRequest,
    PanelModelResponse,
    SolarAnalysis,
)
from .services.batch import analyse_many
from .services.estimator import SolarEstimationEngine

app = FastAPI(title="Solar Potential API", version="0.1.0")
engine = SolarEstimationEngine(config=EstimationConfig.from_env())


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    """Report the offending field and constraint instead of a result."""
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


@app.get("/health")
def health() -> dict[str, str]:
    """Service health endpoint."""
    return {"status": "ok"}


@app.get("/v1/panels", response_model=list[PanelModelResponse])
def list_panels() -> list[PanelModelResponse]:
    """List catalogue panel models accepted as ``panelModel``."""
    return [
        PanelModelResponse(name=model.name, panel_area=model.panel_area, rated_power_w=model.rated_power_w)
        for model in PANEL_MODELS.values()
    ]


@app.post("/v1/analyse", response_model=SolarAnalysis)
def analyse(request: EstimationRequest) -> SolarAnalysis:
    """Estimate panel count and power output for one roof."""
    return engine.analyse_request(request)


@app.post("/v1/analyse/batch", response_model=BatchEstimationResponse)
def analyse_batch(request: BatchEstimationRequest) -> BatchEstimationResponse:
    """Estimate many roofs; rejected roofs are reported without failing the batch."""
    results: list[SolarAnalysis | None] = []
    errors: list[BatchError] = []
    for index, result in enumerate(analyse_many(request.roofs, engine=engine)):
        if isinstance(result, InvalidInput):
            results.append(None)
            errors.append(BatchError(index=index, **result.to_dict()))
        else:
            results.append(result)
    return BatchEstimationResponse(results=results, errors=errors)
