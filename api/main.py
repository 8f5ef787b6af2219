"""
Inventory Forecast API
======================

FastAPI endpoints for the sales forecasting engine.

Usage:
    uvicorn api.main:app --reload

Endpoints:
    POST /forecast - Forecast from an uploaded sales sheet (CSV / Excel)
    POST /forecast/observations - Forecast from a JSON list of observations
    GET /health - Health check
"""

import os
from typing import Any, List, Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from inventory_forecast import __version__, forecast
from inventory_forecast.common import SalesDataLoader
from inventory_forecast.config import load_config
from inventory_forecast.exceptions import (
    ForecastError,
    InsufficientDataError,
    InvalidHorizonError,
    MalformedInputError,
)
from inventory_forecast.sales_prediction import summarize_forecast

DEFAULT_HORIZON = 8

# Initialize FastAPI
app = FastAPI(
    title="Inventory Forecast API",
    description="Weekly sales forecasting for inventory planning",
    version=__version__
)

# Add CORS middleware with environment-based configuration
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

config = load_config(os.getenv("FORECAST_CONFIG"))


# Request/Response models
class ObservationIn(BaseModel):
    date: Any = None
    quantity: Any = None
    product_id: Optional[str] = None


class ObservationsRequest(BaseModel):
    observations: List[ObservationIn]
    horizon: int = DEFAULT_HORIZON
    product_id: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str


def _run_forecast(observations: List[dict], horizon: int) -> dict:
    """Run the engine and map its errors onto HTTP responses."""
    try:
        result = forecast(observations, horizon, config=config)
    except InvalidHorizonError as e:
        logger.error(f"Forecast error: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except InsufficientDataError as e:
        logger.error(f"Forecast error: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except ForecastError as e:
        logger.error(f"Forecast error: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    response = result.to_dict()
    response['insights'] = summarize_forecast(result).to_dict()
    return response


# Health check
@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/forecast")
def forecast_upload(
    file: UploadFile = File(...),
    horizon: int = Query(DEFAULT_HORIZON, description="Number of weekly periods (4, 8, 12 or 16)"),
    product_id: Optional[str] = Query(None, description="Only forecast rows for this product")
):
    """
    Generate a sales forecast from an uploaded sales sheet.

    Expected columns (see the sales template):
    - date: Sale date (ISO text, '1st Jan 2024' style, or spreadsheet serial)
    - productId: Product identifier
    - quantity: Units sold
    - revenue: Optional, defaults to quantity * 50
    """
    loader = SalesDataLoader()
    try:
        contents = file.file.read()
        observations = loader.load_bytes(contents, file.filename or '', product_id=product_id)
    except MalformedInputError as e:
        logger.error(f"Upload error: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Received {len(observations)} observations from {file.filename}")
    return _run_forecast(observations, horizon)


@app.post("/forecast/observations")
def forecast_observations(request: ObservationsRequest):
    """Generate a sales forecast from observations posted as JSON."""
    rows = [obs.model_dump() for obs in request.observations]
    if request.product_id is not None:
        rows = [row for row in rows if row['product_id'] == request.product_id]

    logger.info(f"Received {len(rows)} observations, horizon={request.horizon}")
    return _run_forecast(rows, request.horizon)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
