"""
FastAPI application for the workshop trend calculator.

Provides REST API endpoints for:
- Importing pasted advisor stats blocks
- Listing and deleting advisor histories
- Editing live forecast inputs
- Retrieving close/keep-open recommendations
"""

from typing import List, Dict, Any, Optional, Union
import logging
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..config import Config
from ..parsing import BlockParseError
from ..records import AdvisorManager, JsonFileStorage

logger = logging.getLogger(__name__)


# Pydantic models for API
class ImportRequest(BaseModel):
    text: str


class ImportResponse(BaseModel):
    key: str
    code: str
    location: str
    is_new: bool
    workshop_count: int
    message: str


class ForecastInputUpdate(BaseModel):
    # Raw form values; blank or unparseable become 0
    current_feds: Optional[Union[float, str]] = None
    current_sps: Optional[Union[float, str]] = None
    target: Optional[Union[float, str]] = None


class ForecastInputResponse(BaseModel):
    current_feds: float
    current_sps: float
    target: float


class RecommendationResponse(BaseModel):
    key: str
    code: str
    location: str
    workshop_count: int
    show_rate: float
    avg_walkins: float
    inputs: ForecastInputResponse
    total_reg: float
    expected_attendance: float
    close_at: int
    should_close: bool
    has_data: bool
    verdict: Optional[str]
    result: str


class HealthResponse(BaseModel):
    status: str
    version: str
    advisors_loaded: int


# Initialize FastAPI app
app = FastAPI(
    title="Workshop Trend API",
    description="API for workshop attendance forecasting and registration close decisions",
    version="0.1.0"
)

# Single in-process store; handlers never await mid-mutation, so the event
# loop serializes every read and write.
advisor_manager: Optional[AdvisorManager] = None


def get_manager() -> AdvisorManager:
    global advisor_manager
    if advisor_manager is None:
        advisor_manager = AdvisorManager(
            storage=JsonFileStorage(Config.STORE_PATH),
            default_target=Config.default_target()
        )
        advisor_manager.load()
    return advisor_manager


def _not_found(key: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown advisor: {key}")


@app.get("/", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version="0.1.0",
        advisors_loaded=len(get_manager().advisors)
    )


@app.post("/advisors/import", response_model=ImportResponse)
async def import_advisor_block(request: ImportRequest):
    """
    Import a stats block pasted from the spreadsheet.

    Workshops merge into the advisor's history by date.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail={"kind": "NoData", "message": "Nothing to paste."})

    try:
        result = get_manager().import_block(request.text)
    except BlockParseError as e:
        logger.warning(f"Import rejected: {e.kind}")
        raise HTTPException(status_code=400, detail=e.to_dict())

    return ImportResponse(**result.to_dict())


@app.get("/advisors")
async def list_advisors():
    """
    Get stored advisors with workshop counts.
    """
    return get_manager().get_advisor_info()


@app.get("/advisors/{key:path}/history")
async def get_advisor_history(key: str) -> Dict[str, Any]:
    """
    Get an advisor's workshop history, newest first, with the backtest
    and the recency weight each workshop carries today.
    """
    manager = get_manager()
    try:
        history = manager.get_history(key)
        engine = manager.get_engine(key)
        info = engine.evaluate_model()
        weights = engine.to_dataframe()
    except KeyError:
        raise _not_found(key)

    return {
        "key": key,
        "workshops": history.to_dict("records"),
        "backtest": info,
        "recency_weights": weights.to_dict("records")
    }


@app.delete("/advisors/{key:path}")
async def delete_advisor(key: str):
    """
    Delete all history and forecast inputs for an advisor.
    """
    try:
        get_manager().delete_advisor(key)
    except KeyError:
        raise _not_found(key)
    return {"status": "success", "message": f"Deleted {key}"}


@app.put("/forecasts/{key:path}", response_model=RecommendationResponse)
async def update_forecast_input(key: str, update: ForecastInputUpdate):
    """
    Update live registrations/target and return the new recommendation.
    """
    manager = get_manager()
    values = {k: v for k, v in update.model_dump().items() if v is not None}
    try:
        manager.update_forecast_input(key, **values)
        return RecommendationResponse(**manager.recommend(key).to_dict())
    except KeyError:
        raise _not_found(key)


@app.get("/forecasts", response_model=List[RecommendationResponse])
async def list_recommendations():
    """
    Get close/keep-open recommendations for every advisor.
    """
    return [RecommendationResponse(**r.to_dict()) for r in get_manager().recommendations()]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=Config.API_HOST, port=Config.api_port())
