from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.errors import ForecastError
from ..core.logging import get_logger
from ..models.schemas import ForecastPayload
from ..services.forecast_cache import ForecastCache

router = APIRouter()
logger = get_logger(__name__)


def get_forecast_cache(request: Request) -> ForecastCache:
    return request.app.state.forecast_cache


@router.get("/pipeline-forecast", response_model=ForecastPayload)
def pipeline_forecast(cache: ForecastCache = Depends(get_forecast_cache)):
    try:
        return cache.get_forecast()
    except ForecastError as e:
        logger.exception("error fetching pipeline forecast", **e.details)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch pipeline forecast", "message": e.message or "Unknown error"},
        )
