from functools import partial
from typing import Optional

from fastapi import FastAPI

from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .routers import forecast
from .services.data_loader import check_connection, get_engine, load_daily_totals
from .services.forecast_cache import ForecastCache


def build_forecast_cache(settings: Settings) -> ForecastCache:
    loader = partial(
        load_daily_totals,
        engine=get_engine(settings.database_url),
        excluded_statuses=settings.excluded_statuses,
    )
    return ForecastCache(loader, settings)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.environment)

    app = FastAPI(title="Sales Pipeline Forecast API", version="1.0.0")
    app.state.settings = settings
    app.state.forecast_cache = build_forecast_cache(settings)

    app.include_router(forecast.router, prefix="/intelligence", tags=["Forecast"])

    @app.get("/health")
    def health():
        engine = get_engine(app.state.settings.database_url)
        return {"status": "ok", "database": "up" if check_connection(engine) else "down"}

    return app


app = create_app()
