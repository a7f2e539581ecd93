"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import stations, vehicle
from .config import settings
from .logging_utils import configure_logging
from .services.aggregator import StationAggregator, build_default_aggregator
from .services.charging_advisor import ChargingAdvisor
from .services.filter_rank import FilterRankEngine
from .services.record_store import MemoryRecordStore
from .services.station_search import StationSearchService


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    configure_logging("chargefinder-api")
    yield


def create_app(
    store: Optional[MemoryRecordStore] = None,
    aggregator: Optional[StationAggregator] = None,
    engine: Optional[FilterRankEngine] = None,
    advisor: Optional[ChargingAdvisor] = None,
    use_seed_stations: Optional[bool] = None,
) -> FastAPI:
    """Build the application and the components its handlers share."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    store = store or MemoryRecordStore()
    app.state.store = store
    app.state.advisor = advisor or ChargingAdvisor()
    app.state.station_search = StationSearchService(
        aggregator=aggregator or build_default_aggregator(),
        engine=engine or FilterRankEngine(),
        store=store,
        use_seed_stations=settings.uses_seed_stations if use_seed_stations is None else use_seed_stations,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(stations.router, prefix="/api/stations", tags=["Stations"])
    app.include_router(vehicle.router, prefix="/api/vehicle", tags=["Vehicle"])

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "operational",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chargefinder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )
