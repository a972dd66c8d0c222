import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from roamy.config import Settings
from roamy.integrations.destination_client import DestinationDataProvider
from roamy.integrations.exceptions import (
    DestinationFactsUnavailable,
    ExtractionFailed,
    GenerationUnavailable,
    InvalidRequest,
    MalformedItinerary,
    PlannerError,
)
from roamy.integrations.openai_client import GenerationClient
from roamy.integrations.trip_store import TripStore
from roamy.models.trip_request import TripRequest
from roamy.pipeline.planner import TripPlanner

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidRequest: 400,
    GenerationUnavailable: 502,
    ExtractionFailed: 502,
    MalformedItinerary: 502,
    DestinationFactsUnavailable: 503,
}


class PlanRequest(TripRequest):
    user_id: Optional[str] = None


class PlanResponse(BaseModel):
    itinerary: dict
    degraded: bool = False
    trip_id: Optional[str] = None


def _status_for(error: PlannerError) -> int:
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def create_app(
    planner: Optional[TripPlanner] = None,
    store: Optional[TripStore] = None,
    settings: Optional[Settings] = None,
    facts_provider: Optional[DestinationDataProvider] = None,
) -> FastAPI:
    """Build the API. Missing collaborators are created from settings at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings
        if planner is None or facts_provider is None or store is None:
            cfg = cfg or Settings.from_env()
            if planner is None or facts_provider is None:
                # Fail loudly before serving anything.
                cfg.require_credentials()
        app.state.facts_provider = facts_provider or DestinationDataProvider(cfg)
        app.state.planner = planner or TripPlanner(GenerationClient(cfg), app.state.facts_provider)
        app.state.store = store or TripStore(cfg)
        logger.info("Roamy planner API ready")
        yield

    app = FastAPI(
        title="Roamy Planner API",
        description="AI travel itinerary generation with live destination facts",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure this properly for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PlannerError)
    async def planner_error_handler(request: Request, exc: PlannerError):
        return JSONResponse(status_code=_status_for(exc), content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        err = InvalidRequest(str(exc))
        payload = err.to_payload()
        fields = sorted({str(e["loc"][-1]) for e in exc.errors() if e.get("loc")})
        if fields:
            payload["fields"] = fields
        return JSONResponse(status_code=400, content=payload)

    @app.get("/")
    def root():
        return {
            "message": "Roamy Planner API",
            "version": "1.0.0",
            "endpoints": {
                "health": "/health",
                "plan": "/plan",
                "exchange_rate": "/exchange-rate",
                "trips": "/trips",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    def health():
        return {"status": "healthy", "service": "Roamy Planner"}

    @app.post("/plan", response_model=PlanResponse)
    async def plan(body: PlanRequest, request: Request):
        """
        Generate a day-by-day itinerary.

        - **destination**: place name
        - **startDate** / **endDate**: ISO dates, end not before start
        - **budget**: budget, moderate, luxury or ultra-luxury
        - **accommodation**, **travelers**, **dietaryPlan**: see the request schema
        - **notes**: optional free-text preferences
        - **user_id**: optional; when set, the trip is saved to the user's history
        """
        trip: TripRequest = body
        try:
            itinerary = await request.app.state.planner.plan_trip(trip)
        except PlannerError as e:
            logger.error("Planning failed for %s [%s]: %s", trip.destination, e.kind, e)
            raise

        trip_id = None
        if body.user_id:
            try:
                trip_id = await asyncio.to_thread(request.app.state.store.save_trip, body.user_id, trip, itinerary)
            except Exception:
                logger.exception("Failed to save trip for user %s", body.user_id)

        return PlanResponse(itinerary=itinerary.to_document(), degraded=itinerary.degraded, trip_id=trip_id)

    @app.get("/exchange-rate")
    async def exchange_rate(request: Request, currency: Optional[str] = Query(default=None)):
        if not currency or not currency.strip():
            return JSONResponse(status_code=400, content={"error": "Currency code is required"})
        code = currency.strip().upper()
        try:
            rate = await request.app.state.facts_provider.get_exchange_rate(code)
        except DestinationFactsUnavailable as e:
            logger.warning("Exchange rate unavailable for %s: %s", code, e)
            return JSONResponse(status_code=404, content={"error": f"Exchange rate not available for {code}"})
        return {"rate": rate}

    @app.get("/trips")
    def trips(request: Request, user_id: str = Query(..., min_length=1), limit: int = Query(20, ge=1, le=100)) -> List[dict]:
        return request.app.state.store.list_trips(user_id, limit=limit)

    return app


app = create_app()
