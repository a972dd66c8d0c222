"""
Itinerary generation pipeline.

    request -> prompt -> model call -> extract JSON -> validate -> reconcile

The destination facts lookup is independent of generation, so it runs as a
separate task while the model call is in flight. A facts failure degrades
the itinerary; every other failure aborts the run with a PlannerError.
Each call is a single attempt.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Optional, get_args

from roamy.config import Settings
from roamy.integrations.destination_client import DestinationDataProvider
from roamy.integrations.exceptions import (
    DestinationFactsUnavailable,
    GenerationUnavailable,
    InvalidRequest,
    PlannerError,
)
from roamy.integrations.openai_client import GenerationClient
from roamy.models.facts import DestinationFacts
from roamy.models.itinerary import TravelItinerary
from roamy.models.trip_request import (
    Accommodation,
    BudgetLevel,
    DietaryPlan,
    TravelerGroup,
    TripRequest,
)
from roamy.pipeline.extractor import extract_json
from roamy.pipeline.prompt_builder import build_prompt
from roamy.pipeline.reconciler import mark_degraded, reconcile
from roamy.pipeline.validator import parse_document, validate_itinerary

logger = logging.getLogger(__name__)

_ENUM_FIELDS = {
    "budget": BudgetLevel,
    "accommodation": Accommodation,
    "travelers": TravelerGroup,
    "dietary_plan": DietaryPlan,
}


def check_request(request: TripRequest) -> None:
    """Lightweight re-check of a request that should already be valid."""
    if not isinstance(request, TripRequest):
        raise InvalidRequest("Expected a TripRequest")

    destination = getattr(request, "destination", None)
    if not isinstance(destination, str) or not destination.strip():
        raise InvalidRequest("Missing or invalid field: destination")

    start, end = getattr(request, "start_date", None), getattr(request, "end_date", None)
    if not isinstance(start, date) or not isinstance(end, date):
        raise InvalidRequest("Missing or invalid field: start_date/end_date")
    if end < start:
        raise InvalidRequest("end_date is before start_date")

    for name, domain in _ENUM_FIELDS.items():
        value = getattr(request, name, None)
        if not isinstance(value, str) or value not in get_args(domain):
            raise InvalidRequest(f"Missing or invalid field: {name}")


class TripPlanner:
    def __init__(self, generator: GenerationClient, facts_provider: DestinationDataProvider):
        self.generator = generator
        self.facts_provider = facts_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "TripPlanner":
        return cls(GenerationClient(settings), DestinationDataProvider(settings))

    async def _fetch_facts(self, destination: str) -> Optional[DestinationFacts]:
        try:
            return await self.facts_provider.get_destination_facts(destination)
        except DestinationFactsUnavailable as e:
            logger.warning("Destination facts unavailable for %s: %s", destination, e)
        except Exception:
            logger.exception("Destination facts lookup crashed for %s", destination)
        return None

    async def _generate(self, prompt: str) -> str:
        try:
            return await self.generator.generate(prompt)
        except PlannerError:
            raise
        except Exception as e:
            logger.exception("Unexpected generation failure")
            raise GenerationUnavailable(f"Unexpected generation failure: {e}") from e

    async def plan_trip(self, request: TripRequest) -> TravelItinerary:
        check_request(request)
        logger.info(
            "Planning trip to %s (%s to %s, %d days)",
            request.destination, request.start_date, request.end_date, request.trip_days,
        )

        facts_task = asyncio.create_task(self._fetch_facts(request.destination))
        try:
            raw_text = await self._generate(build_prompt(request))
            itinerary = validate_itinerary(parse_document(extract_json(raw_text)))
        except BaseException:
            facts_task.cancel()
            raise

        facts = await facts_task
        if facts is None:
            logger.warning("Returning degraded itinerary for %s (model-authored facts)", request.destination)
            return mark_degraded(itinerary)

        itinerary = reconcile(itinerary, facts)
        logger.info("Itinerary ready for %s with %d days", request.destination, len(itinerary.itinerary))
        return itinerary
