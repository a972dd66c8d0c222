import json
import logging
from typing import Any

from roamy.integrations.exceptions import ExtractionFailed, MalformedItinerary
from roamy.models.itinerary import TravelItinerary, as_text

logger = logging.getLogger(__name__)

REQUIRED_OVERVIEW_FIELDS = (
    "destination",
    "dates",
    "duration",
    "budget_level",
    "accommodation",
    "travelers",
    "dietary_plan",
)


def parse_document(json_text: str) -> Any:
    try:
        return json.loads(json_text)
    except ValueError as e:
        raise ExtractionFailed(f"Extracted text is not valid JSON: {e}", raw_text=json_text) from e


def _is_blank(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return False
    if isinstance(value, str):
        return value.strip() == ""
    return True


def validate_itinerary(document: Any) -> TravelItinerary:
    """
    Check the minimal itinerary shape and build the typed model.

    Checks run in order and stop at the first violation:
    trip_overview, itinerary (non-empty list), additional_info, then each
    required trip_overview field. Day content is best effort and is not
    deep-checked.
    """
    if not isinstance(document, dict):
        raise MalformedItinerary("document", "Itinerary document is not a JSON object")

    overview = document.get("trip_overview")
    if not isinstance(overview, dict):
        raise MalformedItinerary("trip_overview")

    days = document.get("itinerary")
    if not isinstance(days, list) or not days:
        raise MalformedItinerary("itinerary", "Missing or empty itinerary array")

    if not isinstance(document.get("additional_info"), dict):
        raise MalformedItinerary("additional_info")

    for name in REQUIRED_OVERVIEW_FIELDS:
        if _is_blank(overview.get(name)):
            raise MalformedItinerary(
                f"trip_overview.{name}",
                f"Missing required field in trip_overview: {name}",
            )

    payload = {
        "trip_overview": {name: str(overview[name]).strip() for name in REQUIRED_OVERVIEW_FIELDS},
        "itinerary": [_day_entry(n, day) for n, day in enumerate(days, start=1)],
        "additional_info": document["additional_info"],
    }
    # Day and info content is coerced field by field and never rejected.
    return TravelItinerary.model_validate(payload)


def _day_entry(number: int, day: Any) -> dict:
    if isinstance(day, dict):
        return day
    logger.warning("Itinerary day %d is not an object; keeping it as a description", number)
    return {"day": number, "day_description": as_text(day)}
