# roamy/models/itinerary.py
import json
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from roamy.models.facts import EmergencyContacts, LocalCurrency


def as_text(value: Any) -> str:
    """Render any model-authored value as text; structured values become JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [as_text(v) for v in value if v is not None]
    return [as_text(value)]


def as_entries(value: Any, text_key: str) -> List[dict]:
    """Normalize a slot of activities or meals to a list of dicts.

    A single object is wrapped; a bare string or other scalar becomes
    ``{text_key: <text>}``.
    """
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    entries = []
    for item in value:
        if item is None:
            continue
        if isinstance(item, dict):
            entries.append(item)
        else:
            entries.append({text_key: as_text(item)})
    return entries


class _Lenient(BaseModel):
    """Best-effort model content: unknown keys are kept, values are coerced."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Activity(_Lenient):
    time: str = ""
    title: str = ""
    description: str = ""
    location: str = ""
    cost: Optional[str] = None
    duration: str = ""
    special_features: List[str] = []
    tips: Optional[str] = None
    booking_info: Optional[str] = None

    @field_validator("time", "title", "description", "location", "duration", mode="before")
    @classmethod
    def _required_text(cls, value):
        return as_text(value)

    @field_validator("cost", "tips", "booking_info", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return None if value is None else as_text(value)

    @field_validator("special_features", mode="before")
    @classmethod
    def _text_lists(cls, value):
        return as_text_list(value)


class Meal(_Lenient):
    time: str = ""
    restaurant_name: str = ""
    cuisine_type: str = ""
    location: str = ""
    cost_range: str = ""
    must_try_dishes: List[str] = []
    reservation_required: bool = False
    special_features: List[str] = []
    tips: Optional[str] = None

    @field_validator("time", "restaurant_name", "cuisine_type", "location", "cost_range", mode="before")
    @classmethod
    def _required_text(cls, value):
        return as_text(value)

    @field_validator("tips", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return None if value is None else as_text(value)

    @field_validator("must_try_dishes", "special_features", mode="before")
    @classmethod
    def _text_lists(cls, value):
        return as_text_list(value)

    @field_validator("reservation_required", mode="before")
    @classmethod
    def _flag(cls, value):
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "required", "recommended")
        if isinstance(value, (bool, int, float)):
            return bool(value)
        return False


class DayPlan(_Lenient):
    day: int = 0
    day_title: str = ""
    day_description: str = ""
    highlights: List[str] = []
    total_estimated_cost: str = ""
    morning: List[Activity] = []
    afternoon: List[Activity] = []
    evening: List[Activity] = []
    meals: List[Meal] = []

    @field_validator("day", mode="before")
    @classmethod
    def _day_number(cls, value):
        # "Day 3" -> 3
        if isinstance(value, str):
            digits = "".join(ch for ch in value if ch.isdigit())
            return int(digits) if digits else 0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return int(value)
        return 0

    @field_validator("day_title", "day_description", "total_estimated_cost", mode="before")
    @classmethod
    def _required_text(cls, value):
        return as_text(value)

    @field_validator("highlights", mode="before")
    @classmethod
    def _text_lists(cls, value):
        return as_text_list(value)

    @field_validator("morning", "afternoon", "evening", mode="before")
    @classmethod
    def _activities(cls, value):
        return as_entries(value, "title")

    @field_validator("meals", mode="before")
    @classmethod
    def _meals(cls, value):
        return as_entries(value, "restaurant_name")


class TripOverview(BaseModel):
    destination: str
    dates: str
    duration: str
    budget_level: str
    accommodation: str
    travelers: str
    dietary_plan: str


class AdditionalInfo(_Lenient):
    weather_forecast: str = ""
    packing_tips: List[str] = []
    # Structured when reconciled; free text when the model wrote prose.
    local_currency: Union[LocalCurrency, str] = LocalCurrency()
    transportation: List[str] = []
    emergency: Union[EmergencyContacts, str] = EmergencyContacts()
    local_customs: Optional[List[str]] = None
    best_times_to_visit: Optional[List[str]] = None
    money_saving_tips: Optional[List[str]] = None
    cultural_etiquette: Optional[List[str]] = None
    local_phrases: Optional[List[str]] = None
    must_know_facts: Optional[List[str]] = None

    @field_validator("weather_forecast", mode="before")
    @classmethod
    def _forecast_text(cls, value):
        return as_text(value)

    @field_validator("packing_tips", "transportation", mode="before")
    @classmethod
    def _text_lists(cls, value):
        return as_text_list(value)

    @field_validator(
        "local_customs", "best_times_to_visit", "money_saving_tips",
        "cultural_etiquette", "local_phrases", "must_know_facts",
        mode="before",
    )
    @classmethod
    def _optional_lists(cls, value):
        if value is None:
            return None
        return as_text_list(value)

    @field_validator("local_currency", "emergency", mode="before")
    @classmethod
    def _section_or_text(cls, value):
        if isinstance(value, (dict, BaseModel)):
            return value
        if value is None:
            return {}
        return as_text(value)


class TravelItinerary(BaseModel):
    trip_overview: TripOverview
    itinerary: List[DayPlan]
    additional_info: AdditionalInfo
    degraded: bool = False

    def to_document(self) -> dict:
        """Serialize with the key names the web client and PDF export expect."""
        return self.model_dump(by_alias=True, exclude={"degraded"}, exclude_none=True)
