import copy
import json
from datetime import date

import pytest

from roamy.config import Settings
from roamy.models.facts import DestinationFacts, EmergencyContacts, LocalCurrency, WeatherSummary
from roamy.models.trip_request import TripRequest


def _activity(title):
    return {
        "time": "09:00 AM",
        "title": title,
        "description": f"{title} with a local guide",
        "location": "Le Marais",
        "cost": "$25 per person",
        "duration": "2 hours",
        "special_features": ["Small group"],
        "tips": "Go early",
    }


def _day(n):
    return {
        "day": n,
        "day_title": f"Day {n} in Paris",
        "day_description": "Museums, cafes and the river",
        "highlights": ["Louvre", "Seine walk"],
        "total_estimated_cost": "$150-200",
        "morning": [_activity("Louvre visit"), _activity("Tuileries stroll")],
        "afternoon": [_activity("Orsay museum")],
        "evening": [_activity("Seine cruise")],
        "meals": [
            {
                "time": "12:30 PM",
                "restaurant_name": "Chez Janou",
                "cuisine_type": "Provencal",
                "location": "2 Rue Roger Verlomme",
                "cost_range": "$20-30 per person",
                "must_try_dishes": ["Ratatouille"],
                "reservation_required": True,
            }
        ],
    }


ITINERARY_DOC = {
    "trip_overview": {
        "destination": "Paris",
        "dates": "June 1, 2025 - June 5, 2025",
        "duration": "4 days",
        "budget_level": "moderate",
        "accommodation": "hotel",
        "travelers": "couple",
        "dietary_plan": "none",
    },
    "itinerary": [_day(n) for n in range(1, 5)],
    "additional_info": {
        "weather_forecast": "Always sunny, 40°C",
        "packing_tips": ["Comfortable shoes"],
        "local_currency": {"code": "FRF", "exchangeRate": "about 6"},
        "transportation": ["Metro"],
        "emergency": {"police": "000", "ambulance": "000"},
        "local_phrases": ["Bonjour", "Merci"],
    },
}


@pytest.fixture
def itinerary_doc():
    return copy.deepcopy(ITINERARY_DOC)


@pytest.fixture
def itinerary_json(itinerary_doc):
    return json.dumps(itinerary_doc)


@pytest.fixture
def trip_request():
    return TripRequest(
        destination="Paris",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 5),
        budget="moderate",
        accommodation="hotel",
        travelers="couple",
        dietary_plan="none",
    )


@pytest.fixture
def facts():
    return DestinationFacts(
        destination="Paris",
        country_code="FR",
        weather=WeatherSummary(forecast="Light rain, 14°C (low 12°C / high 16°C)", condition="light rain"),
        currency=LocalCurrency(code="EUR", exchange_rate=0.92),
        emergency=EmergencyContacts(police="17", ambulance="15"),
    )


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="sk-test",
        openweather_api_key="ow-test",
        exchangerate_api_key="fx-test",
        generation_timeout=2.0,
        facts_timeout=2.0,
    )
