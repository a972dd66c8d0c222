from roamy.models.facts import DestinationFacts
from roamy.models.itinerary import TravelItinerary


def reconcile(itinerary: TravelItinerary, facts: DestinationFacts) -> TravelItinerary:
    """Overwrite weather, currency and emergency contacts with live destination facts.

    Returns a new itinerary; every other field passes through unchanged.
    """
    info = itinerary.additional_info.model_copy(
        update={
            "weather_forecast": facts.weather.forecast,
            "local_currency": facts.currency.model_copy(),
            "emergency": facts.emergency.model_copy(),
        }
    )
    return itinerary.model_copy(update={"additional_info": info, "degraded": False})


def mark_degraded(itinerary: TravelItinerary) -> TravelItinerary:
    """Tag an itinerary whose destination facts are model-authored."""
    return itinerary.model_copy(update={"degraded": True})
