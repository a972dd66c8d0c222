"""
Authoritative destination facts: current weather, local currency with its USD
exchange rate, and emergency phone numbers.

The upstream APIs are called with blocking ``requests`` inside worker threads,
and the whole lookup is bounded by ``settings.facts_timeout``. Any failure is
reported as DestinationFactsUnavailable so the planner can degrade.
"""

import asyncio
import logging
import time
from typing import Dict, Optional, Tuple

import requests

from roamy.config import Settings
from roamy.integrations.emergency_numbers import emergency_for_country
from roamy.integrations.exceptions import DestinationFactsUnavailable
from roamy.models.facts import DestinationFacts, EmergencyContacts, LocalCurrency, WeatherSummary

logger = logging.getLogger(__name__)

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
COUNTRY_URL = "https://restcountries.com/v3.1/alpha/{code}"
EXCHANGE_URL = "https://api.freecurrencyapi.com/v1/latest"

# Per-request HTTP timeout; the overall lookup has its own bound.
_HTTP_TIMEOUT = 5

# Upper bound on cached destinations; the oldest entry is evicted first.
_CACHE_MAX_ENTRIES = 256


class DestinationDataProvider:
    def __init__(self, settings: Settings):
        self.settings = settings
        self._cache: Dict[str, Tuple[float, DestinationFacts]] = {}

    async def get_destination_facts(self, destination: str) -> DestinationFacts:
        key = _cache_key(destination)
        cached = self._cached(key)
        if cached is not None:
            logger.info("Destination facts cache hit for %s", destination)
            return cached

        try:
            facts = await asyncio.wait_for(
                asyncio.to_thread(self._fetch_facts, destination),
                timeout=self.settings.facts_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Destination facts lookup timed out for %s", destination)
            raise DestinationFactsUnavailable(
                f"Destination facts lookup timed out after {self.settings.facts_timeout}s"
            ) from e

        if self.settings.facts_cache_ttl > 0:
            self._store(key, facts)
        logger.info(
            "Fetched destination facts for %s (country=%s, currency=%s)",
            destination, facts.country_code, facts.currency.code,
        )
        return facts

    async def get_exchange_rate(self, currency_code: str) -> float:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._fetch_rate, currency_code.upper()),
                timeout=self.settings.facts_timeout,
            )
        except asyncio.TimeoutError as e:
            raise DestinationFactsUnavailable(f"Exchange rate lookup timed out for {currency_code}") from e

    def _cached(self, key: str) -> Optional[DestinationFacts]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        stored_at, facts = entry
        if time.monotonic() - stored_at > self.settings.facts_cache_ttl:
            self._cache.pop(key, None)
            return None
        return facts

    def _store(self, key: str, facts: DestinationFacts) -> None:
        now = time.monotonic()
        ttl = self.settings.facts_cache_ttl
        for stale in [k for k, (stored_at, _) in self._cache.items() if now - stored_at > ttl]:
            del self._cache[stale]
        self._cache.pop(key, None)
        # Insertion order is age order.
        while len(self._cache) >= _CACHE_MAX_ENTRIES:
            del self._cache[next(iter(self._cache))]
        self._cache[key] = (now, facts)

    def _fetch_facts(self, destination: str) -> DestinationFacts:
        weather, country_code = self._fetch_weather(destination)
        currency_code = self._fetch_currency_code(country_code)
        rate = self._fetch_rate(currency_code)
        police, ambulance, tourist_police = emergency_for_country(country_code)
        return DestinationFacts(
            destination=destination,
            country_code=country_code,
            weather=weather,
            currency=LocalCurrency(code=currency_code, exchange_rate=rate),
            emergency=EmergencyContacts(police=police, ambulance=ambulance, tourist_police=tourist_police),
        )

    def _get_json(self, url: str, params: Optional[dict] = None, what: str = "request"):
        try:
            r = requests.get(url, params=params, timeout=_HTTP_TIMEOUT)
            r.raise_for_status()
            return r.json()
        except requests.RequestException as e:
            logger.warning("%s failed: %s", what, e)
            raise DestinationFactsUnavailable(f"{what} failed: {e}") from e
        except ValueError as e:
            raise DestinationFactsUnavailable(f"{what} returned invalid JSON") from e

    def _fetch_weather(self, destination: str) -> Tuple[WeatherSummary, str]:
        api_key = self.settings.openweather_api_key
        if not api_key:
            raise DestinationFactsUnavailable("OPENWEATHER_API_KEY is not configured")

        data = self._get_json(
            WEATHER_URL,
            params={"q": destination, "units": "metric", "appid": api_key},
            what="Weather lookup",
        )
        try:
            condition = data["weather"][0]["description"]
            main = data["main"]
            country_code = data["sys"]["country"]
        except (KeyError, IndexError, TypeError) as e:
            raise DestinationFactsUnavailable(f"Unexpected weather payload: missing {e}") from e

        temp, low, high = main.get("temp"), main.get("temp_min"), main.get("temp_max")
        return (
            WeatherSummary(
                forecast=format_forecast(condition, temp, low, high),
                condition=condition,
                temperature_c=temp,
                temp_min_c=low,
                temp_max_c=high,
            ),
            country_code,
        )

    def _fetch_currency_code(self, country_code: str) -> str:
        data = self._get_json(
            COUNTRY_URL.format(code=country_code),
            params={"fields": "currencies"},
            what="Country lookup",
        )
        if isinstance(data, list):
            data = data[0] if data else {}
        currencies = (data or {}).get("currencies") or {}
        if not currencies:
            raise DestinationFactsUnavailable(f"No currency listed for country {country_code}")
        return next(iter(currencies))

    def _fetch_rate(self, currency_code: str) -> float:
        if currency_code == "USD":
            return 1.0
        api_key = self.settings.exchangerate_api_key
        if not api_key:
            raise DestinationFactsUnavailable("EXCHANGERATE_API_KEY is not configured")

        data = self._get_json(
            EXCHANGE_URL,
            params={"apikey": api_key, "base_currency": "USD", "currencies": currency_code},
            what="Exchange rate lookup",
        )
        rate = ((data or {}).get("data") or {}).get(currency_code)
        if not isinstance(rate, (int, float)) or isinstance(rate, bool):
            raise DestinationFactsUnavailable(f"Exchange rate not available for {currency_code}")
        return float(rate)


def _cache_key(destination: str) -> str:
    return " ".join((destination or "").lower().split())


def format_forecast(condition: str, temp: Optional[float], low: Optional[float], high: Optional[float]) -> str:
    text = condition[:1].upper() + condition[1:] if condition else "Current conditions unavailable"
    if temp is not None:
        text += f", {round(temp)}°C"
        if low is not None and high is not None:
            text += f" (low {round(low)}°C / high {round(high)}°C)"
    return text
