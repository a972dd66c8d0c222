"""
Unit tests for roamy/pipeline/validator.py
"""
import json

import pytest

from roamy.integrations.exceptions import ExtractionFailed, MalformedItinerary
from roamy.models.itinerary import TravelItinerary
from roamy.pipeline.validator import REQUIRED_OVERVIEW_FIELDS, parse_document, validate_itinerary


class TestParseDocument:
    def test_parses_object(self):
        assert parse_document('{"a": 1}') == {"a": 1}

    def test_invalid_json_is_extraction_failure(self):
        with pytest.raises(ExtractionFailed):
            parse_document("{not json")


class TestValidateItinerary:
    def test_valid_document_builds_model(self, itinerary_doc):
        itin = validate_itinerary(itinerary_doc)
        assert isinstance(itin, TravelItinerary)
        assert itin.trip_overview.destination == "Paris"
        assert len(itin.itinerary) == 4
        assert itin.itinerary[0].morning[0].title == "Louvre visit"
        assert itin.degraded is False

    def test_not_an_object(self):
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(["Paris"])
        assert exc.value.field == "document"

    def test_missing_trip_overview(self, itinerary_doc):
        del itinerary_doc["trip_overview"]
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "trip_overview"

    def test_empty_itinerary_array(self, itinerary_doc):
        itinerary_doc["itinerary"] = []
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "itinerary"

    def test_itinerary_not_a_list(self, itinerary_doc):
        itinerary_doc["itinerary"] = {"day": 1}
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "itinerary"

    def test_missing_additional_info(self, itinerary_doc):
        del itinerary_doc["additional_info"]
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "additional_info"

    @pytest.mark.parametrize("field", REQUIRED_OVERVIEW_FIELDS)
    def test_missing_overview_field_is_named(self, itinerary_doc, field):
        del itinerary_doc["trip_overview"][field]
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == f"trip_overview.{field}"

    def test_blank_overview_field_rejected(self, itinerary_doc):
        itinerary_doc["trip_overview"]["dates"] = "   "
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "trip_overview.dates"

    def test_checks_run_in_order(self, itinerary_doc):
        # Both itinerary and an overview field are bad; itinerary is checked first.
        itinerary_doc["itinerary"] = []
        del itinerary_doc["trip_overview"]["destination"]
        with pytest.raises(MalformedItinerary) as exc:
            validate_itinerary(itinerary_doc)
        assert exc.value.field == "itinerary"

    def test_numeric_overview_value_is_accepted(self, itinerary_doc):
        itinerary_doc["trip_overview"]["duration"] = 4
        itin = validate_itinerary(itinerary_doc)
        assert itin.trip_overview.duration == "4"

    def test_day_content_is_best_effort(self, itinerary_doc):
        day = itinerary_doc["itinerary"][0]
        day["day"] = "Day 1"
        day["highlights"] = "Eiffel Tower"
        day["evening"] = {"title": "Jazz club", "mood": "cozy"}
        del day["meals"]
        day["morning"][0]["cost"] = 25
        itin = validate_itinerary(itinerary_doc)
        first = itin.itinerary[0]
        assert first.day == 1
        assert first.highlights == ["Eiffel Tower"]
        assert first.evening[0].title == "Jazz club"
        assert first.meals == []
        assert first.morning[0].cost == "25"

    def test_string_activities_pass_through(self, itinerary_doc):
        itinerary_doc["itinerary"][0]["morning"] = ["Breakfast at Cafe de Flore", "Louvre"]
        itin = validate_itinerary(itinerary_doc)
        assert [a.title for a in itin.itinerary[0].morning] == ["Breakfast at Cafe de Flore", "Louvre"]

    def test_scalar_slot_pass_through(self, itinerary_doc):
        itinerary_doc["itinerary"][1]["morning"] = 42
        itinerary_doc["itinerary"][1]["meals"] = "Picnic by the Seine"
        day = validate_itinerary(itinerary_doc).itinerary[1]
        assert day.morning[0].title == "42"
        assert day.meals[0].restaurant_name == "Picnic by the Seine"

    def test_structured_cost_kept_as_text(self, itinerary_doc):
        itinerary_doc["itinerary"][0]["total_estimated_cost"] = {"min": 100, "max": 150}
        itin = validate_itinerary(itinerary_doc)
        assert json.loads(itin.itinerary[0].total_estimated_cost) == {"min": 100, "max": 150}

    def test_structured_forecast_does_not_fail(self, itinerary_doc):
        itinerary_doc["additional_info"]["weather_forecast"] = {"summary": "Mild", "high": 22}
        itin = validate_itinerary(itinerary_doc)
        assert json.loads(itin.additional_info.weather_forecast) == {"summary": "Mild", "high": 22}

    def test_odd_meal_and_day_values(self, itinerary_doc):
        meal = itinerary_doc["itinerary"][0]["meals"][0]
        meal["reservation_required"] = {"phone": "+33 1 42 72 28 12"}
        meal["must_try_dishes"] = {"main": "Ratatouille"}
        itinerary_doc["itinerary"][2]["day"] = None
        itin = validate_itinerary(itinerary_doc)
        assert itin.itinerary[0].meals[0].reservation_required is False
        assert itin.itinerary[0].meals[0].must_try_dishes == ['{"main": "Ratatouille"}']
        assert itin.itinerary[2].day == 0

    def test_non_object_day_becomes_description(self, itinerary_doc):
        itinerary_doc["itinerary"].append("Day 5: fly home")
        itin = validate_itinerary(itinerary_doc)
        assert len(itin.itinerary) == 5
        assert itin.itinerary[4].day == 5
        assert itin.itinerary[4].day_description == "Day 5: fly home"

    def test_model_currency_and_emergency_text_kept(self, itinerary_doc):
        info = itinerary_doc["additional_info"]
        info["local_currency"] = "Euro (EUR)"
        info["emergency"] = "Dial 112"
        doc = validate_itinerary(itinerary_doc).to_document()
        assert doc["additional_info"]["local_currency"] == "Euro (EUR)"
        assert doc["additional_info"]["emergency"] == "Dial 112"

    def test_prose_currency_rate_is_kept(self, itinerary_doc):
        itin = validate_itinerary(itinerary_doc)
        assert itin.additional_info.local_currency.code == "FRF"
        assert itin.additional_info.local_currency.exchange_rate == "about 6"

    def test_numeric_string_rate_becomes_number(self, itinerary_doc):
        itinerary_doc["additional_info"]["local_currency"]["exchangeRate"] = "0.92"
        itin = validate_itinerary(itinerary_doc)
        assert itin.additional_info.local_currency.exchange_rate == 0.92

    def test_document_uses_client_key_names(self, itinerary_doc):
        doc = validate_itinerary(itinerary_doc).to_document()
        assert doc["additional_info"]["local_currency"] == {"code": "FRF", "exchangeRate": "about 6"}
        assert doc["trip_overview"]["destination"] == "Paris"
        assert "degraded" not in doc
