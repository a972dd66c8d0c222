"""
Unit tests for roamy/integrations/trip_store.py with a mocked MongoClient.
"""
from unittest.mock import MagicMock

from roamy.config import Settings
from roamy.integrations.trip_store import TRIPS_COLLECTION, TripStore
from roamy.pipeline.validator import validate_itinerary


def _mongo():
    client = MagicMock()
    collection = client.__getitem__.return_value.__getitem__.return_value
    return client, collection


class TestTripStore:
    def test_disabled_without_uri(self, trip_request, itinerary_doc):
        store = TripStore(Settings())
        assert store.enabled is False
        assert store.save_trip("user-1", trip_request, validate_itinerary(itinerary_doc)) is None
        assert store.list_trips("user-1") == []

    def test_save_trip_document(self, trip_request, itinerary_doc):
        client, collection = _mongo()
        collection.insert_one.return_value.inserted_id = "abc123"
        store = TripStore(Settings(mongodb_db="roamy_test"), client=client)

        trip_id = store.save_trip("user-1", trip_request, validate_itinerary(itinerary_doc))

        assert trip_id == "abc123"
        client.__getitem__.assert_called_with("roamy_test")
        client.__getitem__.return_value.__getitem__.assert_called_with(TRIPS_COLLECTION)
        doc = collection.insert_one.call_args.args[0]
        assert doc["user_id"] == "user-1"
        assert doc["destination"] == "Paris"
        assert doc["start_date"] == "2025-06-01"
        assert doc["end_date"] == "2025-06-05"
        assert doc["itinerary"]["trip_overview"]["destination"] == "Paris"
        assert isinstance(doc["created_at"], int)

    def test_list_trips_newest_first(self):
        client, collection = _mongo()
        cursor = collection.find.return_value.sort.return_value.limit.return_value
        cursor.__iter__.return_value = iter([{"_id": "a1", "destination": "Paris"}])
        store = TripStore(Settings(), client=client)

        trips = store.list_trips("user-1", limit=5)

        assert trips == [{"id": "a1", "destination": "Paris"}]
        collection.find.assert_called_once_with({"user_id": "user-1"})
        collection.find.return_value.sort.return_value.limit.assert_called_once_with(5)
