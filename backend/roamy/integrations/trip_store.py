"""MongoDB-backed store for saved trips.

Uses pymongo synchronously and safely no-ops when MONGODB_URI is not
configured, so it won't break local runs or CI.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection

from roamy.config import Settings
from roamy.models.itinerary import TravelItinerary
from roamy.models.trip_request import TripRequest

logger = logging.getLogger(__name__)

TRIPS_COLLECTION = "trips"


class TripStore:
    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        self.settings = settings
        self._client = client

    @property
    def enabled(self) -> bool:
        return self._client is not None or bool(self.settings.mongodb_uri)

    def _collection(self) -> Optional[Collection]:
        if self._client is None:
            if not self.settings.mongodb_uri:
                logger.warning("MONGODB_URI not set; trip storage disabled")
                return None
            self._client = MongoClient(self.settings.mongodb_uri, serverSelectionTimeoutMS=3000)
        return self._client[self.settings.mongodb_db][TRIPS_COLLECTION]

    def save_trip(self, user_id: str, request: TripRequest, itinerary: TravelItinerary) -> Optional[str]:
        """Insert a trip record. Returns the inserted id as str, or None when storage is disabled."""
        col = self._collection()
        if col is None:
            return None
        doc = {
            "user_id": user_id,
            "destination": request.destination,
            "start_date": request.start_date.isoformat(),
            "end_date": request.end_date.isoformat(),
            "budget": request.budget,
            "accommodation": request.accommodation,
            "travelers": request.travelers,
            "degraded": itinerary.degraded,
            "itinerary": itinerary.to_document(),
            "created_at": int(time.time()),
        }
        res = col.insert_one(doc)
        logger.info("Saved trip %s for user %s (%s)", res.inserted_id, user_id, request.destination)
        return str(res.inserted_id)

    def list_trips(self, user_id: str, limit: int = 20) -> List[Dict[str, Any]]:
        col = self._collection()
        if col is None:
            return []
        cursor = col.find({"user_id": user_id}).sort("created_at", DESCENDING).limit(limit)
        trips = []
        for doc in cursor:
            doc["id"] = str(doc.pop("_id"))
            trips.append(doc)
        return trips
