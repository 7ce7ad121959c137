"""Repositories for the persisted entities, one per collection."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from src.document_store import DocumentStore, to_object_id
from src.load_data import DataStore, dataframe_to_records

logger = logging.getLogger(__name__)

AIRPORTS = "airports"
ROUTES = "routes"
PERFORMANCE_METRICS = "performance_metrics"
PREDICTIONS = "predictions"
SIMULATION_SCENARIOS = "simulation_scenarios"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stamp(document: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``document`` with ``createdAt``/``updatedAt`` set to now (UTC)."""
    now = utcnow()
    stamped = dict(document)
    stamped.setdefault("createdAt", now)
    stamped["updatedAt"] = now
    return stamped


class _Repository:
    collection = ""

    def __init__(self, store: DocumentStore):
        self.store = store

    def _insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        stamped = stamp(document)
        result = self.store.insert_one(self.collection, stamped)
        stamped["_id"] = result.inserted_id
        return stamped

    def _find_by_object_id(self, document_id: Any) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(document_id)
        if object_id is None:
            return None
        return self.store.find_one(self.collection, {"_id": object_id})


class AirportModel(_Repository):
    collection = AIRPORTS

    def find_all(self) -> List[Dict[str, Any]]:
        return self.store.find(self.collection)

    def find_by_code(self, code: str) -> Optional[Dict[str, Any]]:
        return self.store.find_one(self.collection, {"code": code.upper()})

    def create(self, airport: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(airport)


class RouteModel(_Repository):
    collection = ROUTES

    def find_all(self) -> List[Dict[str, Any]]:
        return self.store.find(self.collection)

    def find_by_id(self, route_id: Any) -> Optional[Dict[str, Any]]:
        return self._find_by_object_id(route_id)

    def find_by_airports(self, origin: str, destination: str) -> Optional[Dict[str, Any]]:
        return self.store.find_one(self.collection, {"from": origin, "to": destination})

    def create(self, route: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(route)

    def update(self, route_id: Any, values: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply ``values`` to a route; ``None`` when the route does not exist."""
        object_id = to_object_id(route_id)
        if object_id is None:
            return None
        result = self.store.update_one(self.collection, {"_id": object_id}, {**values, "updatedAt": utcnow()})
        if not result.matched_count:
            return None
        return self.find_by_id(object_id)


class PerformanceMetricModel(_Repository):
    collection = PERFORMANCE_METRICS

    def find_by_route_id(self, route_id: str) -> List[Dict[str, Any]]:
        return self.store.find(self.collection, {"routeId": route_id})

    def find_by_date_range(
        self, route_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"routeId": route_id}
        bounds = {}
        if start is not None:
            bounds["$gte"] = start
        if end is not None:
            bounds["$lte"] = end
        if bounds:
            query["date"] = bounds
        return self.store.find(self.collection, query)

    def create(self, metric: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(metric)


class PredictionModel(_Repository):
    collection = PREDICTIONS

    def find_by_route_id(self, route_id: Any) -> List[Dict[str, Any]]:
        return self.store.find(self.collection, {"routeId": route_id})

    def create(self, prediction: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(prediction)


class SimulationScenarioModel(_Repository):
    collection = SIMULATION_SCENARIOS

    def find_all(self) -> List[Dict[str, Any]]:
        return self.store.find(self.collection)

    def find_by_id(self, scenario_id: Any) -> Optional[Dict[str, Any]]:
        return self._find_by_object_id(scenario_id)

    def create(self, scenario: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(scenario)

    def delete(self, scenario_id: Any) -> bool:
        object_id = to_object_id(scenario_id)
        if object_id is None:
            return False
        return self.store.delete_one(self.collection, {"_id": object_id}).deleted_count > 0


def _airport_document(airport: Dict[str, Any]) -> Dict[str, Any]:
    position = airport["Globe Position"] or airport["Network Position"]
    return {
        "code": airport["IATA"],
        "name": airport["Name"],
        "city": airport["City"],
        "country": airport["Country"],
        "latitude": airport["Latitude"],
        "longitude": airport["Longitude"],
        "position": list(position) if position is not None else None,
        "traffic": airport["Traffic"],
    }


def _route_profiles(data_store: DataStore) -> Dict[tuple, tuple]:
    """(origin, destination) -> (profitability, volume); network view wins over the competitive map."""
    profiles = {
        (row["Source airport"], row["Destination airport"]): (row["Profitability"], row["Volume"])
        for row in dataframe_to_records(data_store.competitive_routes)
    }
    network = data_store.network_routes
    profitability = network[network["View"] == "profitability"]
    for row in dataframe_to_records(profitability):
        profiles[(row["Source airport"], row["Destination airport"])] = (row["Metric"], row["Volume"])
    return profiles


def seed_reference_data(store: DocumentStore, data_store: DataStore) -> Dict[str, int]:
    """
    Populate empty ``airports`` and ``routes`` collections from the catalog.

    Collections that already hold documents are left untouched, so seeding
    on every start is safe. Returns the number of documents inserted per
    collection.
    """
    inserted = {AIRPORTS: 0, ROUTES: 0}

    if not store.count(AIRPORTS):
        airports = [_airport_document(airport) for airport in data_store.airport_lookup().values()]
        inserted[AIRPORTS] = len(store.insert_many(AIRPORTS, [stamp(doc) for doc in airports]).inserted_ids)

    if not store.count(ROUTES):
        processed = data_store.process_routes(data_store.top_routes)
        profiles = _route_profiles(data_store)
        routes = []
        for row in dataframe_to_records(processed):
            profitability, volume = profiles.get((row["Source airport"], row["Destination airport"]), (None, None))
            routes.append(
                {
                    "from": row["Source airport"],
                    "to": row["Destination airport"],
                    "fromCity": row["Source City"],
                    "toCity": row["Destination City"],
                    "distance": round(row["Distance (km)"], 1) if row["Distance (km)"] is not None else None,
                    "profitability": profitability,
                    "volume": volume,
                    "efficiency": row["Efficiency"],
                }
            )
        inserted[ROUTES] = len(store.insert_many(ROUTES, [stamp(doc) for doc in routes]).inserted_ids)

    for collection, count in inserted.items():
        if count:
            logger.info("seeded %d documents", count, extra={"store": store.backend, "collection": collection})
    return inserted
