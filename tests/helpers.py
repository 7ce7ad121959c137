import pandas as pd

from src.backend_service import DocumentStoreProvider
from src.security import RateLimitConfig, RateLimiter

BASELINE_PARAMETERS = {
    "fuelPrice": 3.0,
    "loadFactor": 80,
    "competitionLevel": "Moderate",
    "seasonalPattern": "Medium",
}


def isolate_app(monkeypatch, module, store, requests_per_minute=10_000):
    """Point an HTTP module at ``store`` and relax its rate limit."""
    monkeypatch.setattr(
        module, "store_provider", DocumentStoreProvider(module.settings, module.data_store, store=store)
    )
    monkeypatch.setattr(module, "rate_limiter", RateLimiter(RateLimitConfig(requests_per_minute=requests_per_minute)))


def simulation_payload(**overrides):
    payload = dict(BASELINE_PARAMETERS)
    payload.update(overrides)
    return payload


def scenario_payload(name="Baseline", **parameter_overrides):
    return {
        "name": name,
        "description": "Current fuel price and load factor",
        "parameters": simulation_payload(**parameter_overrides),
        "createdBy": "analyst@example.com",
    }


def seed_sample_network(datastore):
    """Replace the catalog airports with a small triangle network."""
    datastore.airports = pd.DataFrame(
        [
            {"IATA": "AAA", "Name": "Airport A", "City": "Alpha", "Country": "Testland", "Latitude": 0.0, "Longitude": 0.0},
            {"IATA": "BBB", "Name": "Airport B", "City": "Bravo", "Country": "Testland", "Latitude": 0.0, "Longitude": 10.0},
            {"IATA": "CCC", "Name": "Airport C", "City": "Charlie", "Country": "Testland", "Latitude": 5.0, "Longitude": 15.0},
        ]
    )
    return pd.DataFrame(
        [
            {"Source airport": "AAA", "Destination airport": "BBB", "Volume": 5},
            {"Source airport": "AAA", "Destination airport": "CCC", "Volume": 3},
            {"Source airport": "BBB", "Destination airport": "CCC", "Volume": 2},
            {"Source airport": "AAA", "Destination airport": "ZZZ", "Volume": 1},
        ]
    )
