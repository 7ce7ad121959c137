import pytest
from fastapi.testclient import TestClient

from src import api
from src.security import RateLimitConfig, RateLimiter
from tests.helpers import scenario_payload, simulation_payload


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "X-Request-Latency-ms" in response.headers


def test_analytics_bundle(api_client):
    body = api_client.get("/api/analytics").json()

    assert set(body) == {"performanceData", "topRoutes", "kpiData", "networkData", "networkStats"}
    assert len(body["topRoutes"]) == 10


def test_performance_timeframes(api_client):
    assert len(api_client.get("/api/analytics/performance", params={"timeframe": "weekly"}).json()) == 4
    assert len(api_client.get("/api/analytics/performance", params={"timeframe": "yearly"}).json()) == 7
    assert len(api_client.get("/api/analytics/performance").json()) == 7


def test_top_routes_limit(api_client):
    body = api_client.get("/api/analytics/top-routes", params={"limit": 3}).json()

    assert [route["id"] for route in body] == [1, 2, 3]
    assert api_client.get("/api/analytics/top-routes", params={"limit": -1}).status_code == 422


def test_network_views(api_client):
    delays = api_client.get("/api/analytics/network", params={"view": "delays"}).json()
    unknown = api_client.get("/api/analytics/network", params={"view": "bogus"}).json()

    assert delays["routes"][0]["profitability"] == 0.95
    assert unknown["routes"] == []
    assert len(unknown["airports"]) == 7


def test_network_scene(api_client):
    body = api_client.get("/api/analytics/network/scene", params={"width": 800, "height": 400}).json()

    assert body["viewport"] == {"width": 800, "height": 400}
    assert body["routes"][0]["path"].startswith("M 280.00,160.00 Q ")


def test_network_scene_rejects_empty_viewport(api_client):
    response = api_client.get("/api/analytics/network/scene", params={"width": 0})

    assert response.status_code == 400
    assert "positive" in response.json()["detail"]


def test_competitive_endpoints(api_client):
    competitive = api_client.get("/api/analytics/competitive").json()
    scene = api_client.get("/api/analytics/competitive/scene", params={"rotation": 0.5}).json()

    assert len(competitive["routes"]) == 6
    assert scene["rotation"] == 0.5
    assert len(scene["drawOrder"]) == len(scene["airports"]) + len(scene["routes"])


def test_competitive_scene_behind_camera_is_bad_request(api_client):
    response = api_client.get("/api/analytics/competitive/scene", params={"perspective": 2})

    assert response.status_code == 400
    assert "behind the camera" in response.json()["detail"]


@pytest.mark.parametrize("params", [{"rotation": "nan"}, {"perspective": "inf"}, {"rotation": "-inf"}])
def test_competitive_scene_rejects_non_finite_camera(api_client, params):
    response = api_client.get("/api/analytics/competitive/scene", params=params)

    assert response.status_code == 400
    assert response.json() == {"detail": "Rotation and perspective must be finite numbers."}


def test_predictions(api_client):
    bundle = api_client.get("/api/predictions").json()
    forecasts = api_client.get("/api/predictions/route-forecasts").json()

    assert set(bundle) == {"profitabilityModelData", "routeForecasts"}
    assert forecasts[0]["currentProfit"] == "+$14,850"


def test_rerun_forecast_is_persisted(api_client, seeded_store):
    response = api_client.post("/api/predictions/route-forecasts/1/run")

    assert response.status_code == 200
    assert response.json()["forecast30"]["value"] == "+$17,010"
    stored = seeded_store.find("predictions", {"routeId": 1})
    assert len(stored) == 1
    assert stored[0]["confidence"] == 94
    assert stored[0]["currentProfit"] == 14850
    assert stored[0]["forecast30"] == {"value": 17010, "trend": "up"}
    assert stored[0]["factors"][0] == {"name": "Load Factor", "weight": 0.93}


def test_rerun_unknown_forecast(api_client):
    response = api_client.post("/api/predictions/route-forecasts/99/run")

    assert response.status_code == 404
    assert response.json() == {"detail": "Route 99 not found"}


def test_simulation_run(api_client):
    response = api_client.post("/api/simulation/run", json=simulation_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["profitChange"] == 2.0
    assert body["revenue"] == "$1.22M"
    assert body["cost"] == "$900K"
    assert len(body["timelineData"]) == 6


def test_simulation_validation_error(api_client):
    response = api_client.post("/api/simulation/run", json=simulation_payload(loadFactor=150))

    assert response.status_code == 422
    assert isinstance(response.json()["detail"], list)


def test_recommendations(api_client):
    assert len(api_client.get("/api/simulation/recommendations").json()) == 6


def test_report_is_html(api_client):
    response = api_client.get("/api/simulation/report")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Airline Route Optimization Report" in response.text


def test_scenario_crud(api_client):
    created = api_client.post("/api/simulation/scenarios", json=scenario_payload(name="Peak", seasonalPattern="Peak"))

    assert created.status_code == 201
    scenario = created.json()
    assert scenario["name"] == "Peak"
    assert scenario["createdBy"] == "analyst@example.com"
    assert scenario["parameters"]["seasonalPattern"] == "Peak"
    assert scenario["results"]["profitChange"] == 7.0
    assert scenario["results"]["revenue"] == 1_284_000

    listed = api_client.get("/api/simulation/scenarios").json()
    assert [item["id"] for item in listed] == [scenario["id"]]
    assert api_client.get(f"/api/simulation/scenarios/{scenario['id']}").json()["name"] == "Peak"

    deleted = api_client.delete(f"/api/simulation/scenarios/{scenario['id']}")
    assert deleted.json() == {"id": scenario["id"], "deleted": True}
    assert api_client.get(f"/api/simulation/scenarios/{scenario['id']}").status_code == 404
    assert api_client.delete(f"/api/simulation/scenarios/{scenario['id']}").status_code == 404


def test_scenario_with_malformed_id_is_not_found(api_client):
    response = api_client.get("/api/simulation/scenarios/not-an-id")

    assert response.status_code == 404
    assert response.json() == {"detail": "Scenario not found"}


def test_scenario_requires_name(api_client):
    payload = scenario_payload()
    payload["name"] = ""

    assert api_client.post("/api/simulation/scenarios", json=payload).status_code == 422


def test_stored_airports_and_routes(api_client):
    airports = api_client.get("/api/airports").json()
    routes = api_client.get("/api/routes").json()

    assert len(airports) == 15
    assert len(routes) == 10
    assert "id" in routes[0] and "_id" not in routes[0]


def test_route_metrics_round_trip(api_client):
    route_id = api_client.get("/api/routes").json()[0]["id"]
    for day, revenue in ((5, 1000), (15, 1500), (25, 900)):
        response = api_client.post(
            f"/api/routes/{route_id}/metrics",
            json={"date": f"2024-01-{day:02d}T00:00:00Z", "loadFactor": 82.5, "revenue": revenue, "cost": 600},
        )
        assert response.status_code == 201
    assert response.json()["profit"] == 300

    window = api_client.get(
        f"/api/routes/{route_id}/metrics",
        params={"start": "2024-01-10T00:00:00Z", "end": "2024-01-20T00:00:00Z"},
    ).json()
    assert [metric["revenue"] for metric in window] == [1500]
    assert len(api_client.get(f"/api/routes/{route_id}/metrics").json()) == 3


def test_route_metrics_unknown_route(api_client):
    response = api_client.get("/api/routes/not-an-id/metrics")

    assert response.status_code == 404
    assert response.json() == {"detail": "Route not found"}


def test_metric_validation(api_client):
    route_id = api_client.get("/api/routes").json()[0]["id"]
    response = api_client.post(
        f"/api/routes/{route_id}/metrics",
        json={"date": "2024-01-05", "loadFactor": 120, "revenue": 1, "cost": 1},
    )

    assert response.status_code == 422


def test_unexpected_failure_returns_static_message(api_client, monkeypatch):
    def boom(data_store):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(api, "analytics_overview", boom)

    response = api_client.get("/api/analytics")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch analytics data"}


def test_rate_limit(monkeypatch):
    monkeypatch.setattr(api, "rate_limiter", RateLimiter(RateLimitConfig(requests_per_minute=1)))
    client = TestClient(api.app)

    assert client.get("/health").status_code == 200
    limited = client.get("/health")
    assert limited.status_code == 429
    assert limited.json() == {"detail": "Too many requests"}
