import pytest

from src.analytics import (
    build_competitive_scene,
    build_network_scene,
    get_analytics_data,
    get_competitive_data,
    get_kpi_data,
    get_network_data,
    get_network_stats,
    get_performance_data,
    get_top_routes,
)
from src.projection import Viewport


@pytest.mark.parametrize("timeframe, points", [("daily", 7), ("weekly", 4), ("monthly", 6)])
def test_performance_series_lengths(data_store, timeframe, points):
    series = get_performance_data(data_store, timeframe)

    assert len(series) == points
    assert set(series[0]) == {"name", "profitability", "efficiency"}


def test_unknown_timeframe_falls_back_to_daily(data_store):
    assert get_performance_data(data_store, "hourly") == get_performance_data(data_store, "daily")


def test_top_routes_are_ranked_and_enriched(data_store):
    routes = get_top_routes(data_store, limit=3)

    assert [route["id"] for route in routes] == [1, 2, 3]
    first = routes[0]
    assert (first["from"], first["to"]) == ("DEL", "BOM")
    assert (first["fromCity"], first["toCity"]) == ("Delhi", "Mumbai")
    assert first["efficiency"] == 92.8
    assert 1000 < first["distance"] < 1300
    efficiencies = [route["efficiency"] for route in get_top_routes(data_store)]
    assert efficiencies == sorted(efficiencies, reverse=True)


def test_top_routes_limit_bounds(data_store):
    assert len(get_top_routes(data_store)) == 10
    assert get_top_routes(data_store, limit=0) == []
    assert len(get_top_routes(data_store, limit=50)) == 10


def test_network_views_carry_their_own_metrics(data_store):
    profitability = get_network_data(data_store, "profitability")
    delays = get_network_data(data_store, "delays")

    assert len(profitability["airports"]) == 7
    assert profitability["routes"][0] == {"from": "DEL", "to": "BOM", "profitability": 0.92, "volume": 9}
    assert delays["routes"][0]["profitability"] == 0.95


def test_unknown_network_view_has_airports_but_no_routes(data_store):
    network = get_network_data(data_store, "bogus")

    assert network["routes"] == []
    assert len(network["airports"]) == 7


def test_network_stats_report_hubs(data_store):
    stats = get_network_stats(data_store, "profitability")

    assert stats["airports"] == 7
    assert stats["routes"] == 6
    assert stats["connected"] is True
    assert stats["topHubs"][0] == {"code": "DEL", "degree": 3}


def test_kpi_cards(data_store):
    kpis = get_kpi_data(data_store)

    assert len(kpis) == 4
    assert kpis[0]["title"] == "Avg. Load Factor"
    assert kpis[1]["change"] == {"value": 0.8, "isPositive": False}
    assert kpis[0]["icon"] == "load-factor"


def test_competitive_data_lists_competitors(data_store):
    competitive = get_competitive_data(data_store)

    codes = {airport["code"] for airport in competitive["airports"]}
    assert "COK" not in codes
    assert {"JFK", "LHR", "DXB"} <= codes
    del_bom = competitive["routes"][0]
    assert [c["name"] for c in del_bom["competitors"]] == ["AirIndia", "IndiGo", "Vistara"]
    assert del_bom["competitors"][0] == {"name": "AirIndia", "marketShare": 0.45, "efficiency": 0.85}


def test_analytics_bundle_keys(data_store):
    bundle = get_analytics_data(data_store)

    assert set(bundle) == {"performanceData", "topRoutes", "kpiData", "networkData", "networkStats"}
    assert len(bundle["performanceData"]) == 7


def test_network_scene_projects_and_styles_routes(data_store):
    scene = build_network_scene(data_store, "profitability", Viewport(800, 400))

    airports = {airport["code"]: airport for airport in scene["airports"]}
    assert (airports["DEL"]["x"], airports["DEL"]["y"]) == (280.0, 160.0)
    assert (airports["BOM"]["x"], airports["BOM"]["y"]) == (360.0, 280.0)

    routes = {(route["from"], route["to"]): route for route in scene["routes"]}
    del_bom = routes[("DEL", "BOM")]
    assert del_bom["path"] == "M 280.00,160.00 Q 296.00,236.00 360.00,280.00"
    assert del_bom["color"] == "#4CAF50"
    assert del_bom["strokeWidth"] == 4.5
    assert routes[("DEL", "CCU")]["color"] == "#E53935"
    assert routes[("BOM", "BLR")]["color"] == "#FFC107"


def test_competitive_scene_is_depth_ordered(data_store):
    scene = build_competitive_scene(data_store, rotation=0.0, perspective=20.0, viewport=Viewport(800, 600))

    depths = [airport["z"] for airport in scene["airports"]]
    assert depths == sorted(depths, reverse=True)
    assert scene["drawOrder"][0] == {"type": "airport", "key": "DXB"}
    assert len(scene["drawOrder"]) == len(scene["airports"]) + len(scene["routes"])
    assert [f"{r['from']}-{r['to']}" for r in scene["routes"]] == [
        "BOM-DXB",
        "DEL-SIN",
        "DEL-BOM",
        "BLR-HYD",
        "DEL-LHR",
        "JFK-LHR",
    ]


def test_competitive_scene_styles_routes(data_store):
    scene = build_competitive_scene(data_store)

    route = next(r for r in scene["routes"] if (r["from"], r["to"]) == ("JFK", "LHR"))
    assert route["color"] == "#00ff66"
    assert route["strokeWidth"] == 6.0
    assert route["path"].startswith("M ")
    assert route["path"].count("L ") == 40
    assert [marker["name"] for marker in route["markers"]] == ["BritishAirways", "Delta", "UnitedAir", "AmericanAir"]
    assert route["opacity"] == round((20 / 16 + 20 / 18) / 2 * 0.7 + 0.3, 3)


def test_competitive_scene_rejects_points_behind_camera(data_store):
    with pytest.raises(ValueError):
        build_competitive_scene(data_store, perspective=2.0)
