"""Route performance analytics: series, rankings, network views and map scenes."""

from typing import Any, Dict, List

import pandas as pd

from data.forecasts import DEFAULT_TIMEFRAME
from src.load_data import DataStore, dataframe_to_records
from src.projection import (
    COMPETITIVE_PALETTE,
    NETWORK_PALETTE,
    Viewport,
    competitor_markers,
    depth_sort,
    elevated_arc_path,
    node_opacity,
    node_radius,
    project_flat,
    project_perspective,
    quadratic_arc_path,
    route_color,
    stroke_width,
)

NETWORK_VIEWS = ("profitability", "loadFactor", "delays")
DEFAULT_NETWORK_VIEW = "profitability"
DEFAULT_TOP_ROUTES = 10


def _round(value: Any, digits: int = 1):
    if value is None or pd.isna(value):
        return None
    return round(float(value), digits)


def get_performance_data(data_store: DataStore, timeframe: str = DEFAULT_TIMEFRAME) -> List[Dict[str, Any]]:
    """Profitability/efficiency series for a timeframe; unknown timeframes fall back to daily."""
    performance = data_store.performance
    if timeframe not in set(performance["Timeframe"]):
        timeframe = DEFAULT_TIMEFRAME
    subset = performance.loc[performance["Timeframe"].eq(timeframe)]
    return [
        {"name": row["Label"], "profitability": row["Profitability"], "efficiency": row["Efficiency"]}
        for row in dataframe_to_records(subset)
    ]


def get_top_routes(data_store: DataStore, limit: int = DEFAULT_TOP_ROUTES) -> List[Dict[str, Any]]:
    """Highest-efficiency routes, at most ``limit`` of them."""
    limit = max(0, int(limit))
    ranked = (
        data_store.process_routes(data_store.top_routes)
        .sort_values("Efficiency", ascending=False, kind="stable")
        .head(limit)
    )
    return [
        {
            "id": row["Route ID"],
            "from": row["Source airport"],
            "to": row["Destination airport"],
            "fromCity": row["Source City"],
            "toCity": row["Destination City"],
            "efficiency": row["Efficiency"],
            "distance": _round(row["Distance (km)"]),
        }
        for row in dataframe_to_records(ranked)
    ]


def _map_airports(data_store: DataStore, position_column: str) -> List[Dict[str, Any]]:
    airports = data_store.airports
    placed = airports.loc[airports[position_column].notna()]
    return [
        {
            "code": row["IATA"],
            "name": row["Name"],
            "country": row["Country"],
            "traffic": row["Traffic"],
            "position": [float(axis) for axis in row[position_column]],
        }
        for row in dataframe_to_records(placed)
    ]


def _view_routes(data_store: DataStore, view: str) -> pd.DataFrame:
    routes = data_store.network_routes
    return routes.loc[routes["View"].eq(view)]


def get_network_data(data_store: DataStore, view: str = DEFAULT_NETWORK_VIEW) -> Dict[str, Any]:
    """Airports and per-view route metrics. Unknown views have no routes."""
    airports = [
        {"code": airport["code"], "name": airport["name"], "position": airport["position"]}
        for airport in _map_airports(data_store, "Network Position")
    ]
    routes = [
        {
            "from": row["Source airport"],
            "to": row["Destination airport"],
            "profitability": row["Metric"],
            "volume": row["Volume"],
        }
        for row in dataframe_to_records(_view_routes(data_store, view))
    ]
    return {"airports": airports, "routes": routes}


def get_network_stats(data_store: DataStore, view: str = DEFAULT_NETWORK_VIEW) -> Dict[str, Any]:
    processed = data_store.process_routes(_view_routes(data_store, view))
    graph = data_store.build_network(processed)
    return data_store.analyze_network(graph)


def get_kpi_data(data_store: DataStore) -> List[Dict[str, Any]]:
    return [
        {
            "title": title,
            "value": value,
            "change": {"value": change, "isPositive": is_positive},
            "progressValue": progress,
            "icon": icon,
        }
        for title, value, change, is_positive, progress, icon in data_store.kpis
    ]


def get_competitive_data(data_store: DataStore) -> Dict[str, Any]:
    """Airports with 3D positions and routes annotated with competitor shares."""
    competitors = data_store.competitors
    routes = []
    for row in dataframe_to_records(data_store.competitive_routes):
        mask = competitors["Source airport"].eq(row["Source airport"]) & competitors[
            "Destination airport"
        ].eq(row["Destination airport"])
        routes.append(
            {
                "from": row["Source airport"],
                "to": row["Destination airport"],
                "profitability": row["Profitability"],
                "volume": row["Volume"],
                "competitors": [
                    {
                        "name": competitor["Competitor"],
                        "marketShare": competitor["Market Share"],
                        "efficiency": competitor["Efficiency"],
                    }
                    for competitor in dataframe_to_records(competitors.loc[mask])
                ],
            }
        )
    return {"airports": _map_airports(data_store, "Globe Position"), "routes": routes}


def get_analytics_data(data_store: DataStore) -> Dict[str, Any]:
    return {
        "performanceData": get_performance_data(data_store),
        "topRoutes": get_top_routes(data_store),
        "kpiData": get_kpi_data(data_store),
        "networkData": get_network_data(data_store),
        "networkStats": get_network_stats(data_store),
    }


def build_network_scene(
    data_store: DataStore, view: str = DEFAULT_NETWORK_VIEW, viewport: Viewport = Viewport(800, 400)
) -> Dict[str, Any]:
    """Flat network map: projected airports and curved, styled route paths."""
    network = get_network_data(data_store, view)
    airports = network["airports"]
    screen = project_flat([airport["position"] for airport in airports], viewport)
    placed = {
        airport["code"]: {"code": airport["code"], "name": airport["name"], "x": round(float(x), 2), "y": round(float(y), 2)}
        for airport, (x, y) in zip(airports, screen)
    }

    routes = []
    for route in network["routes"]:
        origin, destination = placed.get(route["from"]), placed.get(route["to"])
        if origin is None or destination is None:
            continue
        routes.append(
            {
                "from": route["from"],
                "to": route["to"],
                "profitability": route["profitability"],
                "volume": route["volume"],
                "path": quadratic_arc_path((origin["x"], origin["y"]), (destination["x"], destination["y"])),
                "color": route_color(route["profitability"], NETWORK_PALETTE),
                "strokeWidth": stroke_width(route["volume"]),
            }
        )

    return {
        "view": view,
        "viewport": {"width": viewport.width, "height": viewport.height},
        "airports": list(placed.values()),
        "routes": routes,
    }


def build_competitive_scene(
    data_store: DataStore,
    rotation: float = 0.0,
    perspective: float = 20.0,
    viewport: Viewport = Viewport(800, 600),
) -> Dict[str, Any]:
    """
    Rotating 3D competitive map.

    Airports and routes are projected, styled and returned farthest-first so
    drawing them in list order paints nearer elements on top. Routes are
    placed at the mean depth of their endpoints. ``drawOrder`` interleaves
    both kinds in that same order.
    """
    competitive = get_competitive_data(data_store)
    airports = competitive["airports"]
    projected = project_perspective(
        [airport["position"] for airport in airports], rotation, perspective, viewport
    )

    projections = {}
    items = []
    for airport, (x, y, z, scale) in zip(airports, projected):
        projections[airport["code"]] = (x, y, z, scale)
        items.append(
            {
                "type": "airport",
                "key": airport["code"],
                "z": float(z),
                "data": {
                    "code": airport["code"],
                    "name": airport["name"],
                    "country": airport["country"],
                    "traffic": airport["traffic"],
                    "x": round(float(x), 2),
                    "y": round(float(y), 2),
                    "z": round(float(z), 4),
                    "scale": round(float(scale), 4),
                    "radius": round(node_radius(airport["traffic"], scale), 2),
                    "opacity": round(node_opacity(scale), 3),
                },
            }
        )

    for route in competitive["routes"]:
        origin, destination = projections.get(route["from"]), projections.get(route["to"])
        if origin is None or destination is None:
            continue
        start, end = (origin[0], origin[1]), (destination[0], destination[1])
        items.append(
            {
                "type": "route",
                "key": f"{route['from']}-{route['to']}",
                "z": float((origin[2] + destination[2]) / 2),
                "data": {
                    "from": route["from"],
                    "to": route["to"],
                    "profitability": route["profitability"],
                    "volume": route["volume"],
                    "path": elevated_arc_path(start, end, curvature=0.3, segments=40),
                    "color": route_color(route["profitability"], COMPETITIVE_PALETTE),
                    "strokeWidth": stroke_width(route["volume"], factor=0.6, maximum=6),
                    "opacity": round(float((origin[3] + destination[3]) / 2 * 0.7 + 0.3), 3),
                    "competitors": route["competitors"],
                    "markers": competitor_markers(start, end, route["competitors"]),
                },
            }
        )

    ordered = depth_sort(items)
    return {
        "rotation": rotation,
        "perspective": perspective,
        "viewport": {"width": viewport.width, "height": viewport.height},
        "airports": [item["data"] for item in ordered if item["type"] == "airport"],
        "routes": [item["data"] for item in ordered if item["type"] == "route"],
        "drawOrder": [{"type": item["type"], "key": item["key"]} for item in ordered],
    }
