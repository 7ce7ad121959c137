"""Reference catalog loaded into DataFrames for the analytics services."""

import logging
from typing import Any, Dict, List, Optional

import networkx as nx
import pandas as pd
from geopy.distance import geodesic

from data.airports import AIRPORTS
from data.forecasts import (
    FEATURE_IMPORTANCE,
    MODEL_METRICS,
    MODEL_PERFORMANCE,
    PERFORMANCE_SERIES,
    ROUTE_FORECASTS,
)
from data.recommendations import KPIS, RECOMMENDATIONS, REPORT_KPIS, REPORT_ROUTES
from data.routes import COMPETITIVE_ROUTES, NETWORK_ROUTES, TOP_ROUTES

logger = logging.getLogger(__name__)

AIRPORT_COLUMNS = [
    "IATA",
    "Name",
    "City",
    "Country",
    "Latitude",
    "Longitude",
    "Network Position",
    "Globe Position",
    "Traffic",
]


def compute_distance_km(lat1, lon1, lat2, lon2) -> Optional[float]:
    if any(pd.isna(value) for value in (lat1, lon1, lat2, lon2)):
        return None
    return geodesic((lat1, lon1), (lat2, lon2)).km


class DataStore:
    def __init__(self):
        self.airports = None
        self.top_routes = None
        self.network_routes = None
        self.competitive_routes = None
        self.competitors = None
        self.performance = None
        self.forecasts = None
        self.model_performance = []
        self.model_metrics = []
        self.feature_importance = []
        self.kpis = []
        self.recommendations = []
        self.report_kpis = []
        self.report_routes = []

    def load_data(self):
        """Build the reference DataFrames from the bundled catalog."""
        self.airports = pd.DataFrame(
            [
                {
                    "IATA": airport["code"],
                    "Name": airport["name"],
                    "City": airport["city"],
                    "Country": airport["country"],
                    "Latitude": airport["latitude"],
                    "Longitude": airport["longitude"],
                    "Network Position": airport["network_position"],
                    "Globe Position": airport["globe_position"],
                    "Traffic": airport["traffic"],
                }
                for airport in AIRPORTS
            ],
            columns=AIRPORT_COLUMNS,
        )
        self.airports["Traffic"] = self.airports["Traffic"].astype("Int64")

        self.top_routes = pd.DataFrame(
            TOP_ROUTES,
            columns=["Route ID", "Source airport", "Destination airport", "Efficiency"],
        )

        self.network_routes = pd.DataFrame(
            [
                (view, source, destination, metric, volume)
                for view, rows in NETWORK_ROUTES.items()
                for source, destination, metric, volume in rows
            ],
            columns=["View", "Source airport", "Destination airport", "Metric", "Volume"],
        )

        self.competitive_routes = pd.DataFrame(
            [
                {
                    "Source airport": route["from"],
                    "Destination airport": route["to"],
                    "Profitability": route["profitability"],
                    "Volume": route["volume"],
                }
                for route in COMPETITIVE_ROUTES
            ]
        )
        self.competitors = pd.DataFrame(
            [
                (route["from"], route["to"], name, share, efficiency)
                for route in COMPETITIVE_ROUTES
                for name, share, efficiency in route["competitors"]
            ],
            columns=["Source airport", "Destination airport", "Competitor", "Market Share", "Efficiency"],
        )

        self.performance = pd.DataFrame(
            [
                (timeframe, label, profitability, efficiency)
                for timeframe, points in PERFORMANCE_SERIES.items()
                for label, profitability, efficiency in points
            ],
            columns=["Timeframe", "Label", "Profitability", "Efficiency"],
        )

        self.forecasts = pd.DataFrame(ROUTE_FORECASTS).rename(
            columns={"from": "Source airport", "to": "Destination airport"}
        )

        self.model_performance = list(MODEL_PERFORMANCE)
        self.model_metrics = list(MODEL_METRICS)
        self.feature_importance = list(FEATURE_IMPORTANCE)
        self.kpis = list(KPIS)
        self.recommendations = [dict(item) for item in RECOMMENDATIONS]
        self.report_kpis = list(REPORT_KPIS)
        self.report_routes = list(REPORT_ROUTES)
        logger.info(
            "reference catalog loaded: %d airports, %d ranked routes",
            len(self.airports),
            len(self.top_routes),
        )
        return self

    def airport_lookup(self) -> Dict[str, Dict[str, Any]]:
        """Airport rows keyed by IATA code."""
        if self.airports is None or self.airports.empty:
            return {}
        records = self.airports.astype(object).where(pd.notna(self.airports), None)
        return {row["IATA"]: row for row in records.to_dict(orient="records")}

    def process_routes(self, routes_df: pd.DataFrame) -> pd.DataFrame:
        """Enrich a route table with airport cities, countries and geodesic distances."""
        columns = ["IATA", "City", "Country", "Latitude", "Longitude"]
        source_airports = self.airports[columns].rename(
            columns={
                "IATA": "Source airport",
                "City": "Source City",
                "Country": "Source Country",
                "Latitude": "Source Latitude",
                "Longitude": "Source Longitude",
            }
        )
        dest_airports = self.airports[columns].rename(
            columns={
                "IATA": "Destination airport",
                "City": "Destination City",
                "Country": "Destination Country",
                "Latitude": "Destination Latitude",
                "Longitude": "Destination Longitude",
            }
        )

        enriched_df = routes_df.merge(source_airports, on="Source airport", how="left")
        enriched_df = enriched_df.merge(dest_airports, on="Destination airport", how="left")

        if enriched_df.empty:
            enriched_df["Distance (km)"] = pd.Series(dtype=float)
            return enriched_df

        enriched_df["Distance (km)"] = enriched_df.apply(
            lambda row: compute_distance_km(
                row["Source Latitude"],
                row["Source Longitude"],
                row["Destination Latitude"],
                row["Destination Longitude"],
            ),
            axis=1,
        )
        return enriched_df

    def build_network(self, routes_df: pd.DataFrame) -> nx.DiGraph:
        """Build a directed route graph; edges carry volume and distance when present."""
        G = nx.DiGraph()
        for _, row in routes_df.iterrows():
            attributes = {}
            if "Volume" in routes_df.columns:
                attributes["volume"] = row["Volume"]
            if "Distance (km)" in routes_df.columns and pd.notna(row["Distance (km)"]):
                attributes["distance"] = row["Distance (km)"]
            G.add_edge(row["Source airport"], row["Destination airport"], **attributes)
        return G

    def analyze_network(self, G: nx.DiGraph, top_n: int = 5) -> Dict[str, Any]:
        """Basic graph statistics for a route network."""
        num_airports = G.number_of_nodes()
        num_routes = G.number_of_edges()
        top_hubs: List[Dict[str, Any]] = [
            {"code": code, "degree": int(degree)}
            for code, degree in sorted(G.degree, key=lambda item: (-item[1], item[0]))[:top_n]
        ]
        distances = [data["distance"] for _, _, data in G.edges(data=True) if "distance" in data]
        return {
            "airports": num_airports,
            "routes": num_routes,
            "density": round(nx.density(G), 3) if num_airports > 1 else 0.0,
            "connected": bool(num_airports) and nx.is_weakly_connected(G),
            "topHubs": top_hubs,
            "averageDistanceKm": round(sum(distances) / len(distances), 1) if distances else None,
        }


def dataframe_to_records(df: Optional[pd.DataFrame]) -> List[Dict[str, Any]]:
    """Convert a DataFrame to JSON-friendly records."""
    if df is None or df.empty:
        return []
    normalized = df.astype(object).where(pd.notna(df), None)
    return normalized.to_dict(orient="records")
