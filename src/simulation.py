"""What-if profitability simulation, optimisation recommendations and the HTML report."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict, Field

from data.recommendations import MODEL_ACCURACY_PCT, PROJECTED_IMPROVEMENT_PCT
from src.load_data import DataStore

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

BASE_REVENUE = 1_200_000
BASE_COST = 900_000
BASELINE_LOAD_FACTOR = 80
BASELINE_FUEL_PRICE = 3
HIGH_FUEL_PRICE = 3.5

COMPETITION_ADJUSTMENTS = {"Low": 5, "Moderate": 0, "High": -5, "Extreme": -10}
SEASONAL_ADJUSTMENTS = {"Low": -3, "Medium": 2, "Peak": 7}

TIMELINE_MONTHS = ["Month 1", "Month 2", "Month 3", "Month 4", "Month 5", "Month 6"]
TIMELINE_BASELINE = [100, 98, 102, 100, 105, 103]

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


class SimulationParameters(BaseModel):
    """Inputs of a what-if run. Unrecognised competition or season labels have no effect."""

    model_config = ConfigDict(populate_by_name=True)

    fuel_price: float = Field(..., alias="fuelPrice", ge=0, le=20, description="Jet fuel price in USD per gallon.")
    load_factor: float = Field(..., alias="loadFactor", ge=0, le=100, description="Seat occupancy in percent.")
    competition_level: str = Field("Moderate", alias="competitionLevel", max_length=32)
    seasonal_pattern: str = Field("Medium", alias="seasonalPattern", max_length=32)


def js_round(value: float) -> int:
    """Round half towards positive infinity."""
    return math.floor(value + 0.5)


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point formatting with half-up rounding on the exact binary value."""
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Shortest plain rendering: ``80.0 -> '80'``, ``82.5 -> '82.5'``."""
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


@dataclass
class SimulationOutcome:
    parameters: SimulationParameters
    profit_change: float
    revenue: int
    cost: int
    margin: float
    timeline: List[Dict[str, Any]] = field(default_factory=list)
    insights: List[Dict[str, str]] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Client-facing result with money rendered as ``$1.22M`` / ``$900K``."""
        return {
            "profitChange": self.profit_change,
            "revenue": f"${to_fixed(self.revenue / 1_000_000, 2)}M",
            "cost": f"${to_fixed(self.cost / 1000, 0)}K",
            "margin": self.margin,
            "timelineData": self.timeline,
            "insights": self.insights,
        }

    def to_document(self) -> Dict[str, Any]:
        return {
            "profitChange": self.profit_change,
            "revenue": self.revenue,
            "cost": self.cost,
            "margin": self.margin,
            "timelineData": self.timeline,
            "insights": self.insights,
        }


def get_recommendations(data_store: DataStore) -> List[Dict[str, Any]]:
    return [dict(item) for item in data_store.recommendations]


def _profit_change(params: SimulationParameters) -> float:
    change = (params.load_factor - BASELINE_LOAD_FACTOR) * 0.8
    change -= (params.fuel_price - BASELINE_FUEL_PRICE) * 5
    change += COMPETITION_ADJUSTMENTS.get(params.competition_level, 0)
    change += SEASONAL_ADJUSTMENTS.get(params.seasonal_pattern, 0)
    return change


def _insights(params: SimulationParameters, profit_change: float) -> List[Dict[str, str]]:
    insights = []
    load_factor = format_number(params.load_factor)
    if params.load_factor > BASELINE_LOAD_FACTOR:
        insights.append(
            {
                "type": "positive",
                "title": f"Increasing load factor to {load_factor}% would improve profitability "
                f"by {to_fixed(profit_change, 1)}%",
                "description": "Primary driver of improved performance",
            }
        )
    else:
        insights.append(
            {
                "type": "warning",
                "title": f"Load factor of {load_factor}% is below optimal level",
                "description": "Consider marketing initiatives to boost occupancy",
            }
        )

    fuel_price = to_fixed(params.fuel_price, 2)
    if params.fuel_price > HIGH_FUEL_PRICE:
        insights.append(
            {
                "type": "warning",
                "title": f"Fuel price increase beyond ${fuel_price}/gal significantly impacts margins",
                "description": "Consider fuel hedging strategies",
            }
        )
    else:
        insights.append(
            {
                "type": "info",
                "title": f"Current fuel price of ${fuel_price}/gal has manageable impact on costs",
                "description": "Monitor for potential future increases",
            }
        )

    insights.append(
        {
            "type": "info",
            "title": f"{params.seasonal_pattern} seasonal demand pattern impacts overall fleet utilization",
            "description": "Consider adjusting flight frequency based on seasonal patterns",
        }
    )
    return insights


def run_simulation(params: SimulationParameters) -> SimulationOutcome:
    """
    Recompute route profitability for a what-if scenario.

    The profit delta is linear in load factor and fuel price, shifted by
    fixed amounts for the competition level and seasonal pattern. Revenue
    scales with the delta; cost scales with fuel price alone. The result is
    a pure function of the four inputs.
    """
    profit_change = _profit_change(params)

    revenue = js_round(BASE_REVENUE * (1 + profit_change / 100))
    cost = js_round(BASE_COST * (1 + (params.fuel_price - BASELINE_FUEL_PRICE) * 0.05))
    margin = js_round((revenue - cost) * 100 / revenue * 10) / 10 if revenue else 0.0

    growth = profit_change / 100 * 2 if profit_change > 0 else profit_change / 100
    timeline = [
        {
            "name": month,
            "baseline": baseline,
            "simulated": js_round(baseline * (1 + growth * (index + 1) / 3)),
        }
        for index, (month, baseline) in enumerate(zip(TIMELINE_MONTHS, TIMELINE_BASELINE))
    ]

    return SimulationOutcome(
        parameters=params,
        profit_change=js_round(profit_change * 10) / 10,
        revenue=revenue,
        cost=cost,
        margin=margin,
        timeline=timeline,
        insights=_insights(params, profit_change),
    )


def _route_label(origin: str, destination: str) -> str:
    return f"{origin} → {destination}"


def generate_report(data_store: DataStore, generated_at: Optional[datetime] = None) -> str:
    """Render the route optimisation report as a standalone HTML document."""
    generated_at = generated_at or datetime.now()
    hour = generated_at.hour % 12 or 12
    meridiem = "AM" if generated_at.hour < 12 else "PM"

    routes = [
        {
            "label": _route_label(origin, destination),
            "efficiency": f"{efficiency:.1f}%",
            "profit": f"{'-' if profit < 0 else '+'}${abs(profit):,}/month",
            "load_factor": f"{load_factor:.1f}%",
            "action": action,
        }
        for origin, destination, efficiency, profit, load_factor, action in data_store.report_routes
    ]
    kpis = [
        {"metric": metric, "current": current, "target": target, "potential": potential}
        for metric, current, target, potential in data_store.report_kpis
    ]

    template = _environment.get_template("report.html")
    return template.render(
        generated_date=f"{generated_at.month}/{generated_at.day}/{generated_at.year}",
        generated_time=f"{hour}:{generated_at:%M:%S} {meridiem}",
        year=generated_at.year,
        kpis=kpis,
        routes=routes,
        recommendations=get_recommendations(data_store)[:3],
        improvement=PROJECTED_IMPROVEMENT_PCT,
        accuracy=MODEL_ACCURACY_PCT,
    )
