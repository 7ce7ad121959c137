import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from src.backend_service import (
    AnalysisError,
    DocumentStoreProvider,
    MetricRangeQuery,
    PerformanceMetricRequest,
    ScenarioRequest,
    analytics_overview,
    competitive_scene,
    competitive_view,
    delete_scenario,
    get_scenario,
    list_airports,
    list_routes,
    list_scenarios,
    network_scene,
    network_view,
    performance_series,
    predictions_overview,
    recommendations,
    record_metric,
    report_html,
    rerun_forecast,
    route_forecasts,
    route_metrics,
    save_scenario,
    simulate,
    top_routes,
)
from src.load_data import DataStore
from src.logging_setup import setup_logging
from src.security import RateLimiter
from src.settings import Settings, combine_regex_patterns
from src.simulation import SimulationParameters

settings = Settings.from_env()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Airline Route Profitability Analyzer",
    description="Route performance analytics, profit forecasts and what-if simulations.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=combine_regex_patterns(settings.cors_origin_regexes),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

data_store = DataStore().load_data()
store_provider = DocumentStoreProvider(settings, data_store)
rate_limiter = RateLimiter.from_settings(settings)


@app.middleware("http")
async def add_timing_and_rate_limit(request: Request, call_next):
    client_host = request.client.host if request.client else "unknown"
    if not rate_limiter.is_allowed(client_host):
        return JSONResponse({"detail": "Too many requests"}, status_code=429)

    start = time.perf_counter()
    response: Response = await call_next(request)
    latency_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-Latency-ms"] = f"{latency_ms:.2f}"

    logger.info(
        "request",
        extra={
            "request_path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "latency_ms": round(latency_ms, 2),
            "client": client_host,
        },
    )
    return response


async def _run(error_message: str, func: Callable[..., Any], *args: Any) -> Any:
    """Run a service call off the event loop and map its failures to HTTP responses."""
    try:
        return await run_in_threadpool(func, *args)
    except AnalysisError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    except Exception:
        logger.exception(error_message)
        return JSONResponse({"error": error_message}, status_code=500)


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/analytics")
async def get_analytics() -> Dict[str, Any]:
    return await _run("Failed to fetch analytics data", analytics_overview, data_store)


@app.get("/api/analytics/performance")
async def get_performance(
    timeframe: Optional[str] = Query(default=None, description="daily, weekly or monthly.")
) -> List[Dict[str, Any]]:
    return await _run("Failed to fetch performance data", performance_series, data_store, timeframe)


@app.get("/api/analytics/top-routes")
async def get_top_routes(limit: int = Query(default=10, ge=0, le=100)) -> List[Dict[str, Any]]:
    return await _run("Failed to fetch top routes", top_routes, data_store, limit)


@app.get("/api/analytics/network")
async def get_network(
    view: Optional[str] = Query(default=None, description="profitability, loadFactor or delays.")
) -> Dict[str, Any]:
    return await _run("Failed to fetch network data", network_view, data_store, view)


@app.get("/api/analytics/network/scene")
async def get_network_scene(
    view: Optional[str] = Query(default=None),
    width: int = Query(default=800),
    height: int = Query(default=400),
) -> Dict[str, Any]:
    return await _run("Failed to build network scene", network_scene, data_store, view, width, height)


@app.get("/api/analytics/competitive")
async def get_competitive() -> Dict[str, Any]:
    return await _run("Failed to fetch competitive data", competitive_view, data_store)


@app.get("/api/analytics/competitive/scene")
async def get_competitive_scene(
    rotation: float = Query(default=0.0, description="Rotation around the vertical axis, in radians."),
    perspective: float = Query(default=20.0, gt=0),
    width: int = Query(default=800),
    height: int = Query(default=600),
) -> Dict[str, Any]:
    return await _run(
        "Failed to build competitive scene", competitive_scene, data_store, rotation, perspective, width, height
    )


@app.get("/api/predictions")
async def get_predictions() -> Dict[str, Any]:
    return await _run("Failed to fetch predictions data", predictions_overview, data_store)


@app.get("/api/predictions/route-forecasts")
async def get_route_forecasts() -> List[Dict[str, Any]]:
    return await _run("Failed to fetch route forecasts", route_forecasts, data_store)


@app.post("/api/predictions/route-forecasts/{route_id}/run")
async def run_route_forecast(route_id: int) -> Dict[str, Any]:
    return await _run(
        "Failed to run prediction", lambda: rerun_forecast(data_store, store_provider.get(), route_id)
    )


@app.get("/api/simulation/recommendations")
async def get_recommendations() -> List[Dict[str, Any]]:
    return await _run("Failed to fetch recommendations", recommendations, data_store)


@app.post("/api/simulation/run")
async def run_simulation(payload: SimulationParameters) -> Dict[str, Any]:
    return await _run("Failed to run simulation", simulate, payload)


@app.get("/api/simulation/report", response_class=HTMLResponse)
async def get_report():
    result = await _run("Failed to generate report", report_html, data_store)
    if isinstance(result, Response):
        return result
    return HTMLResponse(result)


@app.get("/api/simulation/scenarios")
async def get_scenarios() -> List[Dict[str, Any]]:
    return await _run("Failed to fetch scenarios", lambda: list_scenarios(store_provider.get()))


@app.post("/api/simulation/scenarios", status_code=201)
async def create_scenario(payload: ScenarioRequest) -> Dict[str, Any]:
    return await _run("Failed to save scenario", lambda: save_scenario(store_provider.get(), payload))


@app.get("/api/simulation/scenarios/{scenario_id}")
async def get_saved_scenario(scenario_id: str) -> Dict[str, Any]:
    return await _run("Failed to fetch scenario", lambda: get_scenario(store_provider.get(), scenario_id))


@app.delete("/api/simulation/scenarios/{scenario_id}")
async def remove_scenario(scenario_id: str) -> Dict[str, Any]:
    return await _run("Failed to delete scenario", lambda: delete_scenario(store_provider.get(), scenario_id))


@app.get("/api/airports")
async def get_airports() -> List[Dict[str, Any]]:
    return await _run("Failed to fetch airports", lambda: list_airports(store_provider.get()))


@app.get("/api/routes")
async def get_routes() -> List[Dict[str, Any]]:
    return await _run("Failed to fetch routes", lambda: list_routes(store_provider.get()))


@app.get("/api/routes/{route_id}/metrics")
async def get_route_metrics(
    route_id: str,
    start: Optional[datetime] = Query(default=None),
    end: Optional[datetime] = Query(default=None),
) -> List[Dict[str, Any]]:
    query = MetricRangeQuery(start=start, end=end)
    return await _run(
        "Failed to fetch performance metrics", lambda: route_metrics(store_provider.get(), route_id, query)
    )


@app.post("/api/routes/{route_id}/metrics", status_code=201)
async def create_route_metric(route_id: str, payload: PerformanceMetricRequest) -> Dict[str, Any]:
    return await _run(
        "Failed to record performance metric", lambda: record_metric(store_provider.get(), route_id, payload)
    )
