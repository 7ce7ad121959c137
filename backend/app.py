import logging
import time

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

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
from src.settings import Settings
from src.simulation import SimulationParameters

settings = Settings.from_env()
cors_origins = (
    settings.cors_origins
    if settings.cors_origins == ["*"]
    else list(dict.fromkeys([*settings.cors_origins, *settings.cors_origin_regexes]))
)

setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": cors_origins}}, supports_credentials=True)

data_store = DataStore().load_data()
store_provider = DocumentStoreProvider(settings, data_store)
rate_limiter = RateLimiter.from_settings(settings)


@app.before_request
def before_request():
    client = request.remote_addr or "unknown"
    if not rate_limiter.is_allowed(client):
        return jsonify({"detail": "Too many requests"}), 429
    g.start_time = time.perf_counter()


@app.after_request
def log_request(response):
    start = g.get("start_time")
    latency_ms = 0.0
    if start is not None:
        latency_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-Latency-ms"] = f"{latency_ms:.2f}"

    logger.info(
        "request",
        extra={
            "request_path": request.path,
            "method": request.method,
            "status_code": response.status_code,
            "latency_ms": round(latency_ms, 2),
            "client": request.remote_addr,
        },
    )
    return response


def _run(error_message, func, *args, status_code=200):
    try:
        result = func(*args)
    except AnalysisError as exc:
        return jsonify({"detail": str(exc)}), exc.status_code
    except Exception:
        logger.exception(error_message)
        return jsonify({"error": error_message}), 500
    return jsonify(result), status_code


def _validation_error(exc: ValidationError):
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), 422


def _json_body():
    payload = request.get_json(force=True, silent=True)
    return payload if isinstance(payload, dict) else {}


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _float_arg(name, default):
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _bad_query(name, message="Input should be a valid number"):
    return jsonify({"detail": [{"loc": ["query", name], "msg": message}]}), 422


@app.get("/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/analytics")
def analytics():
    return _run("Failed to fetch analytics data", analytics_overview, data_store)


@app.get("/api/analytics/performance")
def performance():
    return _run("Failed to fetch performance data", performance_series, data_store, request.args.get("timeframe"))


@app.get("/api/analytics/top-routes")
def ranked_routes():
    try:
        limit = _int_arg("limit", 10)
    except ValueError:
        return _bad_query("limit")
    if not 0 <= limit <= 100:
        return _bad_query("limit", "Input should be between 0 and 100")
    return _run("Failed to fetch top routes", top_routes, data_store, limit)


@app.get("/api/analytics/network")
def network():
    return _run("Failed to fetch network data", network_view, data_store, request.args.get("view"))


@app.get("/api/analytics/network/scene")
def network_map_scene():
    try:
        width = _int_arg("width", 800)
        height = _int_arg("height", 400)
    except ValueError:
        return _bad_query("width/height")
    return _run(
        "Failed to build network scene", network_scene, data_store, request.args.get("view"), width, height
    )


@app.get("/api/analytics/competitive")
def competitive():
    return _run("Failed to fetch competitive data", competitive_view, data_store)


@app.get("/api/analytics/competitive/scene")
def competitive_map_scene():
    try:
        rotation = _float_arg("rotation", 0.0)
        perspective = _float_arg("perspective", 20.0)
        width = _int_arg("width", 800)
        height = _int_arg("height", 600)
    except ValueError:
        return _bad_query("rotation/perspective/width/height")
    if perspective <= 0:
        return _bad_query("perspective", "Input should be greater than 0")
    return _run(
        "Failed to build competitive scene",
        competitive_scene,
        data_store,
        rotation,
        perspective,
        width,
        height,
    )


@app.get("/api/predictions")
def predictions():
    return _run("Failed to fetch predictions data", predictions_overview, data_store)


@app.get("/api/predictions/route-forecasts")
def forecasts():
    return _run("Failed to fetch route forecasts", route_forecasts, data_store)


@app.post("/api/predictions/route-forecasts/<int:route_id>/run")
def run_forecast(route_id):
    return _run("Failed to run prediction", lambda: rerun_forecast(data_store, store_provider.get(), route_id))


@app.get("/api/simulation/recommendations")
def simulation_recommendations():
    return _run("Failed to fetch recommendations", recommendations, data_store)


@app.post("/api/simulation/run")
def simulation_run():
    payload = _json_body()
    try:
        params = SimulationParameters(**payload)
    except ValidationError as exc:
        return _validation_error(exc)
    return _run("Failed to run simulation", simulate, params)


@app.get("/api/simulation/report")
def simulation_report():
    try:
        html = report_html(data_store)
    except Exception:
        logger.exception("Failed to generate report")
        return jsonify({"error": "Failed to generate report"}), 500
    return Response(html, mimetype="text/html")


@app.get("/api/simulation/scenarios")
def scenarios():
    return _run("Failed to fetch scenarios", lambda: list_scenarios(store_provider.get()))


@app.post("/api/simulation/scenarios")
def create_scenario():
    payload = _json_body()
    try:
        request_model = ScenarioRequest(**payload)
    except ValidationError as exc:
        return _validation_error(exc)
    return _run("Failed to save scenario", lambda: save_scenario(store_provider.get(), request_model), status_code=201)


@app.get("/api/simulation/scenarios/<scenario_id>")
def scenario(scenario_id):
    return _run("Failed to fetch scenario", lambda: get_scenario(store_provider.get(), scenario_id))


@app.delete("/api/simulation/scenarios/<scenario_id>")
def remove_scenario(scenario_id):
    return _run("Failed to delete scenario", lambda: delete_scenario(store_provider.get(), scenario_id))


@app.get("/api/airports")
def airports():
    return _run("Failed to fetch airports", lambda: list_airports(store_provider.get()))


@app.get("/api/routes")
def routes():
    return _run("Failed to fetch routes", lambda: list_routes(store_provider.get()))


@app.get("/api/routes/<route_id>/metrics")
def metrics(route_id):
    try:
        query = MetricRangeQuery(start=request.args.get("start"), end=request.args.get("end"))
    except ValidationError as exc:
        return _validation_error(exc)
    return _run("Failed to fetch performance metrics", lambda: route_metrics(store_provider.get(), route_id, query))


@app.post("/api/routes/<route_id>/metrics")
def create_metric(route_id):
    payload = _json_body()
    try:
        request_model = PerformanceMetricRequest(**payload)
    except ValidationError as exc:
        return _validation_error(exc)
    return _run(
        "Failed to record performance metric",
        lambda: record_metric(store_provider.get(), route_id, request_model),
        status_code=201,
    )


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port)
