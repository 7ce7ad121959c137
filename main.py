import argparse
import json
from pathlib import Path

from pydantic import ValidationError

from backend.app import app as flask_app
from src.analytics import DEFAULT_NETWORK_VIEW, get_network_stats, get_performance_data, get_top_routes
from src.backend_service import AnalysisError, DocumentStoreProvider, rerun_forecast
from src.document_store import connect_document_store
from src.load_data import DataStore
from src.models import seed_reference_data
from src.settings import Settings
from src.simulation import SimulationParameters, generate_report, run_simulation

# Expose Flask app for serverless platforms expecting `app`.
app = flask_app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Airline route profitability analytics, forecasts and what-if simulations."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analytics = subparsers.add_parser("analytics", help="Print performance, top routes and network statistics.")
    analytics.add_argument("--timeframe", default="daily", help="daily, weekly or monthly.")
    analytics.add_argument("--limit", type=int, default=10, help="Number of top routes to print.")
    analytics.add_argument("--view", default=DEFAULT_NETWORK_VIEW, help="Network view for the hub statistics.")

    simulate = subparsers.add_parser("simulate", help="Run a what-if profitability simulation.")
    simulate.add_argument("--fuel-price", type=float, default=3.0, help="Jet fuel price in USD per gallon.")
    simulate.add_argument("--load-factor", type=float, default=80.0, help="Seat occupancy in percent.")
    simulate.add_argument(
        "--competition",
        default="Moderate",
        choices=["Low", "Moderate", "High", "Extreme"],
        help="Competitive pressure on the network.",
    )
    simulate.add_argument(
        "--season",
        default="Medium",
        choices=["Low", "Medium", "Peak"],
        help="Seasonal demand pattern.",
    )

    report = subparsers.add_parser("report", help="Write the HTML optimisation report.")
    report.add_argument("--output", default="route-optimization-report.html", help="Destination file.")

    forecast = subparsers.add_parser("forecast", help="Re-run the profit forecast for one route.")
    forecast.add_argument("route_id", type=int, help="Forecast route id.")

    subparsers.add_parser("seed", help="Seed airports and routes into the configured document store.")
    return parser.parse_args(argv)


def print_analytics(data_storage, args):
    print(f"Performance ({args.timeframe}):")
    for point in get_performance_data(data_storage, args.timeframe):
        print(f"  {point['name']:>6}  profitability {point['profitability']:>5}  efficiency {point['efficiency']:>5}")

    print("\nTop routes by efficiency:")
    for route in get_top_routes(data_storage, args.limit):
        distance = f"{route['distance']:,.0f} km" if route["distance"] is not None else "n/a"
        print(f"  {route['from']} -> {route['to']}  {route['efficiency']:.1f}%  ({distance})")

    print(f"\nNetwork ({args.view}):")
    for key, value in get_network_stats(data_storage, args.view).items():
        print(f"{key}: {value}")


def print_simulation(args):
    try:
        params = SimulationParameters(
            fuel_price=args.fuel_price,
            load_factor=args.load_factor,
            competition_level=args.competition,
            seasonal_pattern=args.season,
        )
    except ValidationError as exc:
        problems = "; ".join(f"{'.'.join(map(str, error['loc']))}: {error['msg']}" for error in exc.errors())
        raise SystemExit(f"Invalid simulation parameters: {problems}")
    print(json.dumps(run_simulation(params).to_payload(), indent=2))


def write_report(data_storage, output):
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_report(data_storage), encoding="utf-8")
    print(f"Saved report to {path}")


def main(argv=None):
    args = parse_args(argv)
    data_storage = DataStore().load_data()
    settings = Settings.from_env()

    if args.command == "analytics":
        print_analytics(data_storage, args)
    elif args.command == "simulate":
        print_simulation(args)
    elif args.command == "report":
        write_report(data_storage, args.output)
    elif args.command == "forecast":
        provider = DocumentStoreProvider(settings, data_storage)
        try:
            print(json.dumps(rerun_forecast(data_storage, provider.get(), args.route_id), indent=2))
        except AnalysisError as exc:
            raise SystemExit(str(exc))
        finally:
            provider.close()
    elif args.command == "seed":
        store = connect_document_store(settings)
        try:
            inserted = seed_reference_data(store, data_storage)
        finally:
            store.close()
        for collection, count in inserted.items():
            print(f"{collection}: {count} inserted")


if __name__ == "__main__":
    main()
