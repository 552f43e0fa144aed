import argparse
import logging
import sys
from uuid import UUID

import uvicorn

from src.adapters.clock import SystemClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteProjectRepo, SQLiteVisitRepo, SQLiteVisitStatsRepo
from src.app_shell.config import Settings, configure_logging
from src.components.analytics import DashboardInput, DashboardSummary, VisitBucket, run_dashboard
from src.components.ordering import NormalizeInput, run_normalize
from src.ports.repo import RepositoryError
from src.rules.loader import load_rules
from src.rules.models import Rules

logger = logging.getLogger("cli")


def get_rules(settings: Settings) -> Rules:
    try:
        return load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Cannot load rules: %s", e)
        sys.exit(1)


def handle_migrate(settings: Settings, args: argparse.Namespace) -> None:
    migrator = SQLiteMigrator(settings.db_path, settings.migrations_dir)
    applied = migrator.run_migrations()
    if applied:
        print(f"Applied {len(applied)} migration(s): {', '.join(applied)}")
    else:
        print("Database is up to date.")


def _print_buckets(title: str, buckets: list[VisitBucket]) -> None:
    print(f"\n{title}")
    if not buckets:
        print("  (none)")
    for bucket in buckets:
        share = f" ({bucket.percentage}%)" if bucket.percentage is not None else ""
        print(f"  {bucket.name}: {bucket.visits}{share}")


def print_summary(summary: DashboardSummary) -> None:
    updated = summary.last_updated.isoformat() if summary.last_updated else "never"
    print(f"Total visits: {summary.total_visits} (last updated {updated})")
    print(
        f"Home: {summary.home.today} today, {summary.home.last_7_days} in 7 days, "
        f"{summary.home.last_30_days} in 30 days"
    )

    print(f"\nDaily ({summary.time_range})")
    for day in summary.daily:
        print(f"  {day.label}: {day.visits}")

    _print_buckets("Projects", list(summary.projects))
    _print_buckets("Devices", summary.devices)
    _print_buckets("Browsers", summary.browsers)
    _print_buckets("Referrers", summary.referrers)
    _print_buckets("Countries", summary.locations.countries)
    _print_buckets("Cities", summary.locations.cities)


def handle_stats(settings: Settings, args: argparse.Namespace) -> None:
    rules = get_rules(settings)
    result = run_dashboard(
        DashboardInput(time_range=args.range),
        visits=SQLiteVisitRepo(settings.db_path),
        stats=SQLiteVisitStatsRepo(settings.db_path),
        clock=SystemClock(rules.ops.timezone),
        rules=rules.analytics,
    )

    if not result.success or result.summary is None:
        for err in result.errors:
            logger.error("%s: %s", err.code, err.message)
        sys.exit(1)

    print_summary(result.summary)


def handle_normalize_order(settings: Settings, args: argparse.Namespace) -> None:
    repo = SQLiteProjectRepo(settings.db_path)
    try:
        projects = repo.list_by_profile(args.profile_id)
    except RepositoryError as e:
        logger.error("Cannot load projects: %s", e)
        sys.exit(1)

    result = run_normalize(NormalizeInput(items=list(projects)), repo=repo)
    for item in result.items:
        print(f"  {item.display_order}: {item.id}")

    if not result.persisted:
        logger.error("Order of %d project(s) could not be saved", len(result.items))
        sys.exit(1)
    print(f"Normalized {len(result.items)} project(s).")


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    logger.info("Serving API on %s:%d (data dir %s)", args.host, args.port, settings.data_dir)
    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)


def main(argv: list[str] | None = None) -> None:
    configure_logging()

    parser = argparse.ArgumentParser(description="Portfolio Showcase CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # stats
    stats_parser = subparsers.add_parser("stats", help="Print the analytics dashboard summary")
    stats_parser.add_argument(
        "--range", default="week", help="Time range for the daily series (week, month, quarter)"
    )

    # normalize-order
    normalize_parser = subparsers.add_parser(
        "normalize-order", help="Renumber a profile's projects 1..n and save"
    )
    normalize_parser.add_argument("profile_id", type=UUID, help="Profile whose projects to renumber")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Restart on code changes")

    args = parser.parse_args(argv)
    settings = Settings()

    if args.command == "migrate":
        handle_migrate(settings, args)
    elif args.command == "stats":
        handle_stats(settings, args)
    elif args.command == "normalize-order":
        handle_normalize_order(settings, args)
    elif args.command == "serve":
        handle_serve(settings, args)


if __name__ == "__main__":
    main()
