"""Application entrypoint — start the API server or run one-off commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

import uvicorn

from satisfaction_api.api.validation import InvalidQueryError, parse_date
from satisfaction_api.config import get_settings
from satisfaction_api.logger import setup_logging


async def _print_segments(raw_date: str) -> None:
    from satisfaction_api.satisfaction import SatisfactionConfig, build_daily_segments
    from satisfaction_api.storage.database import dispose_engine
    from satisfaction_api.storage.repository import EmotionRepository

    day = parse_date(raw_date)
    try:
        rows = await EmotionRepository().get_day(day)
    finally:
        await dispose_engine()
    daily = build_daily_segments(day.isoformat(), rows, SatisfactionConfig.from_settings())
    print(json.dumps(daily.model_dump(mode="json"), indent=2))


async def _export(raw_date: str, output: str, fmt: str) -> None:
    from satisfaction_api.research.export import export_minutes
    from satisfaction_api.satisfaction import SatisfactionConfig
    from satisfaction_api.storage.database import dispose_engine

    day = parse_date(raw_date)
    try:
        path = await export_minutes(day, output, fmt=fmt, config=SatisfactionConfig.from_settings())
    finally:
        await dispose_engine()
    print(f"Wrote {path}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="satisfaction-api",
        description="Customer satisfaction derived from emotion-detection records.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── serve ─────────────────────────────────────────────────
    serve_parser = sub.add_parser("serve", help="Start the API server.")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)
    serve_parser.add_argument("--reload", action="store_true")

    # ── init-db ───────────────────────────────────────────────
    sub.add_parser("init-db", help="Create the emotion table (local development).")

    # ── segments ──────────────────────────────────────────────
    seg_parser = sub.add_parser("segments", help="Print one day's segmented satisfaction as JSON.")
    seg_parser.add_argument("date", help="YYYY-MM-DD")

    # ── export ────────────────────────────────────────────────
    export_parser = sub.add_parser("export", help="Write one day's minute series to a file.")
    export_parser.add_argument("date", help="YYYY-MM-DD")
    export_parser.add_argument("output")
    export_parser.add_argument("--format", choices=["csv", "json"], default="csv")

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.command == "serve":
        uvicorn.run(
            "satisfaction_api.api.server:app",
            host=args.host or settings.api_host,
            port=args.port or settings.api_port,
            reload=args.reload,
        )
    elif args.command == "init-db":
        from satisfaction_api.storage.database import init_db

        asyncio.run(init_db())
        print("Database tables created.")
    elif args.command == "segments":
        try:
            asyncio.run(_print_segments(args.date))
        except InvalidQueryError as exc:
            parser.error(str(exc))
    elif args.command == "export":
        try:
            asyncio.run(_export(args.date, args.output, args.format))
        except InvalidQueryError as exc:
            parser.error(str(exc))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
