from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from campusmap.config import settings
from campusmap.core.env import load_env
from campusmap.logging import configure_logging
from campusmap.services.shuttle.builder import build_routes, load_stop_lookup, read_routes_csv

logger = logging.getLogger(__name__)


def build_shuttle_routes_file(csv_path: str, lookup_path: str, output_path: str) -> int:
    rows = read_routes_csv(csv_path)
    stop_lookup = load_stop_lookup(lookup_path)
    routes = build_routes(rows, stop_lookup)

    payload = [route.model_dump(mode="json") for route in routes]
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    logger.info("Generated %s (%s routes)", output, len(routes))
    return len(routes)


def main() -> None:
    load_env()
    configure_logging()

    parser = argparse.ArgumentParser(description="Build shuttle routes JSON from the per-stop CSV.")
    parser.add_argument("--csv", default=settings.SHUTTLE_ROUTES_CSV, help="Shuttle routes CSV")
    parser.add_argument("--lookup", default=settings.SHUTTLE_STOP_LOOKUP, help="Stop coordinate JSON")
    parser.add_argument("--output", default=settings.SHUTTLE_ROUTES_OUTPUT, help="Output JSON path")
    args = parser.parse_args()

    build_shuttle_routes_file(args.csv, args.lookup, args.output)


if __name__ == "__main__":
    main()
