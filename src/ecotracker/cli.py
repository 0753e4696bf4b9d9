"""Command-line footprint report for ecotracker."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import sys

from pydantic import ValidationError

from .calculator import calculate_carbon_footprint
from .logging_pipeline import (
    BoundedQueueHandler,
    configure_structured_logging,
    shutdown_listeners,
)
from .models import CarbonData
from .report import build_report, render_text
from .schemas import CarbonDataSchema
from .settings import get_settings
from .state import load_carbon_data
from .storage import JsonFileStore

LOGGER = logging.getLogger("ecotracker")


def _read_stdin() -> str | None:
    """Read the JSON payload from stdin if one is piped in."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _parse_carbon_data(payload: str) -> CarbonData:
    """Parse a camelCase CarbonData JSON document."""

    try:
        return CarbonDataSchema.model_validate_json(payload).to_domain()
    except ValidationError as exc:
        raise ValueError(f"Invalid carbon data: {exc.error_count()} error(s)\n{exc}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecotracker",
        description="Estimate a carbon footprint and print the report.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--input",
        "-i",
        help="Path to a carbon data JSON file. If omitted, reads from stdin.",
    )
    source.add_argument(
        "--from-store",
        action="store_true",
        help="Use the inputs saved in the key-value store.",
    )
    parser.add_argument(
        "--store",
        help="Store file path (defaults to ECOTRACKER_STORE_PATH).",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of tips to include (defaults to ECOTRACKER_TOP_TIPS).",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print the plain-text report instead of JSON.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit structured JSON logs on stderr.",
    )
    return parser


def _load_input(args: argparse.Namespace, store_path: str) -> CarbonData:
    if args.from_store:
        return load_carbon_data(JsonFileStore(store_path))
    if args.input:
        with open(args.input, encoding="utf-8") as handle:
            return _parse_carbon_data(handle.read())
    stdin_payload = _read_stdin()
    if stdin_payload:
        return _parse_carbon_data(stdin_payload)
    raise ValueError("No input provided. Use --input, --from-store or pipe JSON via stdin.")


def main(argv: list[str] | None = None) -> int:
    """Print the footprint report for the given inputs."""
    parser = _build_parser()

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    settings = get_settings()
    listeners: list[logging.handlers.QueueListener] = []
    if args.log_json:
        listeners.append(
            configure_structured_logging(LOGGER, level=settings.log_level_value)
        )

    try:
        data = _load_input(args, args.store or str(settings.store_path))
        results = calculate_carbon_footprint(data)
        top_n = args.top if args.top is not None else settings.top_tips
        report = build_report(results, top_n=top_n)
        LOGGER.info("Generated report", extra={"annual_kg": results.annual})

        if args.text:
            print(render_text(report))
        else:
            print(report.model_dump_json(indent=2))
        return 0

    except (OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        shutdown_listeners(listeners)
        if listeners:
            for handler in list(LOGGER.handlers):
                if isinstance(handler, BoundedQueueHandler):
                    LOGGER.removeHandler(handler)


if __name__ == "__main__":
    raise SystemExit(main())
