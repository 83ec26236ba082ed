"""CLI entrypoint for the study scheduler."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from studyplan.engine import GenerationResult, generate_schedules
from studyplan.io import read_json, write_json
from studyplan.metrics import collect_metrics
from studyplan.persistence import GatewayError, HttpScheduleGateway, JsonScheduleStore, ScheduleGateway
from studyplan.persistence.retry import Sleep
from studyplan.reporting import build_error_report, build_generation_report, combine_schedules
from studyplan.validation import ValidationError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_gateway(
    *,
    store_path: str | None = None,
    api_url: str | None = None,
    token: str | None = None,
    user_id: str = "local",
) -> ScheduleGateway:
    if api_url:
        return HttpScheduleGateway(api_url, token or "")
    return JsonScheduleStore(store_path or "schedules.json", user_id=user_id)


async def _generate_and_refresh(
    payload: dict[str, Any],
    gateway: ScheduleGateway,
    user_id: str,
    sleep: Sleep,
) -> tuple[GenerationResult, list[dict[str, Any]] | None, list[str]]:
    result = await generate_schedules(payload, gateway, sleep=sleep)
    if not result.ok:
        return result, None, []
    try:
        stored = await gateway.load_schedules(user_id)
    except GatewayError as exc:
        logger.error("Failed to fetch updated schedule: %s", exc)
        return result, None, ["Failed to fetch updated schedule."]
    return result, combine_schedules(stored["subjectSchedules"]), []


def run_generate_command(
    request_path: str,
    output_path: str,
    *,
    gateway: ScheduleGateway,
    user_id: str = "local",
    sleep: Sleep = asyncio.sleep,
) -> int:
    """Generate and save schedules; exit 0 on success, 1 on abort, 2 on invalid input."""
    try:
        payload = read_json(request_path)
    except (OSError, ValueError) as exc:
        error = build_error_report(
            [ValidationError(code="invalid_request", message=str(exc), path="$.request")],
            code="request_read_error",
        )
        write_json(output_path, error)
        return 2

    result, calendar, warnings = asyncio.run(_generate_and_refresh(payload, gateway, user_id, sleep))
    report = build_generation_report(result, collect_metrics(result.plans), calendar)
    if warnings:
        report["warnings"] = warnings
    write_json(output_path, report)

    if result.code == "validation_error":
        return 2
    return 0 if result.ok else 1


def run_calendar_command(output_path: str, *, gateway: ScheduleGateway, user_id: str = "local") -> int:
    """Write the combined calendar of every stored subject schedule."""
    try:
        stored = asyncio.run(gateway.load_schedules(user_id))
    except GatewayError as exc:
        write_json(
            output_path,
            build_error_report(
                [ValidationError(code="load_failed", message=str(exc), path="$")],
                code="load_error",
            ),
        )
        return 1

    write_json(
        output_path,
        {
            "status": "ok",
            "calendar": combine_schedules(stored["subjectSchedules"]),
            "unavailableTimes": stored["unavailableTimes"],
        },
    )
    return 0


def _add_gateway_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--store", help="Path to the local JSON schedule store (default: schedules.json)")
    parser.add_argument("--api-url", help="Base URL of a remote schedule service")
    parser.add_argument("--token", help="Bearer token for the remote schedule service")
    parser.add_argument("--user-id", default="local", help="User the schedules belong to")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studyplan", description="Study time scheduler CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate and save schedules from a request JSON")
    generate_parser.add_argument("--request", required=True, help="Path to the generation request JSON")
    generate_parser.add_argument("--output", required=True, help="Path to the report JSON")
    _add_gateway_arguments(generate_parser)

    calendar_parser = subparsers.add_parser("calendar", help="Export the combined calendar of stored schedules")
    calendar_parser.add_argument("--output", required=True, help="Path to the calendar JSON")
    _add_gateway_arguments(calendar_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if args.api_url and args.store:
        parser.error("--store and --api-url are mutually exclusive")
    gateway = build_gateway(store_path=args.store, api_url=args.api_url, token=args.token, user_id=args.user_id)

    if args.command == "generate":
        return run_generate_command(args.request, args.output, gateway=gateway, user_id=args.user_id)
    if args.command == "calendar":
        return run_calendar_command(args.output, gateway=gateway, user_id=args.user_id)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
