"""Application entrypoint.

Loads settings, builds a registry and drives one trace through the
start/stop-per-invocation pattern, logging each outcome and printing it as a JSON line.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

from trace_registry.core.settings import SettingsError, load_settings
from trace_registry.core.trace import TraceRegistry
from trace_registry.observability.logger import get_logger


def _parse_options(pairs: Sequence[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Invalid option '{pair}': expected KEY=VALUE")
        options[key] = value
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Drive a call-budgeted trace through the registry")
    parser.add_argument("--settings", default="config/settings.yaml", help="Settings file path")
    parser.add_argument("--trace-id", default="demo", help="Trace identifier")
    parser.add_argument("--max-calls", type=int, default=3, help="Call budget for the trace")
    parser.add_argument(
        "--invocations",
        type=int,
        default=None,
        help="Number of traced invocations to simulate (defaults to max-calls + 1)",
    )
    parser.add_argument(
        "--options",
        dest="options",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Opaque trace option, may be repeated",
    )
    return parser


def run(registry: TraceRegistry, trace_id: Any, max_calls: int, invocations: int, options: Any) -> list[dict[str, Any]]:
    """Simulate `invocations` traced calls and return every outcome as a dict."""

    outcomes: list[dict[str, Any]] = []
    for _ in range(invocations):
        started = registry.start_trace(trace_id, max_calls, options)
        outcomes.append(started.to_dict())
        stopped = registry.stop_trace(trace_id)
        outcomes.append(stopped.to_dict())
    return outcomes


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = get_logger("trace-registry")

    try:
        settings = load_settings(args.settings)
    except SettingsError as e:
        logger.error(str(e))
        return 1

    logger = get_logger(
        "trace-registry",
        level=settings.observability.log_level,
        structured=settings.observability.structured_logging,
    )
    logger.info("Settings loaded (on_config_mismatch=%s)", settings.registry.on_config_mismatch)

    try:
        options = _parse_options(args.options)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    if args.max_calls <= 0:
        parser.error("--max-calls must be a positive integer")

    invocations = args.invocations if args.invocations is not None else args.max_calls + 1
    registry = TraceRegistry.from_settings(settings, logger=logger)

    for outcome in run(registry, args.trace_id, args.max_calls, invocations, options or None):
        line = json.dumps(outcome, ensure_ascii=False)
        logger.info("Outcome %s", line)
        print(line)

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
