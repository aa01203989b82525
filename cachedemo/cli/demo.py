# =============================================================================
# cachedemo/cli/demo.py — Run the cache demo scenarios from the command line
# =============================================================================
#
# Connects to the configured cache backend and runs the scalar and list
# scenarios one after another, printing what every call returned:
#
#   scalar       set / get / delete a plain value
#   concatenate  batch appends and a batch prepend, then fetch
#   pop          pop from both ends, then fetch
#   push         push onto both ends, then fetch
#   remove       remove a value, then fetch
#
# Typical usage:
#   cache-demo                                # hosted service, all scenarios
#   cache-demo --backend memory               # offline, no API key needed
#   cache-demo --scenario pop --scenario push --json
#
# Exit codes:
#   0  every step succeeded (misses included)
#   1  at least one step returned an Error outcome
#   2  fatal configuration error (e.g. MOMENTO_API_KEY missing)
# =============================================================================

"""Command-line runner for the cachedemo scenarios.

Usage::

    python -m cachedemo.cli --backend memory
    python -m cachedemo.cli --scenario scalar --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from cachedemo.config.loader import BACKENDS, load_config
from cachedemo.models.scenario import ScenarioReport
from cachedemo.services.demo_scenarios import SCENARIOS, run_scenarios
from cachedemo.utils.errors import ConfigurationError
from cachedemo.utils.logging import configure_logging

EXIT_OK = 0
EXIT_STEP_ERROR = 1
EXIT_CONFIG_ERROR = 2


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(reports: list[ScenarioReport]) -> str:
    """Render reports as a human-readable text block, one section per scenario."""
    lines: list[str] = []
    sep = "=" * 60

    for report in reports:
        status = "OK" if report.succeeded else "FAILED"
        lines.append(sep)
        lines.append(f"  {report.name}  [{status}]")
        if report.description:
            lines.append(f"  {report.description}")
        lines.append(sep)
        for index, step in enumerate(report.steps, start=1):
            lines.append(f"  {index:>2}. {step.operation:<24} {step.tag.value:<8} {step.summary}")
        if report.final_list is not None:
            lines.append(f"  Final list: {report.final_list}")
        lines.append("")

    return "\n".join(lines)


def _format_json_output(reports: list[ScenarioReport]) -> str:
    return json.dumps(
        {
            "succeeded": all(report.succeeded for report in reports),
            "scenarios": [report.model_dump(mode="json") for report in reports],
        },
        indent=2,
    )


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


async def _run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """Build the client, run the selected scenarios, and print the reports."""
    # Deferred: importing cachedemo.main pulls in the backend factory.
    from cachedemo.main import build_cache_client

    try:
        client = build_cache_client(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    async with client:
        reports = await run_scenarios(client, args.scenario)

    if args.json:
        print(_format_json_output(reports))
    else:
        print(_format_text_output(reports))

    return EXIT_OK if all(report.succeeded for report in reports) else EXIT_STEP_ERROR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cache-demo",
        description="Run scalar and list examples against a hosted cache.",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default=None,
        help="Cache backend (default: from config / CACHE_BACKEND).",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file (default: config/config.yaml).",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        choices=sorted(SCENARIOS),
        default=None,
        help="Scenario to run; repeat for several (default: all, in order).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print reports as JSON.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors (implied by --json).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level when not quiet (default: from config / LOG_LEVEL).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    if args.backend:
        config.setdefault("cache", {})["backend"] = args.backend

    if args.quiet or args.json:
        level = "WARNING"
    else:
        level = args.log_level or config.get("logging", {}).get("level", "INFO")
    # Logs go to stderr so stdout carries only the reports.
    configure_logging(
        log_level=level,
        json_output=config.get("app", {}).get("env") == "production",
        stream=sys.stderr,
    )

    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    sys.exit(main())
