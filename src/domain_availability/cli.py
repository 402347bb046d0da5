"""
Command-line interface for the domain availability checker.

This module provides the CLI entry point with commands for:
- check: Check one or more domains given on the command line
- check-list: Check domains from a file (one per line)

Backend selection comes from the environment (and a .env file):
DOMAIN_CHECKER_MOCK, MAINREG_API_KEY, MAINREG_API_SECRET. `--offline`
forces the offline double.
"""

import argparse
import asyncio
import dataclasses
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .audit_logger import AuditLogger
from .config import CheckerSettings, LoggingConfig, load_settings_from_env
from .domain_validator import DomainValidator
from .factory import create_checker
from .models import CheckResult
from .orchestrator import BatchOrchestrator


EXIT_AVAILABLE = 0
EXIT_NONE_AVAILABLE = 1
EXIT_INVALID_INPUT = 2


def normalize_domains(raw_domains: list[str]) -> tuple[list[str], list[str]]:
    """
    Validate raw domain inputs.

    Returns:
        Tuple of (normalized domains in input order, error messages)
    """
    validator = DomainValidator()
    domains: list[str] = []
    errors: list[str] = []

    for raw in raw_domains:
        result = validator.validate(raw)
        if result.valid:
            domains.append(result.canonical_domain)
        else:
            errors.append(f"{raw!r}: {result.error.message}")

    return domains, errors


def read_domains_file(path: Path) -> list[str]:
    """Read domains from a file, skipping blank lines and '#' comments."""
    with open(path, "r", encoding="utf-8") as f:
        return [
            line.strip() for line in f
            if line.strip() and not line.strip().startswith("#")
        ]


def format_result(result: CheckResult) -> str:
    """Human-readable line for one result."""
    status = "AVAILABLE" if result.available else "taken"
    return f"{result.domain}: {status} (~{result.price} {result.currency})"


def build_settings(args: argparse.Namespace) -> CheckerSettings:
    """Resolve settings from the environment and command line overrides."""
    settings = load_settings_from_env()
    if args.offline:
        settings = dataclasses.replace(settings, offline=True)
    if args.verbose and settings.logging.level != "debug":
        settings = dataclasses.replace(
            settings,
            logging=LoggingConfig(level="debug", output_format=settings.logging.output_format),
        )
    return settings


async def run_checks(
    domains: list[str],
    settings: CheckerSettings,
    deadline: Optional[float] = None,
    logger: Optional[AuditLogger] = None,
) -> list[CheckResult]:
    """Resolve the backend once and check all domains."""
    resolved = create_checker(settings, logger=logger)
    async with BatchOrchestrator(
        checker=resolved.checker,
        batch_config=resolved.batch_config,
        logger=logger,
    ) as orchestrator:
        return await orchestrator.check_all(domains, deadline=deadline)


def report(
    results: list[CheckResult],
    as_json: bool,
    output_file: Optional[Path] = None,
) -> int:
    """Print results, optionally write them as JSON, and return the exit code."""
    payload = [result.to_dict() for result in results]

    if as_json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        for result in results:
            print(format_result(result))
        available_count = sum(1 for r in results if r.available)
        print(f"\nSummary: {available_count}/{len(results)} domain(s) available")

    if output_file:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            print(f"Results written to: {output_file}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing results: {e}", file=sys.stderr)

    return EXIT_AVAILABLE if any(r.available for r in results) else EXIT_NONE_AVAILABLE


def _run(raw_domains: list[str], args: argparse.Namespace, output_file: Optional[Path] = None) -> int:
    domains, errors = normalize_domains(raw_domains)
    if errors:
        for error in errors:
            print(f"Error: invalid domain {error}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    if not domains:
        print("Error: No domains given", file=sys.stderr)
        return EXIT_INVALID_INPUT

    settings = build_settings(args)
    logger = AuditLogger.from_config(settings.logging)

    results = asyncio.run(run_checks(
        domains=domains,
        settings=settings,
        deadline=args.deadline,
        logger=logger,
    ))
    return report(results, as_json=args.json, output_file=output_file)


def cmd_check(args: argparse.Namespace) -> int:
    """Handle the 'check' command."""
    return _run(args.domains, args)


def cmd_check_list(args: argparse.Namespace) -> int:
    """Handle the 'check-list' command."""
    try:
        raw_domains = read_domains_file(Path(args.file))
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    output_file = Path(args.output) if args.output else None
    return _run(raw_domains, args, output_file=output_file)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Use the deterministic offline checker - no network requests",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Overall time budget in seconds; unfinished domains count as taken",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="domain-availability",
        description="Batch domain availability and price estimation via WHOIS",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser(
        "check",
        help="Check one or more domains",
    )
    check_parser.add_argument(
        "domains",
        nargs="+",
        help="Domains to check (e.g., example.com foo.io)",
    )
    _add_common_arguments(check_parser)
    check_parser.set_defaults(func=cmd_check)

    check_list_parser = subparsers.add_parser(
        "check-list",
        help="Check domains from a file",
    )
    check_list_parser.add_argument(
        "file",
        help="Path to file containing domains (one per line)",
    )
    check_list_parser.add_argument(
        "--output", "-o",
        help="Path to write results as JSON",
    )
    _add_common_arguments(check_list_parser)
    check_list_parser.set_defaults(func=cmd_check_list)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
