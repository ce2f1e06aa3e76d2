"""CLI entry point for snyk-api."""

from __future__ import annotations

import argparse
import os
import sys

# Ensure all commands are registered by importing the commands package
import snyk_api.commands  # noqa: F401
from snyk_api.client import Client
from snyk_api.commands import get_command_registry
from snyk_api.errors import SnykError
from snyk_api.logging_utils import setup_logging
from snyk_api.models import BASE_URL, DEFAULT_API_VERSION, DEFAULT_MAX_RETRIES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snyk-api",
        description="List Snyk orgs, projects, targets, issues and ignores.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    SNYK_TOKEN       - Snyk API token (required)
    SNYK_API_URL     - API origin (default: https://api.snyk.io/)
    SNYK_API_VERSION - Default REST API version (default: 2023-09-14~beta)

Examples:
    # List every org the token can see
    snyk-api orgs

    # Projects of an org, by slug, as JSON lines
    snyk-api --json projects --org my-org

    # Ignored issues of a project
    snyk-api ignores --org my-org --project 6f1b1914-d1b7-4047-841d-84519e8e3edf
""",
    )
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output entities as JSON lines (to stderr)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--api-url", default=None, help="API origin (default: from SNYK_API_URL env or api.snyk.io)")
    parser.add_argument(
        "--api-version",
        default=None,
        help=f"REST API version (default: from SNYK_API_VERSION env or {DEFAULT_API_VERSION})",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=f"Maximum retry attempts for rate limits and server errors (default: {DEFAULT_MAX_RETRIES})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    registry = get_command_registry()
    for name, cmd_cls in sorted(registry.items()):
        sub = subparsers.add_parser(name, help=cmd_cls.__doc__)
        cmd_cls.add_arguments(sub)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    token = os.environ.get("SNYK_TOKEN")
    if not token:
        print("ERROR: SNYK_TOKEN environment variable is not set.", file=sys.stderr)
        return 1

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)

    client = Client(
        token=token,
        base_url=args.api_url or os.environ.get("SNYK_API_URL", BASE_URL),
        api_version=args.api_version or os.environ.get("SNYK_API_VERSION", DEFAULT_API_VERSION),
        max_retries=args.max_retries,
    )

    command = get_command_registry()[args.command](client=client, args=args)

    try:
        command.run()
    except SnykError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    logger.debug(f"Done: {len(command.results)} {args.command}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
