# main.py

"""Entry point for price_aggregator (API server or headless CLI search)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.config.sources import DEFAULT_COUNTRY, SUPPORTED_COUNTRIES

logger = logging.getLogger("price_aggregator.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    countries = ", ".join(SUPPORTED_COUNTRIES)

    parser = argparse.ArgumentParser(
        prog="price_aggregator",
        description="Cross-site product price comparison.",
        epilog=(
            f"Supported countries: {countries}. "
            "Use 'serve' as the query to start the HTTP API."
        ),
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Search query, or 'serve' to run the API server.",
    )
    parser.add_argument(
        "-c",
        "--country",
        default=DEFAULT_COUNTRY,
        help=f"Target country code (default: {DEFAULT_COUNTRY}).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--host",
        default=Settings.HOST,
        help=f"API bind address (default: {Settings.HOST}).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Settings.PORT,
        help=f"API port (default: {Settings.PORT}).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on the country's sources.",
    )
    return parser


def _run_server(host: str, port: int) -> None:
    """Serve the FastAPI app with uvicorn."""
    import uvicorn

    from src.api.app import create_app

    try:
        uvicorn.run(create_app(), host=host, port=port)
    except Exception:
        logger.critical("Fatal error in API server", exc_info=True)
        raise
    finally:
        logger.info("price_aggregator API stopped")


def _run_cli(args: argparse.Namespace) -> None:
    """Run headless CLI search and exit."""
    from src.cli.runner import cli_search

    exit_code = asyncio.run(
        cli_search(
            query=args.query,
            country=args.country,
            output_format=args.output_format,
        )
    )
    sys.exit(exit_code)


def _run_health_check(country: str) -> None:
    """Run source connectivity health check."""
    from src.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check(country))
    sys.exit(exit_code)


def main() -> None:
    """Route to the API server, a health check or a one-shot search."""
    parser = _build_parser()
    args = parser.parse_args()

    serving = args.query == "serve"
    log_file = setup_logging(
        console_level=logging.INFO if serving else logging.WARNING
    )
    logger.info("price_aggregator starting — log file: %s", log_file)

    if args.health:
        _run_health_check(args.country)
    elif serving:
        _run_server(args.host, args.port)
    elif args.query is None or not args.query.strip():
        parser.print_help(sys.stderr)
        sys.exit(2)
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
