# main.py

"""threadfinder entry point: API server, CLI search or store tooling."""

import argparse
import asyncio
import logging
import sys

from threadfinder.config.logging_config import setup_logging
from threadfinder.config.settings import Settings
from threadfinder.models.store import StoreDirectory

logger = logging.getLogger("threadfinder.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser: a query, search options and modes."""
    store_ids = ", ".join(s["id"] for s in Settings.STORES)
    parser = argparse.ArgumentParser(
        prog="threadfinder",
        description="Search clothing across thirteen online retailers.",
        epilog=f"Store ids: {store_ids}",
    )
    parser.add_argument(
        "query", nargs="?", default=None, help="What to search for."
    )

    search = parser.add_argument_group("search options")
    search.add_argument(
        "-s", "--stores", default=None,
        help="Comma-separated store ids (default: every store).",
    )
    search.add_argument(
        "-c", "--category", default=None,
        help="Clothing category to echo back in the response.",
    )
    search.add_argument(
        "-f", "--format", dest="output_format",
        choices=["json", "table"], default="json",
        help="json (default) prints the API body; table prints a summary.",
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "--serve", action="store_true", help="Run the HTTP API."
    )
    modes.add_argument(
        "--health", action="store_true",
        help="Probe every store homepage and report its status.",
    )
    modes.add_argument(
        "--list-stores", dest="list_stores", action="store_true",
        help="Print the store directory.",
    )

    server = parser.add_argument_group("server options")
    server.add_argument("--host", default=Settings.HOST)
    server.add_argument("--port", type=int, default=Settings.PORT)
    return parser


def _run_server(args: argparse.Namespace) -> None:
    """Start the FastAPI app under uvicorn (blocking)."""
    import uvicorn

    logger.info("Serving API on %s:%d", args.host, args.port)
    try:
        uvicorn.run(
            "threadfinder.api.main:app", host=args.host, port=args.port
        )
    except Exception:
        logger.critical("API server crashed", exc_info=True)
        raise


def _run_cli(
    args: argparse.Namespace, directory: StoreDirectory,
) -> None:
    """Run one terminal search and exit with its status code."""
    from threadfinder.cli.runner import cli_search

    sys.exit(
        asyncio.run(
            cli_search(
                args.query,
                args.stores,
                args.category,
                args.output_format,
                directory,
            )
        )
    )


def _run_health_check(directory: StoreDirectory) -> None:
    """Probe every store homepage and exit 1 if any is down."""
    from threadfinder.cli.runner import run_health_check

    sys.exit(asyncio.run(run_health_check(directory)))


def _run_list_stores(directory: StoreDirectory) -> None:
    """Print the store directory and exit."""
    from threadfinder.cli.runner import list_stores

    sys.exit(list_stores(directory))


def main() -> None:
    """Parse arguments and dispatch to the selected mode."""
    log_file = setup_logging()
    args = _build_parser().parse_args()
    logger.info("threadfinder started (log: %s)", log_file)

    directory = StoreDirectory.from_settings()
    if args.serve:
        _run_server(args)
    elif args.health:
        _run_health_check(directory)
    elif args.list_stores:
        _run_list_stores(directory)
    elif args.query:
        _run_cli(args, directory)
    else:
        _build_parser().print_help()
        sys.exit(2)


if __name__ == "__main__":
    main()
