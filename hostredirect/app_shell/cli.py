import argparse
import logging
import sys
from collections.abc import Sequence

import uvicorn

from hostredirect import __version__
from hostredirect.api.main import create_app
from hostredirect.app_shell.config import Settings, StartupConfig, validate_settings
from hostredirect.components.redirects import DEFAULT_BIND

logger = logging.getLogger("cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hostredirect",
        description="Redirect requests to another domain based on their Host header",
    )
    parser.add_argument(
        "pairs",
        nargs="*",
        metavar="PAIR",
        help="Source=dest pairs of domain names, e.g. example.com=www.example.com",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Redirect to insecure HTTP instead of HTTPS",
    )
    parser.add_argument(
        "--fallback",
        default=None,
        help="Optional default domain destination when no other domain matches",
    )
    parser.add_argument(
        "--bind",
        default=DEFAULT_BIND,
        help=f"Host/port to bind to (default: {DEFAULT_BIND})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_settings(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    return Settings(
        pairs=tuple(args.pairs),
        fallback=args.fallback,
        insecure=args.insecure,
        bind=args.bind,
        log_level=args.log_level,
    )


def serve(startup: StartupConfig, log_level: str) -> None:
    """Run the server until the transport gives up."""
    app = create_app(startup.resolver)
    try:
        uvicorn.run(
            app,
            host=startup.host,
            port=startup.port,
            log_level=log_level.lower(),
            access_log=False,
        )
    except OSError as e:
        logger.critical(f"HTTP server exited unexpectedly: {e}")
        sys.exit(1)


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_settings(argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    startup = validate_settings(settings)
    logger.info(f"Listening on {settings.bind}")
    serve(startup, settings.log_level)


if __name__ == "__main__":
    main()
