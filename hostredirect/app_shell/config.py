import logging
import sys
from dataclasses import dataclass

from hostredirect.components.redirects import (
    DEFAULT_BIND,
    ConfigureInput,
    ResolverConfig,
    parse_bind_address,
    run_configure,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Startup options as given on the command line."""

    pairs: tuple[str, ...] = ()
    fallback: str | None = None
    insecure: bool = False
    bind: str = DEFAULT_BIND
    log_level: str = "INFO"


@dataclass(frozen=True)
class StartupConfig:
    resolver: ResolverConfig
    host: str
    port: int


def validate_settings(settings: Settings) -> StartupConfig:
    """
    Validate startup options before anything binds.

    Exits the process with status 1 on any configuration error.
    """
    output = run_configure(
        ConfigureInput(
            pairs=settings.pairs,
            fallback=settings.fallback,
            insecure=settings.insecure,
        )
    )
    errors = list(output.errors)

    address, bind_errors = parse_bind_address(settings.bind)
    errors.extend(bind_errors)

    if errors or output.config is None or address is None:
        for error in errors:
            logger.critical("Invalid configuration (%s): %s", error.code, error.message)
        sys.exit(1)

    host, port = address
    return StartupConfig(resolver=output.config, host=host, port=port)
