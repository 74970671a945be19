import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hostredirect import __version__
from hostredirect.api.routes import host_redirects
from hostredirect.components.redirects import ResolverConfig, create_redirect_resolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    config: ResolverConfig = app.state.resolver_config
    logger.info(
        "Serving %d domain mapping(s), fallback=%s, scheme=%s",
        len(config.mapping),
        config.fallback or "none",
        config.scheme,
    )
    yield
    logger.info("Shutting down")


def create_app(config: ResolverConfig) -> FastAPI:
    """
    Build the ASGI application around a fixed resolver configuration.

    No routes are registered: the redirect handler is the router default,
    so it answers every target and method. Docs and OpenAPI are disabled.
    """
    app = FastAPI(
        title="hostredirect",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.resolver_config = config
    app.state.resolver = create_redirect_resolver(config)

    # --- Redirect Handler ---
    app.router.default = host_redirects.handle_redirect

    return app
