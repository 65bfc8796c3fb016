"""MdSite FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response

from mdsite.config import Settings, settings as default_settings
from mdsite.core.dispatcher import Dispatcher
from mdsite.core.templates import TemplateCache

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its own template cache and dispatcher."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Log where content is served from."""
        logger.info(
            "Serving sites from %s (template timeout %ss)",
            settings.sites_dir.resolve(),
            settings.template_timeout,
        )
        yield
        app.state.template_cache.clear()

    app = FastAPI(
        title="MdSite",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    cache = TemplateCache(timeout=settings.template_timeout)
    app.state.settings = settings
    app.state.template_cache = cache
    app.state.dispatcher = Dispatcher(settings, cache)

    @app.api_route("/{path:path}", methods=["GET", "HEAD"])
    def serve(request: Request, path: str) -> Response:
        """Catch-all route; every path is classified by the dispatcher."""
        host = request.headers.get("host", "")
        return request.app.state.dispatcher.dispatch(host, request.url.path)

    return app


app = create_app()
