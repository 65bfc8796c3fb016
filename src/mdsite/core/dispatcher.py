"""Per-request orchestration: site lookup, resolution and rendering."""

import logging
from typing import Any

from markupsafe import Markup
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from mdsite.config import Settings
from mdsite.core.breadcrumb import build_breadcrumb
from mdsite.core.errors import ContentError, DomainConfigMissing, TemplateError
from mdsite.core.models import PageInfo
from mdsite.core.resolver import PathResolver, Resolution, ResolutionKind
from mdsite.core.site import SiteRoot, render_domain_error, site_for_host
from mdsite.core.storage import ContentStore
from mdsite.core.templates import TemplateCache

logger = logging.getLogger(__name__)

TEMPLATE_FAILURE = "Could not load templates."


def get_context(info: PageInfo) -> dict[str, Any]:
    """Create the template context for every stage of a request."""
    context: dict[str, Any] = {name: getattr(info, name) for name in PageInfo.model_fields}
    context["body"] = Markup(info.body)
    context["info"] = info
    return context


def stages_for(resolution: Resolution) -> list[str]:
    """Template stages to render, in order, for a resolved page or directory."""
    stages = ["header"]
    if resolution.kind is ResolutionKind.PAGE or resolution.has_summary:
        stages.append("view")
    if resolution.kind is ResolutionKind.DIR:
        stages.append("dir")
    stages.append("footer")
    return stages


class Dispatcher:
    """Turns (host, URL path) into a response.

    Owns no per-request state; the template cache is shared by every
    request and must be the only mutable object reachable from here.
    """

    def __init__(self, settings: Settings, cache: TemplateCache):
        self.settings = settings
        self.cache = cache

    def dispatch(self, host: str, url_path: str) -> Response:
        try:
            site = site_for_host(self.settings.sites_dir, host, self.settings.strip_port)
        except DomainConfigMissing as exc:
            logger.warning("Domain error: %s", exc)
            return HTMLResponse(render_domain_error(exc.host), status_code=500)

        rel = url_path[1:] if url_path.startswith("/") else url_path
        resolver = PathResolver(ContentStore(site.pub))
        try:
            resolution = resolver.resolve(rel)
        except ContentError as exc:
            logger.info("Could not load %s on %s: %s", url_path, site.host, exc)
            return PlainTextResponse(
                f"Could not load {url_path}: File not found", status_code=404
            )

        if resolution.kind is ResolutionKind.FILE:
            return Response(content=resolution.content)
        if resolution.kind is ResolutionKind.INDEX_HTML:
            return HTMLResponse(resolution.content)
        return self.render(site, url_path, resolution)

    def render(self, site: SiteRoot, url_path: str, resolution: Resolution) -> Response:
        """Render header, body stages and footer around a resolution."""
        info = PageInfo.from_front_matter(
            resolution.front_matter,
            breadcrumb=build_breadcrumb(url_path),
            dir=resolution.links,
            body=resolution.html,
        )
        context = get_context(info)
        try:
            parts = [
                self.cache.render(site.templates, stage, context)
                for stage in stages_for(resolution)
            ]
        except TemplateError as exc:
            logger.error("Template stage %s failed for %s: %s", exc.stage, url_path, exc)
            return PlainTextResponse(TEMPLATE_FAILURE, status_code=500)
        return HTMLResponse("".join(parts))
