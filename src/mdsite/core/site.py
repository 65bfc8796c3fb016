"""Per-host site roots."""

import logging
from pathlib import Path

import jinja2
from pydantic import BaseModel

from mdsite.core.errors import DomainConfigMissing

logger = logging.getLogger(__name__)

PUB_DIR = "pub"
TEMPLATES_DIR = "templates"

DOMAIN_ERROR = "Sorry, this server doesn't know how to serve {{ host }}!"

_domain_error_template = jinja2.Environment(autoescape=True).from_string(DOMAIN_ERROR)


class SiteRoot(BaseModel):
    """A host's base directory with its ``pub/`` and ``templates/`` trees."""

    host: str
    path: Path

    @property
    def pub(self) -> Path:
        return self.path / PUB_DIR

    @property
    def templates(self) -> Path:
        return self.path / TEMPLATES_DIR

    def is_servable(self) -> bool:
        """Both the content and the template trees exist."""
        return self.pub.is_dir() and self.templates.is_dir()


def host_name(host: str, strip_port: bool = False) -> str:
    """Clean a Host header value for use as a directory name."""
    host = host.strip()
    if strip_port and not host.endswith("]"):
        host = host.rsplit(":", 1)[0] if ":" in host else host
    return host


def site_for_host(sites_dir: Path, host: str, strip_port: bool = False) -> SiteRoot:
    """Return the servable site root for ``host``.

    Raises DomainConfigMissing when the host cannot name a directory under
    ``sites_dir`` or the directory lacks ``pub/`` or ``templates/``.
    """
    name = host_name(host, strip_port)
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        logger.warning("Rejected host header %r", host)
        raise DomainConfigMissing(host, "invalid host")

    site = SiteRoot(host=name, path=sites_dir / name)
    if not site.is_servable():
        logger.warning("No servable site for host %r under %s", name, sites_dir)
        raise DomainConfigMissing(host)
    return site


def render_domain_error(host: str) -> str:
    """Render the fixed page shown for hosts with no site."""
    return _domain_error_template.render(host=host)
