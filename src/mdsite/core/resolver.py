"""Classify a request path as a page, directory or raw file."""

import logging
from enum import Enum
from typing import Callable

from pydantic import BaseModel, Field

from mdsite.core.errors import ContainmentViolation, ContentError, PageNotFound, PathNotFound
from mdsite.core.models import FrontMatter, Link
from mdsite.core.storage import INDEX_PAGE, ContentStore, normalize_path

logger = logging.getLogger(__name__)

SUMMARY_PAGE = "_index"


class ResolutionKind(str, Enum):
    PAGE = "page"
    DIR = "dir"
    INDEX_HTML = "index_html"
    FILE = "file"


class Resolution(BaseModel):
    """Outcome of resolving one request path."""

    kind: ResolutionKind
    rel: str
    html: str = ""
    front_matter: FrontMatter | None = None
    links: list[Link] = Field(default_factory=list)
    content: bytes | None = None

    @property
    def has_summary(self) -> bool:
        """True for a directory whose ``_index.md`` was rendered."""
        return self.kind is ResolutionKind.DIR and self.front_matter is not None


def _join(*parts: str) -> str:
    return "/".join(p for p in parts if p)


class PathResolver:
    """Resolve request paths against a ContentStore.

    Candidates are tried in a fixed order and the first success wins:
    ``<path>.md``, ``<path>/index.md``, the literal file ``<path>``, and
    finally ``<path>`` as a directory.
    """

    def __init__(self, store: ContentStore):
        self.store = store
        self.strategies: tuple[tuple[str, Callable[[str], Resolution]], ...] = (
            ("page", self._resolve_page),
            ("index page", self._resolve_index_page),
            ("raw file", self._resolve_file),
            ("directory", self._resolve_dir),
        )

    def resolve(self, path: str) -> Resolution:
        """Resolve a path relative to the content root (no leading slash).

        Raises ContainmentViolation for paths that would leave the root and
        PathNotFound when no candidate matches.
        """
        if path.startswith("/"):
            logger.warning("Rejected path with leading slash: %r", path)
            raise ContainmentViolation(path)

        target = normalize_path(path) if path else ""
        for name, strategy in self.strategies:
            try:
                return strategy(target)
            except ContainmentViolation:
                raise
            except ContentError as exc:
                logger.debug("Candidate %s failed for %r: %s", name, path, exc)
        raise PathNotFound(path)

    def _resolve_page(self, target: str) -> Resolution:
        html, front = self.store.load_page(target or INDEX_PAGE)
        return Resolution(kind=ResolutionKind.PAGE, rel=target, html=html, front_matter=front)

    def _resolve_index_page(self, target: str) -> Resolution:
        html, front = self.store.load_page(_join(target, INDEX_PAGE))
        return Resolution(kind=ResolutionKind.PAGE, rel=target, html=html, front_matter=front)

    def _resolve_file(self, target: str) -> Resolution:
        content = self.store.read_file(target)
        return Resolution(kind=ResolutionKind.FILE, rel=target, content=content)

    def _resolve_dir(self, target: str) -> Resolution:
        links = self.store.list_dir(target or ".")

        index = self.store.read_html_index(target or ".")
        if index is not None:
            return Resolution(kind=ResolutionKind.INDEX_HTML, rel=target, content=index)

        try:
            html, front = self.store.load_page(_join(target, SUMMARY_PAGE))
        except PageNotFound:
            return Resolution(kind=ResolutionKind.DIR, rel=target, links=links)
        return Resolution(
            kind=ResolutionKind.DIR,
            rel=target,
            links=links,
            html=html,
            front_matter=front,
        )
