"""Filesystem access to a site's content tree."""

import logging
import os
import posixpath
from pathlib import Path

from mdsite.core.errors import ContainmentViolation, PageNotFound, ReadFailure
from mdsite.core.models import FrontMatter, Link
from mdsite.core.parser import render_markdown, split_front_matter

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"
INDEX_PAGE = "index"
DIR_SUMMARY = "_index.md"
HTML_INDEX = "index.html"


def normalize_path(path: str) -> str:
    """Normalize a request-relative path to a page path without ``.md``.

    Exactly one rule applies: an empty path becomes ``index``, otherwise a
    trailing ``/`` is removed, otherwise a trailing ``.md`` is removed.
    """
    if not path:
        return INDEX_PAGE
    if path.endswith("/"):
        return path[:-1]
    if len(path) > len(MARKDOWN_SUFFIX) and path.endswith(MARKDOWN_SUFFIX):
        return path[: -len(MARKDOWN_SUFFIX)]
    return path


class ContentStore:
    """Read-only access to the files under one site's ``pub/`` directory.

    All paths handed to the store are relative to its root. Anything that
    would land outside the root (a leading slash, an absolute path, ``..``
    segments or symlinks leading elsewhere) raises ContainmentViolation
    before the filesystem is read.
    """

    def __init__(self, root: Path):
        self.root = root
        self._resolved_root = root.resolve()

    def locate(self, rel: str) -> Path:
        """Map a relative path to an absolute path inside the root."""
        if rel.startswith(("/", "\\")) or os.path.isabs(rel) or "\x00" in rel:
            logger.warning("Rejected path %r outside content root", rel)
            raise ContainmentViolation(rel)
        try:
            path = (self._resolved_root / rel).resolve()
        except (OSError, ValueError) as exc:
            raise ContainmentViolation(rel) from exc
        if not path.is_relative_to(self._resolved_root):
            logger.warning("Rejected path %r escaping %s", rel, self.root)
            raise ContainmentViolation(rel)
        return path

    def url_for(self, rel: str) -> str:
        """Return the URL directory prefix (with trailing slash) of ``rel``.

        Built from the requested path, not the resolved one, so directories
        reached through a symlink keep their own URLs.
        """
        rel = posixpath.normpath(rel.replace("\\", "/"))
        if rel == ".":
            return "/"
        return f"/{rel}/"

    def load_page(self, rel: str) -> tuple[str, FrontMatter]:
        """Load and render ``<rel>.md``.

        ``rel`` is an already normalized page path without the suffix.
        Returns (html, front_matter). Raises PageNotFound when the file
        cannot be read, whether missing, unreadable or a directory.
        """
        path = self.locate(rel + MARKDOWN_SUFFIX)
        try:
            raw = path.read_bytes().decode("utf-8", errors="replace")
        except OSError as exc:
            raise PageNotFound(rel) from exc

        front, body = split_front_matter(raw)
        return render_markdown(body), front

    def list_dir(self, rel: str) -> list[Link]:
        """List a directory as navigation links.

        Hidden entries and the ``_index.md`` summary are skipped, ``.md``
        suffixes are dropped from file titles (directories keep their full
        name) and titles are unique: entries are visited in
        name order and the first one to claim a title wins, so a ``foo/``
        directory shadows a sibling ``foo.md``. Directory links end
        in ``/``. Use ``"."`` for the content root itself.
        """
        if not rel or rel.startswith("/"):
            raise ContainmentViolation(rel)
        path = self.locate(rel)
        try:
            entries = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.info("Couldn't load path %s", path)
            raise ReadFailure(rel, f"Path not found: {rel}") from exc

        base = self.url_for(rel)
        seen: set[str] = set()
        links: list[Link] = []
        for entry in entries:
            name = entry.name
            if name.startswith(".") or name == DIR_SUMMARY:
                continue
            is_dir = entry.is_dir()
            title = name if is_dir else name.removesuffix(MARKDOWN_SUFFIX)
            if title in seen:
                continue
            seen.add(title)
            suffix = "/" if is_dir else ""
            links.append(Link(title=title, path=base + title + suffix))
        return links

    def read_file(self, rel: str) -> bytes:
        """Return the raw bytes of a file under the root."""
        path = self.locate(rel)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ReadFailure(rel) from exc

    def read_html_index(self, rel: str) -> bytes | None:
        """Return ``<rel>/index.html`` if the directory has one."""
        path = self.locate(rel) / HTML_INDEX
        try:
            return path.read_bytes()
        except OSError:
            return None
