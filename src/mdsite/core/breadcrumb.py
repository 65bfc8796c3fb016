"""Breadcrumb trail derived from a URL path."""

from mdsite.core.models import Link

HOME = Link(title="Home", path="/")


def segment_title(segment: str) -> str:
    """Capitalize a path segment and turn underscores into spaces."""
    return (segment[:1].upper() + segment[1:]).replace("_", " ")


def build_breadcrumb(url_path: str) -> list[Link]:
    """Return the (title, path) trail for a URL path.

    The first segment (before the leading slash) is skipped, and the walk
    stops at the first empty segment, so ``/docs/`` and ``/docs`` yield the
    same trail.

    >>> [c.title for c in build_breadcrumb("/a/b_c/d")]
    ['Home', 'A', 'B c', 'D']
    """
    crumbs = [HOME]
    prefix = "/"
    for segment in url_path.split("/")[1:]:
        if not segment:
            break
        crumbs.append(Link(title=segment_title(segment), path=prefix + segment))
        prefix = prefix + segment + "/"
    return crumbs
