"""Shared fixtures: a throwaway site tree per test."""

from pathlib import Path

import pytest

TEMPLATES = {
    "header": (
        "<header>{% for crumb in breadcrumb %}"
        '<a href="{{ crumb.path }}">{{ crumb.title }}</a>'
        "{% endfor %}<h1 class=\"title\">{{ title }}</h1>"
        '<span class="author">{{ author }}</span></header>\n'
    ),
    "view": "<main>{{ body }}</main>\n",
    "dir": '<ul>{% for link in dir %}<li><a href="{{ link.path }}">{{ link.title }}</a></li>{% endfor %}</ul>\n',
    "footer": "<footer>{{ date }}</footer>\n",
}


def write_files(root: Path, files: dict[str, str | bytes]) -> None:
    """Create files under ``root``; a key ending in ``/`` makes a directory."""
    for name, content in files.items():
        path = root / name
        if name.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def sites_dir(tmp_path):
    return tmp_path


@pytest.fixture
def make_site(sites_dir):
    """Build ``<sites_dir>/<host>`` with default templates and given content."""

    def _make(host: str = "test", pub: dict | None = None, templates: dict | None = None):
        site = sites_dir / host
        (site / "pub").mkdir(parents=True, exist_ok=True)
        tmpl = dict(TEMPLATES)
        tmpl.update(templates or {})
        write_files(site / "templates", {f"{k}.html": v for k, v in tmpl.items()})
        write_files(site / "pub", pub or {})
        return site

    return _make
