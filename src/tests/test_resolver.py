"""Unit tests for PathResolver candidate ordering."""

import pytest

from mdsite.core.errors import ContainmentViolation, PathNotFound
from mdsite.core.resolver import PathResolver, ResolutionKind
from mdsite.core.storage import ContentStore

from conftest import write_files


@pytest.fixture
def pub(tmp_path):
    root = tmp_path / "pub"
    root.mkdir()
    return root


@pytest.fixture
def resolver(pub):
    return PathResolver(ContentStore(pub))


# ============================================================
# Candidate order
# ============================================================


class TestCandidateOrder:
    def test_page(self, resolver, pub):
        write_files(pub, {"about.md": "# About"})
        result = resolver.resolve("about")
        assert result.kind is ResolutionKind.PAGE
        assert "About</h1>" in result.html

    def test_page_beats_directory_index(self, resolver, pub):
        write_files(pub, {"docs.md": "outer", "docs/index.md": "inner"})
        assert "outer" in resolver.resolve("docs").html

    def test_index_page(self, resolver, pub):
        write_files(pub, {"docs/index.md": "inner"})
        result = resolver.resolve("docs")
        assert result.kind is ResolutionKind.PAGE
        assert "inner" in result.html

    def test_raw_file(self, resolver, pub):
        write_files(pub, {"logo.png": b"\x89PNG"})
        result = resolver.resolve("logo.png")
        assert result.kind is ResolutionKind.FILE
        assert result.content == b"\x89PNG"

    def test_directory_listing(self, resolver, pub):
        write_files(pub, {"docs/a.md": "a", "docs/b.md": "b"})
        result = resolver.resolve("docs")
        assert result.kind is ResolutionKind.DIR
        assert [l.title for l in result.links] == ["a", "b"]
        assert not result.has_summary

    def test_directory_with_summary(self, resolver, pub):
        write_files(pub, {"docs/a.md": "a", "docs/_index.md": "---\ntitle: Docs\n---\nAll docs"})
        result = resolver.resolve("docs/")
        assert result.kind is ResolutionKind.DIR
        assert result.has_summary
        assert "All docs" in result.html
        assert result.front_matter.title == "Docs"

    def test_html_index_overrides_listing(self, resolver, pub):
        write_files(pub, {"app/index.html": "<p>app</p>", "app/_index.md": "summary"})
        result = resolver.resolve("app/")
        assert result.kind is ResolutionKind.INDEX_HTML
        assert result.content == b"<p>app</p>"

    def test_root_uses_index_page(self, resolver, pub):
        write_files(pub, {"index.md": "# Welcome"})
        result = resolver.resolve("")
        assert result.kind is ResolutionKind.PAGE
        assert "Welcome" in result.html

    def test_root_without_index_lists(self, resolver, pub):
        write_files(pub, {"a.md": "a"})
        result = resolver.resolve("")
        assert result.kind is ResolutionKind.DIR
        assert [l.path for l in result.links] == ["/a"]

    def test_not_found(self, resolver):
        with pytest.raises(PathNotFound) as exc_info:
            resolver.resolve("nope")
        assert exc_info.value.path == "nope"


# ============================================================
# Normalization properties
# ============================================================


class TestNormalization:
    @pytest.mark.parametrize("path", ["about", "docs", "missing", "logo.png", "docs/a"])
    def test_md_suffix_is_equivalent(self, resolver, pub, path):
        write_files(
            pub,
            {"about.md": "# About", "docs/a.md": "a", "docs/index.md": "i", "logo.png": b"png"},
        )
        assert _outcome(resolver, path + ".md") == _outcome(resolver, path)

    @pytest.mark.parametrize("path", ["about", "docs", "sub", "missing"])
    def test_trailing_slash_is_equivalent(self, resolver, pub, path):
        write_files(pub, {"about.md": "# About", "docs/index.md": "i", "sub/x.md": "x"})
        assert _outcome(resolver, path + "/") == _outcome(resolver, path)


def _outcome(resolver, path):
    try:
        result = resolver.resolve(path)
    except PathNotFound:
        return "not found"
    return result.model_dump()


# ============================================================
# Containment
# ============================================================


class TestContainment:
    def test_leading_slash_never_reads(self, pub, monkeypatch):
        store = ContentStore(pub)
        calls = []
        monkeypatch.setattr(store, "load_page", lambda rel: calls.append(rel))
        monkeypatch.setattr(store, "read_file", lambda rel: calls.append(rel))
        monkeypatch.setattr(store, "list_dir", lambda rel: calls.append(rel))
        with pytest.raises(ContainmentViolation):
            PathResolver(store).resolve("/etc/passwd")
        assert calls == []

    def test_dotdot_escape_is_not_swallowed(self, resolver):
        with pytest.raises(ContainmentViolation):
            resolver.resolve("../../etc/passwd")

    def test_dotdot_escape_to_sibling_file(self, resolver, pub):
        (pub.parent / "secret.txt").write_text("secret")
        with pytest.raises(ContainmentViolation):
            resolver.resolve("../secret.txt")
