"""Unit tests for per-host site roots."""

import pytest

from mdsite.core.errors import DomainConfigMissing
from mdsite.core.site import host_name, render_domain_error, site_for_host


class TestSiteForHost:
    def test_servable_site(self, make_site, sites_dir):
        make_site("example.com")
        site = site_for_host(sites_dir, "example.com")
        assert site.pub == sites_dir / "example.com" / "pub"
        assert site.templates == sites_dir / "example.com" / "templates"

    def test_missing_host_dir(self, sites_dir):
        with pytest.raises(DomainConfigMissing) as exc_info:
            site_for_host(sites_dir, "nowhere.org")
        assert exc_info.value.host == "nowhere.org"

    def test_missing_templates(self, sites_dir):
        (sites_dir / "half.org" / "pub").mkdir(parents=True)
        with pytest.raises(DomainConfigMissing):
            site_for_host(sites_dir, "half.org")

    def test_missing_pub(self, sites_dir):
        (sites_dir / "half.org" / "templates").mkdir(parents=True)
        with pytest.raises(DomainConfigMissing):
            site_for_host(sites_dir, "half.org")

    @pytest.mark.parametrize("host", ["", ".", "..", "../etc", "a/b", "a\\b"])
    def test_invalid_hosts(self, sites_dir, host):
        with pytest.raises(DomainConfigMissing):
            site_for_host(sites_dir, host)

    def test_uppercase_site_directory(self, make_site, sites_dir):
        make_site("Docs.Example")
        site = site_for_host(sites_dir, "Docs.Example")
        assert site.path == sites_dir / "Docs.Example"

    def test_port_kept_by_default(self, make_site, sites_dir):
        make_site("localhost")
        with pytest.raises(DomainConfigMissing):
            site_for_host(sites_dir, "localhost:6969")

    def test_strip_port(self, make_site, sites_dir):
        make_site("localhost")
        site = site_for_host(sites_dir, "localhost:6969", strip_port=True)
        assert site.host == "localhost"


class TestHostName:
    def test_case_preserved(self):
        assert host_name("Example.COM") == "Example.COM"

    def test_strip_port(self):
        assert host_name("example.com:8080", strip_port=True) == "example.com"

    def test_ipv6_literal_without_port(self):
        assert host_name("[::1]", strip_port=True) == "[::1]"


class TestDomainError:
    def test_message(self):
        assert render_domain_error("foo.org") == (
            "Sorry, this server doesn't know how to serve foo.org!"
        )

    def test_host_is_escaped(self):
        assert "<script>" not in render_domain_error("<script>")
