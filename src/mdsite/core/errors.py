"""Exceptions raised while resolving and rendering a request."""


class MdSiteError(Exception):
    """Base class for all MdSite errors."""


class ContentError(MdSiteError):
    """A request path could not be resolved to content (HTTP 404)."""

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Page not found: {path}")


class PathNotFound(ContentError):
    """Every resolution candidate was tried and none matched."""


class ContainmentViolation(ContentError):
    """The path would escape the content root."""

    def __init__(self, path: str):
        super().__init__(path, f"Path escapes content root: {path!r}")


class ReadFailure(ContentError):
    """A filesystem read failed, whatever the cause."""


class PageNotFound(ReadFailure):
    """The Markdown file behind a page could not be read."""


class TemplateError(MdSiteError):
    """A template stage could not be rendered (HTTP 500)."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(message)


class TemplateParseFailure(TemplateError):
    """Template file missing or syntactically invalid."""


class TemplateExecFailure(TemplateError):
    """Template raised while rendering."""


class DomainConfigMissing(MdSiteError):
    """The host has no servable site root."""

    def __init__(self, host: str, reason: str = "domain not found"):
        self.host = host
        super().__init__(f"{reason}: {host!r}")
