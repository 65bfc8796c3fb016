"""Data models for MdSite."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


class Link(BaseModel):
    """A navigable reference, used for breadcrumbs and directory entries."""

    model_config = ConfigDict(frozen=True)

    title: str
    path: str


class FrontMatter(BaseModel):
    """Metadata extracted from page frontmatter.

    Unknown keys are ignored. Scalar values such as YAML dates are kept as
    their string form so templates print them as written.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    date: str | None = None
    time: str | None = None
    author: str | None = None

    @field_validator("title", "date", "time", "author", mode="before")
    @classmethod
    def _stringify(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return None
        return str(value)


class PageInfo(BaseModel):
    """View-model handed to every template stage of one request."""

    breadcrumb: list[Link] = Field(default_factory=list)
    title: str = ""
    date: str = Field(default_factory=lambda: datetime.now().strftime(DATE_FORMAT))
    time: str = Field(default_factory=lambda: datetime.now().strftime(TIME_FORMAT))
    author: str = ""
    dir: list[Link] = Field(default_factory=list)
    body: str = ""

    @classmethod
    def from_front_matter(cls, front: FrontMatter | None, **kwargs) -> "PageInfo":
        """Build a PageInfo, letting front matter override the defaults."""
        info = cls(**kwargs)
        if front is None:
            return info
        updates = front.model_dump(exclude_none=True)
        return info.model_copy(update=updates)
