"""Markdown rendering and frontmatter splitting."""

import logging
import re

import yaml
from markdown import Markdown
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from pydantic import ValidationError

from mdsite.core.models import FrontMatter

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(
    r"^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)

# Pattern for strikethrough: ~~text~~
# Group 2 must contain the text (SimpleTagInlineProcessor expectation)
STRIKETHROUGH_PATTERN = r"(~~)(.*?)~~"


class StrikethroughExtension(Extension):
    """Markdown extension for ~~strikethrough~~ text."""

    def extendMarkdown(self, md: Markdown) -> None:
        """Add strikethrough pattern to markdown parser."""
        md.inlinePatterns.register(
            SimpleTagInlineProcessor(STRIKETHROUGH_PATTERN, "del"),
            "strikethrough",
            50,
        )


def create_parser() -> Markdown:
    """Create a Markdown parser with the site's extension set.

    A fresh instance is returned on every call; Markdown objects keep
    per-document state and are not safe to share between threads.
    """
    return Markdown(
        extensions=[
            # Core formatting
            "extra",  # Includes: abbreviations, attr_list, def_list, fenced_code, footnotes, md_in_html, tables
            "sane_lists",
            "smarty",
            # PyMdown extensions
            "pymdownx.tasklist",
            # Custom extensions
            StrikethroughExtension(),
        ]
    )


def render_markdown(content: str) -> str:
    """Render a Markdown body to an HTML fragment."""
    return create_parser().convert(content)


def split_front_matter(content: str) -> tuple[FrontMatter, str]:
    """Split a leading frontmatter block from the Markdown body.

    Returns (front_matter, body). A block that is not valid YAML, or not a
    mapping, yields empty front matter; the block is still removed from the
    body so it never renders as content.
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return FrontMatter(), content

    body = content[match.end() :]
    try:
        data = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError:
        logger.debug("Ignoring unparseable frontmatter block")
        return FrontMatter(), body

    if not isinstance(data, dict):
        return FrontMatter(), body
    try:
        return FrontMatter(**{str(k): v for k, v in data.items()}), body
    except ValidationError:
        logger.debug("Ignoring invalid frontmatter values")
        return FrontMatter(), body
