"""Per-site template cache with time-based staleness."""

import logging
import threading
import time
from pathlib import Path
from typing import Any, Callable, NamedTuple

import jinja2

from mdsite.core.errors import TemplateExecFailure, TemplateParseFailure

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"
STAGES = ("header", "view", "dir", "footer")


class TemplateEntry(NamedTuple):
    """A parsed template and the clock reading at which it was parsed."""

    template: jinja2.Template
    parsed_at: float


def create_environment() -> jinja2.Environment:
    """Jinja2 environment shared by all cached templates."""
    return jinja2.Environment(
        autoescape=True,
        keep_trailing_newline=True,
    )


class TemplateCache:
    """Parsed templates keyed by (template root, stage name).

    An entry older than ``timeout`` seconds is reparsed on the next read;
    a ``timeout`` of zero or less keeps entries forever. Lookup and parse
    happen under one lock, so concurrent readers of a stale entry trigger a
    single reparse and only ever see fully built templates.
    """

    def __init__(
        self,
        timeout: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        environment: jinja2.Environment | None = None,
    ) -> None:
        self.timeout = timeout
        self._clock = clock
        self._env = environment or create_environment()
        self._entries: dict[tuple[Path, str], TemplateEntry] = {}
        self._lock = threading.Lock()
        self.parse_count: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def _is_stale(self, entry: TemplateEntry, now: float) -> bool:
        if self.timeout <= 0:
            return False
        return now - entry.parsed_at > self.timeout

    def _parse(self, root: Path, stage: str) -> jinja2.Template:
        path = root / f"{stage}{TEMPLATE_SUFFIX}"
        try:
            source = path.read_text(encoding="utf-8")
            template = self._env.from_string(source)
        except (OSError, UnicodeDecodeError, jinja2.TemplateError) as exc:
            logger.error("Could not parse template %s: %s", path, exc)
            raise TemplateParseFailure(stage, f"Could not parse template {path}") from exc
        self.parse_count += 1
        logger.debug("Parsed template %s", path)
        return template

    def get(self, root: Path, stage: str) -> jinja2.Template:
        """Return the parsed template, parsing it on a miss or expiry."""
        key = (root, stage)
        with self._lock:
            now = self._clock()
            entry = self._entries.get(key)
            if entry is None or self._is_stale(entry, now):
                entry = TemplateEntry(self._parse(root, stage), now)
                self._entries[key] = entry
            return entry.template

    def render(self, root: Path, stage: str, context: dict[str, Any]) -> str:
        """Render one template stage for ``root`` with ``context``."""
        template = self.get(root, stage)
        try:
            return template.render(context)
        except Exception as exc:
            logger.exception("Template %s failed to render for %s", stage, root)
            raise TemplateExecFailure(stage, f"Could not render template {stage}") from exc

    def clear(self) -> None:
        """Drop every cached template."""
        with self._lock:
            self._entries.clear()
