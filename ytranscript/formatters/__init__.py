"""Output formatter registry.

WHY: The CLI and the HTTP service need a single lookup to find a
formatter by name. A central dict makes adding a format a one-line change.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate with the cadence they read from settings:
``formatter = FORMATTERS["markdown"](cadence=settings.timestamp_mod)``.

RULES:
- Keys are snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ytranscript.formatters.interactive import InteractiveFormatter
from ytranscript.formatters.markdown import MarkdownFormatter
from ytranscript.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from ytranscript.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "markdown": MarkdownFormatter,
    "interactive": InteractiveFormatter,
    "plain_text": PlainTextFormatter,
}
