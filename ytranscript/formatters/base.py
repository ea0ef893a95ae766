"""Abstract base formatter and output container.

WHY: Every output consumes the same fetched Transcript but produces
different content (markdown note text, panel block JSON, plain text).
This base class gives the CLI and the HTTP service one interface to
drive any of them.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. The grouping cadence is fixed at construction and validated
immediately, so a bad cadence fails before any rendering starts.
FormatterOutput bundles a file suffix with content and MIME type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list of FormatterOutput (usually one)
- ``suffix`` starts with a hyphen, e.g. ``"-transcript.md"``
- The caller is responsible for prepending the output filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ytranscript.config import DEFAULT_TIMESTAMP_MOD
from ytranscript.core.ir import Transcript
from ytranscript.core.segmenter import validate_cadence


@dataclass
class FormatterOutput:
    """One output produced by a formatter.

    Attributes:
        suffix: File suffix appended to the output stem,
                e.g. ``"-transcript.md"`` → ``"dQw4w9WgXcQ-transcript.md"``.
        content: The rendered text.
        media_type: MIME type for the content, e.g. ``"text/markdown"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all transcript formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    def __init__(self, cadence: int = DEFAULT_TIMESTAMP_MOD) -> None:
        self.cadence = validate_cadence(cadence)

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Markdown'."""

    @abstractmethod
    def format(self, transcript: Transcript) -> list[FormatterOutput]:
        """Render a fetched transcript.

        Args:
            transcript: Fragments, source URL, and optional title.

        Returns:
            List of FormatterOutput objects.
        """
