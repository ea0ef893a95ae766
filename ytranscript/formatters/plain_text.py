"""Plain text transcript — the "Copy all" text as a standalone output.

WHY: Sometimes the user just wants the words, without timestamps or
links (pasting into a summarizer, a search box, an email).

HOW: Delegates to copy_all_text() so the output is byte-identical to
what the panel's "Copy all" action puts on the clipboard, plus a single
trailing newline when non-empty.

RULES:
- Fragment texts joined by single spaces, in source order
- Output suffix: "-transcript.txt"; media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from ytranscript.core.ir import Transcript
from ytranscript.formatters.base import BaseFormatter, FormatterOutput
from ytranscript.formatters.interactive import copy_all_text


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces the whole transcript as one line of text."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        content = copy_all_text(transcript.fragments)
        if content:
            content += "\n"
        return [
            FormatterOutput(
                suffix="-transcript.txt",
                content=content,
                media_type="text/plain",
            )
        ]
