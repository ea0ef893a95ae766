"""Markdown transcript export with inline bold timestamps.

WHY: The main use of ytranscript is dropping a readable transcript into a
markdown note. Readers skim prose, so the export is flowing text with a
bold timestamp every ``cadence`` lines and a paragraph break after each
full run, headed by the video title and a link back to the video.

HOW: Fragments are grouped with the markdown-mode segmenter. Each block
becomes ``**[M:SS]** `` followed by its fragment texts, each followed by a
single space; a full block (``cadence`` fragments) is closed by a blank
line. This reproduces the per-fragment rule exactly:

    i % cadence == 0        → timestamp marker before fragment i
    always                  → "{text} "
    (i + 1) % cadence == 0  → "\\n\\n" after fragment i

RULES:
- Heading is "## {title}" with "YouTube Transcript" when title is missing
- "[Video Link]({url})" on its own paragraph after the heading
- Trailing whitespace after the last fragment is left as-is
- Output suffix: "-transcript.md"; media type: "text/markdown"
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ytranscript.core.ir import CaptionFragment, Transcript, TranscriptDocument
from ytranscript.core.segmenter import segment_markdown
from ytranscript.core.timestamps import format_offset
from ytranscript.formatters.base import BaseFormatter, FormatterOutput

DEFAULT_TITLE = "YouTube Transcript"


def build_document(
    title: Optional[str],
    source_url: str,
    fragments: Sequence[CaptionFragment],
    cadence: int,
) -> TranscriptDocument:
    """Group fragments into a TranscriptDocument for markdown rendering."""
    return TranscriptDocument(
        title=title or DEFAULT_TITLE,
        source_url=source_url,
        blocks=segment_markdown(fragments, cadence),
    )


def render_document(document: TranscriptDocument, cadence: int) -> str:
    """Render an already-segmented document to the markdown string."""
    parts: List[str] = [
        "## {}\n\n[Video Link]({})\n\n".format(document.title, document.source_url)
    ]

    for block in document.blocks:
        parts.append("**[{}]** ".format(format_offset(block.start_offset_ms)))
        parts.append(block.merged_text + " ")
        if block.fragment_count == cadence:
            parts.append("\n\n")

    return "".join(parts)


def render_markdown(
    title: Optional[str],
    source_url: str,
    fragments: Sequence[CaptionFragment],
    cadence: int,
) -> str:
    """Render fragments as a markdown transcript.

    Args:
        title: Video title, or None to use "YouTube Transcript".
        source_url: URL used for the "[Video Link]" line.
        fragments: Caption fragments in source order.
        cadence: Fragments per timestamp (>= 1).

    Returns:
        The complete markdown string.

    Raises:
        InvalidInputError: If cadence is not a positive integer.
    """
    document = build_document(title, source_url, fragments, cadence)
    return render_document(document, cadence)


class MarkdownFormatter(BaseFormatter):
    """Formatter that produces the markdown note export."""

    @property
    def name(self) -> str:
        return "Markdown"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        content = render_markdown(
            transcript.title,
            transcript.source_url,
            transcript.fragments,
            self.cadence,
        )
        return [
            FormatterOutput(
                suffix="-transcript.md",
                content=content,
                media_type="text/markdown",
            )
        ]
