"""Block views for the interactive transcript panel.

WHY: The panel shows the transcript as uniform blocks, each anchored at
the moment the block began, with a link that jumps the video to that
moment. Users drag a block into a note to quote it, or copy the whole
transcript from any block's context menu.

HOW: Fragments are grouped with the interactive-mode segmenter (first
fragment buffered, flush on every later multiple of the cadence, trailing
buffer always flushed). Each Block becomes a BlockView. The "copy all"
text is derived from the fragment list directly, so it keeps source order
regardless of how blocks were cut.

RULES:
- jump_url = source_url + "&t=" + whole seconds, plain concatenation
- timestamp_seconds = start_offset_ms // 1000
- quote_text is the drag-export payload of its block
- copy_all_text joins every fragment text with a single space
- Formatter output: "-blocks.json", media type "application/json"
"""

from __future__ import annotations

import json
from typing import List, Sequence

from ytranscript.core.ir import BlockView, CaptionFragment, Transcript
from ytranscript.core.segmenter import segment_interactive
from ytranscript.core.timestamps import format_offset
from ytranscript.formatters.base import BaseFormatter, FormatterOutput


def jump_url(source_url: str, offset_ms: int) -> str:
    """Link that opens the video at ``offset_ms`` (whole seconds)."""
    return "{}&t={}".format(source_url, offset_ms // 1000)


def render_blocks(
    fragments: Sequence[CaptionFragment],
    cadence: int,
    source_url: str,
) -> List[BlockView]:
    """Build the panel's block views.

    Args:
        fragments: Caption fragments in source order.
        cadence: Fragments per block (>= 1).
        source_url: URL the jump links are appended to.

    Returns:
        One BlockView per block, in order. Empty for zero fragments.

    Raises:
        InvalidInputError: If cadence is not a positive integer.
    """
    views: List[BlockView] = []
    for block in segment_interactive(fragments, cadence):
        views.append(BlockView(
            timestamp_label=format_offset(block.start_offset_ms),
            timestamp_seconds=block.start_offset_ms // 1000,
            jump_url=jump_url(source_url, block.start_offset_ms),
            quote_text=block.merged_text,
        ))
    return views


def copy_all_text(fragments: Sequence[CaptionFragment]) -> str:
    """Whole transcript as plain text, for the "Copy all" action."""
    return " ".join(f.text for f in fragments)


class InteractiveFormatter(BaseFormatter):
    """Formatter that serializes the panel model to JSON."""

    @property
    def name(self) -> str:
        return "Interactive Blocks"

    def format(self, transcript: Transcript) -> List[FormatterOutput]:
        views = render_blocks(transcript.fragments, self.cadence, transcript.source_url)
        payload = {
            "title": transcript.title,
            "url": transcript.source_url,
            "blocks": [
                {
                    "timestamp_label": v.timestamp_label,
                    "timestamp_seconds": v.timestamp_seconds,
                    "jump_url": v.jump_url,
                    "quote_text": v.quote_text,
                }
                for v in views
            ],
            "copy_all": copy_all_text(transcript.fragments),
        }
        return [
            FormatterOutput(
                suffix="-blocks.json",
                content=json.dumps(payload, ensure_ascii=False, indent=2),
                media_type="application/json",
            )
        ]
