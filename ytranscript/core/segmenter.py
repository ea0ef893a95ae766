"""Partition caption fragments into timestamped blocks.

WHY: Both outputs (markdown export and interactive panel) show one
timestamp per ``cadence`` fragments. They were written independently and
disagree on where a block is opened, so each grouping rule lives here as
its own named strategy instead of one speculative unified loop.

HOW:
  segment_markdown    — stride over the fragments: fragment i opens a block
                        when i % cadence == 0, closes it when
                        (i + 1) % cadence == 0.
  segment_interactive — buffer-and-flush: fragment 0 is buffered silently;
                        each later fragment with i % cadence == 0 flushes
                        the buffer (anchored at the fragment that opened it)
                        and starts a new one. The trailing buffer is always
                        flushed at the end.
  segment             — dispatch on SegmentMode.

RULES:
- cadence must be an int >= 1; anything else raises InvalidInputError
  before iteration starts
- Zero fragments yields zero blocks (not an error)
- Blocks are never re-sorted; start offsets follow fragment order
- len(blocks) == ceil(len(fragments) / cadence) in both modes
"""

from __future__ import annotations

import enum
from typing import List, Sequence

from ytranscript.core.ir import Block, CaptionFragment
from ytranscript.errors import InvalidInputError


class SegmentMode(str, enum.Enum):
    """Named grouping strategies."""

    MARKDOWN = "markdown"
    INTERACTIVE = "interactive"


def validate_cadence(cadence: int) -> int:
    """Return cadence unchanged, or raise InvalidInputError.

    bool is rejected explicitly because it is an int subclass.
    """
    if isinstance(cadence, bool) or not isinstance(cadence, int):
        raise InvalidInputError(
            "Timestamp cadence must be an integer, got {!r}".format(cadence)
        )
    if cadence < 1:
        raise InvalidInputError(
            "Timestamp cadence must be at least 1, got {}".format(cadence)
        )
    return cadence


def _make_block(fragments: Sequence[CaptionFragment]) -> Block:
    return Block(
        start_offset_ms=fragments[0].offset_ms,
        merged_text=" ".join(f.text for f in fragments),
        fragment_count=len(fragments),
    )


def segment_markdown(
    fragments: Sequence[CaptionFragment],
    cadence: int,
) -> List[Block]:
    """Group fragments the way the markdown export places its timestamps."""
    validate_cadence(cadence)

    blocks: List[Block] = []
    current: List[CaptionFragment] = []

    for i, fragment in enumerate(fragments):
        if i % cadence == 0:
            current = []
        current.append(fragment)
        if (i + 1) % cadence == 0:
            blocks.append(_make_block(current))
            current = []

    # Partial last run (fragment count not a multiple of cadence)
    if current:
        blocks.append(_make_block(current))

    return blocks


def segment_interactive(
    fragments: Sequence[CaptionFragment],
    cadence: int,
) -> List[Block]:
    """Group fragments the way the interactive panel builds its blocks."""
    validate_cadence(cadence)

    blocks: List[Block] = []
    buffer: List[CaptionFragment] = []

    for i, fragment in enumerate(fragments):
        if i == 0:
            buffer.append(fragment)
            continue
        if i % cadence == 0:
            blocks.append(_make_block(buffer))
            buffer = []
        buffer.append(fragment)

    if buffer:
        blocks.append(_make_block(buffer))

    return blocks


_STRATEGIES = {
    SegmentMode.MARKDOWN: segment_markdown,
    SegmentMode.INTERACTIVE: segment_interactive,
}


def segment(
    fragments: Sequence[CaptionFragment],
    cadence: int,
    mode: SegmentMode = SegmentMode.MARKDOWN,
) -> List[Block]:
    """Partition fragments into blocks using the named strategy."""
    return _STRATEGIES[SegmentMode(mode)](fragments, cadence)
