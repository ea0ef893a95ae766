"""Intermediate representation dataclasses for caption tracks and their views.

WHY: YouTube returns a flat list of timed caption fragments. The markdown
export and the interactive panel both need the same fragments grouped into
blocks, but they render them differently. A small set of typed dataclasses
decouples fetching from segmentation and segmentation from rendering.

HOW: Five dataclasses:
  CaptionFragment    — one timed unit of caption text (milliseconds)
  Transcript         — what the caption source returns for one video
  Block              — a run of consecutive fragments under one timestamp
  TranscriptDocument — title + link + blocks for the markdown export
  BlockView          — one clickable, draggable block in the panel

RULES:
- Offsets are integer milliseconds from video start (as YouTube reports them)
- Fragments are kept in source order; nothing here re-sorts them
- Blocks and views are derived per invocation and never persisted
- merged_text joins fragment texts with single spaces, no trailing space
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CaptionFragment:
    """A single caption line with its offset from the start of the video.

    RULES:
    - text: trimmed, non-empty (the caption source drops blank lines)
    - offset_ms: integer milliseconds, >= 0
    """

    text: str
    offset_ms: int


@dataclass
class Transcript:
    """A fetched caption track for one video.

    WHY: The caption source yields the fragments and, when the title lookup
    succeeds, the video title. Renderers need both plus the URL the user
    gave (jump links are built from it verbatim).

    RULES:
    - source_url: the URL exactly as supplied by the user
    - fragments: ordered by non-decreasing offset_ms
    - title: None when the lookup failed or was skipped
    """

    source_url: str
    fragments: list[CaptionFragment] = field(default_factory=list)
    title: str | None = None


@dataclass
class Block:
    """A run of consecutive fragments merged under one timestamp.

    RULES:
    - start_offset_ms equals the offset of the first fragment in the block
    - merged_text is the fragment texts joined by single spaces
    - fragment_count is the number of fragments merged (the last block of
      a transcript may hold fewer than the cadence)
    """

    start_offset_ms: int
    merged_text: str
    fragment_count: int


@dataclass
class TranscriptDocument:
    """Everything the markdown export needs: heading, link, and blocks."""

    title: str
    source_url: str
    blocks: list[Block] = field(default_factory=list)


@dataclass
class BlockView:
    """Display contract for one block of the interactive panel.

    WHY: The panel host (browser, editor plugin, anything that talks to the
    HTTP service) renders blocks; it should not need to know how they were
    grouped. BlockView carries exactly what a block needs on screen.

    RULES:
    - timestamp_label: "M:SS" / "H:MM:SS" of the block start
    - timestamp_seconds: whole seconds of the block start (floor)
    - jump_url: source_url + "&t=" + timestamp_seconds, no normalization
    - quote_text: the block's merged text, also the drag-export payload
    """

    timestamp_label: str
    timestamp_seconds: int
    jump_url: str
    quote_text: str

    @property
    def drag_payload(self) -> dict[str, str]:
        """MIME-keyed data a host attaches when the block is dragged."""
        return {"text/plain": self.quote_text}
