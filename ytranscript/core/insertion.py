"""Frontmatter-aware insertion planning for markdown notes.

WHY: Inserting a transcript at the cursor is wrong when the cursor sits
inside the YAML frontmatter block at the top of a note — the note's
metadata would be corrupted. The planner decides where the text should
actually go, without touching the document.

HOW: A prefix-anchored regex detects frontmatter at offset 0 only. If the
cursor is inside (or at the end of) that block, the insertion point moves
to just after it, and a leading newline is requested unless a blank line
already follows. Otherwise the cursor offset is used as-is.

RULES:
- Frontmatter counts only when it starts at offset 0
- The planner never mutates the document; it returns an InsertionPlan
- find_media_link() reads the first "media_link:" property of a note
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_FRONTMATTER_RE = re.compile(r"^---\r?\n(?:.+\r?\n)+?---\r?\n")
_MEDIA_LINK_RE = re.compile(r"media_link:[ \t]*(.*?)[ \t]*(?:\r?\n|$)")


@dataclass(frozen=True)
class InsertionPlan:
    """Where to insert, and whether the inserted text needs a leading newline."""

    offset: int
    needs_leading_newline: bool = False

    def apply(self, text: str) -> str:
        """Return the text to insert at ``offset``."""
        if self.needs_leading_newline:
            return "\n" + text
        return text


def frontmatter_end(document_text: str) -> Optional[int]:
    """Length of the leading frontmatter block, or None when there is none."""
    match = _FRONTMATTER_RE.match(document_text)
    if match is None:
        return None
    return match.end()


def plan_insertion(document_text: str, cursor_offset: int) -> InsertionPlan:
    """Decide the effective insertion offset for a cursor position.

    Args:
        document_text: Full current text of the note.
        cursor_offset: Character offset of the cursor in document_text.

    Returns:
        InsertionPlan with the offset to use and the leading-newline flag.
    """
    end = frontmatter_end(document_text)
    if end is not None and cursor_offset <= end:
        needs_newline = not document_text[end:].startswith("\n\n")
        return InsertionPlan(offset=end, needs_leading_newline=needs_newline)
    return InsertionPlan(offset=cursor_offset, needs_leading_newline=False)


def find_media_link(document_text: str) -> Optional[str]:
    """Return the value of the note's ``media_link`` property, if set."""
    match = _MEDIA_LINK_RE.search(document_text)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None
