"""Pydantic request/response models for the panel service.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and the generated OpenAPI docs at /docs.

HOW: One request model per write endpoint, one response model per
resource. Every field carries a Field(description=...).

RULES:
- Response models mirror the core dataclasses (BlockView, PanelView)
- timestamp_mod on SettingsUpdate is free-form; it is coerced with
  parse_cadence() rather than rejected
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class PanelOpenRequest(BaseModel):
    """Ephemeral state sent when a panel is opened or re-pointed."""

    url: str = Field(..., description="YouTube video URL (or bare video id).")


class MarkdownRequest(BaseModel):
    """Markdown export request, optionally with the target note."""

    url: str = Field(..., description="YouTube video URL (or bare video id).")
    document: Optional[str] = Field(
        None,
        description="Current note text. When given, an insertion point is planned.",
    )
    cursor: Optional[int] = Field(
        None,
        ge=0,
        description="Cursor offset in the note. Defaults to the end of the note.",
    )


class SettingsUpdate(BaseModel):
    """Partial settings update. Omitted fields keep their stored value."""

    timestamp_mod: Optional[Union[int, str]] = Field(
        None,
        description="Fragments per timestamp. Non-numeric or non-positive input falls back to 5.",
    )
    lang: Optional[str] = Field(None, description="Preferred caption language, e.g. 'en'.")
    country: Optional[str] = Field(None, description="Preferred country code, e.g. 'US'.")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class BlockViewResponse(BaseModel):
    """One transcript block."""

    timestamp_label: str = Field(..., description="Block start as M:SS or H:MM:SS.")
    timestamp_seconds: int = Field(..., description="Block start in whole seconds.")
    jump_url: str = Field(..., description="Video URL with &t=<seconds> appended.")
    quote_text: str = Field(..., description="Merged block text; the drag-export payload.")


class PanelResponse(BaseModel):
    """Full panel model. Title and transcript fail independently."""

    panel_id: str = Field(..., description="Identifier generated when the panel opened.")
    url: str = Field(..., description="URL the panel displays.")
    title: Optional[str] = Field(None, description="Video title, if the lookup succeeded.")
    title_error: Optional[str] = Field(None, description="Why the title lookup failed.")
    blocks: List[BlockViewResponse] = Field(default_factory=list, description="Transcript blocks.")
    copy_all_text: str = Field("", description="Whole transcript for the 'Copy all' action.")
    transcript_error: Optional[str] = Field(None, description="Why the transcript is missing.")


class PanelSummary(BaseModel):
    panel_id: str = Field(..., description="Panel identifier.")
    url: str = Field(..., description="URL the panel displays.")


class MarkdownResponse(BaseModel):
    """Rendered markdown plus the planned insertion point."""

    markdown: str = Field(..., description="Rendered markdown transcript.")
    insert_text: str = Field(..., description="Text to insert (markdown, maybe with a leading newline).")
    insertion_offset: Optional[int] = Field(None, description="Offset in the note to insert at.")
    needs_leading_newline: bool = Field(False, description="Whether a newline was prepended.")


class SettingsResponse(BaseModel):
    timestamp_mod: int = Field(..., description="Fragments per timestamp.")
    lang: str = Field(..., description="Preferred caption language.")
    country: str = Field(..., description="Preferred country code.")


class ErrorResponse(BaseModel):
    detail: str = Field(..., description="Human-readable error message.")


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status.", examples=["ok"])
    version: str = Field(..., description="Package version.")
