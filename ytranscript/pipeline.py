"""One invocation: settings in, fetched and rendered transcript out.

WHY: The CLI and the panel service run the same two flows — "export a
markdown transcript" and "build the interactive panel" — and must report
failures the same way. Keeping the flows here keeps both front ends thin.

HOW: Each flow validates the cadence first, opens a CaptionClient for the
settings' language/country, awaits the lookups one after the other, and
hands the fragments to the renderers.

  export_markdown   — title (best effort) then transcript; an empty
                      transcript is a NoCaptionsError; returns the string
  build_panel_view  — title then transcript; each failure is recorded in
                      its own field of the PanelView instead of raising

RULES:
- Cadence is validated before any network access
- Nothing is cached between invocations
- build_panel_view raises only for invalid input (cadence, unparseable URL)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ytranscript.config import TranscriptSettings
from ytranscript.core.ir import BlockView, Transcript
from ytranscript.core.segmenter import validate_cadence
from ytranscript.errors import InvalidInputError, NoCaptionsError, YTranscriptError
from ytranscript.formatters.interactive import copy_all_text, render_blocks
from ytranscript.formatters.markdown import render_markdown
from ytranscript.source.client import CaptionClient
from ytranscript.source.urls import extract_video_id

logger = logging.getLogger(__name__)

NO_TRANSCRIPT_MESSAGE = "No transcript found for this video"
NO_TRANSCRIPT_HINT = (
    "Please check if video contains any transcript or try adjust "
    "language and country in settings."
)

ClientFactory = Callable[[TranscriptSettings], CaptionClient]


def default_client_factory(settings: TranscriptSettings) -> CaptionClient:
    return CaptionClient(lang=settings.lang, country=settings.country)


@dataclass
class PanelView:
    """Everything one interactive panel displays.

    RULES:
    - title / title_error: exactly one is set after a lookup
    - blocks + copy_all_text are filled only when the transcript loaded
    - transcript_error is set when it did not (blocks stay empty)
    """

    url: str
    panel_id: Optional[str] = None
    title: Optional[str] = None
    title_error: Optional[str] = None
    blocks: List[BlockView] = field(default_factory=list)
    copy_all_text: str = ""
    transcript_error: Optional[str] = None


def _require_url(url: Optional[str]) -> str:
    value = (url or "").strip()
    if not value:
        raise InvalidInputError("Media link is empty")
    return value


async def fetch_transcript(
    url: str,
    settings: TranscriptSettings,
    client_factory: Optional[ClientFactory] = None,
) -> Transcript:
    """Fetch title and captions for the markdown flow.

    Raises:
        InvalidInputError: Bad cadence or URL.
        NoCaptionsError: No captions, or an empty caption track.
        SourceUnavailableError: Network or provider failure.
    """
    validate_cadence(settings.timestamp_mod)
    url = _require_url(url)
    factory = client_factory or default_client_factory

    async with factory(settings) as client:
        transcript = await client.fetch(url)

    if not transcript.fragments:
        raise NoCaptionsError(NO_TRANSCRIPT_MESSAGE)
    return transcript


async def export_markdown(
    url: str,
    settings: TranscriptSettings,
    client_factory: Optional[ClientFactory] = None,
) -> str:
    """Fetch a transcript and render it as markdown."""
    transcript = await fetch_transcript(url, settings, client_factory)
    logger.info(
        "Rendering %d fragments as markdown (cadence %d)",
        len(transcript.fragments),
        settings.timestamp_mod,
    )
    return render_markdown(
        transcript.title,
        transcript.source_url,
        transcript.fragments,
        settings.timestamp_mod,
    )


async def build_panel_view(
    url: str,
    settings: TranscriptSettings,
    client_factory: Optional[ClientFactory] = None,
    panel_id: Optional[str] = None,
) -> PanelView:
    """Build the interactive panel model for ``url``.

    Title and transcript are looked up in that order; a failure in one
    does not prevent the other from being shown.
    """
    validate_cadence(settings.timestamp_mod)
    url = _require_url(url)
    extract_video_id(url)
    factory = client_factory or default_client_factory

    view = PanelView(url=url, panel_id=panel_id)

    async with factory(settings) as client:
        try:
            view.title = await client.fetch_title(url)
        except YTranscriptError as exc:
            logger.warning("Title lookup failed for %s: %s", url, exc)
            view.title_error = str(exc)

        try:
            transcript = await client.fetch_transcript(url)
        except NoCaptionsError as exc:
            logger.info("No captions for %s: %s", url, exc)
            view.transcript_error = "{}. {}".format(NO_TRANSCRIPT_MESSAGE, NO_TRANSCRIPT_HINT)
            return view
        except YTranscriptError as exc:
            logger.warning("Transcript fetch failed for %s: %s", url, exc)
            view.transcript_error = str(exc)
            return view

    if not transcript.fragments:
        view.transcript_error = "{}. {}".format(NO_TRANSCRIPT_MESSAGE, NO_TRANSCRIPT_HINT)
        return view

    view.blocks = render_blocks(transcript.fragments, settings.timestamp_mod, url)
    view.copy_all_text = copy_all_text(transcript.fragments)
    return view
