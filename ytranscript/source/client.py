"""Async caption source for YouTube videos.

WHY: Both the markdown export and the interactive panel start from the
same two lookups: the video title and the timed caption track. This
module hides the HTTP details and maps every provider failure onto the
package's error taxonomy, so callers only ever see InvalidUrlError,
NoCaptionsError or SourceUnavailableError.

HOW: CaptionClient is an async context manager around httpx.AsyncClient.
The title comes from YouTube's oEmbed endpoint. The caption track comes
from youtube-transcript-api, whose API is blocking, so the call runs in
a worker thread via asyncio.to_thread. fetch() awaits the title first and
then the transcript, one after the other.

RULES:
- Always use the async context manager (async with CaptionClient(...) as client:)
- Language preference is [f"{lang}-{country}", lang]; Accept-Language too
- Fragment texts are stripped; blank fragments are dropped
- Offsets are converted from float seconds to integer milliseconds
- A failed title lookup inside fetch() is logged and leaves title=None
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

import httpx
import requests
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from ytranscript.config import DEFAULT_COUNTRY, DEFAULT_LANG, HTTP_TIMEOUT_S, OEMBED_URL
from ytranscript.core.ir import CaptionFragment, Transcript
from ytranscript.errors import (
    InvalidUrlError,
    NoCaptionsError,
    SourceUnavailableError,
    YTranscriptError,
)
from ytranscript.source.urls import extract_video_id, watch_url

logger = logging.getLogger(__name__)


def preferred_languages(lang: str, country: str) -> List[str]:
    """Caption language codes to request, most specific first."""
    languages: List[str] = []
    if lang and country:
        languages.append("{}-{}".format(lang, country.upper()))
    if lang:
        languages.append(lang)
    return languages or [DEFAULT_LANG]


def accept_language(lang: str, country: str) -> str:
    """Accept-Language header value for the given preference."""
    return ",".join(preferred_languages(lang, country))


class CaptionClient:
    """Async client for YouTube titles and caption tracks.

    RULES:
    - Use as: async with CaptionClient(lang=..., country=...) as client: ...
    - transport is passed to httpx (tests use httpx.MockTransport)
    - transcript_api defaults to a YouTubeTranscriptApi sharing the
      Accept-Language preference; tests inject a mock
    """

    def __init__(
        self,
        lang: Optional[str] = None,
        country: Optional[str] = None,
        oembed_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        transcript_api: Optional[Any] = None,
    ) -> None:
        self._lang = lang or DEFAULT_LANG
        self._country = country if country is not None else DEFAULT_COUNTRY
        self._oembed_url = oembed_url or OEMBED_URL
        self._timeout = timeout if timeout is not None else HTTP_TIMEOUT_S
        self._transport = transport
        self._transcript_api = transcript_api
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> CaptionClient:
        self._client = httpx.AsyncClient(
            headers={"Accept-Language": accept_language(self._lang, self._country)},
            timeout=httpx.Timeout(self._timeout, connect=10.0),
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "CaptionClient must be used as an async context manager: "
                "async with CaptionClient() as client: ..."
            )
        return self._client

    def _ensure_transcript_api(self) -> Any:
        if self._transcript_api is None:
            session = requests.Session()
            session.headers["Accept-Language"] = accept_language(self._lang, self._country)
            self._transcript_api = YouTubeTranscriptApi(http_client=session)
        return self._transcript_api

    # ------------------------------------------------------------------
    # Title lookup
    # ------------------------------------------------------------------

    async def fetch_title(self, url: str) -> str:
        """Look up the video title through oEmbed.

        Raises:
            InvalidUrlError: If no video id can be parsed from url.
            SourceUnavailableError: On network errors, non-200 responses,
                or a response without a title.
        """
        client = self._ensure_client()
        video_id = extract_video_id(url)

        try:
            resp = await client.get(
                self._oembed_url,
                params={"url": watch_url(video_id), "format": "json"},
            )
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(
                "Title lookup failed: {}".format(exc)
            ) from exc

        if resp.status_code != 200:
            raise SourceUnavailableError(
                "Title lookup failed with HTTP {}".format(resp.status_code),
                status_code=resp.status_code,
            )

        try:
            title = resp.json().get("title")
        except ValueError as exc:
            raise SourceUnavailableError("Title lookup returned invalid JSON") from exc

        if not title:
            raise SourceUnavailableError("Title lookup returned no title")
        return title

    # ------------------------------------------------------------------
    # Caption track
    # ------------------------------------------------------------------

    async def fetch_transcript(self, url: str) -> Transcript:
        """Fetch the caption track for ``url`` (title left unset).

        Raises:
            InvalidUrlError: If no video id can be parsed from url.
            NoCaptionsError: If the video has no captions in the preferred
                languages, or captions are disabled.
            SourceUnavailableError: On network or provider failures.
        """
        video_id = extract_video_id(url)
        api = self._ensure_transcript_api()
        languages = preferred_languages(self._lang, self._country)

        try:
            fetched = await asyncio.to_thread(api.fetch, video_id, languages=languages)
        except (TranscriptsDisabled, NoTranscriptFound) as exc:
            raise NoCaptionsError(
                "No transcript found for video {} (languages: {})".format(
                    video_id, ", ".join(languages)
                )
            ) from exc
        except InvalidVideoId as exc:
            raise InvalidUrlError("Invalid video id: {}".format(video_id)) from exc
        except VideoUnavailable as exc:
            raise SourceUnavailableError(
                "Video {} is unavailable".format(video_id)
            ) from exc
        except CouldNotRetrieveTranscript as exc:
            raise SourceUnavailableError(
                "Could not retrieve transcript for video {}".format(video_id)
            ) from exc
        except requests.RequestException as exc:
            raise SourceUnavailableError(
                "Network error while fetching transcript: {}".format(exc)
            ) from exc

        fragments: List[CaptionFragment] = []
        for snippet in fetched:
            text = (snippet.text or "").strip()
            if not text:
                continue
            fragments.append(CaptionFragment(
                text=text,
                offset_ms=max(0, int(round(snippet.start * 1000))),
            ))

        logger.info("Fetched %d caption fragments for video %s", len(fragments), video_id)
        return Transcript(source_url=url, fragments=fragments)

    # ------------------------------------------------------------------
    # Both
    # ------------------------------------------------------------------

    async def fetch(self, url: str) -> Transcript:
        """Fetch title (best effort) and then the caption track."""
        title: Optional[str] = None
        try:
            title = await self.fetch_title(url)
        except InvalidUrlError:
            raise
        except YTranscriptError as exc:
            logger.warning("Title lookup failed for %s: %s", url, exc)

        transcript = await self.fetch_transcript(url)
        transcript.title = title
        return transcript
