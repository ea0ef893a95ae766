"""Shared test fixtures for the ytranscript test suite.

WHY: Most modules need the same small caption track, and everything above
the core needs a caption client that never touches the network.

HOW: SAMPLE_FRAGMENTS is the five-line track used throughout (one line
per second). FakeCaptionClient mimics CaptionClient's async interface and
records the order of calls; tests tweak its attributes to simulate
failures.

RULES:
- No test in this suite performs real network I/O
- FakeCaptionClient.calls records ("title" | "transcript", url) tuples
"""

from typing import List, Optional

import pytest

from ytranscript.config import TranscriptSettings
from ytranscript.core.ir import CaptionFragment, Transcript

SAMPLE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

SAMPLE_FRAGMENTS: List[CaptionFragment] = [
    CaptionFragment(text="Hello", offset_ms=0),
    CaptionFragment(text="world", offset_ms=1000),
    CaptionFragment(text="foo", offset_ms=2000),
    CaptionFragment(text="bar", offset_ms=3000),
    CaptionFragment(text="baz", offset_ms=4000),
]


class FakeCaptionClient:
    """In-memory stand-in for CaptionClient."""

    def __init__(
        self,
        fragments: Optional[List[CaptionFragment]] = None,
        title: str = "Sample Video",
        title_error: Optional[Exception] = None,
        transcript_error: Optional[Exception] = None,
    ) -> None:
        self.fragments = list(fragments or [])
        self.title = title
        self.title_error = title_error
        self.transcript_error = transcript_error
        self.calls: List[tuple] = []
        self.entered = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def fetch_title(self, url: str) -> str:
        self.calls.append(("title", url))
        if self.title_error is not None:
            raise self.title_error
        return self.title

    async def fetch_transcript(self, url: str) -> Transcript:
        self.calls.append(("transcript", url))
        if self.transcript_error is not None:
            raise self.transcript_error
        return Transcript(source_url=url, fragments=list(self.fragments))

    async def fetch(self, url: str) -> Transcript:
        title = None
        try:
            title = await self.fetch_title(url)
        except Exception:
            title = None
        transcript = await self.fetch_transcript(url)
        transcript.title = title
        return transcript


@pytest.fixture
def sample_fragments():
    return list(SAMPLE_FRAGMENTS)


@pytest.fixture
def fake_client():
    return FakeCaptionClient(fragments=SAMPLE_FRAGMENTS)


@pytest.fixture
def fake_factory(fake_client):
    """Client factory that always hands out the same fake client."""
    return lambda settings: fake_client


@pytest.fixture
def settings():
    return TranscriptSettings(timestamp_mod=2, lang="en", country="US")
