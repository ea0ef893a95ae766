"""Caption source package — async access to YouTube titles and caption tracks.

WHY: Fetching is the only I/O the engine depends on. Keeping it behind one
client class lets the pipeline, CLI, and panel service share it, and lets
tests replace it wholesale.

HOW: CaptionClient wraps httpx.AsyncClient (title lookup) and
youtube-transcript-api (caption track). urls.py parses video ids.

RULES:
- All YouTube access goes through CaptionClient (no direct HTTP elsewhere)
- Provider exceptions never escape; they are mapped to ytranscript.errors
"""

from ytranscript.source.client import CaptionClient
from ytranscript.source.urls import extract_video_id, watch_url

__all__ = ["CaptionClient", "extract_video_id", "watch_url"]
