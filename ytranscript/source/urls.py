"""YouTube URL parsing.

RULES:
- Accepts a bare 11-character video id, or a youtube.com / youtu.be URL
- Supported URL shapes: /watch?v=ID, youtu.be/ID, /shorts/ID, /embed/ID,
  /live/ID; the scheme may be omitted
- Anything else raises InvalidUrlError (empty input included)
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from ytranscript.errors import InvalidUrlError

_VIDEO_ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")
_PATH_PREFIXES = {"shorts", "embed", "live", "v"}


def extract_video_id(value: str) -> str:
    """Return the 11-character video id referenced by ``value``."""
    raw = (value or "").strip()
    if not raw:
        raise InvalidUrlError("No video URL given")

    if _VIDEO_ID_RE.fullmatch(raw):
        return raw

    if not re.match(r"^https?://", raw):
        if "youtube.com" in raw or "youtu.be" in raw:
            raw = "https://" + raw
        else:
            raise InvalidUrlError("Not a YouTube URL: {}".format(value))

    parsed = urlparse(raw)
    host = parsed.netloc.lower()
    path_parts = [p for p in parsed.path.split("/") if p]

    if host.endswith("youtu.be") and path_parts:
        if _VIDEO_ID_RE.fullmatch(path_parts[0]):
            return path_parts[0]

    if host.endswith("youtube.com") or host.endswith("youtube-nocookie.com"):
        query_v = parse_qs(parsed.query).get("v", [])
        if query_v and _VIDEO_ID_RE.fullmatch(query_v[0]):
            return query_v[0]
        if len(path_parts) >= 2 and path_parts[0] in _PATH_PREFIXES:
            if _VIDEO_ID_RE.fullmatch(path_parts[1]):
                return path_parts[1]

    raise InvalidUrlError("Could not extract a video id from: {}".format(value))


def watch_url(video_id: str) -> str:
    """Canonical watch URL for a video id."""
    return "https://www.youtube.com/watch?v={}".format(video_id)
