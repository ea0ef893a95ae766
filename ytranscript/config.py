"""Configuration constants, user settings, and .env loading.

WHY: Three user-editable values drive every invocation — the timestamp
cadence, the preferred caption language, and the preferred country. They
must survive between runs, and their defaults must be easy to find and
override. Endpoint URLs and timeouts live alongside them.

HOW: python-dotenv loads the .env file on import. Defaults are module
constants read from the environment. TranscriptSettings is a plain
dataclass persisted as a flat JSON object; missing keys fall back to the
defaults. parse_cadence() turns free-form user input into a safe cadence.

RULES:
- Default cadence 5, language "en", country "EN"
- Non-numeric cadence input falls back to the default (5)
- Non-positive cadence input also falls back to the default
- Numeric input is read like parseInt: the leading integer wins ("12s" → 12)
- Settings are read once per invocation; last write wins
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

FALLBACK_TIMESTAMP_MOD = 5
"""Cadence used whenever user input cannot be turned into a positive int."""


def parse_cadence(value: Any, default: int = FALLBACK_TIMESTAMP_MOD) -> int:
    """Coerce a user-supplied cadence to a positive integer.

    RULES:
    - int input is used directly (bool is not treated as a number)
    - str input uses its leading integer prefix, after optional whitespace
      and sign; no prefix means the default
    - Results below 1 are replaced by the default
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value)
    elif isinstance(value, str):
        match = re.match(r"\s*([+-]?\d+)", value)
        if match is None:
            return default
        number = int(match.group(1))
    else:
        return default

    if number < 1:
        return default
    return number


DEFAULT_TIMESTAMP_MOD = parse_cadence(
    os.getenv("YTRANSCRIPT_TIMESTAMP_MOD", str(FALLBACK_TIMESTAMP_MOD))
)
DEFAULT_LANG = os.getenv("YTRANSCRIPT_LANG", "en")
DEFAULT_COUNTRY = os.getenv("YTRANSCRIPT_COUNTRY", "EN")

SETTINGS_PATH = Path(
    os.getenv(
        "YTRANSCRIPT_SETTINGS_PATH",
        str(Path.home() / ".ytranscript" / "settings.json"),
    )
).expanduser()

OEMBED_URL = os.getenv("YTRANSCRIPT_OEMBED_URL", "https://www.youtube.com/oembed")
HTTP_TIMEOUT_S = float(os.getenv("YTRANSCRIPT_HTTP_TIMEOUT", "30"))


# ---------------------------------------------------------------------------
# User settings
# ---------------------------------------------------------------------------


@dataclass
class TranscriptSettings:
    """The three tunables, passed by value into every formatting call.

    RULES:
    - timestamp_mod: fragments per timestamp (cadence), always >= 1
    - lang: preferred caption language code, e.g. "en"
    - country: preferred country code, e.g. "EN" or "US"
    """

    timestamp_mod: int = DEFAULT_TIMESTAMP_MOD
    lang: str = DEFAULT_LANG
    country: str = DEFAULT_COUNTRY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TranscriptSettings:
        """Build settings from stored data, filling gaps with defaults."""
        settings = cls()
        if "timestamp_mod" in data:
            settings.timestamp_mod = parse_cadence(data["timestamp_mod"])
        if data.get("lang"):
            settings.lang = str(data["lang"])
        if data.get("country"):
            settings.country = str(data["country"])
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: Optional[Union[str, Path]] = None) -> TranscriptSettings:
    """Load settings from the JSON file, or defaults if it does not exist.

    An unreadable or malformed file is logged and treated as empty.
    """
    settings_path = Path(path) if path is not None else SETTINGS_PATH
    if not settings_path.is_file():
        return TranscriptSettings()

    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable settings file: %s", settings_path)
        return TranscriptSettings()

    if not isinstance(data, dict):
        logger.warning("Ignoring settings file without a JSON object: %s", settings_path)
        return TranscriptSettings()

    return TranscriptSettings.from_dict(data)


def save_settings(
    settings: TranscriptSettings,
    path: Optional[Union[str, Path]] = None,
) -> Path:
    """Write settings to the JSON file, creating its directory if needed."""
    settings_path = Path(path) if path is not None else SETTINGS_PATH
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(
        json.dumps(settings.to_dict(), indent=2) + "\n",
        encoding="utf-8",
    )
    return settings_path
