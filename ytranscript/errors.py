"""Typed error taxonomy shared by the caption source, pipeline, and front ends.

WHY: Callers (CLI, panel service) must report "no captions" differently from
"YouTube is unreachable" and from "you typed a bad URL". A small exception
hierarchy lets each layer catch exactly what it can handle.

HOW: One base class, three families. InvalidInputError also subclasses
ValueError so generic ``except ValueError`` handlers still catch bad input.

RULES:
- The segmentation/formatting engine only ever raises InvalidInputError
  (bad cadence); zero fragments is never an error
- SourceUnavailableError is raised only at the caption-fetch boundary
- NoCaptionsError covers both "captions disabled" and "fetched but empty"
"""

from __future__ import annotations


class YTranscriptError(Exception):
    """Base class for all ytranscript errors."""


class InvalidInputError(YTranscriptError, ValueError):
    """Raised for unusable input: empty URL, missing property, bad cadence."""


class InvalidUrlError(InvalidInputError):
    """Raised when no YouTube video id can be extracted from the input."""


class NoCaptionsError(YTranscriptError):
    """Raised when a video has no usable caption track."""


class SourceUnavailableError(YTranscriptError):
    """Raised when the caption provider or the network fails.

    The optional status_code carries the HTTP status when the failure came
    from a non-2xx response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
