"""Command-line interface for ytranscript.

WHY: The everyday use is "put the transcript of this video into my note".
The CLI wires together settings, the caption source, the renderers, and
the frontmatter-aware insertion planner behind a single command, and can
also print any registered format to stdout or save it to a directory.

HOW: argparse reads the URL (or, with --from-property, the note's
media_link property), settings overrides, and the output target. The
async pipeline runs via asyncio.run(). Status messages go to stderr;
rendered output goes to stdout, into the note, or into --output-dir.

RULES:
- Markdown into a note: inserted at --cursor (default: end of note),
  moved past the frontmatter when the cursor is inside it
- --cadence/--lang/--country override stored settings for this run;
  --save-settings persists them (cadence coerced, falls back to 5) and
  the same run uses the saved cadence
- The note keeps its line endings; a negative --cursor is an error
- Status output goes to stderr (not stdout)
- One "Error: ..." line and exit code 1 on failure, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ytranscript.config import (
    SETTINGS_PATH,
    TranscriptSettings,
    load_settings,
    parse_cadence,
    save_settings,
)
from ytranscript.core.insertion import find_media_link, plan_insertion
from ytranscript.errors import InvalidInputError, YTranscriptError
from ytranscript.formatters import FORMATTERS
from ytranscript.formatters.base import FormatterOutput
from ytranscript.pipeline import export_markdown, fetch_transcript
from ytranscript.source.urls import extract_video_id


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def insert_into_note(note_path: Path, text: str, cursor: Optional[int] = None) -> int:
    """Insert ``text`` into the note on disk, honouring its frontmatter.

    Args:
        note_path: Markdown note to modify.
        text: Rendered markdown to insert.
        cursor: Cursor offset; None means the end of the note.

    Returns:
        The offset the text was inserted at.

    Raises:
        InvalidInputError: If cursor is negative.

    The note keeps its own line endings (no newline translation), so
    offsets count characters of the file as stored.
    """
    if cursor is not None and cursor < 0:
        raise InvalidInputError("Cursor offset must not be negative, got {}".format(cursor))

    with note_path.open("r", encoding="utf-8", newline="") as f:
        document = f.read()
    if cursor is None or cursor > len(document):
        cursor = len(document)

    plan = plan_insertion(document, cursor)
    updated = document[:plan.offset] + plan.apply(text) + document[plan.offset:]
    with note_path.open("w", encoding="utf-8", newline="") as f:
        f.write(updated)
    return plan.offset


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Return {stem}{suffix}, or {stem}{name}-N{ext} if that already exists."""
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name, suffix_ext = suffix[:dot_idx], suffix[dot_idx:]
    else:
        suffix_name, suffix_ext = suffix, ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _resolve_settings(args: argparse.Namespace) -> TranscriptSettings:
    settings = load_settings(args.settings)
    if args.cadence is not None:
        settings.timestamp_mod = args.cadence
    if args.lang:
        settings.lang = args.lang
    if args.country:
        settings.country = args.country
    return settings


def _resolve_url(args: argparse.Namespace) -> str:
    if args.from_property:
        if not args.note:
            raise InvalidInputError("--from-property requires --note")
        content = Path(args.note).read_text(encoding="utf-8")
        url = find_media_link(content)
        if url is None:
            raise InvalidInputError("No media_link property found in the note")
        return url

    url = (args.url or "").strip()
    if not url:
        raise InvalidInputError("No video URL given")
    return url


async def _run(args: argparse.Namespace) -> int:
    """Run one invocation; returns the process exit code."""
    settings = _resolve_settings(args)

    if args.save_settings:
        stored = load_settings(args.settings)
        if args.cadence is not None:
            stored.timestamp_mod = parse_cadence(args.cadence)
        if args.lang:
            stored.lang = args.lang
        if args.country:
            stored.country = args.country
        path = save_settings(stored, args.settings)
        _status("Settings saved to {}".format(path))
        # The run uses what was saved
        settings.timestamp_mod = stored.timestamp_mod
        if not args.url and not args.from_property:
            return 0

    note_path = Path(args.note) if args.note else None
    if note_path is not None and not note_path.is_file():
        print("Error: Note not found: {}".format(note_path), file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir).resolve() if args.output_dir else None
    if output_dir is not None and not output_dir.is_dir():
        print("Error: Output directory does not exist: {}".format(output_dir), file=sys.stderr)
        return 1

    try:
        url = _resolve_url(args)

        if args.format == "markdown" and output_dir is None:
            _status("Fetching YouTube transcript...")
            markdown = await export_markdown(url, settings)
            if note_path is not None:
                offset = insert_into_note(note_path, markdown, args.cursor)
                _status("Transcript inserted successfully (offset {})".format(offset))
            else:
                sys.stdout.write(markdown)
                sys.stdout.flush()
            return 0

        formatter = FORMATTERS[args.format](cadence=settings.timestamp_mod)
        _status("Fetching YouTube transcript...")
        transcript = await fetch_transcript(url, settings)
        _status("  {} fragments".format(len(transcript.fragments)))

        outputs = formatter.format(transcript)
        if output_dir is None:
            for output in outputs:
                sys.stdout.write(output.content)
            sys.stdout.flush()
            return 0

        stem = extract_video_id(url)
        for output in outputs:
            saved = _save_output(output, stem, output_dir)
            _status("  Saved: {}".format(saved.name))
        return 0

    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        return 130
    except YTranscriptError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    except OSError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ytranscript",
        description="Fetch a YouTube transcript and render it as markdown "
                    "(optionally inserted into a note), panel blocks, or plain text.",
    )

    parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help="YouTube video URL or video id.",
    )

    parser.add_argument(
        "--note",
        default=None,
        help="Markdown note to insert the transcript into.",
    )

    parser.add_argument(
        "--cursor",
        type=int,
        default=None,
        help="Cursor offset in the note (default: end of note).",
    )

    parser.add_argument(
        "--from-property",
        action="store_true",
        help="Read the video URL from the note's media_link property.",
    )

    parser.add_argument(
        "--format",
        default="markdown",
        choices=sorted(FORMATTERS.keys()),
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Save output files here instead of printing them.",
    )

    parser.add_argument(
        "--cadence",
        type=int,
        default=None,
        help="Fragments per timestamp (overrides settings).",
    )

    parser.add_argument(
        "--lang",
        default=None,
        help="Preferred caption language (overrides settings).",
    )

    parser.add_argument(
        "--country",
        default=None,
        help="Preferred country code (overrides settings).",
    )

    parser.add_argument(
        "--settings",
        default=str(SETTINGS_PATH),
        help="Settings file (default: %(default)s).",
    )

    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist --cadence/--lang/--country to the settings file "
             "(an invalid cadence is saved and used as 5).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    exit_code = asyncio.run(_run(args))
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
