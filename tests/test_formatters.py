"""Unit tests for the markdown, interactive, and plain text formatters.

WHY: The markdown string is inserted into users' notes verbatim, so its
exact shape (heading, link, marker placement, paragraph breaks, trailing
space) matters. The panel's jump links must survive URLs that already
carry query parameters.

HOW: Markdown output is compared with literal strings and with a direct
per-fragment rendering of the same rule. Interactive output is checked
block by block.
"""

import json

import pytest

from ytranscript.core.ir import CaptionFragment, Transcript
from ytranscript.core.timestamps import format_offset
from ytranscript.errors import InvalidInputError
from ytranscript.formatters import FORMATTERS
from ytranscript.formatters.base import BaseFormatter
from ytranscript.formatters.interactive import (
    InteractiveFormatter,
    copy_all_text,
    jump_url,
    render_blocks,
)
from ytranscript.formatters.markdown import (
    MarkdownFormatter,
    build_document,
    render_markdown,
)
from ytranscript.formatters.plain_text import PlainTextFormatter

from conftest import SAMPLE_URL


def _per_fragment_markdown(title, url, fragments, cadence):
    """The markdown rule written fragment by fragment."""
    out = "## {}\n\n[Video Link]({})\n\n".format(title or "YouTube Transcript", url)
    for i, frag in enumerate(fragments):
        if i % cadence == 0:
            out += "**[{}]** ".format(format_offset(frag.offset_ms))
        out += frag.text + " "
        if (i + 1) % cadence == 0:
            out += "\n\n"
    return out


# =========================================================================
# Markdown
# =========================================================================

class TestRenderMarkdown:

    def test_end_to_end_cadence_two(self, sample_fragments):
        result = render_markdown("Sample", "https://youtu.be/x", sample_fragments, 2)
        assert result == (
            "## Sample\n\n"
            "[Video Link](https://youtu.be/x)\n\n"
            "**[0:00]** Hello world \n\n"
            "**[0:02]** foo bar \n\n"
            "**[0:04]** baz "
        )

    def test_missing_title_uses_default_heading(self, sample_fragments):
        result = render_markdown(None, SAMPLE_URL, sample_fragments, 5)
        assert result.startswith("## YouTube Transcript\n\n[Video Link]({})\n\n".format(SAMPLE_URL))

    def test_empty_title_uses_default_heading(self, sample_fragments):
        assert render_markdown("", SAMPLE_URL, sample_fragments, 5).startswith("## YouTube Transcript")

    def test_zero_fragments_gives_header_only(self):
        assert render_markdown("T", "u", [], 3) == "## T\n\n[Video Link](u)\n\n"

    def test_cadence_one_marks_every_fragment(self, sample_fragments):
        result = render_markdown("T", "u", sample_fragments, 1)
        assert result.count("**[") == 5
        assert result.endswith("**[0:04]** baz \n\n")

    def test_exact_multiple_ends_with_paragraph_break(self, sample_fragments):
        result = render_markdown("T", "u", sample_fragments, 5)
        assert result.endswith("**[0:00]** Hello world foo bar baz \n\n")

    def test_hour_long_offsets(self):
        fragments = [CaptionFragment("late", 3_725_000)]
        assert "**[1:02:05]** late " in render_markdown("T", "u", fragments, 1)

    @pytest.mark.parametrize("n, cadence", [(1, 1), (5, 2), (7, 3), (12, 4), (3, 10)])
    def test_matches_per_fragment_rule(self, n, cadence):
        fragments = [CaptionFragment("w{}".format(i), i * 2300) for i in range(n)]
        expected = _per_fragment_markdown("T", "u", fragments, cadence)
        assert render_markdown("T", "u", fragments, cadence) == expected

    def test_invalid_cadence(self, sample_fragments):
        with pytest.raises(InvalidInputError):
            render_markdown("T", "u", sample_fragments, 0)

    def test_build_document(self, sample_fragments):
        doc = build_document(None, "u", sample_fragments, 2)
        assert doc.title == "YouTube Transcript"
        assert doc.source_url == "u"
        assert len(doc.blocks) == 3


class TestMarkdownFormatter:

    def test_output(self, sample_fragments):
        transcript = Transcript(source_url=SAMPLE_URL, fragments=sample_fragments, title="Sample")
        outputs = MarkdownFormatter(cadence=2).format(transcript)
        assert len(outputs) == 1
        assert outputs[0].suffix == "-transcript.md"
        assert outputs[0].media_type == "text/markdown"
        assert outputs[0].content == render_markdown("Sample", SAMPLE_URL, sample_fragments, 2)

    def test_rejects_bad_cadence_at_construction(self):
        with pytest.raises(InvalidInputError):
            MarkdownFormatter(cadence=-3)


# =========================================================================
# Interactive
# =========================================================================

class TestRenderBlocks:

    def test_blocks(self, sample_fragments):
        views = render_blocks(sample_fragments, 2, SAMPLE_URL)
        assert [v.quote_text for v in views] == ["Hello world", "foo bar", "baz"]
        assert [v.timestamp_label for v in views] == ["0:00", "0:02", "0:04"]
        assert [v.timestamp_seconds for v in views] == [0, 2, 4]

    def test_jump_url_appends_to_existing_query(self, sample_fragments):
        views = render_blocks(sample_fragments, 2, SAMPLE_URL)
        assert views[1].jump_url == SAMPLE_URL + "&t=2"

    def test_jump_url_is_plain_concatenation(self):
        assert jump_url("https://youtu.be/abc", 61_999) == "https://youtu.be/abc&t=61"

    def test_drag_payload_is_quote_text(self, sample_fragments):
        view = render_blocks(sample_fragments, 3, SAMPLE_URL)[0]
        assert view.drag_payload == {"text/plain": "Hello world foo"}

    def test_empty(self):
        assert render_blocks([], 3, SAMPLE_URL) == []

    def test_invalid_cadence(self, sample_fragments):
        with pytest.raises(InvalidInputError):
            render_blocks(sample_fragments, 0, SAMPLE_URL)

    def test_copy_all_ignores_blocking(self, sample_fragments):
        assert copy_all_text(sample_fragments) == "Hello world foo bar baz"
        assert copy_all_text([]) == ""


class TestInteractiveFormatter:

    def test_json_payload(self, sample_fragments):
        transcript = Transcript(source_url=SAMPLE_URL, fragments=sample_fragments, title="Sample")
        outputs = InteractiveFormatter(cadence=2).format(transcript)
        assert outputs[0].suffix == "-blocks.json"
        assert outputs[0].media_type == "application/json"

        data = json.loads(outputs[0].content)
        assert data["title"] == "Sample"
        assert data["url"] == SAMPLE_URL
        assert data["copy_all"] == "Hello world foo bar baz"
        assert len(data["blocks"]) == 3
        assert data["blocks"][2] == {
            "timestamp_label": "0:04",
            "timestamp_seconds": 4,
            "jump_url": SAMPLE_URL + "&t=4",
            "quote_text": "baz",
        }


# =========================================================================
# Plain text + registry
# =========================================================================

class TestPlainTextFormatter:

    def test_output(self, sample_fragments):
        outputs = PlainTextFormatter().format(Transcript(source_url="u", fragments=sample_fragments))
        assert outputs[0].content == "Hello world foo bar baz\n"
        assert outputs[0].suffix == "-transcript.txt"

    def test_empty(self):
        assert PlainTextFormatter().format(Transcript(source_url="u"))[0].content == ""


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"markdown", "interactive", "plain_text"}

    @pytest.mark.parametrize("key", sorted(FORMATTERS))
    def test_entries_are_formatter_classes(self, key):
        formatter = FORMATTERS[key](cadence=3)
        assert isinstance(formatter, BaseFormatter)
        assert formatter.name
        assert formatter.cadence == 3
