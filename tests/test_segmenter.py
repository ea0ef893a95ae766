"""Unit tests for the two grouping strategies and timestamp labels.

WHY: Every output depends on where blocks start. The markdown and
interactive rules are written differently and must each keep their
boundary behaviour: empty input, partial last block, cadence 1, cadence
larger than the track, and invalid cadence.

HOW: Each strategy is tested on its own, then both are checked against
the shared invariants (text preserved, block count, start offsets).
"""

import math

import pytest

from ytranscript.core.ir import CaptionFragment
from ytranscript.core.segmenter import (
    SegmentMode,
    segment,
    segment_interactive,
    segment_markdown,
    validate_cadence,
)
from ytranscript.core.timestamps import format_offset, format_timestamp
from ytranscript.errors import InvalidInputError


def _fragments(n):
    return [CaptionFragment(text="line{}".format(i), offset_ms=i * 1500) for i in range(n)]


STRATEGIES = [segment_markdown, segment_interactive]


# =========================================================================
# Timestamp labels
# =========================================================================

class TestFormatTimestamp:

    @pytest.mark.parametrize("seconds, expected", [
        (0, "0:00"),
        (5, "0:05"),
        (65, "1:05"),
        (600, "10:00"),
        (3599, "59:59"),
        (3600, "1:00:00"),
        (3661, "1:01:01"),
        (36000 + 9 * 60 + 7, "10:09:07"),
    ])
    def test_examples(self, seconds, expected):
        assert format_timestamp(seconds) == expected

    def test_truncates_instead_of_rounding(self):
        assert format_timestamp(59.9) == "0:59"
        assert format_timestamp(3599.999) == "59:59"

    def test_format_offset_converts_milliseconds(self):
        assert format_offset(0) == "0:00"
        assert format_offset(65_400) == "1:05"
        assert format_offset(3_661_999) == "1:01:01"


# =========================================================================
# Cadence validation
# =========================================================================

class TestValidateCadence:

    @pytest.mark.parametrize("bad", [0, -1, -10])
    def test_rejects_non_positive(self, bad):
        with pytest.raises(InvalidInputError):
            validate_cadence(bad)

    @pytest.mark.parametrize("bad", [1.5, "3", None, True])
    def test_rejects_non_integers(self, bad):
        with pytest.raises(InvalidInputError):
            validate_cadence(bad)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_strategies_fail_fast_on_zero(self, strategy):
        with pytest.raises(InvalidInputError):
            strategy(_fragments(3), 0)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_strategies_reject_bad_cadence_even_without_fragments(self, strategy):
        with pytest.raises(InvalidInputError):
            strategy([], -2)

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_cadence(0)


# =========================================================================
# Markdown mode
# =========================================================================

class TestSegmentMarkdown:

    def test_empty(self):
        assert segment_markdown([], 3) == []

    def test_groups_of_cadence_with_partial_tail(self, sample_fragments):
        blocks = segment_markdown(sample_fragments, 2)
        assert [b.merged_text for b in blocks] == ["Hello world", "foo bar", "baz"]
        assert [b.start_offset_ms for b in blocks] == [0, 2000, 4000]
        assert [b.fragment_count for b in blocks] == [2, 2, 1]

    def test_cadence_one(self, sample_fragments):
        blocks = segment_markdown(sample_fragments, 1)
        assert len(blocks) == 5
        for block, frag in zip(blocks, sample_fragments):
            assert block.start_offset_ms == frag.offset_ms
            assert block.merged_text == frag.text
            assert block.fragment_count == 1

    def test_cadence_larger_than_track(self, sample_fragments):
        blocks = segment_markdown(sample_fragments, 50)
        assert len(blocks) == 1
        assert blocks[0].merged_text == "Hello world foo bar baz"
        assert blocks[0].start_offset_ms == 0

    def test_exact_multiple_has_no_partial_block(self):
        blocks = segment_markdown(_fragments(6), 3)
        assert [b.fragment_count for b in blocks] == [3, 3]


# =========================================================================
# Interactive mode
# =========================================================================

class TestSegmentInteractive:

    def test_empty(self):
        assert segment_interactive([], 4) == []

    def test_single_fragment_is_flushed(self):
        blocks = segment_interactive([CaptionFragment("only", 700)], 5)
        assert len(blocks) == 1
        assert blocks[0].merged_text == "only"
        assert blocks[0].start_offset_ms == 700

    def test_first_block_anchored_at_first_fragment(self, sample_fragments):
        blocks = segment_interactive(sample_fragments, 2)
        assert blocks[0].start_offset_ms == 0
        assert blocks[0].merged_text == "Hello world"

    def test_trailing_partial_block_is_flushed(self, sample_fragments):
        blocks = segment_interactive(sample_fragments, 2)
        assert [b.merged_text for b in blocks] == ["Hello world", "foo bar", "baz"]
        assert blocks[-1].start_offset_ms == 4000
        assert blocks[-1].fragment_count == 1

    def test_cadence_one(self, sample_fragments):
        blocks = segment_interactive(sample_fragments, 1)
        assert [b.start_offset_ms for b in blocks] == [f.offset_ms for f in sample_fragments]

    def test_cadence_larger_than_track(self, sample_fragments):
        blocks = segment_interactive(sample_fragments, 6)
        assert len(blocks) == 1
        assert blocks[0].fragment_count == 5


# =========================================================================
# Shared invariants
# =========================================================================

class TestInvariants:

    @pytest.mark.parametrize("strategy", STRATEGIES)
    @pytest.mark.parametrize("n, cadence", [(1, 1), (7, 3), (9, 3), (10, 4), (4, 9), (25, 5)])
    def test_text_is_preserved_in_order(self, strategy, n, cadence):
        fragments = _fragments(n)
        blocks = strategy(fragments, cadence)
        assert " ".join(b.merged_text for b in blocks) == " ".join(f.text for f in fragments)
        assert sum(b.fragment_count for b in blocks) == n

    @pytest.mark.parametrize("strategy", STRATEGIES)
    @pytest.mark.parametrize("n, cadence", [(1, 1), (7, 3), (9, 3), (10, 4), (4, 9)])
    def test_block_count_is_ceil(self, strategy, n, cadence):
        assert len(strategy(_fragments(n), cadence)) == math.ceil(n / cadence)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_start_offsets_match_first_fragment(self, strategy):
        fragments = _fragments(11)
        blocks = strategy(fragments, 4)
        assert [b.start_offset_ms for b in blocks] == [
            fragments[i].offset_ms for i in range(0, 11, 4)
        ]
        starts = [b.start_offset_ms for b in blocks]
        assert starts == sorted(starts)

    def test_equal_offsets_are_kept_in_source_order(self):
        fragments = [CaptionFragment("a", 0), CaptionFragment("b", 0), CaptionFragment("c", 0)]
        assert [b.merged_text for b in segment_interactive(fragments, 1)] == ["a", "b", "c"]


class TestSegmentDispatch:

    def test_defaults_to_markdown(self, sample_fragments):
        assert segment(sample_fragments, 2) == segment_markdown(sample_fragments, 2)

    def test_interactive_mode(self, sample_fragments):
        assert segment(sample_fragments, 2, SegmentMode.INTERACTIVE) == segment_interactive(sample_fragments, 2)

    def test_mode_by_string_value(self, sample_fragments):
        assert segment(sample_fragments, 3, "interactive") == segment_interactive(sample_fragments, 3)

    def test_unknown_mode(self, sample_fragments):
        with pytest.raises(ValueError):
            segment(sample_fragments, 2, "chapters")
