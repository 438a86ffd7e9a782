"""Tests for anuvad.layout.markup"""

import pytest

from anuvad.layout.markup import filter_supported, parse_markup, split_lines, strip_markup
from anuvad.layout.model import StyledSegment


class TestFilterSupported:
    def test_keeps_printable_ascii(self):
        text = ''.join(chr(code) for code in range(0x20, 0x7F))
        assert filter_supported(text) == text

    def test_drops_control_and_non_ascii(self):
        assert filter_supported('naïve\tcafé\n') == 'navecaf'

    def test_drops_devanagari(self):
        assert filter_supported('नमस्ते ok') == ' ok'


class TestParseMarkup:
    def test_regular_then_emphasized(self):
        assert parse_markup('Hello **World**') == [
            StyledSegment('Hello ', False),
            StyledSegment('World', True),
        ]

    def test_alternates_between_pairs(self):
        assert parse_markup('a **b** c **d** e') == [
            StyledSegment('a ', False),
            StyledSegment('b', True),
            StyledSegment(' c ', False),
            StyledSegment('d', True),
            StyledSegment(' e', False),
        ]

    def test_unmatched_opener_is_literal(self):
        assert parse_markup('price **not closed') == [StyledSegment('price **not closed', False)]

    def test_unmatched_opener_after_pair(self):
        assert parse_markup('**bold** then **open') == [
            StyledSegment('bold', True),
            StyledSegment(' then **open', False),
        ]

    def test_empty_pair_is_discarded(self):
        assert parse_markup('****') == []
        assert parse_markup('x****y') == [StyledSegment('xy', False)]

    def test_filters_before_matching(self):
        # the non-ASCII character between the stars would otherwise break the delimiter
        assert parse_markup('*é*bold**') == [StyledSegment('bold', True)]

    def test_empty_input(self):
        assert parse_markup('') == []
        assert parse_markup('नम') == []

    def test_whitespace_only_is_kept(self):
        assert parse_markup('   ') == [StyledSegment('   ', False)]

    @pytest.mark.parametrize(
        'raw, plain',
        [
            ('Hello **World**', 'Hello World'),
            ('**a** **b**', 'a b'),
            ('no markup at all', 'no markup at all'),
            ('dangling ** star', 'dangling ** star'),
            ('***triple***', '*triple*'),
            ('café **crème**', 'caf crme'),
            ('', ''),
        ],
    )
    def test_segments_reproduce_filtered_text(self, raw, plain):
        assert strip_markup(raw) == plain
        assert ''.join(segment.text for segment in parse_markup(raw)) == plain


def test_split_lines_normalizes_newlines():
    assert split_lines('a\r\nb\rc\nd') == ['a', 'b', 'c', 'd']
    assert split_lines('') == ['']
