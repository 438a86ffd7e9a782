from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Protocol

from .model import LineFragment, StyledSegment, VisualLine

_TOKEN_PATTERN = re.compile(r'\s+|\S+')


class FontMetrics(Protocol):
    def width_of_text(self, text: str, size: float) -> float: ...


@dataclass
class _Word:
    # whitespace between the previous word and this one, in source styles
    separator: list[LineFragment] = field(default_factory=list)
    pieces: list[LineFragment] = field(default_factory=list)

    @property
    def separator_width(self) -> float:
        return sum(fragment.width for fragment in self.separator)

    @property
    def width(self) -> float:
        return sum(fragment.width for fragment in self.pieces)


def _collect_words(
    segments: Iterable[StyledSegment],
    *,
    font_size: float,
    regular: FontMetrics,
    emphasized: FontMetrics,
) -> list[_Word]:
    words: list[_Word] = []
    separator: list[LineFragment] = []
    current: _Word | None = None

    for segment in segments:
        metrics = emphasized if segment.emphasized else regular
        for token in _TOKEN_PATTERN.findall(segment.text):
            fragment = LineFragment(
                text=token,
                emphasized=segment.emphasized,
                width=float(metrics.width_of_text(token, font_size)),
            )
            if token.isspace():
                if current is not None:
                    words.append(current)
                    current = None
                separator.append(fragment)
                continue
            if current is None:
                current = _Word(separator=separator)
                separator = []
            # no whitespace since the last piece: same word, possibly another style
            current.pieces.append(fragment)

    if current is not None:
        words.append(current)
    return words


def _merge_fragments(fragments: list[LineFragment]) -> VisualLine:
    merged: list[LineFragment] = []
    for fragment in fragments:
        if merged and merged[-1].emphasized == fragment.emphasized:
            previous = merged[-1]
            merged[-1] = LineFragment(
                text=previous.text + fragment.text,
                emphasized=previous.emphasized,
                width=previous.width + fragment.width,
            )
            continue
        merged.append(fragment)
    return VisualLine(fragments=tuple(merged))


def break_line(
    segments: Iterable[StyledSegment],
    *,
    max_width: float,
    font_size: float,
    regular: FontMetrics,
    emphasized: FontMetrics,
) -> list[VisualLine]:
    """Greedy word wrap of one physical line into visual lines.

    A line is closed before the word that would push it past ``max_width``.
    A word wider than ``max_width`` on its own is kept whole on a line of
    its own and overflows to the right.
    """
    words = _collect_words(
        segments,
        font_size=font_size,
        regular=regular,
        emphasized=emphasized,
    )

    lines: list[VisualLine] = []
    current: list[LineFragment] = []
    current_width = 0.0

    for word in words:
        if current and current_width + word.separator_width + word.width > max_width:
            lines.append(_merge_fragments(current))
            current = []
            current_width = 0.0

        if current:
            current.extend(word.separator)
            current_width += word.separator_width
        current.extend(word.pieces)
        current_width += word.width

    if current:
        lines.append(_merge_fragments(current))
    return lines
