from __future__ import annotations

import re

from .model import StyledSegment

EMPHASIS_DELIMITER = '**'

# Printable ASCII; the standard PDF fonts have glyphs for all of it.
_UNSUPPORTED_PATTERN = re.compile(r'[^\x20-\x7E]')
_EMPHASIS_PATTERN = re.compile(r'\*\*(.*?)\*\*')


def is_supported_char(char: str) -> bool:
    return 0x20 <= ord(char) <= 0x7E


def filter_supported(text: str) -> str:
    return _UNSUPPORTED_PATTERN.sub('', str(text or ''))


def strip_markup(line: str) -> str:
    """Filtered text of ``line`` with every matched ``**`` pair removed."""
    return _EMPHASIS_PATTERN.sub(r'\1', filter_supported(line))


def parse_markup(line: str) -> list[StyledSegment]:
    source = filter_supported(line)
    if not source:
        return []

    segments: list[StyledSegment] = []

    def _append(text: str, emphasized: bool) -> None:
        if not text:
            return
        if segments and segments[-1].emphasized == emphasized:
            segments[-1] = StyledSegment(text=segments[-1].text + text, emphasized=emphasized)
            return
        segments.append(StyledSegment(text=text, emphasized=emphasized))

    cursor = 0
    while cursor < len(source):
        start = source.find(EMPHASIS_DELIMITER, cursor)
        if start < 0:
            break
        end = source.find(EMPHASIS_DELIMITER, start + len(EMPHASIS_DELIMITER))
        if end < 0:
            # unmatched opener stays literal
            break
        _append(source[cursor:start], False)
        _append(source[start + len(EMPHASIS_DELIMITER):end], True)
        cursor = end + len(EMPHASIS_DELIMITER)

    _append(source[cursor:], False)
    return segments


def split_lines(text: str) -> list[str]:
    """Physical input lines; ``\\r\\n`` and ``\\r`` count as newlines."""
    normalized = str(text or '').replace('\r\n', '\n').replace('\r', '\n')
    return normalized.split('\n')
