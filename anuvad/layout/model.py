from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float


LETTER = PageGeometry(width=612.0, height=792.0)


@dataclass(frozen=True)
class StyledSegment:
    text: str
    emphasized: bool = False


@dataclass(frozen=True)
class LineFragment:
    """Part of a visual line drawn in one style, with its measured width."""

    text: str
    emphasized: bool
    width: float


@dataclass(frozen=True)
class Run:
    text: str
    emphasized: bool
    x: float
    y: float


@dataclass(frozen=True)
class VisualLine:
    fragments: tuple[LineFragment, ...] = ()

    @property
    def width(self) -> float:
        return sum(fragment.width for fragment in self.fragments)

    @property
    def text(self) -> str:
        return ''.join(fragment.text for fragment in self.fragments)

    def place(self, x: float, y: float) -> list[Run]:
        runs: list[Run] = []
        cursor_x = float(x)
        for fragment in self.fragments:
            runs.append(Run(text=fragment.text, emphasized=fragment.emphasized, x=cursor_x, y=float(y)))
            cursor_x += fragment.width
        return runs
