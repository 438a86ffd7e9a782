from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen.canvas import Canvas


# Ensure the project root is importable when running `pytest` via its entrypoint,
# where `sys.path[0]` may not be the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from anuvad.layout.options import LayoutOptions  # noqa: E402


class MonospaceMetrics:
    """Every character is ``ratio * size`` wide."""

    def __init__(self, ratio: float = 0.5):
        self.ratio = ratio

    def width_of_text(self, text: str, size: float) -> float:
        return len(text) * size * self.ratio


def build_source_pdf(page_count: int, pagesize: tuple[float, float] = letter) -> bytes:
    buffer = io.BytesIO()
    canvas = Canvas(buffer, pagesize=pagesize, invariant=1)
    for index in range(page_count):
        canvas.setFont('Helvetica', 14)
        canvas.drawString(72, pagesize[1] - 72, f'ORIGINAL PAGE {index + 1}')
        canvas.showPage()
    canvas.save()
    return buffer.getvalue()


@pytest.fixture
def options() -> LayoutOptions:
    return LayoutOptions()


@pytest.fixture
def letter_pdf() -> bytes:
    return build_source_pdf(3)


@pytest.fixture
def a4_pdf() -> bytes:
    return build_source_pdf(2, pagesize=A4)


@pytest.fixture
def metrics() -> MonospaceMetrics:
    return MonospaceMetrics()
