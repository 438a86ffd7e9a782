from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from anuvad.config import Settings, get_settings

from .model import LETTER, PageGeometry


@dataclass(frozen=True)
class LayoutOptions:
    font_size: float = 12.0
    line_height: float = 16.0
    margin: float = 50.0
    regular_font: str = 'Helvetica'
    emphasized_font: str = 'Helvetica-Bold'
    regular_font_path: Path | None = None
    emphasized_font_path: Path | None = None
    default_geometry: PageGeometry = LETTER
    background_color: str = '#FFFFFF'
    text_color: str = '#000000'
    producer: str = 'Anuvad'

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise ValueError(f'font_size must be positive, got {self.font_size}')
        if self.line_height <= 0:
            raise ValueError(f'line_height must be positive, got {self.line_height}')
        if self.margin < 0:
            raise ValueError(f'margin must not be negative, got {self.margin}')

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> LayoutOptions:
        settings = settings or get_settings()
        return cls(
            font_size=float(settings.font_size),
            line_height=float(settings.line_height),
            margin=float(settings.page_margin),
            regular_font=settings.regular_font,
            emphasized_font=settings.emphasized_font,
            regular_font_path=settings.regular_font_path,
            emphasized_font_path=settings.emphasized_font_path,
            default_geometry=PageGeometry(
                width=float(settings.default_page_width),
                height=float(settings.default_page_height),
            ),
            background_color=settings.background_color,
            text_color=settings.text_color,
            producer=settings.pdf_producer,
        )
