from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='ANUVAD_',
        case_sensitive=False,
        extra='ignore',
    )

    app_name: str = 'Anuvad PDF Overlay'
    log_level: str = 'INFO'

    # Typesetting
    font_size: float = Field(default=12.0, gt=0)
    line_height: float = Field(default=16.0, gt=0)
    page_margin: float = Field(default=50.0, ge=0)
    regular_font: str = 'Helvetica'
    emphasized_font: str = 'Helvetica-Bold'
    # Optional TrueType files registered under the names above
    regular_font_path: Path | None = None
    emphasized_font_path: Path | None = None

    # Letter, used whenever the source has no usable page
    default_page_width: float = Field(default=612.0, gt=0)
    default_page_height: float = Field(default=792.0, gt=0)

    background_color: str = '#FFFFFF'
    text_color: str = '#000000'

    # PDF export
    pdf_producer: str = 'Anuvad'
    max_source_bytes: int = 50 * 1024 * 1024


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
