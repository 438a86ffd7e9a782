from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RenderMode(str, Enum):
    primary = 'primary'
    fallback = 'fallback'


class RenderResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = 'ok'
    mode: RenderMode
    page_count: int
    byte_size: int
    source_mime_type: str | None = None
    output_path: str | None = None
    translated_pdf: str | None = Field(default=None, serialization_alias='translatedPdf')
    generated_at: datetime = Field(default_factory=utcnow)
