from __future__ import annotations

import logging
from dataclasses import dataclass

from anuvad.adapters.pdf_document import PdfDocument
from anuvad.errors import LoadError
from anuvad.types import RenderMode

from .cursor import PageCursor
from .fallback import render_fallback
from .line_breaker import break_line
from .markup import parse_markup, split_lines
from .model import VisualLine
from .options import LayoutOptions


logger = logging.getLogger(__name__)

PDF_MIME_TYPES = frozenset({'application/pdf', 'application/x-pdf'})


@dataclass(frozen=True)
class LayoutOutcome:
    pdf_bytes: bytes
    mode: RenderMode
    page_count: int


def is_pdf_mime_type(mime_type: str | None) -> bool:
    token = str(mime_type or '').split(';', 1)[0].strip().lower()
    return token in PDF_MIME_TYPES


def _open_base_document(
    source_bytes: bytes | None,
    mime_type: str | None,
    options: LayoutOptions,
) -> PdfDocument:
    if source_bytes and is_pdf_mime_type(mime_type):
        try:
            return PdfDocument.load(source_bytes, producer=options.producer)
        except LoadError as exc:
            logger.warning('Source PDF unreadable; starting from a blank page: %s', exc)

    document = PdfDocument.create(producer=options.producer)
    geometry = options.default_geometry
    document.add_page(geometry.width, geometry.height)
    return document


def assemble_document(
    source_bytes: bytes | None,
    translated_text: str,
    mime_type: str | None,
    *,
    options: LayoutOptions | None = None,
) -> PdfDocument:
    options = options or LayoutOptions.from_settings()
    document = _open_base_document(source_bytes, mime_type, options)

    regular = document.embed_font(options.regular_font, options.regular_font_path)
    emphasized = document.embed_font(options.emphasized_font, options.emphasized_font_path)

    # Carried-over pages are painted over entirely before any text goes on.
    for page in document.pages():
        if page.source is None:
            continue
        width, height = page.size()
        page.draw_rectangle(0, 0, width, height, options.background_color)

    first_page = document.pages()[0]
    max_width = first_page.width - 2 * options.margin
    cursor = PageCursor(document, margin=options.margin)

    for raw_line in split_lines(translated_text):
        visual_lines = break_line(
            parse_markup(raw_line),
            max_width=max_width,
            font_size=options.font_size,
            regular=regular,
            emphasized=emphasized,
        )
        # blank lines still take up a line slot
        for visual_line in visual_lines or [VisualLine()]:
            baseline = cursor.request_line(options.line_height)
            page = cursor.page
            for run in visual_line.place(options.margin, baseline):
                page.draw_text(
                    run.x,
                    run.y,
                    run.text,
                    font=emphasized if run.emphasized else regular,
                    size=options.font_size,
                    color=options.text_color,
                )

    return document


def layout_document(
    source_bytes: bytes | None,
    translated_text: str,
    mime_type: str | None,
    *,
    options: LayoutOptions | None = None,
) -> LayoutOutcome:
    options = options or LayoutOptions.from_settings()
    try:
        document = assemble_document(source_bytes, translated_text, mime_type, options=options)
        pdf_bytes = document.save()
    except Exception as exc:
        logger.warning('PDF layout failed; rendering fallback page: %s', exc)
        return LayoutOutcome(
            pdf_bytes=render_fallback(translated_text, options=options),
            mode=RenderMode.fallback,
            page_count=1,
        )

    logger.info('Laid out translated text on %d page(s)', document.page_count)
    return LayoutOutcome(pdf_bytes=pdf_bytes, mode=RenderMode.primary, page_count=document.page_count)


def layout(
    source_bytes: bytes | None,
    translated_text: str,
    mime_type: str | None,
    *,
    options: LayoutOptions | None = None,
) -> bytes:
    """Erase the source pages and typeset ``translated_text`` over them.

    Returns a complete PDF. If anything in the primary path fails, a
    single unwrapped fallback page is returned instead; only a failure of
    that fallback raises (``FallbackRenderError``).
    """
    return layout_document(source_bytes, translated_text, mime_type, options=options).pdf_bytes
