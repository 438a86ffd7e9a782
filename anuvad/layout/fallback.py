from __future__ import annotations

import logging

from anuvad.adapters.pdf_document import PdfDocument
from anuvad.errors import FallbackRenderError, FontEmbedError

from .markup import split_lines, strip_markup
from .options import LayoutOptions


logger = logging.getLogger(__name__)


def render_fallback(translated_text: str, *, options: LayoutOptions | None = None) -> bytes:
    """Single page, regular font, text drawn unwrapped from the top margin.

    Lines running past the page edge are clipped; there is no wrapping and
    no pagination here.
    """
    options = options or LayoutOptions.from_settings()
    geometry = options.default_geometry

    document = PdfDocument.create(producer=options.producer)
    page = document.add_page(geometry.width, geometry.height)
    try:
        font = document.embed_font(options.regular_font, options.regular_font_path)
    except FontEmbedError as exc:
        raise FallbackRenderError(f'fallback rendering unavailable: {exc}') from exc

    try:
        y = geometry.height - options.margin
        for raw_line in split_lines(translated_text):
            text = strip_markup(raw_line)
            if text.strip():
                page.draw_text(
                    options.margin,
                    y,
                    text,
                    font=font,
                    size=options.font_size,
                    color=options.text_color,
                )
            y -= options.line_height
        pdf_bytes = document.save()
    except Exception as exc:
        raise FallbackRenderError(f'fallback rendering failed: {exc}') from exc

    logger.info('Rendered fallback page (%d bytes)', len(pdf_bytes))
    return pdf_bytes
