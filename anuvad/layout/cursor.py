from __future__ import annotations

import logging

from anuvad.adapters.pdf_document import PdfDocument, PdfPage


logger = logging.getLogger(__name__)


class PageCursor:
    """Tracks the page being written and the next baseline on it.

    ``y`` is the top of the next line slot. A slot spans ``line_height``
    below its baseline and may not reach into the bottom margin; when it
    would, the cursor moves to the next page first, reusing a page the
    document already has or appending one with the first page's geometry.
    """

    def __init__(self, document: PdfDocument, *, margin: float):
        pages = document.pages()
        if not pages:
            raise ValueError('document has no pages to write on')
        self._document = document
        self._margin = float(margin)
        self._first_geometry = pages[0].geometry
        self.page_index = 0
        self.y = pages[0].height - self._margin

    @property
    def page(self) -> PdfPage:
        return self._document.pages()[self.page_index]

    def request_line(self, line_height: float) -> float:
        if self.y - line_height < self._margin:
            self._advance()
        baseline = self.y
        self.y -= line_height
        return baseline

    def _advance(self) -> None:
        self.page_index += 1
        pages = self._document.pages()
        if self.page_index < len(pages):
            page = pages[self.page_index]
        else:
            page = self._document.add_page(self._first_geometry.width, self._first_geometry.height)
            logger.debug('Appended page %d for overflowing text', self.page_index + 1)
        self.y = page.height - self._margin
