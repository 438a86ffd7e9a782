from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pypdf import PageObject, PdfReader, PdfWriter, Transformation
from pypdf.generic import NameObject
from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from anuvad.errors import FontEmbedError, LayoutError, LoadError, MeasurementError
from anuvad.layout.markup import is_supported_char
from anuvad.layout.model import PageGeometry


logger = logging.getLogger(__name__)

ColorLike = Union[str, colors.Color]


def _to_color(value: ColorLike) -> colors.Color:
    if isinstance(value, colors.Color):
        return value
    return colors.HexColor(str(value))


class FontHandle:
    """A font registered with reportlab, usable for measuring and drawing."""

    def __init__(self, font_name: str):
        self.font_name = font_name

    def check_text(self, text: str) -> None:
        for char in text:
            if not is_supported_char(char):
                raise MeasurementError(text, char)

    def width_of_text(self, text: str, size: float) -> float:
        if not text:
            return 0.0
        self.check_text(text)
        return float(pdfmetrics.stringWidth(text, self.font_name, float(size)))

    def __repr__(self) -> str:
        return f'FontHandle({self.font_name!r})'


@dataclass(frozen=True)
class RectangleOp:
    x: float
    y: float
    width: float
    height: float
    color: colors.Color

    def apply(self, canvas: Canvas) -> None:
        canvas.setFillColor(self.color)
        canvas.rect(self.x, self.y, self.width, self.height, stroke=0, fill=1)


@dataclass(frozen=True)
class TextOp:
    x: float
    y: float
    text: str
    font: FontHandle
    size: float
    color: colors.Color

    def apply(self, canvas: Canvas) -> None:
        canvas.setFillColor(self.color)
        canvas.setFont(self.font.font_name, self.size)
        canvas.drawString(self.x, self.y, self.text)


@dataclass
class PdfPage:
    geometry: PageGeometry
    origin: tuple[float, float] = (0.0, 0.0)
    source: PageObject | None = None
    operations: list[RectangleOp | TextOp] = field(default_factory=list)

    @property
    def width(self) -> float:
        return self.geometry.width

    @property
    def height(self) -> float:
        return self.geometry.height

    @property
    def text_operations(self) -> list[TextOp]:
        return [op for op in self.operations if isinstance(op, TextOp)]

    def size(self) -> tuple[float, float]:
        return self.geometry.width, self.geometry.height

    def draw_rectangle(self, x: float, y: float, width: float, height: float, color: ColorLike) -> None:
        self.operations.append(
            RectangleOp(x=float(x), y=float(y), width=float(width), height=float(height), color=_to_color(color))
        )

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font: FontHandle,
        size: float,
        color: ColorLike,
    ) -> None:
        font.check_text(text)
        self.operations.append(
            TextOp(x=float(x), y=float(y), text=text, font=font, size=float(size), color=_to_color(color))
        )


class PdfDocument:
    """In-memory page list; drawing is recorded and replayed by ``save``.

    Pages loaded from a source PDF keep their original content; the
    recorded operations are stamped on top of them when saving.
    """

    def __init__(self, *, producer: str = 'Anuvad'):
        self.producer = producer
        self._pages: list[PdfPage] = []
        self._fonts: dict[str, FontHandle] = {}

    @classmethod
    def create(cls, *, producer: str = 'Anuvad') -> PdfDocument:
        return cls(producer=producer)

    @classmethod
    def load(cls, data: bytes, *, producer: str = 'Anuvad') -> PdfDocument:
        if not data:
            raise LoadError('source document is empty')

        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and not reader.decrypt(''):
                raise LoadError('source PDF is encrypted')
            source_pages = list(reader.pages)
        except LoadError:
            raise
        except Exception as exc:
            raise LoadError(f'failed to read source PDF: {exc}') from exc

        if not source_pages:
            raise LoadError('source PDF has no pages')

        document = cls(producer=producer)
        for index, source_page in enumerate(source_pages):
            try:
                box = source_page.mediabox
                geometry = PageGeometry(width=float(box.width), height=float(box.height))
                origin = (float(box.left), float(box.bottom))
            except Exception as exc:
                raise LoadError(f'failed to read geometry of page {index + 1}: {exc}') from exc
            if geometry.width <= 0 or geometry.height <= 0:
                raise LoadError(f'page {index + 1} has an empty media box')
            document._pages.append(PdfPage(geometry=geometry, origin=origin, source=source_page))

        logger.debug('Loaded source PDF with %d page(s)', len(document._pages))
        return document

    def pages(self) -> list[PdfPage]:
        return list(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def add_page(self, width: float, height: float) -> PdfPage:
        page = PdfPage(geometry=PageGeometry(width=float(width), height=float(height)))
        self._pages.append(page)
        return page

    def embed_font(self, font_name: str, font_path: Path | None = None) -> FontHandle:
        cached = self._fonts.get(font_name)
        if cached is not None:
            return cached

        try:
            if font_path is not None:
                pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
            pdfmetrics.getFont(font_name)
        except Exception as exc:
            raise FontEmbedError(f'failed to embed font {font_name}: {exc}') from exc

        handle = FontHandle(font_name)
        self._fonts[font_name] = handle
        return handle

    def _render_operations(self) -> bytes:
        buffer = io.BytesIO()
        first = self._pages[0].geometry
        canvas = Canvas(buffer, pagesize=(first.width, first.height), invariant=1)
        canvas.setProducer(self.producer)
        for page in self._pages:
            canvas.setPageSize((page.width, page.height))
            for operation in page.operations:
                operation.apply(canvas)
            canvas.showPage()
        canvas.save()
        return buffer.getvalue()

    def _stamp_source_pages(self, rendered: bytes) -> bytes:
        rendered_reader = PdfReader(io.BytesIO(rendered))
        writer = PdfWriter()
        for page, rendered_page in zip(self._pages, rendered_reader.pages):
            if page.source is None:
                writer.add_page(rendered_page)
                continue
            target = writer.add_page(page.source)
            # links and form widgets would stay clickable over the erased area
            if NameObject('/Annots') in target:
                del target[NameObject('/Annots')]
            origin_x, origin_y = page.origin
            target.merge_transformed_page(
                rendered_page,
                Transformation().translate(origin_x, origin_y),
            )
        writer.add_metadata({'/Producer': self.producer})

        output = io.BytesIO()
        writer.write(output)
        return output.getvalue()

    def save(self) -> bytes:
        if not self._pages:
            raise LayoutError('cannot save a document without pages')

        try:
            rendered = self._render_operations()
            if not any(page.source is not None for page in self._pages):
                return rendered
            return self._stamp_source_pages(rendered)
        except Exception as exc:
            raise LayoutError(f'failed to serialize PDF: {exc}') from exc
