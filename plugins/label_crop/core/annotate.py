"""Text stamps drawn on top of label pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO

from PyPDF2 import PageObject, PdfReader, PdfWriter
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .document import snapshot


@dataclass(frozen=True)
class TextStyle:
    font: str
    size: float
    color: tuple[float, float, float]


TIMESTAMP_STYLE = TextStyle(font="Helvetica", size=8, color=(0.3, 0.3, 0.3))
CUSTOM_TEXT_STYLE = TextStyle(font="Helvetica-Bold", size=12, color=(0.0, 0.0, 0.0))

TIMESTAMP_RIGHT_MARGIN = 10.0
TIMESTAMP_BOTTOM_MARGIN = 10.0
CUSTOM_TEXT_TOP_OFFSET = 25.0


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ``dd/mm/YYYY, hh:MM:SS am``."""

    suffix = "am" if moment.hour < 12 else "pm"
    return f"{moment:%d/%m/%Y, %I:%M:%S} {suffix}"


def text_width(text: str, style: TextStyle) -> float:
    return stringWidth(text, style.font, style.size)


def _overlay(page: PageObject, text: str, style: TextStyle, x: float, y: float) -> PageObject:
    box = page.mediabox
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(float(box.right), float(box.top)))
    c.setFont(style.font, style.size)
    c.setFillColorRGB(*style.color)
    c.drawString(x, y, text)
    c.showPage()
    c.save()
    buffer.seek(0)
    return PdfReader(buffer).pages[0]


def _stamp_pages(document: PdfWriter, text: str, style: TextStyle, place) -> PdfWriter:
    _, source = snapshot(document)
    stamped = PdfWriter()
    for page in source.pages:
        x, y = place(page, text_width(text, style))
        page.merge_page(_overlay(page, text, style, x, y))
        stamped.add_page(page)
    return stamped


def _bottom_right(page: PageObject, width: float) -> tuple[float, float]:
    box = page.mediabox
    return (
        float(box.right) - width - TIMESTAMP_RIGHT_MARGIN,
        float(box.bottom) + TIMESTAMP_BOTTOM_MARGIN,
    )


def _top_center(page: PageObject, width: float) -> tuple[float, float]:
    box = page.mediabox
    return (
        float(box.left) + (float(box.width) - width) / 2,
        float(box.top) - CUSTOM_TEXT_TOP_OFFSET,
    )


def stamp_timestamp(document: PdfWriter, now: datetime | None = None) -> PdfWriter:
    """Stamp the local date and time at the bottom right of every page."""

    text = format_timestamp(now or datetime.now())
    return _stamp_pages(document, text, TIMESTAMP_STYLE, _bottom_right)


def stamp_custom_text(document: PdfWriter, text: str | None) -> PdfWriter:
    """Stamp ``text`` centred near the top of every page; blank text is ignored."""

    if not text or not text.strip():
        return document
    return _stamp_pages(document, text, CUSTOM_TEXT_STYLE, _top_center)


__all__ = [
    "CUSTOM_TEXT_STYLE",
    "TIMESTAMP_STYLE",
    "TextStyle",
    "format_timestamp",
    "stamp_custom_text",
    "stamp_timestamp",
    "text_width",
]
