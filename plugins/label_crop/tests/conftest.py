from io import BytesIO
from typing import Sequence

import pytest
from PyPDF2 import PdfReader, PdfWriter
from reportlab.pdfgen import canvas


def blank_pdf(pages: int = 1, width: float = 200, height: float = 200) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=height)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


def sized_pdf(widths: Sequence[float], height: float = 300) -> bytes:
    """One blank page per width, so page identity survives reordering."""

    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=height)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


def text_pdf(texts: Sequence[str], width: float = 595, height: float = 842) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height))
    for text in texts:
        c.setFont("Helvetica", 12)
        if text:
            c.drawString(72, height - 100, text)
        c.showPage()
    c.save()
    return buf.getvalue()


def page_widths(data: bytes) -> list[float]:
    return [float(page.mediabox.width) for page in PdfReader(BytesIO(data)).pages]


def page_texts(data: bytes) -> list[str]:
    return [page.extract_text() or "" for page in PdfReader(BytesIO(data)).pages]


@pytest.fixture
def make_blank_pdf():
    return blank_pdf


@pytest.fixture
def make_sized_pdf():
    return sized_pdf


@pytest.fixture
def make_text_pdf():
    return text_pdf


@pytest.fixture
def read_widths():
    return page_widths


@pytest.fixture
def read_texts():
    return page_texts
