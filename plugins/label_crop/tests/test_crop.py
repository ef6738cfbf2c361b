from io import BytesIO

import pytest
from PyPDF2 import PdfReader

from plugins.label_crop.core import FLIPKART_CROP_BOX, apply_fixed_crop, apply_margin_crop, parse_margin
from plugins.label_crop.core.crop import margin_crop_box, page_crop_box
from plugins.label_crop.core.document import load_document
from plugins.label_crop.core.presets import CropBox


def _boxes(document):
    return [page_crop_box(page) for page in document.pages]


def test_parse_margin_keeps_leading_integer():
    assert parse_margin("20") == 20
    assert parse_margin(" 12.7 ") == 12
    assert parse_margin("30pt") == 30
    assert parse_margin(15.9) == 15
    for bad in ("abc", "", None, True):
        with pytest.raises(ValueError):
            parse_margin(bad)


def test_margin_crop_insets_every_page(make_blank_pdf):
    document = load_document(make_blank_pdf(pages=2, width=200, height=300))
    result = apply_margin_crop(document, 20)
    assert result is document
    assert _boxes(result) == [CropBox(20, 20, 160, 260)] * 2


def test_margin_crop_skips_pages_it_would_erase(make_blank_pdf):
    document = load_document(make_blank_pdf(width=200, height=400))
    apply_margin_crop(document, 100)
    assert _boxes(document) == [CropBox(0, 0, 200, 400)]
    assert margin_crop_box(CropBox(0, 0, 200, 400), 100) is None


def test_zero_margin_is_a_no_op(make_blank_pdf):
    document = load_document(make_blank_pdf(width=200, height=300))
    apply_margin_crop(document, 0)
    assert _boxes(document) == [CropBox(0, 0, 200, 300)]


def test_margin_crop_compounds_when_reapplied(make_blank_pdf):
    document = load_document(make_blank_pdf(width=200, height=300))
    apply_margin_crop(document, 10)
    apply_margin_crop(document, 10)
    assert _boxes(document) == [CropBox(20, 20, 160, 260)]


def test_fixed_crop_ignores_page_size(make_sized_pdf):
    document = load_document(make_sized_pdf([595, 200, 800], height=842))
    cropped = apply_fixed_crop(document, FLIPKART_CROP_BOX)
    assert cropped is not document
    assert len(cropped.pages) == 3
    assert _boxes(cropped) == [FLIPKART_CROP_BOX] * 3

    buf = BytesIO()
    cropped.write(buf)
    reader = PdfReader(BytesIO(buf.getvalue()))
    assert [float(page.mediabox.width) for page in reader.pages] == [595, 200, 800]
    assert [tuple(float(v) for v in page.cropbox) for page in reader.pages] == [
        (165, 460, 430, 820)
    ] * 3
