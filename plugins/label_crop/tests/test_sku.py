import logging

from plugins.label_crop.core.sku import (
    PageTextExtractor,
    extract_page_text,
    extract_sku,
    fallback_sort_key,
    sort_key_for,
)


def test_leading_quantity_pattern():
    assert extract_sku("1 sp_megha red chiku | MFTEXO") == "sp_megha red chiku"


def test_qty_token_pattern():
    assert extract_sku("QTY 2 blue-owl-lamp | ABC123") == "blue-owl-lamp"
    # A digit after the pipe rules out the leading-quantity pattern.
    assert extract_sku("QTY 2 blue-owl-lamp | 123") == "blue-owl-lamp"


def test_patterns_are_case_insensitive_and_trimmed():
    assert extract_sku("qty 4   Lamp-Shade   |") == "Lamp-Shade"
    assert extract_sku("SKU ID Size\nColour\nQty 3 red shirt |") == "red shirt"


def test_blank_capture_is_not_a_sku():
    assert extract_sku("1   | X") is None


def test_no_match_returns_none():
    assert extract_sku("Invoice number 42") is None
    assert extract_sku("") is None
    assert extract_sku(None) is None


def test_fallback_keys_are_zero_padded():
    assert fallback_sort_key(7) == "zzz_no_sku_0007"
    assert fallback_sort_key(123) == "zzz_no_sku_0123"
    assert sort_key_for(None, 3) == "zzz_no_sku_0003"
    assert sort_key_for("apple", 3) == "apple"


def test_page_text_is_one_based(make_text_pdf):
    data = make_text_pdf(["1 first item | A", "1 second item | B"])
    assert "second item" in extract_page_text(data, 2)
    extractor = PageTextExtractor(data)
    assert extractor.sku_for_page(1) == "first item"
    assert extractor.sku_for_page(2) == "second item"


def test_extraction_failure_is_logged_and_absorbed(caplog):
    extractor = PageTextExtractor(b"%PDF-1.4 not really a pdf")
    with caplog.at_level(logging.WARNING):
        assert extractor.sku_for_page(1) is None
    assert "SKU extraction error" in caplog.text
