"""SKU extraction from label page text."""

from __future__ import annotations

import re
from io import BytesIO

from PyPDF2 import PdfReader

from common.logging import get_logger

logger = get_logger("label_crop.sku")

FALLBACK_PREFIX = "zzz_no_sku_"

# Order matters: the first pattern with a non-empty capture wins.
SKU_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "1 sp_megha red chiku | MFTEXO"
    re.compile(r"\d+\s+([a-zA-Z0-9_\s-]+?)\s*\|\s*[A-Z]", re.IGNORECASE),
    # "QTY 2 blue-owl-lamp |"
    re.compile(r"QTY\s+\d+\s+([a-zA-Z0-9_\s-]+?)\s*\|", re.IGNORECASE),
    # "SKU ID ... QTY 2 blue-owl-lamp |" across lines
    re.compile(r"SKU ID.*?QTY\s+\d+\s+([a-zA-Z0-9_\s-]+?)\s*\|", re.IGNORECASE | re.DOTALL),
)


def extract_sku(page_text: str | None) -> str | None:
    """Return the first SKU-like capture found in ``page_text``."""

    if not page_text:
        return None
    for pattern in SKU_PATTERNS:
        match = pattern.search(page_text)
        if match is None:
            continue
        candidate = match.group(1).strip()
        if candidate:
            return candidate
    return None


def fallback_sort_key(index: int) -> str:
    """Key for a page without a SKU; sorts after real SKUs, stable by index."""

    return f"{FALLBACK_PREFIX}{index:04d}"


def sort_key_for(sku: str | None, index: int) -> str:
    return sku if sku else fallback_sort_key(index)


class PageTextExtractor:
    """Best-effort per-page text extraction over serialized PDF bytes.

    The underlying reader is parsed lazily once and reused for every page.
    Failures are logged and reported as missing text for that page only.
    """

    def __init__(self, pdf_bytes: bytes):
        self._data = pdf_bytes
        self._reader: PdfReader | None = None

    def _get_reader(self) -> PdfReader:
        if self._reader is None:
            self._reader = PdfReader(BytesIO(self._data))
        return self._reader

    def page_text(self, page_number: int) -> str:
        """Return the text of the 1-based ``page_number``."""

        page = self._get_reader().pages[page_number - 1]
        return page.extract_text() or ""

    def sku_for_page(self, page_number: int) -> str | None:
        try:
            text = self.page_text(page_number)
        except Exception as exc:
            logger.warning("page %d: SKU extraction error: %s", page_number, exc)
            return None

        sku = extract_sku(text)
        if sku:
            logger.debug("page %d: SKU %r", page_number, sku)
        else:
            logger.debug("page %d: no SKU found", page_number)
        return sku


def extract_page_text(pdf_bytes: bytes, page_number: int) -> str:
    """Return the text of one 1-based page of ``pdf_bytes``."""

    return PageTextExtractor(pdf_bytes).page_text(page_number)


__all__ = [
    "FALLBACK_PREFIX",
    "SKU_PATTERNS",
    "PageTextExtractor",
    "extract_page_text",
    "extract_sku",
    "fallback_sort_key",
    "sort_key_for",
]
