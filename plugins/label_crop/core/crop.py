"""Crop geometry for label pages."""

from __future__ import annotations

import re

from PyPDF2 import PageObject, PdfWriter
from PyPDF2.generic import RectangleObject

from common.logging import get_logger

from .document import copy_pages_into, snapshot
from .presets import CropBox

logger = get_logger("label_crop.crop")

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_margin(value: int | float | str | None) -> int:
    """Return the integer margin in points.

    Strings keep their leading integer (``"12.7"`` -> 12, ``"30pt"`` -> 30).
    """

    if value is None:
        raise ValueError("Margin is required")
    if isinstance(value, bool):
        raise ValueError(f"Invalid margin: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid margin: {value!r}")
    return int(match.group(1))


def page_crop_box(page: PageObject) -> CropBox:
    box = page.cropbox
    return CropBox(
        x=float(box.left),
        y=float(box.bottom),
        width=float(box.width),
        height=float(box.height),
    )


def set_crop_box(page: PageObject, box: CropBox) -> None:
    page.cropbox = RectangleObject(box.as_rect())


def margin_crop_box(current: CropBox, margin: int) -> CropBox | None:
    """Inset ``current`` by ``margin`` on every side, or None if nothing is left."""

    width = current.width - 2 * margin
    height = current.height - 2 * margin
    if width <= 0 or height <= 0:
        return None
    return CropBox(x=current.x + margin, y=current.y + margin, width=width, height=height)


def apply_margin_crop(document: PdfWriter, margin: int) -> PdfWriter:
    """Narrow every page's crop box by ``margin`` points, in place."""

    for number, page in enumerate(document.pages, start=1):
        box = margin_crop_box(page_crop_box(page), margin)
        if box is None:
            logger.debug("page %d: margin %d leaves no visible area, crop skipped", number, margin)
            continue
        set_crop_box(page, box)
    return document


def apply_fixed_crop(document: PdfWriter, box: CropBox) -> PdfWriter:
    """Copy every page into a new document with the same fixed crop box.

    The box ignores the page's own size, so small pages end up with a crop
    box reaching past their media box.
    """

    _, source = snapshot(document)
    cropped = PdfWriter()
    for index in range(len(source.pages)):
        (page,) = copy_pages_into(source, [index], cropped)
        logger.debug(
            "page %d: %.0fx%.0fpt cropped to %.0fx%.0fpt at (%.0f,%.0f)",
            index + 1,
            float(page.mediabox.width),
            float(page.mediabox.height),
            box.width,
            box.height,
            box.x,
            box.y,
        )
        set_crop_box(page, box)
    return cropped


__all__ = [
    "apply_fixed_crop",
    "apply_margin_crop",
    "margin_crop_box",
    "page_crop_box",
    "parse_margin",
    "set_crop_box",
]
