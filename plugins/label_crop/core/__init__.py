from __future__ import annotations

from .annotate import format_timestamp, stamp_custom_text, stamp_timestamp
from .crop import apply_fixed_crop, apply_margin_crop, parse_margin
from .document import copy_pages_into, page_count
from .pipeline import ProcessingError, process
from .presets import CropBox, CropPreset, FLIPKART_CROP_BOX, PLATFORMS, get_preset
from .settings import ProcessSettings
from .sku import extract_page_text, extract_sku, fallback_sort_key

__all__ = [
    "CropBox",
    "CropPreset",
    "FLIPKART_CROP_BOX",
    "PLATFORMS",
    "ProcessSettings",
    "ProcessingError",
    "apply_fixed_crop",
    "apply_margin_crop",
    "copy_pages_into",
    "extract_page_text",
    "extract_sku",
    "fallback_sort_key",
    "format_timestamp",
    "get_preset",
    "page_count",
    "parse_margin",
    "process",
    "stamp_custom_text",
    "stamp_timestamp",
]
