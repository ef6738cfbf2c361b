"""Label processing pipeline: merge, crop, sort by SKU, stamp, serialize."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from PyPDF2 import PdfWriter

from common.logging import get_logger

from .annotate import stamp_custom_text, stamp_timestamp
from .crop import apply_fixed_crop, apply_margin_crop, parse_margin
from .document import (
    PdfSource,
    copy_pages_into,
    load_document,
    merge_documents,
    read_source,
    serialize,
    snapshot,
)
from .presets import get_preset
from .settings import ProcessSettings
from .sku import PageTextExtractor, sort_key_for

logger = get_logger("label_crop.pipeline")


class ProcessingError(RuntimeError):
    """Raised when any pipeline stage fails; no partial output exists."""

    def __init__(self, message: str, *, stage: str):
        super().__init__(f"PDF processing failed: {message}")
        self.stage = stage


@dataclass(frozen=True)
class PageOrder:
    index: int
    sku: str | None
    key: str


@dataclass(frozen=True)
class Stage:
    name: str
    enabled: Callable[[ProcessSettings], bool]
    run: Callable[[PdfWriter, ProcessSettings], PdfWriter]


def load_stage(sources: Sequence[PdfSource], settings: ProcessSettings) -> PdfWriter:
    if not sources:
        raise ValueError("No input files provided")
    if settings.merge_pdf and len(sources) > 1:
        document = merge_documents(read_source(source) for source in sources)
        logger.info("merged %d pages from %d files", len(document.pages), len(sources))
        return document
    document = load_document(read_source(sources[0]))
    logger.info("loaded %d pages from a single file", len(document.pages))
    return document


def _crop_enabled(settings: ProcessSettings) -> bool:
    if get_preset(settings.platform).is_fixed:
        return True
    return bool(settings.margin) and settings.margin != "0"


def crop_stage(document: PdfWriter, settings: ProcessSettings) -> PdfWriter:
    preset = get_preset(settings.platform)
    if preset.fixed_box is not None:
        logger.info("applying %s fixed crop", preset.platform)
        return apply_fixed_crop(document, preset.fixed_box)
    margin = parse_margin(settings.margin)
    logger.info("applying %dpt margin crop", margin)
    return apply_margin_crop(document, margin)


def sort_pages(extractor: PageTextExtractor, count: int) -> list[PageOrder]:
    """Return page positions ordered by SKU, pages without one last.

    The sort is stable, so equal keys keep their original relative order.
    Pages without a SKU are ordered by position, not by their fallback key,
    whose zero padding runs out past 9999 pages.
    """

    entries = []
    for index in range(count):
        sku = extractor.sku_for_page(index + 1)
        entries.append(PageOrder(index=index, sku=sku, key=sort_key_for(sku, index)))
    return sorted(entries, key=_sort_order)


def _sort_order(entry: PageOrder) -> tuple[bool, int, str]:
    if entry.sku is None:
        return (True, entry.index, "")
    return (False, 0, entry.key.upper())


def sort_stage(document: PdfWriter, settings: ProcessSettings) -> PdfWriter:
    data, source = snapshot(document)
    order = sort_pages(PageTextExtractor(data), len(source.pages))
    ordered = PdfWriter()
    for entry in order:
        copy_pages_into(source, [entry.index], ordered)
        logger.debug("page %d: %s", entry.index + 1, entry.key)
    logger.info("sorted %d pages by SKU", len(order))
    return ordered


def timestamp_stage(document: PdfWriter, settings: ProcessSettings) -> PdfWriter:
    return stamp_timestamp(document)


def custom_text_stage(document: PdfWriter, settings: ProcessSettings) -> PdfWriter:
    return stamp_custom_text(document, settings.custom_text)


STAGES: tuple[Stage, ...] = (
    Stage("crop", _crop_enabled, crop_stage),
    Stage("sort", lambda settings: settings.sort_sku, sort_stage),
    Stage("timestamp", lambda settings: settings.add_date_time, timestamp_stage),
    Stage(
        "custom_text",
        lambda settings: settings.add_text and bool(settings.custom_text),
        custom_text_stage,
    ),
)


def process(files: Sequence[PdfSource], settings: ProcessSettings) -> bytes:
    """Run the label pipeline over ``files`` and return the output PDF bytes.

    Raises :class:`ProcessingError` if any stage fails.
    """

    logger.info("processing %d file(s) with %s", len(files), settings.to_dict())
    stage_name = "load"
    try:
        document = load_stage(files, settings)
        for stage in STAGES:
            stage_name = stage.name
            if not stage.enabled(settings):
                logger.info("skipping %s", stage.name)
                continue
            document = stage.run(document, settings)
        stage_name = "serialize"
        output = serialize(document)
    except Exception as exc:
        logger.error("%s stage failed: %s", stage_name, exc)
        raise ProcessingError(str(exc), stage=stage_name) from exc

    logger.info("processing complete: %d pages, %d bytes", len(document.pages), len(output))
    return output


__all__ = [
    "PageOrder",
    "ProcessingError",
    "STAGES",
    "Stage",
    "process",
    "sort_pages",
]
