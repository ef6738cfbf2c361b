"""PyPDF2 primitives shared by the label pipeline stages."""

from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Iterable, Union

from PyPDF2 import PageObject, PdfReader, PdfWriter

PdfSource = Union[bytes, bytearray, str, os.PathLike, BinaryIO]


def read_source(source: PdfSource) -> bytes:
    """Return the raw bytes of an input path, buffer or binary stream."""

    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_bytes()
    read = getattr(source, "read", None)
    if not callable(read):
        raise TypeError(f"Unsupported PDF source: {type(source).__name__}")
    try:
        source.seek(0)
    except (AttributeError, OSError):
        pass
    data = read()
    if isinstance(data, str):
        raise TypeError("PDF streams must be opened in binary mode")
    return data


def open_reader(data: bytes) -> PdfReader:
    return PdfReader(BytesIO(data))


def copy_pages_into(
    source: PdfReader, page_indices: Iterable[int], target: PdfWriter
) -> list[PageObject]:
    """Copy ``page_indices`` of ``source`` to the end of ``target`` in order.

    The copies belong to ``target``; ``source`` can be dropped afterwards.
    """

    start = len(target.pages)
    for index in page_indices:
        target.add_page(source.pages[index])
    return [target.pages[position] for position in range(start, len(target.pages))]


def load_document(data: bytes) -> PdfWriter:
    reader = open_reader(data)
    document = PdfWriter()
    copy_pages_into(reader, range(len(reader.pages)), document)
    return document


def merge_documents(sources: Iterable[bytes]) -> PdfWriter:
    """Append every page of every source, keeping file then page order."""

    document = PdfWriter()
    for data in sources:
        reader = open_reader(data)
        copy_pages_into(reader, range(len(reader.pages)), document)
    return document


def serialize(document: PdfWriter) -> bytes:
    buffer = BytesIO()
    document.write(buffer)
    return buffer.getvalue()


def snapshot(document: PdfWriter) -> tuple[bytes, PdfReader]:
    """Serialize ``document`` and reopen it for copying into a new document."""

    data = serialize(document)
    return data, open_reader(data)


def page_count(data: bytes) -> int:
    return len(open_reader(data).pages)


__all__ = [
    "PdfSource",
    "copy_pages_into",
    "load_document",
    "merge_documents",
    "open_reader",
    "page_count",
    "read_source",
    "serialize",
    "snapshot",
]
