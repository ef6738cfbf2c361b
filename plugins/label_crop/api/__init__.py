"""Label crop API blueprint with standardized responses."""

from __future__ import annotations

import base64
import time
from io import BytesIO
from typing import Annotated

from flask import Blueprint, Response, current_app, request, send_file
from pydantic import Field, StringConstraints

from common.errors import InternalAppError, ValidationAppError
from common.io import secure_filename
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import (
    FileLimit,
    SchemaModel,
    ValidationError,
    enforce_limits,
    parse_model,
    validate_mime,
)

from ..core import PLATFORMS, ProcessingError, ProcessSettings, get_preset, page_count, process

API_VERSION = "1.0.0"

logger = get_logger("label_crop.api")


class ProcessForm(SchemaModel):
    """Multipart form fields accepted by ``/process``."""

    merge_pdf: bool = Field(False, alias="mergePdf")
    platform: str = "custom"
    margin: str | None = None
    sort_sku: bool = Field(False, alias="sortSku")
    add_date_time: bool = Field(False, alias="addDateTime")
    add_text: bool = Field(False, alias="addText")
    custom_text: Annotated[str, StringConstraints(strip_whitespace=False, max_length=200)] = Field(
        "", alias="customText"
    )
    keep_invoice: bool = Field(False, alias="keepInvoice")
    multi_orders: bool = Field(False, alias="multiOrders")


api_bp = Blueprint("label_crop_api", __name__, url_prefix="/api/label_crop")


def _upload_limit() -> FileLimit:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("label_crop", {})
    upload = settings.get("upload")
    return FileLimit.from_settings(upload, default_max_files=10, default_max_mb=20)


def _download_requested() -> bool:
    return request.args.get("download") == "1"


def _read_settings() -> ProcessSettings:
    fields = {key: value for key, value in request.form.items() if value != ""}
    form = parse_model(ProcessForm, fields)
    return ProcessSettings.from_form(form.model_dump(by_alias=True))


def _output_name(settings: ProcessSettings, uploads: list) -> str:
    stamp = int(time.time() * 1000)
    if settings.merge_pdf and len(uploads) > 1:
        return f"merged-{stamp}.pdf"
    original = secure_filename(uploads[0].filename or "", fallback="document.pdf")
    if not original.lower().endswith(".pdf"):
        original = f"{original}.pdf"
    return f"processed-{stamp}-{original}"


@api_bp.post("/process")
def process_labels() -> Response:
    uploads = [file for file in request.files.getlist("pdf") if file]
    if not uploads:
        return fail(
            ValidationAppError(message="No files uploaded", code="label_crop.file_missing")
        )
    try:
        enforce_limits(uploads, _upload_limit())
        validate_mime(uploads, {"application/pdf"})
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="label_crop.invalid_upload",
                details=exc.details,
            )
        )

    try:
        settings = _read_settings()
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="label_crop.invalid_settings",
                details=exc.details,
            )
        )

    try:
        output = process([file.stream for file in uploads], settings)
    except ProcessingError as exc:
        return fail(
            InternalAppError(
                message=str(exc),
                code="label_crop.processing_failed",
                details={"stage": exc.stage},
            )
        )

    filename = _output_name(settings, uploads)
    logger.info("processed %d upload(s) into %s", len(uploads), filename)
    if _download_requested():
        return send_file(
            BytesIO(output),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=filename,
            max_age=0,
        )
    payload = {
        "filename": filename,
        "pdf_base64": base64.b64encode(output).decode("ascii"),
        "page_count": page_count(output),
        "settings": settings.to_dict(),
    }
    return ok(payload)


@api_bp.get("/info")
def info() -> Response:
    features = {
        "mergePdf": {"status": "active", "description": "Merge multiple PDFs into one"},
        "cropPdf": {"status": "active", "description": "Crop PDF with platform presets or margins"},
        "sortSku": {"status": "active", "description": "Reorder pages by extracted SKU"},
        "addDateTime": {"status": "active", "description": "Add date and time stamp"},
        "addText": {"status": "active", "description": "Add custom text to every page"},
        "keepInvoice": {"status": "coming_soon", "description": "Preserve invoice pages"},
        "multiOrders": {"status": "coming_soon", "description": "Move multi-item orders to the end"},
    }
    platforms = {name: get_preset(name).to_dict() for name in PLATFORMS}
    return ok({"version": API_VERSION, "features": features, "platforms": platforms})


blueprints = [api_bp]


__all__ = ["blueprints", "process_labels", "info"]
