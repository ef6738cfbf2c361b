"""Per-run pipeline settings and their normalisation from form data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from common.forms import FormDataLike, get_bool, get_str
from common.validation import ValidationError

from .crop import parse_margin
from .presets import DEFAULT_PLATFORM, get_preset

DEFAULT_MARGIN = "50"


@dataclass(frozen=True)
class ProcessSettings:
    """Options for one pipeline run.

    ``margin`` is ignored for platforms with a fixed crop box.
    """

    merge_pdf: bool = False
    platform: str = DEFAULT_PLATFORM
    margin: int | str | None = None
    sort_sku: bool = False
    add_date_time: bool = False
    add_text: bool = False
    custom_text: str = ""

    @classmethod
    def from_form(cls, data: FormDataLike) -> "ProcessSettings":
        """Build settings from camelCase request fields.

        A missing margin, or the stock default of 50, is replaced by the
        platform preset's own margin.
        """

        platform = get_str(data, "platform", DEFAULT_PLATFORM) or DEFAULT_PLATFORM
        margin: int | str | None = get_str(data, "margin", DEFAULT_MARGIN)
        preset = get_preset(platform)
        if preset.margin is not None and (not margin or margin == DEFAULT_MARGIN):
            margin = str(preset.margin)
        if margin:
            try:
                parse_margin(margin)
            except ValueError as exc:
                raise ValidationError("Invalid value for margin", details={"margin": margin}) from exc

        return cls(
            merge_pdf=get_bool(data, "mergePdf"),
            platform=platform,
            margin=margin,
            sort_sku=get_bool(data, "sortSku"),
            add_date_time=get_bool(data, "addDateTime"),
            add_text=get_bool(data, "addText"),
            custom_text=get_str(data, "customText", "", strip=False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mergePdf": self.merge_pdf,
            "platform": self.platform,
            "margin": self.margin,
            "sortSku": self.sort_sku,
            "addDateTime": self.add_date_time,
            "addText": self.add_text,
            "customText": self.custom_text,
        }


__all__ = ["DEFAULT_MARGIN", "ProcessSettings"]
