"""Platform crop presets for shipping label layouts."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CropBox:
    """Visible page rectangle in points, origin bottom-left."""

    x: float
    y: float
    width: float
    height: float

    def as_rect(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class CropPreset:
    """Either a fixed crop box or a symmetric margin, never both."""

    platform: str
    margin: int | None = None
    fixed_box: CropBox | None = None

    @property
    def is_fixed(self) -> bool:
        return self.fixed_box is not None

    def to_dict(self) -> dict[str, object]:
        if self.fixed_box is not None:
            box = self.fixed_box
            return {
                "fixedBox": {"x": box.x, "y": box.y, "width": box.width, "height": box.height}
            }
        return {"margin": self.margin}


# Flipkart labels are printed at a fixed position on an A4 sheet.
FLIPKART_CROP_BOX = CropBox(x=165, y=460, width=265, height=360)

DEFAULT_PLATFORM = "custom"

_PRESETS: dict[str, CropPreset] = {
    "flipkart": CropPreset(platform="flipkart", fixed_box=FLIPKART_CROP_BOX),
    "meesho": CropPreset(platform="meesho", margin=40),
    "amazon": CropPreset(platform="amazon", margin=45),
    "citymall": CropPreset(platform="citymall", margin=35),
    DEFAULT_PLATFORM: CropPreset(platform=DEFAULT_PLATFORM, margin=50),
}

PLATFORMS: tuple[str, ...] = tuple(_PRESETS)


def get_preset(platform: str | None) -> CropPreset:
    """Return the preset for ``platform``, falling back to ``custom``."""

    if isinstance(platform, str) and platform in _PRESETS:
        return _PRESETS[platform]
    return _PRESETS[DEFAULT_PLATFORM]


__all__ = [
    "CropBox",
    "CropPreset",
    "DEFAULT_PLATFORM",
    "FLIPKART_CROP_BOX",
    "PLATFORMS",
    "get_preset",
]
