"""Shipping label cropping plugin."""

manifest = {
    "title": "Label Crop",
    "summary": "Merge, crop, sort by SKU and stamp shipping label PDFs.",
    "blueprint": "label_crop",
    "category": "Document Utilities",
}


__all__ = ["manifest"]
