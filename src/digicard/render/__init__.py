"""Rendering modules for HTML, PDF and image processing."""

from digicard.render.html import HTMLRenderer
from digicard.render.image import (
    IMAGE_MAX_WIDTHS,
    decode_data_url,
    load_image_from_bytes,
    prepare_upload,
    resize_to_width,
    save_image_to_bytes,
    to_data_url,
)
from digicard.render.pdf import PDFRenderer
from digicard.render.qr import make_qr_image, qr_data_url, qr_png_bytes

__all__ = [
    "HTMLRenderer",
    "IMAGE_MAX_WIDTHS",
    "PDFRenderer",
    "decode_data_url",
    "load_image_from_bytes",
    "make_qr_image",
    "prepare_upload",
    "qr_data_url",
    "qr_png_bytes",
    "resize_to_width",
    "save_image_to_bytes",
    "to_data_url",
]
