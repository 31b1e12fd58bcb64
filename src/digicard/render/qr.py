"""QR codes for card share links."""

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M

from digicard.render.image import save_image_to_bytes, to_data_url

QR_BOX_SIZE = 8
QR_BORDER = 4


def make_qr_image(data: str, box_size: int = QR_BOX_SIZE, border: int = QR_BORDER) -> Image.Image:
    """
    Encode text as a black-on-white QR code.

    Args:
        data: Text to encode, usually a share link.
        box_size: Pixels per module.
        border: Quiet zone width in modules.

    Returns:
        RGB PIL Image.

    Raises:
        ValueError: If data is empty.
    """
    if not data:
        raise ValueError("Nothing to encode in the QR code")
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white").convert("RGB")


def qr_png_bytes(data: str, box_size: int = QR_BOX_SIZE) -> bytes:
    return save_image_to_bytes(make_qr_image(data, box_size), "PNG")


def qr_data_url(data: str, box_size: int = 4) -> str:
    """QR code as an inline PNG data: URL, small enough for a page footer."""
    return to_data_url(qr_png_bytes(data, box_size), "image/png")
