"""Image processing utilities using Pillow."""

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from digicard.types import ImageField

logger = logging.getLogger(__name__)

# Maximum stored width per image field (pixels)
IMAGE_MAX_WIDTHS: dict[ImageField, int] = {
    "profile_image": 800,
    "banner_image": 800,
    "logo_image": 200,
}

JPEG_QUALITY = 80


def load_image_from_bytes(image_data: bytes) -> Image.Image:
    """
    Load image from raw bytes.

    Args:
        image_data: Raw image bytes (JPEG, PNG, etc.).

    Returns:
        PIL Image object.

    Raises:
        ValueError: If the bytes are not a readable image.
    """
    try:
        img = Image.open(BytesIO(image_data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Not a readable image: {e}") from e
    return img


def resize_to_width(img: Image.Image, max_width: int) -> Image.Image:
    """
    Scale an image down to a maximum width, keeping its aspect ratio.

    Images that are already narrow enough are returned unchanged.

    Args:
        img: Source image.
        max_width: Maximum width in pixels.

    Returns:
        Resized PIL Image.
    """
    if img.width <= max_width:
        return img
    new_height = max(1, round(img.height * max_width / img.width))
    return img.resize((max_width, new_height), Image.Resampling.LANCZOS)


def save_image_to_bytes(img: Image.Image, format: str = "JPEG", quality: int = JPEG_QUALITY) -> bytes:
    """
    Save PIL Image to bytes.

    Args:
        img: PIL Image object.
        format: Image format (PNG, JPEG, etc.).
        quality: Encoder quality for lossy formats.

    Returns:
        Image as bytes.
    """
    # JPEG has no alpha channel
    if format.upper() == "JPEG" and img.mode != "RGB":
        img = img.convert("RGB")
    buffer = BytesIO()
    img.save(buffer, format=format, quality=quality)
    return buffer.getvalue()


def to_data_url(data: bytes, mime_type: str = "image/jpeg") -> str:
    """Encode bytes as a base64 data: URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_url(url: str) -> tuple[str, bytes]:
    """
    Decode a base64 data: URL.

    Args:
        url: URL of the form "data:<mime>;base64,<payload>".

    Returns:
        Tuple of (mime type, raw bytes).

    Raises:
        ValueError: If the URL is not a base64 data URL.
    """
    if not url.startswith("data:") or "," not in url:
        raise ValueError("Not a data URL")
    header, payload = url[5:].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return header[: -len(";base64")] or "text/plain", data


def prepare_upload(image_data: bytes, max_width: int) -> str:
    """
    Turn an uploaded image into a compact stored reference.

    The image is decoded, scaled down to max_width, re-encoded as JPEG and
    returned as a data: URL.

    Args:
        image_data: Raw image bytes.
        max_width: Maximum width in pixels.

    Returns:
        JPEG data URL.

    Raises:
        ValueError: If the bytes are not a readable image.
    """
    img = resize_to_width(load_image_from_bytes(image_data), max_width)
    encoded = save_image_to_bytes(img, format="JPEG", quality=JPEG_QUALITY)
    logger.debug(f"Prepared upload: {img.width}x{img.height}, {len(encoded)} bytes")
    return to_data_url(encoded, "image/jpeg")


def load_image_ref(ref: str | None) -> bytes | None:
    """
    Read the bytes behind an image reference when they are available offline.

    Args:
        ref: data: URL, local file path, or remote URL.

    Returns:
        Raw bytes for data URLs and existing files, None otherwise.
    """
    if not ref:
        return None
    if ref.startswith("data:"):
        try:
            return decode_data_url(ref)[1]
        except ValueError as e:
            logger.warning(f"Skipping malformed image data URL: {e}")
            return None
    if ref.startswith(("http://", "https://")):
        return None
    path = Path(ref).expanduser()
    if path.is_file():
        return path.read_bytes()
    return None
