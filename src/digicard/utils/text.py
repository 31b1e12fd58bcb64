"""Identifier and slug helpers."""

import re
import unicodedata
import uuid


def new_id() -> str:
    """Return a fresh opaque identifier for list items."""
    return uuid.uuid4().hex[:12]


def slugify(text: str, max_length: int = 48) -> str:
    """
    Turn free text into a URL-safe slug.

    Accents are stripped, anything that is not a letter or digit becomes a
    single hyphen.

    Args:
        text: Text to convert (typically the card's full name).
        max_length: Maximum slug length.

    Returns:
        Lowercase slug, possibly empty.

    Examples:
        >>> slugify("José Álvarez & Co.")
        'jose-alvarez-co'
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")
    return slug[:max_length].rstrip("-")


def unique_slug(text: str, suffix: str | None = None) -> str:
    """
    Build a slug with a short random suffix.

    Args:
        text: Text to slugify.
        suffix: Suffix to use instead of a random one.

    Returns:
        Slug like "jane-doe-3f9a".
    """
    base = slugify(text) or "card"
    suffix = suffix or uuid.uuid4().hex[:4]
    return f"{base}-{suffix}"
