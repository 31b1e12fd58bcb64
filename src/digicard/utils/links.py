"""Hyperlink construction for contact channels and share links."""

import re
from urllib.parse import quote, quote_plus


def safe_href(value: str | None) -> str | None:
    """
    Turn user input into a usable link target.

    Values that already start with "http", "mailto:" or "tel:" are kept,
    anything else (bare domains like "example.com") gets "https://" prefixed.

    Args:
        value: Raw URL-shaped field.

    Returns:
        Link target, or None if value is empty.
    """
    if not value:
        return None
    value = value.strip()
    if not value:
        return None
    if value.startswith(("http", "mailto:", "tel:")):
        return value
    return f"https://{value}"


def phone_href(phone: str | None) -> str | None:
    """Build a tel: link, None when the phone number is absent."""
    if not phone:
        return None
    return f"tel:{re.sub(r'[^0-9+]', '', phone)}"


def email_href(email: str | None) -> str | None:
    """Build a mailto: link, None when the address is absent."""
    if not email:
        return None
    return f"mailto:{email.strip()}"


def whatsapp_href(number: str | None) -> str | None:
    """Build a wa.me chat link from a phone number (digits only)."""
    if not number:
        return None
    digits = re.sub(r"\D", "", number)
    if not digits:
        return None
    return f"https://wa.me/{digits}"


def location_href(address: str | None) -> str | None:
    """Build a Google Maps search link for a postal address."""
    if not address:
        return None
    return f"https://maps.google.com/?q={quote_plus(address)}"


def map_embed_url(address: str, custom_url: str | None = None) -> str:
    """
    Get the embeddable map URL for an address.

    Args:
        address: Postal address.
        custom_url: User-supplied embed URL that overrides the generated one.

    Returns:
        Embed URL.
    """
    if custom_url:
        return safe_href(custom_url) or custom_url
    return f"https://maps.google.com/maps?q={quote(address)}&t=&z=15&ie=UTF8&iwloc=&output=embed"


def share_url(ref: str, base_url: str) -> str:
    """
    Build the public share link for a card.

    Args:
        ref: Card slug or id.
        base_url: Public base URL of the viewer.

    Returns:
        URL of the form "<base>#/card/<ref>".
    """
    base = base_url.split("#", 1)[0]
    return f"{base}#/card/{quote(ref, safe='')}"


def extract_card_ref(url: str) -> str:
    """
    Extract the card id or slug from a share link.

    Args:
        url: Full share URL, "card/<ref>" or a bare ref.

    Returns:
        The card ref.

    Raises:
        ValueError: If no ref can be found.

    Examples:
        >>> extract_card_ref("https://cards.example.com/#/card/jane-doe-3f9a")
        'jane-doe-3f9a'
        >>> extract_card_ref("card/c1a2b3")
        'c1a2b3'
        >>> extract_card_ref("jane-doe-3f9a")
        'jane-doe-3f9a'
    """
    url = url.strip()

    # Parse URL fragment (after #)
    if "#/" in url:
        fragment = url.split("#/", 1)[1]
        parts = [p for p in fragment.split("/") if p]
        if len(parts) >= 2 and parts[0] == "card":
            return parts[1]
        raise ValueError(f"Could not extract card reference from: {url}")

    # Simple path format
    if "/" in url and not url.startswith("http"):
        parts = [p for p in url.split("/") if p]
        if len(parts) >= 2 and parts[0] == "card":
            return parts[1]

    if url and "/" not in url and ":" not in url:
        return url

    raise ValueError(
        f"Could not extract card reference from: {url}\n"
        "Expected format: card/REF, REF, or https://host/#/card/REF"
    )
