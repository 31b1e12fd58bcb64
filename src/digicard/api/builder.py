"""High-level API for viewing, sharing and exporting cards."""

import logging
from datetime import date
from pathlib import Path
from typing import NamedTuple

from digicard.api.store import Store
from digicard.config import export_filename
from digicard.design import Page, TemplateCatalog
from digicard.exceptions import CardNotFoundError, CardValidationError, DigicardError
from digicard.models import CardRecord
from digicard.render import HTMLRenderer, PDFRenderer, qr_png_bytes
from digicard.utils.links import extract_card_ref, share_url

logger = logging.getLogger(__name__)


class PublicView(NamedTuple):
    """A card as served to an anonymous visitor."""

    card: CardRecord
    page: Page


def resolve_card(store: Store, url_or_ref: str) -> CardRecord:
    """
    Find a card from a share link, "card/<ref>" path, id or slug.

    Args:
        store: Store to search.
        url_or_ref: Share URL or bare reference.

    Returns:
        The card.

    Raises:
        CardNotFoundError: If no card matches.
        ValueError: If no reference can be parsed from the URL.
    """
    ref = extract_card_ref(url_or_ref)
    card = store.find_card(ref)
    if card is None:
        raise CardNotFoundError(ref)
    return card


def view_public_card(
    store: Store,
    ref: str,
    catalog: TemplateCatalog,
    today: date | None = None,
) -> PublicView:
    """
    Render a card for the public viewer and count the view.

    No sign-in is needed. The view counter is best effort: when the store
    cannot record it, the failure is logged and the page is still served.

    Args:
        store: Store to read from.
        ref: Card id, slug or share URL.
        catalog: Template catalog.
        today: Reference date for the opening-hours highlight.

    Returns:
        PublicView with the card (including the new view count) and its page.

    Raises:
        CardNotFoundError: If no card matches.
    """
    card = resolve_card(store, ref)
    page = catalog.render_card(card, today)

    try:
        views = store.increment_views(card.id)
        card = card.model_copy(update={"views": views})
    except DigicardError as e:
        logger.warning(f"Could not record view for card {card.id}: {e}")

    logger.info(f"Served card {card.id} ({card.template_id})")
    return PublicView(card=card, page=page)


def card_share_url(card: CardRecord, base_url: str) -> str:
    """
    Get the public link for a saved card.

    Args:
        card: Saved card.
        base_url: Public base URL from configuration.

    Returns:
        URL of the form "<base>#/card/<slug or id>".

    Raises:
        CardValidationError: If the card has not been saved yet.
    """
    ref = card.public_ref
    if ref is None:
        raise CardValidationError("id", "save the card before sharing it")
    return share_url(ref, base_url)


def card_qr_png(card: CardRecord, base_url: str) -> bytes:
    """
    Render the share link of a saved card as a PNG QR code.

    Args:
        card: Saved card.
        base_url: Public base URL from configuration.

    Returns:
        PNG image bytes.

    Raises:
        CardValidationError: If the card has not been saved yet.
    """
    return qr_png_bytes(card_share_url(card, base_url))


def render_card_html(
    card: CardRecord,
    catalog: TemplateCatalog,
    base_url: str | None = None,
    today: date | None = None,
) -> str:
    """
    Render a card to a standalone HTML document.

    Args:
        card: Card to render.
        catalog: Template catalog.
        base_url: Public base URL; when given and the card is saved, the
                  share link is shown in the footer.
        today: Reference date for the opening-hours highlight.

    Returns:
        HTML document.
    """
    link = share_url(card.public_ref, base_url) if base_url and card.public_ref else None
    page = catalog.render_card(card, today)
    return HTMLRenderer(share_link=link).render(page)


def export_card_pdf(
    card: CardRecord,
    catalog: TemplateCatalog,
    output_path: Path | None = None,
    page_size: str = "letter",
    today: date | None = None,
) -> Path:
    """
    Export a card to a printable PDF.

    Args:
        card: Card to render.
        catalog: Template catalog.
        output_path: Output file. Defaults to "<name> - card.pdf" in the
                     current directory.
        page_size: Page size name (letter, half, a4, a5, a6).
        today: Reference date for the opening-hours highlight.

    Returns:
        Path of the written PDF.
    """
    output_path = output_path or Path(export_filename(card.full_name))
    page = catalog.render_card(card, today)
    PDFRenderer(page_size=page_size).render_page(page, output_path)
    return output_path
