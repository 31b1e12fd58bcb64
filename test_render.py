"""Tests for HTML/PDF output, image helpers and the high-level API."""

from io import BytesIO

import pytest
from PIL import Image

from conftest import WEDNESDAY
from digicard.api.builder import (
    card_qr_png,
    card_share_url,
    export_card_pdf,
    render_card_html,
    resolve_card,
    view_public_card,
)
from digicard.exceptions import CardNotFoundError, CardValidationError, StoreError
from digicard.models import CardRecord, SocialLinks
from digicard.render import HTMLRenderer, PDFRenderer
from digicard.render.image import decode_data_url, prepare_upload, resize_to_width, to_data_url
from digicard.render.pdf import pdf_font_family
from digicard.render.qr import QR_BORDER, QR_BOX_SIZE, make_qr_image


def _png_bytes(size=(1600, 800), color=(0, 128, 255)):
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


# ----------------------------------------------------------------------
# HTML
# ----------------------------------------------------------------------


def test_html_escapes_user_text(catalog):
    card = CardRecord(
        full_name="<script>alert(1)</script>",
        about_text="Fish & Chips",
        socials=SocialLinks(website="example.com/?a=1&b='x'"),
    )
    html = HTMLRenderer().render(catalog.render("minimal", card))

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "Fish &amp; Chips" in html
    assert "href='https://example.com/?a=1&amp;b=&#x27;x&#x27;'" in html


def test_html_contains_sections_in_order(catalog, full_card):
    card = full_card.model_copy(update={"section_order": ["map", "about", "hours", "services", "gallery"]})
    html = HTMLRenderer().render(catalog.render("modern", card, WEDNESDAY))

    positions = [html.index(f"<section id='{s}'>") for s in ("map", "about", "hours", "services", "gallery")]
    assert positions == sorted(positions)
    assert "<iframe src='https://maps.google.com/maps?q=" in html
    assert "<li class='today'>" in html
    assert "--primary:#3b82f6" in html


def test_html_share_footer(catalog, full_card):
    card = full_card.model_copy(update={"id": "c1", "slug": "jane"})
    html = render_card_html(card, catalog, base_url="https://cards.example.com/")

    assert "https://cards.example.com/#/card/jane" in html
    assert "<img class='qr' src='data:image/png;base64," in html
    assert "Share:" not in render_card_html(card, catalog)


# ----------------------------------------------------------------------
# PDF
# ----------------------------------------------------------------------


@pytest.mark.parametrize("page_size", ["letter", "a6"])
def test_pdf_export_writes_file(catalog, full_card, tmp_path, page_size):
    card = full_card.model_copy(update={"profile_image": to_data_url(_png_bytes((200, 200)), "image/png")})
    output = tmp_path / "card.pdf"

    path = export_card_pdf(card, catalog, output, page_size=page_size, today=WEDNESDAY)

    assert path == output
    assert output.read_bytes().startswith(b"%PDF")


def test_pdf_handles_long_content(catalog, tmp_path):
    card = CardRecord(full_name="Long", about_text="\n".join(f"Paragraph {i} " * 20 for i in range(80)))
    output = tmp_path / "long.pdf"

    PDFRenderer(page_size="a6").render_page(catalog.render("terminal", card), output)

    assert output.stat().st_size > 0


def test_pdf_font_mapping():
    assert pdf_font_family("'Fira Code', Menlo, monospace") == ("Courier", "Courier-Bold")
    assert pdf_font_family("Georgia, serif") == ("Times-Roman", "Times-Bold")
    assert pdf_font_family("Helvetica, Arial, sans-serif") == ("Helvetica", "Helvetica-Bold")


# ----------------------------------------------------------------------
# Images
# ----------------------------------------------------------------------


def test_resize_to_width_keeps_aspect_ratio():
    img = Image.new("RGB", (1600, 800))
    assert resize_to_width(img, 800).size == (800, 400)
    assert resize_to_width(img, 2000) is img


def test_prepare_upload():
    url = prepare_upload(_png_bytes(), 800)
    mime, data = decode_data_url(url)

    assert mime == "image/jpeg"
    assert Image.open(BytesIO(data)).size == (800, 400)


def test_prepare_upload_rejects_garbage():
    with pytest.raises(ValueError):
        prepare_upload(b"definitely not an image", 800)


@pytest.mark.parametrize("url", ["https://x/y.png", "data:image/png,raw", "data:image/png;base64,***"])
def test_decode_data_url_rejects(url):
    with pytest.raises(ValueError):
        decode_data_url(url)


# ----------------------------------------------------------------------
# Public view and sharing
# ----------------------------------------------------------------------


def test_view_public_card_counts_views(store, catalog):
    saved = store.save_card(CardRecord(owner_id="u1", slug="jane", full_name="Jane"))

    first = view_public_card(store, "jane", catalog)
    second = view_public_card(store, f"https://cards.example.com/#/card/{saved.id}", catalog)

    assert first.card.views == 1
    assert second.card.views == 2
    assert first.page.identity.full_name == "Jane"


def test_view_public_card_survives_counter_failure(store, catalog, monkeypatch):
    store.save_card(CardRecord(owner_id="u1", slug="jane", full_name="Jane"))

    def broken(card_id):
        raise StoreError("read-only filesystem")

    monkeypatch.setattr(store, "increment_views", broken)
    view = view_public_card(store, "jane", catalog)

    assert view.page.identity.full_name == "Jane"
    assert view.card.views == 0


def test_view_public_card_not_found(store, catalog):
    with pytest.raises(CardNotFoundError):
        view_public_card(store, "nobody", catalog)


def test_share_url_round_trip(store):
    saved = store.save_card(CardRecord(owner_id="u1", slug="jane-doe-1a2b"))
    url = card_share_url(saved, "https://cards.example.com/")

    assert url == "https://cards.example.com/#/card/jane-doe-1a2b"
    assert resolve_card(store, url) == saved


def test_share_url_uses_id_without_slug(store):
    saved = store.save_card(CardRecord(owner_id="u1"))
    assert card_share_url(saved, "https://c.example/").endswith(f"#/card/{saved.id}")


def test_share_requires_saved_card():
    with pytest.raises(CardValidationError):
        card_share_url(CardRecord(), "https://cards.example.com/")


# ----------------------------------------------------------------------
# QR codes
# ----------------------------------------------------------------------


def test_card_qr_png(store):
    saved = store.save_card(CardRecord(owner_id="u1", slug="jane"))

    img = Image.open(BytesIO(card_qr_png(saved, "https://cards.example.com/")))

    assert img.format == "PNG"
    assert img.width == img.height
    # Quiet zone is white, the top-left finder pattern starts right after it
    assert img.convert("RGB").getpixel((0, 0)) == (255, 255, 255)
    edge = QR_BORDER * QR_BOX_SIZE + 1
    assert img.convert("RGB").getpixel((edge, edge)) == (0, 0, 0)


def test_longer_links_make_bigger_codes():
    short = make_qr_image("https://c.example/#/card/a")
    long = make_qr_image("https://cards.example.com/#/card/" + "x" * 200)
    assert long.width > short.width


def test_qr_requires_saved_card():
    with pytest.raises(CardValidationError):
        card_qr_png(CardRecord(), "https://cards.example.com/")
    with pytest.raises(ValueError):
        make_qr_image("")
