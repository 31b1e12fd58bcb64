"""Tests for the template catalog."""

import pytest

from conftest import WEDNESDAY
from digicard.design import TEMPLATE_IDS
from digicard.models import CardRecord, SocialLinks, default_card


def test_catalog_registers_all_variants(catalog):
    assert len(catalog) == 21
    assert catalog.template_ids == list(TEMPLATE_IDS)
    for template_id in ("minimal", "modern", "dark", "luxe", "terminal", "venura"):
        assert template_id in catalog


@pytest.mark.parametrize("template_id", ["nonexistent", "", "MINIMAL"])
def test_unknown_template_renders_like_minimal(catalog, full_card, template_id):
    card = full_card.model_copy(update={"template_id": template_id})

    assert catalog.render(template_id, card, WEDNESDAY) == catalog.render("minimal", card, WEDNESDAY)
    assert catalog.render_card(card, WEDNESDAY).template_id == "minimal"


@pytest.mark.parametrize("template_id", TEMPLATE_IDS)
def test_every_variant_shows_identity_and_sections(catalog, full_card, template_id):
    page = catalog.render(template_id, full_card, WEDNESDAY)

    assert page.template_id == template_id
    assert page.identity.full_name == "Jane Doe"
    assert page.identity.job_title == "Architect"
    assert page.section_ids == ["about", "services", "gallery", "hours", "map"]
    assert page.tags == ["design", "interiors"]


def test_contact_actions_use_link_schemes(catalog, full_card):
    page = catalog.render("minimal", full_card)
    hrefs = {a.kind: a.href for a in page.actions}

    assert hrefs["phone"] == "tel:+15550102030"
    assert hrefs["email"] == "mailto:jane@example.com"
    assert hrefs["whatsapp"] == "https://wa.me/15550102030"
    assert hrefs["website"] == "https://doe.example.com"
    assert hrefs["address"] == "https://maps.google.com/?q=221B+Baker+St%2C+London"
    assert [a.kind for a in page.actions if a.primary] == ["phone", "email"]


def test_absent_channels_produce_no_actions(catalog):
    card = CardRecord(full_name="Nobody", socials=SocialLinks(email="a@b.c"))
    page = catalog.render("modern", card)

    assert [a.kind for a in page.actions] == ["email"]
    assert page.socials == []


def test_social_icons_only_for_present_channels(catalog, full_card):
    page = catalog.render("dark", full_card)

    assert [s.kind for s in page.socials] == ["linkedin", "instagram"]
    assert page.socials[0].href == "https://linkedin.com/in/janedoe"
    assert page.socials[1].href == "https://instagram.com/janedoe"


def test_banner_layout_keeps_banner_image(catalog):
    card = default_card("u1")

    assert catalog.render("modern", card).identity.banner_image == card.banner_image
    assert catalog.render("minimal", card).identity.banner_image is None


def test_console_layout_drops_logo(catalog):
    card = CardRecord(full_name="Neo", logo_image="https://img.example.com/logo.png")

    assert catalog.render("terminal", card).layout == "console"
    assert catalog.render("terminal", card).identity.logo_image is None
    assert catalog.render("minimal", card).identity.logo_image == card.logo_image


def test_skin_accent_overrides_primary_color(catalog):
    card = CardRecord(primary_color="#123456")

    assert catalog.render("minimal", card).primary_color == "#123456"
    assert catalog.render("luxe", card).primary_color == "#d4af37"


def test_rendering_does_not_touch_the_card(catalog, full_card):
    before = full_card.model_dump()
    catalog.render("cyberpunk", full_card)
    assert full_card.model_dump() == before
