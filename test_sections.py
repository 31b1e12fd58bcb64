"""Tests for the section registry."""

import pytest

from conftest import WEDNESDAY
from digicard.design.sections import default_registry
from digicard.models import SECTION_IDS, CardRecord, SocialLinks


@pytest.fixture
def registry():
    return default_registry()


def test_empty_card_has_no_optional_sections(registry):
    card = CardRecord(about_text="", services=[], gallery=[], show_map=True)

    assert registry.compose(card) == []
    for section_id in SECTION_IDS:
        assert not registry.has_content(section_id, card)


def test_map_before_about_when_ordered_so(registry):
    card = CardRecord(
        section_order=["map", "about"],
        about_text="Hi",
        socials=SocialLinks(address="221B Baker St"),
        show_map=True,
    )

    assert [b.section_id for b in registry.compose(card)] == ["map", "about"]


def test_sections_without_content_are_skipped_anywhere_in_order(registry, full_card):
    card = full_card.model_copy(update={"services": [], "section_order": ["services", "map", "services"]})

    ids = [b.section_id for b in registry.compose(card)]
    assert "services" not in ids
    assert ids == ["map"]


def test_duplicates_render_once_and_unknown_ids_are_skipped(registry, full_card):
    card = full_card.model_copy(update={"section_order": ["about", "bogus", "about", "hours"]})

    assert [b.section_id for b in registry.compose(card)] == ["about", "hours"]
    assert registry.render("bogus", card) is None
    assert not registry.has_content("bogus", card)


def test_map_requires_show_map(registry, full_card):
    assert registry.has_content("map", full_card)
    assert not registry.has_content("map", full_card.model_copy(update={"show_map": False}))


def test_about_block(registry, full_card):
    block = registry.render("about", full_card)
    assert block.title == "Who we are"
    assert block.body == ["First line", "Second line"]

    untitled = full_card.model_copy(update={"about_title": ""})
    assert registry.render("about", untitled).title == "About Us"


def test_services_block(registry, full_card):
    block = registry.render("services", full_card)
    assert block.title == "Our Services"
    assert block.items[0].title == "Consulting"
    assert block.items[0].detail == "Hourly advice"
    assert block.items[0].badge == "$120/h"


def test_gallery_block_keeps_order(registry, full_card):
    block = registry.render("gallery", full_card)
    assert block.images == full_card.gallery


def test_hours_block_highlights_today(registry, full_card):
    block = registry.render("hours", full_card, today=WEDNESDAY)

    assert block.title == "Business Hours"
    assert [i.title for i in block.items] == ["Monday", "Wednesday", "Sunday"]
    assert [i.highlight for i in block.items] == [False, True, False]
    assert block.items[1].detail == "10:00 - 18:00"
    assert block.items[2].detail == "Closed"


def test_map_block(registry, full_card):
    block = registry.render("map", full_card)
    assert block.title == "Find Us"
    assert block.body == ["221B Baker St, London"]
    assert block.embed_url.startswith("https://maps.google.com/maps?q=221B%20Baker%20St")
    assert block.embed_url.endswith("&output=embed")

    custom = full_card.model_copy(update={"custom_map_url": "maps.example.com/embed/1"})
    assert registry.render("map", custom).embed_url == "https://maps.example.com/embed/1"
