"""Tests for ordering, hours, link and slug helpers."""

from datetime import date

import pytest

from digicard.models import SECTION_IDS, WEEKDAYS, BusinessHour
from digicard.utils.hours import backfill_business_hours, is_valid_time, weekday_name
from digicard.utils.layout import move_section, normalize_section_order, unique_sections
from digicard.utils.links import (
    extract_card_ref,
    map_embed_url,
    phone_href,
    safe_href,
    share_url,
    whatsapp_href,
)
from digicard.utils.text import slugify, unique_slug

ORDER = list(SECTION_IDS)


# ----------------------------------------------------------------------
# Section order
# ----------------------------------------------------------------------


def test_move_first_up_and_last_down_are_noops():
    assert move_section(ORDER, 0, "up") == ORDER
    assert move_section(ORDER, len(ORDER) - 1, "down") == ORDER


@pytest.mark.parametrize("index", range(1, len(ORDER)))
def test_move_up_then_down_restores_order(index):
    moved = move_section(ORDER, index, "up")
    assert moved[index - 1] == ORDER[index]
    assert move_section(moved, index - 1, "down") == ORDER


def test_move_returns_new_list():
    order = list(ORDER)
    result = move_section(order, 1, "up")
    assert order == ORDER
    assert result == ["services", "about", "gallery", "hours", "map"]


@pytest.mark.parametrize("index", [-1, 5, 99])
def test_move_out_of_range_is_noop(index):
    assert move_section(ORDER, index, "down") == ORDER


def test_move_rejects_bad_direction():
    with pytest.raises(ValueError):
        move_section(ORDER, 1, "left")


def test_normalize_section_order():
    assert normalize_section_order(["map", "about", "map", "bogus"]) == [
        "map", "about", "services", "gallery", "hours",
    ]
    assert normalize_section_order([]) == ORDER
    assert normalize_section_order(ORDER) == ORDER


def test_unique_sections_keeps_first_occurrence():
    assert unique_sections(["hours", "about", "hours"]) == ["hours", "about"]


# ----------------------------------------------------------------------
# Business hours
# ----------------------------------------------------------------------


def test_backfill_appends_missing_days_and_keeps_existing():
    existing = [
        BusinessHour(id="a", day="Wednesday", open="11:00", close="15:00"),
        BusinessHour(id="b", day="Monday", is_closed=True),
    ]
    hours = backfill_business_hours(existing)

    assert len(hours) == 7
    assert sorted(h.day for h in hours) == sorted(WEEKDAYS)
    assert hours[:2] == existing
    assert [h.day for h in hours[2:]] == ["Tuesday", "Thursday", "Friday", "Saturday", "Sunday"]
    assert len({h.id for h in hours}) == 7


def test_backfill_avoids_id_collisions():
    hours = backfill_business_hours([BusinessHour(id="2", day="Friday")])

    ids = [h.id for h in hours]
    assert len(set(ids)) == 7
    assert hours[0].id == "2"


def test_backfill_drops_duplicates_and_unknown_days():
    hours = backfill_business_hours([
        BusinessHour(id="x", day="Monday", open="08:00"),
        BusinessHour(id="y", day="Monday", open="12:00"),
        BusinessHour(id="z", day="Holiday"),
    ])

    assert len(hours) == 7
    mondays = [h for h in hours if h.day == "Monday"]
    assert len(mondays) == 1 and mondays[0].open == "08:00"


def test_backfill_of_empty_list_gives_defaults():
    hours = backfill_business_hours([])
    assert [h.day for h in hours] == list(WEEKDAYS)
    assert [h.id for h in hours] == ["1", "2", "3", "4", "5", "6", "7"]


def test_weekday_name():
    assert weekday_name(date(2026, 10, 14)) == "Wednesday"
    assert weekday_name(date(2026, 10, 18)) == "Sunday"


@pytest.mark.parametrize("value,expected", [
    ("09:00", True), ("23:59", True), ("24:00", False), ("9:00", False), ("ab:cd", False),
])
def test_is_valid_time(value, expected):
    assert is_valid_time(value) is expected


# ----------------------------------------------------------------------
# Links
# ----------------------------------------------------------------------


@pytest.mark.parametrize("value,expected", [
    ("example.com", "https://example.com"),
    ("http://example.com", "http://example.com"),
    ("https://example.com", "https://example.com"),
    ("mailto:a@b.c", "mailto:a@b.c"),
    ("tel:+123", "tel:+123"),
    ("", None),
    (None, None),
])
def test_safe_href(value, expected):
    assert safe_href(value) == expected


def test_phone_and_whatsapp_hrefs():
    assert phone_href("+44 20 7946 0958") == "tel:+442079460958"
    assert whatsapp_href("+44 20 7946 0958") == "https://wa.me/442079460958"
    assert whatsapp_href("n/a") is None


def test_map_embed_url_encodes_address():
    url = map_embed_url("Main St & 5th")
    assert url == "https://maps.google.com/maps?q=Main%20St%20%26%205th&t=&z=15&ie=UTF8&iwloc=&output=embed"


def test_share_url_and_extract_round_trip():
    url = share_url("jane-doe-3f9a", "https://cards.example.com/")
    assert url == "https://cards.example.com/#/card/jane-doe-3f9a"
    assert extract_card_ref(url) == "jane-doe-3f9a"
    assert extract_card_ref("card/c123") == "c123"
    assert extract_card_ref("c123") == "c123"


def test_extract_card_ref_rejects_other_urls():
    with pytest.raises(ValueError):
        extract_card_ref("https://cards.example.com/#/login")
    with pytest.raises(ValueError):
        extract_card_ref("https://cards.example.com/about")


# ----------------------------------------------------------------------
# Slugs
# ----------------------------------------------------------------------


def test_slugify():
    assert slugify("José Álvarez & Co.") == "jose-alvarez-co"
    assert slugify("  ") == ""


def test_unique_slug():
    assert unique_slug("Jane Doe", suffix="beef") == "jane-doe-beef"
    assert unique_slug("!!!", suffix="0000") == "card-0000"
