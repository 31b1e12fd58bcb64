"""Tests for card, user and plan records."""

from datetime import datetime, timedelta, timezone
from typing import get_args

import pytest
from pydantic import ValidationError

from digicard.models import (
    DEFAULT_PLANS,
    SECTION_IDS,
    CardRecord,
    SocialLinks,
    User,
    default_card,
    effective_tier,
)
from digicard.types import SectionId


def test_default_card_starter_content():
    card = default_card("u1")

    assert card.is_draft
    assert card.owner_id == "u1"
    assert card.full_name == "Your Name"
    assert card.job_title == "Job Title"
    assert card.company_name == "Company Inc."
    assert card.about_title == "About Us"
    assert card.template_id == "minimal"
    assert card.primary_color == "#3b82f6"
    assert card.show_map is True
    assert card.section_order == list(SECTION_IDS)
    assert [h.id for h in card.business_hours] == ["1", "2", "3", "4", "5", "6", "7"]
    assert [h.is_closed for h in card.business_hours] == [False] * 5 + [True] * 2
    assert card.business_hours[5].open == "10:00"


def test_camel_case_json_round_trip():
    card = default_card("u1").model_copy(update={"slug": "jane-doe"})
    data = card.to_json_dict()

    assert "fullName" in data
    assert "sectionOrder" in data
    assert "isClosed" in data["businessHours"][0]
    assert CardRecord.model_validate(data) == card


def test_accepts_snake_and_camel_input():
    a = CardRecord.model_validate({"fullName": "A", "showMap": False})
    b = CardRecord(full_name="A", show_map=False)
    assert a == b


def test_blank_socials_are_absent():
    socials = SocialLinks(email="  ", phone="", website="example.com")
    assert socials.email is None
    assert socials.phone is None
    assert socials.get("website") == "example.com"


@pytest.mark.parametrize("slug", ["jane-doe", "a1", ""])
def test_valid_slugs(slug):
    assert CardRecord(slug=slug).slug == slug


@pytest.mark.parametrize("slug", ["Jane", "jane_doe", "-jane", "jane--doe", "jane doe"])
def test_invalid_slugs(slug):
    with pytest.raises(ValidationError):
        CardRecord(slug=slug)


def test_primary_color_validation():
    assert CardRecord(primary_color="#fff").primary_color == "#fff"
    with pytest.raises(ValidationError):
        CardRecord(primary_color="blue")


def test_views_cannot_be_negative():
    with pytest.raises(ValidationError):
        CardRecord(views=-1)


def test_unknown_template_id_is_accepted_on_load():
    assert CardRecord(template_id="does-not-exist").template_id == "does-not-exist"


def test_records_are_frozen():
    card = default_card()
    with pytest.raises(ValidationError):
        card.full_name = "Changed"


def test_public_ref_prefers_slug():
    assert CardRecord(id="c1").public_ref == "c1"
    assert CardRecord(id="c1", slug="jane").public_ref == "jane"
    assert CardRecord().public_ref is None


def test_effective_tier_expiry():
    now = datetime(2026, 10, 18, tzinfo=timezone.utc)
    active = User(id="u", name="n", email="e@x", subscription="pro_monthly",
                  subscription_expiry=now + timedelta(days=1))
    expired = active.model_copy(update={"subscription_expiry": now - timedelta(days=1)})
    lifetime = active.model_copy(update={"subscription": "pro_lifetime", "subscription_expiry": None})

    assert effective_tier(active, now) == "pro_monthly"
    assert effective_tier(expired, now) == "free"
    assert effective_tier(lifetime, now) == "pro_lifetime"


def test_default_plans():
    assert [p.id for p in DEFAULT_PLANS] == ["free", "pro_monthly", "pro_lifetime"]
    assert [p.price for p in DEFAULT_PLANS] == [0, 399, 1999]
    assert [p.id for p in DEFAULT_PLANS if p.is_popular] == ["pro_monthly"]


def test_section_ids_match_section_type():
    assert SECTION_IDS == get_args(SectionId)
