"""Shared pytest fixtures."""

from datetime import date

import pytest

from digicard.api.auth import LocalAuthProvider, Session
from digicard.api.store import LocalStore
from digicard.design import build_default_catalog
from digicard.models import BusinessHour, CardRecord, Service, SocialLinks, User

# A Wednesday
WEDNESDAY = date(2026, 10, 14)


@pytest.fixture
def catalog():
    return build_default_catalog()


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "store.json")


@pytest.fixture
def session(tmp_path):
    return Session(tmp_path / "session.json")


@pytest.fixture
def auth(store, session):
    return LocalAuthProvider(store, session)


@pytest.fixture
def free_user():
    return User(id="u1", name="Jane Doe", email="jane@example.com")


@pytest.fixture
def pro_user():
    return User(id="u2", name="Max Pro", email="max@example.com", subscription="pro_monthly")


@pytest.fixture
def full_card():
    """A card with every section filled in."""
    return CardRecord(
        owner_id="u1",
        full_name="Jane Doe",
        job_title="Architect",
        company_name="Doe & Partners",
        bio="Designing calm spaces.",
        about_title="Who we are",
        about_text="First line\nSecond line",
        socials=SocialLinks(
            email="jane@example.com",
            phone="+1 (555) 010-2030",
            whatsapp="+1 555 010 2030",
            website="doe.example.com",
            linkedin="linkedin.com/in/janedoe",
            instagram="https://instagram.com/janedoe",
            address="221B Baker St, London",
        ),
        services=[Service(id="s1", title="Consulting", description="Hourly advice", price="$120/h")],
        business_hours=[
            BusinessHour(id="1", day="Monday"),
            BusinessHour(id="3", day="Wednesday", open="10:00", close="18:00"),
            BusinessHour(id="7", day="Sunday", is_closed=True),
        ],
        gallery=["https://img.example.com/1.jpg", "https://img.example.com/2.jpg"],
        tags=["design", "interiors"],
    )
