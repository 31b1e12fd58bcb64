"""Data models for cards, users and pricing plans."""

import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from digicard.types import PlanInterval, Role, SectionId, SocialChannel

# Calendar weekdays, Monday first (matches datetime.date.weekday())
WEEKDAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

# Known layout sections in their default order
SECTION_IDS: tuple[SectionId, ...] = ("about", "services", "gallery", "hours", "map")

# (open, close, is_closed) per weekday for a fresh card
DEFAULT_HOURS: dict[str, tuple[str, str, bool]] = {
    "Monday": ("09:00", "17:00", False),
    "Tuesday": ("09:00", "17:00", False),
    "Wednesday": ("09:00", "17:00", False),
    "Thursday": ("09:00", "17:00", False),
    "Friday": ("09:00", "17:00", False),
    "Saturday": ("10:00", "14:00", True),
    "Sunday": ("10:00", "14:00", True),
}

DEFAULT_TEMPLATE_ID = "minimal"
DEFAULT_PRIMARY_COLOR = "#3b82f6"
DEFAULT_PROFILE_IMAGE = "https://picsum.photos/200"
DEFAULT_BANNER_IMAGE = "https://picsum.photos/800/300"

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Record(BaseModel):
    """
    Base for persisted records.

    Attribute names are snake_case, the JSON form uses camelCase aliases.
    Records are frozen: edits produce a new snapshot via model_copy().
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict:
        """Serialize to the camelCase JSON form used by stores."""
        return self.model_dump(mode="json", by_alias=True)


class SocialLinks(Record):
    """Contact channels. A missing value means the channel is not rendered."""

    email: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    youtube: str | None = None
    facebook: str | None = None
    address: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def get(self, channel: SocialChannel) -> str | None:
        """Return the value stored for a channel, or None."""
        return getattr(self, channel)


class Service(Record):
    """A service offered on the card. Price is free text, not a currency amount."""

    id: str
    title: str = ""
    description: str = ""
    price: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def _blank_price(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BusinessHour(Record):
    """Opening hours for one weekday."""

    id: str
    day: str
    open: str = "09:00"
    close: str = "17:00"
    is_closed: bool = False

    def format_range(self) -> str:
        """
        Format the entry for display.

        Returns:
            "Closed" or "HH:MM - HH:MM".
        """
        if self.is_closed:
            return "Closed"
        return f"{self.open} - {self.close}"


class CardRecord(Record):
    """One digital business card: identity, contact, content and layout."""

    # Identity
    id: str | None = None
    owner_id: str = ""
    slug: str = ""

    # Presentation
    template_id: str = DEFAULT_TEMPLATE_ID
    primary_color: str = DEFAULT_PRIMARY_COLOR

    # Profile
    full_name: str = ""
    job_title: str = ""
    company_name: str = ""
    bio: str = ""
    about_title: str = ""
    about_text: str = ""
    profile_image: str | None = None
    banner_image: str | None = None
    logo_image: str | None = None

    # Contact
    socials: SocialLinks = Field(default_factory=SocialLinks)

    # Content sections
    services: list[Service] = Field(default_factory=list)
    business_hours: list[BusinessHour] = Field(default_factory=list)
    gallery: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    show_map: bool = True
    custom_map_url: str | None = None

    # Layout order
    section_order: list[str] = Field(default_factory=lambda: list(SECTION_IDS))

    # Metadata
    created_at: datetime | None = None
    views: int = Field(default=0, ge=0)

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        if value and not _SLUG_RE.match(value):
            raise ValueError("slug may only contain lowercase letters, digits and single hyphens")
        return value

    @field_validator("primary_color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        if not _HEX_COLOR_RE.match(value):
            raise ValueError(f"expected a hex color like #3b82f6, got {value!r}")
        return value

    @field_validator("profile_image", "banner_image", "logo_image", "custom_map_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_draft(self) -> bool:
        """True until a Store has assigned an id."""
        return self.id is None

    @property
    def public_ref(self) -> str | None:
        """Identifier used in share links: slug when set, otherwise id."""
        return self.slug or self.id


class User(Record):
    """An account. The subscription tier is the only input of the entitlement gate."""

    id: str
    name: str
    email: str
    role: Role = "user"
    subscription: str = "free"
    subscription_expiry: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class Plan(Record):
    """A priced offering shown in the upgrade flow."""

    id: str
    name: str
    price: float = Field(ge=0)
    interval: PlanInterval = "monthly"
    features: list[str] = Field(default_factory=list)
    is_popular: bool = False


DEFAULT_PLANS: tuple[Plan, ...] = (
    Plan(id="free", name="Free Starter", price=0, interval="monthly",
         features=["1 Card", "3 Basic Templates"]),
    Plan(id="pro_monthly", name="Pro Monthly", price=399, interval="monthly",
         features=["Unlimited Cards", "All 21 Templates", "AI Bio Generation"], is_popular=True),
    Plan(id="pro_lifetime", name="Pro Lifetime", price=1999, interval="lifetime",
         features=["Unlimited Cards", "All 21 Templates", "AI Bio Generation", "VIP Support"]),
)


def default_business_hours() -> list[BusinessHour]:
    """
    Build the seven default opening-hour entries.

    Returns:
        One entry per weekday, Monday to Sunday, with ids "1" to "7".
    """
    return [
        BusinessHour(id=str(index), day=day, open=opening, close=closing, is_closed=closed)
        for index, (day, (opening, closing, closed)) in enumerate(DEFAULT_HOURS.items(), start=1)
    ]


def default_card(owner_id: str = "") -> CardRecord:
    """
    Create a fresh, unsaved card with starter content.

    Args:
        owner_id: Id of the user the card belongs to.

    Returns:
        Draft CardRecord (no id, no created_at).
    """
    return CardRecord(
        owner_id=owner_id,
        template_id=DEFAULT_TEMPLATE_ID,
        primary_color=DEFAULT_PRIMARY_COLOR,
        full_name="Your Name",
        job_title="Job Title",
        company_name="Company Inc.",
        bio="A short bio about yourself goes here.",
        about_title="About Us",
        about_text="",
        profile_image=DEFAULT_PROFILE_IMAGE,
        banner_image=DEFAULT_BANNER_IMAGE,
        business_hours=default_business_hours(),
        show_map=True,
        section_order=list(SECTION_IDS),
    )


def effective_tier(user: User, now: datetime | None = None) -> str:
    """
    Subscription tier in force for a user.

    An expired subscription counts as the free tier.

    Args:
        user: The account.
        now: Reference time (defaults to current UTC time).

    Returns:
        Tier identifier.
    """
    if user.subscription_expiry is None:
        return user.subscription
    now = now or datetime.now(timezone.utc)
    expiry = user.subscription_expiry
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return user.subscription if expiry > now else "free"
