"""Base abstractions for card sections, templates and rendered pages."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from digicard.models import CardRecord
from digicard.types import LayoutName
from digicard.utils.links import email_href, location_href, phone_href, safe_href, whatsapp_href

if TYPE_CHECKING:
    from digicard.design.sections.registry import SectionRegistry
    from digicard.design.skins import Skin


# Social networks shown as icon links, in display order
SOCIAL_ICON_CHANNELS: tuple[str, ...] = ("linkedin", "twitter", "instagram", "facebook", "youtube")


@dataclass
class BlockItem:
    """One row of a content block (a service, an opening-hours entry)."""

    title: str
    detail: str = ""
    badge: str | None = None  # e.g. a service price
    highlight: bool = False  # display hint, e.g. today's opening hours


@dataclass
class ContentBlock:
    """
    Style-neutral content of one card section.

    A template decides how to lay it out; the block carries no styling.
    """

    section_id: str
    title: str
    body: list[str] = field(default_factory=list)
    items: list[BlockItem] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    embed_url: str | None = None


@dataclass
class Link:
    """A hyperlink the page exposes (contact action or social icon)."""

    kind: str  # channel name, e.g. "phone", "linkedin"
    label: str
    href: str
    primary: bool = False  # call/email actions


@dataclass
class Identity:
    """Who the card is about."""

    full_name: str
    job_title: str
    company_name: str
    bio: str
    profile_image: str | None = None
    banner_image: str | None = None
    logo_image: str | None = None


@dataclass
class Page:
    """A fully composed card page, ready for an output renderer."""

    template_id: str
    layout: LayoutName
    skin: "Skin"
    primary_color: str
    identity: Identity
    actions: list[Link]
    blocks: list[ContentBlock]
    socials: list[Link]
    tags: list[str] = field(default_factory=list)

    def block(self, section_id: str) -> ContentBlock | None:
        """Return the block for a section, or None if the page has none."""
        for block in self.blocks:
            if block.section_id == section_id:
                return block
        return None

    @property
    def section_ids(self) -> list[str]:
        """Section ids of the rendered blocks, in page order."""
        return [block.section_id for block in self.blocks]


class CardSection(ABC):
    """Base class for optional card sections."""

    section_id: str = ""

    def __init__(self, title: str) -> None:
        """
        Initialize section.

        Args:
            title: Default heading of the section.
        """
        self.title = title

    @abstractmethod
    def has_content(self, card: CardRecord) -> bool:
        """
        Decide whether the card has anything to show in this section.

        Args:
            card: Card to inspect.

        Returns:
            True if a block should be rendered.
        """
        pass

    @abstractmethod
    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        """
        Build the section's content block.

        Args:
            card: Card to render.
            today: Reference date for date-dependent hints (defaults to today).

        Returns:
            ContentBlock for this section.
        """
        pass


class Template(ABC):
    """
    Base class for card templates.

    A template pairs a layout strategy (the subclass) with a skin. Every
    template shows the identity fields, the contact actions that have a
    value, the sections in the card's order and the social icons that are
    set. Rendering is a pure function of the card.
    """

    layout: LayoutName = "centered"

    def __init__(self, template_id: str, skin: "Skin", sections: "SectionRegistry") -> None:
        """
        Initialize template.

        Args:
            template_id: Catalog key of the variant.
            skin: Style parameters of the variant.
            sections: Registry the template pulls section blocks from.
        """
        self.template_id = template_id
        self.skin = skin
        self.sections = sections

    def render(self, card: CardRecord, today: date | None = None) -> Page:
        """
        Compose the page for a card.

        Args:
            card: Card to render.
            today: Reference date for the opening-hours highlight.

        Returns:
            Page object.
        """
        return Page(
            template_id=self.template_id,
            layout=self.layout,
            skin=self.skin,
            primary_color=self.skin.accent or card.primary_color,
            identity=self.get_identity(card),
            actions=self.get_actions(card),
            blocks=self.sections.compose(card, today),
            socials=self.get_social_icons(card),
            tags=list(card.tags),
        )

    def get_identity(self, card: CardRecord) -> Identity:
        """
        Get the identity header for the page.

        Layouts without a banner drop the banner image.
        """
        return Identity(
            full_name=card.full_name,
            job_title=card.job_title,
            company_name=card.company_name,
            bio=card.bio,
            profile_image=card.profile_image,
            banner_image=None,
            logo_image=card.logo_image,
        )

    @abstractmethod
    def get_actions(self, card: CardRecord) -> list[Link]:
        """
        Get the contact actions for the page.

        Only channels with a value produce an action.

        Args:
            card: Card to render.

        Returns:
            Ordered list of links.
        """
        pass

    def get_social_icons(self, card: CardRecord) -> list[Link]:
        """
        Get social network icon links for channels that are set.

        Args:
            card: Card to render.

        Returns:
            Ordered list of links.
        """
        icons: list[Link] = []
        for channel in SOCIAL_ICON_CHANNELS:
            href = safe_href(card.socials.get(channel))
            if href:
                icons.append(Link(kind=channel, label=channel.title(), href=href))
        return icons


def contact_actions(card: CardRecord, labels: dict[str, str]) -> list[Link]:
    """
    Build contact action links for the channels that have a value.

    Args:
        card: Card to render.
        labels: Button label per channel ("phone", "email", "whatsapp",
                "website", "address"). Channels missing from labels are skipped.

    Returns:
        Links in the order of labels.
    """
    socials = card.socials
    hrefs = {
        "phone": phone_href(socials.phone),
        "email": email_href(socials.email),
        "whatsapp": whatsapp_href(socials.whatsapp),
        "website": safe_href(socials.website),
        "address": location_href(socials.address),
    }
    actions: list[Link] = []
    for channel, label in labels.items():
        href = hrefs.get(channel)
        if href:
            actions.append(Link(kind=channel, label=label, href=href, primary=channel in ("phone", "email")))
    return actions
