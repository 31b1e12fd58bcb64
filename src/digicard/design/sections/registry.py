"""Section registry: section id to content block and presence predicate."""
import logging
from datetime import date

from digicard.design.base import CardSection, ContentBlock
from digicard.design.sections.about import AboutSection
from digicard.design.sections.gallery import GallerySection
from digicard.design.sections.hours import HoursSection
from digicard.design.sections.map import MapSection
from digicard.design.sections.services import ServicesSection
from digicard.models import CardRecord
from digicard.utils.layout import unique_sections

logger = logging.getLogger(__name__)


class SectionRegistry:
    """
    Lookup table of optional card sections.

    Every template pulls its blocks from here, so "this section is empty"
    has one definition shared by all variants.
    """

    def __init__(self) -> None:
        self._sections: dict[str, CardSection] = {}

    def register(self, section: CardSection) -> None:
        """
        Add a section, replacing any section with the same id.

        Args:
            section: Section implementation.
        """
        self._sections[section.section_id] = section

    def get(self, section_id: str) -> CardSection | None:
        return self._sections.get(section_id)

    @property
    def section_ids(self) -> list[str]:
        return list(self._sections)

    def has_content(self, section_id: str, card: CardRecord) -> bool:
        """
        Check whether a section would render for a card.

        Args:
            section_id: Section to check.
            card: Card to inspect.

        Returns:
            False for unknown ids.
        """
        section = self._sections.get(section_id)
        if section is None:
            return False
        return section.has_content(card)

    def render(
        self, section_id: str, card: CardRecord, today: date | None = None
    ) -> ContentBlock | None:
        """
        Render one section.

        Args:
            section_id: Section to render.
            card: Card to render.
            today: Reference date for the hours highlight.

        Returns:
            ContentBlock, or None for unknown ids.
        """
        section = self._sections.get(section_id)
        if section is None:
            logger.debug(f"Skipping unknown section: {section_id}")
            return None
        return section.render(card, today)

    def compose(self, card: CardRecord, today: date | None = None) -> list[ContentBlock]:
        """
        Build the ordered blocks for a card.

        Walks section_order, rendering each id once at its first occurrence
        and only when the section has content.

        Args:
            card: Card to render.
            today: Reference date for the hours highlight.

        Returns:
            Blocks in display order.
        """
        blocks: list[ContentBlock] = []
        for section_id in unique_sections(card.section_order):
            if not self.has_content(section_id, card):
                continue
            block = self.render(section_id, card, today)
            if block is not None:
                blocks.append(block)
        return blocks


def default_registry() -> SectionRegistry:
    """
    Create a registry with the five built-in sections.

    Returns:
        SectionRegistry for about, services, gallery, hours and map.
    """
    registry = SectionRegistry()
    for section in (AboutSection(), ServicesSection(), GallerySection(), HoursSection(), MapSection()):
        registry.register(section)
    return registry
