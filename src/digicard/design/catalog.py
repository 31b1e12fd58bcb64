"""Template catalog: variant key to rendering strategy."""
import logging
from datetime import date

from digicard.design.base import Page, Template
from digicard.design.sections import SectionRegistry, default_registry
from digicard.design.skins import SKINS
from digicard.design.templates import BannerTemplate, CenteredTemplate, ConsoleTemplate
from digicard.models import DEFAULT_TEMPLATE_ID, CardRecord

logger = logging.getLogger(__name__)

# Variant key -> layout class, in catalog display order
TEMPLATE_LAYOUTS: dict[str, type[Template]] = {
    "minimal": CenteredTemplate,
    "modern": BannerTemplate,
    "dark": CenteredTemplate,
    "professional": CenteredTemplate,
    "creative": BannerTemplate,
    "elegant": CenteredTemplate,
    "tech": ConsoleTemplate,
    "gradient": BannerTemplate,
    "glass": CenteredTemplate,
    "playful": CenteredTemplate,
    "neobrutalist": BannerTemplate,
    "monochrome": CenteredTemplate,
    "softui": CenteredTemplate,
    "luxe": CenteredTemplate,
    "cyberpunk": ConsoleTemplate,
    "retro": ConsoleTemplate,
    "botanical": CenteredTemplate,
    "compact": CenteredTemplate,
    "insta": BannerTemplate,
    "terminal": ConsoleTemplate,
    "venura": BannerTemplate,
}

TEMPLATE_IDS: tuple[str, ...] = tuple(TEMPLATE_LAYOUTS)


class TemplateCatalog:
    """
    Registry of named template variants.

    Unknown keys dispatch to the fallback variant, so any stored
    template_id renders.
    """

    def __init__(self, sections: SectionRegistry, fallback_id: str = DEFAULT_TEMPLATE_ID) -> None:
        """
        Initialize catalog.

        Args:
            sections: Section registry shared by all variants.
            fallback_id: Variant used for unknown keys. Must be registered
                         before the first render.
        """
        self.sections = sections
        self.fallback_id = fallback_id
        self._templates: dict[str, Template] = {}

    def register(self, template: Template) -> None:
        self._templates[template.template_id] = template

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def template_ids(self) -> list[str]:
        return list(self._templates)

    def get(self, template_id: str) -> Template:
        """
        Look up a variant, falling back for unknown keys.

        Args:
            template_id: Variant key.

        Returns:
            Registered template.

        Raises:
            KeyError: If neither the key nor the fallback is registered.
        """
        template = self._templates.get(template_id)
        if template is not None:
            return template
        logger.warning(f"Unknown template '{template_id}', falling back to '{self.fallback_id}'")
        return self._templates[self.fallback_id]

    def render(self, template_id: str, card: CardRecord, today: date | None = None) -> Page:
        """
        Render a card with a variant.

        Args:
            template_id: Variant key (unknown keys use the fallback).
            card: Card to render.
            today: Reference date for the hours highlight.

        Returns:
            Page object.
        """
        return self.get(template_id).render(card, today)

    def render_card(self, card: CardRecord, today: date | None = None) -> Page:
        """Render a card with the variant it has selected."""
        return self.render(card.template_id, card, today)


def build_default_catalog(sections: SectionRegistry | None = None) -> TemplateCatalog:
    """
    Create the catalog with all built-in variants.

    Args:
        sections: Section registry (defaults to the built-in sections).

    Returns:
        TemplateCatalog with every variant registered.
    """
    sections = sections or default_registry()
    catalog = TemplateCatalog(sections)
    for template_id, layout in TEMPLATE_LAYOUTS.items():
        catalog.register(layout(template_id, SKINS[template_id], sections))
    return catalog
