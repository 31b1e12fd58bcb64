"""Design system: sections, skins and template variants."""

from digicard.design.base import BlockItem, CardSection, ContentBlock, Identity, Link, Page, Template
from digicard.design.catalog import TEMPLATE_IDS, TemplateCatalog, build_default_catalog
from digicard.design.sections import SectionRegistry, default_registry
from digicard.design.skins import SKINS, Skin

__all__ = [
    "BlockItem",
    "CardSection",
    "ContentBlock",
    "Identity",
    "Link",
    "Page",
    "SKINS",
    "SectionRegistry",
    "Skin",
    "TEMPLATE_IDS",
    "Template",
    "TemplateCatalog",
    "build_default_catalog",
    "default_registry",
]
