"""Card section implementations."""

from digicard.design.sections.about import AboutSection
from digicard.design.sections.gallery import GallerySection
from digicard.design.sections.hours import HoursSection
from digicard.design.sections.map import MapSection
from digicard.design.sections.registry import SectionRegistry, default_registry
from digicard.design.sections.services import ServicesSection

__all__ = [
    "AboutSection",
    "GallerySection",
    "HoursSection",
    "MapSection",
    "SectionRegistry",
    "ServicesSection",
    "default_registry",
]
