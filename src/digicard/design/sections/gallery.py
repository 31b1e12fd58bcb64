"""Gallery section implementation."""
from datetime import date

from digicard.design.base import CardSection, ContentBlock
from digicard.models import CardRecord


class GallerySection(CardSection):
    """Image grid."""

    section_id = "gallery"

    def __init__(self, title: str = "Gallery") -> None:
        super().__init__(title)

    def has_content(self, card: CardRecord) -> bool:
        return len(card.gallery) > 0

    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        return ContentBlock(section_id=self.section_id, title=self.title, images=list(card.gallery))
