"""Services section implementation."""
from datetime import date

from digicard.design.base import BlockItem, CardSection, ContentBlock
from digicard.models import CardRecord


class ServicesSection(CardSection):
    """List of offered services with optional free-text prices."""

    section_id = "services"

    def __init__(self, title: str = "Our Services") -> None:
        super().__init__(title)

    def has_content(self, card: CardRecord) -> bool:
        return len(card.services) > 0

    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        items = [
            BlockItem(title=service.title, detail=service.description, badge=service.price)
            for service in card.services
        ]
        return ContentBlock(section_id=self.section_id, title=self.title, items=items)
