"""Map section implementation."""
from datetime import date

from digicard.design.base import CardSection, ContentBlock
from digicard.models import CardRecord
from digicard.utils.links import map_embed_url


class MapSection(CardSection):
    """Embedded map for the card's postal address."""

    section_id = "map"

    def __init__(self, title: str = "Find Us") -> None:
        super().__init__(title)

    def has_content(self, card: CardRecord) -> bool:
        return card.show_map and bool(card.socials.address)

    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        address = card.socials.address or ""
        return ContentBlock(
            section_id=self.section_id,
            title=self.title,
            body=[address],
            embed_url=map_embed_url(address, card.custom_map_url),
        )
