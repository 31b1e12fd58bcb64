"""About section implementation."""
from datetime import date

from digicard.design.base import CardSection, ContentBlock
from digicard.models import CardRecord


class AboutSection(CardSection):
    """Free-form about text with a user-defined heading."""

    section_id = "about"

    def __init__(self, title: str = "About Us") -> None:
        super().__init__(title)

    def has_content(self, card: CardRecord) -> bool:
        return bool(card.about_text.strip())

    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        """
        Build the about block.

        The heading is the card's about_title, or the default title when the
        card leaves it blank. Each non-empty line of about_text becomes one
        paragraph.
        """
        paragraphs = [line.strip() for line in card.about_text.splitlines() if line.strip()]
        return ContentBlock(
            section_id=self.section_id,
            title=card.about_title.strip() or self.title,
            body=paragraphs,
        )
