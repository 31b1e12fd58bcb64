"""Business hours section implementation."""
from datetime import date

from digicard.design.base import BlockItem, CardSection, ContentBlock
from digicard.models import CardRecord
from digicard.utils.hours import weekday_name


class HoursSection(CardSection):
    """Weekly opening hours, with today's entry highlighted."""

    section_id = "hours"

    def __init__(self, title: str = "Business Hours") -> None:
        super().__init__(title)

    def has_content(self, card: CardRecord) -> bool:
        return len(card.business_hours) > 0

    def render(self, card: CardRecord, today: date | None = None) -> ContentBlock:
        """
        Build the hours block.

        Entries are listed in stored order. The highlight flag marks the
        entry for the current weekday and is a display hint only.

        Args:
            card: Card to render.
            today: Reference date (defaults to today).

        Returns:
            ContentBlock with one item per entry.
        """
        current_day = weekday_name(today)
        items = [
            BlockItem(
                title=entry.day,
                detail=entry.format_range(),
                highlight=entry.day == current_day,
            )
            for entry in card.business_hours
        ]
        return ContentBlock(section_id=self.section_id, title=self.title, items=items)
