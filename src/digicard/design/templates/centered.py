"""Centered single-column layout."""

from digicard.design.base import Link, Template, contact_actions
from digicard.models import CardRecord


class CenteredTemplate(Template):
    """
    Profile photo on top, name and title centered below it.

    The default layout; used by minimal and most light skins.
    """

    layout = "centered"

    ACTION_LABELS = {
        "phone": "Call Me",
        "email": "Email Me",
        "whatsapp": "WhatsApp",
        "website": "Website",
        "address": "Location",
    }

    def get_actions(self, card: CardRecord) -> list[Link]:
        return contact_actions(card, self.ACTION_LABELS)
