"""Console-style layout for monospace skins."""

from digicard.design.base import Identity, Link, Template, contact_actions
from digicard.models import CardRecord


class ConsoleTemplate(Template):
    """
    Left-aligned layout that reads like a terminal session.

    Actions are labelled as commands. No banner and no company logo.
    """

    layout = "console"

    ACTION_LABELS = {
        "phone": "call",
        "email": "mail",
        "whatsapp": "chat",
        "website": "open",
        "address": "locate",
    }

    def get_identity(self, card: CardRecord) -> Identity:
        identity = super().get_identity(card)
        identity.logo_image = None
        return identity

    def get_actions(self, card: CardRecord) -> list[Link]:
        return contact_actions(card, self.ACTION_LABELS)
