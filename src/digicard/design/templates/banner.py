"""Banner header layout."""

from digicard.design.base import Identity, Link, Template, contact_actions
from digicard.models import CardRecord


class BannerTemplate(Template):
    """Wide banner image with the profile photo overlapping its lower edge."""

    layout = "banner"

    ACTION_LABELS = {
        "phone": "Call",
        "email": "Email",
        "whatsapp": "Chat on WhatsApp",
        "website": "Visit Website",
        "address": "Get Directions",
    }

    def get_identity(self, card: CardRecord) -> Identity:
        """Get the identity header including the banner image."""
        identity = super().get_identity(card)
        identity.banner_image = card.banner_image
        return identity

    def get_actions(self, card: CardRecord) -> list[Link]:
        return contact_actions(card, self.ACTION_LABELS)
