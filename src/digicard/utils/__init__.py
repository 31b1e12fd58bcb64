"""Utility modules."""

from digicard.utils.hours import backfill_business_hours, weekday_name
from digicard.utils.layout import move_section, normalize_section_order
from digicard.utils.links import extract_card_ref, safe_href, share_url
from digicard.utils.text import new_id, slugify

__all__ = [
    "backfill_business_hours",
    "extract_card_ref",
    "move_section",
    "new_id",
    "normalize_section_order",
    "safe_href",
    "share_url",
    "slugify",
    "weekday_name",
]
