"""Template access per subscription tier."""
from enum import Enum

from digicard.design.catalog import TEMPLATE_IDS

FREE_TIER = "free"

# Variants available on every tier
FREE_TEMPLATES: frozenset[str] = frozenset({"minimal", "modern", "dark"})

PREMIUM_TEMPLATES: frozenset[str] = frozenset(TEMPLATE_IDS) - FREE_TEMPLATES


class TemplateSelection(Enum):
    """Outcome of a template selection attempt."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"
    UPGRADE_REQUIRED = "upgrade_required"


def is_locked(template_id: str, tier: str) -> bool:
    """
    Check whether a tier may not use a template.

    Only premium variants on the free tier are locked. Any other tier,
    including unknown plan ids, unlocks everything.

    Args:
        template_id: Variant key.
        tier: Effective subscription tier.

    Returns:
        True if selecting the template must start the upgrade flow.
    """
    return template_id in PREMIUM_TEMPLATES and tier == FREE_TIER
