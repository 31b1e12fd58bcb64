"""Template layouts."""

from digicard.design.templates.banner import BannerTemplate
from digicard.design.templates.centered import CenteredTemplate
from digicard.design.templates.console import ConsoleTemplate

__all__ = ["BannerTemplate", "CenteredTemplate", "ConsoleTemplate"]
