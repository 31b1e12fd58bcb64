"""Digital business card builder."""

__version__ = "0.1.0"

# High-level Python API
from digicard.api import (
    GeminiBioGenerator,
    LocalAuthProvider,
    LocalStore,
    RestStore,
    Session,
    card_share_url,
    export_card_pdf,
    provision_admin,
    render_card_html,
    view_public_card,
)
from digicard.config import load_config
from digicard.design import TemplateCatalog, build_default_catalog
from digicard.editor import EditorController, Notice
from digicard.entitlement import TemplateSelection, is_locked
from digicard.models import CardRecord, Plan, User, default_card

__all__ = [
    "CardRecord",
    "EditorController",
    "GeminiBioGenerator",
    "LocalAuthProvider",
    "LocalStore",
    "Notice",
    "Plan",
    "RestStore",
    "Session",
    "TemplateCatalog",
    "TemplateSelection",
    "User",
    "build_default_catalog",
    "card_share_url",
    "default_card",
    "export_card_pdf",
    "is_locked",
    "load_config",
    "provision_admin",
    "render_card_html",
    "view_public_card",
]
