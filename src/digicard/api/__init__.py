"""Collaborators: persistence, authentication, text generation and the high-level API."""

from digicard.api.auth import (
    AuthProvider,
    LocalAuthProvider,
    RestAuthProvider,
    Session,
    create_auth_provider,
    provision_admin,
)
from digicard.api.builder import (
    PublicView,
    card_qr_png,
    card_share_url,
    export_card_pdf,
    render_card_html,
    resolve_card,
    view_public_card,
)
from digicard.api.generator import GeminiBioGenerator, TextGenerator
from digicard.api.store import LocalStore, RestStore, Store, create_store

__all__ = [
    "AuthProvider",
    "GeminiBioGenerator",
    "LocalAuthProvider",
    "LocalStore",
    "PublicView",
    "RestAuthProvider",
    "RestStore",
    "Session",
    "Store",
    "TextGenerator",
    "card_qr_png",
    "card_share_url",
    "create_auth_provider",
    "create_store",
    "export_card_pdf",
    "provision_admin",
    "render_card_html",
    "resolve_card",
    "view_public_card",
]
