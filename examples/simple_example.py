#!/usr/bin/env python3
"""
Simple Example: Build, Save and Share a Card

This is the simplest way to create a digital business card
programmatically. Everything is kept in a local JSON store.
"""

from pathlib import Path

from digicard import (
    LocalAuthProvider,
    LocalStore,
    Session,
    build_default_catalog,
    card_share_url,
    render_card_html,
)
from digicard.editor import new_editor

store = LocalStore(Path("example-store.json"))
auth = LocalAuthProvider(store, Session(Path("example-session.json")))
user = auth.current_user() or auth.register("jane@example.com", "secret123", "Jane Doe")

catalog = build_default_catalog()
editor = new_editor(store, catalog, user, notify=lambda notice: print(notice.message))

editor.set_field("full_name", "Jane Doe")
editor.set_field("job_title", "Interior Architect")
editor.set_field("company_name", "Calm Spaces Studio")
editor.set_field("about_text", "We design quiet, practical homes and offices.")
editor.set_social("phone", "+1 555 0100")
editor.set_social("email", "jane@example.com")
editor.set_social("address", "221B Baker Street, London")
editor.add_service("Consultation", "One hour on site", "$120")
editor.add_tag("interiors")

# Free accounts can pick minimal, modern or dark
editor.select_template("modern")

card = editor.save()
if card is not None:
    Path("my_card.html").write_text(render_card_html(card, catalog), encoding="utf-8")
    print("✓ Card saved to: my_card.html")
    print(f"  Share: {card_share_url(card, 'http://localhost:8000/')}")
