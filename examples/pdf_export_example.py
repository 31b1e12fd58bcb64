#!/usr/bin/env python3
"""
Example: Export One Card in Several Templates and Page Sizes

Renders the starter card with a few templates to printable PDFs.
Templates are not gated here since nothing is saved.
"""

from pathlib import Path

from digicard import build_default_catalog, default_card, export_card_pdf

catalog = build_default_catalog()

card = default_card().model_copy(
    update={
        "full_name": "Sam Rivera",
        "job_title": "Backend Engineer",
        "company_name": "Rivera Labs",
    }
)

output_dir = Path("exports")
output_dir.mkdir(exist_ok=True)

for template_id, page_size in (("minimal", "letter"), ("luxe", "a5"), ("terminal", "a6")):
    styled = card.model_copy(update={"template_id": template_id})
    path = export_card_pdf(styled, catalog, output_dir / f"{template_id}.pdf", page_size=page_size)
    print(f"✓ {template_id} ({page_size}) saved to: {path}")
