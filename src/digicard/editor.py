"""Card editor: owns the draft, applies edits, feeds previews and saves."""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Callable, Literal

from pydantic import ValidationError

from digicard.api.generator import DEFAULT_TONE, TextGenerator
from digicard.api.store import Store
from digicard.design import Page, TemplateCatalog
from digicard.entitlement import TemplateSelection, is_locked
from digicard.exceptions import CardNotFoundError, CardValidationError, DigicardError
from digicard.models import BusinessHour, CardRecord, Service, SocialLinks, User, default_card, effective_tier
from digicard.render.image import IMAGE_MAX_WIDTHS, prepare_upload
from digicard.types import Direction, ImageField
from digicard.utils.hours import backfill_business_hours, is_valid_time
from digicard.utils.layout import move_section, normalize_section_order
from digicard.utils.text import new_id, unique_slug

logger = logging.getLogger(__name__)

# Fields only the Store may set
READ_ONLY_FIELDS = frozenset({"id", "owner_id", "created_at", "views"})

# Fields with dedicated editor operations
MANAGED_FIELDS = frozenset({
    "template_id",
    "socials",
    "services",
    "business_hours",
    "gallery",
    "tags",
    "section_order",
})

SERVICE_FIELDS = frozenset({"title", "description", "price"})


@dataclass
class Notice:
    """A user-facing message from the editor."""

    level: Literal["info", "warning", "error"]
    message: str
    blocking: bool = False


def _log_notice(notice: Notice) -> None:
    level = {"info": logging.INFO, "warning": logging.WARNING, "error": logging.ERROR}[notice.level]
    logger.log(level, notice.message)


def normalize_card(card: CardRecord) -> CardRecord:
    """
    Bring a stored card into canonical editing form.

    Opening hours are backfilled to one entry per weekday and the section
    order lists every known section exactly once.

    Args:
        card: Card as loaded or edited.

    Returns:
        Normalized copy.
    """
    return card.model_copy(update={
        "business_hours": backfill_business_hours(card.business_hours),
        "section_order": normalize_section_order(card.section_order),
    })


class EditorController:
    """
    Editing session for one card.

    Every edit replaces the draft with a new immutable snapshot and calls
    on_change with it. Failed edits leave the draft untouched.

        editor = EditorController(store, catalog, user)
        editor.set_field("full_name", "Jane Doe")
        editor.select_template("luxe")
        card = editor.save()
    """

    def __init__(
        self,
        store: Store,
        catalog: TemplateCatalog,
        user: User,
        card: CardRecord | None = None,
        generator: TextGenerator | None = None,
        notify: Callable[[Notice], None] | None = None,
        on_change: Callable[[CardRecord], None] | None = None,
        on_upgrade_required: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize editor.

        Args:
            store: Store the draft is saved to.
            catalog: Template catalog used for previews.
            user: Signed-in user; owns new cards and decides template access.
            card: Card to edit. Defaults to a fresh card owned by user.
            generator: Text generator for bio drafts.
            notify: Receives notices (default: log them).
            on_change: Live preview hook, called with every new snapshot.
            on_upgrade_required: Called with the template id when a locked
                                 template is selected.
        """
        self.store = store
        self.catalog = catalog
        self.user = user
        self.generator = generator
        self.notify = notify or _log_notice
        self.on_change = on_change
        self.on_upgrade_required = on_upgrade_required
        self.busy = False
        self._draft = card if card is not None else default_card(user.id)

    @property
    def draft(self) -> CardRecord:
        return self._draft

    @property
    def tier(self) -> str:
        return effective_tier(self.user)

    def _commit(self, card: CardRecord) -> CardRecord:
        self._draft = card
        if self.on_change is not None:
            self.on_change(card)
        return card

    def _apply(self, **changes: Any) -> CardRecord:
        """Validate changes against the draft and commit the new snapshot."""
        data = self._draft.model_dump()
        data.update(changes)
        try:
            card = CardRecord.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or next(iter(changes))
            raise CardValidationError(field, error["msg"]) from e
        return self._commit(card)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def open(self, card_id: str) -> CardRecord:
        """
        Load a stored card into the editor.

        Args:
            card_id: Card id.

        Returns:
            The normalized draft.

        Raises:
            CardNotFoundError: If the store has no such card.
        """
        card = self.store.get_card(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        logger.info(f"Opened card {card_id} for editing")
        return self._commit(normalize_card(card))

    # ------------------------------------------------------------------
    # Scalar fields
    # ------------------------------------------------------------------

    def set_field(self, name: str, value: Any) -> CardRecord:
        """
        Set a profile or presentation field.

        Args:
            name: Field name, e.g. "full_name", "primary_color", "show_map".
            value: New value.

        Returns:
            The new draft.

        Raises:
            CardValidationError: For read-only, unknown or managed fields
                                 and for invalid values.
        """
        if name in READ_ONLY_FIELDS:
            raise CardValidationError(name, "is set by the store and cannot be edited")
        if name not in CardRecord.model_fields:
            raise CardValidationError(name, "unknown field")
        if name in MANAGED_FIELDS:
            raise CardValidationError(name, "has its own editor operation")
        return self._apply(**{name: value})

    def set_social(self, channel: str, value: str | None) -> CardRecord:
        """
        Set or clear a contact channel. Blank values clear it.

        Raises:
            CardValidationError: If the channel is unknown.
        """
        if channel not in SocialLinks.model_fields:
            raise CardValidationError(channel, "unknown contact channel")
        socials = SocialLinks.model_validate({**self._draft.socials.model_dump(), channel: value})
        return self._apply(socials=socials)

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    def add_service(self, title: str = "", description: str = "", price: str | None = None) -> Service:
        """
        Append a service.

        Returns:
            The new service (with a fresh id).
        """
        service = Service(id=new_id(), title=title, description=description, price=price)
        self._apply(services=[*self._draft.services, service])
        return service

    def _service_index(self, service_id: str) -> int:
        for index, service in enumerate(self._draft.services):
            if service.id == service_id:
                return index
        raise CardValidationError("services", f"no service with id {service_id}")

    def update_service(self, service_id: str, field: str, value: str | None) -> CardRecord:
        """
        Change one field of a service.

        Raises:
            CardValidationError: If the service or field does not exist.
        """
        if field not in SERVICE_FIELDS:
            raise CardValidationError(field, "unknown service field")
        index = self._service_index(service_id)
        services = list(self._draft.services)
        services[index] = Service.model_validate({**services[index].model_dump(), field: value})
        return self._apply(services=services)

    def remove_service(self, service_id: str) -> CardRecord:
        self._service_index(service_id)
        return self._apply(services=[s for s in self._draft.services if s.id != service_id])

    # ------------------------------------------------------------------
    # Gallery and tags (the value is the identity)
    # ------------------------------------------------------------------

    def add_gallery_image(self, ref: str) -> CardRecord:
        if not ref.strip():
            raise CardValidationError("gallery", "image reference is empty")
        if ref in self._draft.gallery:
            return self._draft
        return self._apply(gallery=[*self._draft.gallery, ref])

    def remove_gallery_image(self, ref: str) -> CardRecord:
        return self._apply(gallery=[g for g in self._draft.gallery if g != ref])

    def add_tag(self, label: str) -> CardRecord:
        label = label.strip()
        if not label:
            raise CardValidationError("tags", "tag is empty")
        if label in self._draft.tags:
            return self._draft
        return self._apply(tags=[*self._draft.tags, label])

    def remove_tag(self, label: str) -> CardRecord:
        return self._apply(tags=[t for t in self._draft.tags if t != label.strip()])

    # ------------------------------------------------------------------
    # Layout and hours
    # ------------------------------------------------------------------

    def move_section(self, index: int, direction: Direction) -> CardRecord:
        """
        Swap a section with its neighbour.

        Boundary moves and out-of-range indices leave the order unchanged.

        Raises:
            CardValidationError: If direction is not "up" or "down".
        """
        try:
            order = move_section(self._draft.section_order, index, direction)
        except ValueError as e:
            raise CardValidationError("direction", str(e)) from e
        return self._apply(section_order=order)

    def _hour_index(self, hour_id: str) -> int:
        for index, entry in enumerate(self._draft.business_hours):
            if entry.id == hour_id:
                return index
        raise CardValidationError("business_hours", f"no entry with id {hour_id}")

    def _replace_hour(self, index: int, entry: BusinessHour) -> CardRecord:
        hours = list(self._draft.business_hours)
        hours[index] = entry
        return self._apply(business_hours=hours)

    def toggle_hour_closed(self, hour_id: str) -> CardRecord:
        index = self._hour_index(hour_id)
        entry = self._draft.business_hours[index]
        return self._replace_hour(index, entry.model_copy(update={"is_closed": not entry.is_closed}))

    def set_hour_range(self, hour_id: str, opening: str, closing: str) -> CardRecord:
        """
        Set opening and closing time of one entry.

        Raises:
            CardValidationError: If the entry is missing or a time is not HH:MM.
        """
        for value in (opening, closing):
            if not is_valid_time(value):
                raise CardValidationError("business_hours", f"expected HH:MM, got {value!r}")
        index = self._hour_index(hour_id)
        entry = self._draft.business_hours[index]
        return self._replace_hour(index, entry.model_copy(update={"open": opening, "close": closing}))

    # ------------------------------------------------------------------
    # Templates and preview
    # ------------------------------------------------------------------

    def select_template(self, template_id: str) -> TemplateSelection:
        """
        Switch template through the entitlement gate.

        A locked template leaves the draft unchanged and starts the upgrade
        flow instead.

        Args:
            template_id: Catalog key.

        Returns:
            APPLIED, UNCHANGED or UPGRADE_REQUIRED.

        Raises:
            CardValidationError: If the catalog has no such template.
        """
        if template_id not in self.catalog:
            raise CardValidationError("template_id", f"unknown template '{template_id}'")
        if is_locked(template_id, self.tier):
            self.notify(Notice("info", f"Template '{template_id}' requires a Pro plan."))
            if self.on_upgrade_required is not None:
                self.on_upgrade_required(template_id)
            return TemplateSelection.UPGRADE_REQUIRED
        if template_id == self._draft.template_id:
            return TemplateSelection.UNCHANGED
        self._apply(template_id=template_id)
        return TemplateSelection.APPLIED

    def preview(self, today: date | None = None) -> Page:
        return self.catalog.render_card(self._draft, today)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def draft_bio(self, tone: str = DEFAULT_TONE) -> str | None:
        """
        Replace the bio with a generated draft.

        Failures produce a non-blocking notice and keep the current bio.

        Args:
            tone: Desired tone.

        Returns:
            The new bio, or None on failure.
        """
        if self.generator is None:
            self.notify(Notice("warning", "Bio generation is not configured."))
            return None
        card = self._draft
        try:
            bio = self.generator.draft_bio(card.full_name, card.job_title, card.company_name, tone)
        except DigicardError as e:
            self.notify(Notice("warning", f"Could not draft a bio: {e}"))
            return None
        self._apply(bio=bio)
        return bio

    def set_image(self, field: ImageField, path: Path) -> bool:
        """
        Upload an image into a profile, banner or logo field.

        The file is scaled down, re-encoded as JPEG and stored as a data URL.
        Failures produce a non-blocking notice and keep the draft.

        Args:
            field: Image field.
            path: Image file.

        Returns:
            True if the field was updated.

        Raises:
            CardValidationError: If field is not an image field.
        """
        if field not in IMAGE_MAX_WIDTHS:
            raise CardValidationError(field, "not an image field")
        try:
            data_url = prepare_upload(Path(path).read_bytes(), IMAGE_MAX_WIDTHS[field])
        except (OSError, ValueError) as e:
            self.notify(Notice("warning", f"Could not use image {path}: {e}"))
            return False
        self._apply(**{field: data_url})
        return True

    def save(self) -> CardRecord | None:
        """
        Normalize the draft and persist it.

        Empty slugs are generated from the full name. The stored record
        (with id and created_at) becomes the new draft.

        Returns:
            The stored card, or None when the save failed or another save
            is in progress.
        """
        if self.busy:
            self.notify(Notice("warning", "A save is already in progress."))
            return None

        self.busy = True
        try:
            card = normalize_card(self._draft)
            if not card.slug:
                card = card.model_copy(update={"slug": unique_slug(card.full_name)})
            try:
                saved = self.store.save_card(card)
            except DigicardError as e:
                self.notify(Notice("error", f"Could not save card: {e}", blocking=True))
                return None
        finally:
            self.busy = False

        self._commit(saved)
        self.notify(Notice("info", f"Saved card {saved.id}."))
        return saved


def new_editor(
    store: Store,
    catalog: TemplateCatalog,
    user: User,
    card_id: str | None = None,
    **kwargs: Any,
) -> EditorController:
    """
    Start an editing session on a new or stored card.

    Args:
        store: Store.
        catalog: Template catalog.
        user: Signed-in user.
        card_id: Card to open; None starts a fresh card.
        **kwargs: Passed to EditorController.

    Returns:
        EditorController.

    Raises:
        CardNotFoundError: If card_id does not exist.
    """
    editor = EditorController(store, catalog, user, **kwargs)
    if card_id is not None:
        editor.open(card_id)
    return editor
