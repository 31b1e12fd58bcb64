"""Tests for the editor controller."""

from io import BytesIO

import pytest
from PIL import Image

from conftest import WEDNESDAY
from digicard.api.generator import TextGenerator
from digicard.editor import EditorController, new_editor, normalize_card
from digicard.entitlement import TemplateSelection
from digicard.exceptions import CardNotFoundError, CardValidationError, GeneratorError, StoreError
from digicard.models import SECTION_IDS, BusinessHour, CardRecord
from digicard.render.image import decode_data_url


class FakeGenerator(TextGenerator):
    def __init__(self, result="Generated bio.", error=None):
        self.result = result
        self.error = error
        self.calls = []

    def draft_bio(self, name, job_title, company_name, tone="professional"):
        self.calls.append((name, job_title, company_name, tone))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def notices():
    return []


@pytest.fixture
def snapshots():
    return []


@pytest.fixture
def editor(store, catalog, free_user, notices, snapshots):
    return EditorController(
        store, catalog, free_user,
        generator=FakeGenerator(),
        notify=notices.append,
        on_change=snapshots.append,
    )


def test_new_draft_is_default_card(editor, free_user):
    assert editor.draft.is_draft
    assert editor.draft.owner_id == free_user.id
    assert editor.draft.full_name == "Your Name"


def test_set_field_produces_new_snapshot(editor, snapshots):
    before = editor.draft
    after = editor.set_field("full_name", "Jane Doe")

    assert after.full_name == "Jane Doe"
    assert before.full_name == "Your Name"
    assert snapshots == [after]


def test_invalid_value_leaves_draft_unchanged(editor, snapshots):
    before = editor.draft
    with pytest.raises(CardValidationError) as exc_info:
        editor.set_field("primary_color", "not-a-color")

    assert exc_info.value.field == "primary_color"
    assert editor.draft is before
    assert snapshots == []


@pytest.mark.parametrize("field", ["id", "owner_id", "created_at", "views"])
def test_read_only_fields(editor, field):
    with pytest.raises(CardValidationError):
        editor.set_field(field, "x")


@pytest.mark.parametrize("field", ["template_id", "services", "nonexistent"])
def test_fields_without_direct_edit(editor, field):
    with pytest.raises(CardValidationError):
        editor.set_field(field, "x")


def test_set_social(editor):
    editor.set_social("website", "example.com")
    assert editor.draft.socials.website == "example.com"

    editor.set_social("website", "")
    assert editor.draft.socials.website is None

    with pytest.raises(CardValidationError):
        editor.set_social("myspace", "x")


def test_services_crud(editor):
    service = editor.add_service("Consulting", "Advice", "$100")
    editor.add_service("Design")
    assert [s.title for s in editor.draft.services] == ["Consulting", "Design"]

    editor.update_service(service.id, "price", "Call for quote")
    assert editor.draft.services[0].price == "Call for quote"

    editor.remove_service(service.id)
    assert [s.title for s in editor.draft.services] == ["Design"]

    with pytest.raises(CardValidationError):
        editor.remove_service("missing")
    with pytest.raises(CardValidationError):
        editor.update_service(editor.draft.services[0].id, "colour", "red")


def test_gallery_and_tags_use_value_identity(editor):
    editor.add_gallery_image("https://img/1.jpg")
    editor.add_gallery_image("https://img/2.jpg")
    editor.add_gallery_image("https://img/1.jpg")
    assert editor.draft.gallery == ["https://img/1.jpg", "https://img/2.jpg"]

    editor.remove_gallery_image("https://img/1.jpg")
    assert editor.draft.gallery == ["https://img/2.jpg"]

    editor.add_tag(" design ")
    editor.add_tag("design")
    editor.add_tag("interiors")
    assert editor.draft.tags == ["design", "interiors"]
    editor.remove_tag("design")
    assert editor.draft.tags == ["interiors"]

    with pytest.raises(CardValidationError):
        editor.add_tag("   ")


def test_move_section(editor):
    editor.move_section(1, "up")
    assert editor.draft.section_order == ["services", "about", "gallery", "hours", "map"]

    editor.move_section(0, "up")
    editor.move_section(4, "down")
    assert editor.draft.section_order == ["services", "about", "gallery", "hours", "map"]

    with pytest.raises(CardValidationError):
        editor.move_section(1, "sideways")


def test_hours_edits_touch_only_one_entry(editor):
    before = editor.draft.business_hours
    editor.toggle_hour_closed("6")
    after = editor.draft.business_hours

    assert after[5].is_closed is False
    assert after[:5] == before[:5] and after[6:] == before[6:]

    editor.set_hour_range("1", "08:30", "16:00")
    assert (editor.draft.business_hours[0].open, editor.draft.business_hours[0].close) == ("08:30", "16:00")

    with pytest.raises(CardValidationError):
        editor.set_hour_range("1", "8am", "16:00")
    with pytest.raises(CardValidationError):
        editor.toggle_hour_closed("99")


def test_free_user_cannot_select_premium_template(store, catalog, free_user, notices):
    signals = []
    editor = EditorController(store, catalog, free_user, notify=notices.append,
                              on_upgrade_required=signals.append)

    result = editor.select_template("luxe")

    assert result is TemplateSelection.UPGRADE_REQUIRED
    assert editor.draft.template_id == "minimal"
    assert signals == ["luxe"]
    assert notices and "Pro" in notices[0].message


def test_free_and_pro_template_selection(editor, store, catalog, pro_user):
    assert editor.select_template("dark") is TemplateSelection.APPLIED
    assert editor.draft.template_id == "dark"
    assert editor.select_template("dark") is TemplateSelection.UNCHANGED

    pro_editor = EditorController(store, catalog, pro_user)
    assert pro_editor.select_template("luxe") is TemplateSelection.APPLIED

    with pytest.raises(CardValidationError):
        editor.select_template("unknown")


def test_preview(editor):
    editor.set_field("about_text", "Hello")
    page = editor.preview(WEDNESDAY)

    assert page.identity.full_name == "Your Name"
    assert page.block("about").body == ["Hello"]
    assert page.block("hours").items[2].highlight


def test_draft_bio(editor):
    editor.set_field("full_name", "Jane Doe")
    assert editor.draft_bio("friendly") == "Generated bio."
    assert editor.draft.bio == "Generated bio."
    assert editor.generator.calls[-1] == ("Jane Doe", "Job Title", "Company Inc.", "friendly")


def test_draft_bio_failure_is_non_blocking(editor, notices):
    editor.generator = FakeGenerator(error=GeneratorError("quota exceeded"))
    before = editor.draft.bio

    assert editor.draft_bio() is None
    assert editor.draft.bio == before
    assert notices[-1].level == "warning"
    assert not notices[-1].blocking


def test_set_image_resizes_to_jpeg_data_url(editor, tmp_path):
    path = tmp_path / "logo.png"
    Image.new("RGBA", (640, 320), (255, 0, 0, 128)).save(path)

    assert editor.set_image("logo_image", path)

    ref = editor.draft.logo_image
    assert ref.startswith("data:image/jpeg;base64,")
    img = Image.open(BytesIO(decode_data_url(ref)[1]))
    assert img.size == (200, 100)


def test_set_image_failure_is_non_blocking(editor, notices, tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image")
    before = editor.draft

    assert editor.set_image("profile_image", bad) is False
    assert editor.set_image("profile_image", tmp_path / "missing.png") is False
    assert editor.draft is before
    assert all(n.level == "warning" and not n.blocking for n in notices)

    with pytest.raises(CardValidationError):
        editor.set_image("gallery", bad)


def test_save_assigns_id_and_slug(editor, store):
    editor.set_field("full_name", "Jane Doe")
    saved = editor.save()

    assert saved.id is not None
    assert saved.created_at is not None
    assert saved.slug.startswith("jane-doe-")
    assert editor.draft == saved
    assert store.get_card(saved.id) == saved


def test_save_normalizes_hours_and_order(store, catalog, free_user):
    card = CardRecord(
        owner_id=free_user.id,
        slug="partial",
        business_hours=[BusinessHour(id="a", day="Friday")],
        section_order=["map", "map", "bogus"],
    )
    saved = EditorController(store, catalog, free_user, card=card).save()

    assert len(saved.business_hours) == 7
    assert saved.section_order == ["map", "about", "services", "gallery", "hours"]
    assert saved.slug == "partial"


def test_save_failure_keeps_draft(editor, notices, monkeypatch):
    def fail(card):
        raise StoreError("disk full")

    monkeypatch.setattr(editor.store, "save_card", fail)
    before = editor.draft

    assert editor.save() is None
    assert editor.draft is before
    assert notices[-1].blocking
    assert editor.busy is False


def test_save_refused_while_busy(editor, notices):
    editor.busy = True
    assert editor.save() is None
    assert "already in progress" in notices[-1].message


def test_open_normalizes(store, catalog, free_user):
    stored = store.save_card(CardRecord(owner_id=free_user.id, section_order=["hours"]))
    editor = new_editor(store, catalog, free_user, card_id=stored.id)

    assert editor.draft.section_order == ["hours", "about", "services", "gallery", "map"]
    assert len(editor.draft.business_hours) == 7

    with pytest.raises(CardNotFoundError):
        editor.open("missing")


def test_normalize_card_is_idempotent(full_card):
    once = normalize_card(full_card)
    assert normalize_card(once) == once
    assert once.section_order == list(SECTION_IDS)
