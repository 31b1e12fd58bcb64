"""CLI interface for the digital business card builder."""

import functools
import logging
from pathlib import Path

import click

from digicard.api import (
    AuthProvider,
    GeminiBioGenerator,
    Session,
    Store,
    card_qr_png,
    card_share_url,
    create_auth_provider,
    create_store,
    export_card_pdf,
    provision_admin,
    render_card_html,
    view_public_card,
)
from digicard.api.builder import resolve_card
from digicard.config import Config, export_filename, load_config
from digicard.design import TEMPLATE_IDS, TemplateCatalog, build_default_catalog
from digicard.design.catalog import TEMPLATE_LAYOUTS
from digicard.editor import EditorController, Notice, new_editor
from digicard.entitlement import FREE_TIER, TemplateSelection, is_locked
from digicard.exceptions import AuthError, CardValidationError, DigicardError
from digicard.models import CardRecord, Plan, User, effective_tier
from digicard.utils.dimensions import PAGE_SIZES


class AppContext:
    """Collaborators built from configuration, created on first use."""

    def __init__(self, config_path: Path | None) -> None:
        self.config_path = config_path
        self._config: Config | None = None
        self._store: Store | None = None
        self._auth: AuthProvider | None = None
        self._catalog: TemplateCatalog | None = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def store(self) -> Store:
        if self._store is None:
            cfg = self.config.store
            self._store = create_store(cfg.backend, cfg.path, cfg.url, cfg.timeout)
        return self._store

    @property
    def auth(self) -> AuthProvider:
        if self._auth is None:
            self._auth = create_auth_provider(self.store, Session(self.config.session.path))
        return self._auth

    @property
    def catalog(self) -> TemplateCatalog:
        if self._catalog is None:
            self._catalog = build_default_catalog()
        return self._catalog

    def owned_card(self, user: User, card_id: str) -> CardRecord:
        """Load a card the user may modify."""
        card = resolve_card(self.store, card_id)
        if card.owner_id != user.id and not user.is_admin:
            raise AuthError(f"Card {card.id} belongs to another user")
        return card


pass_app = click.make_pass_decorator(AppContext)


def handle_errors(func):
    """Report expected failures on stderr and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FileNotFoundError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        except (ValueError, DigicardError) as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)

    return wrapper


def echo_notice(notice: Notice) -> None:
    prefix = {"info": "", "warning": "Warning: ", "error": "Error: "}[notice.level]
    click.echo(f"{prefix}{notice.message}", err=notice.level != "info")


def split_assignment(value: str, option: str, sep: str = "=") -> tuple[str, str]:
    """Split "KEY=VALUE" option values."""
    if sep not in value:
        raise click.BadParameter(f"expected KEY{sep}VALUE, got '{value}'", param_hint=option)
    key, _, rest = value.partition(sep)
    return key.strip(), rest.strip()


@click.group()
@click.version_option(package_name="digicard")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to config.toml file. Defaults to ./config.toml",
)
@click.option("-v", "--verbose", is_flag=True, help="Show log output.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Build, share and export digital business cards."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = AppContext(config_path)


# ----------------------------------------------------------------------
# Accounts
# ----------------------------------------------------------------------


@main.command()
@click.option("--email", prompt=True, help="Account email.")
@click.option("--name", prompt=True, help="Display name.")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="Password.")
@pass_app
@handle_errors
def register(app: AppContext, email: str, name: str, password: str) -> None:
    """Create an account and sign in."""
    user = app.auth.register(email, password, name)
    click.echo(f"✓ Registered and signed in as {user.email}")


@main.command()
@click.option("--email", prompt=True, help="Account email.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
@pass_app
@handle_errors
def login(app: AppContext, email: str, password: str) -> None:
    """Sign in."""
    user = app.auth.login(email, password)
    click.echo(f"✓ Signed in as {user.name} <{user.email}>")


@main.command()
@pass_app
@handle_errors
def logout(app: AppContext) -> None:
    """Sign out."""
    app.auth.logout()
    click.echo("✓ Signed out")


@main.command()
@pass_app
@handle_errors
def whoami(app: AppContext) -> None:
    """Show the signed-in account."""
    user = app.auth.current_user()
    if user is None:
        click.echo("Not signed in.")
        return
    click.echo(f"{user.name} <{user.email}>")
    click.echo(f"  Role: {user.role}")
    click.echo(f"  Plan: {effective_tier(user)}")
    if user.subscription_expiry:
        click.echo(f"  Renews: {user.subscription_expiry:%Y-%m-%d}")


@main.command("provision-admin")
@click.option("--email", help="Admin email. Defaults to [admin] email in config.")
@click.option("--password", help="Admin password. Defaults to [admin] password in config.")
@click.option("--name", help="Display name. Defaults to [admin] name in config.")
@pass_app
@handle_errors
def provision_admin_command(app: AppContext, email: str | None, password: str | None, name: str | None) -> None:
    """Create or promote the administrator account."""
    admin_cfg = app.config.admin
    email = email or admin_cfg.email
    password = password or admin_cfg.password
    if not email or not password:
        raise ValueError("Admin email and password are required (options or [admin] table in config.toml)")
    user = provision_admin(app.auth, app.store, email, password, name or admin_cfg.name)
    click.echo(f"✓ {user.email} is an administrator")


@main.command()
@pass_app
@handle_errors
def plans(app: AppContext) -> None:
    """List pricing plans."""
    for plan in app.store.get_plans():
        marker = " ★" if plan.is_popular else ""
        price = "free" if plan.price == 0 else f"{plan.price:g} / {plan.interval}"
        click.echo(f"{plan.id:<14} {plan.name:<16} {price}{marker}")
        for feature in plan.features:
            click.echo(f"    - {feature}")


@main.command()
@click.argument("tier")
@pass_app
@handle_errors
def upgrade(app: AppContext, tier: str) -> None:
    """Switch the signed-in account to another plan."""
    user = app.auth.upgrade(tier)
    click.echo(f"✓ {user.email} is now on {user.subscription}")


@main.command("plan-save")
@click.argument("plan_id")
@click.option("--name", help="Display name.")
@click.option("--price", type=float, help="Price (0 for free plans).")
@click.option("--interval", type=click.Choice(["monthly", "lifetime"]), help="Billing interval.")
@click.option("--feature", "features", multiple=True, help="Feature line (repeat; replaces the list).")
@click.option("--popular/--not-popular", default=None, help="Highlight the plan.")
@pass_app
@handle_errors
def plan_save(
    app: AppContext,
    plan_id: str,
    name: str | None,
    price: float | None,
    interval: str | None,
    features: tuple[str, ...],
    popular: bool | None,
) -> None:
    """Create or edit a pricing plan (administrators only)."""
    app.auth.require_admin()
    changes = {
        "name": name,
        "price": price,
        "interval": interval,
        "features": list(features) or None,
        "is_popular": popular,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    existing = {plan.id: plan for plan in app.store.get_plans()}.get(plan_id)
    if existing is None and ("name" not in changes or "price" not in changes):
        raise ValueError(f"New plan '{plan_id}' needs --name and --price")
    base = existing.model_dump() if existing is not None else {"id": plan_id}
    plan = Plan.model_validate({**base, **changes})

    app.store.save_plan(plan)
    click.echo(f"✓ {'Updated' if existing is not None else 'Created'} plan {plan.id}")


@main.command("plan-delete")
@click.argument("plan_id")
@pass_app
@handle_errors
def plan_delete(app: AppContext, plan_id: str) -> None:
    """Delete a pricing plan (administrators only)."""
    app.auth.require_admin()
    if plan_id == FREE_TIER:
        raise ValueError("The free plan cannot be deleted")
    if plan_id not in {plan.id for plan in app.store.get_plans()}:
        raise ValueError(f"Unknown plan: {plan_id}")
    app.store.delete_plan(plan_id)
    click.echo(f"✓ Deleted plan {plan_id}")


# ----------------------------------------------------------------------
# Cards
# ----------------------------------------------------------------------


@main.command()
@pass_app
@handle_errors
def templates(app: AppContext) -> None:
    """List templates and whether your plan unlocks them."""
    user = app.auth.current_user()
    tier = effective_tier(user) if user else FREE_TIER
    for template_id in TEMPLATE_IDS:
        layout = TEMPLATE_LAYOUTS[template_id].layout
        lock = "  (Pro)" if is_locked(template_id, tier) else ""
        click.echo(f"{template_id:<14} {layout}{lock}")


@main.command()
@pass_app
@handle_errors
def cards(app: AppContext) -> None:
    """List your cards."""
    user = app.auth.require_user()
    owned = app.store.list_cards(user.id)
    if not owned:
        click.echo("No cards yet. Create one with `digicard new`.")
        return
    for card in owned:
        click.echo(f"{card.id}  {card.slug:<28} {card.template_id:<13} {card.views:>5} views  {card.full_name}")


def _make_editor(app: AppContext, user: User, card_id: str | None = None) -> EditorController:
    def upgrade_hint(template_id: str) -> None:
        click.echo("  See `digicard plans` and `digicard upgrade pro_monthly`.", err=True)

    return new_editor(
        app.store,
        app.catalog,
        user,
        card_id=card_id,
        generator=GeminiBioGenerator(app.config.generator),
        notify=echo_notice,
        on_upgrade_required=upgrade_hint,
    )


@main.command()
@click.option("--name", "full_name", help="Full name.")
@click.option("--job", "job_title", help="Job title.")
@click.option("--company", "company_name", help="Company name.")
@click.option("--template", "template_id", help="Template id.")
@pass_app
@handle_errors
def new(
    app: AppContext,
    full_name: str | None,
    job_title: str | None,
    company_name: str | None,
    template_id: str | None,
) -> None:
    """Create a card from the starter content."""
    user = app.auth.require_user()
    editor = _make_editor(app, user)
    for field, value in (("full_name", full_name), ("job_title", job_title), ("company_name", company_name)):
        if value is not None:
            editor.set_field(field, value)
    if template_id:
        editor.select_template(template_id)
    saved = editor.save()
    if saved is None:
        raise SystemExit(1)
    click.echo(f"✓ Created card {saved.id}")
    click.echo(f"  Share: {card_share_url(saved, app.config.public.base_url)}")


def _section_index(editor: EditorController, key: str) -> int:
    if key.lstrip("-").isdigit():
        return int(key)
    try:
        return editor.draft.section_order.index(key)
    except ValueError:
        raise CardValidationError("section_order", f"no section '{key}'") from None


def _hour_id(editor: EditorController, key: str) -> str:
    for entry in editor.draft.business_hours:
        if entry.id == key or entry.day.lower() == key.lower():
            return entry.id
    raise CardValidationError("business_hours", f"no entry for '{key}'")


@main.command()
@click.argument("card_id")
@click.option("--set", "fields", multiple=True, metavar="FIELD=VALUE", help="Set a profile field.")
@click.option("--social", multiple=True, metavar="CHANNEL=VALUE", help="Set a contact channel (empty clears).")
@click.option("--template", "template_id", help="Switch template.")
@click.option("--move", multiple=True, metavar="SECTION=up|down", help="Move a section (by id or index).")
@click.option("--toggle-closed", multiple=True, metavar="DAY", help="Toggle a weekday open/closed.")
@click.option("--hours", multiple=True, metavar="DAY=HH:MM-HH:MM", help="Set opening hours for a weekday.")
@click.option("--add-service", multiple=True, metavar="TITLE[|DESCRIPTION[|PRICE]]", help="Add a service.")
@click.option("--remove-service", multiple=True, metavar="ID", help="Remove a service.")
@click.option("--add-tag", multiple=True, help="Add a tag.")
@click.option("--remove-tag", multiple=True, help="Remove a tag.")
@click.option("--add-image", multiple=True, metavar="REF", help="Add a gallery image URL.")
@click.option("--remove-image", multiple=True, metavar="REF", help="Remove a gallery image.")
@click.option("--image", "images", multiple=True, metavar="FIELD=PATH",
              help="Upload profile_image, banner_image or logo_image from a file.")
@click.option("--draft-bio", is_flag=True, help="Replace the bio with a generated draft.")
@click.option("--tone", default="professional", show_default=True, help="Tone for --draft-bio.")
@pass_app
@handle_errors
def edit(
    app: AppContext,
    card_id: str,
    fields: tuple[str, ...],
    social: tuple[str, ...],
    template_id: str | None,
    move: tuple[str, ...],
    toggle_closed: tuple[str, ...],
    hours: tuple[str, ...],
    add_service: tuple[str, ...],
    remove_service: tuple[str, ...],
    add_tag: tuple[str, ...],
    remove_tag: tuple[str, ...],
    add_image: tuple[str, ...],
    remove_image: tuple[str, ...],
    images: tuple[str, ...],
    draft_bio: bool,
    tone: str,
) -> None:
    """Edit a card and save it."""
    user = app.auth.require_user()
    card = app.owned_card(user, card_id)
    editor = _make_editor(app, user, card.id)

    for assignment in fields:
        name, value = split_assignment(assignment, "--set")
        editor.set_field(name, value)
    for assignment in social:
        channel, value = split_assignment(assignment, "--social")
        editor.set_social(channel, value)
    if template_id and editor.select_template(template_id) is TemplateSelection.UPGRADE_REQUIRED:
        click.echo(f"Template '{template_id}' not applied.", err=True)
    for assignment in move:
        key, direction = split_assignment(assignment, "--move")
        editor.move_section(_section_index(editor, key), direction)
    for day in toggle_closed:
        editor.toggle_hour_closed(_hour_id(editor, day))
    for assignment in hours:
        day, span = split_assignment(assignment, "--hours")
        opening, closing = split_assignment(span, "--hours", sep="-")
        editor.set_hour_range(_hour_id(editor, day), opening, closing)
    for entry in add_service:
        parts = [part.strip() for part in entry.split("|")]
        service = editor.add_service(*parts[:3])
        click.echo(f"  Added service {service.id}")
    for service_id in remove_service:
        editor.remove_service(service_id)
    for label in add_tag:
        editor.add_tag(label)
    for label in remove_tag:
        editor.remove_tag(label)
    for ref in add_image:
        editor.add_gallery_image(ref)
    for ref in remove_image:
        editor.remove_gallery_image(ref)
    for assignment in images:
        field, path = split_assignment(assignment, "--image")
        editor.set_image(field, Path(path))
    if draft_bio:
        bio = editor.draft_bio(tone)
        if bio:
            click.echo(f"  Bio: {bio}")

    saved = editor.save()
    if saved is None:
        raise SystemExit(1)
    click.echo(f"✓ Saved card {saved.id}")


@main.command()
@click.argument("ref")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output HTML file.")
@click.option("--template", "template_id", help="Preview with another template.")
@pass_app
@handle_errors
def render(app: AppContext, ref: str, output: Path | None, template_id: str | None) -> None:
    """Render a card to an HTML file."""
    card = resolve_card(app.store, ref)
    if template_id:
        card = card.model_copy(update={"template_id": template_id})
    output = output or Path(export_filename(card.full_name, "html"))
    output.write_text(render_card_html(card, app.catalog, app.config.public.base_url), encoding="utf-8")
    click.echo(f"✓ HTML saved to: {output}")


@main.command("export-pdf")
@click.argument("ref")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output PDF file.")
@click.option(
    "--page-size",
    type=click.Choice(list(PAGE_SIZES.keys()), case_sensitive=False),
    default="letter",
    show_default=True,
    help="Page size for printing.",
)
@pass_app
@handle_errors
def export_pdf(app: AppContext, ref: str, output: Path | None, page_size: str) -> None:
    """Export a card to a printable PDF."""
    card = resolve_card(app.store, ref)
    path = export_card_pdf(card, app.catalog, output, page_size=page_size)
    click.echo(f"✓ PDF saved to: {path}")


@main.command()
@click.argument("ref")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Also write the page as HTML.")
@pass_app
@handle_errors
def view(app: AppContext, ref: str, output: Path | None) -> None:
    """Open a card as a public visitor (counts a view)."""
    public = view_public_card(app.store, ref, app.catalog)
    page = public.page
    click.echo(page.identity.full_name)
    for line in (page.identity.job_title, page.identity.company_name):
        if line:
            click.echo(f"  {line}")
    for action in page.actions:
        click.echo(f"  [{action.label}] {action.href}")
    for block in page.blocks:
        click.echo(f"\n{block.title}")
        for paragraph in block.body:
            click.echo(f"  {paragraph}")
        for item in block.items:
            marker = "*" if item.highlight else " "
            badge = f" ({item.badge})" if item.badge else ""
            detail = f": {item.detail}" if item.detail else ""
            click.echo(f" {marker}{item.title}{badge}{detail}")
        for image in block.images:
            click.echo(f"  {image[:60]}")
    click.echo(f"\n{public.card.views} views")
    if output:
        render_html = render_card_html(public.card, app.catalog, app.config.public.base_url)
        output.write_text(render_html, encoding="utf-8")
        click.echo(f"✓ HTML saved to: {output}")


@main.command()
@click.argument("ref")
@pass_app
@handle_errors
def share(app: AppContext, ref: str) -> None:
    """Print the public link of a card."""
    card = resolve_card(app.store, ref)
    click.echo(card_share_url(card, app.config.public.base_url))


@main.command()
@click.argument("ref")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output PNG file.")
@pass_app
@handle_errors
def qr(app: AppContext, ref: str, output: Path | None) -> None:
    """Write the public link of a card as a QR code image."""
    card = resolve_card(app.store, ref)
    output = output or Path(export_filename(card.full_name, "png"))
    output.write_bytes(card_qr_png(card, app.config.public.base_url))
    click.echo(f"✓ QR code saved to: {output}")


@main.command()
@click.argument("card_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@pass_app
@handle_errors
def delete(app: AppContext, card_id: str, yes: bool) -> None:
    """Delete a card permanently."""
    user = app.auth.require_user()
    card = app.owned_card(user, card_id)
    if not yes:
        click.confirm(f"Delete '{card.full_name}' ({card.id})?", abort=True)
    app.store.delete_card(card.id)
    click.echo(f"✓ Deleted card {card.id}")


if __name__ == "__main__":
    main()
