"""Visual skins for the template catalog."""

from pydantic import BaseModel, ConfigDict

from digicard.types import AvatarShape


class Skin(BaseModel):
    """
    Style parameters of one template variant.

    Skins only carry colors and typography hints. Layout is decided by the
    template class, content by the section registry.

        base = SKINS["minimal"]
        variant = base.model_copy(update={"dark_mode": True})
    """

    model_config = ConfigDict(frozen=True)

    name: str
    """Display name."""

    dark_mode: bool = False
    """Light text on a dark background."""

    background: str = "#ffffff"
    """Page background color."""

    surface: str = "#f9fafb"
    """Background of section panels."""

    text: str = "#111827"
    """Main text color."""

    muted: str = "#6b7280"
    """Secondary text color (job title, section headings)."""

    accent: str | None = None
    """Fixed accent color. None means the card's primary color is used."""

    font_family: str = "Helvetica, Arial, sans-serif"
    """CSS font stack."""

    avatar_shape: AvatarShape = "circle"
    """Profile image framing."""

    uppercase_name: bool = False
    """Render the full name in capitals."""


_DARK = dict(dark_mode=True, background="#111827", surface="#1f2937", text="#f9fafb", muted="#9ca3af")

SKINS: dict[str, Skin] = {
    "minimal": Skin(name="Minimal"),
    "modern": Skin(name="Modern", background="#f9fafb", surface="#ffffff", avatar_shape="rounded"),
    "dark": Skin(name="Dark", **_DARK),
    "professional": Skin(name="Professional", surface="#f3f4f6", font_family="Georgia, serif",
                         avatar_shape="rounded"),
    "creative": Skin(name="Creative", background="#fff7ed", surface="#ffffff", accent="#f97316"),
    "elegant": Skin(name="Elegant", background="#fdfbf7", surface="#ffffff", text="#1c1917",
                    muted="#78716c", font_family="'Playfair Display', Georgia, serif"),
    "tech": Skin(name="Tech", **_DARK, font_family="'JetBrains Mono', Menlo, monospace",
                 avatar_shape="square"),
    "gradient": Skin(name="Gradient", background="#eef2ff", surface="#ffffff", accent="#7c3aed"),
    "glass": Skin(name="Glass", background="#e0f2fe", surface="#f0f9ff", avatar_shape="rounded"),
    "playful": Skin(name="Playful", background="#fef9c3", surface="#ffffff", accent="#ec4899",
                    font_family="'Comic Neue', 'Trebuchet MS', sans-serif"),
    "neobrutalist": Skin(name="Neobrutalist", background="#fde047", surface="#ffffff", text="#000000",
                         muted="#000000", avatar_shape="square", uppercase_name=True),
    "monochrome": Skin(name="Monochrome", accent="#000000", text="#000000", muted="#525252"),
    "softui": Skin(name="Soft UI", background="#eef0f4", surface="#eef0f4", avatar_shape="rounded"),
    "luxe": Skin(name="Luxe", **{**_DARK, "background": "#0c0a09", "surface": "#1c1917"},
                 accent="#d4af37", font_family="'Cormorant Garamond', Georgia, serif"),
    "cyberpunk": Skin(name="Cyberpunk", **{**_DARK, "background": "#0a0a0f"}, accent="#00fff0",
                      font_family="'Orbitron', Menlo, monospace", avatar_shape="square",
                      uppercase_name=True),
    "retro": Skin(name="Retro", background="#fef3c7", surface="#fffbeb", text="#451a03",
                  muted="#92400e", font_family="'Courier New', monospace", avatar_shape="square"),
    "botanical": Skin(name="Botanical", background="#f0fdf4", surface="#ffffff", text="#14532d",
                      muted="#4d7c0f", accent="#15803d"),
    "compact": Skin(name="Compact", avatar_shape="rounded"),
    "insta": Skin(name="Insta", background="#ffffff", surface="#fafafa", accent="#e1306c"),
    "terminal": Skin(name="Terminal", **{**_DARK, "background": "#000000", "text": "#22c55e",
                                         "muted": "#16a34a"},
                     accent="#22c55e", font_family="'Fira Code', Menlo, monospace", avatar_shape="square"),
    "venura": Skin(name="Venura", background="#faf5ff", surface="#ffffff", muted="#7e22ce",
                   avatar_shape="rounded"),
}
