"""HTML output for rendered pages."""

import html

from digicard.design.base import ContentBlock, Identity, Link, Page
from digicard.render.qr import qr_data_url

_AVATAR_RADIUS = {"circle": "50%", "rounded": "16px", "square": "0"}


def _e(value: str | None) -> str:
    return html.escape(value or "", quote=True)


class HTMLRenderer:
    """
    Renders a Page to a standalone HTML document.

    All text is escaped; colors come from the page's skin and primary color.
    The same markup serves the public page and the editor's preview file.
    """

    def __init__(self, share_link: str | None = None, title_suffix: str = "Digital Card") -> None:
        """
        Initialize HTML renderer.

        Args:
            share_link: Optional public URL shown in the page footer.
            title_suffix: Text appended to the document title.
        """
        self.share_link = share_link
        self.title_suffix = title_suffix

    def render(self, page: Page) -> str:
        """
        Render a page.

        Args:
            page: Composed page.

        Returns:
            Complete HTML document.
        """
        body_parts = [
            self._render_identity(page),
            self._render_actions(page.actions),
            *(self._render_block(block) for block in page.blocks),
            self._render_tags(page.tags),
            self._render_socials(page.socials),
            self._render_footer(),
        ]
        body = "\n".join(part for part in body_parts if part)
        title = " | ".join(p for p in (page.identity.full_name, self.title_suffix) if p)
        return f"""<!doctype html>
<html lang='en'>
<head>
<meta charset='utf-8'>
<meta name='viewport' content='width=device-width, initial-scale=1'>
<title>{_e(title)}</title>
<style>{self._stylesheet(page)}</style>
</head>
<body class='layout-{_e(page.layout)} template-{_e(page.template_id)}'>
<main class='card'>
{body}
</main>
</body>
</html>
"""

    def _stylesheet(self, page: Page) -> str:
        skin = page.skin
        radius = _AVATAR_RADIUS.get(skin.avatar_shape, "50%")
        align = "left" if page.layout == "console" else "center"
        transform = "uppercase" if skin.uppercase_name else "none"
        return (
            f":root{{--primary:{page.primary_color};--bg:{skin.background};--surface:{skin.surface};"
            f"--text:{skin.text};--muted:{skin.muted}}}"
            f"body{{margin:0;background:var(--bg);color:var(--text);font-family:{skin.font_family}}}"
            f".card{{max-width:480px;margin:0 auto;padding:24px;text-align:{align}}}"
            f".banner{{width:100%;height:160px;object-fit:cover;border-radius:12px}}"
            f".avatar{{width:112px;height:112px;object-fit:cover;border-radius:{radius};"
            f"border:3px solid var(--primary)}}"
            f".logo{{max-height:48px}}"
            f"h1{{margin:12px 0 4px;text-transform:{transform}}}"
            f".job,.muted{{color:var(--muted)}}"
            f".actions{{display:flex;flex-wrap:wrap;gap:8px;justify-content:{align}}}"
            f".actions a{{padding:8px 14px;border-radius:8px;text-decoration:none;"
            f"border:1px solid var(--primary);color:var(--primary)}}"
            f".actions a.primary{{background:var(--primary);color:#fff}}"
            f"section{{background:var(--surface);border-radius:12px;padding:16px;margin:16px 0;text-align:left}}"
            f"section h2{{margin-top:0;color:var(--primary)}}"
            f".badge{{float:right;font-weight:bold}}"
            f"li.today{{font-weight:bold;color:var(--primary)}}"
            f".gallery{{display:grid;grid-template-columns:repeat(3,1fr);gap:6px}}"
            f".gallery img{{width:100%;aspect-ratio:1;object-fit:cover;border-radius:6px}}"
            f"iframe{{width:100%;height:220px;border:0;border-radius:8px}}"
            f".tags span{{display:inline-block;margin:2px;padding:2px 8px;border-radius:999px;"
            f"background:var(--surface)}}"
            f".socials a{{margin:0 6px;color:var(--primary)}}"
            f"footer{{margin-top:24px;font-size:12px;color:var(--muted)}}"
            f"footer img.qr{{display:block;margin:12px auto 0;width:96px;height:96px}}"
        )

    def _render_identity(self, page: Page) -> str:
        identity: Identity = page.identity
        parts = []
        if identity.banner_image:
            parts.append(f"<img class='banner' src='{_e(identity.banner_image)}' alt=''>")
        if identity.profile_image:
            parts.append(
                f"<img class='avatar' src='{_e(identity.profile_image)}' alt='{_e(identity.full_name)}'>"
            )
        parts.append(f"<h1>{_e(identity.full_name)}</h1>")
        if identity.job_title:
            parts.append(f"<p class='job'>{_e(identity.job_title)}</p>")
        if identity.company_name:
            parts.append(f"<p class='company'>{_e(identity.company_name)}</p>")
        if identity.logo_image:
            parts.append(f"<img class='logo' src='{_e(identity.logo_image)}' alt='{_e(identity.company_name)}'>")
        if identity.bio:
            parts.append(f"<p class='bio'>{_e(identity.bio)}</p>")
        return "<header>\n" + "\n".join(parts) + "\n</header>"

    def _render_actions(self, actions: list[Link]) -> str:
        if not actions:
            return ""
        links = [
            f"<a class='{'primary' if action.primary else 'secondary'} action-{_e(action.kind)}' "
            f"href='{_e(action.href)}'>{_e(action.label)}</a>"
            for action in actions
        ]
        return "<nav class='actions'>" + "".join(links) + "</nav>"

    def _render_block(self, block: ContentBlock) -> str:
        parts = [f"<h2>{_e(block.title)}</h2>"]
        if block.embed_url:
            parts.append(f"<iframe src='{_e(block.embed_url)}' loading='lazy' title='{_e(block.title)}'></iframe>")
        for paragraph in block.body:
            parts.append(f"<p>{_e(paragraph)}</p>")
        if block.items:
            rows = []
            for item in block.items:
                badge = f"<span class='badge'>{_e(item.badge)}</span>" if item.badge else ""
                detail = f"<div class='muted'>{_e(item.detail)}</div>" if item.detail else ""
                css = " class='today'" if item.highlight else ""
                rows.append(f"<li{css}>{badge}<strong>{_e(item.title)}</strong>{detail}</li>")
            parts.append("<ul>" + "".join(rows) + "</ul>")
        if block.images:
            images = "".join(f"<img src='{_e(src)}' alt=''>" for src in block.images)
            parts.append(f"<div class='gallery'>{images}</div>")
        return f"<section id='{_e(block.section_id)}'>" + "\n".join(parts) + "</section>"

    def _render_tags(self, tags: list[str]) -> str:
        if not tags:
            return ""
        return "<div class='tags'>" + "".join(f"<span>{_e(tag)}</span>" for tag in tags) + "</div>"

    def _render_socials(self, socials: list[Link]) -> str:
        if not socials:
            return ""
        links = [
            f"<a class='social-{_e(link.kind)}' href='{_e(link.href)}' rel='noopener' target='_blank'>"
            f"{_e(link.label)}</a>"
            for link in socials
        ]
        return "<div class='socials'>" + "".join(links) + "</div>"

    def _render_footer(self) -> str:
        if not self.share_link:
            return ""
        return (
            f"<footer>Share: <a href='{_e(self.share_link)}'>{_e(self.share_link)}</a>"
            f"<img class='qr' src='{qr_data_url(self.share_link)}' alt='QR code'></footer>"
        )
