"""PDF generation using ReportLab."""

import logging
from io import BytesIO
from pathlib import Path

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from digicard.design.base import ContentBlock, Link, Page
from digicard.render.image import load_image_ref
from digicard.utils.dimensions import PAGE_MARGIN, get_page_size, inches_to_points

logger = logging.getLogger(__name__)

_MONOSPACE_HINTS = ("mono", "courier", "code", "orbitron")
_SERIF_HINTS = ("serif", "georgia", "garamond", "playfair")


def _color(value: str) -> Color:
    # Expand CSS shorthand "#abc" to "#aabbcc"
    if len(value) == 4:
        value = "#" + "".join(ch * 2 for ch in value[1:])
    return HexColor(value)


def pdf_font_family(font_family: str) -> tuple[str, str]:
    """
    Map a CSS font stack to built-in PDF fonts.

    Args:
        font_family: CSS font stack from a skin.

    Returns:
        Tuple of (regular font name, bold font name).
    """
    stack = font_family.lower()
    if any(hint in stack for hint in _MONOSPACE_HINTS):
        return "Courier", "Courier-Bold"
    if any(hint in stack for hint in _SERIF_HINTS) and "sans-serif" not in stack:
        return "Times-Roman", "Times-Bold"
    return "Helvetica", "Helvetica-Bold"


class PDFRenderer:
    """Renders card pages to printable PDF using ReportLab."""

    def __init__(self, page_size: str = "letter", avatar_size: float = 1.25) -> None:
        """
        Initialize PDF renderer.

        Args:
            page_size: Page size name (e.g., "letter", "half", "a4", "a5", "a6").
            avatar_size: Profile image edge length in inches.
        """
        ps = get_page_size(page_size)
        self.page_width = inches_to_points(ps.width)
        self.page_height = inches_to_points(ps.height)
        self.margin = inches_to_points(PAGE_MARGIN)
        self.avatar_size = inches_to_points(avatar_size)

    def render_page(self, page: Page, output_path: Path) -> None:
        """
        Render a page to a PDF file.

        Content that does not fit continues on a new sheet.

        Args:
            page: Composed page.
            output_path: Path to output PDF file.
        """
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        c.setTitle(page.identity.full_name or "Digital Card")

        writer = _PageWriter(self, c, page)
        writer.start_sheet()
        writer.draw_identity()
        writer.draw_links(page.actions)
        for block in page.blocks:
            writer.draw_block(block)
        if page.tags:
            writer.draw_paragraph(" · ".join(page.tags), muted=True)
        writer.draw_links(page.socials)

        c.save()
        logger.info(f"Wrote PDF: {output_path}")


class _PageWriter:
    """Top-to-bottom cursor over one or more PDF sheets."""

    def __init__(self, renderer: PDFRenderer, c: canvas.Canvas, page: Page) -> None:
        self.r = renderer
        self.c = c
        self.page = page
        self.font, self.bold_font = pdf_font_family(page.skin.font_family)
        self.text_color = _color(page.skin.text)
        self.muted_color = _color(page.skin.muted)
        self.primary_color = _color(page.primary_color)
        self.left = renderer.margin
        self.width = renderer.page_width - 2 * renderer.margin
        self.y = 0.0

    def start_sheet(self) -> None:
        self.c.setFillColor(_color(self.page.skin.background))
        self.c.rect(0, 0, self.r.page_width, self.r.page_height, stroke=0, fill=1)
        self.y = self.r.page_height - self.r.margin

    def ensure_space(self, height: float) -> None:
        if self.y - height < self.r.margin:
            self.c.showPage()
            self.start_sheet()

    def draw_line(self, text: str, size: float = 10, bold: bool = False, color=None,
                  href: str | None = None) -> None:
        leading = size * 1.3
        self.ensure_space(leading)
        self.y -= leading
        font = self.bold_font if bold else self.font
        self.c.setFont(font, size)
        self.c.setFillColor(color or self.text_color)
        centered = self.page.layout != "console"
        if centered:
            self.c.drawCentredString(self.left + self.width / 2, self.y, text)
            text_width = self.c.stringWidth(text, font, size)
            x0 = self.left + (self.width - text_width) / 2
        else:
            self.c.drawString(self.left, self.y, text)
            x0 = self.left
            text_width = self.c.stringWidth(text, font, size)
        if href:
            self.c.linkURL(href, (x0, self.y - 2, x0 + text_width, self.y + size), relative=0)

    def draw_paragraph(self, text: str, size: float = 10, muted: bool = False) -> None:
        for line in simpleSplit(text, self.font, size, self.width):
            self.draw_line(line, size=size, color=self.muted_color if muted else None)

    def draw_image(self, ref: str | None, height: float) -> None:
        data = load_image_ref(ref)
        if data is None:
            return
        try:
            reader = ImageReader(BytesIO(data))
            img_w, img_h = reader.getSize()
        except OSError as e:
            logger.warning(f"Skipping unreadable image: {e}")
            return
        width = min(self.width, height * img_w / img_h)
        height = width * img_h / img_w
        self.ensure_space(height + 6)
        self.y -= height + 6
        x = self.left + (self.width - width) / 2 if self.page.layout != "console" else self.left
        self.c.drawImage(reader, x, self.y, width=width, height=height, mask="auto")

    def draw_identity(self) -> None:
        identity = self.page.identity
        if identity.banner_image:
            self.draw_image(identity.banner_image, self.r.avatar_size)
        self.draw_image(identity.profile_image, self.r.avatar_size)
        name = identity.full_name.upper() if self.page.skin.uppercase_name else identity.full_name
        self.draw_line(name, size=20, bold=True)
        if identity.job_title:
            self.draw_line(identity.job_title, size=12, color=self.muted_color)
        if identity.company_name:
            self.draw_line(identity.company_name, size=11)
        if identity.logo_image:
            self.draw_image(identity.logo_image, self.r.avatar_size / 3)
        if identity.bio:
            self.y -= 6
            self.draw_paragraph(identity.bio)

    def draw_links(self, links: list[Link]) -> None:
        if not links:
            return
        self.y -= 6
        for link in links:
            self.draw_line(link.label, size=11, bold=link.primary, color=self.primary_color, href=link.href)

    def draw_block(self, block: ContentBlock) -> None:
        self.y -= 10
        self.draw_line(block.title, size=13, bold=True, color=self.primary_color)
        for paragraph in block.body:
            self.draw_paragraph(paragraph)
        for item in block.items:
            title = f"{item.title}  ({item.badge})" if item.badge else item.title
            self.draw_line(title, size=10, bold=True,
                           color=self.primary_color if item.highlight else None)
            if item.detail:
                self.draw_paragraph(item.detail, size=9, muted=True)
        for ref in block.images:
            self.draw_image(ref, self.r.avatar_size)
        if block.embed_url:
            self.draw_line("Open map", size=9, color=self.primary_color, href=block.embed_url)
