"""PDF renderer — implements DocumentRendererPort using fpdf2.

Layout and pagination are delegated to fpdf2: this module maps document
settings onto an ``FPDF`` instance, paints the running header and the
per-page footer, and flows the HTML content blocks.
"""

from __future__ import annotations

import html
import logging
import re

from fpdf import FPDF
from fpdf.errors import FPDFException

from pdf_composer.domain.errors import DocumentGenerationError
from pdf_composer.domain.models.document import (
    HtmlBlock,
    PageBreakBlock,
    PdfDocument,
    RegisteredFont,
)
from pdf_composer.domain.models.header_footer import FooterCell, FooterLayout, HeaderContent
from pdf_composer.domain.ports.document_renderer import DocumentRendererPort
from pdf_composer.domain.services.css import parse_color, parse_font_size_pt
from pdf_composer.domain.services.fonts import (
    is_core_font,
    resolve_font_program,
    sanitize_latin1,
)
from pdf_composer.domain.services.header_footer import resolve_page_tokens
from pdf_composer.domain.services.page_format import page_dimensions
from pdf_composer.rules.constants import TOTAL_PAGES_TOKEN

logger = logging.getLogger(__name__)

# Conversion helpers
_PT_TO_MM = 0.3528
_LINE_HEIGHT_FACTOR = 1.25

_BOLD_TAG_RE = re.compile(r"<\s*(strong|b)\s*>", re.IGNORECASE)
_ITALIC_TAG_RE = re.compile(r"<\s*(em|i)\s*>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_COLUMN_ALIGN = {"L": "L", "C": "C", "R": "R"}

# Embedded font styles, each with the styles that may stand in for it
_FONT_STYLES = ("", "B", "I", "BI")
_STYLE_SUBSTITUTES = {
    "": ("B", "I", "BI"),
    "B": ("", "BI", "I"),
    "I": ("", "BI", "B"),
    "BI": ("B", "I", ""),
}


def _line_height(size_pt: float) -> float:
    return size_pt * _PT_TO_MM * _LINE_HEIGHT_FACTOR


def _split_lines(markup: str) -> list[str]:
    """Split on ``<br>``, drop any other inline tags and decode entities."""
    parts = re.split(r"<\s*br\s*/?\s*>", markup, flags=re.IGNORECASE)
    return [html.unescape(_TAG_RE.sub("", part)) for part in parts]


def _inline_style(markup: str, base_style: str = "") -> str:
    style = base_style.upper()
    if _BOLD_TAG_RE.search(markup) and "B" not in style:
        style += "B"
    if _ITALIC_TAG_RE.search(markup) and "I" not in style:
        style += "I"
    return "".join(ch for ch in "BIU" if ch in style)


class ComposerPDF(FPDF):
    """FPDF subclass that paints the running header and the footer on every page."""

    def __init__(
        self,
        orientation: str,
        page_format: tuple[float, float],
        header_content: HeaderContent | None = None,
        footer_layout: FooterLayout | None = None,
        header_margin: float = 5,
        footer_margin: float = 9,
        registered_fonts: frozenset[str] = frozenset(),
    ) -> None:
        super().__init__(orientation=orientation, unit="mm", format=page_format)
        self._header_content = header_content
        self._footer_layout = footer_layout or FooterLayout(line=False)
        self._header_margin = header_margin
        self._footer_margin = footer_margin
        self._registered_fonts = registered_fonts

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def font_for(self, stack: str) -> str:
        return resolve_font_program(stack, self._registered_fonts)

    def text_for(self, text: str, family: str) -> str:
        """Core fonts only cover Latin-1; embedded fonts take text as-is."""
        return sanitize_latin1(text) if is_core_font(family) else text

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------

    def header(self) -> None:
        """Bold left column and italic, right-aligned right column."""
        content = self._header_content
        if content is None or not (content.left or content.right):
            return

        family = self.font_for("Arial")
        width = self.w - self.l_margin - self.r_margin
        bottom = self._header_margin

        self.set_text_color(0, 0, 0)
        for text, style, size, align in (
            (content.left, "B", content.left_size_pt, "L"),
            (content.right, "I", content.right_size_pt, "R"),
        ):
            self.set_font(family, style, size)
            line_h = _line_height(size)
            self.set_xy(self.l_margin, self._header_margin)
            for line in _split_lines(text):
                self.cell(width, line_h, self.text_for(line, family), align=align,
                          new_x="LMARGIN", new_y="NEXT")
            bottom = max(bottom, self.get_y())

        self.set_y(max(self.t_margin, bottom))

    # ------------------------------------------------------------------
    # Footer
    # ------------------------------------------------------------------

    def footer(self) -> None:
        """Left / center / right columns above the footer margin, with an optional rule."""
        cells = self._footer_layout.cells_for_page(self.page_no())
        if not cells:
            return

        layout = []
        block_h = 0.0
        for letter, cell in cells.items():
            lines = _split_lines(resolve_page_tokens(cell.content, self.page_no()))
            line_h = _line_height(cell.font_size)
            layout.append((letter, cell, lines, line_h))
            block_h = max(block_h, len(lines) * line_h)

        top = self.h - self._footer_margin - block_h
        width = self.w - self.l_margin - self.r_margin

        if self._footer_layout.line:
            self.set_draw_color(0, 0, 0)
            self.set_line_width(0.2)
            self.line(self.l_margin, top - 1, self.w - self.r_margin, top - 1)

        for letter, cell, lines, line_h in layout:
            self._paint_footer_cell(cell, lines, line_h, top, width, _COLUMN_ALIGN.get(letter, "L"))

    def _paint_footer_cell(
        self, cell: FooterCell, lines: list[str], line_h: float, top: float, width: float, align: str
    ) -> None:
        family = self.font_for(cell.font_family)
        self.set_font(family, _inline_style(cell.content, cell.font_style), cell.font_size)
        self.set_text_color(*(parse_color(cell.color) or (0, 0, 0)))
        self.set_xy(self.l_margin, top)
        for line in lines:
            self.cell(width, line_h, self.text_for(line, family), align=align,
                      new_x="LMARGIN", new_y="NEXT")


class FpdfRenderer(DocumentRendererPort):
    """Lay out and serialize a ``PdfDocument`` with fpdf2."""

    def render(self, document: PdfDocument) -> bytes:
        try:
            pdf = self._build(document)
            return bytes(pdf.output())
        except (FPDFException, OSError, RuntimeError) as exc:
            raise DocumentGenerationError(f"PDF generation failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Internal Helpers
    # ------------------------------------------------------------------

    def _build(self, document: PdfDocument) -> ComposerPDF:
        settings = document.settings
        margins = settings.margins
        dims = page_dimensions(settings.page_size)

        logger.debug(
            "Rendering %s document with %d content blocks", settings.page_format, len(document.blocks)
        )

        pdf = ComposerPDF(
            orientation=settings.orientation.code,
            page_format=dims.as_tuple(),
            header_content=document.header,
            footer_layout=document.footer,
            header_margin=margins.header,
            footer_margin=margins.footer,
            registered_fonts=frozenset(document.registered_families),
        )
        self._embed_fonts(pdf, document.fonts)

        pdf.alias_nb_pages(TOTAL_PAGES_TOKEN)
        pdf.set_margins(margins.left, margins.top, margins.right)
        pdf.set_auto_page_break(auto=True, margin=margins.bottom)
        self._apply_metadata(pdf, document)

        body_family = pdf.font_for(document.body_css.get("font-family", settings.font_type))
        body_size = parse_font_size_pt(document.body_css.get("font-size"), settings.font_size)
        body_color = parse_color(document.body_css.get("color")) or (0, 0, 0)

        pdf.add_page()
        for block in document.blocks:
            if isinstance(block, PageBreakBlock):
                pdf.add_page()
            elif isinstance(block, HtmlBlock):
                pdf.set_font(body_family, "", body_size)
                pdf.set_text_color(*body_color)
                pdf.write_html(pdf.text_for(block.markup, body_family))
        return pdf

    @staticmethod
    def _embed_fonts(pdf: FPDF, fonts: list[RegisteredFont]) -> None:
        """Add every registered file, then fill missing styles from the closest one.

        HTML bold/italic tags and headings ask fpdf2 for the B, I and BI
        variants of the current family; a family registered with only some
        styles reuses the nearest available file for the others.
        """
        files: dict[str, dict[str, str]] = {}
        for font in fonts:
            files.setdefault(font.family.lower(), {})[font.style] = str(font.path)

        for family, styles in files.items():
            for style in _FONT_STYLES:
                fname = styles.get(style)
                if fname is None:
                    fname = next(
                        styles[candidate]
                        for candidate in _STYLE_SUBSTITUTES[style]
                        if candidate in styles
                    )
                    logger.debug("Font %s has no %r style, reusing %s", family, style, fname)
                else:
                    logger.debug("Embedding font %s (%r) from %s", family, style, fname)
                pdf.add_font(family, style=style, fname=fname)

    @staticmethod
    def _apply_metadata(pdf: FPDF, document: PdfDocument) -> None:
        meta = document.metadata
        if meta.title:
            pdf.set_title(meta.title)
        if meta.author:
            pdf.set_author(meta.author)
        if meta.subject:
            pdf.set_subject(meta.subject)
        if meta.creator:
            pdf.set_creator(meta.creator)
        if meta.keywords:
            pdf.set_keywords(meta.keywords_string)
