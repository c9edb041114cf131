"""Header and footer formatting.

Callers pass plain column text in which ``|`` is a manual line break and two
placeholders may appear: ``{{date("n/d/Y g:i A")}}`` (replaced with the
current time when the header is set) and ``{{page("# of #")}}`` (replaced
with the renderer's ``{PAGENO} of {nb}`` tokens, resolved per page).
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional

from pdf_composer.config.models import FooterStyle, HeaderStyle
from pdf_composer.domain.models.enums import FooterColumn
from pdf_composer.domain.models.header_footer import FooterCell, FooterLayout, HeaderContent
from pdf_composer.rules.constants import (
    DATE_PLACEHOLDER,
    LINE_BREAK_CHAR,
    LINE_BREAK_MARKUP,
    PAGE_NUMBER_TOKEN,
    PAGE_OF_TOTAL,
    PAGE_PLACEHOLDER,
)


# ---------------------------------------------------------------------------
# Substitutions
# ---------------------------------------------------------------------------


def substitute_line_breaks(text: str) -> str:
    return text.replace(LINE_BREAK_CHAR, LINE_BREAK_MARKUP)


def substitute_page_placeholder(text: str) -> str:
    return text.replace(PAGE_PLACEHOLDER, PAGE_OF_TOTAL)


def format_header_date(moment: datetime) -> str:
    """Format as ``n/d/Y g:i A``, e.g. ``3/07/2026 4:05 PM``."""
    hour = moment.hour % 12 or 12
    return f"{moment.month}/{moment:%d}/{moment.year} {hour}:{moment:%M} {moment:%p}"


def substitute_date_placeholder(text: str, now: Optional[datetime] = None) -> str:
    if DATE_PLACEHOLDER not in text:
        return text
    return text.replace(DATE_PLACEHOLDER, format_header_date(now or datetime.now()))


def prepare_column_text(text: Optional[str], now: Optional[datetime] = None) -> str:
    """Apply every caller-facing substitution to one header/footer column."""
    text = substitute_line_breaks(text or "")
    text = substitute_page_placeholder(text)
    return substitute_date_placeholder(text, now)


def px_to_pt(pixels: float) -> float:
    return pixels * 0.75


def resolve_page_tokens(text: str, page_number: int) -> str:
    """Replace ``{PAGENO}``; ``{nb}`` is left for the PDF library's total-pages alias."""
    return text.replace(PAGE_NUMBER_TOKEN, str(page_number))


# ---------------------------------------------------------------------------
# Footer
# ---------------------------------------------------------------------------


def format_footer_content(
    column: str, text: str, style: Optional[FooterStyle] = None
) -> dict[str, dict]:
    """Build one footer column entry, keyed by the column's initial (L/C/R)."""
    style = style or FooterStyle()
    letter = column[:1].upper()
    return {
        letter: {
            "content": f"<strong>{text}</strong>",
            "font-size": style.font_size,
            "font-style": style.font_style,
            "font-family": style.font_family,
            "color": style.color,
        }
    }


def _footer_cells(data: Mapping[str, str], style: FooterStyle) -> dict[str, FooterCell]:
    cells: dict[str, FooterCell] = {}
    for column in FooterColumn:
        text = prepare_column_text(data.get(column.value.lower()))
        for letter, entry in format_footer_content(column.value, text, style).items():
            cells[letter] = FooterCell.model_validate(entry)
    return cells


def build_footer(
    data: Mapping[str, str],
    even: Optional[Mapping[str, str]] = None,
    style: Optional[FooterStyle] = None,
) -> FooterLayout:
    """Build the footer for odd pages from *data* and, optionally, even pages from *even*.

    Both mappings take ``left``, ``center`` and ``right`` keys; missing keys
    produce empty columns.
    """
    style = style or FooterStyle()
    return FooterLayout(
        odd=_footer_cells(data, style),
        even=_footer_cells(even, style) if even else {},
        line=style.line,
    )


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


def build_header(
    data: Mapping[str, str], now: Optional[datetime] = None, style: Optional[HeaderStyle] = None
) -> HeaderContent:
    """Build the header markup: bold text on the left, italic text on the right."""
    style = style or HeaderStyle()
    left = prepare_column_text(data.get("left"), now)
    right = prepare_column_text(data.get("right"), now)
    markup = (
        "<table border='0' cellspacing='0' cellpadding='0' width='100%'><tr>"
        f"<td style='font-family:arial;font-size:{style.left_font_size_px}px;"
        f"font-weight:bold;'>{left}</td>"
        f"<td style='font-size:{style.right_font_size_px}px;font-family:arial;"
        f"text-align:right;font-style:italic;'>{right}</td>"
        "</tr></table><br>"
    )
    return HeaderContent(
        markup=markup,
        left=left,
        right=right,
        left_size_pt=px_to_pt(style.left_font_size_px),
        right_size_pt=px_to_pt(style.right_font_size_px),
    )
