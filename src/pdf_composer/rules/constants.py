"""Fixed values used by the composer — pure constants, no configuration.

Configurable defaults (margins, default page size, the font family table,
footer styling) live in ``config/pdf_default.json`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Placeholder tokens
# ---------------------------------------------------------------------------

# Caller-facing placeholders accepted in header/footer text
DATE_PLACEHOLDER = '{{date("n/d/Y g:i A")}}'
PAGE_PLACEHOLDER = '{{page("# of #")}}'

# Renderer-native tokens substituted while painting each page
PAGE_NUMBER_TOKEN = "{PAGENO}"
TOTAL_PAGES_TOKEN = "{nb}"
PAGE_OF_TOTAL = f"{PAGE_NUMBER_TOKEN} of {TOTAL_PAGES_TOKEN}"

# A literal pipe in header/footer text is a manual line break
LINE_BREAK_CHAR = "|"
LINE_BREAK_MARKUP = "<br>"

LANDSCAPE_SUFFIX = "-L"


# ---------------------------------------------------------------------------
# Page geometry (millimetres, portrait)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageDimensions:
    """Width and height of a sheet in millimetres."""

    width_mm: float
    height_mm: float

    def rotated(self) -> PageDimensions:
        return PageDimensions(width_mm=self.height_mm, height_mm=self.width_mm)

    def as_tuple(self) -> tuple[float, float]:
        return (self.width_mm, self.height_mm)


PAGE_DIMENSIONS: dict[str, PageDimensions] = {
    "Letter": PageDimensions(215.9, 279.4),
    "Legal": PageDimensions(215.9, 355.6),
    "A4": PageDimensions(210.0, 297.0),
    "Tabloid": PageDimensions(279.4, 431.8),
}


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------

# fpdf2 core (non-embedded) font families, keyed by lowercase family name
CORE_FONT_ALIASES: dict[str, str] = {
    "helvetica": "helvetica",
    "arial": "helvetica",
    "times": "times",
    "timesnewroman": "times",
    "times new roman": "times",
    "courier": "courier",
    "courier new": "courier",
}

GENERIC_FONT_FAMILIES: dict[str, str] = {
    "sans-serif": "helvetica",
    "serif": "times",
    "monospace": "courier",
}

FALLBACK_CORE_FONT = "helvetica"

# Core fonts are Latin-1 only; "smart" punctuation is folded to ASCII first
LATIN1_REPLACEMENTS: dict[str, str] = {
    "\u2013": "-",  # en-dash
    "\u2014": "--",  # em-dash
    "\u2018": "'",  # left single quote
    "\u2019": "'",  # right single quote
    "\u201c": '"',  # left double quote
    "\u201d": '"',  # right double quote
    "\u2026": "...",  # ellipsis
    "\u00a0": " ",  # no-break space
    "\u2022": "*",  # bullet
}

PDF_MEDIA_TYPE = "application/pdf"
