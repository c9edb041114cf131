"""Font resolution.

Two steps turn a caller's font name into something fpdf2 can draw with:

1. ``get_font_family`` maps a logical name ("georgia", "Courier") to a CSS
   font stack from the configured family table, falling back to the
   ``default`` stack for anything unknown.
2. ``resolve_font_program`` walks that stack and picks the first family that
   is either a registered TrueType font or one of the PDF core fonts.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from pdf_composer.rules.constants import (
    CORE_FONT_ALIASES,
    FALLBACK_CORE_FONT,
    GENERIC_FONT_FAMILIES,
    LATIN1_REPLACEMENTS,
)

logger = logging.getLogger(__name__)


def _default_families() -> Mapping[str, str]:
    from pdf_composer.config.loader import get_config

    return get_config().font_families


def get_font_family(fontname: Optional[str], families: Optional[Mapping[str, str]] = None) -> str:
    """Return the font stack registered for *fontname* (case-insensitive).

    Unknown, empty or ``None`` names resolve to the ``default`` stack; this
    never raises.
    """
    table = families if families is not None else _default_families()
    key = (fontname or "").strip().lower()
    if key in table:
        return table[key]
    logger.debug("Unknown font %r, using the default font stack", fontname)
    return table["default"]


def parse_font_stack(stack: str) -> list[str]:
    """Split a CSS font-family value into bare family names."""
    names = []
    for part in stack.split(","):
        name = part.strip().strip("'\"").strip()
        if name:
            names.append(name)
    return names


def resolve_font_program(stack: str, registered: Iterable[str] = ()) -> str:
    """Pick the fpdf2 font family that will render *stack*.

    Registered TrueType families win over core fonts; generic CSS families
    (``serif``, ``sans-serif``, ``monospace``) map onto the matching core font.
    """
    registered_lower = {family.lower() for family in registered}
    for name in parse_font_stack(stack):
        lowered = name.lower()
        if lowered in registered_lower:
            return lowered
        if lowered in CORE_FONT_ALIASES:
            return CORE_FONT_ALIASES[lowered]
        if lowered in GENERIC_FONT_FAMILIES:
            return GENERIC_FONT_FAMILIES[lowered]
    return FALLBACK_CORE_FONT


def is_core_font(family: str) -> bool:
    return family.lower() in set(CORE_FONT_ALIASES.values())


def sanitize_latin1(text: str) -> str:
    """Replace characters not supported by the core PDF fonts (Latin-1)."""
    if not text:
        return ""
    for char, repl in LATIN1_REPLACEMENTS.items():
        text = text.replace(char, repl)

    # Fallback: encode to latin-1, replace errors with '?'
    return text.encode("latin-1", "replace").decode("latin-1")
