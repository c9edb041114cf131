"""Minimal CSS handling for body-level typography.

Only declarations on ``body``/``html``/``*`` are honoured, and only the ones
the renderer can map onto its base font: ``font-family``, ``font-size`` and
``color``. Everything else in a stylesheet is ignored.
"""

from __future__ import annotations

import re
from typing import Optional

_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_SIZE_RE = re.compile(r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>pt|px|mm|cm|in)?\s*$", re.IGNORECASE)
_HEX_RE = re.compile(r"^#(?P<hex>[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)

BODY_SELECTORS = {"body", "html", "*"}
SUPPORTED_PROPERTIES = {"font-family", "font-size", "color"}

# Conversion factors to points
_UNIT_TO_PT = {"pt": 1.0, "px": 0.75, "mm": 72 / 25.4, "cm": 72 / 2.54, "in": 72.0}

_NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
}


def parse_declarations(block: str) -> dict[str, str]:
    declarations: dict[str, str] = {}
    for item in block.split(";"):
        if ":" not in item:
            continue
        prop, value = item.split(":", 1)
        prop, value = prop.strip().lower(), value.strip()
        if prop and value:
            declarations[prop] = value
    return declarations


def parse_body_declarations(css: str) -> dict[str, str]:
    """Collect the supported body-level declarations from a stylesheet.

    Later rules override earlier ones, as in a browser.
    """
    css = _COMMENT_RE.sub("", css or "")
    found: dict[str, str] = {}
    for selectors, block in _RULE_RE.findall(css):
        targets = {selector.strip().lower() for selector in selectors.split(",")}
        if not targets & BODY_SELECTORS:
            continue
        for prop, value in parse_declarations(block).items():
            if prop in SUPPORTED_PROPERTIES:
                found[prop] = value
    return found


def parse_font_size_pt(value: Optional[str], default: float) -> float:
    """Convert a CSS length to points; unparseable values give *default*."""
    if not value:
        return default
    match = _SIZE_RE.match(value)
    if not match:
        return default
    unit = (match.group("unit") or "pt").lower()
    size = float(match.group("value")) * _UNIT_TO_PT[unit]
    return size if size > 0 else default


def parse_color(value: Optional[str]) -> Optional[tuple[int, int, int]]:
    """``#rgb``, ``#rrggbb``, ``rgb(r, g, b)`` or a few named colours to an RGB tuple."""
    if not value:
        return None
    value = value.strip().lower()
    if value in _NAMED_COLORS:
        return _NAMED_COLORS[value]
    match = _HEX_RE.match(value)
    if match:
        digits = match.group("hex")
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    match = _RGB_RE.match(value)
    if match:
        return tuple(min(int(part), 255) for part in match.groups())  # type: ignore[return-value]
    return None
