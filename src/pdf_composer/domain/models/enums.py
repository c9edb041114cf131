"""Enumerations for PDF document composition."""

from enum import Enum


class PageSize(str, Enum):
    """Supported sheet sizes."""

    LETTER = "Letter"
    LEGAL = "Legal"
    A4 = "A4"
    TABLOID = "Tabloid"


class Orientation(str, Enum):
    """Page orientation."""

    PORTRAIT = "Portrait"
    LANDSCAPE = "Landscape"

    @property
    def code(self) -> str:
        """Single-letter code understood by the PDF library ("P" or "L")."""
        return self.value[0]


class OutputDestination(str, Enum):
    """How the rendered document is delivered."""

    INLINE = "I"  # shown in the browser
    DOWNLOAD = "D"  # forced download
    FILE = "F"  # saved to the local filesystem
    STRING = "S"  # returned in memory


class FooterColumn(str, Enum):
    """Footer placement within a page side."""

    LEFT = "Left"
    CENTER = "Center"
    RIGHT = "Right"


class PageSide(str, Enum):
    """Odd (recto) or even (verso) pages."""

    ODD = "odd"
    EVEN = "even"
