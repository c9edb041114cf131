"""Pydantic models for the composer configuration.

These models validate and type the JSON configuration file that supplies
every default a new ``PdfAdapter`` session starts from.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from pdf_composer.domain.models.enums import Orientation, OutputDestination, PageSize
from pdf_composer.domain.models.settings import DocumentSettings, Margins
from pdf_composer.domain.services.fonts import get_font_family


# ---------------------------------------------------------------------------
# Document defaults
# ---------------------------------------------------------------------------


class DocumentDefaults(BaseModel):
    """Typography and delivery defaults."""

    character_encoding: str = "UTF-8"
    font_size: int = Field(default=12, gt=0)
    font_type: str = Field(default="times", description="Key into the font family table")
    filename: str = "document.pdf"
    output_destination: OutputDestination = OutputDestination.INLINE


# ---------------------------------------------------------------------------
# Page defaults
# ---------------------------------------------------------------------------


class PageDefaults(BaseModel):
    """Sheet, orientation and margin defaults."""

    page_size: PageSize = PageSize.LETTER
    default_page_size: PageSize = Field(
        default=PageSize.LETTER,
        description="Substituted when a caller asks for an unsupported page size",
    )
    orientation: Orientation = Orientation.PORTRAIT
    margins: Margins = Field(default_factory=Margins)


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


class FontTable(BaseModel):
    """Logical font name → CSS font stack, with a mandatory ``default`` entry."""

    families: dict[str, str]

    @field_validator("families")
    @classmethod
    def _require_default(cls, value: dict[str, str]) -> dict[str, str]:
        lowered = {key.lower(): stack for key, stack in value.items()}
        if "default" not in lowered:
            raise ValueError("font family table must define a 'default' entry")
        return lowered


# ---------------------------------------------------------------------------
# Header / footer styling
# ---------------------------------------------------------------------------


class HeaderStyle(BaseModel):
    """Font sizes used in the header markup (CSS pixels)."""

    left_font_size_px: int = 14
    right_font_size_px: int = 13


class FooterStyle(BaseModel):
    """Fixed styling applied to every footer column."""

    font_size: int = 9
    font_style: str = ""
    font_family: str = "Arial"
    color: str = Field(default="#000000", pattern=r"^#[0-9a-fA-F]{6}$")
    line: bool = True


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class PdfConfig(BaseModel):
    """Complete composer configuration."""

    document: DocumentDefaults = Field(default_factory=DocumentDefaults)
    page: PageDefaults = Field(default_factory=PageDefaults)
    fonts: FontTable
    header: HeaderStyle = Field(default_factory=HeaderStyle)
    footer: FooterStyle = Field(default_factory=FooterStyle)

    # ----- Convenience accessors -----

    @property
    def font_families(self) -> dict[str, str]:
        return self.fonts.families

    @property
    def default_page_size(self) -> PageSize:
        return self.page.default_page_size

    def default_settings(self) -> DocumentSettings:
        """Factory settings for a new session."""
        doc = self.document
        return DocumentSettings(
            character_encoding=doc.character_encoding,
            font_size=doc.font_size,
            font_type=get_font_family(doc.font_type, self.font_families),
            filename=doc.filename,
            output_destination=doc.output_destination,
            page_size=self.page.page_size,
            orientation=self.page.orientation,
            margins=self.page.margins.model_copy(),
        )
