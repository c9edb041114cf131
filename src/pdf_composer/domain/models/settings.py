"""Document settings — page geometry, typography and delivery options.

``DocumentSettings`` is the mutable state behind the fluent setter API. It is
validated on assignment so a session can never hold an impossible margin or
font size.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pdf_composer.domain.models.enums import Orientation, OutputDestination, PageSize
from pdf_composer.rules.constants import LANDSCAPE_SUFFIX


class Margins(BaseModel):
    """Page margins in millimetres."""

    model_config = ConfigDict(validate_assignment=True)

    top: int = Field(default=11, ge=0)
    right: int = Field(default=15, ge=0)
    bottom: int = Field(default=14, ge=0)
    left: int = Field(default=11, ge=0)
    header: int = Field(default=5, ge=0, description="Distance from the top edge to the header")
    footer: int = Field(default=9, ge=0, description="Distance from the bottom edge to the footer")


class DocumentSettings(BaseModel):
    """Everything that shapes the output apart from content and metadata."""

    model_config = ConfigDict(validate_assignment=True)

    character_encoding: str = "UTF-8"
    font_size: int = Field(default=12, gt=0, description="Body font size in points")
    font_type: str = Field(
        default="TimesNewRoman, 'Times New Roman', Times, Baskerville, Georgia, serif",
        description="Body font stack (CSS font-family syntax)",
    )
    filename: str = "document.pdf"
    output_destination: OutputDestination = OutputDestination.INLINE
    page_size: PageSize = PageSize.LETTER
    orientation: Orientation = Orientation.PORTRAIT
    margins: Margins = Field(default_factory=Margins)

    @property
    def page_format(self) -> str:
        """Page size name, suffixed with ``-L`` when in landscape."""
        if self.orientation == Orientation.LANDSCAPE:
            return self.page_size.value + LANDSCAPE_SUFFIX
        return self.page_size.value
