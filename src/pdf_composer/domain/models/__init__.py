"""Domain models — public API.

Provides convenient imports for the most commonly used domain entities.
"""

from pdf_composer.domain.models.document import (
    HtmlBlock,
    PageBreakBlock,
    PdfDocument,
    RegisteredFont,
)
from pdf_composer.domain.models.enums import (
    FooterColumn,
    Orientation,
    OutputDestination,
    PageSide,
    PageSize,
)
from pdf_composer.domain.models.header_footer import FooterCell, FooterLayout, HeaderContent
from pdf_composer.domain.models.metadata import DocumentMetadata
from pdf_composer.domain.models.output import RenderedOutput
from pdf_composer.domain.models.settings import DocumentSettings, Margins

__all__ = [
    # Document
    "HtmlBlock",
    "PageBreakBlock",
    "PdfDocument",
    "RegisteredFont",
    # Enums
    "FooterColumn",
    "Orientation",
    "OutputDestination",
    "PageSide",
    "PageSize",
    # Content & settings
    "DocumentMetadata",
    "DocumentSettings",
    "FooterCell",
    "FooterLayout",
    "HeaderContent",
    "Margins",
    "RenderedOutput",
]
