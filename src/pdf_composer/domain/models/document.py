"""Document aggregate — everything the renderer needs in one object.

Contains the content block types and ``PdfDocument``, the aggregate root
built by the fluent adapter and consumed by a ``DocumentRendererPort``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from pdf_composer.domain.models.header_footer import FooterLayout, HeaderContent
from pdf_composer.domain.models.metadata import DocumentMetadata
from pdf_composer.domain.models.settings import DocumentSettings


# ---------------------------------------------------------------------------
# Content blocks
# ---------------------------------------------------------------------------


class HtmlBlock(BaseModel):
    """A chunk of HTML flowed into the page body."""

    kind: Literal["html"] = "html"
    markup: str


class PageBreakBlock(BaseModel):
    """Forces the following content onto a new page."""

    kind: Literal["page_break"] = "page_break"


ContentBlock = Annotated[Union[HtmlBlock, PageBreakBlock], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


class RegisteredFont(BaseModel):
    """A TrueType font file to embed under a family name."""

    family: str
    path: Path
    style: str = Field(default="", pattern=r"^(|B|I|BI)$")


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------


class PdfDocument(BaseModel):
    """Complete document description handed to a renderer."""

    settings: DocumentSettings = Field(default_factory=DocumentSettings)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    header: Optional[HeaderContent] = None
    footer: FooterLayout = Field(default_factory=lambda: FooterLayout(line=False))
    blocks: list[ContentBlock] = Field(default_factory=list)
    body_css: dict[str, str] = Field(
        default_factory=dict, description="Body-level CSS declarations (font-family, ...)"
    )
    css: list[str] = Field(default_factory=list, description="Raw stylesheets, in order")
    fonts: list[RegisteredFont] = Field(default_factory=list)

    @property
    def registered_families(self) -> set[str]:
        return {font.family.lower() for font in self.fonts}
