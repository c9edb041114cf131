"""Running header and per-page footer content."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pdf_composer.domain.models.enums import PageSide


class HeaderContent(BaseModel):
    """A rendered header: the markup string plus the text it was built from.

    ``left`` and ``right`` hold the substituted text, with ``<br>`` marking
    manual line breaks.
    """

    markup: str
    left: str = ""
    right: str = ""
    left_size_pt: float = 10.5
    right_size_pt: float = 9.75


class FooterCell(BaseModel):
    """One styled footer column."""

    model_config = ConfigDict(populate_by_name=True)

    content: str
    font_size: int = Field(default=9, alias="font-size")
    font_style: str = Field(default="", alias="font-style")
    font_family: str = Field(default="Arial", alias="font-family")
    color: str = "#000000"

    def as_dict(self) -> dict:
        """Hyphenated-key mapping, the shape callers of the footer API expect."""
        return self.model_dump(by_alias=True)


class FooterLayout(BaseModel):
    """Footer cells for odd and even pages, keyed by column letter (L/C/R)."""

    odd: dict[str, FooterCell] = Field(default_factory=dict)
    even: dict[str, FooterCell] = Field(default_factory=dict)
    line: bool = True

    @staticmethod
    def side_of(page_number: int) -> PageSide:
        return PageSide.EVEN if page_number % 2 == 0 else PageSide.ODD

    def cells_for(self, side: PageSide) -> dict[str, FooterCell]:
        """Cells for *side*; an even side without cells falls back to the odd ones."""
        if side == PageSide.EVEN and self.even:
            return self.even
        return self.odd

    def cells_for_page(self, page_number: int) -> dict[str, FooterCell]:
        return self.cells_for(self.side_of(page_number))

    def as_dict(self) -> dict:
        """Nested ``{"odd": {"L": {...}, ..., "line": True}, "even": {...}}`` mapping."""
        odd: dict = {letter: cell.as_dict() for letter, cell in self.odd.items()}
        odd["line"] = self.line
        even: dict = {letter: cell.as_dict() for letter, cell in self.even.items()}
        if self.even:
            even["line"] = self.line
        return {PageSide.ODD.value: odd, PageSide.EVEN.value: even}
