"""Fluent PDF composition adapter on top of fpdf2.

``PdfAdapter`` is a session object: every setter mutates the document it
owns and returns the adapter, so calls chain::

    pdf = (
        PdfAdapter()
        .set_page_size("Legal")
        .set_page_as_landscape()
        .set_meta_title("Quarterly report")
        .set_footer({"left": "Math Department", "right": '{{page("# of #")}}'})
        .append_page_content("<h1>Results</h1><p>...</p>")
    )
    result = pdf.output("F", "report.pdf")

Nothing is laid out until :meth:`PdfAdapter.output`; at that point the
composed ``PdfDocument`` is handed to a ``DocumentRendererPort``.
"""

from __future__ import annotations

import codecs
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from pdf_composer.adapters.base import BaseAdapter
from pdf_composer.config import PdfConfig
from pdf_composer.domain.errors import InvalidArgumentError
from pdf_composer.domain.models.document import HtmlBlock, PageBreakBlock, RegisteredFont
from pdf_composer.domain.models.enums import Orientation, OutputDestination, PageSize
from pdf_composer.domain.models.metadata import DocumentMetadata
from pdf_composer.domain.models.output import RenderedOutput
from pdf_composer.domain.models.settings import DocumentSettings, Margins
from pdf_composer.domain.ports.document_renderer import DocumentRendererPort
from pdf_composer.domain.services.css import parse_body_declarations
from pdf_composer.domain.services.header_footer import (
    build_footer,
    build_header,
    format_footer_content,
)
from pdf_composer.domain.services.page_format import normalize_orientation, normalize_page_size

logger = logging.getLogger(__name__)

_MARGIN_FIELDS = ("top", "right", "bottom", "left", "header", "footer")


class PdfAdapter(BaseAdapter):
    """Compose a PDF through chained setters, then render it with fpdf2."""

    def __init__(
        self,
        config: Optional[PdfConfig] = None,
        settings: Optional[DocumentSettings] = None,
        renderer: Optional[DocumentRendererPort] = None,
    ) -> None:
        super().__init__(config=config, settings=settings)
        if renderer is None:
            from pdf_composer.infrastructure.renderers.pdf_renderer import FpdfRenderer

            renderer = FpdfRenderer()
        self._renderer = renderer
        self.doc.body_css["font-family"] = self.doc.settings.font_type

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def settings(self) -> DocumentSettings:
        return self.doc.settings

    @property
    def metadata(self) -> DocumentMetadata:
        return self.doc.metadata

    @property
    def margins(self) -> Margins:
        return self.doc.settings.margins

    @property
    def page_size(self) -> PageSize:
        return self.doc.settings.page_size

    @property
    def orientation(self) -> Orientation:
        return self.doc.settings.orientation

    @property
    def page_format(self) -> str:
        return self.doc.settings.page_format

    @property
    def font_type(self) -> str:
        return self.doc.settings.font_type

    @property
    def page_header(self) -> Optional[str]:
        """Rendered header markup, or ``None`` before :meth:`set_header`."""
        return self.doc.header.markup if self.doc.header else None

    @property
    def page_footer(self) -> dict:
        return self.doc.footer.as_dict()

    @property
    def page_content(self) -> str:
        """All HTML appended so far, concatenated in order."""
        return "".join(block.markup for block in self.doc.blocks if isinstance(block, HtmlBlock))

    @property
    def page_css(self) -> str:
        return "\n".join(self.doc.css)

    # ------------------------------------------------------------------
    # Header / Footer
    # ------------------------------------------------------------------

    def set_header(self, data: Mapping[str, str], now: Optional[datetime] = None) -> PdfAdapter:
        """Set the running header from ``left`` and ``right`` column text.

        ``|`` breaks lines and ``{{date("n/d/Y g:i A")}}`` is replaced with
        *now* (the current time by default).
        """
        self.doc.header = build_header(data, now=now, style=self._config.header)
        return self

    def set_footer(
        self, data: Mapping[str, str], even: Optional[Mapping[str, str]] = None
    ) -> PdfAdapter:
        """Set the footer from ``left``, ``center`` and ``right`` column text.

        Without *even*, the same footer appears on every page.
        ``{{page("# of #")}}`` renders as e.g. ``2 of 5``.
        """
        self.doc.footer = build_footer(data, even=even, style=self._config.footer)
        return self

    def set_footer_content(self, column: str, text: str) -> dict[str, dict]:
        """Return the styled entry for one footer column, keyed by its initial."""
        return format_footer_content(column, text, self._config.footer)

    def clear_header(self) -> PdfAdapter:
        self.doc.header = None
        return self

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def get_font_family(self, fontname: Optional[str] = None) -> str:
        """Font stack for *fontname*; unknown names give the default stack."""
        return self._get_font_family(fontname)

    def set_font_type(self, fontname: Optional[str] = None) -> PdfAdapter:
        """Set the default document font (e.g. 'Times', 'Helvetica', 'Courier').

        A family added with :meth:`register_font` is used as-is; any other
        name goes through the font family table.
        """
        if fontname and fontname.lower() in self.doc.registered_families:
            stack = fontname
        else:
            stack = self._get_font_family(fontname)
        self.doc.settings.font_type = stack
        self.doc.body_css["font-family"] = stack
        return self

    def set_font_size(self, size: int) -> PdfAdapter:
        """Set the default body font size in points."""
        size = self._to_int(size, "font size")
        if size <= 0:
            raise InvalidArgumentError(f"Font size must be positive, got {size}")
        self.doc.settings.font_size = size
        self.doc.body_css.pop("font-size", None)
        return self

    def register_font(
        self, family: str, path: Union[Path, str], style: str = ""
    ) -> PdfAdapter:
        """Embed a TrueType font file under *family* (style "", "B", "I" or "BI").

        Once registered, *family* can be selected with :meth:`set_font_type`
        or a CSS ``font-family``, and text is no longer restricted to Latin-1.
        """
        font_path = Path(path)
        if not font_path.is_file():
            raise InvalidArgumentError(f"Font file not found: {font_path}")
        style = (style or "").upper()
        if style not in ("", "B", "I", "BI"):
            raise InvalidArgumentError(f"Unsupported font style: {style!r}")
        self.doc.fonts.append(RegisteredFont(family=family, path=font_path, style=style))
        if family.lower() not in self._config.font_families:
            logger.debug("Registered font %s is not in the family table", family)
        return self

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def append_page_content(self, content: Union[str, bytes]) -> PdfAdapter:
        """Append HTML to the document body.

        Bytes are decoded with the configured character encoding.
        """
        if isinstance(content, bytes):
            content = content.decode(self.doc.settings.character_encoding)
        self.doc.blocks.append(HtmlBlock(markup=content))
        return self

    def append_page_css(self, css: str) -> PdfAdapter:
        """Append a stylesheet; ``body`` font-family/font-size/color apply to the text."""
        self.doc.css.append(css)
        declarations = parse_body_declarations(css)
        if not declarations:
            logger.debug("Stylesheet has no body-level declarations the renderer supports")
        self.doc.body_css.update(declarations)
        return self

    def add_page_break(self) -> PdfAdapter:
        self.doc.blocks.append(PageBreakBlock())
        return self

    # ------------------------------------------------------------------
    # Margins
    # ------------------------------------------------------------------

    def set_margin_top(self, margin_top: int) -> PdfAdapter:
        return self._set_margin("top", margin_top)

    def set_margin_right(self, margin_right: int) -> PdfAdapter:
        return self._set_margin("right", margin_right)

    def set_margin_bottom(self, margin_bottom: int) -> PdfAdapter:
        return self._set_margin("bottom", margin_bottom)

    def set_margin_left(self, margin_left: int) -> PdfAdapter:
        return self._set_margin("left", margin_left)

    def set_margin_header(self, margin_header: int) -> PdfAdapter:
        return self._set_margin("header", margin_header)

    def set_margin_footer(self, margin_footer: int) -> PdfAdapter:
        return self._set_margin("footer", margin_footer)

    def set_margins(self, setting: Mapping[str, int]) -> PdfAdapter:
        """Set several margins at once.

        Keys may be ``margin_top``, ``marginTop`` or just ``top`` (likewise
        for right, bottom, left, header and footer). Missing keys leave the
        current value untouched.
        """
        for name in _MARGIN_FIELDS:
            for key in (f"margin_{name}", f"margin{name.capitalize()}", name):
                if key in setting:
                    self._set_margin(name, setting[key])
                    break
        return self

    def _set_margin(self, name: str, value: int) -> PdfAdapter:
        value = self._to_int(value, f"{name} margin")
        if value < 0:
            raise InvalidArgumentError(f"The {name} margin cannot be negative, got {value}")
        setattr(self.doc.settings.margins, name, value)
        return self

    @staticmethod
    def _to_int(value, what: str) -> int:
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid {what}: {value!r}") from exc

    # ------------------------------------------------------------------
    # Page size & orientation
    # ------------------------------------------------------------------

    def set_page_size(self, page_size: Union[PageSize, str]) -> PdfAdapter:
        """Set the page size; unsupported sizes fall back to the configured default."""
        return self.register_page_format(page_size)

    def register_page_format(
        self,
        page_size: Union[PageSize, str, None] = None,
        orientation: Union[Orientation, str, None] = None,
    ) -> PdfAdapter:
        """Validate and store page size and orientation.

        ``None`` keeps the current value. An unsupported page size is replaced
        by the configured default rather than rejected.
        """
        settings = self.doc.settings
        if page_size is not None:
            settings.page_size = normalize_page_size(page_size, self._config.default_page_size)
        if orientation is not None:
            settings.orientation = normalize_orientation(orientation)
        logger.debug("Page format is now %s", settings.page_format)
        return self

    def set_page_orientation(self, orientation: Union[Orientation, str]) -> PdfAdapter:
        """'L'/'Landscape' (any case) for landscape, anything else for portrait."""
        return self.register_page_format(orientation=orientation if orientation else "P")

    def set_page_size_letter(self) -> PdfAdapter:
        return self.register_page_format(PageSize.LETTER)

    def set_page_size_legal(self) -> PdfAdapter:
        return self.register_page_format(PageSize.LEGAL)

    def set_page_size_a4(self) -> PdfAdapter:
        return self.register_page_format(PageSize.A4)

    def set_page_size_tabloid(self) -> PdfAdapter:
        return self.register_page_format(PageSize.TABLOID)

    def set_page_as_landscape(self) -> PdfAdapter:
        return self.register_page_format(orientation=Orientation.LANDSCAPE)

    def set_page_as_portrait(self) -> PdfAdapter:
        return self.register_page_format(orientation=Orientation.PORTRAIT)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def set_meta_title(self, title: str) -> PdfAdapter:
        self.doc.metadata.title = str(title)
        return self

    def set_meta_author(self, author: str) -> PdfAdapter:
        self.doc.metadata.author = str(author)
        return self

    def set_meta_creator(self, creator: str) -> PdfAdapter:
        self.doc.metadata.creator = str(creator)
        return self

    def set_meta_subject(self, subject: str) -> PdfAdapter:
        self.doc.metadata.subject = str(subject)
        return self

    def set_meta_keywords(self, words: Union[Iterable[str], str]) -> PdfAdapter:
        """Append keywords; earlier keywords are kept and duplicates allowed."""
        if isinstance(words, str):
            words = [words]
        self.doc.metadata.add_keywords(words)
        return self

    # ------------------------------------------------------------------
    # Output options
    # ------------------------------------------------------------------

    def set_filename(self, filename: str) -> PdfAdapter:
        if not filename or not str(filename).strip():
            raise InvalidArgumentError("Filename cannot be empty")
        self.doc.settings.filename = str(filename)
        return self

    def set_output_destination(self, destination: Union[OutputDestination, str]) -> PdfAdapter:
        self.doc.settings.output_destination = self._destination(destination)
        return self

    def set_character_encoding(self, encoding: str) -> PdfAdapter:
        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise InvalidArgumentError(f"Unknown character encoding: {encoding!r}") from exc
        self.doc.settings.character_encoding = encoding
        return self

    @staticmethod
    def _destination(destination: Union[OutputDestination, str]) -> OutputDestination:
        if isinstance(destination, OutputDestination):
            return destination
        try:
            return OutputDestination(str(destination).strip().upper())
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Unknown output destination {destination!r}; expected one of I, D, F, S"
            ) from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self) -> bytes:
        """Lay out the document and return the PDF bytes."""
        return self._renderer.render(self.doc)

    def output(
        self,
        destination: Union[OutputDestination, str, None] = None,
        path: Union[Path, str, None] = None,
    ) -> RenderedOutput:
        """Render the document and deliver it.

        ``F`` writes to *path* (or the configured filename, ``.pdf`` added
        when missing). ``I`` and ``D`` return the bytes with the matching
        ``Content-Disposition``. ``S`` just returns the bytes.
        """
        dest = self._destination(destination or self.doc.settings.output_destination)
        data = self.render()
        filename = Path(self.doc.settings.filename).name

        if dest != OutputDestination.FILE:
            return RenderedOutput(data=data, filename=filename, destination=dest)

        output_path = Path(path or self.doc.settings.filename)
        if not output_path.suffix:
            output_path = output_path.with_suffix(".pdf")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
        logger.info("Wrote %s (%d bytes)", output_path, len(data))
        return RenderedOutput(
            data=data, filename=output_path.name, destination=dest, path=output_path
        )
