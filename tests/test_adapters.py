"""Tests for the fluent PdfAdapter session and PDF generation with fpdf2."""

from __future__ import annotations

import io
import re
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pdfplumber
import pytest
from fpdf.errors import FPDFException

from pdf_composer import PdfAdapter
from pdf_composer.config import get_config
from pdf_composer.config.models import FontTable, PageDefaults, PdfConfig
from pdf_composer.domain.errors import DocumentGenerationError, InvalidArgumentError
from pdf_composer.domain.models.document import HtmlBlock, PageBreakBlock
from pdf_composer.domain.models.enums import Orientation, OutputDestination, PageSize
from pdf_composer.domain.models.settings import DocumentSettings
from pdf_composer.domain.ports.document_renderer import DocumentRendererPort
from pdf_composer.infrastructure.renderers.pdf_renderer import ComposerPDF

PAGE = '{{page("# of #")}}'
MM_TO_PT = 72 / 25.4


@pytest.fixture
def fake_renderer():
    """Renderer double that returns a fixed byte string."""
    renderer = MagicMock(spec=DocumentRendererPort)
    renderer.render.return_value = b"%PDF-fake"
    return renderer


@pytest.fixture
def adapter(fake_renderer):
    return PdfAdapter(renderer=fake_renderer)


def _open(data: bytes):
    return pdfplumber.open(io.BytesIO(data))


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_initial_state(self, adapter):
        assert adapter.page_size == PageSize.LETTER
        assert adapter.orientation == Orientation.PORTRAIT
        assert adapter.page_format == "Letter"
        assert adapter.settings.font_size == 12
        assert adapter.font_type.startswith("TimesNewRoman")
        assert adapter.page_header is None
        assert adapter.page_content == ""
        assert adapter.metadata.keywords == []

    def test_sessions_are_independent(self, fake_renderer):
        first = PdfAdapter(renderer=fake_renderer).set_margin_top(40).set_meta_keywords(["a"])
        second = PdfAdapter(renderer=fake_renderer)
        assert first.margins.top == 40
        assert second.margins.top == 11
        assert second.metadata.keywords == []

    def test_settings_argument_is_copied(self, fake_renderer):
        preset = DocumentSettings(page_size=PageSize.A4)
        session = PdfAdapter(settings=preset, renderer=fake_renderer).set_page_as_landscape()
        assert session.page_format == "A4-L"
        assert preset.orientation == Orientation.PORTRAIT


class TestChaining:
    def test_every_setter_returns_the_session(self, adapter):
        result = (
            adapter.set_margin_top(1)
            .set_margin_right(2)
            .set_margin_bottom(3)
            .set_margin_left(4)
            .set_margin_header(5)
            .set_margin_footer(6)
            .set_margins({})
            .set_page_size("Legal")
            .set_page_orientation("L")
            .set_page_size_letter()
            .set_page_size_legal()
            .set_page_size_a4()
            .set_page_size_tabloid()
            .set_page_as_landscape()
            .set_page_as_portrait()
            .set_font_type("arial")
            .set_font_size(10)
            .set_meta_title("t")
            .set_meta_author("a")
            .set_meta_subject("s")
            .set_meta_creator("c")
            .set_meta_keywords(["k"])
            .set_header({"left": "l", "right": "r"})
            .set_footer({"left": "l"})
            .append_page_css("body { color: #111 }")
            .append_page_content("<p>x</p>")
            .add_page_break()
            .set_filename("x.pdf")
            .set_output_destination("S")
            .set_character_encoding("latin-1")
        )
        assert result is adapter


# ---------------------------------------------------------------------------
# Margins
# ---------------------------------------------------------------------------


class TestMargins:
    def test_individual_setters(self, adapter):
        adapter.set_margin_top(20).set_margin_right(21).set_margin_bottom(22)
        adapter.set_margin_left(23).set_margin_header(7).set_margin_footer(8)
        m = adapter.margins
        assert (m.top, m.right, m.bottom, m.left, m.header, m.footer) == (20, 21, 22, 23, 7, 8)

    def test_set_margins_accepts_camel_and_snake_case(self, adapter):
        adapter.set_margins({"marginTop": "30", "margin_left": 12.7, "footer": 4})
        assert adapter.margins.top == 30
        assert adapter.margins.left == 12
        assert adapter.margins.footer == 4
        assert adapter.margins.right == 15  # untouched

    def test_negative_margin_rejected(self, adapter):
        with pytest.raises(InvalidArgumentError):
            adapter.set_margin_left(-1)
        assert adapter.margins.left == 11

    def test_non_numeric_margin_rejected(self, adapter):
        with pytest.raises(InvalidArgumentError):
            adapter.set_margins({"marginTop": "wide"})

    def test_invalid_argument_is_a_value_error(self, adapter):
        with pytest.raises(ValueError):
            adapter.set_margin_top(-5)


# ---------------------------------------------------------------------------
# Page format
# ---------------------------------------------------------------------------


class TestPageFormat:
    @pytest.mark.parametrize("size", ["Letter", "Legal", "A4", "Tabloid"])
    def test_supported_sizes_are_stored(self, adapter, size):
        adapter.set_page_size(size)
        assert adapter.page_size == PageSize(size)

    @pytest.mark.parametrize("size", ["A3", "Executive", "", "letter-l"])
    def test_unsupported_sizes_use_default(self, adapter, size):
        adapter.set_page_size("Legal").set_page_size(size)
        assert adapter.page_size == PageSize.LETTER

    def test_fallback_uses_configured_default(self, fake_renderer):
        config = PdfConfig(
            fonts=FontTable(families={"default": "Arial"}),
            page=PageDefaults(default_page_size=PageSize.A4),
        )
        session = PdfAdapter(config=config, renderer=fake_renderer).set_page_size("B5")
        assert session.page_size == PageSize.A4

    @pytest.mark.parametrize("size", ["Letter", "Legal", "A4", "Tabloid"])
    def test_landscape_after_size(self, adapter, size):
        adapter.set_page_size(size).set_page_as_landscape()
        assert adapter.page_format == f"{size}-L"
        adapter.set_page_as_portrait()
        assert adapter.page_format == size

    def test_size_change_keeps_orientation(self, adapter):
        adapter.set_page_as_landscape().set_page_size_legal()
        assert adapter.page_format == "Legal-L"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("landscape", "Letter-L"), ("L", "Letter-L"), ("Portrait", "Letter"), ("", "Letter")],
    )
    def test_set_page_orientation(self, adapter, value, expected):
        adapter.set_page_as_landscape().set_page_orientation(value)
        assert adapter.page_format == expected

    def test_register_page_format_both(self, adapter):
        adapter.register_page_format("Tabloid", "Landscape")
        assert adapter.page_size == PageSize.TABLOID
        assert adapter.orientation == Orientation.LANDSCAPE


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


class TestFonts:
    def test_set_font_type_stores_stack(self, adapter):
        adapter.set_font_type("Georgia")
        assert adapter.font_type == "Georgia, Times, 'Times New Roman', serif"
        assert adapter.doc.body_css["font-family"] == adapter.font_type

    def test_unknown_font_uses_default_stack(self, adapter):
        adapter.set_font_type("Comic Sans")
        assert adapter.font_type == adapter.get_font_family("default")

    def test_font_size_validation(self, adapter):
        with pytest.raises(InvalidArgumentError):
            adapter.set_font_size(0)

    def test_register_font_requires_existing_file(self, adapter, tmp_path):
        with pytest.raises(InvalidArgumentError):
            adapter.register_font("DejaVu", tmp_path / "missing.ttf")

    def test_registered_font_can_be_selected(self, adapter, tmp_path):
        font_file = tmp_path / "DejaVuSans.ttf"
        font_file.write_bytes(b"\x00")
        adapter.register_font("DejaVu", font_file).set_font_type("DejaVu")
        assert adapter.font_type == "DejaVu"

    def test_register_font_rejects_bad_style(self, adapter, tmp_path):
        font_file = tmp_path / "f.ttf"
        font_file.write_bytes(b"\x00")
        with pytest.raises(InvalidArgumentError):
            adapter.register_font("F", font_file, style="X")


# ---------------------------------------------------------------------------
# Header / footer / metadata / content
# ---------------------------------------------------------------------------


class TestHeaderFooter:
    def test_header_markup(self, adapter):
        adapter.set_header({"left": "A|B", "right": "R"})
        assert "A<br>B" in adapter.page_header

    def test_header_date(self, adapter):
        adapter.set_header(
            {"left": "", "right": '{{date("n/d/Y g:i A")}}'}, now=datetime(2026, 5, 9, 13, 2)
        )
        assert "5/09/2026 1:02 PM" in adapter.page_header

    def test_footer_structure(self, adapter):
        adapter.set_footer({"left": "x|y", "center": "c", "right": PAGE})
        odd = adapter.page_footer["odd"]
        assert odd["L"]["content"] == "<strong>x<br>y</strong>"
        assert odd["R"]["content"] == "<strong>{PAGENO} of {nb}</strong>"
        assert odd["line"] is True

    def test_set_footer_content(self, adapter):
        assert adapter.set_footer_content("Center", "z") == {
            "C": {
                "content": "<strong>z</strong>",
                "font-size": 9,
                "font-style": "",
                "font-family": "Arial",
                "color": "#000000",
            }
        }


class TestMetadataAndContent:
    def test_metadata_setters(self, adapter):
        adapter.set_meta_title("T").set_meta_author("A").set_meta_subject("S").set_meta_creator("C")
        meta = adapter.metadata
        assert (meta.title, meta.author, meta.subject, meta.creator) == ("T", "A", "S", "C")

    def test_keywords_accumulate(self, adapter):
        adapter.set_meta_keywords(["one", "two"]).set_meta_keywords(["two", "three"])
        assert adapter.metadata.keywords == ["one", "two", "two", "three"]

    def test_single_string_keyword(self, adapter):
        adapter.set_meta_keywords("solo")
        assert adapter.metadata.keywords == ["solo"]

    def test_content_blocks_in_order(self, adapter):
        adapter.append_page_content("<p>1</p>").add_page_break().append_page_content("<p>2</p>")
        assert [type(b) for b in adapter.doc.blocks] == [HtmlBlock, PageBreakBlock, HtmlBlock]
        assert adapter.page_content == "<p>1</p><p>2</p>"

    def test_bytes_content_uses_encoding(self, adapter):
        adapter.set_character_encoding("latin-1").append_page_content("<p>Café</p>".encode("latin-1"))
        assert adapter.page_content == "<p>Café</p>"

    def test_unknown_encoding(self, adapter):
        with pytest.raises(InvalidArgumentError):
            adapter.set_character_encoding("klingon-8")

    def test_css_updates_body(self, adapter):
        adapter.append_page_css("body { font-size: 10pt; color: #222222 } h1 { color: red }")
        assert adapter.doc.body_css["font-size"] == "10pt"
        assert adapter.doc.body_css["color"] == "#222222"
        assert "h1" in adapter.page_css


# ---------------------------------------------------------------------------
# Output destinations (renderer double)
# ---------------------------------------------------------------------------


class TestOutputDestinations:
    def test_default_is_inline(self, adapter, fake_renderer):
        result = adapter.output()
        assert result.destination == OutputDestination.INLINE
        assert result.content_disposition == 'inline; filename="document.pdf"'
        assert result.data == b"%PDF-fake"
        fake_renderer.render.assert_called_once_with(adapter.doc)

    def test_download(self, adapter):
        result = adapter.set_filename("report.pdf").output("d")
        assert result.content_disposition == 'attachment; filename="report.pdf"'

    def test_string(self, adapter):
        result = adapter.output(OutputDestination.STRING)
        assert result.content_disposition is None
        assert result.path is None

    def test_file_with_path(self, adapter, tmp_path):
        result = adapter.output("F", tmp_path / "out" / "doc")
        assert result.path == tmp_path / "out" / "doc.pdf"
        assert result.path.read_bytes() == b"%PDF-fake"

    def test_file_uses_filename_setting(self, adapter, tmp_path):
        adapter.set_filename(str(tmp_path / "named.pdf")).set_output_destination("F")
        result = adapter.output()
        assert result.path == tmp_path / "named.pdf"
        assert result.filename == "named.pdf"

    @pytest.mark.parametrize("code", ["X", "file", ""])
    def test_unknown_destination(self, adapter, code):
        with pytest.raises(InvalidArgumentError):
            adapter.set_output_destination(code)

    def test_empty_filename(self, adapter):
        with pytest.raises(InvalidArgumentError):
            adapter.set_filename("  ")


# ---------------------------------------------------------------------------
# Real rendering with fpdf2
# ---------------------------------------------------------------------------


class TestRendering:
    def test_generates_pdf_bytes(self):
        data = PdfAdapter().append_page_content("<p>Hello world</p>").render()
        assert data.startswith(b"%PDF")

    def test_letter_portrait_geometry(self):
        data = PdfAdapter().append_page_content("<p>x</p>").render()
        with _open(data) as pdf:
            page = pdf.pages[0]
            assert page.width == pytest.approx(612, abs=1)
            assert page.height == pytest.approx(792, abs=1)

    def test_landscape_pages_are_wide(self):
        data = (
            PdfAdapter().set_page_size("A4").set_page_as_landscape()
            .append_page_content("<p>x</p>").render()
        )
        with _open(data) as pdf:
            page = pdf.pages[0]
            assert page.width == pytest.approx(297 * MM_TO_PT, abs=1)
            assert page.height == pytest.approx(210 * MM_TO_PT, abs=1)

    def test_left_margin_positions_body_text(self):
        data = PdfAdapter().set_margin_left(30).append_page_content("<p>Margin</p>").render()
        with _open(data) as pdf:
            first = pdf.pages[0].chars[0]
            assert first["text"] == "M"
            assert first["x0"] == pytest.approx(30 * MM_TO_PT, abs=2)

    def test_page_breaks_and_footer_numbering(self):
        data = (
            PdfAdapter()
            .set_footer({"left": "Math Dept", "center": "", "right": PAGE})
            .append_page_content("<p>First</p>")
            .add_page_break()
            .append_page_content("<p>Second</p>")
            .render()
        )
        with _open(data) as pdf:
            assert len(pdf.pages) == 2
            first, second = (page.extract_text() for page in pdf.pages)
        assert re.search(r"1\s*of\s*2", first)
        assert re.search(r"2\s*of\s*2", second)
        assert "Math Dept" in first

    def test_footer_line_breaks_render_as_separate_lines(self):
        data = PdfAdapter().set_footer({"left": "Line one|Line two"}).append_page_content(
            "<p>x</p>"
        ).render()
        with _open(data) as pdf:
            lines = pdf.pages[0].extract_text().splitlines()
        assert "Line one" in lines
        assert "Line two" in lines

    def test_long_content_paginates(self):
        body = "".join(f"<p>Paragraph {i}</p>" for i in range(150))
        data = PdfAdapter().append_page_content(body).render()
        with _open(data) as pdf:
            assert len(pdf.pages) > 1

    def test_running_header(self):
        data = (
            PdfAdapter()
            .set_header({"left": "Course Roster", "right": "Fall"})
            .append_page_content("<p>Body</p>")
            .render()
        )
        with _open(data) as pdf:
            text = pdf.pages[0].extract_text()
        assert "Course Roster" in text
        assert "Fall" in text

    def test_entities_in_header_and_footer_are_decoded(self):
        data = (
            PdfAdapter()
            .set_header({"left": "R&amp;D Report", "right": "Draft &#8470;"})
            .set_footer({"left": "Smith &amp; Sons", "right": "x &lt; y"})
            .append_page_content("<p>Body</p>")
            .render()
        )
        with _open(data) as pdf:
            text = pdf.pages[0].extract_text()
        assert "R&D Report" in text
        assert "Smith & Sons" in text
        assert "x < y" in text
        assert "&amp;" not in text
        assert "&lt;" not in text

    def test_metadata_is_written(self):
        data = (
            PdfAdapter()
            .set_meta_title("Roster")
            .set_meta_author("Registrar")
            .set_meta_subject("Enrollment")
            .set_meta_keywords(["math", "fall"])
            .set_meta_keywords(["math"])
            .append_page_content("<p>x</p>")
            .render()
        )
        with _open(data) as pdf:
            meta = pdf.metadata
        assert meta["Title"] == "Roster"
        assert meta["Author"] == "Registrar"
        assert meta["Subject"] == "Enrollment"
        assert meta["Keywords"] == "math, fall, math"

    def test_smart_punctuation_is_sanitized_for_core_fonts(self):
        data = PdfAdapter().append_page_content("<p>“Quoted” – text</p>").render()
        with _open(data) as pdf:
            text = pdf.pages[0].extract_text()
        assert '"Quoted" - text' in text

    def test_file_output(self, tmp_path):
        result = PdfAdapter().append_page_content("<p>Saved</p>").output("F", tmp_path / "saved")
        assert result.path.exists()
        assert result.path.read_bytes().startswith(b"%PDF")

    def test_library_errors_are_wrapped(self, monkeypatch):
        def boom(self, *args, **kwargs):
            raise FPDFException("broken")

        monkeypatch.setattr(ComposerPDF, "output", boom)
        with pytest.raises(DocumentGenerationError):
            PdfAdapter().append_page_content("<p>x</p>").render()


# ---------------------------------------------------------------------------
# Embedded TrueType fonts
# ---------------------------------------------------------------------------

_FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path("/Library/Fonts"),
    Path.home() / ".fonts",
    Path.home() / ".rbenv",
)
_FONT_FILES = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Lato-Regular.ttf", "Arial.ttf")


@pytest.fixture(scope="module")
def ttf_font() -> Path:
    """A regular-style TrueType file installed on this machine."""
    for directory in _FONT_DIRS:
        if not directory.is_dir():
            continue
        for name in _FONT_FILES:
            found = next(directory.rglob(name), None)
            if found is not None:
                return found
    pytest.skip("no TrueType font installed")


class TestEmbeddedFonts:
    def test_body_text_uses_embedded_font(self, ttf_font):
        data = (
            PdfAdapter()
            .register_font("Body", ttf_font)
            .set_font_type("Body")
            .append_page_content("<p>Café menu</p>")
            .render()
        )
        with _open(data) as pdf:
            page = pdf.pages[0]
            assert "Café menu" in page.extract_text()
            assert ttf_font.stem.split("-")[0] in page.chars[0]["fontname"]

    @pytest.mark.parametrize(
        "markup",
        [
            "<p>Some <b>bold</b> text</p>",
            "<p>Some <strong><em>loud</em></strong> text</p>",
            "<p>Some <i>slanted</i> text</p>",
            "<h1>Some heading text</h1>",
        ],
    )
    def test_regular_file_covers_other_styles(self, ttf_font, markup):
        data = (
            PdfAdapter()
            .register_font("Body", ttf_font)
            .set_font_type("Body")
            .append_page_content(markup)
            .render()
        )
        with _open(data) as pdf:
            assert "text" in pdf.pages[0].extract_text()

    def test_footer_in_embedded_font(self, ttf_font):
        config = get_config().model_copy(deep=True)
        config.footer.font_family = "Body"
        data = (
            PdfAdapter(config=config)
            .register_font("Body", ttf_font)
            .set_footer({"center": "Page " + PAGE})
            .append_page_content("<p>x</p>")
            .render()
        )
        with _open(data) as pdf:
            assert re.search(r"Page 1\s*of\s*1", pdf.pages[0].extract_text())
