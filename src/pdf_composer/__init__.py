"""pdf_composer — fluent PDF document composition on top of fpdf2."""

from pdf_composer.adapters.pdf_adapter import PdfAdapter
from pdf_composer.domain.models.enums import Orientation, OutputDestination, PageSize
from pdf_composer.domain.models.output import RenderedOutput

__version__ = "1.7.0"

__all__ = [
    "Orientation",
    "OutputDestination",
    "PageSize",
    "PdfAdapter",
    "RenderedOutput",
    "__version__",
]
