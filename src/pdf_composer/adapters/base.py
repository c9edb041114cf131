"""Abstract base adapter for PDF document composition."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from pdf_composer.config import PdfConfig, get_config
from pdf_composer.domain.models.document import PdfDocument
from pdf_composer.domain.models.enums import OutputDestination
from pdf_composer.domain.models.output import RenderedOutput
from pdf_composer.domain.models.settings import DocumentSettings


class BaseAdapter(ABC):
    """Base class for document composition adapters.

    Owns one ``PdfDocument`` for its whole lifetime: one adapter builds one
    output document.
    """

    def __init__(
        self, config: Optional[PdfConfig] = None, settings: Optional[DocumentSettings] = None
    ) -> None:
        self._config = config or get_config()
        self.doc = PdfDocument(
            settings=settings.model_copy(deep=True) if settings else self._config.default_settings()
        )

    @property
    def config(self) -> PdfConfig:
        return self._config

    @abstractmethod
    def output(
        self,
        destination: Union[OutputDestination, str, None] = None,
        path: Union[Path, str, None] = None,
    ) -> RenderedOutput:
        """Render the document and deliver it to *destination*."""
        ...

    def _get_font_family(self, fontname: Optional[str]) -> str:
        """Get the font stack registered for *fontname*."""
        from pdf_composer.domain.services.fonts import get_font_family

        return get_font_family(fontname, self._config.font_families)
