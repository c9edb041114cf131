"""Renderer implementations."""

from pdf_composer.infrastructure.renderers.pdf_renderer import ComposerPDF, FpdfRenderer

__all__ = ["ComposerPDF", "FpdfRenderer"]
