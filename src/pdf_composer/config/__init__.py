"""Composer configuration package."""

from pdf_composer.config.loader import get_config, load_config
from pdf_composer.config.models import PdfConfig

__all__ = ["PdfConfig", "get_config", "load_config"]
