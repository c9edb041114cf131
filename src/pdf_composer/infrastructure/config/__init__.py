"""User-level configuration persistence."""

from pdf_composer.infrastructure.config.settings_manager import SettingsManager

__all__ = ["SettingsManager"]
