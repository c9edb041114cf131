"""Port (ABC) for persisting a user's preferred document settings.

Domain layer interface — infrastructure provides the concrete implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pdf_composer.domain.models.settings import DocumentSettings


class SettingsPort(ABC):
    """Abstract interface for loading / saving document setting presets."""

    @abstractmethod
    def load(self) -> DocumentSettings:
        """Load persisted settings (or defaults if none exist)."""

    @abstractmethod
    def save(self, settings: DocumentSettings) -> None:
        """Persist the given settings."""

    @abstractmethod
    def reset_to_defaults(self) -> DocumentSettings:
        """Delete persisted settings and return factory defaults."""
