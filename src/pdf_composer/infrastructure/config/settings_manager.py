"""Settings manager — loads/saves DocumentSettings to OS-appropriate config dir.

Implements ``SettingsPort`` and persists a user's preferred page setup as
JSON to ``~/.config/pdf_composer/document_settings.json`` (Linux) or the
equivalent platform directory via ``platformdirs``.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Optional

import platformdirs
from pydantic import ValidationError

from pdf_composer.config.models import PdfConfig
from pdf_composer.domain.models.settings import DocumentSettings
from pdf_composer.domain.ports.settings_port import SettingsPort

logger = logging.getLogger(__name__)

_APP_NAME = "pdf_composer"
_SETTINGS_FILENAME = "document_settings.json"


class SettingsManager(SettingsPort):
    """Concrete implementation of :class:`SettingsPort`.

    Parameters
    ----------
    config_dir : Path | None
        Override the default config directory (useful for testing).
    config : PdfConfig | None
        Source of the factory defaults; the packaged configuration if omitted.
    """

    def __init__(self, config_dir: Path | None = None, config: Optional[PdfConfig] = None) -> None:
        self._config_dir = config_dir or Path(
            platformdirs.user_config_dir(_APP_NAME, ensure_exists=True)
        )
        self._settings_path = self._config_dir / _SETTINGS_FILENAME
        self._config = config

    # -- Public API ----------------------------------------------------------

    def defaults(self) -> DocumentSettings:
        if self._config is None:
            from pdf_composer.config.loader import get_config

            self._config = get_config()
        return self._config.default_settings()

    def load(self) -> DocumentSettings:
        """Load settings from disk, falling back to defaults."""
        if not self._settings_path.exists():
            return self.defaults()

        try:
            raw = json.loads(self._settings_path.read_text(encoding="utf-8"))
            return DocumentSettings.model_validate(raw)
        except (OSError, ValueError, ValidationError) as exc:
            # Corrupted file → return safe defaults
            logger.warning("Ignoring unreadable settings file %s: %s", self._settings_path, exc)
            return self.defaults()

    def save(self, settings: DocumentSettings) -> None:
        """Persist settings atomically (write to temp, then rename)."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        data = settings.model_dump(mode="json")
        tmp_fd, tmp_path = tempfile.mkstemp(
            dir=self._config_dir,
            suffix=".tmp",
        )
        try:
            with open(tmp_fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            Path(tmp_path).replace(self._settings_path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def reset_to_defaults(self) -> DocumentSettings:
        """Delete the persisted file and return factory defaults."""
        self._settings_path.unlink(missing_ok=True)
        return self.defaults()

    @property
    def settings_path(self) -> Path:
        """Absolute path to the settings JSON file."""
        return self._settings_path
