"""Configuration loader for pdf_composer.

Every ``PdfAdapter`` session starts from a validated ``PdfConfig``. The
built-in ``pdf_default.json`` is used unless the ``PDF_COMPOSER_CONFIG``
environment variable names another file, which then serves as the
process-wide default for :func:`get_config`. Parsed files are cached by
resolved path.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pdf_composer.config.models import PdfConfig
from pdf_composer.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PDF_COMPOSER_CONFIG"

_config_cache: dict[str, PdfConfig] = {}

_BUILTIN_CONFIG_PATH = Path(__file__).parent / "pdf_default.json"


def default_config_path() -> Path:
    """Path :func:`get_config` reads: ``$PDF_COMPOSER_CONFIG`` or the built-in file."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    return Path(override).expanduser() if override else _BUILTIN_CONFIG_PATH


def load_config(path: Union[Path, str, None] = None) -> PdfConfig:
    """Load and validate composer config from a JSON file.

    Parameters
    ----------
    path : Path | str | None
        Path to a custom JSON config file.
        If ``None``, :func:`default_config_path` decides.

    Returns
    -------
    PdfConfig
        Validated configuration instance.

    Raises
    ------
    FileNotFoundError
        If the config file does not exist.
    ConfigurationError
        If the file is not a JSON object.
    pydantic.ValidationError
        If the JSON content does not match the expected schema.
    """
    config_path = Path(path) if path else default_config_path()
    cache_key = str(config_path.resolve())

    if cache_key in _config_cache:
        return _config_cache[cache_key]

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{config_path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{config_path} must contain a JSON object")

    logger.debug("Loaded configuration from %s", config_path)
    config = PdfConfig.model_validate(raw)
    _config_cache[cache_key] = config
    return config


def get_config() -> PdfConfig:
    """Get the process-wide default configuration (cached)."""
    return load_config()


def clear_cache() -> None:
    """Forget every parsed config file."""
    _config_cache.clear()
