"""Page size / orientation registration and the page format string."""

from __future__ import annotations

import logging
from typing import Optional, Union

from pdf_composer.domain.errors import InvalidArgumentError
from pdf_composer.domain.models.enums import Orientation, PageSize
from pdf_composer.rules.constants import LANDSCAPE_SUFFIX, PAGE_DIMENSIONS, PageDimensions

logger = logging.getLogger(__name__)

_SIZES_BY_NAME = {size.value.lower(): size for size in PageSize}


def normalize_page_size(
    page_size: Union[PageSize, str, None], default: PageSize = PageSize.LETTER
) -> PageSize:
    """Return *page_size* as a ``PageSize``, or *default* when it is not supported."""
    if isinstance(page_size, PageSize):
        return page_size
    if isinstance(page_size, str) and page_size.strip().lower() in _SIZES_BY_NAME:
        return _SIZES_BY_NAME[page_size.strip().lower()]
    logger.warning("Unsupported page size %r, falling back to %s", page_size, default.value)
    return default


def normalize_orientation(orientation: Union[Orientation, str, None]) -> Orientation:
    """Landscape for anything starting with "L" (any case), otherwise Portrait."""
    if isinstance(orientation, Orientation):
        return orientation
    letter = str(orientation).strip()[:1].upper() if orientation is not None else ""
    if letter == "L":
        return Orientation.LANDSCAPE
    if letter and letter != "P":
        logger.warning("Unknown orientation %r, using Portrait", orientation)
    return Orientation.PORTRAIT


def encode_page_format(page_size: PageSize, orientation: Orientation) -> str:
    """``Letter`` for portrait, ``Letter-L`` for landscape."""
    if orientation == Orientation.LANDSCAPE:
        return page_size.value + LANDSCAPE_SUFFIX
    return page_size.value


def parse_page_format(page_format: str) -> tuple[PageSize, Orientation]:
    """Inverse of :func:`encode_page_format`.

    Raises
    ------
    InvalidArgumentError
        If *page_format* does not name a supported page size.
    """
    name, orientation = page_format, Orientation.PORTRAIT
    if page_format.endswith(LANDSCAPE_SUFFIX):
        name, orientation = page_format[: -len(LANDSCAPE_SUFFIX)], Orientation.LANDSCAPE
    try:
        return PageSize(name), orientation
    except ValueError as exc:
        raise InvalidArgumentError(f"Not a page format: {page_format!r}") from exc


def page_dimensions(
    page_size: PageSize, orientation: Optional[Orientation] = None
) -> PageDimensions:
    """Sheet size in millimetres, width and height swapped for landscape."""
    dims = PAGE_DIMENSIONS[page_size.value]
    if orientation == Orientation.LANDSCAPE:
        return dims.rotated()
    return dims
