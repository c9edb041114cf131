"""Result of a render: the PDF bytes plus delivery details."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pdf_composer.domain.models.enums import OutputDestination
from pdf_composer.rules.constants import PDF_MEDIA_TYPE


@dataclass
class RenderedOutput:
    """Rendered PDF and the metadata a caller needs to deliver it.

    For ``INLINE`` and ``DOWNLOAD`` destinations, ``content_disposition`` is the
    value an HTTP response should send. For ``FILE``, ``path`` is where the
    document was written.
    """

    data: bytes
    filename: str
    destination: OutputDestination
    path: Optional[Path] = None
    media_type: str = PDF_MEDIA_TYPE

    @property
    def content_disposition(self) -> Optional[str]:
        if self.destination == OutputDestination.INLINE:
            return f'inline; filename="{self.filename}"'
        if self.destination == OutputDestination.DOWNLOAD:
            return f'attachment; filename="{self.filename}"'
        return None

    def __len__(self) -> int:
        return len(self.data)
