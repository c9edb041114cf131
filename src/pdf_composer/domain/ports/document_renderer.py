"""Port: Document renderer — turns a composed document into PDF bytes.

This is a domain-level contract. The fpdf2 renderer in the infrastructure
layer implements it.
"""

from abc import ABC, abstractmethod

from pdf_composer.domain.models.document import PdfDocument


class DocumentRendererPort(ABC):
    """Contract for laying out and serializing a document."""

    @abstractmethod
    def render(self, document: PdfDocument) -> bytes:
        """Lay out *document* and return the serialized PDF."""
        ...
