"""Domain errors — custom exceptions for pdf_composer.

Silent-fallback cases (unknown page sizes, fonts, orientations) never raise;
these exceptions cover genuine precondition violations and rendering failures.
"""


class PdfComposerError(Exception):
    """Base exception for all pdf_composer errors."""


class InvalidArgumentError(PdfComposerError, ValueError):
    """Raised when a setter receives a value it cannot accept (e.g. a negative margin)."""


class ConfigurationError(PdfComposerError):
    """Raised when configuration or a stored preset is invalid or missing."""


class DocumentGenerationError(PdfComposerError):
    """Raised when the PDF library fails to lay out or serialize the document."""
