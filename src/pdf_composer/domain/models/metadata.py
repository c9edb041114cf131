"""Document information dictionary (title, author, keywords...)."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import BaseModel, Field


class DocumentMetadata(BaseModel):
    """PDF metadata written into the document information dictionary."""

    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    creator: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)

    def add_keywords(self, words: Iterable[str]) -> None:
        """Append *words* after the existing keywords (no deduplication)."""
        self.keywords.extend(str(word) for word in words)

    @property
    def keywords_string(self) -> str:
        return ", ".join(self.keywords)
