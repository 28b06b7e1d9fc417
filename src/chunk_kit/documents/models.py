# documents/models.py

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class DocumentMetadata:
    """Descriptive metadata supplied by the extraction step.

    Not interpreted by the chunkers; copied onto every emitted chunk.
    """

    file_name: str | None = None
    title: str | None = None
    language: str | None = None
    created_at: datetime | None = None
    word_count: int = 0
    page_count: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Only the populated fields, so chunk metadata stays compact."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == 0:
                continue
            result[f.name] = value
        return result


@dataclass(frozen=True)
class DocumentContent:
    """
    Raw extracted text of one document.

    - `text` is the only field the chunkers read
    - `page_ranges` maps page number -> (start, end) character offsets and is
      consumed by the enrichment step that assigns page numbers to chunks
    """

    text: str
    page_ranges: Mapping[int, tuple[int, int]] = field(default_factory=dict)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
