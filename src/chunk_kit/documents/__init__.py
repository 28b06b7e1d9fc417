from .models import DocumentContent, DocumentMetadata

__all__ = [
    "DocumentContent",
    "DocumentMetadata",
]
