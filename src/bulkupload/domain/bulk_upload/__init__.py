"""Bulk upload resolution for legal entity relationships.

Flow of one pass:
1) read the header row and data rows from the upload text
2) snapshot definitions, rating schemes, relationships, ratings and aliases
3) resolve assessment headers by column index
4) resolve each data row's relationship and assessment cells
5) assemble one resolved row per data row
"""

from __future__ import annotations

from .errors import (
    BulkUploadError,
    EmptyUploadError,
    MissingHeaderRowError,
    RelationshipKindNotFoundError,
)
from .service import resolve

__all__ = [
    "BulkUploadError",
    "EmptyUploadError",
    "MissingHeaderRowError",
    "RelationshipKindNotFoundError",
    "resolve",
]
