"""Terminal failures that abort a resolution pass before any row is resolved."""

from __future__ import annotations


class BulkUploadError(ValueError):
    """Base class for uploads that cannot be resolved at all."""


class EmptyUploadError(BulkUploadError):
    def __init__(self) -> None:
        super().__init__("Cannot parse empty data string")


class MissingHeaderRowError(BulkUploadError):
    def __init__(self, header_rows: int) -> None:
        self.header_rows = header_rows
        super().__init__(f"Must have one header row, found {header_rows}")


class RelationshipKindNotFoundError(BulkUploadError):
    def __init__(self, kind_id: int) -> None:
        self.kind_id = kind_id
        super().__init__(f"Legal entity relationship kind {kind_id} does not exist")
