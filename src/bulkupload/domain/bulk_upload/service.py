"""Entry point of the legal entity relationship bulk upload resolver.

Responsibilities:
- split the upload into a header row and data rows
- snapshot reference data once for the whole pass
- resolve headers, then each row independently against the snapshot

Out of scope:
- permission checks
- applying resolved rows to storage
"""

from __future__ import annotations

from collections import Counter
from logging import getLogger
from typing import TYPE_CHECKING

from bulkupload.config import get_upload_format_config
from bulkupload.domain.model import (
    ResolutionStatus,
    ResolveBulkUploadLegalEntityRelationshipParameters,
)

from .assemble import assemble_row
from .errors import BulkUploadError, RelationshipKindNotFoundError
from .headers import parse_headers
from .ratings import resolve_assessments
from .reference import load_reference_data
from .relationships import resolve_relationship
from .rows import read_rows

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulkupload.config import UploadFormatConfig
    from bulkupload.domain.model import (
        BulkUploadLegalEntityRelationshipCommand,
        RawRow,
        ResolvedAssessmentHeader,
        ResolvedUploadRow,
    )
    from bulkupload.domain.ports import BulkUploadRepositories

    from .reference import ReferenceData

log = getLogger(__name__)


def resolve(
    command: BulkUploadLegalEntityRelationshipCommand,
    *,
    repositories: BulkUploadRepositories,
    format_config: UploadFormatConfig | None = None,
) -> ResolveBulkUploadLegalEntityRelationshipParameters:
    """Resolve an upload without touching persisted state.

    Raises ``BulkUploadError`` subclasses for empty input, a missing or repeated
    header row and an unknown relationship kind. Every other problem is
    reported on the affected header, relationship or rating value.
    """

    config = format_config or get_upload_format_config()
    kind_id = command.legal_entity_relationship_kind_id
    log.info(
        "Resolving bulk upload: relationship_kind=%s, mode=%s",
        kind_id,
        command.upload_mode,
    )

    try:
        header_row, data_rows = read_rows(command.input_string, delimiter=config.column_delimiter)
        relationship_kind = repositories.relationship_kinds.get_by_id(kind_id)
        if relationship_kind is None:
            raise RelationshipKindNotFoundError(kind_id)  # noqa: TRY301
    except BulkUploadError as exc:
        log.warning("Rejected bulk upload for relationship kind %s: %s", kind_id, exc)
        raise

    reference = load_reference_data(relationship_kind, data_rows, repositories=repositories)
    headers = parse_headers(
        header_row,
        definitions=reference.definitions,
        rating_items_by_scheme=reference.rating_items_by_scheme,
        separator=config.header_separator,
    )

    resolved_rows = tuple(
        resolve_row(row, headers, reference=reference, list_separator=config.list_separator)
        for row in sorted(data_rows, key=lambda row: row.row_number)
    )

    _log_summary(resolved_rows, headers)
    return ResolveBulkUploadLegalEntityRelationshipParameters(
        upload_mode=command.upload_mode,
        input_string=command.input_string,
        resolved_rows=resolved_rows,
        headers=headers,
    )


def resolve_row(
    row: RawRow,
    headers: Mapping[int, ResolvedAssessmentHeader],
    *,
    reference: ReferenceData,
    list_separator: str = ";",
) -> ResolvedUploadRow:
    relationship = resolve_relationship(row, reference=reference)
    assessments = resolve_assessments(
        headers,
        row,
        existing_ratings=reference.existing_ratings_for(relationship.relationship_id),
        rating_items_by_scheme=reference.rating_items_by_scheme,
        list_separator=list_separator,
    )
    return assemble_row(row.row_number, relationship, assessments)


def _log_summary(
    rows: tuple[ResolvedUploadRow, ...],
    headers: Mapping[int, ResolvedAssessmentHeader],
) -> None:
    statuses = Counter(row.status for row in rows)
    header_errors = sum(1 for header in headers.values() if header.errors)
    log.info(
        "Resolved bulk upload: rows=%s, new=%s, existing=%s, error=%s, header_errors=%s",
        len(rows),
        statuses[ResolutionStatus.NEW],
        statuses[ResolutionStatus.EXISTING],
        statuses[ResolutionStatus.ERROR],
        header_errors,
    )
