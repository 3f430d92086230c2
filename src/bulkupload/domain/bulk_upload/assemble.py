"""Compose a row's relationship and assessment resolutions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bulkupload.domain.model import ResolvedUploadRow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bulkupload.domain.model import ResolvedAssessmentRating, ResolvedLegalEntityRelationship


def assemble_row(
    row_number: int,
    relationship: ResolvedLegalEntityRelationship,
    assessments: Iterable[ResolvedAssessmentRating],
) -> ResolvedUploadRow:
    return ResolvedUploadRow(
        row_number=row_number,
        legal_entity_relationship=relationship,
        assessment_ratings=tuple(sorted(assessments, key=lambda a: a.column_index)),
    )
