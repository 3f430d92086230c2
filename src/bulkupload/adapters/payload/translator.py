"""Translate between payload models and domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bulkupload.adapters.payload.schema import (
    BulkUploadCommandPayload,
    EntityReferencePayload,
    NamedItemPayload,
    ResolutionErrorPayload,
    ResolveBulkUploadPayload,
    ResolvedAssessmentHeaderPayload,
    ResolvedAssessmentRatingPayload,
    ResolvedLegalEntityRelationshipPayload,
    ResolvedRatingValuePayload,
    ResolvedUploadRowPayload,
)
from bulkupload.domain.model import BulkUploadLegalEntityRelationshipCommand

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bulkupload.domain.model import (
        AssessmentDefinition,
        AssessmentHeaderResolutionError,
        EntityReference,
        LegalEntityRelationshipResolutionError,
        RatingResolutionError,
        RatingSchemeItem,
        ResolveBulkUploadLegalEntityRelationshipParameters,
        ResolvedAssessmentHeader,
        ResolvedAssessmentRating,
        ResolvedRatingValue,
        ResolvedUploadRow,
    )

    type AnyResolutionError = (
        AssessmentHeaderResolutionError
        | LegalEntityRelationshipResolutionError
        | RatingResolutionError
    )


def parse_command(
    payload: Mapping[str, Any] | BulkUploadCommandPayload,
) -> BulkUploadLegalEntityRelationshipCommand:
    """Validate a raw command payload and convert it to the domain command."""

    model = (
        payload
        if isinstance(payload, BulkUploadCommandPayload)
        else BulkUploadCommandPayload.model_validate(payload)
    )
    return BulkUploadLegalEntityRelationshipCommand(
        legal_entity_relationship_kind_id=model.legal_entity_relationship_kind_id,
        input_string=model.input_string,
        upload_mode=model.upload_mode,
    )


def translate_resolution(
    result: ResolveBulkUploadLegalEntityRelationshipParameters,
) -> ResolveBulkUploadPayload:
    return ResolveBulkUploadPayload(
        upload_mode=result.upload_mode,
        input_string=result.input_string,
        assessment_headers=[
            _translate_header(column_index, header)
            for column_index, header in sorted(result.headers.items())
        ],
        resolved_rows=[_translate_row(row) for row in result.resolved_rows],
    )


def _translate_row(row: ResolvedUploadRow) -> ResolvedUploadRowPayload:
    relationship = row.legal_entity_relationship
    return ResolvedUploadRowPayload(
        row_number=row.row_number,
        status=row.status,
        legal_entity_relationship=ResolvedLegalEntityRelationshipPayload(
            legal_entity_reference=_translate_reference(relationship.legal_entity_reference),
            target_entity_reference=_translate_reference(relationship.target_entity_reference),
            comment=relationship.comment,
            relationship_id=relationship.relationship_id,
            errors=_translate_errors(relationship.errors),
            status=relationship.status,
        ),
        assessment_ratings=[_translate_assessment(item) for item in row.assessment_ratings],
    )


def _translate_header(
    column_index: int,
    header: ResolvedAssessmentHeader,
) -> ResolvedAssessmentHeaderPayload:
    return ResolvedAssessmentHeaderPayload(
        column_index=column_index,
        header_definition=_translate_item(header.definition),
        header_rating=_translate_item(header.rating),
        errors=_translate_errors(header.errors),
        status=header.status,
    )


def _translate_assessment(assessment: ResolvedAssessmentRating) -> ResolvedAssessmentRatingPayload:
    values = sorted(assessment.resolved_ratings, key=_rating_value_sort_key)
    return ResolvedAssessmentRatingPayload(
        column_index=assessment.column_index,
        resolved_ratings=[
            ResolvedRatingValuePayload(
                rating=_translate_item(value.rating),
                comment=value.comment,
                errors=_translate_errors(value.errors),
                status=value.status,
            )
            for value in values
        ],
    )


def _rating_value_sort_key(value: ResolvedRatingValue) -> tuple[bool, str]:
    if value.rating is None:
        return True, min((error.message for error in value.errors), default="")
    return False, value.rating.name.lower()


def _translate_reference(reference: EntityReference | None) -> EntityReferencePayload | None:
    if reference is None:
        return None
    return EntityReferencePayload(kind=reference.kind, id=reference.id, name=reference.name)


def _translate_item(
    item: AssessmentDefinition | RatingSchemeItem | None,
) -> NamedItemPayload | None:
    if item is None:
        return None
    return NamedItemPayload(id=item.id, name=item.name, external_id=item.external_id)


def _translate_errors(errors: Iterable[AnyResolutionError]) -> list[ResolutionErrorPayload]:
    return [
        ResolutionErrorPayload(error_code=error.code.value, error_message=error.message)
        for error in sorted(errors, key=lambda error: (error.code.value, error.message))
    ]
