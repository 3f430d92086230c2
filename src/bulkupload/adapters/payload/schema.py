"""Pydantic models for upload command payloads and review payloads.

Field names follow the camelCase JSON used by upload clients.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bulkupload.domain.model import (
    BulkUploadMode,
    EntityKind,
    ResolutionStatus,
)


class PayloadBaseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BulkUploadCommandPayload(PayloadBaseModel):
    legal_entity_relationship_kind_id: int = Field(gt=0)
    input_string: str
    upload_mode: BulkUploadMode = BulkUploadMode.ADD_ONLY


class EntityReferencePayload(PayloadBaseModel):
    kind: EntityKind
    id: int
    name: str | None = None


class NamedItemPayload(PayloadBaseModel):
    id: int
    name: str
    external_id: str | None = None


class ResolutionErrorPayload(PayloadBaseModel):
    error_code: str
    error_message: str


class ResolvedAssessmentHeaderPayload(PayloadBaseModel):
    column_index: int
    header_definition: NamedItemPayload | None = None
    header_rating: NamedItemPayload | None = None
    errors: list[ResolutionErrorPayload] = Field(default_factory=list["ResolutionErrorPayload"])
    status: ResolutionStatus


class ResolvedLegalEntityRelationshipPayload(PayloadBaseModel):
    legal_entity_reference: EntityReferencePayload | None = None
    target_entity_reference: EntityReferencePayload | None = None
    comment: str | None = None
    relationship_id: int | None = None
    errors: list[ResolutionErrorPayload] = Field(default_factory=list["ResolutionErrorPayload"])
    status: ResolutionStatus


class ResolvedRatingValuePayload(PayloadBaseModel):
    rating: NamedItemPayload | None = None
    comment: str | None = None
    errors: list[ResolutionErrorPayload] = Field(default_factory=list["ResolutionErrorPayload"])
    status: ResolutionStatus


class ResolvedAssessmentRatingPayload(PayloadBaseModel):
    column_index: int
    resolved_ratings: list[ResolvedRatingValuePayload] = Field(
        default_factory=list["ResolvedRatingValuePayload"]
    )


class ResolvedUploadRowPayload(PayloadBaseModel):
    row_number: int
    status: ResolutionStatus
    legal_entity_relationship: ResolvedLegalEntityRelationshipPayload
    assessment_ratings: list[ResolvedAssessmentRatingPayload] = Field(
        default_factory=list["ResolvedAssessmentRatingPayload"]
    )


class ResolveBulkUploadPayload(PayloadBaseModel):
    upload_mode: BulkUploadMode
    input_string: str
    assessment_headers: list[ResolvedAssessmentHeaderPayload] = Field(
        default_factory=list["ResolvedAssessmentHeaderPayload"]
    )
    resolved_rows: list[ResolvedUploadRowPayload] = Field(
        default_factory=list["ResolvedUploadRowPayload"]
    )
