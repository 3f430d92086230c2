"""Public domain model surface."""

from __future__ import annotations

from bulkupload.domain.model.enums import (
    AssessmentHeaderResolutionErrorCode,
    BulkUploadMode,
    Cardinality,
    EntityKind,
    LegalEntityResolutionErrorCode,
    RatingResolutionErrorCode,
    ResolutionStatus,
)
from bulkupload.domain.model.reference import (
    AssessmentDefinition,
    AssessmentRating,
    EntityReference,
    LegalEntityRelationship,
    LegalEntityRelationshipKind,
    RatingSchemeItem,
)
from bulkupload.domain.model.upload import (
    AssessmentHeaderResolutionError,
    BulkUploadLegalEntityRelationshipCommand,
    LegalEntityRelationshipResolutionError,
    RatingResolutionError,
    RawRow,
    ResolveBulkUploadLegalEntityRelationshipParameters,
    ResolvedAssessmentHeader,
    ResolvedAssessmentRating,
    ResolvedLegalEntityRelationship,
    ResolvedRatingValue,
    ResolvedUploadRow,
    determine_status,
)

__all__ = [  # noqa: RUF022
    # enums
    "AssessmentHeaderResolutionErrorCode",
    "BulkUploadMode",
    "Cardinality",
    "EntityKind",
    "LegalEntityResolutionErrorCode",
    "RatingResolutionErrorCode",
    "ResolutionStatus",
    # reference data
    "AssessmentDefinition",
    "AssessmentRating",
    "EntityReference",
    "LegalEntityRelationship",
    "LegalEntityRelationshipKind",
    "RatingSchemeItem",
    # upload
    "BulkUploadLegalEntityRelationshipCommand",
    "RawRow",
    "determine_status",
    # errors
    "AssessmentHeaderResolutionError",
    "LegalEntityRelationshipResolutionError",
    "RatingResolutionError",
    # results
    "ResolvedAssessmentHeader",
    "ResolvedAssessmentRating",
    "ResolvedLegalEntityRelationship",
    "ResolvedRatingValue",
    "ResolvedUploadRow",
    "ResolveBulkUploadLegalEntityRelationshipParameters",
]
