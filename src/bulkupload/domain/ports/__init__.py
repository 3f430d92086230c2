"""Domain port definitions for adapters."""

from __future__ import annotations

from .reference_data import (
    AliasLookup,
    AssessmentDefinitionRepository,
    AssessmentRatingRepository,
    LegalEntityRelationshipKindRepository,
    LegalEntityRelationshipRepository,
    RatingSchemeRepository,
)
from .unit_of_work import BulkUploadRepositories, ReferenceDataUnitOfWork

__all__ = [
    "AliasLookup",
    "AssessmentDefinitionRepository",
    "AssessmentRatingRepository",
    "BulkUploadRepositories",
    "LegalEntityRelationshipKindRepository",
    "LegalEntityRelationshipRepository",
    "RatingSchemeRepository",
    "ReferenceDataUnitOfWork",
]
