"""Unit-of-work abstraction around the reference-data repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from bulkupload.domain.ports.reference_data import (
        AliasLookup,
        AssessmentDefinitionRepository,
        AssessmentRatingRepository,
        LegalEntityRelationshipKindRepository,
        LegalEntityRelationshipRepository,
        RatingSchemeRepository,
    )


@dataclass(slots=True)
class BulkUploadRepositories:
    """Repositories consulted while resolving a legal entity relationship upload."""

    relationship_kinds: LegalEntityRelationshipKindRepository
    assessment_definitions: AssessmentDefinitionRepository
    rating_schemes: RatingSchemeRepository
    relationships: LegalEntityRelationshipRepository
    assessment_ratings: AssessmentRatingRepository
    aliases: AliasLookup


@runtime_checkable
class ReferenceDataUnitOfWork(Protocol):
    """Read-only session boundary; nothing is ever committed."""

    @property
    def repositories(self) -> BulkUploadRepositories: ...

    def __enter__(self) -> ReferenceDataUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...
