"""Upload command and the typed, error-annotated resolution results.

Every resolved value is frozen. Adding an error produces a copy through
``with_errors`` whose status is ERROR, since errors dominate existence.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from .enums import (
    AssessmentHeaderResolutionErrorCode,
    BulkUploadMode,
    LegalEntityResolutionErrorCode,
    RatingResolutionErrorCode,
    ResolutionStatus,
)
from .reference import AssessmentDefinition, EntityReference, RatingSchemeItem

if TYPE_CHECKING:
    from collections.abc import Mapping


def determine_status[TError](
    exists: bool,  # noqa: FBT001
    errors: frozenset[TError],
) -> ResolutionStatus:
    """ERROR if any error is present, otherwise EXISTING or NEW."""

    if errors:
        return ResolutionStatus.ERROR
    if exists:
        return ResolutionStatus.EXISTING
    return ResolutionStatus.NEW


@dataclass(frozen=True, slots=True, kw_only=True)
class BulkUploadLegalEntityRelationshipCommand:
    legal_entity_relationship_kind_id: int
    input_string: str
    upload_mode: BulkUploadMode = BulkUploadMode.ADD_ONLY


@dataclass(frozen=True, slots=True)
class RawRow:
    row_number: int
    cells: tuple[str, ...]

    def cell(self, index: int) -> str | None:
        return self.cells[index] if 0 <= index < len(self.cells) else None


# Errors ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AssessmentHeaderResolutionError:
    code: AssessmentHeaderResolutionErrorCode
    message: str


@dataclass(frozen=True, slots=True)
class LegalEntityRelationshipResolutionError:
    code: LegalEntityResolutionErrorCode
    message: str


@dataclass(frozen=True, slots=True)
class RatingResolutionError:
    code: RatingResolutionErrorCode
    message: str


# Resolved values -------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedAssessmentHeader:
    """What one assessment column reports on."""

    definition: AssessmentDefinition | None = None
    rating: RatingSchemeItem | None = None
    errors: frozenset[AssessmentHeaderResolutionError] = frozenset()
    # Only ERROR is meaningful for headers; NEW marks a usable column.
    status: ResolutionStatus = ResolutionStatus.NEW

    def __post_init__(self) -> None:
        if self.rating is not None and self.definition is None:
            raise ValueError("Header rating requires a header definition")

    @property
    def key(self) -> tuple[AssessmentDefinition | None, RatingSchemeItem | None]:
        return self.definition, self.rating

    def with_errors(self, *errors: AssessmentHeaderResolutionError) -> Self:
        return replace(self, errors=self.errors | frozenset(errors), status=ResolutionStatus.ERROR)


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedLegalEntityRelationship:
    legal_entity_reference: EntityReference | None = None
    target_entity_reference: EntityReference | None = None
    comment: str | None = None
    errors: frozenset[LegalEntityRelationshipResolutionError] = frozenset()
    status: ResolutionStatus = ResolutionStatus.NEW
    relationship_id: int | None = None

    def with_errors(self, *errors: LegalEntityRelationshipResolutionError) -> Self:
        return replace(self, errors=self.errors | frozenset(errors), status=ResolutionStatus.ERROR)


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedRatingValue:
    rating: RatingSchemeItem | None = None
    comment: str | None = None
    errors: frozenset[RatingResolutionError] = frozenset()
    status: ResolutionStatus = ResolutionStatus.NEW

    def with_errors(self, *errors: RatingResolutionError) -> Self:
        return replace(self, errors=self.errors | frozenset(errors), status=ResolutionStatus.ERROR)


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedAssessmentRating:
    column_index: int
    assessment_header: ResolvedAssessmentHeader
    resolved_ratings: frozenset[ResolvedRatingValue] = frozenset()

    @property
    def definition(self) -> AssessmentDefinition | None:
        return self.assessment_header.definition

    def with_rating_errors(self, *errors: RatingResolutionError) -> Self:
        return replace(
            self,
            resolved_ratings=frozenset(
                value.with_errors(*errors) for value in self.resolved_ratings
            ),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedUploadRow:
    row_number: int
    legal_entity_relationship: ResolvedLegalEntityRelationship
    assessment_ratings: tuple[ResolvedAssessmentRating, ...] = ()

    @property
    def status(self) -> ResolutionStatus:
        """Worst status across the relationship and its rating values."""

        statuses = {self.legal_entity_relationship.status}
        statuses.update(
            value.status
            for assessment in self.assessment_ratings
            for value in assessment.resolved_ratings
        )
        if ResolutionStatus.ERROR in statuses:
            return ResolutionStatus.ERROR
        return self.legal_entity_relationship.status


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolveBulkUploadLegalEntityRelationshipParameters:
    upload_mode: BulkUploadMode
    input_string: str
    resolved_rows: tuple[ResolvedUploadRow, ...] = ()
    # Read-only view keyed by column index, in column order.
    headers: Mapping[int, ResolvedAssessmentHeader] = field(
        default_factory=lambda: MappingProxyType[int, ResolvedAssessmentHeader]({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(sorted(self.headers.items()))))

    def row(self, row_number: int) -> ResolvedUploadRow | None:
        return next((row for row in self.resolved_rows if row.row_number == row_number), None)
