"""Ports for the reference data a resolution pass reads.

All ports are read-only. Adapters return fresh values on every call; the engine
snapshots them once per pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping, Sequence

    from bulkupload.domain.model import (
        AssessmentDefinition,
        AssessmentRating,
        EntityKind,
        EntityReference,
        LegalEntityRelationship,
        LegalEntityRelationshipKind,
        RatingSchemeItem,
    )


@runtime_checkable
class LegalEntityRelationshipKindRepository(Protocol):
    def get_by_id(self, kind_id: int) -> LegalEntityRelationshipKind | None: ...


@runtime_checkable
class AssessmentDefinitionRepository(Protocol):
    def find_by_entity_kind(self, kind: EntityKind) -> Sequence[AssessmentDefinition]: ...


@runtime_checkable
class RatingSchemeRepository(Protocol):
    def get_all_rating_scheme_items(self) -> Sequence[RatingSchemeItem]: ...


@runtime_checkable
class LegalEntityRelationshipRepository(Protocol):
    def find_by_relationship_kind(self, kind_id: int) -> Sequence[LegalEntityRelationship]: ...


@runtime_checkable
class AssessmentRatingRepository(Protocol):
    def find_by_entity_kind(
        self,
        kind: EntityKind,
        qualifier: EntityReference | None = None,
    ) -> Sequence[AssessmentRating]: ...


@runtime_checkable
class AliasLookup(Protocol):
    """Resolve free-text identifiers to canonical references.

    Identifiers missing from the returned mapping could not be resolved.
    """

    def fetch_entity_reference_lookup_map(
        self,
        kind: EntityKind,
        identifiers: Collection[str],
    ) -> Mapping[str, EntityReference]: ...
