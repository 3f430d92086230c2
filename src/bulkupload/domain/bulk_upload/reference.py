"""Per-pass snapshot of the reference data rows are resolved against.

Everything is fetched once, before the first row is looked at, and indexed into
plain mappings. Row resolution only reads from the snapshot.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bulkupload.domain.model import EntityKind, EntityReference

from .matching import TokenIndex, index_rating_items_by_scheme
from .rows import FixedColumn, column_values

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bulkupload.domain.model import (
        AssessmentDefinition,
        LegalEntityRelationshipKind,
        RawRow,
    )
    from bulkupload.domain.ports import BulkUploadRepositories

    from .matching import RatingIndexByScheme

log = getLogger(__name__)

type RelationshipKey = tuple[EntityReference, EntityReference]
type RatingKey = tuple[int, int]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReferenceData:
    relationship_kind: LegalEntityRelationshipKind
    definitions: TokenIndex[AssessmentDefinition]
    rating_items_by_scheme: RatingIndexByScheme
    target_lookup: Mapping[str, EntityReference]
    legal_entity_lookup: Mapping[str, EntityReference]
    # (target, legal entity) -> existing relationship
    existing_relationships: Mapping[RelationshipKey, EntityReference]
    # relationship id -> {(definition id, rating id)}
    existing_ratings_by_relationship: Mapping[int, frozenset[RatingKey]]

    def existing_relationship(
        self,
        target: EntityReference | None,
        legal_entity: EntityReference | None,
    ) -> EntityReference | None:
        if target is None or legal_entity is None:
            return None
        return self.existing_relationships.get((target, legal_entity))

    def existing_ratings_for(self, relationship_id: int | None) -> frozenset[RatingKey]:
        if relationship_id is None:
            return frozenset()
        return self.existing_ratings_by_relationship.get(relationship_id, frozenset())


def load_reference_data(
    relationship_kind: LegalEntityRelationshipKind,
    data_rows: Iterable[RawRow],
    *,
    repositories: BulkUploadRepositories,
) -> ReferenceData:
    rows = tuple(data_rows)
    kind_ref = relationship_kind.entity_reference

    definitions = [
        definition
        for definition in repositories.assessment_definitions.find_by_entity_kind(
            EntityKind.LEGAL_ENTITY_RELATIONSHIP
        )
        if definition.applies_to(kind_ref)
    ]
    rating_items = repositories.rating_schemes.get_all_rating_scheme_items()

    relationships = repositories.relationships.find_by_relationship_kind(relationship_kind.id)
    existing_relationships = {
        (rel.target_entity_reference, rel.legal_entity_reference): rel.entity_reference
        for rel in relationships
    }

    ratings = repositories.assessment_ratings.find_by_entity_kind(
        EntityKind.LEGAL_ENTITY_RELATIONSHIP,
        kind_ref,
    )
    ratings_by_relationship: defaultdict[int, set[RatingKey]] = defaultdict(set)
    for rating in ratings:
        if rating.entity_reference.kind is not EntityKind.LEGAL_ENTITY_RELATIONSHIP:
            continue
        ratings_by_relationship[rating.entity_reference.id].add(
            (rating.assessment_definition_id, rating.rating_id)
        )

    target_lookup = _lookup(
        repositories,
        relationship_kind.target_kind,
        column_values(rows, FixedColumn.ENTITY_IDENTIFIER),
    )
    legal_entity_lookup = _lookup(
        repositories,
        EntityKind.LEGAL_ENTITY,
        column_values(rows, FixedColumn.LEGAL_ENTITY_IDENTIFIER),
    )

    log.debug(
        "Loaded reference data for %s: definitions=%s, rating_items=%s, relationships=%s, "
        "ratings=%s, targets=%s, legal_entities=%s",
        kind_ref,
        len(definitions),
        len(rating_items),
        len(existing_relationships),
        len(ratings),
        len(target_lookup),
        len(legal_entity_lookup),
    )

    return ReferenceData(
        relationship_kind=relationship_kind,
        definitions=TokenIndex.build(definitions),
        rating_items_by_scheme=index_rating_items_by_scheme(rating_items),
        target_lookup=target_lookup,
        legal_entity_lookup=legal_entity_lookup,
        existing_relationships=existing_relationships,
        existing_ratings_by_relationship={
            rel_id: frozenset(keys) for rel_id, keys in ratings_by_relationship.items()
        },
    )


def _lookup(
    repositories: BulkUploadRepositories,
    kind: EntityKind,
    identifiers: frozenset[str],
) -> dict[str, EntityReference]:
    if not identifiers:
        return {}
    return dict(repositories.aliases.fetch_entity_reference_lookup_map(kind, identifiers))
