"""Read-only repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from collections import defaultdict
from itertools import batched
from typing import TYPE_CHECKING, Final

from sqlalchemy import func, select

from bulkupload.adapters.sqlalchemy.mappings import (
    assessment_definition_table,
    assessment_rating_table,
    entity_alias_table,
    entity_table,
    legal_entity_relationship_kind_table,
    legal_entity_relationship_table,
    rating_scheme_item_table,
)
from bulkupload.domain.model import (
    AssessmentDefinition,
    AssessmentRating,
    EntityKind,
    EntityReference,
    LegalEntityRelationship,
    LegalEntityRelationshipKind,
    RatingSchemeItem,
)

if TYPE_CHECKING:
    from collections.abc import Collection

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session

LOOKUP_BATCH_SIZE: Final[int] = 500


class SqlAlchemyLegalEntityRelationshipKindRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, kind_id: int) -> LegalEntityRelationshipKind | None:
        table = legal_entity_relationship_kind_table
        row = self.session.execute(select(table).where(table.c.id == kind_id)).one_or_none()
        if row is None:
            return None
        return LegalEntityRelationshipKind(id=row.id, name=row.name, target_kind=row.target_kind)


class SqlAlchemyAssessmentDefinitionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_entity_kind(self, kind: EntityKind) -> list[AssessmentDefinition]:
        table = assessment_definition_table
        stmt = select(table).where(table.c.entity_kind == kind).order_by(table.c.id)
        return [
            AssessmentDefinition(
                id=row.id,
                name=row.name,
                external_id=row.external_id,
                entity_kind=row.entity_kind,
                rating_scheme_id=row.rating_scheme_id,
                cardinality=row.cardinality,
                qualifier=(
                    EntityReference(kind=row.qualifier_kind, id=row.qualifier_id)
                    if row.qualifier_kind is not None and row.qualifier_id is not None
                    else None
                ),
            )
            for row in self.session.execute(stmt)
        ]


class SqlAlchemyRatingSchemeRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_all_rating_scheme_items(self) -> list[RatingSchemeItem]:
        table = rating_scheme_item_table
        stmt = select(table).order_by(table.c.rating_scheme_id, table.c.position, table.c.id)
        return [
            RatingSchemeItem(
                id=row.id,
                rating_scheme_id=row.rating_scheme_id,
                name=row.name,
                external_id=row.external_id,
            )
            for row in self.session.execute(stmt)
        ]


class SqlAlchemyLegalEntityRelationshipRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_relationship_kind(self, kind_id: int) -> list[LegalEntityRelationship]:
        rel = legal_entity_relationship_table
        legal_entity = entity_table.alias("legal_entity")
        target = entity_table.alias("target")
        stmt = (
            select(
                rel.c.id,
                rel.c.relationship_kind_id,
                rel.c.legal_entity_id,
                rel.c.target_kind,
                rel.c.target_id,
                legal_entity.c.name.label("legal_entity_name"),
                target.c.name.label("target_name"),
            )
            .outerjoin(
                legal_entity,
                (legal_entity.c.kind == EntityKind.LEGAL_ENTITY)
                & (legal_entity.c.id == rel.c.legal_entity_id),
            )
            .outerjoin(
                target,
                (target.c.kind == rel.c.target_kind) & (target.c.id == rel.c.target_id),
            )
            .where(rel.c.relationship_kind_id == kind_id)
            .order_by(rel.c.id)
        )
        return [
            LegalEntityRelationship(
                id=row.id,
                relationship_kind_id=row.relationship_kind_id,
                legal_entity_reference=EntityReference(
                    kind=EntityKind.LEGAL_ENTITY,
                    id=row.legal_entity_id,
                    name=row.legal_entity_name,
                ),
                target_entity_reference=EntityReference(
                    kind=row.target_kind,
                    id=row.target_id,
                    name=row.target_name,
                ),
            )
            for row in self.session.execute(stmt)
        ]


class SqlAlchemyAssessmentRatingRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_entity_kind(
        self,
        kind: EntityKind,
        qualifier: EntityReference | None = None,
    ) -> list[AssessmentRating]:
        rating = assessment_rating_table
        stmt = select(
            rating.c.entity_kind,
            rating.c.entity_id,
            rating.c.assessment_definition_id,
            rating.c.rating_id,
        ).where(rating.c.entity_kind == kind)

        if qualifier is not None:
            if (
                kind is not EntityKind.LEGAL_ENTITY_RELATIONSHIP
                or qualifier.kind is not EntityKind.LEGAL_ENTITY_RELATIONSHIP_KIND
            ):
                raise ValueError(f"Unsupported rating qualifier {qualifier.kind} for {kind}")
            rel = legal_entity_relationship_table
            stmt = stmt.join(rel, rel.c.id == rating.c.entity_id).where(
                rel.c.relationship_kind_id == qualifier.id
            )

        return [
            AssessmentRating(
                entity_reference=EntityReference(kind=row.entity_kind, id=row.entity_id),
                assessment_definition_id=row.assessment_definition_id,
                rating_id=row.rating_id,
            )
            for row in self.session.execute(stmt)
        ]


class SqlAlchemyAliasLookup:
    """Match identifiers case-insensitively on external id, then name, then alias."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def fetch_entity_reference_lookup_map(
        self,
        kind: EntityKind,
        identifiers: Collection[str],
    ) -> dict[str, EntityReference]:
        identifiers_by_key: defaultdict[str, list[str]] = defaultdict(list)
        for identifier in identifiers:
            key = identifier.strip().lower()
            if key:
                identifiers_by_key[key].append(identifier)
        if not identifiers_by_key:
            return {}

        resolved: dict[str, EntityReference] = {}
        for keys in batched(sorted(identifiers_by_key), LOOKUP_BATCH_SIZE):
            for stmt in self._lookup_statements(kind, keys):
                for row in self.session.execute(stmt):
                    reference = EntityReference(kind=kind, id=row.id, name=row.name)
                    resolved.setdefault(row.lookup_key, reference)

        return {
            identifier: resolved[key]
            for key, originals in identifiers_by_key.items()
            if key in resolved
            for identifier in originals
        }

    def _lookup_statements(
        self,
        kind: EntityKind,
        keys: tuple[str, ...],
    ) -> tuple[Select[tuple[int, str, str]], ...]:
        entity = entity_table
        alias = entity_alias_table

        def by_column(column: ColumnElement[str]) -> Select[tuple[int, str, str]]:
            key = func.lower(column)
            return (
                select(entity.c.id, entity.c.name, key.label("lookup_key"))
                .where(entity.c.kind == kind)
                .where(key.in_(keys))
                .order_by(entity.c.id)
            )

        alias_key = func.lower(alias.c.alias)
        by_alias = (
            select(entity.c.id, entity.c.name, alias_key.label("lookup_key"))
            .join(alias, (alias.c.kind == entity.c.kind) & (alias.c.entity_id == entity.c.id))
            .where(entity.c.kind == kind)
            .where(alias_key.in_(keys))
            .order_by(entity.c.id)
        )
        return by_column(entity.c.external_id), by_column(entity.c.name), by_alias
