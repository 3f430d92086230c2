"""Reference data owned by external collaborators.

These objects are read at the start of a resolution pass and never modified by
the engine. ``EntityReference`` compares on ``(kind, id)`` so a reference
returned by the alias lookup matches one stored on an existing relationship even
if the display names differ.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Cardinality, EntityKind


@dataclass(frozen=True, slots=True, kw_only=True)
class EntityReference:
    kind: EntityKind
    id: int
    name: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        label = self.name or str(self.id)
        return f"{self.kind.pretty_name} '{label}'"


@dataclass(frozen=True, slots=True, kw_only=True)
class AssessmentDefinition:
    id: int
    name: str
    rating_scheme_id: int
    cardinality: Cardinality = Cardinality.ZERO_ONE
    entity_kind: EntityKind = EntityKind.LEGAL_ENTITY_RELATIONSHIP
    external_id: str | None = None
    qualifier: EntityReference | None = None

    def applies_to(self, qualifier: EntityReference) -> bool:
        return self.qualifier is None or self.qualifier == qualifier


@dataclass(frozen=True, slots=True, kw_only=True)
class RatingSchemeItem:
    id: int
    rating_scheme_id: int
    name: str
    external_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LegalEntityRelationshipKind:
    id: int
    name: str
    target_kind: EntityKind

    @property
    def entity_reference(self) -> EntityReference:
        return EntityReference(
            kind=EntityKind.LEGAL_ENTITY_RELATIONSHIP_KIND,
            id=self.id,
            name=self.name,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class LegalEntityRelationship:
    id: int
    relationship_kind_id: int
    target_entity_reference: EntityReference
    legal_entity_reference: EntityReference

    @property
    def entity_reference(self) -> EntityReference:
        return EntityReference(kind=EntityKind.LEGAL_ENTITY_RELATIONSHIP, id=self.id)


@dataclass(frozen=True, slots=True, kw_only=True)
class AssessmentRating:
    entity_reference: EntityReference
    assessment_definition_id: int
    rating_id: int
