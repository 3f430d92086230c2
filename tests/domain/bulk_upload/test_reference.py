from __future__ import annotations

from dataclasses import replace

from bulkupload.domain.bulk_upload.matching import match_token
from bulkupload.domain.bulk_upload.reference import load_reference_data
from bulkupload.domain.model import AssessmentRating, EntityKind, EntityReference, RawRow
from tests.helpers.reference_data import (
    APP1,
    EXISTING_RELATIONSHIP,
    EXISTING_RISK_RATING,
    LE1,
    LOW,
    RISK,
    SUPPLIES,
    make_repositories,
)

ROWS = (RawRow(2, ("LE1", "APP-1", "")), RawRow(3, ("Unknown", "", "")))


def test_snapshot_indexes_existing_relationships_and_ratings() -> None:
    reference = load_reference_data(SUPPLIES, ROWS, repositories=make_repositories())

    assert reference.existing_relationship(APP1, LE1) == EXISTING_RELATIONSHIP.entity_reference
    assert reference.existing_relationship(LE1, APP1) is None
    assert reference.existing_relationship(None, LE1) is None
    assert reference.existing_ratings_for(EXISTING_RELATIONSHIP.id) == {(RISK.id, LOW.id)}
    assert reference.existing_ratings_for(None) == frozenset()
    assert reference.existing_ratings_for(999) == frozenset()


def test_snapshot_only_keeps_identifiers_found_by_lookup() -> None:
    reference = load_reference_data(SUPPLIES, ROWS, repositories=make_repositories())

    assert reference.legal_entity_lookup == {"LE1": LE1}
    assert reference.target_lookup == {"APP-1": APP1}


def test_snapshot_excludes_definitions_qualified_for_other_kinds() -> None:
    reference = load_reference_data(SUPPLIES, ROWS, repositories=make_repositories())

    assert match_token("Ownership", reference.definitions) is None
    assert match_token("RISK", reference.definitions) is RISK


class _UnfilteredRatings:
    def __init__(self, ratings: list[AssessmentRating]) -> None:
        self.ratings = ratings

    def find_by_entity_kind(
        self,
        kind: EntityKind,  # noqa: ARG002
        qualifier: EntityReference | None = None,  # noqa: ARG002
    ) -> list[AssessmentRating]:
        return self.ratings


def test_snapshot_ignores_ratings_on_other_entity_kinds() -> None:
    stray = AssessmentRating(
        entity_reference=EntityReference(kind=EntityKind.APPLICATION, id=EXISTING_RELATIONSHIP.id),
        assessment_definition_id=RISK.id,
        rating_id=LOW.id + 1,
    )
    repositories = replace(
        make_repositories(),
        assessment_ratings=_UnfilteredRatings([EXISTING_RISK_RATING, stray]),
    )

    reference = load_reference_data(SUPPLIES, ROWS, repositories=repositories)

    assert reference.existing_ratings_for(EXISTING_RELATIONSHIP.id) == {(RISK.id, LOW.id)}
