from __future__ import annotations

from bulkupload.domain.bulk_upload.headers import parse_headers
from bulkupload.domain.bulk_upload.matching import TokenIndex, index_rating_items_by_scheme
from bulkupload.domain.bulk_upload.ratings import (
    MULTIPLE_RATINGS_ERROR,
    resolve_assessments,
)
from bulkupload.domain.model import (
    RatingResolutionErrorCode,
    RawRow,
    ResolutionStatus,
    ResolvedAssessmentRating,
    ResolvedRatingValue,
)
from tests.helpers.reference_data import (
    AMER,
    APAC,
    EMEA,
    HIGH,
    LOW,
    MEDIUM,
    REGIONS,
    RISK,
)

DEFINITIONS = TokenIndex.build([RISK, REGIONS])
RATINGS = index_rating_items_by_scheme([LOW, MEDIUM, HIGH, EMEA, APAC, AMER])


def _resolve(
    headers: tuple[str, ...],
    cells: tuple[str, ...],
    *,
    existing: frozenset[tuple[int, int]] = frozenset(),
    list_separator: str = ";",
) -> tuple[ResolvedAssessmentRating, ...]:
    fixed = ("LegalEntity", "Target", "Comment")
    parsed = parse_headers(
        RawRow(1, (*fixed, *headers)),
        definitions=DEFINITIONS,
        rating_items_by_scheme=RATINGS,
    )
    return resolve_assessments(
        parsed,
        RawRow(2, ("LE1", "APP-1", "", *cells)),
        existing_ratings=existing,
        rating_items_by_scheme=RATINGS,
        list_separator=list_separator,
    )


def _only_value(assessment: ResolvedAssessmentRating) -> ResolvedRatingValue:
    (value,) = assessment.resolved_ratings
    return value


def test_rating_column_affirmation_has_no_comment() -> None:
    (assessment,) = _resolve(("RiskRating/Low",), ("Y",))

    value = _only_value(assessment)
    assert assessment.column_index == 3
    assert value.rating is LOW
    assert value.comment is None
    assert value.status is ResolutionStatus.NEW


def test_rating_column_affirmation_is_case_insensitive() -> None:
    (assessment,) = _resolve(("RiskRating/Low",), (" x ",))

    assert _only_value(assessment).comment is None


def test_rating_column_text_becomes_comment() -> None:
    (assessment,) = _resolve(("RiskRating/High",), ("escalated by audit",))

    value = _only_value(assessment)
    assert value.rating is HIGH
    assert value.comment == "escalated by audit"


def test_rating_column_existing_rating() -> None:
    (assessment,) = _resolve(("RiskRating/Low",), ("x",), existing=frozenset({(RISK.id, LOW.id)}))

    assert _only_value(assessment).status is ResolutionStatus.EXISTING


def test_existing_check_uses_definition_and_rating() -> None:
    (assessment,) = _resolve(
        ("RiskRating/Low",),
        ("x",),
        existing=frozenset({(REGIONS.id, LOW.id), (RISK.id, MEDIUM.id)}),
    )

    assert _only_value(assessment).status is ResolutionStatus.NEW


def test_empty_cell_yields_no_values() -> None:
    (rating_column, definition_column) = _resolve(("RiskRating/Low", "Regions"), ("", "  "))

    assert rating_column.resolved_ratings == frozenset()
    assert definition_column.resolved_ratings == frozenset()


def test_cells_beyond_row_length_are_omitted() -> None:
    assessments = _resolve(("RiskRating/Low", "Regions"), ("Y",))

    assert [assessment.column_index for assessment in assessments] == [3]


def test_unresolved_headers_are_skipped() -> None:
    assessments = _resolve(("Unknown", "", "Regions"), ("Y", "Y", "EMEA"))

    assert [assessment.column_index for assessment in assessments] == [5]


def test_definition_column_resolves_each_token() -> None:
    (assessment,) = _resolve(("Regions",), ("EMEA; apac ;;amer",))

    assert {value.rating for value in assessment.resolved_ratings} == {EMEA, APAC, AMER}
    assert all(value.status is ResolutionStatus.NEW for value in assessment.resolved_ratings)


def test_definition_column_reports_unmatched_tokens_individually() -> None:
    (assessment,) = _resolve(("Regions",), ("EMEA;Mars;Venus",))

    errors = {
        error.message: error.code
        for value in assessment.resolved_ratings
        for error in value.errors
    }
    assert errors == {
        "Could not identify rating value from: 'Mars'": (
            RatingResolutionErrorCode.RATING_VALUE_NOT_FOUND
        ),
        "Could not identify rating value from: 'Venus'": (
            RatingResolutionErrorCode.RATING_VALUE_NOT_FOUND
        ),
    }
    matched = [value for value in assessment.resolved_ratings if value.rating is not None]
    assert [value.rating for value in matched] == [EMEA]
    assert matched[0].errors == frozenset()
    assert matched[0].status is ResolutionStatus.NEW


def test_definition_column_existing_values() -> None:
    (assessment,) = _resolve(
        ("Regions",),
        ("EMEA;APAC",),
        existing=frozenset({(REGIONS.id, EMEA.id)}),
    )

    statuses = {value.rating: value.status for value in assessment.resolved_ratings}
    assert statuses == {EMEA: ResolutionStatus.EXISTING, APAC: ResolutionStatus.NEW}


def test_header_with_unknown_rating_is_read_as_definition_column() -> None:
    (assessment,) = _resolve(("RiskRating/Purple",), ("High",))

    assert _only_value(assessment).rating is HIGH


def test_single_valued_definition_rejects_multiple_tokens() -> None:
    (assessment,) = _resolve(("RiskRating",), ("Low;High",))

    assert {value.rating for value in assessment.resolved_ratings} == {LOW, HIGH}
    for value in assessment.resolved_ratings:
        assert MULTIPLE_RATINGS_ERROR in value.errors
        assert value.status is ResolutionStatus.ERROR


def test_single_valued_definition_rejects_ratings_across_columns() -> None:
    low_column, high_column = _resolve(("RiskRating/Low", "RiskRating/High"), ("Y", "Y"))

    assert MULTIPLE_RATINGS_ERROR in _only_value(low_column).errors
    assert MULTIPLE_RATINGS_ERROR in _only_value(high_column).errors


def test_single_valued_definition_allows_one_rating_and_empty_columns() -> None:
    low_column, high_column = _resolve(("RiskRating/Low", "RiskRating/High"), ("Y", ""))

    assert _only_value(low_column).errors == frozenset()
    assert high_column.resolved_ratings == frozenset()


def test_same_rating_in_two_columns_is_not_multiple() -> None:
    rating_column, definition_column = _resolve(("RiskRating/Low", "RiskRating"), ("Y", "Low"))

    assert _only_value(rating_column).rating is LOW
    assert _only_value(definition_column).rating is LOW
    assert MULTIPLE_RATINGS_ERROR not in _only_value(rating_column).errors
    assert MULTIPLE_RATINGS_ERROR not in _only_value(definition_column).errors
    assert _only_value(definition_column).status is ResolutionStatus.NEW


def test_unmatched_tokens_do_not_count_towards_cardinality() -> None:
    (assessment,) = _resolve(("RiskRating",), ("Low;Purple",))

    low = next(value for value in assessment.resolved_ratings if value.rating is LOW)
    assert low.errors == frozenset()


def test_multi_valued_definition_allows_multiple_ratings() -> None:
    (assessment,) = _resolve(("Regions",), ("EMEA;APAC",))

    assert all(value.errors == frozenset() for value in assessment.resolved_ratings)


def test_custom_list_separator() -> None:
    (assessment,) = _resolve(("Regions",), ("EMEA|APAC",), list_separator="|")

    assert {value.rating for value in assessment.resolved_ratings} == {EMEA, APAC}
