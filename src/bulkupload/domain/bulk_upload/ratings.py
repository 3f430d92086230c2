"""Resolve the assessment cells of a row.

Two column styles exist. A ``definition/rating`` column asks "is this rating
selected?": any non-empty cell selects it, and text other than ``X``/``Y`` is kept
as the rating comment. A ``definition`` column holds one or more rating tokens
separated by ``;``.

Single-valued definitions may be spread over several columns, so the
cardinality check runs over the whole row once every column is resolved.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Final

from bulkupload.domain.model import (
    Cardinality,
    RatingResolutionError,
    RatingResolutionErrorCode,
    ResolvedAssessmentRating,
    ResolvedRatingValue,
    determine_status,
)

from .matching import match_rating

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bulkupload.domain.model import (
        AssessmentDefinition,
        RatingSchemeItem,
        RawRow,
        ResolvedAssessmentHeader,
    )

    from .matching import RatingIndexByScheme
    from .reference import RatingKey

AFFIRMATION_TOKENS: Final[frozenset[str]] = frozenset({"x", "y"})

MULTIPLE_RATINGS_ERROR = RatingResolutionError(
    RatingResolutionErrorCode.MULTIPLE_RATINGS_DISALLOWED,
    "There have been multiple ratings specified for a single value assessment definition",
)


def resolve_assessments(
    headers: Mapping[int, ResolvedAssessmentHeader],
    row: RawRow,
    *,
    existing_ratings: frozenset[RatingKey],
    rating_items_by_scheme: RatingIndexByScheme,
    list_separator: str = ";",
) -> tuple[ResolvedAssessmentRating, ...]:
    """Resolve each assessment column of ``row`` that has a usable header."""

    assessments: list[ResolvedAssessmentRating] = []
    for column_index, header in sorted(headers.items()):
        definition = header.definition
        cell = row.cell(column_index)
        if definition is None or cell is None:
            continue

        value = cell.strip()
        if header.rating is not None and value:
            resolved = _resolve_rating_column(header.rating, definition, value, existing_ratings)
        else:
            resolved = _resolve_definition_column(
                definition,
                value,
                existing_ratings,
                rating_items_by_scheme=rating_items_by_scheme,
                list_separator=list_separator,
            )
        assessments.append(
            ResolvedAssessmentRating(
                column_index=column_index,
                assessment_header=header,
                resolved_ratings=resolved,
            )
        )

    return assign_disallowed_multiple_ratings_errors(assessments)


def assign_disallowed_multiple_ratings_errors(
    assessments: Iterable[ResolvedAssessmentRating],
) -> tuple[ResolvedAssessmentRating, ...]:
    """Flag single-valued definitions that received more than one distinct rating."""

    assessments = tuple(assessments)
    ratings_by_definition: defaultdict[AssessmentDefinition, set[RatingSchemeItem]] = (
        defaultdict(set)
    )
    for assessment in assessments:
        definition = assessment.definition
        if definition is None or definition.cardinality is not Cardinality.ZERO_ONE:
            continue
        ratings_by_definition[definition].update(
            value.rating for value in assessment.resolved_ratings if value.rating is not None
        )

    disallowed = {
        definition for definition, ratings in ratings_by_definition.items() if len(ratings) > 1
    }
    if not disallowed:
        return assessments

    return tuple(
        assessment.with_rating_errors(MULTIPLE_RATINGS_ERROR)
        if assessment.definition in disallowed
        else assessment
        for assessment in assessments
    )


def _resolve_rating_column(
    rating: RatingSchemeItem,
    definition: AssessmentDefinition,
    value: str,
    existing_ratings: frozenset[RatingKey],
) -> frozenset[ResolvedRatingValue]:
    comment = None if value.lower() in AFFIRMATION_TOKENS else value
    exists = (definition.id, rating.id) in existing_ratings
    return frozenset(
        {
            ResolvedRatingValue(
                rating=rating,
                comment=comment,
                status=determine_status(exists, frozenset()),
            )
        }
    )


def _resolve_definition_column(
    definition: AssessmentDefinition,
    value: str,
    existing_ratings: frozenset[RatingKey],
    *,
    rating_items_by_scheme: RatingIndexByScheme,
    list_separator: str,
) -> frozenset[ResolvedRatingValue]:
    tokens = (token.strip() for token in value.split(list_separator))
    return frozenset(
        _resolve_rating_token(
            token,
            definition,
            existing_ratings,
            rating_items_by_scheme=rating_items_by_scheme,
        )
        for token in tokens
        if token
    )


def _resolve_rating_token(
    token: str,
    definition: AssessmentDefinition,
    existing_ratings: frozenset[RatingKey],
    *,
    rating_items_by_scheme: RatingIndexByScheme,
) -> ResolvedRatingValue:
    rating = match_rating(token, definition, rating_items_by_scheme)
    if rating is None:
        errors = frozenset(
            {
                RatingResolutionError(
                    RatingResolutionErrorCode.RATING_VALUE_NOT_FOUND,
                    f"Could not identify rating value from: '{token}'",
                )
            }
        )
        return ResolvedRatingValue(
            errors=errors,
            status=determine_status(False, errors),  # noqa: FBT003
        )

    exists = (definition.id, rating.id) in existing_ratings
    return ResolvedRatingValue(rating=rating, status=determine_status(exists, frozenset()))
