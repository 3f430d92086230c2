"""Interpret assessment column headers.

A header reads ``definition[/rating]``. The definition token is matched against
all applicable assessment definitions; the rating token only against the items
of that definition's rating scheme.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from bulkupload.domain.model import (
    AssessmentHeaderResolutionError,
    AssessmentHeaderResolutionErrorCode,
    ResolutionStatus,
    ResolvedAssessmentHeader,
)

from .matching import match_rating, match_token
from .rows import FIXED_COLUMN_COUNT

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulkupload.domain.model import AssessmentDefinition, RawRow

    from .matching import RatingIndexByScheme, TokenIndex

DUPLICATE_COLUMN_ERROR = AssessmentHeaderResolutionError(
    AssessmentHeaderResolutionErrorCode.DUPLICATE_COLUMN_HEADER,
    "There are multiple columns sharing this definition / rating value",
)

def parse_headers(
    header_row: RawRow,
    *,
    definitions: TokenIndex[AssessmentDefinition],
    rating_items_by_scheme: RatingIndexByScheme,
    separator: str = "/",
) -> dict[int, ResolvedAssessmentHeader]:
    """Resolve every assessment column of ``header_row``, keyed by column index."""

    if len(header_row.cells) <= FIXED_COLUMN_COUNT:
        return {}

    headers = {
        column_index: resolve_header(
            header,
            definitions=definitions,
            rating_items_by_scheme=rating_items_by_scheme,
            separator=separator,
        )
        for column_index, header in enumerate(header_row.cells)
        if column_index >= FIXED_COLUMN_COUNT
    }
    return assign_duplicate_header_errors(headers)

def resolve_header(
    header: str | None,
    *,
    definitions: TokenIndex[AssessmentDefinition],
    rating_items_by_scheme: RatingIndexByScheme,
    separator: str = "/",
) -> ResolvedAssessmentHeader:
    if not header or not header.strip():
        return _error_header(
            AssessmentHeaderResolutionErrorCode.NO_VALUE_PROVIDED,
            "Header assessment is not provided",
        )

    definition_token, _, rating_token = header.partition(separator)
    definition_token = definition_token.strip()
    rating_token = rating_token.strip()

    if not definition_token:
        return _error_header(
            AssessmentHeaderResolutionErrorCode.HEADER_DEFINITION_NOT_FOUND,
            "No assessment definition header provided",
        )

    definition = match_token(definition_token, definitions)
    if definition is None:
        return _error_header(
            AssessmentHeaderResolutionErrorCode.HEADER_DEFINITION_NOT_FOUND,
            "Could not identify an assessment definition with external id or name "
            f"'{definition_token}'",
        )

    if not rating_token:
        return ResolvedAssessmentHeader(definition=definition)

    rating = match_rating(rating_token, definition, rating_items_by_scheme)
    if rating is None:
        return ResolvedAssessmentHeader(definition=definition).with_errors(
            AssessmentHeaderResolutionError(
                AssessmentHeaderResolutionErrorCode.HEADER_RATING_NOT_FOUND,
                "Could not identify an assessment rating with external id or name "
                f"'{rating_token}'",
            )
        )

    return ResolvedAssessmentHeader(definition=definition, rating=rating)

def assign_duplicate_header_errors(
    headers: Mapping[int, ResolvedAssessmentHeader],
) -> dict[int, ResolvedAssessmentHeader]:
    """Flag every column whose (definition, rating) pair is shared with another column."""

    columns_by_key: defaultdict[object, list[int]] = defaultdict(list)
    for column_index, header in headers.items():
        if header.definition is None:
            continue
        columns_by_key[header.key].append(column_index)

    duplicates = {
        column_index
        for columns in columns_by_key.values()
        if len(columns) > 1
        for column_index in columns
    }

    return {
        column_index: header.with_errors(DUPLICATE_COLUMN_ERROR)
        if column_index in duplicates
        else header
        for column_index, header in headers.items()
    }


def _error_header(
    code: AssessmentHeaderResolutionErrorCode,
    message: str,
) -> ResolvedAssessmentHeader:
    return ResolvedAssessmentHeader(
        errors=frozenset({AssessmentHeaderResolutionError(code, message)}),
        status=ResolutionStatus.ERROR,
    )
