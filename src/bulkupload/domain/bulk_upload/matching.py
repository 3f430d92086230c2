"""Case-insensitive token matching against external ids and names.

A token matches an item's external id first and falls back to its name. The
same rule applies to header definitions, header ratings and rating cells.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bulkupload.domain.model import AssessmentDefinition, RatingSchemeItem


class Matchable(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def external_id(self) -> str | None: ...


@dataclass(frozen=True, slots=True)
class TokenIndex[TItem: Matchable]:
    by_external_id: Mapping[str, TItem]
    by_name: Mapping[str, TItem]

    @classmethod
    def build(cls, items: Iterable[TItem]) -> TokenIndex[TItem]:
        by_external_id: dict[str, TItem] = {}
        by_name: dict[str, TItem] = {}
        for item in items:
            if item.external_id:
                by_external_id.setdefault(item.external_id.strip().lower(), item)
            by_name.setdefault(item.name.strip().lower(), item)
        return cls(by_external_id=by_external_id, by_name=by_name)


type RatingIndexByScheme = Mapping[int, TokenIndex[RatingSchemeItem]]


def match_token[TItem: Matchable](token: str | None, index: TokenIndex[TItem]) -> TItem | None:
    key = (token or "").strip().lower()
    if not key:
        return None
    found = index.by_external_id.get(key)
    if found is not None:
        return found
    return index.by_name.get(key)


def index_rating_items_by_scheme(
    items: Iterable[RatingSchemeItem],
) -> dict[int, TokenIndex[RatingSchemeItem]]:
    grouped: defaultdict[int, list[RatingSchemeItem]] = defaultdict(list)
    for item in items:
        grouped[item.rating_scheme_id].append(item)
    return {scheme_id: TokenIndex.build(group) for scheme_id, group in grouped.items()}


def match_rating(
    token: str | None,
    definition: AssessmentDefinition,
    rating_items_by_scheme: RatingIndexByScheme,
) -> RatingSchemeItem | None:
    """Match ``token`` within the rating scheme of ``definition`` only."""

    index = rating_items_by_scheme.get(definition.rating_scheme_id)
    if index is None:
        return None
    return match_token(token, index)
