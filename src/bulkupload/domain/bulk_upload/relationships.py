"""Resolve the identity columns of a row into a legal entity relationship."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bulkupload.domain.model import (
    LegalEntityRelationshipResolutionError,
    LegalEntityResolutionErrorCode,
    ResolvedLegalEntityRelationship,
    determine_status,
)

from .rows import FixedColumn

if TYPE_CHECKING:
    from bulkupload.domain.model import RawRow

    from .reference import ReferenceData


def resolve_relationship(
    row: RawRow,
    *,
    reference: ReferenceData,
) -> ResolvedLegalEntityRelationship:
    """Look up both parties of the relationship and any existing link between them.

    Identifiers are trimmed, the comment is kept verbatim. A missing party is
    reported but does not stop the rest of the row from resolving.
    """

    legal_entity_identifier = (row.cell(FixedColumn.LEGAL_ENTITY_IDENTIFIER) or "").strip()
    target_identifier = (row.cell(FixedColumn.ENTITY_IDENTIFIER) or "").strip()
    comment = row.cell(FixedColumn.COMMENT) or None

    legal_entity_ref = reference.legal_entity_lookup.get(legal_entity_identifier)
    target_ref = reference.target_lookup.get(target_identifier)

    errors: list[LegalEntityRelationshipResolutionError] = []
    if legal_entity_ref is None:
        errors.append(
            LegalEntityRelationshipResolutionError(
                LegalEntityResolutionErrorCode.LEGAL_ENTITY_NOT_FOUND,
                f"Legal entity '{legal_entity_identifier}' cannot be identified",
            )
        )
    if target_ref is None:
        target_kind = reference.relationship_kind.target_kind
        errors.append(
            LegalEntityRelationshipResolutionError(
                LegalEntityResolutionErrorCode.TARGET_ENTITY_NOT_FOUND,
                f"{target_kind.pretty_name} '{target_identifier}' cannot be identified",
            )
        )

    existing = reference.existing_relationship(target_ref, legal_entity_ref)
    relationship_id = existing.id if existing is not None else None
    resolution_errors = frozenset(errors)

    return ResolvedLegalEntityRelationship(
        legal_entity_reference=legal_entity_ref,
        target_entity_reference=target_ref,
        comment=comment,
        errors=resolution_errors,
        status=determine_status(relationship_id is not None, resolution_errors),
        relationship_id=relationship_id,
    )
