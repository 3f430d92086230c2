"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    LEGAL_ENTITY = "LEGAL_ENTITY"
    LEGAL_ENTITY_RELATIONSHIP = "LEGAL_ENTITY_RELATIONSHIP"
    LEGAL_ENTITY_RELATIONSHIP_KIND = "LEGAL_ENTITY_RELATIONSHIP_KIND"

    # Kinds a legal entity can be related to:
    ACTOR = "ACTOR"
    APPLICATION = "APPLICATION"
    CHANGE_INITIATIVE = "CHANGE_INITIATIVE"
    MEASURABLE = "MEASURABLE"
    ORG_UNIT = "ORG_UNIT"
    PERSON = "PERSON"

    @property
    def pretty_name(self) -> str:
        return self.value.replace("_", " ").title()


class Cardinality(StrEnum):
    ZERO_ONE = "ZERO_ONE"
    ZERO_MANY = "ZERO_MANY"


class ResolutionStatus(StrEnum):
    """Outcome of resolving one unit of the upload."""

    NEW = "NEW"
    EXISTING = "EXISTING"
    ERROR = "ERROR"


class BulkUploadMode(StrEnum):
    """How the later apply step should treat ratings absent from the upload."""

    ADD_ONLY = "ADD_ONLY"
    REPLACE = "REPLACE"


class AssessmentHeaderResolutionErrorCode(StrEnum):
    NO_VALUE_PROVIDED = "NO_VALUE_PROVIDED"
    HEADER_DEFINITION_NOT_FOUND = "HEADER_DEFINITION_NOT_FOUND"
    HEADER_RATING_NOT_FOUND = "HEADER_RATING_NOT_FOUND"
    DUPLICATE_COLUMN_HEADER = "DUPLICATE_COLUMN_HEADER"


class LegalEntityResolutionErrorCode(StrEnum):
    LEGAL_ENTITY_NOT_FOUND = "LEGAL_ENTITY_NOT_FOUND"
    TARGET_ENTITY_NOT_FOUND = "TARGET_ENTITY_NOT_FOUND"


class RatingResolutionErrorCode(StrEnum):
    RATING_VALUE_NOT_FOUND = "RATING_VALUE_NOT_FOUND"
    MULTIPLE_RATINGS_DISALLOWED = "MULTIPLE_RATINGS_DISALLOWED"
