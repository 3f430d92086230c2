"""SQLAlchemy adapter package for the bulk upload resolver."""

from __future__ import annotations

from .mappings import create_all_tables, metadata
from .repositories import (
    SqlAlchemyAliasLookup,
    SqlAlchemyAssessmentDefinitionRepository,
    SqlAlchemyAssessmentRatingRepository,
    SqlAlchemyLegalEntityRelationshipKindRepository,
    SqlAlchemyLegalEntityRelationshipRepository,
    SqlAlchemyRatingSchemeRepository,
)
from .unit_of_work import (
    SqlAlchemyReferenceDataUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAliasLookup",
    "SqlAlchemyAssessmentDefinitionRepository",
    "SqlAlchemyAssessmentRatingRepository",
    "SqlAlchemyLegalEntityRelationshipKindRepository",
    "SqlAlchemyLegalEntityRelationshipRepository",
    "SqlAlchemyRatingSchemeRepository",
    "SqlAlchemyReferenceDataUnitOfWork",
    "StartupError",
    "create_all_tables",
    "metadata",
    "shutdown",
    "startup",
]
