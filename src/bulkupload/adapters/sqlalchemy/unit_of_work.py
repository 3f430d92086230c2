"""Engine lifecycle and the read-only unit of work over reference data.

The resolver never writes. Sessions are opened without autoflush and every
scope ends in a rollback, so nothing a repository touches can leak into the
database.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from bulkupload.adapters.sqlalchemy.mappings import create_all_tables
from bulkupload.adapters.sqlalchemy.repositories import (
    SqlAlchemyAliasLookup,
    SqlAlchemyAssessmentDefinitionRepository,
    SqlAlchemyAssessmentRatingRepository,
    SqlAlchemyLegalEntityRelationshipKindRepository,
    SqlAlchemyLegalEntityRelationshipRepository,
    SqlAlchemyRatingSchemeRepository,
)
from bulkupload.config import get_database_config
from bulkupload.domain.ports import BulkUploadRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """The reference-data adapter is not started, already started, or has no open session."""


@dataclass(slots=True)
class _ReferenceStore:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def attach(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
            if engine is not None
            else None
        )

    def session_factory(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Reference data store not started; call "
                "bulkupload.adapters.sqlalchemy.startup() first."
            )
        return self.sessions


_STORE = _ReferenceStore()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Bind the adapter to ``engine`` (or a new one for ``database_uri``) and create tables.

    Without either argument the URI comes from ``get_database_config()``.
    """

    if _STORE.engine is not None and not force:
        raise StartupError("Reference data store already started; pass force=True to rebind.")

    bound = engine or create_engine(database_uri or get_database_config().uri, future=True)
    create_all_tables(bound)
    _STORE.attach(bound)
    return bound


def configured_engine() -> Engine | None:
    return _STORE.engine


def is_started() -> bool:
    return _STORE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine; safe to call when nothing is started."""

    if _STORE.engine is not None:
        _STORE.engine.dispose()
    _STORE.attach(None)


class SqlAlchemyReferenceDataUnitOfWork:
    """One session per ``with`` block, exposing the reference-data repositories."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STORE.session_factory()
        self._session: Session | None = None
        self._repositories: BulkUploadRepositories | None = None

    def __enter__(self) -> SqlAlchemyReferenceDataUnitOfWork:
        if self._session is not None:
            raise StartupError("Reference data unit of work is already open")
        self._session = self.session_factory()
        self._repositories = _build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        self._session = None
        self._repositories = None
        try:
            session.rollback()
        finally:
            session.close()
        return False

    @property
    def repositories(self) -> BulkUploadRepositories:
        if self._repositories is None:
            raise StartupError("Reference data unit of work is not open")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Reference data unit of work is not open")
        return self._session


def _build_repositories(session: Session) -> BulkUploadRepositories:
    return BulkUploadRepositories(
        relationship_kinds=SqlAlchemyLegalEntityRelationshipKindRepository(session),
        assessment_definitions=SqlAlchemyAssessmentDefinitionRepository(session),
        rating_schemes=SqlAlchemyRatingSchemeRepository(session),
        relationships=SqlAlchemyLegalEntityRelationshipRepository(session),
        assessment_ratings=SqlAlchemyAssessmentRatingRepository(session),
        aliases=SqlAlchemyAliasLookup(session),
    )


if TYPE_CHECKING:
    from bulkupload.domain.ports import ReferenceDataUnitOfWork

    _uow_check: ReferenceDataUnitOfWork = SqlAlchemyReferenceDataUnitOfWork()
