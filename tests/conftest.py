from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from bulkupload.adapters.sqlalchemy import create_all_tables
from bulkupload.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReferenceDataUnitOfWork,
    shutdown,
    startup,
)
from bulkupload.config import UploadFormatConfig
from tests.helpers.database import seed_reference_data
from tests.helpers.reference_data import make_repositories

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sqlalchemy.engine import Engine

    from bulkupload.domain.ports import BulkUploadRepositories


@pytest.fixture
def repositories() -> BulkUploadRepositories:
    return make_repositories()


@pytest.fixture
def format_config() -> UploadFormatConfig:
    return UploadFormatConfig()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def seeded_engine(sqlite_engine: Engine) -> Engine:
    seed_reference_data(sqlite_engine)
    return sqlite_engine


@pytest.fixture
def sqlite_session(seeded_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=seeded_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    seeded_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyReferenceDataUnitOfWork]]:
    startup(engine=seeded_engine, force=True)

    def factory() -> SqlAlchemyReferenceDataUnitOfWork:
        return SqlAlchemyReferenceDataUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
