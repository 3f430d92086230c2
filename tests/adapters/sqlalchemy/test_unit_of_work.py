from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, inspect

from bulkupload.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReferenceDataUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.reference_data import SUPPLIES

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyReferenceDataUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_from_database_uri_creates_tables() -> None:
    engine = startup(database_uri="sqlite+pysqlite:///:memory:")

    assert configured_engine() is engine
    assert "assessment_rating" in inspect(engine).get_table_names()


def test_shutdown_resets_state(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    assert is_started()

    shutdown()

    assert not is_started()
    assert configured_engine() is None


def test_unit_of_work_exposes_repositories(seeded_engine: Engine) -> None:
    startup(engine=seeded_engine, force=True)

    with SqlAlchemyReferenceDataUnitOfWork() as uow:
        kind = uow.repositories.relationship_kinds.get_by_id(SUPPLIES.id)

    assert kind == SUPPLIES


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyReferenceDataUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories

    with uow:
        assert uow.session is not None

    with pytest.raises(StartupError):
        _ = uow.session


def test_unit_of_work_does_not_swallow_exceptions(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError, match="boom"), SqlAlchemyReferenceDataUnitOfWork():
        raise RuntimeError("boom")
