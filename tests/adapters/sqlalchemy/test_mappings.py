from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import inspect, select

from bulkupload.adapters.sqlalchemy import create_all_tables, metadata
from bulkupload.adapters.sqlalchemy.mappings import assessment_definition_table, entity_table
from bulkupload.domain.model import Cardinality, EntityKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def test_create_all_tables_registers_reference_tables(sqlite_engine: Engine) -> None:
    create_all_tables(sqlite_engine)

    table_names = set(inspect(sqlite_engine).get_table_names())

    assert table_names >= {
        "entity",
        "entity_alias",
        "legal_entity_relationship_kind",
        "legal_entity_relationship",
        "assessment_definition",
        "rating_scheme_item",
        "assessment_rating",
    }
    assert table_names == set(metadata.tables)


def test_entity_primary_key_is_kind_and_id(sqlite_engine: Engine) -> None:
    pk = inspect(sqlite_engine).get_pk_constraint("entity")

    assert pk["constrained_columns"] == ["kind", "id"]


def test_enums_are_stored_by_name(sqlite_session: Session) -> None:
    row = sqlite_session.execute(
        select(assessment_definition_table.c.cardinality).where(
            assessment_definition_table.c.name == "Regions"
        )
    ).one()
    kinds = set(sqlite_session.execute(select(entity_table.c.kind)).scalars())

    assert row.cardinality is Cardinality.ZERO_MANY
    assert kinds == {EntityKind.LEGAL_ENTITY, EntityKind.APPLICATION}
