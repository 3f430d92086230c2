"""SQLAlchemy table metadata for the reference data read during resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    Enum,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

from bulkupload.domain.model import Cardinality, EntityKind

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

EntityKindType = Enum(EntityKind, native_enum=False, length=40)

# Entities and aliases ---------------------------------------------------------

entity_table = Table(
    "entity",
    metadata,
    Column("kind", EntityKindType, primary_key=True),
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("external_id", String, nullable=True),
    Index("ix_entity_kind_external_id", "kind", "external_id"),
)

entity_alias_table = Table(
    "entity_alias",
    metadata,
    Column("kind", EntityKindType, primary_key=True),
    Column("entity_id", Integer, primary_key=True),
    Column("alias", String, primary_key=True),
    ForeignKeyConstraint(["kind", "entity_id"], ["entity.kind", "entity.id"]),
)

# Relationships ----------------------------------------------------------------

legal_entity_relationship_kind_table = Table(
    "legal_entity_relationship_kind",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("target_kind", EntityKindType, nullable=False),
)

legal_entity_relationship_table = Table(
    "legal_entity_relationship",
    metadata,
    Column("id", Integer, primary_key=True),
    Column(
        "relationship_kind_id",
        Integer,
        ForeignKey("legal_entity_relationship_kind.id"),
        nullable=False,
    ),
    Column("legal_entity_id", Integer, nullable=False),
    Column("target_kind", EntityKindType, nullable=False),
    Column("target_id", Integer, nullable=False),
    UniqueConstraint("relationship_kind_id", "legal_entity_id", "target_kind", "target_id"),
)

# Assessments ------------------------------------------------------------------

assessment_definition_table = Table(
    "assessment_definition",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("external_id", String, nullable=True),
    Column("entity_kind", EntityKindType, nullable=False),
    Column("rating_scheme_id", Integer, nullable=False),
    Column("cardinality", Enum(Cardinality, native_enum=False), nullable=False),
    Column("qualifier_kind", EntityKindType, nullable=True),
    Column("qualifier_id", Integer, nullable=True),
)

rating_scheme_item_table = Table(
    "rating_scheme_item",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("rating_scheme_id", Integer, nullable=False, index=True),
    Column("name", String, nullable=False),
    Column("external_id", String, nullable=True),
    Column("position", Integer, nullable=False, default=0),
)

assessment_rating_table = Table(
    "assessment_rating",
    metadata,
    Column("entity_kind", EntityKindType, primary_key=True),
    Column("entity_id", Integer, primary_key=True),
    Column(
        "assessment_definition_id",
        Integer,
        ForeignKey("assessment_definition.id"),
        primary_key=True,
    ),
    Column("rating_id", Integer, ForeignKey("rating_scheme_item.id"), primary_key=True),
    Column("comment", String, nullable=True),
)


def create_all_tables(engine: Engine) -> None:
    metadata.create_all(engine)
