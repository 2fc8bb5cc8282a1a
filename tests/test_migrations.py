from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect
from sqlmodel import SQLModel

import backoffice.schema.full_schema  # noqa: F401

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "migrations"


def baseline_module():
    script = ScriptDirectory(str(MIGRATIONS_DIR))
    return script.get_revision(script.get_current_head()).module


@pytest.fixture
def migrated():
    engine = create_engine("sqlite://")
    module = baseline_module()
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            module.upgrade()
    yield engine, module
    engine.dispose()


def foreign_keys(table):
    return {(tuple(fk.parent.name for fk in c.elements), c.referred_table.name)
            for c in table.foreign_key_constraints}


def test_baseline_creates_every_model_table(migrated):
    engine, _ = migrated
    insp = inspect(engine)
    assert set(insp.get_table_names()) == set(SQLModel.metadata.tables)

    for name, table in SQLModel.metadata.tables.items():
        columns = {c["name"]: c for c in insp.get_columns(name)}
        assert set(columns) == {c.name for c in table.columns}, name
        for column in table.columns:
            if not column.primary_key:
                assert columns[column.name]["nullable"] == column.nullable, f"{name}.{column.name}"

        reflected = {(tuple(fk["constrained_columns"]), fk["referred_table"]) for fk in insp.get_foreign_keys(name)}
        assert reflected == foreign_keys(table), name


def test_baseline_indexes_and_unique_constraints(migrated):
    engine, _ = migrated
    insp = inspect(engine)

    indexes = {i["name"]: i for i in insp.get_indexes("users")}
    assert indexes["ix_users_email"]["unique"]
    indexes = {i["name"]: i for i in insp.get_indexes("stock")}
    assert {"ix_stock_store_id", "ix_stock_product_id", "ix_stock_warehouse_id"} <= set(indexes)
    assert "ix_customer_customer_group_id" in {i["name"] for i in insp.get_indexes("customer")}

    uniques = {tuple(u["column_names"]) for u in insp.get_unique_constraints("stock")}
    assert ("product_id", "warehouse_id") in uniques
    uniques = {tuple(u["column_names"]) for u in insp.get_unique_constraints("customer")}
    assert ("store_id", "email") in uniques


def test_baseline_downgrade_drops_everything(migrated):
    engine, module = migrated
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            module.downgrade()
    assert inspect(engine).get_table_names() == []
