"""
Unit tests for the schema migration.

The revision is applied to an in-memory SQLite database and compared with the
ORM metadata.
"""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

from models.base import Base

MIGRATION_PATH = Path(__file__).resolve().parents[2] / "migrations" / "versions" / "8c1d2e7f4a10_create_messenger_tables.py"


def load_migration():
    module_spec = importlib.util.spec_from_file_location("create_messenger_tables", MIGRATION_PATH)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def connection():
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        yield conn
    engine.dispose()


def run(connection, step):
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        step()


class TestMessengerMigration:
    def test_is_root_revision(self):
        migration = load_migration()

        assert migration.revision == "8c1d2e7f4a10"
        assert migration.down_revision is None

    def test_upgrade_creates_model_tables(self, connection):
        migration = load_migration()

        run(connection, migration.upgrade)

        inspector = inspect(connection)
        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for table_name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(table_name)}
            assert columns == set(table.columns.keys()), table_name

    def test_upgrade_creates_membership_uniqueness(self, connection):
        migration = load_migration()

        run(connection, migration.upgrade)

        constraints = inspect(connection).get_unique_constraints("group_members")
        assert [c["column_names"] for c in constraints] == [["group_id", "user_id"]]

    def test_downgrade_drops_everything(self, connection):
        migration = load_migration()

        run(connection, migration.upgrade)
        run(connection, migration.downgrade)

        assert inspect(connection).get_table_names() == []
