# ============================================================================
# MIGRATION SYNTHESIZER TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Tests - Migration source generation
# PURPOSE: Verify statement order, determinism and executable output
# CREATED: 19 OCT 2026
# ============================================================================
"""
Migration Synthesizer Tests

Tests for:
- Create order (parents first) and delete order (children first)
- Column add/delete/alter statements
- Deterministic output
- Generated source runs and reaches the target schema
- Rejection of immutable attribute changes

Run with:
    pytest tests/test_migration_synthesizer.py -v
"""

import pytest

from core.config import MigrationDefaults
from core.contracts import ColumnType, DeleteRule
from core.errors import ImmutableAttributeError, InvalidTransitionError
from core.models import Column, Schema, Table
from core.schema import PostgreSQLCommandEmitter
from orchestrator import Migration, SchemaBuilder, load_migration_class, run_upgrade
from orchestrator.engine import MigrationSynthesizer, synthesize_migration
from orchestrator.migration import MigrationLoadError


# ============================================================================
# FIXTURES
# ============================================================================

def table_a():
    return Table(name="a", columns=[
        Column(name="id", type=ColumnType.BIG_INTEGER, is_primary_key=True, autoincrement=True),
        Column(name="label", type=ColumnType.STRING, default_value="'none'"),
    ])


def table_b():
    return Table(name="b", columns=[
        Column(name="id", type=ColumnType.BIG_INTEGER, is_primary_key=True, autoincrement=True),
        Column(
            name="a_id",
            type=ColumnType.BIG_INTEGER,
            related_table_name="a",
            related_column_name="id",
            delete_rule=DeleteRule.CASCADE,
        ),
    ], unique_column_set=["id", "a_id"])


@pytest.fixture
def linked():
    """B references A; B listed first so ordering must come from the graph."""
    return Schema(tables=[table_b(), table_a()])


def write_migration(directory, source, version=1):
    path = directory / MigrationDefaults().file_name(version)
    path.write_text(source)
    return path


@pytest.fixture
def upgrade(tmp_path):
    """Write source to a migration file, import it and run its upgrade."""
    def run(source, existing, emitter=None):
        return run_upgrade(load_migration_class(write_migration(tmp_path, source)), existing, emitter)
    return run


# ============================================================================
# ORDERING TESTS
# ============================================================================

class TestStatementOrder:
    def test_creates_parent_before_child(self, linked):
        source = synthesize_migration(Schema.empty(), linked, 1)
        assert source.index("name='a',\n") < source.index("name='b',\n")

    def test_deletes_child_before_parent(self, linked):
        source = synthesize_migration(linked, Schema.empty(), 2)
        assert "self.database.delete_table('b')" in source
        assert source.index("delete_table('b')") < source.index("delete_table('a')")

    def test_tables_before_columns(self):
        existing = Schema(tables=[table_a(), Table(name="old", columns=[
            Column(name="id", type=ColumnType.INTEGER),
        ])])
        target = Schema(tables=[table_a(), Table(name="new", columns=[
            Column(name="id", type=ColumnType.INTEGER),
        ])])
        target.get_table("a").add_column(Column(name="note", type=ColumnType.STRING, is_nullable=True))

        statements = MigrationSynthesizer().upgrade_statements(existing, target)
        assert "create_table" in statements[0]
        assert "delete_table('old')" in statements[1]
        assert "add_column" in statements[2]

    def test_column_statement_order(self):
        existing = Schema(tables=[Table(name="t", columns=[
            Column(name="gone", type=ColumnType.STRING),
            Column(name="kept", type=ColumnType.STRING),
        ])])
        target = Schema(tables=[Table(name="t", columns=[
            Column(name="kept", type=ColumnType.STRING, is_indexed=True),
            Column(name="fresh", type=ColumnType.STRING, is_nullable=True),
        ])])

        statements = MigrationSynthesizer().upgrade_statements(existing, target)
        assert len(statements) == 3
        assert "add_column" in statements[0] and "'fresh'" in statements[0]
        assert statements[1].strip() == "self.database.delete_column('t', 'gone')"
        assert "alter_column" in statements[2] and "ColumnPatch(is_indexed=True)" in statements[2]


# ============================================================================
# OUTPUT TESTS
# ============================================================================

class TestSourceOutput:
    def test_class_and_version(self, linked):
        source = synthesize_migration(Schema.empty(), linked, 7)
        assert "class Migration7(Migration):" in source
        assert "version = 7" in source

    def test_custom_class_prefix(self, linked):
        defaults = MigrationDefaults(class_prefix="Step")
        source = synthesize_migration(Schema.empty(), linked, 3, defaults)
        assert "class Step3(Migration):" in source

    def test_empty_difference_has_empty_upgrade(self, linked):
        source = synthesize_migration(linked, Schema.from_schema(linked), 4)
        assert "    def upgrade(self):\n        pass\n" in source

    def test_downgrade_and_seed_empty(self, linked):
        source = synthesize_migration(Schema.empty(), linked, 1)
        assert "    def downgrade(self):\n        pass\n" in source
        assert "    def seed(self):\n        pass\n" in source

    def test_only_non_default_attributes_written(self, linked):
        source = synthesize_migration(Schema.empty(), linked, 1)
        assert "Column(name='label', type=ColumnType.STRING, default_value=\"'none'\")" in source
        assert "delete_rule=DeleteRule.CASCADE" in source
        assert "unique_column_set=['id', 'a_id']" in source
        assert "is_indexed" not in source

    def test_deterministic(self, linked):
        target = Schema(tables=[table_a(), table_b(), Table(name="c", columns=[
            Column(name="b_id", type=ColumnType.BIG_INTEGER, related_table_name="b", related_column_name="id"),
        ])])
        first = synthesize_migration(linked, target, 5)
        second = synthesize_migration(Schema.from_schema(linked), Schema.from_schema(target), 5)
        assert first == second

    def test_backfill_placeholder(self, upgrade):
        existing = Schema(tables=[Table(name="t", columns=[
            Column(name="email", type=ColumnType.STRING, is_nullable=True),
        ])])
        target = Schema(tables=[Table(name="t", columns=[
            Column(name="email", type=ColumnType.STRING),
        ])])
        source = synthesize_migration(existing, target, 1)
        assert "initial_value=None,  # value for existing NULL rows" in source

        # Running it unedited is refused until someone supplies a value
        with pytest.raises(InvalidTransitionError):
            upgrade(source, existing)

    def test_immutable_change_rejected(self):
        existing = Schema(tables=[Table(name="t", columns=[
            Column(name="count", type=ColumnType.INTEGER),
        ])])
        target = Schema(tables=[Table(name="t", columns=[
            Column(name="count", type=ColumnType.BIG_INTEGER),
        ])])
        with pytest.raises(ImmutableAttributeError):
            synthesize_migration(existing, target, 1)

    def test_builder_entry_point(self, linked):
        assert SchemaBuilder.source_for_schema_upgrade(Schema.empty(), linked, 1) == (
            synthesize_migration(Schema.empty(), linked, 1)
        )


# ============================================================================
# EXECUTION TESTS
# ============================================================================

class TestGeneratedMigrationRuns:
    def test_create_from_empty(self, linked, upgrade):
        source = synthesize_migration(Schema.empty(), linked, 1)
        builder = upgrade(source, Schema.empty())
        assert builder.schema.difference_from(linked).has_differences is False

    def test_delete_everything(self, linked, upgrade):
        source = synthesize_migration(linked, Schema.empty(), 2)
        builder = upgrade(source, linked)
        assert builder.schema.tables == []

    def test_column_changes(self, upgrade):
        existing = Schema(tables=[table_a(), Table(name="profile", columns=[
            Column(name="id", type=ColumnType.INTEGER, is_primary_key=True),
            Column(name="bio", type=ColumnType.STRING, is_nullable=True),
            Column(name="legacy", type=ColumnType.STRING),
            Column(name="status", type=ColumnType.STRING, default_value="'new'"),
        ])])
        target = Schema(tables=[table_a(), Table(name="profile", columns=[
            Column(name="id", type=ColumnType.INTEGER, is_primary_key=True),
            Column(name="bio", type=ColumnType.STRING, is_nullable=True, is_indexed=True),
            Column(name="status", type=ColumnType.STRING, is_unique=True),
            Column(name="a_id", type=ColumnType.BIG_INTEGER, is_nullable=True,
                   related_table_name="a", related_column_name="id"),
        ])])

        source = synthesize_migration(existing, target, 3)
        builder = upgrade(source, existing)
        assert builder.schema.difference_from(target).has_differences is False

    def test_emits_postgres_commands(self, linked, upgrade):
        source = synthesize_migration(Schema.empty(), linked, 1)
        builder = upgrade(source, Schema.empty(), PostgreSQLCommandEmitter())
        assert builder.commands[0].startswith('CREATE TABLE "a"')
        assert builder.commands[1].startswith('CREATE TABLE "b"')
        assert builder.commands[2].endswith("ON DELETE CASCADE")

    def test_unique_set_change_is_noted(self, upgrade):
        existing = Schema(tables=[Table(name="t", columns=[
            Column(name="a", type=ColumnType.INTEGER),
            Column(name="b", type=ColumnType.INTEGER),
        ])])
        target = Schema(tables=[Table(name="t", columns=[
            Column(name="a", type=ColumnType.INTEGER),
            Column(name="b", type=ColumnType.INTEGER),
        ], unique_column_set=["a", "b"])])

        source = synthesize_migration(existing, target, 6)
        assert "        # t: unique column set changes from None to ['a', 'b']\n" in source
        assert "        pass\n\n    def downgrade" in source

        # Nothing to run; the note is for a human
        builder = upgrade(source, existing)
        assert builder.commands == []

    def test_unique_set_trimmed_by_column_delete_not_noted(self, upgrade):
        existing = Schema(tables=[Table(name="t", columns=[
            Column(name="a", type=ColumnType.INTEGER),
            Column(name="b", type=ColumnType.INTEGER),
            Column(name="c", type=ColumnType.INTEGER),
        ], unique_column_set=["a", "b", "c"])])
        target = Schema(tables=[Table(name="t", columns=[
            Column(name="a", type=ColumnType.INTEGER),
            Column(name="b", type=ColumnType.INTEGER),
        ], unique_column_set=["a", "b"])])

        source = synthesize_migration(existing, target, 7)
        assert "unique column set" not in source
        builder = upgrade(source, existing)
        assert builder.schema.difference_from(target).has_differences is False


# ============================================================================
# MIGRATION LOADING TESTS
# ============================================================================

class TestMigrationLoading:
    def test_loads_subclass(self, linked, tmp_path):
        path = write_migration(tmp_path, synthesize_migration(Schema.empty(), linked, 9), 9)
        cls = load_migration_class(path)
        assert issubclass(cls, Migration)
        assert cls.version == 9
        assert cls.__module__ == "00000009_migration"

    def test_accepts_string_path(self, linked, tmp_path):
        path = write_migration(tmp_path, synthesize_migration(Schema.empty(), linked, 2), 2)
        assert load_migration_class(str(path)).version == 2

    def test_file_without_migration(self, tmp_path):
        with pytest.raises(MigrationLoadError):
            load_migration_class(write_migration(tmp_path, "VALUE = 1\n"))

    def test_non_python_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("VALUE = 1\n")
        with pytest.raises(MigrationLoadError):
            load_migration_class(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_migration_class(tmp_path / "00000001_migration.py")

    def test_base_migration_is_noop(self, linked):
        builder = run_upgrade(Migration, linked)
        assert builder.schema.difference_from(linked).has_differences is False
        assert builder.commands == []
