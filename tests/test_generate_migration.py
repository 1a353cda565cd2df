# ============================================================================
# MIGRATION GENERATOR CLI TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Tests - Command line tool
# PURPOSE: Verify the generator prints, writes and reports errors
# CREATED: 19 OCT 2026
# ============================================================================
"""
Migration Generator CLI Tests

Run with:
    pytest tests/test_generate_migration.py -v
"""

import logging
import sys

import pytest

from core.config import EmitterDefaults
from core.contracts import ColumnType
from core.models import Column, Schema, Table
from services import SchemaService
from tools.generate_migration import create_script, load_snapshot, main


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def snapshots(tmp_path):
    v1 = Schema(tables=[Table(name="users", columns=[
        Column(name="id", type=ColumnType.INTEGER, is_primary_key=True, autoincrement=True),
    ])])
    v2 = Schema.from_schema(v1)
    v2.get_table("users").add_column(Column(name="email", type=ColumnType.STRING, is_nullable=True))

    return (
        SchemaService.dump_file(v1, tmp_path / "v1.yaml"),
        SchemaService.dump_file(v2, tmp_path / "v2.yaml"),
    )


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["generate_migration.py", *args])
    main()


# ============================================================================
# TESTS
# ============================================================================

class TestGenerateMigration:
    def test_load_snapshot_dash_is_empty(self):
        assert load_snapshot("-").tables == []

    def test_create_script(self, snapshots):
        script = create_script(SchemaService.load_file(snapshots[1]), EmitterDefaults(schema_name="app"))
        assert script == (
            'CREATE TABLE "app"."users" ("id" SERIAL PRIMARY KEY NOT NULL, "email" TEXT NULL);\n'
        )

    def test_prints_migration(self, monkeypatch, capsys, snapshots):
        run_cli(monkeypatch, str(snapshots[0]), str(snapshots[1]), "--version", "2")
        out = capsys.readouterr().out
        assert "class Migration2(Migration):" in out
        assert "self.database.add_column(" in out

    def test_writes_migration(self, monkeypatch, capsys, snapshots, tmp_path):
        output_dir = tmp_path / "migrations"
        args = [str(snapshots[0]), str(snapshots[1]), "--version", "2", "--write", "--output-dir", str(output_dir)]

        run_cli(monkeypatch, *args)
        written = output_dir / "00000002_migration.py"
        assert "class Migration2(Migration):" in written.read_text()

        with pytest.raises(SystemExit):
            run_cli(monkeypatch, *args)
        assert "already exists" in capsys.readouterr().err

    def test_sql_mode(self, monkeypatch, capsys, snapshots):
        for name in ("SCHEMA_NAME", "SCHEMA_TEMPORARY_TABLES"):
            monkeypatch.delenv(name, raising=False)
        run_cli(monkeypatch, "-", str(snapshots[0]), "--sql")
        assert capsys.readouterr().out.startswith('CREATE TABLE "users"')

    def test_missing_snapshot(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit):
            run_cli(monkeypatch, "-", str(tmp_path / "absent.yaml"))
        assert "Could not load snapshot" in capsys.readouterr().err

    def test_create_script_temporary(self, snapshots):
        defaults = EmitterDefaults(schema_name="app", is_temporary=True)
        script = create_script(SchemaService.load_file(snapshots[1]), defaults)
        assert script.startswith('CREATE TEMPORARY TABLE "app"."users"')

    def test_sql_mode_temporary_flag(self, monkeypatch, capsys, snapshots):
        monkeypatch.delenv("SCHEMA_TEMPORARY_TABLES", raising=False)
        run_cli(monkeypatch, "-", str(snapshots[0]), "--sql", "--temporary", "--schema-name", "app")
        assert capsys.readouterr().out.startswith('CREATE TEMPORARY TABLE "app"."users"')

    def test_sql_mode_reads_environment(self, monkeypatch, capsys, snapshots):
        monkeypatch.setenv("SCHEMA_NAME", "env")
        monkeypatch.setenv("SCHEMA_TEMPORARY_TABLES", "true")
        run_cli(monkeypatch, "-", str(snapshots[0]), "--sql")
        assert capsys.readouterr().out.startswith('CREATE TEMPORARY TABLE "env"."users"')

    def test_malformed_yaml(self, monkeypatch, capsys, tmp_path):
        broken = tmp_path / "broken.yaml"
        broken.write_text("tables:\n  - columns: [}\n")
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "-", str(broken))
        assert exc_info.value.code == 1
        assert "Could not load snapshot" in capsys.readouterr().err
