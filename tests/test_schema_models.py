# ============================================================================
# SCHEMA MODEL TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Tests - Schema, table, column and patch models
# PURPOSE: Verify model invariants, lookups, mutation and copying
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Model Tests

Unit tests for the model layer:
- Column: defaults, foreign key detection, attribute comparison
- Table: column lookup, uniqueness, primary key, rename/replace
- Schema: table lookup, add/remove/rename, deep copy
- ColumnPatch: legal fields only, explicit-set semantics

Run with:
    pytest tests/test_schema_models.py -v
"""

import pytest
from pydantic import ValidationError

from core.contracts import ColumnType, DeleteRule
from core.errors import (
    DuplicateColumnError,
    DuplicateTableError,
    ImmutableAttributeError,
    NotFoundError,
    SchemaError,
)
from core.models import Column, ColumnPatch, Schema, Table


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def users():
    return Table(
        name="users",
        columns=[
            Column(name="id", type=ColumnType.BIG_INTEGER, is_primary_key=True, autoincrement=True),
            Column(name="email", type=ColumnType.STRING, is_unique=True),
            Column(name="name", type=ColumnType.STRING, is_nullable=True),
        ],
    )


@pytest.fixture
def posts():
    return Table(
        name="posts",
        columns=[
            Column(name="id", type=ColumnType.BIG_INTEGER, is_primary_key=True, autoincrement=True),
            Column(
                name="author_id",
                type=ColumnType.BIG_INTEGER,
                related_table_name="users",
                related_column_name="id",
            ),
        ],
    )


@pytest.fixture
def schema(users, posts):
    return Schema(tables=[users, posts])


# ============================================================================
# COLUMN TESTS
# ============================================================================

class TestColumn:
    def test_defaults(self):
        column = Column(name="title", type=ColumnType.STRING)
        assert column.is_primary_key is False
        assert column.autoincrement is False
        assert column.is_indexed is False
        assert column.is_nullable is False
        assert column.is_unique is False
        assert column.default_value is None
        assert column.is_foreign_key is False
        assert column.delete_rule is None

    def test_foreign_key_defaults_to_nullify(self, posts):
        author = posts.column_for_name("author_id")
        assert author.is_foreign_key is True
        assert author.delete_rule == DeleteRule.NULLIFY

    def test_explicit_delete_rule_kept(self):
        column = Column(
            name="owner_id",
            type=ColumnType.INTEGER,
            related_table_name="owners",
            related_column_name="id",
            delete_rule=DeleteRule.CASCADE,
        )
        assert column.delete_rule == DeleteRule.CASCADE

    def test_type_parsed_from_string(self):
        column = Column(name="payload", type="document")
        assert column.type == ColumnType.DOCUMENT

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Column(name="", type=ColumnType.STRING)

    def test_autoincrement_requires_integer_type(self):
        with pytest.raises(ValidationError, match="autoincrement requires an integer type"):
            Column(name="id", type=ColumnType.STRING, autoincrement=True)
        with pytest.raises(ValidationError):
            Column(name="seq", type=ColumnType.DOUBLE, autoincrement=True)

    def test_changed_attributes(self):
        a = Column(name="email", type=ColumnType.STRING)
        b = Column(name="email", type=ColumnType.STRING, is_indexed=True, default_value="''")
        assert a.changed_attributes(b) == ["is_indexed", "default_value"]
        assert a.differs_from(b)
        assert not a.differs_from(a.copy_deep())

    def test_name_is_not_a_compared_attribute(self):
        a = Column(name="email", type=ColumnType.STRING)
        b = Column(name="mail", type=ColumnType.STRING)
        assert not a.differs_from(b)

    def test_immutable_changes(self):
        a = Column(name="count", type=ColumnType.INTEGER)
        b = Column(name="count", type=ColumnType.BIG_INTEGER, autoincrement=True)
        assert a.immutable_changes(b) == ["type", "autoincrement"]


# ============================================================================
# TABLE TESTS
# ============================================================================

class TestTable:
    def test_column_for_name(self, users):
        assert users.column_for_name("email").is_unique is True
        assert users.column_for_name("missing") is None

    def test_lookup_is_case_sensitive(self, users):
        assert users.column_for_name("Email") is None

    def test_get_column_raises(self, users):
        with pytest.raises(NotFoundError) as exc_info:
            users.get_column("missing")
        assert exc_info.value.table_name == "users"
        assert exc_info.value.column_name == "missing"

    def test_primary_key(self, users, posts):
        assert users.primary_key == "id"
        assert [c.name for c in posts.foreign_key_columns] == ["author_id"]

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValidationError):
            Table(
                name="t",
                columns=[
                    Column(name="a", type=ColumnType.STRING),
                    Column(name="a", type=ColumnType.INTEGER),
                ],
            )

    def test_multiple_primary_keys_rejected(self):
        with pytest.raises(ValidationError):
            Table(
                name="t",
                columns=[
                    Column(name="a", type=ColumnType.INTEGER, is_primary_key=True),
                    Column(name="b", type=ColumnType.INTEGER, is_primary_key=True),
                ],
            )

    def test_unique_set_must_reference_columns(self):
        with pytest.raises(ValidationError):
            Table(
                name="t",
                columns=[Column(name="a", type=ColumnType.INTEGER)],
                unique_column_set=["a", "b"],
            )

    def test_add_column(self, users):
        users.add_column(Column(name="bio", type=ColumnType.STRING, is_nullable=True))
        assert users.column_names == ["id", "email", "name", "bio"]

    def test_add_duplicate_column_raises(self, users):
        with pytest.raises(DuplicateColumnError):
            users.add_column(Column(name="email", type=ColumnType.STRING))

    def test_add_second_primary_key_raises(self, users):
        with pytest.raises(SchemaError):
            users.add_column(Column(name="uuid", type=ColumnType.STRING, is_primary_key=True))

    def test_rename_column_updates_unique_set(self):
        table = Table(
            name="t",
            columns=[Column(name="a", type=ColumnType.INTEGER), Column(name="b", type=ColumnType.INTEGER)],
            unique_column_set=["a", "b"],
        )
        table.rename_column(table.column_for_name("a"), "z")
        assert table.column_names == ["z", "b"]
        assert table.unique_column_set == ["z", "b"]

    def test_rename_column_collision_raises(self, users):
        with pytest.raises(DuplicateColumnError):
            users.rename_column(users.column_for_name("name"), "email")
        assert users.column_for_name("name") is not None

    def test_replace_column_keeps_position(self, users):
        replacement = Column(name="email", type=ColumnType.STRING, is_indexed=True)
        users.replace_column(users.column_for_name("email"), replacement)
        assert users.column_names == ["id", "email", "name"]
        assert users.column_for_name("email").is_indexed is True

    def test_remove_column(self, users):
        users.remove_column(users.column_for_name("name"))
        assert users.column_names == ["id", "email"]


# ============================================================================
# SCHEMA TESTS
# ============================================================================

class TestSchema:
    def test_table_for_name(self, schema):
        assert schema.table_for_name("users").name == "users"
        assert schema.table_for_name("Users") is None

    def test_get_table_raises(self, schema):
        with pytest.raises(NotFoundError, match="Table missing does not exist"):
            schema.get_table("missing")

    def test_duplicate_tables_rejected(self, users):
        with pytest.raises(ValidationError):
            Schema(tables=[users, users.copy_deep()])

    def test_add_table(self, schema):
        schema.add_table(Table(name="tags"))
        assert schema.table_names == ["users", "posts", "tags"]

    def test_add_duplicate_table_raises(self, schema):
        with pytest.raises(DuplicateTableError) as exc_info:
            schema.add_table(Table(name="users"))
        assert exc_info.value.table_name == "users"
        assert schema.table_names == ["users", "posts"]

    def test_remove_table(self, schema):
        schema.remove_table(schema.table_for_name("posts"))
        assert schema.table_names == ["users"]

    def test_rename_table_cascades_foreign_keys(self, schema):
        schema.rename_table(schema.table_for_name("users"), "accounts")
        assert schema.table_names == ["accounts", "posts"]
        author = schema.table_for_name("posts").column_for_name("author_id")
        assert author.related_table_name == "accounts"

    def test_rename_table_cascades_self_reference(self):
        schema = Schema(tables=[
            Table(name="nodes", columns=[
                Column(name="id", type=ColumnType.INTEGER, is_primary_key=True),
                Column(name="parent_id", type=ColumnType.INTEGER, is_nullable=True,
                       related_table_name="nodes", related_column_name="id"),
            ]),
        ])
        schema.rename_table(schema.table_for_name("nodes"), "tree")
        parent = schema.table_for_name("tree").column_for_name("parent_id")
        assert parent.related_table_name == "tree"

    def test_rename_table_collision_raises(self, schema):
        with pytest.raises(DuplicateTableError):
            schema.rename_table(schema.table_for_name("users"), "posts")
        assert schema.table_names == ["users", "posts"]

    def test_from_schema_is_deep(self, schema):
        copy = Schema.from_schema(schema)
        copy.table_for_name("users").column_for_name("email").is_indexed = True
        copy.table_for_name("users").add_column(Column(name="bio", type=ColumnType.STRING))
        copy.add_table(Table(name="tags"))

        original_users = schema.table_for_name("users")
        assert original_users.column_for_name("email").is_indexed is False
        assert original_users.column_for_name("bio") is None
        assert schema.table_names == ["users", "posts"]

    def test_empty(self):
        assert Schema.empty().tables == []


# ============================================================================
# COLUMN PATCH TESTS
# ============================================================================

class TestColumnPatch:
    def test_changes_only_explicit_fields(self):
        patch = ColumnPatch(is_indexed=True)
        assert patch.changes() == {"is_indexed": True}

    def test_explicit_none_clears_default(self):
        patch = ColumnPatch(default_value=None)
        assert patch.changes() == {"default_value": None}

    def test_explicit_none_ignored_for_flags(self):
        patch = ColumnPatch(is_nullable=None, name=None)
        assert patch.changes() == {}
        assert patch.is_empty

    def test_immutable_fields_rejected(self):
        with pytest.raises(ValidationError):
            ColumnPatch(type=ColumnType.INTEGER)
        with pytest.raises(ValidationError):
            ColumnPatch(is_primary_key=True)
        with pytest.raises(ValidationError):
            ColumnPatch(related_table_name="other")

    def test_patch_is_frozen(self):
        patch = ColumnPatch(is_indexed=True)
        with pytest.raises(ValidationError):
            patch.is_indexed = False

    def test_apply_to_returns_copy(self):
        column = Column(name="email", type=ColumnType.STRING, default_value="'x'")
        patched = ColumnPatch(name="mail", is_unique=True, default_value=None).apply_to(column)

        assert patched.name == "mail"
        assert patched.is_unique is True
        assert patched.default_value is None
        assert column.name == "email"
        assert column.default_value == "'x'"

    def test_between(self):
        current = Column(name="email", type=ColumnType.STRING, is_nullable=True)
        target = Column(name="email", type=ColumnType.STRING, is_indexed=True, default_value="''")
        patch = ColumnPatch.between(current, target)
        assert patch.changes() == {
            "is_indexed": True,
            "default_value": "''",
            "is_nullable": False,
        }

    def test_between_clears_default(self):
        current = Column(name="status", type=ColumnType.STRING, default_value="'new'")
        target = Column(name="status", type=ColumnType.STRING)
        assert ColumnPatch.between(current, target).changes() == {"default_value": None}

    def test_between_rejects_immutable_change(self):
        current = Column(name="count", type=ColumnType.INTEGER)
        target = Column(name="count", type=ColumnType.STRING)
        with pytest.raises(ImmutableAttributeError) as exc_info:
            ColumnPatch.between(current, target)
        assert exc_info.value.attribute == "type"
