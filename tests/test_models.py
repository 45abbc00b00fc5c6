# ==============================================
# Tests for Models Module
# ==============================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pytest

from orm_explorer.models import (
    ModelError,
    ModelRegistry,
    Product,
    User,
    UserActivity,
    column,
    from_row,
    table,
    to_row,
)


@table("tagged")
@dataclass
class Tagged:
    id: Optional[int] = column(None, pk=True, autoincrement=True)
    tags: list = field(default_factory=list)


@table("settings")
@dataclass
class Setting:
    key: str = column("", pk=True)
    value: Optional[str] = None
    payload: str = column("", sql_type="TEXT")


class TestRegistry:
    def test_lookup_by_class_name_and_table(self, registry):
        info = registry.get(User)
        assert registry.get("User") is info
        assert registry.get("users") is info
        assert info.name == "users"
        assert info.alias == "u"

    def test_contains(self, registry):
        assert "User" in registry
        assert "Product" not in registry

    def test_unknown_model(self, registry):
        with pytest.raises(ModelError):
            registry.get("Nope")

    def test_models(self, registry):
        assert registry.models() == [User]

    def test_reject_non_table_dataclass(self):
        with pytest.raises(ModelError, match="@table"):
            ModelRegistry().register(Product)

    def test_reject_non_dataclass(self):
        with pytest.raises(ModelError, match="not a dataclass"):
            ModelRegistry().register(object)

    def test_reject_unmapped_python_type(self):
        with pytest.raises(ModelError, match="no SQL type"):
            ModelRegistry().register(Tagged)


class TestCreateTableSql:
    def test_user_table(self, registry):
        sql = registry.get(User).create_table_sql()

        assert sql.startswith("CREATE TABLE IF NOT EXISTS `users` (")
        assert "`id` BIGINT NOT NULL AUTO_INCREMENT" in sql
        assert "`username` VARCHAR(255) NOT NULL" in sql
        assert "`email` VARCHAR(255) NOT NULL UNIQUE" in sql
        assert "`created_at` DATETIME(6) NULL DEFAULT CURRENT_TIMESTAMP(6)" in sql
        assert sql.endswith("PRIMARY KEY (`id`))")

    def test_optional_and_explicit_sql_type(self):
        registry = ModelRegistry()
        registry.register(Setting)
        info = registry.get("settings")

        assert info.primary_key.name == "key"
        sql = info.create_table_sql()
        assert "`value` VARCHAR(255) NULL" in sql
        assert "`payload` TEXT NOT NULL" in sql


class TestRows:
    def test_to_row_leaves_generated_columns_out(self):
        row = to_row(User(username="doe", email="doe@example.com", password="pw"))
        assert row == {"username": "doe", "email": "doe@example.com", "password": "pw"}

    def test_to_row_keeps_explicit_values(self):
        created = datetime(2024, 1, 2, 3, 4, 5)
        row = to_row(User(id=7, username="doe", email="e", password="p", created_at=created))
        assert row["id"] == 7
        assert row["created_at"] == created

    def test_from_row_ignores_unknown_columns(self):
        activity = from_row(UserActivity, {"id": 3, "updated_at": None, "row_num": 1})
        assert activity == UserActivity(id=3, updated_at=None)
