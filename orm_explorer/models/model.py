# ==============================================
# Model Declarations & Registry
# ==============================================
#
# PURPOSE:
#   Describe how a dataclass maps onto a MySQL table: table name,
#   alias, and per-column options (primary key, autoincrement,
#   NOT NULL, UNIQUE, database default).
#
# WHY THIS FILE EXISTS:
#   Fixtures and queries need to know which table a model lives in,
#   how to create it, and which columns to leave to the database
#   (autoincrement ids, CURRENT_TIMESTAMP defaults). Keeping that
#   next to the dataclass avoids a separate schema file.
#
# DECLARING A MODEL:
# ------------------
#   @table("users", alias="u")
#   @dataclass
#   class User:
#       id: Optional[int] = column(None, pk=True, autoincrement=True)
#       username: str = column("", notnull=True)
#
# CLASSES:
# --------
# - ColumnOptions (dataclass)   → options attached to one dataclass field
# - ColumnInfo (dataclass)      → resolved column: name, SQL type, options
# - TableInfo (dataclass)       → resolved table: name, alias, columns, DDL
# - ModelRegistry               → name → TableInfo lookup
#
# FUNCTIONS:
# ----------
# - table(name, alias=None)     → class decorator
# - column(default, **options)  → dataclasses.field() with column options
# - to_row(instance) -> dict    → values to INSERT
# - from_row(model, row) -> instance
#
# ==============================================

import dataclasses
import types
import typing
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

_COLUMN_KEY = "orm_explorer.column"

# Python type → MySQL column type
SQL_TYPES = {
    bool: "BOOLEAN",
    int: "BIGINT",
    float: "DOUBLE",
    str: "VARCHAR(255)",
    datetime: "DATETIME(6)",
    date: "DATE",
    Decimal: "DECIMAL(20,6)",
    bytes: "BLOB",
}


class ModelError(ValueError):
    """Raised when a class cannot be used as a table-backed model."""
    pass


@dataclass(frozen=True)
class ColumnOptions:
    pk: bool = False
    autoincrement: bool = False
    notnull: bool = False
    unique: bool = False
    nullzero: bool = False  # zero value is written as NULL / left to the default
    sql_default: Optional[str] = None  # raw SQL expression, e.g. "CURRENT_TIMESTAMP(6)"
    sql_type: Optional[str] = None  # overrides the SQL_TYPES lookup


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    sql_type: str
    options: ColumnOptions
    nullable: bool

    def ddl(self) -> str:
        parts = [f"`{self.name}`", self.sql_type]
        parts.append("NULL" if self.nullable else "NOT NULL")
        if self.options.autoincrement:
            parts.append("AUTO_INCREMENT")
        if self.options.sql_default is not None:
            parts.append(f"DEFAULT {self.options.sql_default}")
        if self.options.unique:
            parts.append("UNIQUE")
        return " ".join(parts)


@dataclass(frozen=True)
class TableInfo:
    """Resolved table metadata for one registered model."""
    name: str
    alias: Optional[str]
    model: type
    columns: List[ColumnInfo]

    @property
    def primary_key(self) -> Optional[ColumnInfo]:
        for col in self.columns:
            if col.options.pk:
                return col
        return None

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def create_table_sql(self) -> str:
        """MySQL CREATE TABLE IF NOT EXISTS statement for this table."""
        columns_def = [col.ddl() for col in self.columns]
        pk = self.primary_key
        if pk is not None:
            columns_def.append(f"PRIMARY KEY (`{pk.name}`)")
        return f"CREATE TABLE IF NOT EXISTS `{self.name}` ({', '.join(columns_def)})"


def column(default: Any = dataclasses.MISSING, *, default_factory: Any = dataclasses.MISSING,
           pk: bool = False, autoincrement: bool = False, notnull: bool = False,
           unique: bool = False, nullzero: bool = False, sql_default: Optional[str] = None,
           sql_type: Optional[str] = None) -> Any:
    """
    Declare a dataclass field together with its column options.

    Args:
        default: Python-side default value
        default_factory: Python-side default factory
        pk: Column is the primary key
        autoincrement: Database generates the value
        notnull: Column is NOT NULL
        unique: Column carries a UNIQUE constraint
        nullzero: Zero values (0, "", None) are left to the database default
        sql_default: Raw SQL DEFAULT expression
        sql_type: Explicit SQL type, bypassing the Python type lookup
    """
    options = ColumnOptions(pk, autoincrement, notnull, unique, nullzero, sql_default, sql_type)
    return field(default=default, default_factory=default_factory, metadata={_COLUMN_KEY: options})


def table(name: str, alias: Optional[str] = None):
    """Class decorator marking a dataclass as stored in table `name`."""
    def decorate(cls):
        cls.__table_name__ = name
        cls.__table_alias__ = alias
        return cls
    return decorate


def _unwrap_optional(annotation: Any) -> tuple:
    # Optional[X] → (X, True); X → (X, False)
    if typing.get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0], True
    return annotation, False


def _resolve_table(model: type) -> TableInfo:
    if not dataclasses.is_dataclass(model) or not isinstance(model, type):
        raise ModelError(f"{model!r} is not a dataclass")
    name = getattr(model, "__table_name__", None)
    if not name:
        raise ModelError(f"{model.__name__} is not declared with @table(...)")

    hints = typing.get_type_hints(model)
    columns = []
    for f in dataclasses.fields(model):
        options = f.metadata.get(_COLUMN_KEY, ColumnOptions())
        python_type, optional = _unwrap_optional(hints.get(f.name, str))
        sql_type = options.sql_type or SQL_TYPES.get(python_type)
        if sql_type is None:
            raise ModelError(f"{model.__name__}.{f.name}: no SQL type for {python_type!r}")
        nullable = not (options.pk or options.notnull) and (optional or options.nullzero)
        columns.append(ColumnInfo(f.name, sql_type, options, nullable))

    return TableInfo(name, getattr(model, "__table_alias__", None), model, columns)


class ModelRegistry:
    """
    Keeps track of the models the program works with.

    Models can be looked up by class, class name or table name.
    """

    def __init__(self):
        self._tables: Dict[str, TableInfo] = {}

    def register(self, *models: type) -> None:
        for model in models:
            info = _resolve_table(model)
            self._tables[model.__name__] = info

    def get(self, model: Union[str, type]) -> TableInfo:
        key = model if isinstance(model, str) else model.__name__
        if key in self._tables:
            return self._tables[key]
        for info in self._tables.values():
            if info.name == key:
                return info
        raise ModelError(f"Model {key!r} is not registered")

    def __contains__(self, model: Union[str, type]) -> bool:
        try:
            self.get(model)
        except ModelError:
            return False
        return True

    def models(self) -> List[type]:
        return [info.model for info in self._tables.values()]


def _is_zero(value: Any) -> bool:
    return value is None or (not isinstance(value, bool) and value in (0, "", b""))


def to_row(instance: Any) -> Dict[str, Any]:
    """
    Column values to INSERT for a model instance.

    Autoincrement keys still at None and nullzero columns holding a zero
    value are left out so the database fills them in.
    """
    row = {}
    for f in dataclasses.fields(instance):
        options = f.metadata.get(_COLUMN_KEY, ColumnOptions())
        value = getattr(instance, f.name)
        if options.autoincrement and value is None:
            continue
        if options.nullzero and _is_zero(value):
            continue
        row[f.name] = value
    return row


def from_row(model: type, row: Dict[str, Any]) -> Any:
    """Build a model instance from a row dict, ignoring unknown columns."""
    known = {f.name for f in dataclasses.fields(model) if f.init}
    return model(**{key: value for key, value in row.items() if key in known})
