# ==============================================
# Fixture
# ==============================================
#
# PURPOSE:
#   Load declarative YAML fixture files into the database and keep
#   the inserted rows around as model instances, addressable by name.
#
# FILE FORMAT:
# ------------
#   - model: User                 # registered model (class or table name)
#     rows:
#       - _id: doe                # optional, makes the row addressable
#         username: doe
#         email: doe@example.com
#         created_at: "{{ now }}"
#
#   Templates (whole-string values only):
#     {{ now }}                    → current UTC time
#     {{ $.User.doe.id }}          → field of a row loaded earlier
#
# CLASS: Fixture
# --------------
#   Constructor:
#   ------------
#   - __init__(db, registry, truncate_tables=False)
#
#   Methods:
#   --------
#   - load(directory, *filenames) -> None
#       Parse each file, ensure tables, (truncate), insert rows.
#
#   - row(name) -> instance | None
#       Look up "Model.row_id".
#
#   - must_row(name) -> instance
#       Same, but raise FixtureError if unknown.
#
# ==============================================

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from orm_explorer.models.model import ModelError, ModelRegistry, TableInfo, to_row

TEMPLATE_PATTERN = re.compile(r"^\{\{\s*(.+?)\s*\}\}$")


class FixtureError(Exception):
    """Error reading, validating or inserting fixture data."""
    pass


class Fixture:
    """
    Loads fixture files through a MySQLClient-like `db` object.

    Rows loaded under an `_id` stay available through row()/must_row()
    until their table is truncated by a later load().

    Cached instances hold the values that were inserted plus the generated
    primary key. Columns filled by a database default (created_at left
    unset) are not read back and stay at the model default.
    """

    def __init__(self, db, registry: ModelRegistry, truncate_tables: bool = False):
        self._db = db
        self._registry = registry
        self._truncate_tables = truncate_tables
        self._rows: Dict[str, Any] = {}

    def load(self, directory: Union[str, Path], *filenames: str) -> None:
        """
        Load one or more fixture files from directory.

        Args:
            directory: Directory containing the fixture files
            filenames: File names relative to directory

        Raises:
            FixtureError: On missing files, malformed documents,
                unknown models, columns or template expressions
        """
        directory = Path(directory)
        truncated = set()

        for filename in filenames:
            path = directory / filename
            documents = self._read(path)

            for document in documents:
                table = self._table_for(document, path)
                rows = document.get("rows") or []
                if not isinstance(rows, list):
                    raise FixtureError(f"{path}: 'rows' of {table.model.__name__} must be a list")

                self._db.ensure_table(table)
                if self._truncate_tables and table.name not in truncated:
                    self._db.truncate(table.name)
                    truncated.add(table.name)
                    self._forget(table)

                for raw in rows:
                    self._insert(table, raw, path)

            print(f"✓ Loaded fixtures from {path}")

    def row(self, name: str) -> Optional[Any]:
        return self._rows.get(name)

    def must_row(self, name: str) -> Any:
        if name not in self._rows:
            raise FixtureError(f"Fixture row {name!r} not found")
        return self._rows[name]

    def _forget(self, table: TableInfo) -> None:
        prefix = f"{table.model.__name__}."
        for name in [name for name in self._rows if name.startswith(prefix)]:
            del self._rows[name]

    def _read(self, path: Path) -> List[Dict[str, Any]]:
        if not path.exists():
            raise FixtureError(f"Fixture file not found: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise FixtureError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(doc, dict) for doc in data):
            raise FixtureError(f"{path}: expected a list of {{model, rows}} mappings")
        return data

    def _table_for(self, document: Dict[str, Any], path: Path) -> TableInfo:
        model_name = document.get("model")
        if not model_name:
            raise FixtureError(f"{path}: fixture entry without 'model'")
        try:
            return self._registry.get(model_name)
        except ModelError as e:
            raise FixtureError(f"{path}: {e}") from e

    def _insert(self, table: TableInfo, raw: Any, path: Path) -> None:
        if not isinstance(raw, dict):
            raise FixtureError(f"{path}: row of {table.model.__name__} must be a mapping")

        values = dict(raw)
        row_id = values.pop("_id", None)

        unknown = set(values) - set(table.column_names)
        if unknown:
            raise FixtureError(
                f"{path}: unknown column(s) for {table.model.__name__}: {', '.join(sorted(unknown))}"
            )

        values = {key: self._evaluate(value) for key, value in values.items()}
        try:
            instance = table.model(**values)
        except TypeError as e:
            raise FixtureError(f"{path}: cannot build {table.model.__name__}: {e}") from e

        last_id = self._db.insert(table.name, to_row(instance))
        pk = table.primary_key
        if pk is not None and pk.options.autoincrement and last_id:
            setattr(instance, pk.name, last_id)

        if row_id is not None:
            self._rows[f"{table.model.__name__}.{row_id}"] = instance

    def _evaluate(self, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        match = TEMPLATE_PATTERN.match(value)
        if match is None:
            return value

        expression = match.group(1)
        if expression == "now":
            return datetime.now(timezone.utc).replace(tzinfo=None)
        if expression.startswith("$."):
            parts = expression[2:].split(".")
            if len(parts) != 3:
                raise FixtureError(f"Bad row reference {expression!r}, expected $.Model.row_id.field")
            instance = self.must_row(f"{parts[0]}.{parts[1]}")
            if not hasattr(instance, parts[2]):
                raise FixtureError(f"Row {parts[0]}.{parts[1]} has no field {parts[2]!r}")
            return getattr(instance, parts[2])
        raise FixtureError(f"Unknown template expression {expression!r}")
