# ==============================================
# MySQLClient
# ==============================================
#
# PURPOSE:
#   Manages the MySQL connection and every SQL statement the
#   program sends: creating model tables, truncating them for
#   fixtures, inserting rows, and running raw queries.
#
# WHY THIS CLASS EXISTS:
#   Fixture loading and the demo queries need a single place
#   that owns the connection and turns rows into dicts or model
#   instances. Nothing above this class touches PyMySQL directly.
#
# CLASS: MySQLClient
# ------------------
#   Stateful — holds the connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection. Create database if it doesn't exist.
#
#   - disconnect() -> None
#       Close connection cleanly.
#
#   - ensure_table(table: TableInfo) -> None
#       CREATE TABLE IF NOT EXISTS from the model's metadata.
#
#   - truncate(table_name: str) -> None
#
#   - insert(table_name: str, row: dict) -> int
#       Insert one row. Return the generated id (0 if none).
#
#   - execute(query: str, params: tuple = None) -> int
#       Execute a statement, return affected row count.
#
#   - fetch_all(query: str, params: tuple = None) -> list[dict]
#       Execute SELECT and return rows as dicts.
#
#   - scan(query: str, params, model) -> list[model]
#       fetch_all(), then build one model instance per row.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLClient(...) as db:` usage.
#
# ==============================================

from typing import Any, Dict, List, Optional

import pymysql
import pymysql.cursors

from orm_explorer.models.model import TableInfo, from_row


def quote_ident(name: str) -> str:
    """Quote an identifier (table / column / alias) for MySQL."""
    return "`" + name.replace("`", "``") + "`"


class MySQLClient:
    def __init__(self, host, port, user, password, database):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def connect(self) -> None:
        # Establish connection to MySQL, create database if it doesn't exist
        self.connection = pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            autocommit=False,
        )
        with self.connection.cursor() as cursor:
            cursor.execute(f"CREATE DATABASE IF NOT EXISTS {quote_ident(self.database)}")
            cursor.execute(f"USE {quote_ident(self.database)}")
        print(f"✓ Connected to MySQL {self.host}:{self.port}/{self.database}")

    def disconnect(self) -> None:
        # Close connection cleanly
        if self.connection:
            self.connection.close()
            self.connection = None

    def _require_connection(self):
        if self.connection is None:
            raise RuntimeError("Not connected to MySQL")
        return self.connection

    def ensure_table(self, table: TableInfo) -> None:
        self.execute(table.create_table_sql())

    def truncate(self, table_name: str) -> None:
        self.execute(f"TRUNCATE TABLE {quote_ident(table_name)}")

    def insert(self, table_name: str, row: Dict[str, Any]) -> int:
        connection = self._require_connection()
        with connection.cursor() as cursor:
            if row:
                column_names = ", ".join(quote_ident(col) for col in row)
                placeholders = ", ".join(["%s"] * len(row))
                query = f"INSERT INTO {quote_ident(table_name)} ({column_names}) VALUES ({placeholders})"
                cursor.execute(query, tuple(row.values()))
            else:
                cursor.execute(f"INSERT INTO {quote_ident(table_name)} () VALUES ()")
            last_id = cursor.lastrowid or 0
        connection.commit()
        return last_id

    def execute(self, query: str, params: Optional[tuple] = None) -> int:
        # Execute a raw SQL statement and commit
        connection = self._require_connection()
        try:
            with connection.cursor() as cursor:
                affected = cursor.execute(query, params) if params else cursor.execute(query)
            connection.commit()
        except pymysql.MySQLError:
            connection.rollback()
            raise
        return affected

    def fetch_all(self, query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        # Execute SELECT and return rows as dicts
        connection = self._require_connection()
        with connection.cursor(pymysql.cursors.DictCursor) as cursor:
            if params is not None:
                cursor.execute(query, params)
            else:
                cursor.execute(query)
            return list(cursor.fetchall())

    def scan(self, query: str, params: Optional[tuple], model: type) -> List[Any]:
        return [from_row(model, row) for row in self.fetch_all(query, params)]

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
