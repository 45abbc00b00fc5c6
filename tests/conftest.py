# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - FakeMySQLClient: in-memory stand-in for MySQLClient so fixture
#   loading and the demo run without a database server.
# - registry: ModelRegistry with the demo models registered.
# - app_config: AppConfig pointing at the repository's testdata/.
# ==============================================

from pathlib import Path

import pytest

from orm_explorer import config as config_module
from orm_explorer.config import AppConfig, FixtureConfig
from orm_explorer.models import DEMO_MODELS, ModelRegistry, from_row

TESTDATA_DIR = Path(__file__).parent.parent / "testdata"

CONFIG_ENV_VARS = (
    "MYSQL_HOST", "MYSQL_PORT", "MYSQL_USER", "MYSQL_PASSWORD", "MYSQL_DATABASE",
    "FIXTURE_DIR", "FIXTURE_FILE", "FIXTURE_TRUNCATE_TABLES",
    "DEMO_ITERATIONS", "MAPPER_MISMATCH_POLICY",
)


class FakeMySQLClient:
    """Records every call and keeps inserted rows per table in memory."""

    def __init__(self):
        self.tables = {}
        self.ensured = []
        self.truncated = []
        self.queries = []
        self.connected = False
        self._last_ids = {}

    def connect(self):
        self.connected = True

    def disconnect(self):
        self.connected = False

    def ensure_table(self, table):
        self.ensured.append(table.name)
        self.tables.setdefault(table.name, [])

    def truncate(self, table_name):
        self.truncated.append(table_name)
        self.tables[table_name] = []
        self._last_ids[table_name] = 0

    def insert(self, table_name, row):
        new_id = self._last_ids.get(table_name, 0) + 1
        self._last_ids[table_name] = new_id
        stored = dict(row)
        stored.setdefault("id", new_id)
        self.tables.setdefault(table_name, []).append(stored)
        return new_id

    def scan(self, query, params, model):
        # Mirrors the latest-users query: one row per user, created_at → updated_at
        self.queries.append(query)
        rows = [
            {"id": row["id"], "updated_at": row.get("created_at"), "row_num": 1}
            for row in self.tables.get("users", [])
        ]
        return [from_row(model, row) for row in rows]


@pytest.fixture
def fake_db():
    return FakeMySQLClient()


@pytest.fixture
def registry():
    reg = ModelRegistry()
    reg.register(*DEMO_MODELS)
    return reg


@pytest.fixture
def app_config():
    return AppConfig(fixtures=FixtureConfig(directory=str(TESTDATA_DIR)))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove config variables from the environment and drop the cached config."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config_instance", None)
    return monkeypatch
