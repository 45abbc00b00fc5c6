# ==============================================
# Tests for the command line interface
# ==============================================

import pytest
from click.testing import CliRunner

from orm_explorer import cli as cli_module
from orm_explorer import config as config_module
from orm_explorer.cli import cli
from orm_explorer.demo import ExplorerDemo
from orm_explorer.mapping import MismatchPolicy


@pytest.fixture
def runner(app_config, monkeypatch):
    monkeypatch.setattr(config_module, "_config_instance", app_config)
    return CliRunner()


@pytest.fixture
def offline_demo(monkeypatch, fake_db):
    """Make CLI commands build their ExplorerDemo on the in-memory database."""
    monkeypatch.setattr(cli_module, "ExplorerDemo", lambda config: ExplorerDemo(config, db=fake_db))
    return fake_db


class TestMapExample:
    def test_default_policy(self, runner):
        result = runner.invoke(cli, ["map-example"])

        assert result.exit_code == 0
        assert "'id': 'Lock'" in result.output
        assert "'price': 0.0" in result.output
        assert "correlation_number (missing)" in result.output

    def test_strict_policy_fails(self, runner):
        result = runner.invoke(cli, ["map-example", "--policy", "strict"])

        assert result.exit_code == 1
        assert "Cannot map 1 field(s)" in result.output

    def test_unknown_policy(self, runner):
        result = runner.invoke(cli, ["map-example", "--policy", "lenient"])
        assert result.exit_code == 2

    def test_goes_through_demo(self, runner, monkeypatch):
        seen = []
        original = ExplorerDemo.map_product

        def recording_map_product(self, policy=None):
            seen.append(policy)
            return original(self, policy)

        monkeypatch.setattr(ExplorerDemo, "map_product", recording_map_product)
        result = runner.invoke(cli, ["map-example", "--policy", "warn"])

        assert result.exit_code == 0
        assert seen == [MismatchPolicy.WARN]


class TestDatabaseCommands:
    def test_run(self, runner, offline_demo):
        result = runner.invoke(cli, ["run", "--iterations", "2"])

        assert result.exit_code == 0
        assert "2 round trip(s), 4 user row(s)" in result.output

    def test_run_rejects_negative_iterations(self, runner, offline_demo):
        result = runner.invoke(cli, ["run", "--iterations", "-1"])
        assert result.exit_code == 2

    def test_load_fixtures(self, runner, offline_demo):
        result = runner.invoke(cli, ["load-fixtures"])

        assert result.exit_code == 0
        assert len(offline_demo.tables["users"]) == 2

    def test_latest_users(self, runner, offline_demo):
        result = runner.invoke(cli, ["latest-users"])

        assert result.exit_code == 0
        assert "2 user(s)" in result.output

    def test_fixture_error_reported(self, runner, offline_demo, app_config, tmp_path):
        app_config.fixtures.directory = str(tmp_path)
        result = runner.invoke(cli, ["load-fixtures"])

        assert result.exit_code == 1
        assert "Fixture file not found" in result.output
