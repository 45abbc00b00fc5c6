# ==============================================
# Tests for Configuration Management
# ==============================================

import pytest

from orm_explorer.config import get_config
from orm_explorer.mapping import MismatchPolicy


class TestGetConfig:
    def test_defaults(self, clean_env):
        config = get_config(reload=True)

        assert config.mysql.host == "localhost"
        assert config.mysql.port == 3306
        assert config.mysql.database == "orm_explorer"
        assert config.fixtures.directory == "testdata"
        assert config.fixtures.filename == "fixtures.yaml"
        assert config.fixtures.truncate_tables is True
        assert config.demo.iterations == 100
        assert config.mapper.mismatch_policy is MismatchPolicy.SKIP

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("MYSQL_HOST", "db.internal")
        clean_env.setenv("MYSQL_PORT", "3307")
        clean_env.setenv("FIXTURE_TRUNCATE_TABLES", "no")
        clean_env.setenv("DEMO_ITERATIONS", "5")
        clean_env.setenv("MAPPER_MISMATCH_POLICY", "STRICT")

        config = get_config(reload=True)

        assert config.mysql.host == "db.internal"
        assert config.mysql.port == 3307
        assert config.fixtures.truncate_tables is False
        assert config.demo.iterations == 5
        assert config.mapper.mismatch_policy is MismatchPolicy.STRICT

    def test_singleton(self, clean_env):
        assert get_config() is get_config()

    @pytest.mark.parametrize("name, value", [
        ("MYSQL_PORT", "not-a-port"),
        ("MYSQL_PORT", "0"),
        ("DEMO_ITERATIONS", "-1"),
        ("FIXTURE_TRUNCATE_TABLES", "maybe"),
        ("MAPPER_MISMATCH_POLICY", "lenient"),
    ])
    def test_invalid_values(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            get_config(reload=True)
