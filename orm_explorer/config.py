# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MySQLConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 3306)
#     user: str          (default "root")
#     password: str      (default "root")
#     database: str      (default "orm_explorer")
#
# - FixtureConfig (dataclass)
#     directory: str        (default "testdata")
#     filename: str         (default "fixtures.yaml")
#     truncate_tables: bool (default True)
#
# - DemoConfig (dataclass)
#     iterations: int    (default 100)
#
# - MapperConfig (dataclass)
#     mismatch_policy: MismatchPolicy (default SKIP)
#
# - AppConfig (dataclass)
#     mysql, fixtures, demo, mapper
#
# FUNCTION:
# ---------
# - get_config(reload=False) -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# USAGE:
# ------
#   from orm_explorer.config import get_config
#   config = get_config()
#   print(config.mysql.host)
#   print(config.demo.iterations)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from orm_explorer.mapping import MismatchPolicy

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class MySQLConfig:
    """MySQL database configuration."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "orm_explorer"


@dataclass
class FixtureConfig:
    """Where fixture files live and how they are loaded."""
    directory: str = "testdata"
    filename: str = "fixtures.yaml"
    truncate_tables: bool = True


@dataclass
class DemoConfig:
    """Demo loop configuration."""
    iterations: int = 100


@dataclass
class MapperConfig:
    """Structure mapper configuration."""
    mismatch_policy: MismatchPolicy = MismatchPolicy.SKIP


@dataclass
class AppConfig:
    """Main application configuration."""
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    fixtures: FixtureConfig = field(default_factory=FixtureConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    mapper: MapperConfig = field(default_factory=MapperConfig)


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_policy(name: str, default: MismatchPolicy) -> MismatchPolicy:
    raw = os.getenv(name, default.value).strip().lower()
    try:
        return MismatchPolicy(raw)
    except ValueError:
        choices = ", ".join(p.value for p in MismatchPolicy)
        raise ValueError(f"{name} must be one of {choices}, got {raw!r}") from None


def get_config(reload: bool = False) -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Args:
        reload: Rebuild the configuration instead of returning the cached one

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    mysql_config = MySQLConfig(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=_env_int("MYSQL_PORT", 3306, minimum=1),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "root"),
        database=os.getenv("MYSQL_DATABASE", "orm_explorer"),
    )

    fixture_config = FixtureConfig(
        directory=os.getenv("FIXTURE_DIR", "testdata"),
        filename=os.getenv("FIXTURE_FILE", "fixtures.yaml"),
        truncate_tables=_env_bool("FIXTURE_TRUNCATE_TABLES", True),
    )

    demo_config = DemoConfig(
        iterations=_env_int("DEMO_ITERATIONS", 100),
    )

    mapper_config = MapperConfig(
        mismatch_policy=_env_policy("MAPPER_MISMATCH_POLICY", MismatchPolicy.SKIP),
    )

    _config_instance = AppConfig(
        mysql=mysql_config,
        fixtures=fixture_config,
        demo=demo_config,
        mapper=mapper_config,
    )

    return _config_instance
