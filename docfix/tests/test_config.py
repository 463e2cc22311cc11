"""Tests for docfix.config module."""

import pytest

from docfix.config import CONFIG_ENV_VAR, DocfixConfig, find_config_file, load_config
from docfix.errors import ConfigError


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def test_defaults_when_no_file(temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    config = load_config()

    assert config == DocfixConfig()
    assert config.log_level == "INFO"
    assert config.fixture_path is None


def test_explicit_path(temp_dir):
    path = temp_dir / "custom.yaml"
    path.write_text(
        "fixture_path: ./fixtures\n"
        "log_level: debug\n"
        "mongo:\n"
        "  uri: mongodb://localhost:27017\n"
        "  database: app_test\n"
    )

    config = load_config(path)

    assert config.fixture_path == "./fixtures"
    assert config.log_level == "DEBUG"
    assert config.mongo_uri == "mongodb://localhost:27017"
    assert config.mongo_database == "app_test"


def test_explicit_missing_path(temp_dir):
    with pytest.raises(FileNotFoundError):
        load_config(temp_dir / "missing.yaml")


def test_env_var(temp_dir, monkeypatch):
    path = temp_dir / "env.yaml"
    path.write_text("log_level: WARNING\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert load_config().log_level == "WARNING"


def test_walks_up_parent_directories(temp_dir, monkeypatch):
    (temp_dir / "docfix.yaml").write_text("fixture_path: up-here\n")
    nested = temp_dir / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert load_config().fixture_path == "up-here"


def test_find_config_file_prefers_nearest(temp_dir):
    (temp_dir / "docfix.yaml").write_text("fixture_path: outer\n")
    inner = temp_dir / "a"
    inner.mkdir()
    (inner / "docfix.yaml").write_text("fixture_path: inner\n")
    nested = inner / "b"
    nested.mkdir()

    assert find_config_file(nested) == inner / "docfix.yaml"
    assert find_config_file(temp_dir) == temp_dir / "docfix.yaml"


def test_find_config_file_ignores_directories(temp_dir):
    nested = temp_dir / "x"
    (nested / "docfix.yaml").mkdir(parents=True)

    assert find_config_file(nested) != nested / "docfix.yaml"


def test_empty_file(temp_dir):
    path = temp_dir / "docfix.yaml"
    path.write_text("")
    assert load_config(path) == DocfixConfig()


def test_non_mapping_rejected(temp_dir):
    path = temp_dir / "docfix.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_mongo_client_requires_uri():
    with pytest.raises(ConfigError, match="mongo.uri"):
        DocfixConfig().mongo_client()


def test_mongo_db_requires_database():
    with pytest.raises(ConfigError, match="mongo.database"):
        DocfixConfig(mongo_uri="mongodb://localhost:27017").mongo_db()
