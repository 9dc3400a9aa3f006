import logging

import pytest
from psycopg2.extensions import parse_dsn

import config
from utils.errors import ConfigError

_VARS = (
    "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME",
    "HTTP_HOST", "HTTP_PORT", "DB_POOL_MIN", "DB_POOL_MAX",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "find_dotenv", lambda: "")


def test_defaults():
    settings = config.load_settings()

    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_user == "postgres"
    assert settings.db_password == "password"
    assert settings.db_name == "postgres"
    assert settings.http_port == 8080


def test_missing_env_file_only_warns(caplog):
    with caplog.at_level(logging.WARNING):
        config.load_settings()

    assert "No .env file found" in caplog.text


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_NAME", "portfolio")

    settings = config.load_settings()

    assert settings.db_host == "db.internal"
    assert settings.db_port == 6543
    dsn = parse_dsn(settings.database_dsn)
    assert (dsn["host"], dsn["port"], dsn["dbname"]) == ("db.internal", "6543", "portfolio")


def test_unparseable_port_raises_config_error(monkeypatch):
    monkeypatch.setenv("DB_PORT", "fifty")

    with pytest.raises(ConfigError, match="DB_PORT"):
        config.load_settings()


def test_settings_are_immutable():
    settings = config.load_settings()

    with pytest.raises(AttributeError):
        settings.db_host = "elsewhere"


def test_existing_empty_env_file_does_not_warn(tmp_path, monkeypatch, caplog):
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setattr(config, "find_dotenv", lambda: str(env_file))

    with caplog.at_level(logging.WARNING):
        config.load_settings()

    assert "No .env file found" not in caplog.text


def test_dsn_keeps_database_name_with_empty_password():
    dsn = parse_dsn(config.Settings(db_password="").database_dsn)

    assert dsn["password"] == ""
    assert dsn["dbname"] == "postgres"
    assert dsn["sslmode"] == "disable"


def test_dsn_quotes_password_with_spaces():
    dsn = parse_dsn(config.Settings(db_password="s3cret word", db_name="portfolio").database_dsn)

    assert dsn["password"] == "s3cret word"
    assert dsn["dbname"] == "portfolio"
    assert dsn["port"] == "5432"
