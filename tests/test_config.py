import pytest
from pydantic import ValidationError

from askqa.core.config import DEFAULT_API_TIMEOUT_SECONDS, Settings


def test_api_key_is_required(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_api_key_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LLM_API_KEY="   ")


@pytest.mark.parametrize("raw", ["abc", "", "-5"])
def test_invalid_timeout_falls_back_to_default(raw):
    settings = Settings(_env_file=None, LLM_API_KEY="k", API_TIMEOUT_SECONDS=raw)

    assert settings.API_TIMEOUT_SECONDS == DEFAULT_API_TIMEOUT_SECONDS


def test_timeout_from_environment(monkeypatch):
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "45")

    assert Settings(_env_file=None, LLM_API_KEY="k").API_TIMEOUT_SECONDS == 45


def test_database_url_built_from_parts():
    settings = Settings(
        _env_file=None,
        LLM_API_KEY="k",
        DB_HOST="db.internal",
        DB_PORT=6543,
        DB_USER="reporter",
        DB_PASSWORD="p@ss:word",
        DB_NAME="d2t_db",
    )
    url = settings.database_url

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db.internal"
    assert url.port == 6543
    assert url.username == "reporter"
    assert url.password == "p@ss:word"
    assert url.database == "d2t_db"


def test_database_url_override():
    settings = Settings(_env_file=None, LLM_API_KEY="k", DATABASE_URL="postgresql+asyncpg://u:p@h:5432/other")

    assert settings.database_url.database == "other"


def test_default_schema_describes_sample_tables():
    schema = Settings(_env_file=None, LLM_API_KEY="k").DATABASE_SCHEMA

    assert "CREATE TABLE customers" in schema
    assert "cust_name CHAR(50)" in schema


def test_cors_origins_are_split():
    settings = Settings(_env_file=None, LLM_API_KEY="k", CORS_ORIGINS="http://a.test, http://b.test")

    assert settings.cors_origins == ["http://a.test", "http://b.test"]
