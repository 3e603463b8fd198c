import os

# askqa.main builds its app at import time and needs a key; no log files in tests
os.environ.setdefault("LLM_API_KEY", "test-key")
os.environ["LOG_DIR"] = ""

import pytest

from askqa.core.config import Settings
from askqa.core.exceptions import LLMStatusError
from askqa.services.query_service import QueryService
from fakes import FakeDatabase, FakeLLM

TEST_SCHEMA = "CREATE TABLE customers (cust_id CHAR(10) PRIMARY KEY, cust_name CHAR(50) NOT NULL);"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        LLM_API_KEY="test-key",
        LLM_API_URL="https://llm.test/chat/completions",
        LLM_MODEL="test-model",
        API_TIMEOUT_SECONDS=5,
        DATABASE_SCHEMA=TEST_SCHEMA,
        LOG_DIR="",
    )


@pytest.fixture
def make_service(settings):
    def _make(llm=None, database=None, **overrides):
        service_settings = settings.model_copy(update=overrides) if overrides else settings
        return QueryService(service_settings, llm or FakeLLM(), database or FakeDatabase())
    return _make


@pytest.fixture
def status_error():
    return LLMStatusError(503, '{"error": "overloaded"}')
