from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url

from askqa.core.logging import get_logger
from askqa.db.schema import render_schema_ddl

ROOT_DIR = Path(__file__).parent.parent.parent
load_dotenv(ROOT_DIR / '.env')

DEFAULT_API_TIMEOUT_SECONDS = 300.0

logger = get_logger(__name__)


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = ''
    DB_HOST: str = 'localhost'
    DB_PORT: int = 5432
    DB_USER: str = 'postgres'
    DB_PASSWORD: str = ''
    DB_NAME: str = 'd2t_db'
    DB_SSLMODE: str = 'disable'
    DATABASE_SCHEMA: str = Field(default_factory=render_schema_ddl)

    # LLM
    LLM_API_URL: str = 'https://api.deepseek.com/chat/completions'
    LLM_MODEL: str = 'deepseek-chat'
    LLM_API_KEY: str
    API_TIMEOUT_SECONDS: float = DEFAULT_API_TIMEOUT_SECONDS

    # Query Settings
    SQL_READ_ONLY: bool = True
    DECODE_BASE64_RESULTS: bool = False

    # Server
    HOST: str = '0.0.0.0'
    PORT: int = 8080
    CORS_ORIGINS: str = '*'

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_DIR: str = 'logs'

    class Config:
        env_file = '.env'
        case_sensitive = True
        extra = 'ignore'

    @field_validator('LLM_API_KEY')
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("LLM_API_KEY cannot be empty")
        return v.strip()

    @field_validator('API_TIMEOUT_SECONDS', mode='before')
    @classmethod
    def validate_timeout(cls, v):
        try:
            timeout = float(v)
        except (TypeError, ValueError):
            logger.warning(f"Invalid API_TIMEOUT_SECONDS value {v!r}, using default {DEFAULT_API_TIMEOUT_SECONDS:.0f} seconds")
            return DEFAULT_API_TIMEOUT_SECONDS
        if timeout <= 0:
            logger.warning(f"Non-positive API_TIMEOUT_SECONDS value {v!r}, using default {DEFAULT_API_TIMEOUT_SECONDS:.0f} seconds")
            return DEFAULT_API_TIMEOUT_SECONDS
        return timeout

    @property
    def database_url(self) -> URL:
        """Async SQLAlchemy URL, from DATABASE_URL when set, else from the DB_* parts."""
        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            'postgresql+asyncpg',
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once; raises if LLM_API_KEY is missing."""
    return Settings()
