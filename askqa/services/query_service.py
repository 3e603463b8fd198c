from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Dict, List, Protocol
import time

from sqlalchemy.ext.asyncio import AsyncConnection

from askqa.core.config import Settings
from askqa.core.exceptions import EmptySQLError, LLMError, SQLGenerationError, UnsafeSQLError
from askqa.core.logging import get_logger
from askqa.db.executor import execute_sql
from askqa.llm.extractor import extract_sql
from askqa.llm.provider import LLMProvider, RequestMode
from askqa.llm.validator import SQLValidator
from askqa.utils.encoding import decode_if_encoded
from askqa.utils.results import trim_string_values

logger = get_logger(__name__)

NO_ANALYSIS = "No analysis available"


class ConnectionProvider(Protocol):
    def connect(self) -> AsyncContextManager[AsyncConnection]:
        ...


@dataclass
class QueryAnswer:
    sql: str
    analysis: str
    results: List[Dict[str, Any]] = field(default_factory=list)


class QueryService:
    """Question -> SQL -> analysis -> rows, one request at a time."""

    def __init__(self, settings: Settings, llm_provider: LLMProvider, database: ConnectionProvider):
        self.settings = settings
        self.llm_provider = llm_provider
        self.database = database
        self.validator = SQLValidator()

    async def answer(self, question: str) -> QueryAnswer:
        start_time = time.time()

        sql = await self.generate_sql(question)

        if self.settings.SQL_READ_ONLY:
            is_valid, error = self.validator.validate(sql)
            if not is_valid:
                logger.warning(f"Rejected generated SQL: {error} | sql={sql}")
                raise UnsafeSQLError(f"generated SQL rejected: {error}")

        analysis = await self.analyze_sql(sql)

        async with self.database.connect() as conn:
            results = await execute_sql(conn, sql, commit=not self.settings.SQL_READ_ONLY)

        if self.settings.DECODE_BASE64_RESULTS:
            results = decode_if_encoded(results)
        results = trim_string_values(results)

        exec_time = int((time.time() - start_time) * 1000)
        logger.info(f"✅ Question answered | rows={len(results)} | time={exec_time}ms")
        return QueryAnswer(sql=sql, analysis=analysis, results=results)

    async def generate_sql(self, question: str) -> str:
        """Ask the LLM for SQL and strip whatever markdown it wrapped around it."""
        try:
            raw = await self.llm_provider.request(
                question, RequestMode.NL2SQL_WITH_SCHEMA, self.settings.DATABASE_SCHEMA
            )
        except LLMError as e:
            logger.error(f"SQL generation failed: {e}")
            raise SQLGenerationError(f"failed to convert natural language to SQL: {e}") from e

        if not raw or not raw.strip():
            raise EmptySQLError("empty SQL query returned from LLM")

        sql = extract_sql(raw)
        if not sql:
            raise EmptySQLError(f"no SQL statement found in LLM response: {raw}")

        logger.info(f"Natural language query converted to SQL: {sql!r}")
        return sql

    async def analyze_sql(self, sql: str) -> str:
        """Best-effort explanation of `sql`; never fails the request."""
        try:
            return await self.llm_provider.request(sql, RequestMode.ANALYZE)
        except LLMError as e:
            logger.warning(f"Failed to analyze SQL query: {e}")
            return NO_ANALYSIS
