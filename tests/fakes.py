"""In-memory stand-ins for the LLM API and the database."""
from contextlib import asynccontextmanager

from askqa.llm.provider import RequestMode


class FakeResult:
    def __init__(self, columns=None, rows=None, returns_rows=True, fail_after=None, error=None):
        self.columns = columns or []
        self.rows = rows or []
        self.returns_rows = returns_rows
        self.fail_after = fail_after
        self.error = error

    def keys(self):
        return list(self.columns)

    def __iter__(self):
        for i, row in enumerate(self.rows):
            if self.fail_after is not None and i >= self.fail_after:
                raise self.error
            yield row


class FakeConnection:
    def __init__(self, result=None, error=None):
        self.result = result or FakeResult()
        self.error = error
        self.executed = []
        self.committed = False

    async def exec_driver_sql(self, sql):
        self.executed.append(sql)
        if self.error:
            raise self.error
        return self.result

    async def commit(self):
        self.committed = True


class FakeDatabase:
    def __init__(self, conn=None):
        self.conn = conn or FakeConnection()
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def connect(self):
        self.opened += 1
        try:
            yield self.conn
        finally:
            self.closed += 1


class FakeLLM:
    """Answers NL->SQL and analyze requests with canned replies."""

    def __init__(self, sql_reply="SELECT 1", analysis_reply="Selects the constant 1.", sql_error=None, analysis_error=None):
        self.sql_reply = sql_reply
        self.analysis_reply = analysis_reply
        self.sql_error = sql_error
        self.analysis_error = analysis_error
        self.calls = []

    async def request(self, input_text, mode, schema=None):
        self.calls.append((input_text, RequestMode(mode), schema))
        if RequestMode(mode) is RequestMode.ANALYZE:
            if self.analysis_error:
                raise self.analysis_error
            return self.analysis_reply
        if self.sql_error:
            raise self.sql_error
        return self.sql_reply


