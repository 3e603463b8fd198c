"""
Exceptions raised along the question -> SQL -> results pipeline.

Everything derives from AskQAError so the HTTP layer can turn any pipeline
failure into a single error envelope.
"""


class AskQAError(Exception):
    """Base exception for the askQA pipeline."""
    pass


# ============================================================
# LLM
# ============================================================
class LLMError(AskQAError):
    """Base exception for chat-completion failures."""
    pass


class UnknownModeError(LLMError):
    """Raised when a request mode is not one of the supported modes."""
    pass


class SchemaRequiredError(LLMError):
    """Raised when schema-augmented mode is used without schema text."""
    pass


class LLMRequestError(LLMError):
    """Raised when the HTTP request never produced a response (timeout, DNS, refused)."""
    pass


class LLMStatusError(LLMError):
    """Raised on a non-2xx response from the chat-completion API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed, status code: {status_code}, response: {body}")


class LLMResponseError(LLMError):
    """Raised when the response body carries no usable message content."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(f"{message}: {body}" if body else message)


class SQLGenerationError(LLMError):
    """Raised when the natural-language -> SQL request fails."""
    pass


# ============================================================
# SQL
# ============================================================
class EmptySQLError(AskQAError):
    """Raised when the LLM returned nothing that could be executed."""
    pass


class UnsafeSQLError(AskQAError):
    """Raised when read-only mode rejects the generated statement."""
    pass


# ============================================================
# Database
# ============================================================
class DatabaseError(AskQAError):
    """Base exception for database failures."""
    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when no connection could be obtained."""
    pass


class SQLExecutionError(DatabaseError):
    """Raised when a statement fails to run or its cursor fails mid-scan."""
    pass
