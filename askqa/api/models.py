from pydantic import BaseModel, Field
from typing import Any, Dict, List


class AskRequest(BaseModel):
    question: str = Field("", description="Natural language question")


class AskResponse(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list, description="Rows, keyed by column name")
    sql: str
    analysis: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
