import json
from enum import Enum
from typing import Dict, List, Optional, Union

import httpx
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from askqa.core.config import Settings
from askqa.core.exceptions import (
    LLMRequestError,
    LLMResponseError,
    LLMStatusError,
    SchemaRequiredError,
    UnknownModeError,
)
from askqa.core.logging import get_logger

logger = get_logger(__name__)


class RequestMode(str, Enum):
    NL2SQL = "nl2sql"
    NL2SQL_WITH_SCHEMA = "nl2sql_with_schema"
    ANALYZE = "analyze"


NL2SQL_SYSTEM_PROMPT = (
    "You are an SQL expert. Convert natural language questions to SQL queries. "
    "Use the provided database schema to create accurate queries. "
    "Only respond with valid SQL queries, no explanations."
)

ANALYZE_SYSTEM_PROMPT = (
    "You are an SQL expert. Analyze the provided SQL query and explain its purpose, "
    "potential optimizations, and any issues it might have."
)

# langchain message type -> chat-completions wire role
WIRE_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


def build_messages(input_text: str, mode: Union[RequestMode, str], schema: Optional[str] = None) -> List[BaseMessage]:
    """Build the conversation for `mode`; raises before anything touches the network."""
    try:
        mode = RequestMode(mode)
    except ValueError:
        raise UnknownModeError(f"unknown request mode: {mode}")

    if mode is RequestMode.NL2SQL:
        return [HumanMessage(content=f"Convert the following question into a SQL statement: {input_text}")]

    if mode is RequestMode.NL2SQL_WITH_SCHEMA:
        if not schema or not schema.strip():
            raise SchemaRequiredError("schema is required for nl2sql_with_schema mode")
        return [
            SystemMessage(content=NL2SQL_SYSTEM_PROMPT),
            HumanMessage(content=f"Database Schema:\n{schema}\n\nConvert this question to SQL: {input_text}"),
        ]

    return [
        SystemMessage(content=ANALYZE_SYSTEM_PROMPT),
        HumanMessage(content=input_text),
    ]


def to_wire_messages(messages: List[BaseMessage]) -> List[Dict[str, str]]:
    return [{"role": WIRE_ROLES[m.type], "content": m.content} for m in messages]


def extract_content(body: str) -> str:
    """Return choices[0].message.content from a chat-completions response body."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"failed to parse response: {e}", body)

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise LLMResponseError("could not extract content from response", body)

    if not isinstance(content, str):
        raise LLMResponseError("could not extract content from response", body)

    logger.debug(f"LLM choices: {data.get('choices')}")
    return content


class LLMProvider:
    """Chat-completions client (DeepSeek / OpenAI wire format) for the three request modes."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = settings.LLM_API_URL
        self.model = settings.LLM_MODEL
        self.api_key = settings.LLM_API_KEY
        self.timeout = settings.API_TIMEOUT_SECONDS
        self.transport = transport

        logger.info(f"LLMProvider initialized using model: {self.model}")

    def build_payload(self, input_text: str, mode: Union[RequestMode, str], schema: Optional[str] = None) -> Dict:
        messages = build_messages(input_text, mode, schema)
        return {"model": self.model, "messages": to_wire_messages(messages)}

    async def request(self, input_text: str, mode: Union[RequestMode, str], schema: Optional[str] = None) -> str:
        """Send one chat request and return the first choice's message content."""
        payload = self.build_payload(input_text, mode, schema)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.info(f"LLM request: mode={RequestMode(mode).value}, input={input_text[:200]!r}")
        logger.debug(f"LLM request payload: {json.dumps(payload, ensure_ascii=False, indent=2)}")
        logger.info(f"Making API request with timeout of {self.timeout:.0f} seconds")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"LLM request failed: {e!r}")
            raise LLMRequestError(f"request to LLM API failed: {e!r}") from e

        body = response.text
        if not response.is_success:
            logger.error(f"LLM API returned status {response.status_code}")
            raise LLMStatusError(response.status_code, body)

        return extract_content(body)
