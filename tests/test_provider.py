import json

import httpx
import pytest

from askqa.core.exceptions import (
    LLMRequestError,
    LLMResponseError,
    LLMStatusError,
    SchemaRequiredError,
    UnknownModeError,
)
from askqa.llm.provider import LLMProvider, RequestMode, build_messages


def chat_reply(content):
    return {
        "id": "chatcmpl-1",
        "model": "test-model",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
    }


def make_provider(settings, handler):
    return LLMProvider(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_schema_mode_sends_system_and_user_messages(settings):
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json=chat_reply("SELECT cust_name FROM customers"))

    provider = make_provider(settings, handler)
    content = await provider.request("list customer names", RequestMode.NL2SQL_WITH_SCHEMA, "CREATE TABLE customers (...);")

    assert content == "SELECT cust_name FROM customers"

    request = seen["request"]
    assert request.method == "POST"
    assert str(request.url) == "https://llm.test/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.headers["Content-Type"] == "application/json"

    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert "SQL expert" in body["messages"][0]["content"]
    assert body["messages"][1]["content"] == (
        "Database Schema:\nCREATE TABLE customers (...);\n\nConvert this question to SQL: list customer names"
    )


def test_basic_mode_is_a_single_user_message():
    messages = build_messages("how many vendors?", "nl2sql")

    assert len(messages) == 1
    assert messages[0].type == "human"
    assert messages[0].content.endswith("how many vendors?")


def test_analyze_mode_sends_sql_as_user_message(settings):
    payload = LLMProvider(settings).build_payload("SELECT 1", RequestMode.ANALYZE)

    assert payload["messages"][0]["role"] == "system"
    assert "Analyze" in payload["messages"][0]["content"]
    assert payload["messages"][1] == {"role": "user", "content": "SELECT 1"}


@pytest.mark.asyncio
async def test_unknown_mode_fails_before_network(settings):
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(UnknownModeError):
        await make_provider(settings, handler).request("hi", "translate")


@pytest.mark.asyncio
async def test_schema_mode_requires_schema(settings):
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(SchemaRequiredError):
        await make_provider(settings, handler).request("hi", RequestMode.NL2SQL_WITH_SCHEMA, "")


@pytest.mark.asyncio
async def test_non_2xx_embeds_status_and_body(settings):
    def handler(request):
        return httpx.Response(401, text='{"error": "invalid api key"}')

    with pytest.raises(LLMStatusError) as exc_info:
        await make_provider(settings, handler).request("SELECT 1", RequestMode.ANALYZE)

    assert exc_info.value.status_code == 401
    assert "401" in str(exc_info.value)
    assert "invalid api key" in str(exc_info.value)


@pytest.mark.asyncio
async def test_missing_choices_is_reported_with_body(settings):
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(LLMResponseError) as exc_info:
        await make_provider(settings, handler).request("SELECT 1", RequestMode.ANALYZE)

    assert "could not extract content" in str(exc_info.value)
    assert "choices" in exc_info.value.body


@pytest.mark.asyncio
async def test_non_json_body_is_a_response_error(settings):
    def handler(request):
        return httpx.Response(200, text="<html>bad gateway</html>")

    with pytest.raises(LLMResponseError):
        await make_provider(settings, handler).request("SELECT 1", RequestMode.ANALYZE)


@pytest.mark.asyncio
async def test_null_content_is_a_response_error(settings):
    def handler(request):
        return httpx.Response(200, json=chat_reply(None))

    with pytest.raises(LLMResponseError):
        await make_provider(settings, handler).request("SELECT 1", RequestMode.ANALYZE)


@pytest.mark.asyncio
async def test_timeout_is_a_request_error(settings):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(LLMRequestError):
        await make_provider(settings, handler).request("SELECT 1", RequestMode.ANALYZE)
