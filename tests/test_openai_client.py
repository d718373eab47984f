"""Tests for atenea/llm/openai_client.py with the SDK client mocked out."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from openai import APITimeoutError

from atenea.errors import UpstreamModelError
from atenea.llm.openai_client import OpenAIChatClient


def sdk_client(response=None, error=None):
    client = MagicMock()
    client.responses.create = AsyncMock(return_value=response, side_effect=error)
    return client


def response_with(*texts, usage=None):
    content = [SimpleNamespace(type="output_text", text=text) for text in texts]
    return SimpleNamespace(output=[SimpleNamespace(content=content)], usage=usage)


async def test_complete_joins_output_text():
    usage = SimpleNamespace(input_tokens=90, output_tokens=30, total_tokens=120)
    client = sdk_client(response_with("Primera parte [1].", " Segunda parte [2]. ", usage=usage))
    completion = await OpenAIChatClient(client=client, model="gpt-test").complete("sys", "user")

    assert completion.text == "Primera parte [1].\nSegunda parte [2]."
    assert completion.usage.prompt_tokens == 90
    assert completion.usage.completion_tokens == 30
    assert completion.usage.total_tokens == 120

    kwargs = client.responses.create.await_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["input"][0] == {"role": "system", "content": "sys"}
    assert kwargs["input"][1] == {"role": "user", "content": "user"}


async def test_dict_content_and_missing_usage():
    response = SimpleNamespace(
        output=[SimpleNamespace(content=[{"type": "output_text", "text": "Texto"}, {"type": "refusal"}])],
        usage=None,
    )
    completion = await OpenAIChatClient(client=sdk_client(response)).complete("s", "u")
    assert completion.text == "Texto"
    assert completion.usage is None


async def test_timeout_becomes_upstream_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    client = sdk_client(error=APITimeoutError(request=request))
    with pytest.raises(UpstreamModelError) as excinfo:
        await OpenAIChatClient(client=client).complete("s", "u")
    assert excinfo.value.operation == "answer generation"
    assert isinstance(excinfo.value.cause, APITimeoutError)
