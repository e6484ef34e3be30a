import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from recruit_signal_ai.errors import ErrorKind, ResponseShapeError, UpstreamError
from recruit_signal_ai.services.completion_client import CompletionClient

URL = "https://api.example.test/v1/chat/completions"


class FakeCompletions:
    def __init__(self, result):
        self.result = result
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _client(result):
    completions = FakeCompletions(result)
    fake_sdk = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return CompletionClient(model="test-model", client=fake_sdk), completions


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(status: int, text: str) -> openai.APIStatusError:
    response = httpx.Response(status, request=httpx.Request("POST", URL), text=text)
    return openai.APIStatusError(f"Error code: {status}", response=response, body=None)


MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "hi"}]


def test_returns_first_choice_content_and_sends_parameters():
    client, completions = _client(_response("hello"))
    text = asyncio.run(client.complete(MESSAGES, temperature=0.1, max_tokens=50))
    assert text == "hello"
    assert completions.kwargs == {
        "model": "test-model",
        "messages": MESSAGES,
        "temperature": 0.1,
        "max_tokens": 50,
    }


def test_max_tokens_omitted_when_not_given():
    client, completions = _client(_response("ok"))
    asyncio.run(client.complete(MESSAGES, temperature=0.4))
    assert "max_tokens" not in completions.kwargs


def test_non_2xx_raises_upstream_error_with_status_and_body():
    client, _ = _client(_status_error(500, "internal boom"))
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(client.complete(MESSAGES, temperature=0.1))
    assert exc.value.status_code == 500
    assert exc.value.body == "internal boom"
    assert exc.value.kind is ErrorKind.UPSTREAM
    assert "500" in str(exc.value)


def test_connection_failure_raises_upstream_error_without_status():
    error = openai.APIConnectionError(request=httpx.Request("POST", URL))
    client, _ = _client(error)
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(client.complete(MESSAGES, temperature=0.1))
    assert exc.value.status_code is None


@pytest.mark.parametrize(
    "response",
    [
        SimpleNamespace(choices=[]),
        SimpleNamespace(choices=None),
        SimpleNamespace(choices=[SimpleNamespace(message=None)]),
        _response(None),
    ],
)
def test_missing_content_raises_response_shape_error(response):
    client, _ = _client(response)
    with pytest.raises(ResponseShapeError) as exc:
        asyncio.run(client.complete(MESSAGES, temperature=0.1))
    assert exc.value.kind is ErrorKind.RESPONSE_SHAPE
    assert isinstance(exc.value, UpstreamError)


def test_missing_api_key_is_rejected_when_a_call_is_made():
    client = CompletionClient(api_key="")
    with pytest.raises(UpstreamError, match="COMPLETION_API_KEY"):
        asyncio.run(client.complete(MESSAGES, temperature=0.1))


def test_other_sdk_errors_raise_upstream_error():
    response = httpx.Response(200, request=httpx.Request("POST", URL), text="{}")
    client, _ = _client(openai.APIResponseValidationError(response=response, body=None))
    with pytest.raises(UpstreamError) as exc:
        asyncio.run(client.complete(MESSAGES, temperature=0.1))
    assert exc.value.kind is ErrorKind.UPSTREAM
    assert isinstance(exc.value.__cause__, openai.APIResponseValidationError)
