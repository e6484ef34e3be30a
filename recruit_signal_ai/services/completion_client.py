"""Single-shot calls to an OpenAI-compatible chat completions endpoint."""

from typing import Dict, List, Optional

import httpx
from openai import APIConnectionError, APIError, APIStatusError, AsyncOpenAI

from recruit_signal_ai.config import (
    COMPLETION_API_KEY,
    COMPLETION_BASE_URL,
    COMPLETION_TIMEOUT_SECONDS,
    MODEL_NAME,
)
from recruit_signal_ai.errors import ResponseShapeError, UpstreamError
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


class CompletionClient:
    """
    Send {model, messages, temperature, max_tokens} and return the first choice text.
    No retries: the SDK's own retry loop is disabled and callers decide what to do on failure.
    """

    def __init__(
        self,
        api_key: str = COMPLETION_API_KEY,
        base_url: str = COMPLETION_BASE_URL,
        model: str = MODEL_NAME,
        timeout_seconds: float = COMPLETION_TIMEOUT_SECONDS,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        """Build the SDK client on first use; a missing key only matters once a call is made."""
        if self._client is None:
            if not self.api_key:
                raise UpstreamError("COMPLETION_API_KEY is not set; cannot call completion endpoint")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout_seconds),
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: Optional[int] = None,
    ) -> str:
        params = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        client = self._get_client()
        try:
            response = await client.chat.completions.create(**params)
        except APIStatusError as e:
            body = e.response.text if e.response is not None else ""
            logger.error("Completion endpoint HTTP error %s (model=%s): %s", e.status_code, self.model, body[:500])
            raise UpstreamError("Completion endpoint error", status_code=e.status_code, body=body) from e
        except APIConnectionError as e:
            logger.error("Completion endpoint unreachable (model=%s): %s", self.model, e)
            raise UpstreamError(f"Completion endpoint unreachable: {e}") from e
        except APIError as e:
            logger.error("Completion endpoint call failed (model=%s): %s", self.model, e)
            raise UpstreamError(f"Completion endpoint call failed: {e}") from e

        choices = getattr(response, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None) if message is not None else None
        if not isinstance(content, str):
            logger.error("Completion response missing choices[0].message.content (model=%s)", self.model)
            raise ResponseShapeError("Completion response missing choices[0].message.content")
        logger.debug("Completion returned %s characters", len(content))
        return content
