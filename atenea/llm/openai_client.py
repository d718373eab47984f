"""Thin async wrapper around the OpenAI Responses API."""

from __future__ import annotations

import logging
from typing import Optional

from openai import APIError, APITimeoutError, AsyncOpenAI

from atenea.config import settings
from atenea.errors import UpstreamModelError
from atenea.models.qa import TokenUsage

logger = logging.getLogger(__name__)


def build_async_client(api_key: Optional[str] = None, base_url: Optional[str] = None) -> AsyncOpenAI:
    """SDK client with a bounded timeout and one retry on transient failures.

    The SDK only retries connection errors, 408/409/429 and 5xx responses, so
    other 4xx errors surface immediately.
    """
    return AsyncOpenAI(
        api_key=api_key or settings.require_openai_key(),
        base_url=base_url or settings.openai_base_url,
        timeout=settings.model_timeout_seconds,
        max_retries=settings.model_max_retries,
    )


class ChatCompletion:
    """Text and usage of one model call."""

    def __init__(self, text: str, usage: Optional[TokenUsage] = None) -> None:
        self.text = text
        self.usage = usage


class OpenAIChatClient:
    """Lazily initializes the OpenAI Python SDK."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model: Optional[str] = None,
    ) -> None:
        self.model = model or settings.openai_model_chat
        self.client = client or build_async_client()

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.2,
        max_output_tokens: int = 1200,
    ) -> ChatCompletion:
        try:
            response = await self.client.responses.create(
                model=self.model,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
                input=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (APITimeoutError, APIError) as exc:
            logger.error("Answer generation failed: %s", exc)
            raise UpstreamModelError("answer generation", exc) from exc
        return ChatCompletion(self._extract_text(response), self._extract_usage(response))

    @staticmethod
    def _extract_text(response) -> str:
        chunks: list[str] = []
        for item in response.output or []:
            for content in getattr(item, "content", None) or []:
                content_type = getattr(content, "type", None)
                content_text = getattr(content, "text", None)
                if isinstance(content, dict):
                    content_type = content.get("type", content_type)
                    content_text = content.get("text", content_text)
                if content_type in {"output_text", "text"} and content_text:
                    chunks.append(str(content_text))
        return "\n".join(part.strip() for part in chunks if part).strip()

    @staticmethod
    def _extract_usage(response) -> Optional[TokenUsage]:
        usage = getattr(response, "usage", None)
        if usage is None:
            return None
        return TokenUsage(
            prompt_tokens=getattr(usage, "input_tokens", 0) or 0,
            completion_tokens=getattr(usage, "output_tokens", 0) or 0,
            total_tokens=getattr(usage, "total_tokens", 0) or 0,
        )
