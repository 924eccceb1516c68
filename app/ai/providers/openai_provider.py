from __future__ import annotations

from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from app.ai.types import ChatMessage, UpstreamError


class OpenAIProvider:
    """Text generator backed by any OpenAI-compatible chat completions API."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 2,
        app_title: Optional[str] = None,
    ):
        if not api_key:
            raise RuntimeError("API key for the text generator is missing")

        self._model = model
        default_headers = {"X-Title": app_title} if app_title else None
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
            timeout=timeout_s,
            max_retries=max_retries,
            default_headers=default_headers,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> str:
        messages: list[ChatMessage] = []
        if system_prompt:
            messages.append(ChatMessage(role="system", content=system_prompt))
        messages.append(ChatMessage(role="user", content=prompt))

        create_kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
        }
        if max_tokens:
            create_kwargs["max_tokens"] = max_tokens
        if json_mode:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**create_kwargs)
        except OpenAIError as exc:
            raise UpstreamError(f"Text generator request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else ""
        if not content or not content.strip():
            raise UpstreamError("Text generator returned an empty response.", code="empty_response")
        return content
