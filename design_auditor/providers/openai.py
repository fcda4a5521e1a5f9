"""
Chat-Completion Vision Provider

Implements vision critique over the OpenAI chat-completions API.
Serves both OpenAI keys and OpenRouter keys, which speak the same wire
protocol behind a different base URL.
"""

import asyncio
from typing import Any, Optional

import openai
from loguru import logger

from ..errors import (
    AuthenticationError,
    MalformedResponse,
    ProviderError,
    QuotaExceeded,
    RateLimited,
    TransientProviderError,
)
from ..models import AnalysisRequest, AnalysisResult, ProviderKind
from ..prompts import build_prompt
from .base import VisionProvider


MAX_ATTEMPTS = 3
MAX_TOKENS = 1500


class ChatCompletionProvider(VisionProvider):
    """
    Vision provider using an OpenAI-compatible chat-completions endpoint.

    Sends the category instruction and output contract as the system
    message, and the subject URL plus a base64 data URI of the screenshot as
    the user message, in JSON-object response mode.

    Rate limits are retried up to MAX_ATTEMPTS times in total with
    exponential backoff (2s, then 4s). Every other failure is raised on the
    first attempt.

    Example:
        provider = ChatCompletionProvider(ProviderKind.OPENAI, api_key="sk-...", model="gpt-4o")
        result = await provider.invoke(request)
    """

    def __init__(
        self,
        kind: ProviderKind,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        base_url: Optional[str] = None,
        client: Any = None
    ):
        """
        Initialize chat-completion provider.

        Args:
            kind: ProviderKind.OPENAI or ProviderKind.OPENROUTER
            api_key: Credential passed to the SDK client
            model: Vision-capable model identifier
            base_url: Endpoint override (OpenRouter)
            client: Prebuilt AsyncOpenAI-compatible client; skips construction
        """
        if client is None:
            client = openai.AsyncOpenAI(api_key=api_key, base_url=base_url)
        super().__init__(kind=kind, client=client, model=model)

    async def invoke(self, request: AnalysisRequest) -> AnalysisResult:
        prompt = build_prompt(request.category)
        image_data = self._encode_image(request.image)
        messages = [
            {
                "role": "system",
                "content": prompt.system_text()
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": prompt.user_text(request.category, request.subject_url)
                    },
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:image/png;base64,{image_data}"}
                    }
                ]
            }
        ]

        last_error: Optional[RateLimited] = None

        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    response_format={"type": "json_object"},
                    max_tokens=MAX_TOKENS
                )
            except Exception as e:
                error = self.classify_error(e)
                if not isinstance(error, RateLimited):
                    raise error from e

                last_error = error
                if attempt < MAX_ATTEMPTS:
                    delay = 2 ** attempt
                    logger.warning(
                        f"{self.name} rate limited for {request.subject_url} "
                        f"(attempt {attempt}/{MAX_ATTEMPTS}), retrying in {delay}s"
                    )
                    await asyncio.sleep(delay)
                continue

            return self._parse_response(self._extract_text(response))

        raise TransientProviderError(
            f"{self.name} still rate limited after {MAX_ATTEMPTS} attempts: {last_error}"
        ) from last_error

    def classify_error(self, error: Exception) -> ProviderError:
        detail = f"{self.name} API error: {error}"

        if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
            return AuthenticationError(detail)
        if isinstance(error, openai.RateLimitError):
            if getattr(error, "code", None) == "insufficient_quota":
                return QuotaExceeded(detail)
            return RateLimited(detail)
        if isinstance(error, openai.APIStatusError) and error.status_code == 402:
            return QuotaExceeded(detail)
        if isinstance(error, openai.APIConnectionError):
            return TransientProviderError(detail)

        return super().classify_error(error)

    def _extract_text(self, response: Any) -> str:
        if not getattr(response, "choices", None):
            raise MalformedResponse(f"{self.name} returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise MalformedResponse(f"{self.name} returned an empty message")
        return content
