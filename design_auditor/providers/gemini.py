"""
Google Gemini Vision Provider

Implements vision critique with Gemini's native multimodal API via the
google-genai SDK.
"""

from typing import Any, Optional

from google import genai
from google.genai import errors, types
from loguru import logger

from ..errors import AuthenticationError, MalformedResponse, ProviderError, RateLimited
from ..models import AnalysisRequest, AnalysisResult, ProviderKind
from ..prompts import build_prompt
from .base import VisionProvider


class NativeVisionProvider(VisionProvider):
    """
    Vision provider using Gemini's generate_content API.

    Sends one combined prompt string and the screenshot as an inline PNG
    part, with the JSON response MIME type.

    Unlike ChatCompletionProvider this makes a single attempt: any failure,
    including a rate limit, is classified and raised immediately.

    Example:
        provider = NativeVisionProvider(api_key="AIza...")
        result = await provider.invoke(request)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-2.0-flash",
        client: Any = None
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (get from https://aistudio.google.com/app/apikey)
            model: Vision-capable Gemini model
            client: Prebuilt genai.Client; skips construction
        """
        if client is None:
            client = genai.Client(api_key=api_key)
        super().__init__(kind=ProviderKind.GEMINI, client=client, model=model)

    async def invoke(self, request: AnalysisRequest) -> AnalysisResult:
        prompt = build_prompt(request.category)
        contents = [
            prompt.combined_text(request.category, request.subject_url),
            types.Part.from_bytes(data=request.image, mime_type="image/png"),
        ]

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(response_mime_type="application/json")
            )
        except Exception as e:
            error = self.classify_error(e)
            logger.debug(f"{self.name} call failed for {request.subject_url}: {type(error).__name__}")
            raise error from e

        text = getattr(response, "text", None)
        if not text:
            raise MalformedResponse(f"{self.name} returned an empty response")
        return self._parse_response(text)

    def classify_error(self, error: Exception) -> ProviderError:
        if isinstance(error, errors.APIError):
            detail = f"{self.name} API error: {error}"
            message = str(error).lower()
            if error.code in (401, 403):
                return AuthenticationError(detail)
            if error.code == 400 and "api key" in message:
                return AuthenticationError(detail)
            if error.code == 429:
                return RateLimited(detail)

        return super().classify_error(error)
