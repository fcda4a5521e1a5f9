"""
Base Vision Provider Interface

Abstract base class defining the contract for vision model providers.
All providers parse and normalize their output the same way and map SDK
exceptions onto the error taxonomy in ``design_auditor.errors``.
"""

import base64
import json
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from ..errors import (
    AuthenticationError,
    MalformedResponse,
    ProviderError,
    QuotaExceeded,
    RateLimited,
    TransientProviderError,
)
from ..models import AnalysisRequest, AnalysisResult, ProviderKind


RESULT_KEYS = (
    "score",
    "summary",
    "color_palette",
    "design_flaws",
    "positive_aspects",
    "recommendations",
)

_QUOTA_MARKERS = ("insufficient_quota", "quota exceeded", "exceeded your current quota", "billing", "credits")
_RATE_LIMIT_MARKERS = ("429", "rate limit", "rate_limit", "too many requests", "resource_exhausted")
_AUTH_MARKERS = ("401", "unauthorized", "invalid api key", "api key not valid", "incorrect api key", "authentication")


class VisionProvider(ABC):
    """
    Abstract base class for vision model providers.

    A provider is built once per run by ``providers.resolve`` and is
    read-only afterwards, so one instance can serve concurrent invocations.

    Subclasses must implement:
    - invoke(): Analyze one screenshot and return a normalized AnalysisResult

    Attributes:
        kind: Provider kind the credential resolved to
        client: SDK client object (None for offline providers)
        model: Model identifier sent with every request
    """

    def __init__(self, kind: ProviderKind, client: Any, model: str):
        self.kind = kind
        self.client = client
        self.model = model

    @property
    def name(self) -> str:
        """Provider name for logging and identification"""
        return self.kind.value

    @abstractmethod
    async def invoke(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Analyze a screenshot and return the structured critique.

        Args:
            request: Screenshot bytes, audit category and subject URL

        Returns:
            AnalysisResult with every field populated

        Raises:
            AuthenticationError: Credential rejected
            RateLimited: Rate limit that was not (or could not be) retried
            QuotaExceeded: Account quota exhausted
            MalformedResponse: Output is not the required JSON object
            TransientProviderError: Retries exhausted or unclassified failure
        """
        pass

    def _encode_image(self, image: bytes) -> str:
        return base64.b64encode(image).decode("utf-8")

    def _parse_response(self, response_text: str) -> AnalysisResult:
        """
        Parse and normalize the provider's JSON answer.

        Handles both direct JSON and JSON wrapped in a markdown code fence.
        Missing or null keys take their defaults; unknown keys are dropped.

        Raises:
            MalformedResponse: Not JSON, not an object, or wrong value types
        """
        json_text = _strip_code_fence(response_text or "")

        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as e:
            raise MalformedResponse(
                f"{self.name} response is not valid JSON: {e}. "
                f"Response text: {json_text[:200]}"
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponse(
                f"{self.name} response is a JSON {type(data).__name__}, expected an object"
            )

        return normalize_result(data)

    def classify_error(self, error: Exception) -> ProviderError:
        """
        Map an exception raised by the SDK onto the error taxonomy.

        Subclasses check the SDK's structured exception types first and call
        this implementation as a fallback, which inspects the message text.
        """
        if isinstance(error, ProviderError):
            return error
        return _classify_by_message(self.name, error)


def normalize_result(data: dict) -> AnalysisResult:
    """
    Build an AnalysisResult from a decoded provider payload.

    Raises:
        MalformedResponse: A present value has the wrong type or range
    """
    fields = {key: data[key] for key in RESULT_KEYS if data.get(key) is not None}
    try:
        return AnalysisResult(**fields)
    except ValidationError as e:
        raise MalformedResponse(f"Response does not match the output schema: {e}") from e


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if not text.startswith("```"):
        return text
    # Drop the opening fence line, including any language tag
    newline = text.find("\n")
    body = text[newline + 1:] if newline != -1 else text[3:]
    end = body.rfind("```")
    return body[:end if end != -1 else None].strip()


def _classify_by_message(provider_name: str, error: Exception) -> ProviderError:
    message = str(error)
    lowered = message.lower()
    detail = f"{provider_name} API error: {message}"

    # Quota errors often carry a 429 as well, so they are checked first
    if any(marker in lowered for marker in _QUOTA_MARKERS):
        return QuotaExceeded(detail)
    if any(marker in lowered for marker in _RATE_LIMIT_MARKERS):
        return RateLimited(detail)
    if any(marker in lowered for marker in _AUTH_MARKERS):
        return AuthenticationError(detail)
    return TransientProviderError(detail)
