"""
Vision Provider Implementations

Pluggable vision model providers following a common interface.
The credential prefix selects the backend: OpenRouter, OpenAI or Gemini.
"""

from loguru import logger

from ..errors import InvalidCredentialFormat
from ..models import Config, ProviderKind
from .base import VisionProvider, normalize_result
from .demo import DemoProvider
from .gemini import NativeVisionProvider
from .openai import ChatCompletionProvider

__all__ = [
    "VisionProvider",
    "ChatCompletionProvider",
    "NativeVisionProvider",
    "DemoProvider",
    "normalize_result",
    "detect_kind",
    "resolve",
    "get_provider",
]

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

DEFAULT_MODELS = {
    ProviderKind.OPENROUTER: "google/gemini-2.0-flash-exp:free",
    ProviderKind.OPENAI: "gpt-4o",
    ProviderKind.GEMINI: "gemini-2.0-flash",
}

# Most specific prefix first: "sk-or-" keys also start with "sk-"
CREDENTIAL_PREFIXES = (
    ("sk-or-", ProviderKind.OPENROUTER),
    ("sk-", ProviderKind.OPENAI),
    ("AIza", ProviderKind.GEMINI),
)


def detect_kind(credential: str) -> ProviderKind:
    """
    Classify a credential by its prefix.

    Raises:
        InvalidCredentialFormat: No supported prefix matches
    """
    key = (credential or "").strip()
    for prefix, kind in CREDENTIAL_PREFIXES:
        if key.startswith(prefix):
            return kind

    raise InvalidCredentialFormat(
        "Invalid API key format. Please provide a valid OpenAI (sk-...), "
        "OpenRouter (sk-or-...), or Gemini (AIza...) API key."
    )


def resolve(credential: str) -> VisionProvider:
    """
    Build the provider a credential belongs to.

    No network call is made; only the SDK client object is constructed.

    Args:
        credential: API key whose prefix identifies the provider

    Returns:
        Configured provider with the kind's default model

    Raises:
        InvalidCredentialFormat: If the prefix is not recognized

    Example:
        provider = resolve("sk-or-v1-...")
        assert provider.kind is ProviderKind.OPENROUTER
    """
    kind = detect_kind(credential)
    key = credential.strip()
    model = DEFAULT_MODELS[kind]

    logger.info(f"Detected {kind.value} API key, using model {model}")

    if kind is ProviderKind.OPENROUTER:
        return ChatCompletionProvider(kind, api_key=key, model=model, base_url=OPENROUTER_BASE_URL)
    elif kind is ProviderKind.OPENAI:
        return ChatCompletionProvider(kind, api_key=key, model=model)
    else:
        return NativeVisionProvider(api_key=key, model=model)


def get_provider(config: Config) -> VisionProvider:
    """
    Factory function to get the provider for a run.

    Without a credential the demo provider is used, unless free-tier mode
    is on, which requires the user's own key.

    Raises:
        InvalidCredentialFormat: Missing key in free-tier mode, or bad prefix
    """
    if not config.has_api_key():
        if config.free_tier:
            raise InvalidCredentialFormat(
                "Free tier requires you to provide your own API key. Get a free Gemini key "
                "from https://aistudio.google.com/app/apikey or an OpenAI key from "
                "https://platform.openai.com/api-keys and set AUDITOR_API_KEY in .env"
            )
        logger.info("No API key provided, running in demo mode")
        return DemoProvider()

    return resolve(config.api_key)
