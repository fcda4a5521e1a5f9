"""
Design Auditor - AI UI/UX Audit Tool

Captures screenshots of web pages with a headless browser and asks a
vision-capable language model for a structured design critique.

Supports multiple vision providers, chosen by API key prefix:
- OpenAI (sk-...)
- OpenRouter (sk-or-...)
- Google Gemini (AIza...)
"""

__version__ = "0.1.0"

from .auditor import DesignAuditor
from .models import AnalysisRequest, AnalysisResult, ProviderKind
from .prompts import build_prompt
from .providers import get_provider, resolve

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "DesignAuditor",
    "ProviderKind",
    "build_prompt",
    "get_provider",
    "resolve",
]
