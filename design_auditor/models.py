"""
Data Models for Design Auditor

Type-safe Pydantic models for all data structures.
The AnalysisResult field names are the JSON keys providers must return and
the keys written to the dataset, so they must not be renamed.
"""

import asyncio
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


AUDIT_CATEGORIES = (
    "general",
    "accessibility",
    "conversion",
    "performance",
    "seo",
    "mobile-first",
    "brand-consistency",
)

AuditCategory = Literal[
    "general",
    "accessibility",
    "conversion",
    "performance",
    "seo",
    "mobile-first",
    "brand-consistency",
]

VIEWPORTS = {
    "desktop": {"width": 1920, "height": 1080},
    "mobile": {"width": 390, "height": 844},
}


class ProviderKind(str, Enum):
    """Backend a credential resolves to. DEMO is only chosen without a credential."""

    OPENROUTER = "openrouter"
    OPENAI = "openai"
    GEMINI = "gemini"
    DEMO = "demo"


class AnalysisRequest(BaseModel):
    """
    One page to analyze.

    Attributes:
        image: PNG screenshot bytes
        category: Audit category tag (unknown tags fall back to "general")
        subject_url: URL the screenshot was taken from
    """

    model_config = ConfigDict(frozen=True)

    image: bytes = Field(min_length=1)
    category: str = "general"
    subject_url: str


class AnalysisResult(BaseModel):
    """
    Normalized vision critique returned by every provider.

    Any key missing from the provider's JSON is filled with its default so
    downstream consumers can rely on all six being present.

    Attributes:
        score: Overall rating, 1-10 from the model, 0 when absent
        summary: Brief overall assessment
        color_palette: Dominant colors as "#RRGGBB" strings
        design_flaws: Problems found on the page
        positive_aspects: Things the page does well
        recommendations: Actionable improvements
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    score: float = Field(default=0, le=10)
    summary: str = "No summary available"
    color_palette: list[str] = Field(default_factory=list)
    design_flaws: list[str] = Field(default_factory=list)
    positive_aspects: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def score_in_range(cls, v: float) -> float:
        # Only a model-supplied score is checked; the absent-score default stays 0
        if v < 1:
            raise ValueError("score must be between 1 and 10")
        return v

    @field_validator("color_palette")
    @classmethod
    def strip_colors(cls, v: list[str]) -> list[str]:
        return [color.strip() for color in v]


class PageSignals(BaseModel):
    """
    Heuristic signals extracted from the page HTML.

    Each metric area holds the raw check results; scores maps every area
    to a 0-10 rating.
    """

    technologies: list[str] = Field(default_factory=list)
    technology_stack: dict = Field(default_factory=dict)
    performance: dict = Field(default_factory=dict)
    accessibility: dict = Field(default_factory=dict)
    mobile: dict = Field(default_factory=dict)
    seo: dict = Field(default_factory=dict)
    content: dict = Field(default_factory=dict)
    conversion: dict = Field(default_factory=dict)
    scores: dict[str, float] = Field(default_factory=dict)


class AuditRecord(BaseModel):
    """
    Dataset row for a successfully audited page.

    Combines the AI critique with locally computed page signals and run
    metadata.
    """

    url: str
    audit_date: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    analysis_type: str
    viewport: str
    ai_provider: str
    model: str
    score: float
    summary: str
    color_palette: list[str]
    design_flaws: list[str]
    positive_aspects: list[str]
    recommendations: list[str]
    screenshot_path: Optional[str] = None
    technologies: list[str] = Field(default_factory=list)
    technology_stack: dict = Field(default_factory=dict)
    performance: dict = Field(default_factory=dict)
    accessibility: dict = Field(default_factory=dict)
    mobile: dict = Field(default_factory=dict)
    seo: dict = Field(default_factory=dict)
    content: dict = Field(default_factory=dict)
    conversion: dict = Field(default_factory=dict)
    scores: dict[str, float] = Field(default_factory=dict)
    free_tier_remaining: Optional[int] = None
    demo_note: Optional[str] = None


class FailedAuditRecord(BaseModel):
    """Dataset row for a page that could not be audited."""

    url: str
    status: Literal["FAILED", "LIMIT_REACHED"] = "FAILED"
    error: Optional[str] = None
    error_type: Optional[str] = None
    message: Optional[str] = None
    audit_date: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    analysis_type: str
    viewport: str


class UsageCounter:
    """
    Per-run counter enforcing the free-tier page limit.

    Owned by a single audit run and passed to the orchestrator explicitly.
    A slot is reserved before the provider call and released again if the
    call fails, so concurrent pages never overrun the limit.
    """

    def __init__(self, limit: int):
        self.limit = limit
        self.count = 0
        self._lock = asyncio.Lock()

    def can_process(self) -> bool:
        return self.count < self.limit

    async def reserve(self) -> bool:
        async with self._lock:
            if not self.can_process():
                return False
            self.count += 1
            return True

    async def release(self) -> None:
        async with self._lock:
            self.count = max(0, self.count - 1)

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class Config(BaseModel):
    """
    Configuration for the design auditor.

    Loaded from .env file and environment variables.

    Attributes:
        api_key: Provider credential (OpenAI "sk-", OpenRouter "sk-or-", Gemini "AIza")
        category: Default audit category
        viewport: Screenshot viewport preset
        free_tier: Cap the run at free_tier_limit analyzed pages
        free_tier_limit: Pages allowed per run in free-tier mode
        max_concurrency: Pages processed in parallel
        output_dir: Where screenshots and the dataset are written
        log_level: loguru level name
    """

    api_key: Optional[str] = None
    category: AuditCategory = "general"
    viewport: Literal["desktop", "mobile"] = "desktop"
    free_tier: bool = False
    free_tier_limit: int = Field(default=5, ge=1)
    max_concurrency: int = Field(default=5, ge=1, le=50)
    output_dir: str = "audit_output"
    log_level: str = "INFO"

    def has_api_key(self) -> bool:
        """Check if a credential is configured"""
        return self.api_key is not None and len(self.api_key.strip()) > 0
