"""
Demo Vision Provider

Offline provider used when no credential is configured. Returns canned
critiques so the rest of the pipeline can be tried without an API key.
"""

from loguru import logger

from ..models import AnalysisRequest, AnalysisResult, ProviderKind
from .base import VisionProvider


DEMO_NOTE = "This is a demo analysis. Provide your API key for real AI-powered insights."

DEMO_RESULTS = {
    "general": {
        "score": 7.5,
        "summary": (
            "Demo analysis: This appears to be a well-structured website with good "
            "visual hierarchy. The layout is clean and professional."
        ),
        "color_palette": ["#FFFFFF", "#000000", "#0066CC", "#F5F5F5", "#333333"],
        "design_flaws": [
            "Demo: Some elements could benefit from better spacing",
            "Demo: Color contrast could be improved in certain areas",
            "Demo: Navigation could be more prominent",
        ],
        "positive_aspects": [
            "Demo: Clean and professional layout",
            "Demo: Good use of whitespace",
            "Demo: Consistent typography throughout",
        ],
        "recommendations": [
            "Demo: Consider adding more visual hierarchy",
            "Demo: Improve color contrast for better accessibility",
            "Demo: Add more prominent call-to-action buttons",
        ],
    },
    "accessibility": {
        "score": 6.8,
        "summary": (
            "Demo accessibility analysis: The site has basic accessibility features "
            "but needs improvements in contrast and keyboard navigation."
        ),
        "color_palette": ["#FFFFFF", "#000000", "#0066CC", "#F5F5F5"],
        "design_flaws": [
            "Demo: Insufficient color contrast in some areas",
            "Demo: Missing alt text for images",
            "Demo: Keyboard navigation could be improved",
        ],
        "positive_aspects": [
            "Demo: Semantic HTML structure appears to be used",
            "Demo: Text is generally readable",
            "Demo: Basic heading structure is present",
        ],
        "recommendations": [
            "Demo: Increase color contrast to meet WCAG standards",
            "Demo: Add descriptive alt text for all images",
            "Demo: Implement better keyboard navigation",
        ],
    },
}


class DemoProvider(VisionProvider):
    """Canned critiques, no network access."""

    def __init__(self):
        super().__init__(kind=ProviderKind.DEMO, client=None, model="demo")

    async def invoke(self, request: AnalysisRequest) -> AnalysisResult:
        logger.info(f"Generating demo analysis for {request.subject_url}")
        data = DEMO_RESULTS.get(request.category, DEMO_RESULTS["general"])
        return AnalysisResult(**data)
