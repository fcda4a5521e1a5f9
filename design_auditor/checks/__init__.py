"""
Automated Page Checks

Heuristic signals computed locally from page HTML to sit alongside the
vision model's critique: detected technologies plus performance,
accessibility, mobile, SEO, content and conversion metrics, each scored
from 0 to 10.
"""

from ..models import PageSignals
from .accessibility import check_accessibility
from .content import check_content
from .conversion import check_conversion
from .mobile import check_mobile
from .performance import check_performance
from .scoring import score_page
from .seo import check_seo
from .technologies import detect_technologies, technology_stack

__all__ = [
    "check_accessibility",
    "check_content",
    "check_conversion",
    "check_mobile",
    "check_performance",
    "check_seo",
    "detect_technologies",
    "technology_stack",
    "score_page",
    "collect_signals",
]


def collect_signals(html: str) -> PageSignals:
    """Run every HTML check and bundle the results with their scores."""
    metrics = {
        "performance": check_performance(html),
        "accessibility": check_accessibility(html),
        "mobile": check_mobile(html),
        "seo": check_seo(html),
        "content": check_content(html),
        "conversion": check_conversion(html),
    }
    return PageSignals(
        technologies=detect_technologies(html),
        technology_stack=technology_stack(html),
        scores=score_page(metrics),
        **metrics
    )
