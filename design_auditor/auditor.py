"""
Design Auditor Orchestrator

Coordinates screenshot capture, heuristic page checks and vision analysis
for a batch of URLs, and writes one dataset record per URL.
"""

import asyncio
from contextlib import nullcontext
from pathlib import Path
from typing import Iterable, Optional, Union

from loguru import logger

from .capture import ScreenshotCapturer
from .checks import collect_signals
from .dataset import Dataset
from .errors import AuthenticationError
from .models import (
    VIEWPORTS,
    AnalysisRequest,
    AuditRecord,
    Config,
    FailedAuditRecord,
    ProviderKind,
    UsageCounter,
)
from .providers.base import VisionProvider
from .providers.demo import DEMO_NOTE


def normalize_urls(start_urls: Iterable[Union[str, dict]]) -> list[str]:
    """
    Turn start URLs into a deduplicated list, preserving order.

    Entries may be plain strings or mappings with a "url" key.
    """
    urls = []
    seen = set()
    for item in start_urls:
        url = item.get("url") if isinstance(item, dict) else item
        url = (url or "").strip()
        if url and url not in seen:
            seen.add(url)
            urls.append(url)
    return urls


class DesignAuditor:
    """
    Orchestrates the audit of a batch of pages.

    Coordinates:
    1. Screenshot capture (via Playwright)
    2. Heuristic HTML checks (technologies, per-area metrics and scores)
    3. Vision model analysis (via provider)
    4. Persisting a success or failure record per URL

    Pages run concurrently up to config.max_concurrency. A failure on one
    page is recorded and the batch continues, except that a rejected
    credential fails every page not yet sent to the provider.

    Example:
        config = load_config()
        auditor = DesignAuditor(get_provider(config), config)
        records = await auditor.audit_urls(["https://example.com"])
    """

    def __init__(
        self,
        provider: VisionProvider,
        config: Config,
        capturer: Optional[ScreenshotCapturer] = None,
        dataset: Optional[Dataset] = None,
        usage: Optional[UsageCounter] = None
    ):
        """
        Initialize design auditor.

        Args:
            provider: Resolved vision provider
            config: Run configuration (category, viewport, concurrency, ...)
            capturer: Already started capturer; a new one is started per run if None
            dataset: Output dataset; defaults to dataset.jsonl in config.output_dir
            usage: Free-tier counter; created from config when free-tier mode is on
        """
        self.provider = provider
        self.config = config
        self.output_dir = Path(config.output_dir)
        self.capturer = capturer
        self.dataset = dataset or Dataset(self.output_dir)

        if usage is None and config.free_tier and provider.kind is not ProviderKind.DEMO:
            usage = UsageCounter(config.free_tier_limit)
        self.usage = usage

        self._auth_failure: Optional[AuthenticationError] = None

    async def audit_urls(self, start_urls: Iterable[Union[str, dict]]) -> list[dict]:
        """
        Audit every URL and return the dataset records in input order.

        Raises:
            ValueError: If no URLs are given
        """
        urls = normalize_urls(start_urls)
        if not urls:
            raise ValueError("No URLs provided. Please add at least one URL to analyze.")

        logger.info(
            f"Auditing {len(urls)} URL(s): category={self.config.category}, "
            f"viewport={self.config.viewport}, provider={self.provider.name}"
        )

        semaphore = asyncio.Semaphore(self.config.max_concurrency)

        async def bounded(url: str, capturer: ScreenshotCapturer) -> dict:
            async with semaphore:
                return await self.audit_url(url, capturer)

        async with self._open_capturer() as capturer:
            records = await asyncio.gather(*(bounded(url, capturer) for url in urls))

        failed = sum(1 for record in records if record.get("status"))
        logger.info(f"Audit finished: {len(records) - failed} succeeded, {failed} not audited")
        return list(records)

    async def audit_url(self, url: str, capturer: ScreenshotCapturer) -> dict:
        """Audit a single page and push its record to the dataset."""
        if self._auth_failure is not None:
            return await self._push_failure(url, self._auth_failure)

        reserved = False
        if self.usage is not None:
            if not await self.usage.reserve():
                logger.warning(f"Free tier limit reached ({self.usage.limit} audits per run), skipping {url}")
                return await self.dataset.push(FailedAuditRecord(
                    url=url,
                    status="LIMIT_REACHED",
                    message=(
                        f"Free tier limit reached ({self.usage.limit} audits per run). "
                        "Disable free-tier mode to audit more pages."
                    ),
                    analysis_type=self.config.category,
                    viewport=self.config.viewport
                ))
            reserved = True

        logger.info(f"Analyzing {url}")

        try:
            page = await capturer.capture(url)
            signals = await asyncio.to_thread(collect_signals, page.html)
            result = await self.provider.invoke(AnalysisRequest(
                image=page.png,
                category=self.config.category,
                subject_url=url
            ))
        except Exception as e:
            if reserved:
                await self.usage.release()
            if isinstance(e, AuthenticationError) and self._auth_failure is None:
                logger.error("API key rejected by provider; remaining pages will not be analyzed")
                self._auth_failure = e
            logger.error(f"Error processing {url}: {type(e).__name__}: {e}")
            return await self._push_failure(url, e)

        record = AuditRecord(
            url=url,
            analysis_type=self.config.category,
            viewport=self.config.viewport,
            ai_provider=self.provider.name,
            model=self.provider.model,
            screenshot_path=str(page.path),
            **signals.model_dump(),
            free_tier_remaining=self.usage.remaining if self.usage is not None else None,
            demo_note=DEMO_NOTE if self.provider.kind is ProviderKind.DEMO else None,
            **result.model_dump()
        )

        logger.info(f"Audit complete for {url} - Score: {record.score}/10")
        return await self.dataset.push(record)

    async def _push_failure(self, url: str, error: Exception) -> dict:
        return await self.dataset.push(FailedAuditRecord(
            url=url,
            status="FAILED",
            error=str(error),
            error_type=type(error).__name__,
            analysis_type=self.config.category,
            viewport=self.config.viewport
        ))

    def _open_capturer(self):
        if self.capturer is not None:
            return nullcontext(self.capturer)
        return ScreenshotCapturer(
            viewport=VIEWPORTS[self.config.viewport],
            output_dir=self.output_dir / "screenshots"
        )
