# File: keyscout/engine.py
"""keyscout.engine: orchestration layer that runs a crawl and returns the aggregate report."""

from __future__ import annotations

from keyscout.aggregator import CrawlReport
from keyscout.config import ScanConfig
from keyscout.crawler.crawler import ScriptCrawler
from keyscout.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(root_url: str, cfg: ScanConfig) -> CrawlReport:
    """
    Run a crawl of *root_url* inside a crawler context and return its report.

    A failure to fetch the root page propagates; per-script failures are
    recorded in the report.
    """
    logger.info("Starting crawl of %s", root_url)
    async with ScriptCrawler(cfg) as crawler:
        return await crawler.crawl(root_url)
