# === FILE: keyscout/crawler/crawler.py ===
"""
Crawl orchestration: fetch a page, find its scripts and scan them with a
bounded pool of workers. One failing script never stops the others.
"""
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Tuple

from aiohttp import ClientSession

from keyscout.aggregator import CrawlReport, ScriptOutcome
from keyscout.config import ScanConfig
from keyscout.crawler.fetcher import Fetcher, build_session
from keyscout.crawler.script_extractor import extract_script_srcs
from keyscout.logger import get_logger
from keyscout.scanner import scan

__all__ = ("ScriptCrawler",)


class ScriptCrawler:
    """Fetches a page, discovers its scripts and scans each one for API-key pairs."""

    def __init__(self, config: ScanConfig) -> None:
        self.config = config
        self.concurrency: int = config.concurrency
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> ScriptCrawler:
        self.session = build_session(self.config)
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def discover(self, root_url: str) -> List[str]:
        """Fetch *root_url* and return its script URLs. FetchError propagates."""
        if not self.fetcher:
            raise RuntimeError("Session not initialized")
        html = await self.fetcher.fetch(root_url)
        scripts = extract_script_srcs(html, root_url)
        self.logger.info("Found %d scripts on %s", len(scripts), root_url)
        return scripts

    async def crawl(self, root_url: str) -> CrawlReport:
        """Discover the scripts of *root_url* and scan all of them."""
        scripts = await self.discover(root_url)
        outcomes = await self.scan_scripts(scripts)
        return CrawlReport(root_url=root_url, scripts=scripts, outcomes=outcomes)

    async def scan_scripts(self, scripts: List[str]) -> List[ScriptOutcome]:
        """Scan *scripts* with at most ``concurrency`` in flight; results keep input order."""
        if not self.fetcher:
            raise RuntimeError("Session not initialized")
        self.logger.info("Scanning %d scripts (concurrency %d)", len(scripts), self.concurrency)
        start = time.monotonic()
        queue: asyncio.Queue[Tuple[int, str]] = asyncio.Queue()
        for item in enumerate(scripts):
            queue.put_nowait(item)
        results: List[Optional[ScriptOutcome]] = [None] * len(scripts)
        workers = [
            asyncio.create_task(self._worker(queue, results))
            for _ in range(min(self.concurrency, len(scripts)))
        ]
        await queue.join()
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        outcomes: List[ScriptOutcome] = [
            r if r is not None else ScriptOutcome(url=scripts[i], error="Scan did not complete")
            for i, r in enumerate(results)
        ]
        duration = time.monotonic() - start
        self.logger.info(
            "Done: %d scripts, %d pairs, %d failed in %.2f s",
            len(outcomes),
            sum(len(o.pairs) for o in outcomes),
            sum(1 for o in outcomes if not o.ok),
            duration,
        )
        return outcomes

    async def _worker(
        self, queue: asyncio.Queue[Tuple[int, str]], results: List[Optional[ScriptOutcome]]
    ) -> None:
        while True:
            try:
                index, url = await queue.get()
            except asyncio.CancelledError:
                break
            try:
                results[index] = await self.scan_script(url)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                self.logger.warning("Failed %s: %s", url, exc)
                results[index] = ScriptOutcome(url=url, error=str(exc))
            finally:
                queue.task_done()

    async def scan_script(self, url: str) -> ScriptOutcome:
        """One isolated unit of work: any failure becomes an error outcome for *url* only."""
        if not self.fetcher:
            raise RuntimeError("Session not initialized")
        try:
            text = await self.fetcher.fetch(url)
            pairs = scan(text, unique=self.config.unique, context=self.config.context)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.logger.warning("Failed %s: %s", url, exc)
            return ScriptOutcome(url=url, error=str(exc))
        self.logger.debug("%s: %d pairs", url, len(pairs))
        return ScriptOutcome(url=url, pairs=pairs)
