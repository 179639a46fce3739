# keyscout/crawler/fetcher.py
"""
Fetcher module: HTTP GET of pages and scripts with a per-request timeout.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from keyscout.config import ScanConfig
from keyscout.logger import logger


class FetchError(Exception):
    """A URL could not be fetched: non-2xx status or a transport failure (status None)."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        self.reason = reason
        if status is None:
            message = f"Failed to fetch {url}: {reason}"
        else:
            message = f"Failed to fetch {url}: {status} {reason}".rstrip()
        super().__init__(message)


def build_session(config: ScanConfig) -> ClientSession:
    """Create a session carrying the configured timeout and User-Agent."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches text over a shared session, no retries."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> str:
        """
        Return the decoded body of *url*.

        Raises FetchError when the status is outside 200-299 or the request fails.
        """
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, resp.status, resp.reason or "")
                text = await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchError(url, reason="request timed out") from exc
        except ClientError as exc:
            raise FetchError(url, reason=str(exc) or type(exc).__name__) from exc
        logger.debug("Fetched %s (%d chars)", url, len(text))
        return text


async def fetch_text(url: str, config: ScanConfig) -> str:
    """Fetch a single URL with a short-lived session."""
    async with build_session(config) as session:
        return await Fetcher(session).fetch(url)
