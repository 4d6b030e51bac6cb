"""
HTTP fetcher for the eightstream pipeline. Wraps aiohttp with common
defaults, a fixed total timeout, and optional URL-rewriting proxy support.
"""
from __future__ import annotations
import aiohttp
import asyncio
import json
import logging
from typing import Optional
from urllib.parse import quote

from .config import DEFAULT_TIMEOUT
from .errors import NetworkError, ParseError

log = logging.getLogger("eightstream.fetcher")

DEFAULT_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


def proxied_url(url: str, proxy_url: str | None) -> str:
    """Rewrite ``url`` through a forward proxy that takes the target percent-encoded."""
    if not proxy_url:
        return url
    return f"{proxy_url}{quote(url, safe='')}"


class Fetcher:
    def __init__(self, *, timeout: int = DEFAULT_TIMEOUT, proxy_url: str | None = None):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.proxy_url = proxy_url
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers={"User-Agent": DEFAULT_UA},
                connector=aiohttp.TCPConnector(ssl=False),
            )
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # ── convenience methods ──────────────────

    async def get(
        self,
        url: str,
        *,
        headers: dict | None = None,
        params: dict | None = None,
        proxied: bool = True,
    ) -> str:
        """GET ``url`` and return the body as text. Raises NetworkError on any failure."""
        full = proxied_url(url, self.proxy_url) if proxied else url
        session = await self._get_session()
        try:
            async with session.get(full, headers=headers or {}, params=params) as resp:
                if not resp.ok:
                    raise NetworkError(
                        f"Response not OK: {resp.status} {resp.reason}",
                        url=url, status=resp.status,
                    )
                return await resp.text(errors="replace")
        except NetworkError as e:
            log.error("[eightstream] Fetch error for %s: %s", url, e)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error("[eightstream] Fetch error for %s: %s", url, str(e) or type(e).__name__)
            raise NetworkError(f"Fetch failed for {url}: {str(e) or type(e).__name__}", url=url) from e

    async def get_json(
        self,
        url: str,
        *,
        headers: dict | None = None,
        params: dict | None = None,
        proxied: bool = True,
    ) -> dict | list:
        text = await self.get(url, headers=headers, params=params, proxied=proxied)
        try:
            return json.loads(text)
        except ValueError as e:
            log.error("[eightstream] Expected JSON but failed to parse. Content: %s", text[:200])
            raise ParseError(f"Failed to parse JSON response from {url}") from e
