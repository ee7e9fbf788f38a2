"""
Fetcher Tool — fetches portal pages with rotating browser identities.
Uses httpx with paced requests and a single backoff retry on HTTP 403.
"""

import asyncio
import random
import time
from typing import Callable, Optional

import httpx

from config.settings import Settings, settings as default_settings
from models.errors import DetailFetchError, FetchError, RateLimited


USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) Gecko/20100101 Firefox/122.0",
)

# Full browser-like header set sent with every page request
BROWSER_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
        "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "de-DE,de;q=0.9,en-US;q=0.8,en;q=0.7",
    "Accept-Encoding": "gzip, deflate, br",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Sec-Ch-Ua": '"Chromium";v="120", "Google Chrome";v="120", "Not_A Brand";v="99"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Cache-Control": "max-age=0",
    "Pragma": "no-cache",
    "Referer": "https://www.google.com/",
}

# Plainer headers used for the one retry after a 403
FALLBACK_HEADERS = {
    "User-Agent": USER_AGENTS[0],
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
}

DETAIL_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9,de;q=0.8",
}

MAX_REDIRECTS = 5


class PageFetcher:
    """
    Paced HTTP client for portal pages.

    Args:
        settings: Timeouts, delays and backoff durations.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
        sleep: Blocking sleep used for pacing and the 403 backoff.
        async_sleep: Coroutine sleep used between detail batches.
        rng: Source of randomness for user agents and delays.
    """

    def __init__(
        self,
        settings: Settings = default_settings,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep=asyncio.sleep,
        rng: random.Random = None,
    ):
        self.settings = settings
        self.sleep = sleep
        self.async_sleep = async_sleep
        self.rng = rng or random.Random()
        self._transport = transport
        self._client = httpx.Client(
            transport=transport,
            timeout=settings.request_timeout,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._client.close()

    def random_user_agent(self) -> str:
        return self.rng.choice(USER_AGENTS)

    def page_headers(self) -> dict:
        return {"User-Agent": self.random_user_agent(), **BROWSER_HEADERS}

    def fetch(self, url: str, pace: bool = True) -> tuple[int, str]:
        """
        Fetch a search page.

        Waits a random 3-8 s (configurable) first. A 403 is retried once
        after the rate-limit wait with fallback headers.

        Returns:
            (status_code, html) for any status below 500.

        Raises:
            RateLimited: the retry was answered with 403 again.
            FetchError: timeout, transport error or 5xx.
        """
        if pace:
            self.sleep(self.rng.uniform(self.settings.page_delay_min, self.settings.page_delay_max))

        status, html = self._get(url, self.page_headers(), self.settings.request_timeout)

        if status == 403:
            print(f"[Fetcher] [RATE LIMIT] Received 403 for {url}. Waiting {self.settings.rate_limit_wait:g}s...")
            self.sleep(self.settings.rate_limit_wait)
            status, html = self._get(url, FALLBACK_HEADERS, self.settings.retry_timeout)
            if status == 403:
                raise RateLimited(url)

        return status, html

    def _get(self, url: str, headers: dict, timeout: float) -> tuple[int, str]:
        try:
            response = self._client.get(url, headers=headers, timeout=timeout)
        except httpx.TimeoutException as e:
            raise FetchError(url, f"Timeout after {timeout}s") from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"HTTP error: {e}") from e

        if response.status_code >= 500:
            raise FetchError(url, f"HTTP {response.status_code}")
        return response.status_code, response.text

    def async_client(self) -> httpx.AsyncClient:
        """Client for concurrent detail fetches; the caller closes it."""
        transport = self._transport if isinstance(self._transport, httpx.AsyncBaseTransport) else None
        return httpx.AsyncClient(
            transport=transport,
            timeout=self.settings.request_timeout,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        )

    async def fetch_detail(self, client: httpx.AsyncClient, url: str) -> str:
        """
        Fetch a listing's own page and return its HTML.

        Raises:
            DetailFetchError: transport error or any status >= 400.
        """
        headers = {"User-Agent": self.random_user_agent(), **DETAIL_HEADERS}
        try:
            response = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise DetailFetchError(url, f"Timeout after {self.settings.request_timeout}s") from e
        except httpx.HTTPError as e:
            raise DetailFetchError(url, f"HTTP error: {e}") from e

        if response.status_code >= 400:
            raise DetailFetchError(url, f"HTTP {response.status_code}")
        return response.text
