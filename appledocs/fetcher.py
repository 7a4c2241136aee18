"""HTTP fetcher for the upstream documentation JSON API."""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from observability.logging import log_slow_call
from .errors import NotFound, UpstreamError, UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = "apple-docs-mcp/1.0"
NOT_FOUND_STATUSES = {404, 410}


class DocsFetcher:
    """Single-attempt JSON GET with a bounded timeout.

    There are no retries: the first failure is raised to the caller.
    """

    def __init__(self,
                 request_timeout: float = DEFAULT_TIMEOUT_SECONDS,
                 user_agent: str = DEFAULT_USER_AGENT,
                 session: Optional[aiohttp.ClientSession] = None):
        self.request_timeout = request_timeout
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def open(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
                headers={
                    'User-Agent': self.user_agent,
                    'Accept': 'application/json'
                }
            )
            self._owns_session = True

    async def close(self):
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None

    @log_slow_call(threshold_ms=5000.0)
    async def fetch_json(self, url: str) -> Dict[str, Any]:
        """GET ``url`` and decode its JSON body.

        Raises:
            UpstreamUnavailable: on timeout or connection failure
            NotFound: on HTTP 404/410
            UpstreamError: on any other non-success status or a bad body
        """
        if self.session is None:
            await self.open()

        logger.debug(f"Fetching {url}")
        try:
            async with self.session.get(url, allow_redirects=True) as response:
                if response.status in NOT_FOUND_STATUSES:
                    raise NotFound(url, response.status)
                if response.status >= 400:
                    raise UpstreamError(url, response.status, response.reason or "")
                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise UpstreamError(url, response.status, f"Invalid JSON body: {e}")
                if not isinstance(data, dict):
                    raise UpstreamError(url, response.status, "Expected a JSON object")
                return data

        # aiohttp timeout errors are also ClientErrors, so match them first.
        except asyncio.TimeoutError as e:
            logger.warning(f"Timeout fetching {url} after {self.request_timeout}s")
            raise UpstreamUnavailable(url, "timeout", f"no response within {self.request_timeout}s") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Connection error fetching {url}: {e}")
            raise UpstreamUnavailable(url, "connection", str(e)) from e
