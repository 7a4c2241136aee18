"""Cached access to upstream documentation documents."""

import logging
import re
from typing import Any, Dict

from .cache import TTLCache
from .errors import UpstreamError
from .models import DocumentationPayload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://developer.apple.com/tutorials/data"

_DOCUMENTATION_PREFIX = re.compile(r'^documentation(/|$)', re.IGNORECASE)


def normalize_path(path: str) -> str:
    """Strip the decorations users add around a documentation path.

    ``"/documentation/SwiftUI/View.json"`` becomes ``"SwiftUI/View"``. Case
    is preserved.
    """
    cleaned = (path or "").strip().strip('/')
    cleaned = _DOCUMENTATION_PREFIX.sub('', cleaned, count=1)
    if cleaned.lower().endswith('.json'):
        cleaned = cleaned[:-len('.json')]
    return cleaned.strip('/')


class DocumentLoader:
    """Maps documentation paths to upstream URLs and caches the JSON by URL."""

    def __init__(self, fetcher, cache: TTLCache, base_url: str = DEFAULT_BASE_URL):
        self.fetcher = fetcher
        self.cache = cache
        self.base_url = base_url.rstrip('/')

    def url_for(self, path: str) -> str:
        """Upstream URL for a path such as ``documentation/swiftui``."""
        return f"{self.base_url}/{path.strip('/')}.json"

    async def load_json(self, path: str) -> Dict[str, Any]:
        url = self.url_for(path)
        return await self.cache.get_or_load(url, lambda: self._fetch_object(url))

    async def _fetch_object(self, url: str) -> Dict[str, Any]:
        data = await self.fetcher.fetch_json(url)
        if not isinstance(data, dict):
            raise UpstreamError(url, 200, "Expected a JSON object")
        return data

    async def load_document(self, path: str) -> DocumentationPayload:
        return DocumentationPayload.from_dict(await self.load_json(path))

    async def load_documentation(self, path: str) -> DocumentationPayload:
        """Load a page given a user path with or without ``documentation/``."""
        return await self.load_document(f"documentation/{normalize_path(path)}")
