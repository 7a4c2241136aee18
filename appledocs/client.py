"""Client facade for Apple's developer documentation JSON API."""

import logging
from typing import Dict, List, Optional

from config.settings import ClientSettings
from .cache import TTLCache
from .fetcher import DocsFetcher
from .loader import DocumentLoader
from .models import DocumentationPayload, SymbolReference, TechnologyRecord
from .resolver import PathResolver, Resolution
from .search import SearchFilters, SymbolSearch
from .technologies import TechnologyIndex

logger = logging.getLogger(__name__)


class AppleDocsClient:
    """Wires the fetcher, cache, technology index, resolver and search.

    Use as an async context manager, or call ``close()`` when done::

        async with AppleDocsClient() as client:
            results = await client.search_global("*Controller")
    """

    def __init__(self, settings: Optional[ClientSettings] = None, fetcher=None,
                 cache: Optional[TTLCache] = None):
        self.settings = settings or ClientSettings()
        self.fetcher = fetcher if fetcher is not None else DocsFetcher(
            request_timeout=self.settings.request_timeout,
            user_agent=self.settings.user_agent
        )
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=self.settings.cache_ttl_seconds)
        self.loader = DocumentLoader(self.fetcher, self.cache, self.settings.base_url)
        self.technologies = TechnologyIndex(self.loader)
        self.resolver = PathResolver(self.loader, self.technologies)
        self.search = SymbolSearch(
            self.loader, self.technologies,
            framework_limit=self.settings.global_search_framework_limit
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        close = getattr(self.fetcher, 'close', None)
        if close is not None:
            await close()

    def make_filters(self, symbol_type: Optional[str] = None, platform: Optional[str] = None,
                     max_results: Optional[int] = None) -> SearchFilters:
        return SearchFilters(
            symbol_type=symbol_type or None,
            platform=platform or None,
            max_results=max_results if max_results is not None else self.settings.default_max_results
        )

    async def get_technologies(self) -> Dict[str, TechnologyRecord]:
        return await self.technologies.get_technologies()

    async def get_document(self, canonical_path: str) -> DocumentationPayload:
        """Load a page by its canonical path, e.g. ``documentation/swiftui``."""
        return await self.loader.load_document(canonical_path)

    async def get_framework(self, name: str) -> DocumentationPayload:
        return await self.resolver.get_framework(name)

    async def get_symbol(self, path: str) -> DocumentationPayload:
        return await self.resolver.get_symbol(path)

    async def resolve(self, path: str) -> Resolution:
        return await self.resolver.resolve(path)

    async def search_global(self, query: str, filters: Optional[SearchFilters] = None) -> List[SymbolReference]:
        return await self.search.search_global(query, filters or self.make_filters())

    async def search_framework(self, framework_name: str, query: str,
                               filters: Optional[SearchFilters] = None) -> List[SymbolReference]:
        return await self.search.search_framework(framework_name, query, filters or self.make_filters())
