"""Wildcard symbol search over framework documentation pages.

Queries use glob syntax: ``*`` matches any run of characters and ``?``
exactly one. Wildcard queries are anchored to the whole symbol title, so
``*Controller`` matches ``UIViewController`` but not
``UIViewControllerDelegate``. A query without wildcards is a
case-insensitive substring search.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .errors import AppleDocsError
from .loader import DocumentLoader
from .models import DocumentationPayload, SymbolReference, TechnologyRecord
from .technologies import TechnologyIndex
from .text import format_platforms

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 20
DEFAULT_GLOBAL_FRAMEWORK_LIMIT = 5

WILDCARD_CHARS = ('*', '?')


class WildcardPattern:
    """A query compiled once per search call."""

    def __init__(self, query: str):
        if query is None or not query.strip():
            raise ValueError("Search query must not be empty")
        self.query = query.strip()
        self.has_wildcards = any(c in self.query for c in WILDCARD_CHARS)
        self._needle = self.query.lower()
        self._regex = None
        if self.has_wildcards:
            self._regex = re.compile(self._translate(self.query), re.IGNORECASE | re.DOTALL)

    @staticmethod
    def _translate(query: str) -> str:
        parts = []
        for char in query:
            if char == '*':
                parts.append('.*')
            elif char == '?':
                parts.append('.')
            else:
                parts.append(re.escape(char))
        return ''.join(parts)

    def matches(self, candidate: Optional[str]) -> bool:
        if not candidate:
            return False
        if self._regex is not None:
            return self._regex.fullmatch(candidate) is not None
        return self._needle in candidate.lower()

    def __repr__(self) -> str:
        return f"WildcardPattern({self.query!r})"


@dataclass(frozen=True)
class SearchFilters:
    symbol_type: Optional[str] = None
    platform: Optional[str] = None
    max_results: int = DEFAULT_MAX_RESULTS

    def __post_init__(self):
        if self.max_results < 1:
            raise ValueError("max_results must be at least 1")

    def accepts(self, result: SymbolReference) -> bool:
        if self.symbol_type:
            if (result.symbol_kind or '').lower() != self.symbol_type.strip().lower():
                return False
        if self.platform:
            if self.platform.strip().lower() not in (result.platforms or '').lower():
                return False
        return True


class SymbolSearch:
    """Walks framework topic sections and collects matching references."""

    def __init__(self, loader: DocumentLoader, technologies: TechnologyIndex,
                 framework_limit: int = DEFAULT_GLOBAL_FRAMEWORK_LIMIT):
        if framework_limit < 1:
            raise ValueError("framework_limit must be at least 1")
        self.loader = loader
        self.technologies = technologies
        self.framework_limit = framework_limit

    def _collect(self, payload: DocumentationPayload, framework: str, pattern: WildcardPattern,
                 filters: SearchFilters, results: List[SymbolReference]) -> None:
        """Append matches from one framework page until the cap is hit."""
        fallback_platforms = payload.metadata.platforms
        seen = set()
        for section in payload.topic_sections:
            for identifier in section.identifiers:
                if len(results) >= filters.max_results:
                    return
                if identifier in seen:
                    continue
                seen.add(identifier)

                ref = payload.reference(identifier)
                if ref is None or not pattern.matches(ref.title):
                    continue
                candidate = SymbolReference.from_reference(ref, framework, fallback_platforms)
                if filters.accepts(candidate):
                    results.append(candidate)

    async def search_framework(self, framework_name: str, query: str,
                               filters: Optional[SearchFilters] = None) -> List[SymbolReference]:
        """Search one framework. A failure to load it is raised."""
        filters = filters or SearchFilters()
        pattern = WildcardPattern(query)
        payload = await self.loader.load_documentation(framework_name)

        results: List[SymbolReference] = []
        self._collect(payload, payload.title or framework_name, pattern, filters, results)
        logger.debug(f"Framework search {pattern!r} in {framework_name}: {len(results)} results")
        return results

    async def search_global(self, query: str,
                            filters: Optional[SearchFilters] = None) -> List[SymbolReference]:
        """Best-effort search across the first ``framework_limit`` frameworks.

        Frameworks that fail to load are skipped.
        """
        filters = filters or SearchFilters()
        pattern = WildcardPattern(query)
        frameworks = (await self.technologies.frameworks())[:self.framework_limit]

        results: List[SymbolReference] = []
        for framework in frameworks:
            if len(results) >= filters.max_results:
                break
            payload = await self._load_framework(framework)
            if payload is None:
                continue
            self._collect(payload, framework.title, pattern, filters, results)

        logger.debug(f"Global search {pattern!r} over {len(frameworks)} frameworks: {len(results)} results")
        return results

    async def _load_framework(self, framework: TechnologyRecord) -> Optional[DocumentationPayload]:
        try:
            return await self.loader.load_document(framework.canonical_path)
        except AppleDocsError as e:
            logger.warning(f"Skipping {framework.title} in global search: {e}")
            return None
