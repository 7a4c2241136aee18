"""Client for Apple's developer documentation JSON API.

Provides caching, path resolution and wildcard symbol search.
"""

from .cache import TTLCache, CacheEntry
from .client import AppleDocsClient
from .errors import (
    AppleDocsError,
    UpstreamUnavailable,
    UpstreamError,
    NotFound,
    AmbiguousFrameworkRequest
)
from .fetcher import DocsFetcher
from .loader import DocumentLoader, normalize_path
from .models import (
    Platform,
    TopicSection,
    ReferenceRecord,
    DocumentMetadata,
    DocumentationPayload,
    TechnologyRecord,
    SymbolReference
)
from .resolver import PathResolver, Resolution, ResolutionKind
from .search import SymbolSearch, SearchFilters, WildcardPattern
from .status import APIStatus, StatusIndicator, classify_status
from .technologies import TechnologyIndex
from .text import extract_text, format_platforms

__all__ = [
    # Client
    'AppleDocsClient',

    # Cache and fetching
    'TTLCache',
    'CacheEntry',
    'DocsFetcher',
    'DocumentLoader',
    'normalize_path',

    # Errors
    'AppleDocsError',
    'UpstreamUnavailable',
    'UpstreamError',
    'NotFound',
    'AmbiguousFrameworkRequest',

    # Models
    'Platform',
    'TopicSection',
    'ReferenceRecord',
    'DocumentMetadata',
    'DocumentationPayload',
    'TechnologyRecord',
    'SymbolReference',

    # Resolution and search
    'TechnologyIndex',
    'PathResolver',
    'Resolution',
    'ResolutionKind',
    'SymbolSearch',
    'SearchFilters',
    'WildcardPattern',

    # Status and text
    'APIStatus',
    'StatusIndicator',
    'classify_status',
    'extract_text',
    'format_platforms'
]
