"""Resolution of user-supplied names and paths to documentation pages.

Frameworks and symbols share the same visual path syntax upstream but not
the same canonical form, so a bare framework name such as ``SwiftUI`` fails
a direct symbol lookup. The resolver turns that failure into an explicit
``AMBIGUOUS_FRAMEWORK`` outcome by consulting the technology index.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import AmbiguousFrameworkRequest, AppleDocsError, NotFound
from .loader import DocumentLoader, normalize_path
from .models import DocumentationPayload, TechnologyRecord
from .technologies import TechnologyIndex

logger = logging.getLogger(__name__)


class ResolutionKind(str, Enum):
    RESOLVED = "resolved"
    AMBIGUOUS_FRAMEWORK = "ambiguous_framework"
    NOT_FOUND = "not_found"


@dataclass
class Resolution:
    kind: ResolutionKind
    requested_path: str
    payload: Optional[DocumentationPayload] = None
    technology: Optional[TechnologyRecord] = None
    error: Optional[NotFound] = None

    @property
    def canonical_path(self) -> Optional[str]:
        if self.technology is not None:
            return self.technology.canonical_path
        return None

    def unwrap(self) -> DocumentationPayload:
        """Return the payload or raise the failure this resolution stands for."""
        if self.kind == ResolutionKind.RESOLVED:
            return self.payload
        if self.kind == ResolutionKind.AMBIGUOUS_FRAMEWORK:
            raise AmbiguousFrameworkRequest(self.requested_path, self.technology, self.canonical_path)
        raise self.error


class PathResolver:
    def __init__(self, loader: DocumentLoader, technologies: TechnologyIndex):
        self.loader = loader
        self.technologies = technologies

    async def resolve(self, path: str) -> Resolution:
        normalized = normalize_path(path)
        if not normalized:
            raise ValueError("A framework name or documentation path is required")

        try:
            payload = await self.loader.load_document(f"documentation/{normalized}")
            return Resolution(ResolutionKind.RESOLVED, path, payload=payload)
        except NotFound as e:
            technology = await self._match_technology(normalized)
            if technology is None:
                return Resolution(ResolutionKind.NOT_FOUND, path, error=e)
            logger.info(f"'{path}' names the framework {technology.title}, not a symbol")
            return Resolution(ResolutionKind.AMBIGUOUS_FRAMEWORK, path, technology=technology)

    async def _match_technology(self, normalized: str) -> Optional[TechnologyRecord]:
        """Technology whose title equals the first segment or the whole path."""
        try:
            first_segment = normalized.split('/')[0]
            return await self.technologies.find_by_title(first_segment, normalized)
        except AppleDocsError as e:
            logger.warning(f"Technology index unavailable while resolving '{normalized}': {e}")
            return None

    async def get_symbol(self, path: str) -> DocumentationPayload:
        return (await self.resolve(path)).unwrap()

    async def get_framework(self, name: str) -> DocumentationPayload:
        return await self.loader.load_documentation(name)
