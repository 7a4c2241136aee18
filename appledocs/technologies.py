"""Loader for the root technologies index."""

import logging
from typing import Dict, List, Optional

from .loader import DocumentLoader
from .models import TechnologyRecord

logger = logging.getLogger(__name__)

TECHNOLOGIES_PATH = "documentation/technologies"


class TechnologyIndex:
    """Read-only view of ``documentation/technologies.json``.

    The mapping keeps the upstream insertion order. That order is only used
    for display and for choosing which frameworks global search scans.
    """

    def __init__(self, loader: DocumentLoader):
        self.loader = loader

    async def get_technologies(self) -> Dict[str, TechnologyRecord]:
        data = await self.loader.load_json(TECHNOLOGIES_PATH)
        references = data.get('references') or {}
        return {
            identity: TechnologyRecord.from_dict(identity, record)
            for identity, record in references.items()
            if isinstance(record, dict) and record.get('title')
        }

    async def title_lookup(self) -> Dict[str, str]:
        """Lower-cased technology title -> identity."""
        lookup: Dict[str, str] = {}
        for identity, record in (await self.get_technologies()).items():
            lookup.setdefault(record.title.lower(), identity)
        return lookup

    async def find_by_title(self, *names: str) -> Optional[TechnologyRecord]:
        """First technology whose title matches one of ``names``, ignoring case."""
        by_title = _by_title(await self.get_technologies())
        for name in names:
            record = by_title.get(name.strip().lower())
            if record is not None:
                return record
        return None

    async def frameworks(self) -> List[TechnologyRecord]:
        technologies = await self.get_technologies()
        return [record for record in technologies.values() if record.is_framework]


def _by_title(technologies: Dict[str, TechnologyRecord]) -> Dict[str, TechnologyRecord]:
    by_title: Dict[str, TechnologyRecord] = {}
    for record in technologies.values():
        by_title.setdefault(record.title.lower(), record)
    return by_title
