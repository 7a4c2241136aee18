"""Typed records for the upstream documentation JSON.

The upstream payloads are loosely shaped, so every record is built through a
``from_dict`` that tolerates missing optional fields.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .text import extract_text, format_platforms

# Declaration keywords that name a symbol kind differently from the keyword.
KEYWORD_KINDS = {
    "func": "function",
    "var": "property",
    "let": "property",
    "init": "initializer",
    "subscript": "subscript",
    "case": "case",
    "typealias": "typealias",
    "associatedtype": "associatedtype",
    "operator": "operator",
    "macro": "macro",
}

# Modifiers that may precede the declaration keyword.
KEYWORD_MODIFIERS = {
    "static", "final", "open", "public", "mutating", "nonmutating",
    "convenience", "required", "override", "dynamic", "optional", "indirect",
    "nonisolated",
}


@dataclass
class Platform:
    """Availability of a symbol on one platform."""
    name: str
    introduced_at: Optional[str] = None
    beta: bool = False
    deprecated: bool = False
    deprecated_at: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecated_at) or self.deprecated

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Platform':
        return cls(
            name=data.get('name', 'Unknown'),
            introduced_at=data.get('introducedAt'),
            beta=data.get('beta') is True,
            deprecated=data.get('deprecated') is True,
            deprecated_at=data.get('deprecatedAt'),
            message=data.get('message'),
        )


def _platforms(data: Optional[List[Dict[str, Any]]]) -> List[Platform]:
    return [Platform.from_dict(p) for p in data or [] if isinstance(p, dict)]


@dataclass(frozen=True)
class TopicSection:
    title: str
    identifiers: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TopicSection':
        return cls(
            title=data.get('title', ''),
            identifiers=tuple(data.get('identifiers') or ()),
        )


def _sections(data: Optional[List[Dict[str, Any]]]) -> List[TopicSection]:
    return [TopicSection.from_dict(s) for s in data or [] if isinstance(s, dict)]


def _symbol_kind_from_fragments(fragments: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    """Derive a symbol kind from the declaration fragments of a reference."""
    keywords = [
        fragment.get('text', '').strip()
        for fragment in fragments or []
        if isinstance(fragment, dict) and fragment.get('kind') == 'keyword'
    ]
    for index, keyword in enumerate(keywords):
        if not keyword or keyword in KEYWORD_MODIFIERS:
            continue
        # "class func" / "class var": here class is a modifier
        if keyword == 'class' and index + 1 < len(keywords) and keywords[index + 1] in KEYWORD_KINDS:
            continue
        return KEYWORD_KINDS.get(keyword, keyword)
    return None


@dataclass
class ReferenceRecord:
    """Lightweight record from a document's ``references`` table."""
    identifier: str
    title: str
    url: Optional[str] = None
    kind: Optional[str] = None
    role: Optional[str] = None
    symbol_kind: Optional[str] = None
    abstract: List[Dict[str, Any]] = field(default_factory=list)
    platforms: List[Platform] = field(default_factory=list)

    @property
    def abstract_text(self) -> str:
        return extract_text(self.abstract)

    @classmethod
    def from_dict(cls, identifier: str, data: Dict[str, Any]) -> 'ReferenceRecord':
        symbol_kind = data.get('symbolKind') or _symbol_kind_from_fragments(data.get('fragments'))
        if not symbol_kind and data.get('kind') == 'symbol':
            symbol_kind = data.get('role')
        return cls(
            identifier=data.get('identifier', identifier),
            title=data.get('title', ''),
            url=data.get('url'),
            kind=data.get('kind'),
            role=data.get('role'),
            symbol_kind=symbol_kind,
            abstract=list(data.get('abstract') or []),
            platforms=_platforms(data.get('platforms')),
        )


@dataclass
class DocumentMetadata:
    title: Optional[str] = None
    symbol_kind: Optional[str] = None
    role: Optional[str] = None
    platforms: List[Platform] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DocumentMetadata':
        data = data or {}
        return cls(
            title=data.get('title'),
            symbol_kind=data.get('symbolKind'),
            role=data.get('role'),
            platforms=_platforms(data.get('platforms')),
        )


@dataclass
class DocumentationPayload:
    """A symbol or framework page as returned by the upstream API."""
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    abstract: List[Dict[str, Any]] = field(default_factory=list)
    topic_sections: List[TopicSection] = field(default_factory=list)
    references: Dict[str, ReferenceRecord] = field(default_factory=dict)
    identifier: Optional[str] = None

    @property
    def title(self) -> Optional[str]:
        return self.metadata.title

    @property
    def abstract_text(self) -> str:
        return extract_text(self.abstract)

    def reference(self, identifier: str) -> Optional[ReferenceRecord]:
        return self.references.get(identifier)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DocumentationPayload':
        identifier = data.get('identifier')
        if isinstance(identifier, dict):
            identifier = identifier.get('url')
        references = {
            key: ReferenceRecord.from_dict(key, value)
            for key, value in (data.get('references') or {}).items()
            if isinstance(value, dict)
        }
        return cls(
            metadata=DocumentMetadata.from_dict(data.get('metadata')),
            abstract=list(data.get('abstract') or []),
            topic_sections=_sections(data.get('topicSections')),
            references=references,
            identifier=identifier,
        )


@dataclass(frozen=True)
class TechnologyRecord:
    """Entry of the root technologies index."""
    identity: str
    title: str
    kind: Optional[str] = None
    role: Optional[str] = None
    abstract_text: str = ""
    topic_sections: Tuple[TopicSection, ...] = ()
    path: Optional[str] = None

    @property
    def is_framework(self) -> bool:
        return self.kind == 'symbol' and self.role == 'collection'

    @property
    def canonical_path(self) -> str:
        if self.path:
            return self.path.lstrip('/')
        return f"documentation/{self.title}"

    @classmethod
    def from_dict(cls, identity: str, data: Dict[str, Any]) -> 'TechnologyRecord':
        return cls(
            identity=data.get('identifier', identity),
            title=data.get('title', ''),
            kind=data.get('kind'),
            role=data.get('role'),
            abstract_text=extract_text(data.get('abstract')),
            topic_sections=tuple(_sections(data.get('topicSections'))),
            path=data.get('url'),
        )


@dataclass
class SymbolReference:
    """A search hit."""
    title: str
    path: str
    framework: str
    symbol_kind: Optional[str] = None
    platforms: Optional[str] = None
    abstract_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'path': self.path,
            'framework': self.framework,
            'symbolKind': self.symbol_kind,
            'platforms': self.platforms,
            'abstract': self.abstract_text,
        }

    @classmethod
    def from_reference(cls, ref: ReferenceRecord, framework: str,
                       fallback_platforms: List[Platform]) -> 'SymbolReference':
        return cls(
            title=ref.title,
            path=ref.url or ref.identifier,
            framework=framework,
            symbol_kind=ref.symbol_kind,
            platforms=format_platforms(ref.platforms or fallback_platforms),
            abstract_text=ref.abstract_text or None,
        )
