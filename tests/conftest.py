"""Shared fixtures: an in-memory fetcher and upstream payload builders."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from appledocs import AppleDocsClient, TTLCache
from appledocs.errors import NotFound
from config.settings import ClientSettings

BASE_URL = "https://docs.example.test/data"


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Serves canned JSON by URL; unknown URLs raise NotFound."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None, delay: float = 0.0):
        self.responses = dict(responses or {})
        self.delay = delay
        self.calls: List[str] = []
        self.closed = False

    def add(self, path: str, payload: Any) -> None:
        self.responses[f"{BASE_URL}/{path}.json"] = payload

    async def fetch_json(self, url: str) -> Any:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url not in self.responses:
            raise NotFound(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        self.closed = True


def technology(title: str, url: Optional[str] = None, kind: str = "symbol",
               role: str = "collection", abstract: str = "") -> Tuple[str, Dict[str, Any]]:
    url = url or f"/documentation/{title.lower().replace(' ', '')}"
    identifier = f"doc://com.apple.documentation{url}"
    return identifier, {
        "identifier": identifier,
        "title": title,
        "kind": kind,
        "role": role,
        "type": "topic",
        "url": url,
        "abstract": [{"type": "text", "text": abstract or f"About {title}."}],
    }


def technologies_payload(*entries: Tuple[str, Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "metadata": {"title": "Technologies", "role": "overview"},
        "references": dict(entries),
    }


def symbol_reference(framework: str, name: str, keyword: str = "class",
                     abstract: str = "", platforms: Optional[List[Dict[str, Any]]] = None) -> Tuple[str, Dict[str, Any]]:
    url = f"/documentation/{framework.lower()}/{name.lower()}"
    identifier = f"doc://com.apple.{framework.lower()}/documentation/{framework}/{name}"
    record = {
        "identifier": identifier,
        "title": name,
        "kind": "symbol",
        "role": "symbol",
        "type": "topic",
        "url": url,
        "fragments": [
            {"kind": "keyword", "text": keyword},
            {"kind": "text", "text": " "},
            {"kind": "identifier", "text": name},
        ],
        "abstract": [{"type": "text", "text": abstract or f"{name} abstract."}],
    }
    if platforms is not None:
        record["platforms"] = platforms
    return identifier, record


def framework_payload(title: str, sections: Dict[str, List[Tuple[str, Dict[str, Any]]]],
                      platforms: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    references: Dict[str, Any] = {}
    topic_sections = []
    for section_title, refs in sections.items():
        topic_sections.append({"title": section_title, "identifiers": [identifier for identifier, _ in refs]})
        for identifier, record in refs:
            references[identifier] = record
    return {
        "identifier": {"url": f"doc://com.apple.documentation/documentation/{title}", "interfaceLanguage": "swift"},
        "metadata": {
            "title": title,
            "role": "collection",
            "symbolKind": "module",
            "platforms": platforms if platforms is not None else [
                {"name": "iOS", "introducedAt": "13.0"},
                {"name": "macOS", "introducedAt": "10.15"},
            ],
        },
        "abstract": [{"type": "text", "text": f"The {title} framework."}],
        "topicSections": topic_sections,
        "references": references,
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return ClientSettings(base_url=BASE_URL, check_updates_on_startup=False)


@pytest.fixture
def fetcher():
    fake = FakeFetcher()
    fake.add("documentation/technologies", technologies_payload(
        technology("SwiftUI"),
        technology("UIKit"),
        technology("ReplayKit"),
        technology("Core Data", url="/documentation/coredata"),
        technology("App Store Connect API", url="/documentation/appstoreconnectapi", kind="article", role="overview"),
    ))
    fake.add("documentation/SwiftUI", framework_payload("SwiftUI", {
        "Views": [
            symbol_reference("SwiftUI", "View", "protocol"),
            symbol_reference("SwiftUI", "Text", "struct"),
        ],
        "Layout": [
            symbol_reference("SwiftUI", "HStack", "struct"),
        ],
    }))
    fake.add("documentation/swiftui", fake.responses[f"{BASE_URL}/documentation/SwiftUI.json"])
    fake.add("documentation/uikit", framework_payload("UIKit", {
        "View Controllers": [
            symbol_reference("UIKit", "UIViewController"),
            symbol_reference("UIKit", "UIViewControllerDelegate", "protocol"),
            symbol_reference("UIKit", "UITableViewController"),
        ],
        "Views": [
            symbol_reference("UIKit", "UIView"),
        ],
    }))
    fake.add("documentation/replaykit", framework_payload("ReplayKit", {
        "Broadcasts": [
            symbol_reference("ReplayKit", "RPBroadcastHandler"),
            symbol_reference("ReplayKit", "RPBroadcastController"),
        ],
    }, platforms=[{"name": "iOS", "introducedAt": "10.0"}, {"name": "tvOS", "introducedAt": "10.0"}]))
    fake.add("documentation/coredata", framework_payload("Core Data", {
        "Stack": [symbol_reference("CoreData", "NSPersistentContainer")],
    }, platforms=[{"name": "macOS", "introducedAt": "10.4"}]))
    fake.add("documentation/SwiftUI/View", {
        "metadata": {
            "title": "View",
            "symbolKind": "protocol",
            "platforms": [{"name": "iOS", "introducedAt": "13.0"}],
        },
        "abstract": [{"type": "text", "text": "A type that represents part of your app's user interface."}],
        "topicSections": [],
        "references": {},
    })
    return fake


@pytest.fixture
def client(settings, fetcher, clock):
    return AppleDocsClient(settings, fetcher=fetcher, cache=TTLCache(ttl_seconds=600, clock=clock))
