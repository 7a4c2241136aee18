from appledocs.models import (
    DocumentationPayload,
    Platform,
    ReferenceRecord,
    SymbolReference,
    TechnologyRecord,
)
from appledocs.text import extract_text, format_platforms, truncate
from tests.conftest import framework_payload, symbol_reference


class TestTextHelpers:
    def test_extract_text_joins_inline_content(self):
        abstract = [
            {"type": "text", "text": "Returns a "},
            {"type": "codeVoice", "code": "View"},
            {"type": "text", "text": " value."},
        ]
        assert extract_text(abstract) == "Returns a View value."

    def test_extract_text_tolerates_missing(self):
        assert extract_text(None) == ""
        assert extract_text([{"type": "reference", "identifier": "doc://x"}]) == ""

    def test_format_platforms(self):
        platforms = [
            Platform.from_dict({"name": "iOS", "introducedAt": "13.0"}),
            Platform.from_dict({"name": "visionOS", "introducedAt": "1.0", "beta": True}),
            Platform.from_dict({"name": "Mac Catalyst"}),
        ]
        assert format_platforms(platforms) == "iOS 13.0, visionOS 1.0 (Beta), Mac Catalyst"
        assert format_platforms([]) == "All platforms"

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("a" * 12, 10) == "a" * 10 + "..."


class TestReferenceRecord:
    def test_symbol_kind_from_fragments(self):
        identifier, data = symbol_reference("UIKit", "UIView", "class")
        assert ReferenceRecord.from_dict(identifier, data).symbol_kind == "class"

    def test_function_keyword_is_normalized(self):
        data = {
            "title": "sleep(for:)",
            "kind": "symbol",
            "role": "symbol",
            "fragments": [
                {"kind": "keyword", "text": "static"},
                {"kind": "text", "text": " "},
                {"kind": "keyword", "text": "func"},
                {"kind": "identifier", "text": "sleep"},
            ],
        }
        assert ReferenceRecord.from_dict("id", data).symbol_kind == "function"

    def test_class_modifier_before_var(self):
        data = {
            "title": "layerClass",
            "fragments": [
                {"kind": "keyword", "text": "class"},
                {"kind": "text", "text": " "},
                {"kind": "keyword", "text": "var"},
            ],
        }
        assert ReferenceRecord.from_dict("id", data).symbol_kind == "property"

    def test_explicit_symbol_kind_wins(self):
        data = {"title": "X", "symbolKind": "struct", "fragments": [{"kind": "keyword", "text": "class"}]}
        assert ReferenceRecord.from_dict("id", data).symbol_kind == "struct"

    def test_article_reference_falls_back_to_role(self):
        data = {"title": "Getting Started", "kind": "article", "role": "article"}
        assert ReferenceRecord.from_dict("id", data).symbol_kind is None
        data = {"title": "Thing", "kind": "symbol", "role": "symbol"}
        assert ReferenceRecord.from_dict("id", data).symbol_kind == "symbol"


class TestDocumentationPayload:
    def test_from_dict_reads_sections_and_references(self):
        payload = DocumentationPayload.from_dict(framework_payload("UIKit", {
            "Views": [symbol_reference("UIKit", "UIView")],
        }))
        assert payload.title == "UIKit"
        assert payload.abstract_text == "The UIKit framework."
        assert payload.topic_sections[0].title == "Views"
        identifier = payload.topic_sections[0].identifiers[0]
        assert payload.reference(identifier).title == "UIView"
        assert payload.identifier.startswith("doc://")

    def test_from_dict_tolerates_sparse_payload(self):
        payload = DocumentationPayload.from_dict({})
        assert payload.title is None
        assert payload.topic_sections == []
        assert payload.references == {}
        assert payload.metadata.platforms == []


class TestTechnologyRecord:
    def test_framework_classification_and_canonical_path(self):
        record = TechnologyRecord.from_dict("doc://x", {
            "title": "Core Data", "kind": "symbol", "role": "collection",
            "url": "/documentation/coredata", "abstract": [{"type": "text", "text": "Persist data."}],
        })
        assert record.is_framework
        assert record.canonical_path == "documentation/coredata"
        assert record.abstract_text == "Persist data."

    def test_canonical_path_falls_back_to_title(self):
        record = TechnologyRecord.from_dict("doc://x", {"title": "Swift", "kind": "article"})
        assert not record.is_framework
        assert record.canonical_path == "documentation/Swift"

    def test_records_are_hashable(self):
        record = TechnologyRecord.from_dict("doc://x", {
            "title": "Core Data", "kind": "symbol", "role": "collection",
            "topicSections": [{"title": "Essentials", "identifiers": ["doc://a", "doc://b"]}],
        })
        assert record.topic_sections[0].identifiers == ("doc://a", "doc://b")
        assert record in {record}


def test_symbol_reference_uses_framework_platforms_as_fallback():
    identifier, data = symbol_reference("UIKit", "UIView")
    ref = ReferenceRecord.from_dict(identifier, data)
    result = SymbolReference.from_reference(ref, "UIKit", [Platform(name="iOS", introduced_at="2.0")])
    assert result.path == "/documentation/uikit/uiview"
    assert result.platforms == "iOS 2.0"
    assert result.to_dict()["symbolKind"] == "class"
