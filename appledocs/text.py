"""Plain-text helpers for Apple's rich-text JSON fragments."""

from typing import Any, Dict, Iterable, List, Optional


def extract_text(abstract: Optional[Iterable[Dict[str, Any]]]) -> str:
    """Flatten an inline-content list into plain text.

    Apple abstracts are lists like ``[{"type": "text", "text": "A view"},
    {"type": "codeVoice", "code": "body"}]``.
    """
    if not abstract:
        return ""

    parts: List[str] = []
    for item in abstract:
        if not isinstance(item, dict):
            continue
        if item.get("text"):
            parts.append(item["text"])
        elif item.get("code"):
            parts.append(item["code"])
        elif item.get("inlineContent"):
            parts.append(extract_text(item["inlineContent"]))
    return "".join(parts)


def format_platforms(platforms) -> str:
    """Render platform availability, e.g. ``iOS 13.0, macOS 10.15 (Beta)``."""
    if not platforms:
        return "All platforms"

    rendered = []
    for platform in platforms:
        label = platform.name
        if platform.introduced_at:
            label = f"{label} {platform.introduced_at}"
        if platform.beta:
            label += " (Beta)"
        rendered.append(label)
    return ", ".join(rendered)


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
