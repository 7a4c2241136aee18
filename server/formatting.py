"""Markdown rendering of documentation client results for MCP tool output."""

from typing import Iterable, List, Optional

from appledocs.models import DocumentationPayload, SymbolReference, TechnologyRecord
from appledocs.status import APIStatus, StatusIndicator, classify_status
from appledocs.text import format_platforms, truncate

SECTION_PREVIEW_COUNT = 5
REFERENCE_ABSTRACT_LIMIT = 100
SEARCH_DESCRIPTION_LIMIT = 150
LISTED_FRAMEWORKS = 15
LISTED_OTHERS = 10


def format_status_indicator(indicator: StatusIndicator) -> str:
    if indicator.status == APIStatus.DEPRECATED:
        return f"⛔ **DEPRECATED**\n\n*{indicator.message}*\n\n"
    if indicator.status == APIStatus.BETA_ALL:
        return "⚠️ **BETA API**\n\n"
    if indicator.status == APIStatus.BETA_SOME:
        return "⚠️ **BETA** on some platforms\n\n"
    return ""


def format_technologies(technologies: Iterable[TechnologyRecord]) -> str:
    frameworks: List[TechnologyRecord] = []
    others: List[TechnologyRecord] = []
    for tech in technologies:
        (frameworks if tech.is_framework else others).append(tech)

    lines = [
        '# Apple Developer Technologies\n',
        '## Core Frameworks\n',
        *[f"• **{t.title}** - {t.abstract_text}" for t in frameworks[:LISTED_FRAMEWORKS]],
        '\n## Additional Technologies\n',
        *[f"• **{t.title}** - {t.abstract_text}" for t in others[:LISTED_OTHERS]],
        '\n*Use `get_documentation <name>` to explore any framework or symbol*',
        f"\n\n**Total: {len(frameworks) + len(others)} technologies available**",
    ]
    return '\n'.join(lines)


def format_documentation(payload: DocumentationPayload) -> str:
    lines = [
        f"# {payload.title or 'Symbol'}\n",
        format_status_indicator(classify_status(payload.metadata)),
        f"**Type:** {payload.metadata.symbol_kind or 'Unknown'}",
        f"**Platforms:** {format_platforms(payload.metadata.platforms)}\n",
        '## Overview',
        payload.abstract_text,
    ]

    if payload.topic_sections:
        lines.append('\n## API Reference\n')
        for section in payload.topic_sections:
            lines.append(f"### {section.title}")
            for identifier in section.identifiers[:SECTION_PREVIEW_COUNT]:
                ref = payload.reference(identifier)
                if ref:
                    lines.append(f"• **{ref.title}** - {truncate(ref.abstract_text, REFERENCE_ABSTRACT_LIMIT)}")
            remaining = len(section.identifiers) - SECTION_PREVIEW_COUNT
            if remaining > 0:
                lines.append(f"*... and {remaining} more items*")
            lines.append('')

    return '\n'.join(lines)


def format_framework_detected(payload: DocumentationPayload, framework_name: str, original_path: str) -> str:
    title = payload.title or framework_name
    lines = [
        f"# 🔍 Framework Detected: {title}\n",
        format_status_indicator(classify_status(payload.metadata)),
        "⚠️ **You searched for a framework instead of a specific symbol.**",
        "To access symbols within this framework, use the format: **framework/symbol**",
        f"**Example:** `documentation/{framework_name}/View` instead of `{original_path}`\n",
        f"**Platforms:** {format_platforms(payload.metadata.platforms)}\n",
        '## Framework Overview',
        payload.abstract_text,
        '\n## Available Symbol Categories\n',
        *[f"• **{s.title}** ({len(s.identifiers)} symbols)" for s in payload.topic_sections],
        '\n## Next Steps',
        f"• **Browse symbols:** Use `documentation/{framework_name}/[SymbolName]`",
        "• **Search symbols:** Use `search_symbols` with a specific symbol name",
        f"• **Explore framework:** Use `get_documentation {framework_name}` for detailed structure",
    ]
    return '\n'.join(lines)


def format_symbol_not_found(original_path: str) -> str:
    return '\n'.join([
        f"# ❌ Symbol Not Found: {original_path}\n",
        "The requested symbol could not be located in Apple's documentation.",
        '\n## Common Issues',
        "• **Incorrect path format:** Expected `documentation/Framework/Symbol`",
        f"• **Framework vs Symbol:** \"{original_path}\" may be a framework name rather than a symbol",
        "• **Case sensitivity:** Ensure proper capitalization (e.g., \"SwiftUI\" not \"swiftui\")",
        '\n## Recommended Actions',
        "• **List frameworks:** Use `list_technologies` to see available frameworks",
        "• **Browse framework:** Use `get_documentation <name>` to explore structure",
        "• **Search symbols:** Use `search_symbols <query>` to find specific symbols",
        "• **Example search:** `search_symbols \"View\"` to find View-related symbols",
    ])


def format_search_results(query: str, results: List[SymbolReference], framework: Optional[str] = None,
                          symbol_type: Optional[str] = None, platform: Optional[str] = None) -> str:
    lines = [
        f"# Search Results for \"{query}\"\n",
        f"**Framework:** {framework}" if framework else '**Scope:** All frameworks',
    ]
    if symbol_type:
        lines.append(f"**Symbol Type:** {symbol_type}")
    if platform:
        lines.append(f"**Platform:** {platform}")
    lines.append(f"**Found:** {len(results)} results\n")

    if not results:
        lines.extend([
            '## No Results Found\n',
            'Try:',
            '• Broader search terms',
            '• Wildcard patterns (e.g., "UI*", "*View*")',
            '• Removing filters',
        ])
        return '\n'.join(lines)

    lines.append('## Results\n')
    for index, result in enumerate(results, start=1):
        lines.append(f"### {index}. {result.title}")
        kind = f" | **Type:** {result.symbol_kind}" if result.symbol_kind else ''
        lines.append(f"**Framework:** {result.framework}{kind}")
        if result.platforms:
            lines.append(f"**Platforms:** {result.platforms}")
        lines.append(f"**Path:** `{result.path}`")
        if result.abstract_text:
            lines.append(truncate(result.abstract_text, SEARCH_DESCRIPTION_LIMIT))
        lines.append('')
    lines.append('*Use `get_documentation` with any path above to see detailed documentation*')
    return '\n'.join(lines)


def format_error(error: Exception) -> str:
    return f"# ❌ Request Failed\n\n{error}"
