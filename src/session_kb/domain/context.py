from __future__ import annotations

import math

from session_kb.domain.document import SearchResponse

CITATION_INSTRUCTIONS = (
    "INSTRUCTIONS: Use the above document context to answer the following question. "
    "Always cite your sources using the [SOURCE #] format when referencing information "
    "from the documents."
)


def format_context(response: SearchResponse, original_query: str) -> str:
    """Render ranked results as a prompt-ready block with numbered sources.

    Layout::

        DOCUMENT CONTEXT (<n> relevant sections found in <ms>ms):

        [SOURCE i: filename (Page p)]
        <chunk content>
        [Relevance: <score*100>% | Matched: a, b]
        ...
        INSTRUCTIONS: ...

        QUESTION: <original query>

    Returns "" when the response has no results; callers must not invent context.
    """
    if not response.has_results:
        return ""

    parts: list[str] = [
        f"DOCUMENT CONTEXT ({len(response.results)} relevant sections found "
        f"in {response.search_time_ms:.0f}ms):"
    ]
    for i, result in enumerate(response.results, 1):
        parts.append(f"\n[SOURCE {i}: {result.source_label}]")
        parts.append(result.chunk.content)
        parts.append(
            f"[Relevance: {result.relevance_score * 100:.0f}% | "
            f"Matched: {', '.join(result.matched_terms)}]"
        )

    parts.append(f"\n{CITATION_INSTRUCTIONS}")
    parts.append(f"\nQUESTION: {original_query}")
    return "\n".join(parts)


def estimate_tokens(text: str) -> int:
    """Rough token count (4 characters per token)."""
    return math.ceil(len(text or "") / 4)
