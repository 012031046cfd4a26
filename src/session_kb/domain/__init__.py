"""Domain layer: pure types and logic (no I/O, no external libs).

Keep this layer free of side-effects. Define entities and small pure helpers only.
"""

from .chunking import ChunkingConfig, PageAwareChunker
from .context import estimate_tokens, format_context
from .document import (
    Chunk,
    Document,
    SearchResponse,
    SearchResult,
    SelfTestReport,
    StoreStats,
)
from .scoring import ScoringConfig, extract_search_terms, matched_terms, relevance_score
from .summary import build_summary

__all__ = [
    "Chunk",
    "Document",
    "SearchResult",
    "SearchResponse",
    "StoreStats",
    "SelfTestReport",
    "ChunkingConfig",
    "PageAwareChunker",
    "ScoringConfig",
    "extract_search_terms",
    "relevance_score",
    "matched_terms",
    "build_summary",
    "format_context",
    "estimate_tokens",
]
