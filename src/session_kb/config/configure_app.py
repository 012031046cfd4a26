"""Composition root: build a ready-to-use KnowledgeBase from settings.

Each call returns a new, independent engine with its own empty store. The
caller owns its lifetime.
"""

from __future__ import annotations

from session_kb.application.use_cases.ingest_document import AcceptedTypes, IngestDocumentUseCase
from session_kb.application.use_cases.query_kb import QueryUseCase
from session_kb.core.settings import Settings, get_settings
from session_kb.domain.chunking import ChunkingConfig, PageAwareChunker
from session_kb.domain.scoring import ScoringConfig
from session_kb.engine import KnowledgeBase
from session_kb.exceptions import ConfigurationError
from session_kb.infra.memory_store import InMemoryDocumentStore


def chunking_config_from(settings: Settings) -> ChunkingConfig:
    if settings.chunk_overlap >= settings.chunk_size:
        raise ConfigurationError(
            f"chunk_overlap ({settings.chunk_overlap}) must be smaller than "
            f"chunk_size ({settings.chunk_size})"
        )
    return ChunkingConfig(
        chunk_size=settings.chunk_size,
        chunk_overlap=settings.chunk_overlap,
        min_chunk_chars=settings.min_chunk_chars,
    )


def build_knowledge_base(settings: Settings | None = None) -> KnowledgeBase:
    s = settings or get_settings()
    store = InMemoryDocumentStore()
    ingestion = IngestDocumentUseCase(
        store=store,
        chunker=PageAwareChunker(chunking_config_from(s)),
        accepted=AcceptedTypes(
            prefixes=tuple(s.accepted_type_prefixes),
            exact=tuple(s.accepted_types),
            extensions=tuple(s.accepted_extensions),
        ),
        summary_max_chars=s.summary_max_chars,
    )
    query = QueryUseCase(
        store=store,
        scoring=ScoringConfig(),
        min_relevance_score=s.min_relevance_score,
    )
    return KnowledgeBase(
        store=store,
        ingestion=ingestion,
        query=query,
        enabled=s.rag_enabled,
        default_max_results=s.max_results,
    )


__all__ = ["build_knowledge_base", "chunking_config_from"]
