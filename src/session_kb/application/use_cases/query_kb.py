from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from session_kb.application.ports.document_store_port import DocumentStorePort
from session_kb.domain.context import format_context
from session_kb.domain.document import SearchResponse, SearchResult
from session_kb.domain.scoring import (
    ScoringConfig,
    extract_search_terms,
    matched_terms,
    relevance_score,
)

log = logging.getLogger(__name__)


@dataclass
class QueryUseCase:
    store: DocumentStorePort
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    min_relevance_score: float = 0.1

    def search(self, query: str, max_results: int = 5) -> SearchResponse:
        """Score every chunk of every stored document and return the best ones.

        - Full linear scan over a store snapshot (O(total chunks)).
        - Chunks below ``min_relevance_score`` are dropped.
        - Stable sort by descending score: ties keep document insertion order,
          then chunk order.
        """
        started = time.perf_counter()
        docs = self.store.snapshot()

        if not docs:
            log.debug("Search for %r on empty store", query)
            return SearchResponse.empty(search_time_ms=_elapsed_ms(started))

        terms = extract_search_terms(query)
        log.debug("Searching %d documents for %r (terms=%s)", len(docs), query, terms)

        hits: list[SearchResult] = []
        for doc in docs:
            for chunk in doc.chunks:
                score = relevance_score(chunk.content, terms, query, self.scoring)
                if score >= self.min_relevance_score:
                    hits.append(
                        SearchResult(
                            document=doc,
                            chunk=chunk,
                            relevance_score=score,
                            matched_terms=tuple(matched_terms(chunk.content, terms)),
                        )
                    )

        hits.sort(key=lambda r: r.relevance_score, reverse=True)
        top = tuple(hits[: max(0, int(max_results))])
        elapsed = _elapsed_ms(started)

        log.info("Search completed: %d results in %.1fms", len(top), elapsed)
        return SearchResponse(
            results=top,
            total_documents=len(docs),
            search_time_ms=elapsed,
            has_results=bool(top),
        )

    def search_for_context(self, query: str, max_results: int = 5) -> str:
        response = self.search(query, max_results=max_results)
        if not response.has_results:
            log.info("No relevant content found for %r", query)
            return ""
        filenames = list(dict.fromkeys(r.document.filename for r in response.results))
        log.info("Matched documents: %s", ", ".join(filenames))
        return format_context(response, query)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
