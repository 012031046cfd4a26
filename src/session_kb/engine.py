from __future__ import annotations

import logging
from dataclasses import dataclass

from session_kb.application.use_cases.ingest_document import IngestDocumentUseCase
from session_kb.application.use_cases.query_kb import QueryUseCase
from session_kb.domain.context import format_context
from session_kb.domain.document import Document, SearchResponse, SelfTestReport, StoreStats
from session_kb.infra.memory_store import InMemoryDocumentStore

log = logging.getLogger(__name__)

SELF_TEST_QUERY = "test document content"


@dataclass
class KnowledgeBase:
    """Call surface of the retrieval engine.

    Owned by whoever composes the application (see
    ``session_kb.config.configure_app.build_knowledge_base``); there is no
    process-wide instance.
    """

    store: InMemoryDocumentStore
    ingestion: IngestDocumentUseCase
    query: QueryUseCase
    enabled: bool = True
    default_max_results: int = 5

    # --- lifecycle -----------------------------------------------------------

    def ingest(self, text: str, filename: str, declared_size: int, declared_type: str) -> Document:
        return self.ingestion.execute(text, filename, declared_size, declared_type)

    def import_document(self, document: Document) -> Document:
        return self.ingestion.import_document(document)

    def remove(self, document_id: str) -> bool:
        removed = self.store.remove(document_id)
        if removed:
            log.info("Removed document %s", document_id)
        return removed

    def clear(self) -> None:
        self.store.clear()
        log.info("Cleared all documents")

    def get(self, document_id: str) -> Document | None:
        return self.store.get(document_id)

    def list_documents(self) -> list[Document]:
        return self.store.list()

    def stats(self) -> StoreStats:
        return self.store.stats()

    # --- query ---------------------------------------------------------------

    def search(self, query: str, max_results: int | None = None) -> SearchResponse:
        k = self.default_max_results if max_results is None else max_results
        return self.query.search(query, max_results=k)

    def format_for_consumer(self, response: SearchResponse, original_query: str) -> str:
        return format_context(response, original_query)

    def set_enabled(self, enabled: bool | None = None) -> bool:
        """Switch context retrieval on/off; ``None`` toggles. Returns the new state."""
        self.enabled = (not self.enabled) if enabled is None else bool(enabled)
        log.info("Retrieval %s", "enabled" if self.enabled else "disabled")
        return self.enabled

    def search_for_context(self, query: str, max_results: int | None = None) -> str:
        """Context block for a prompt, or "" when retrieval is off or nothing matches."""
        if not self.enabled:
            log.info("Retrieval disabled, skipping search")
            return ""
        if len(self.store) == 0:
            log.info("No documents available for search")
            return ""
        k = self.default_max_results if max_results is None else max_results
        return self.query.search_for_context(query, max_results=k)

    def self_test(self) -> SelfTestReport:
        """Probe the engine with a generic query, then with words from the first document."""
        docs = self.store.list()
        if not docs:
            return SelfTestReport(success=False, message="No documents available for testing")

        first = self.search(SELF_TEST_QUERY, max_results=10)
        details: dict[str, object] = {
            "documentsSearched": len(docs),
            "searchTime": first.search_time_ms,
            "resultsFound": len(first.results),
            "ragEnabled": self.enabled,
        }
        if first.has_results:
            return SelfTestReport(
                success=True,
                message=(
                    f"Retrieval working. Found {len(first.results)} results "
                    f"in {first.search_time_ms:.0f}ms"
                ),
                details=details,
            )

        probe = " ".join(docs[0].content.split()[:3])
        second = self.search(probe, max_results=10)
        details["secondTestResults"] = len(second.results)
        if second.has_results:
            return SelfTestReport(
                success=True,
                message="Retrieval working. Found results with document-specific query.",
                details=details,
            )
        return SelfTestReport(
            success=False,
            message="No results found for document content; retrieval may be misconfigured",
            details=details,
        )
