from __future__ import annotations

import logging
import threading

from session_kb.domain.document import Document, StoreStats

log = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


class InMemoryDocumentStore:
    """Process-local document store guarded by a single lock.

    Documents are immutable, so readers take a snapshot under the lock and scan
    it without holding the lock.
    """

    def __init__(self) -> None:
        self._docs: dict[str, Document] = {}
        self._lock = threading.RLock()

    def add(self, document: Document) -> None:
        with self._lock:
            replaced = document.id in self._docs
            # Replacing keeps the original position in the iteration order.
            self._docs[document.id] = document
        if replaced:
            log.debug("Replaced document %s (%s)", document.id, document.filename)

    def remove(self, document_id: str) -> bool:
        with self._lock:
            return self._docs.pop(document_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._docs.clear()

    def get(self, document_id: str) -> Document | None:
        with self._lock:
            return self._docs.get(document_id)

    def list(self) -> list[Document]:
        return list(self.snapshot())

    def snapshot(self) -> tuple[Document, ...]:
        with self._lock:
            return tuple(self._docs.values())

    def stats(self) -> StoreStats:
        docs = self.snapshot()
        total_chunks = sum(len(d.chunks) for d in docs)
        return StoreStats(
            document_count=len(docs),
            total_chunks=total_chunks,
            total_size=sum(int(d.file_size) for d in docs),
            avg_chunks_per_doc=_round_half_up(total_chunks / len(docs)) if docs else 0,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._docs)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._docs
