from __future__ import annotations

from typing import Protocol

from session_kb.domain.document import Document, StoreStats


class DocumentStorePort(Protocol):
    """Authoritative id -> Document mapping used by ingestion and query."""

    # Ingest path
    def add(self, document: Document) -> None:  # pragma: no cover - interface
        ...

    def remove(self, document_id: str) -> bool:  # pragma: no cover - interface
        ...

    def clear(self) -> None:  # pragma: no cover - interface
        ...

    # Query path
    def get(self, document_id: str) -> Document | None:  # pragma: no cover - interface
        ...

    def snapshot(self) -> tuple[Document, ...]:  # pragma: no cover - interface
        """Consistent, insertion-ordered view of all documents."""
        ...

    def stats(self) -> StoreStats:  # pragma: no cover - interface
        ...

    def __len__(self) -> int:  # pragma: no cover - interface
        ...
