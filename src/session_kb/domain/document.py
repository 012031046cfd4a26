from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Chunk:
    """Contiguous slice of a document's text; the unit of retrieval.

    Offsets are absolute positions of the raw window in the owning document's
    text. ``content`` is the trimmed window.
    """

    id: str
    content: str
    start_char: int
    end_char: int
    page_number: int | None = None

    def short(self, limit: int = 200) -> str:
        t = (self.content or "").replace("\n", " ")
        return (t[:limit] + ("..." if len(t) > limit else "")) if t else ""


@dataclass(frozen=True)
class Document:
    """Processed, retrievable document. Owns its chunks; replaced, never edited."""

    id: str
    filename: str
    content: str
    chunks: tuple[Chunk, ...]
    summary: str
    file_size: int
    file_type: str
    uploaded_at: datetime = field(default_factory=_utcnow)

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True)
class SearchResult:
    document: Document
    chunk: Chunk
    relevance_score: float
    matched_terms: tuple[str, ...] = ()

    @property
    def source_label(self) -> str:
        if self.chunk.page_number is not None:
            return f"{self.document.filename} (Page {self.chunk.page_number})"
        return self.document.filename


@dataclass(frozen=True)
class SearchResponse:
    results: tuple[SearchResult, ...]
    total_documents: int
    search_time_ms: float
    has_results: bool

    @classmethod
    def empty(cls, total_documents: int = 0, search_time_ms: float = 0.0) -> SearchResponse:
        return cls(
            results=(),
            total_documents=total_documents,
            search_time_ms=search_time_ms,
            has_results=False,
        )


@dataclass(frozen=True)
class StoreStats:
    document_count: int
    total_chunks: int
    total_size: int
    avg_chunks_per_doc: int

    def as_dict(self) -> dict[str, int]:
        return {
            "documentCount": self.document_count,
            "totalChunks": self.total_chunks,
            "totalSize": self.total_size,
            "avgChunksPerDoc": self.avg_chunks_per_doc,
        }


@dataclass(frozen=True)
class SelfTestReport:
    success: bool
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)
