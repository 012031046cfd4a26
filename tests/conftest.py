from __future__ import annotations

import pytest

from session_kb.core.settings import Settings
from session_kb.domain.document import Chunk, Document


def make_document(
    doc_id: str, n_chunks: int = 1, *, size: int = 100, filename: str = ""
) -> Document:
    chunks = tuple(
        Chunk(
            id=f"chunk_{i}",
            content=f"Chunk {i} of {doc_id} with enough words to be kept as a segment.",
            start_char=i * 10,
            end_char=i * 10 + 60,
        )
        for i in range(n_chunks)
    )
    return Document(
        id=doc_id,
        filename=filename or f"{doc_id}.txt",
        content=" ".join(c.content for c in chunks),
        chunks=chunks,
        summary=f"Document: {doc_id}",
        file_size=size,
        file_type="text/plain",
    )


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    # Isolate from developer environment variables
    for key in (
        "KB_CHUNK_SIZE",
        "KB_CHUNK_OVERLAP",
        "KB_MIN_CHUNK_CHARS",
        "KB_MIN_RELEVANCE_SCORE",
        "KB_MAX_RESULTS",
        "KB_RAG_ENABLED",
    ):
        monkeypatch.delenv(key, raising=False)
    return Settings(_env_file=None)
