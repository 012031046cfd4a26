from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from session_kb.application.ports.document_store_port import DocumentStorePort
from session_kb.domain.chunking import PageAwareChunker
from session_kb.domain.document import Document
from session_kb.domain.summary import build_summary
from session_kb.exceptions import EmptyContentError, UnsupportedTypeError

log = logging.getLogger(__name__)


@dataclass
class AcceptedTypes:
    """Declared content types the engine treats as already extracted text."""

    prefixes: Sequence[str] = ("text/",)
    exact: Sequence[str] = ("application/pdf",)
    extensions: Sequence[str] = (".md", ".txt")

    def accepts(self, declared_type: str, filename: str) -> bool:
        t = (declared_type or "").strip().lower()
        name = (filename or "").strip().lower()
        if t and any(t.startswith(p.lower()) for p in self.prefixes):
            return True
        if t and t in {e.lower() for e in self.exact}:
            return True
        return any(name.endswith(ext.lower()) for ext in self.extensions)


@dataclass
class IngestDocumentUseCase:
    store: DocumentStorePort
    chunker: PageAwareChunker
    accepted: AcceptedTypes = field(default_factory=AcceptedTypes)
    summary_max_chars: int = 300

    def execute(self, text: str, filename: str, declared_size: int, declared_type: str) -> Document:
        """Turn extracted text into a stored Document.

        1) Reject unsupported declared types
        2) Reject empty text or text too short to yield a chunk
        3) Chunk, summarize, allocate an id, then store in a single call
        Nothing reaches the store unless every step succeeded.
        """
        log.info(
            "Processing %s (%s, %d bytes)", filename, declared_type or "<no type>", declared_size
        )

        if not self.accepted.accepts(declared_type, filename):
            log.warning("Rejected %s: unsupported type %r", filename, declared_type)
            raise UnsupportedTypeError(
                f"Unsupported file type: {declared_type or '<none>'}",
                filename=filename,
                declared_type=declared_type,
            )

        if not text or not text.strip():
            log.warning("Rejected %s: no content", filename)
            raise EmptyContentError(
                "No content could be extracted from the file", filename=filename
            )

        chunks = self.chunker.split(text)
        if not chunks:
            log.warning("Rejected %s: text too short to form a chunk", filename)
            raise EmptyContentError(
                f"Content too short to index ({len(text.strip())} chars)", filename=filename
            )

        document = Document(
            id=uuid.uuid4().hex,
            filename=filename,
            content=text,
            chunks=tuple(chunks),
            summary=build_summary(text, filename, max_chars=self.summary_max_chars),
            file_size=int(declared_size),
            file_type=declared_type,
        )
        self.store.add(document)

        log.info(
            "Document processed: %s -> %d chunks, %d chars", filename, len(chunks), len(text)
        )
        return document

    def import_document(self, document: Document) -> Document:
        """Register an already processed document under its own id."""
        if not document.chunks:
            raise EmptyContentError(
                "Pre-processed document carries no chunks", filename=document.filename
            )
        self.store.add(document)
        log.info("Imported document %s (%d chunks)", document.filename, len(document.chunks))
        return document
