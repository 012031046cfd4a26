"""In-process document retrieval: segmentation, lexical scoring, citation context."""

from session_kb.config.configure_app import build_knowledge_base
from session_kb.domain.document import (
    Chunk,
    Document,
    SearchResponse,
    SearchResult,
    SelfTestReport,
    StoreStats,
)
from session_kb.engine import KnowledgeBase
from session_kb.exceptions import (
    ConfigurationError,
    EmptyContentError,
    ErrorKind,
    KnowledgeBaseError,
    UnsupportedTypeError,
)

__all__ = [
    "KnowledgeBase",
    "build_knowledge_base",
    "Chunk",
    "Document",
    "SearchResult",
    "SearchResponse",
    "StoreStats",
    "SelfTestReport",
    "ErrorKind",
    "KnowledgeBaseError",
    "EmptyContentError",
    "UnsupportedTypeError",
    "ConfigurationError",
]
