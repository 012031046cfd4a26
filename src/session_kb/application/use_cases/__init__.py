from .ingest_document import AcceptedTypes, IngestDocumentUseCase
from .query_kb import QueryUseCase

__all__ = ["AcceptedTypes", "IngestDocumentUseCase", "QueryUseCase"]
