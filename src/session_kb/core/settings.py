from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Segmentation
    chunk_size: int = Field(default=1500, gt=0)
    chunk_overlap: int = Field(default=150, ge=0)
    min_chunk_chars: int = Field(default=50, ge=1)

    # Retrieval
    min_relevance_score: float = Field(default=0.1, ge=0.0)
    max_results: int = Field(default=5, ge=1)
    rag_enabled: bool = True

    # Summaries
    summary_max_chars: int = Field(default=300, gt=0)

    # Declared content types accepted as already extracted text.
    # "application/pdf" means the caller extracted the text (optionally with [Page N] markers).
    accepted_type_prefixes: list[str] = Field(default_factory=lambda: ["text/"])
    accepted_types: list[str] = Field(default_factory=lambda: ["application/pdf"])
    accepted_extensions: list[str] = Field(default_factory=lambda: [".md", ".txt"])

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="KB_",  # KB_CHUNK_SIZE, KB_RAG_ENABLED, ...
    )

    # Accept tolerant boolean env values and trim whitespace (e.g., "false ", "0 ")
    @field_validator("rag_enabled", mode="before")
    @classmethod
    def _coerce_bool(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str):
            s = v.strip().lower()
            if s in ("1", "true", "yes", "on"):
                return True
            if s in ("0", "false", "no", "off", ""):
                return False
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):  # type: ignore[no-untyped-def]
        return str(v).strip().upper() if v is not None else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
