"""Developer CLI: load local text files into a fresh in-memory knowledge base.

Commands:
- search: ingest files, then print ranked hits, JSON, or the context block
- chunks: preview segmentation of a single file
- stats: ingest files and print store statistics
"""

from __future__ import annotations

import json
import logging
import mimetypes
import sys
from pathlib import Path

import typer

from session_kb.config.configure_app import build_knowledge_base, chunking_config_from
from session_kb.core.settings import get_settings
from session_kb.domain.chunking import PageAwareChunker
from session_kb.domain.context import estimate_tokens
from session_kb.engine import KnowledgeBase
from session_kb.exceptions import ConfigurationError, KnowledgeBaseError
from session_kb.logging_setup import setup_logging

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Session knowledge base tools")


def _declared_type(path: Path) -> str:
    guessed, _enc = mimetypes.guess_type(path.name)
    return guessed or "text/plain"


def _load_files(kb: KnowledgeBase, files: list[Path]) -> int:
    loaded = 0
    for path in files:
        declared = _declared_type(path)
        if declared == "application/pdf":
            typer.secho(f"Skipped {path}: extract PDF text first", fg=typer.colors.YELLOW)
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            typer.secho(f"Skipped {path}: {e}", fg=typer.colors.YELLOW)
            continue
        try:
            kb.ingest(text, path.name, path.stat().st_size, declared)
        except KnowledgeBaseError as e:
            typer.secho(f"Skipped {path}: {e} ({e.kind.value})", fg=typer.colors.YELLOW)
            continue
        loaded += 1
    return loaded


def _configure(quiet: bool) -> KnowledgeBase:
    settings = get_settings()
    level = logging.ERROR if quiet else getattr(logging, settings.log_level, logging.INFO)
    setup_logging(level)
    # basicConfig is a no-op once configured; keep machine-readable output clean regardless
    logging.getLogger().setLevel(level)
    return build_knowledge_base(settings)


@app.command("search")
def search_cmd(
    files: list[Path] = typer.Argument(..., help="Text/Markdown files to search."),
    query: str = typer.Option(..., "--query", "-q", help="Query text."),
    k: int = typer.Option(5, "--top-k", help="Maximum number of hits."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    context: bool = typer.Option(False, "--context", help="Print the citation context block."),
) -> None:
    kb = _configure(quiet=as_json or context)
    if _load_files(kb, files) == 0:
        typer.echo("No documents loaded.")
        raise typer.Exit(code=1)

    response = kb.search(query, max_results=k)

    if context:
        block = kb.format_for_consumer(response, query)
        if not block:
            typer.echo("No relevant content found.")
            raise typer.Exit()
        typer.echo(block)
        typer.echo(f"\n(~{estimate_tokens(block)} tokens)", err=True)
        raise typer.Exit()

    if as_json:
        payload = {
            "totalDocuments": response.total_documents,
            "searchTimeMs": response.search_time_ms,
            "hasResults": response.has_results,
            "results": [
                {
                    "index": i,
                    "score": r.relevance_score,
                    "filename": r.document.filename,
                    "documentId": r.document.id,
                    "chunkId": r.chunk.id,
                    "page": r.chunk.page_number,
                    "matchedTerms": list(r.matched_terms),
                    "content": r.chunk.content,
                }
                for i, r in enumerate(response.results, 1)
            ],
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        raise typer.Exit()

    if not response.has_results:
        typer.echo("No results.")
        return

    for i, r in enumerate(response.results, 1):
        typer.echo(f"[{i}] score={r.relevance_score:.3f}  {r.source_label}  [{r.chunk.id}]")
        typer.echo("     matched: " + (", ".join(r.matched_terms) or "-"))
        typer.echo("     " + r.chunk.short(300))
    typer.echo(f"{len(response.results)} results in {response.search_time_ms:.1f}ms")


@app.command("chunks")
def chunks_cmd(
    file: Path = typer.Argument(..., help="File to segment."),
    chunk_size: int = typer.Option(None, help="Chunk size (chars)."),
    chunk_overlap: int = typer.Option(None, help="Chunk overlap (chars)."),
) -> None:
    settings = get_settings()
    overrides = {}
    if chunk_size is not None:
        overrides["chunk_size"] = chunk_size
    if chunk_overlap is not None:
        overrides["chunk_overlap"] = chunk_overlap
    if overrides:
        settings = settings.model_copy(update=overrides)
    chunker = PageAwareChunker(chunking_config_from(settings))

    text = file.read_text(encoding="utf-8", errors="replace")
    chunks = chunker.split(text)
    for c in chunks:
        page = f" | page={c.page_number}" if c.page_number is not None else ""
        span = f"[{c.start_char}:{c.end_char}]"
        typer.echo(f"\n--- {c.id} | chars={len(c.content)} | {span}{page} ---")
        typer.echo(c.content)
    typer.echo(f"\n{len(chunks)} chunks")


@app.command("stats")
def stats_cmd(
    files: list[Path] = typer.Argument(..., help="Text/Markdown files to load."),
    as_json: bool = typer.Option(False, "--json", help="Print stats as JSON."),
) -> None:
    kb = _configure(quiet=as_json)
    _load_files(kb, files)
    stats = kb.stats().as_dict()
    if as_json:
        typer.echo(json.dumps(stats, indent=2))
        return
    for key, value in stats.items():
        typer.echo(f"{key}: {value}")
    for doc in kb.list_documents():
        typer.echo(f"\n{doc.filename} ({len(doc.chunks)} chunks)")
        typer.echo(doc.summary)


def main() -> int:
    try:
        app()
        return 0
    except ConfigurationError as ce:
        typer.secho(f"Config error: {ce}", fg=typer.colors.RED)
        return 2
    except Exception as e:  # noqa: BLE001
        typer.secho(f"Unexpected error: {e}", fg=typer.colors.RED)
        return 1


if __name__ == "__main__":
    sys.exit(main())
