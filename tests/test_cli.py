from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from session_kb.interface.cli import app

FOX = "The quick brown fox jumps over the lazy dog. It runs fast."

runner = CliRunner()


@pytest.fixture()
def files(tmp_path: Path) -> list[Path]:
    a = tmp_path / "a.txt"
    a.write_text(FOX, encoding="utf-8")
    b = tmp_path / "b.md"
    b.write_text(
        "# Pumps\n\nCentrifugal pumps need priming before the first start of the season.",
        encoding="utf-8",
    )
    return [a, b]


def test_search_json(files: list[Path]) -> None:
    result = runner.invoke(app, ["search", *map(str, files), "--query", "fox runs", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["hasResults"] is True
    assert payload["totalDocuments"] == 2
    assert payload["results"][0]["filename"] == "a.txt"
    assert payload["results"][0]["matchedTerms"] == ["fox", "runs"]


def test_search_context_block(files: list[Path]) -> None:
    result = runner.invoke(app, ["search", *map(str, files), "-q", "priming pumps", "--context"])
    assert result.exit_code == 0, result.output
    assert "[SOURCE 1: b.md]" in result.output
    assert "QUESTION: priming pumps" in result.output


def test_search_without_hits(files: list[Path]) -> None:
    result = runner.invoke(app, ["search", *map(str, files), "-q", "quantum entanglement"])
    assert result.exit_code == 0
    assert "No results." in result.output


def test_unloadable_files_are_skipped(tmp_path: Path) -> None:
    blank = tmp_path / "blank.txt"
    blank.write_text("   ", encoding="utf-8")
    result = runner.invoke(app, ["search", str(blank), "-q", "fox"])
    assert result.exit_code == 1
    assert "Skipped" in result.output
    assert "No documents loaded." in result.output


def test_chunks_preview(tmp_path: Path) -> None:
    doc = tmp_path / "long.txt"
    doc.write_text("Lorem ipsum dolor sit amet consectetur. " * 20, encoding="utf-8")
    args = ["chunks", str(doc), "--chunk-size", "300", "--chunk-overlap", "30"]
    result = runner.invoke(app, args)
    assert result.exit_code == 0, result.output
    assert "--- chunk_0 |" in result.output
    assert "chunks" in result.output.splitlines()[-1]


def test_stats_json(files: list[Path]) -> None:
    result = runner.invoke(app, ["stats", *map(str, files), "--json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "documentCount": 2,
        "totalChunks": 2,
        "totalSize": sum(p.stat().st_size for p in files),
        "avgChunksPerDoc": 1,
    }
