from __future__ import annotations

from session_kb.domain.chunking import ChunkingConfig, PageAwareChunker
from session_kb.domain.document import Chunk

FOX = "The quick brown fox jumps over the lazy dog. It runs fast."


def _assert_well_formed(text: str, chunks: list[Chunk], cfg: ChunkingConfig) -> None:
    assert chunks, "expected at least one chunk"
    for i, c in enumerate(chunks):
        assert c.id == f"chunk_{i}"
        assert len(c.content) >= cfg.min_chunk_chars
        assert len(c.content) <= cfg.chunk_size + 2
        assert text[c.start_char : c.end_char].strip() == c.content
    for prev, nxt in zip(chunks, chunks[1:]):
        assert prev.start_char <= nxt.start_char
        # overlapping or touching windows: no gaps between retained chunks
        assert nxt.start_char <= prev.end_char


def test_short_text_yields_single_chunk_with_full_content() -> None:
    chunks = PageAwareChunker().split(FOX)
    assert len(chunks) == 1
    c = chunks[0]
    assert c.content == FOX
    assert (c.start_char, c.end_char) == (0, len(FOX))
    assert c.page_number is None


def test_blank_and_too_short_text_yield_nothing() -> None:
    chunker = PageAwareChunker()
    assert chunker.split("") == []
    assert chunker.split("   \n\t ") == []
    assert chunker.split("Too short to keep.") == []


def test_long_text_is_split_with_overlap_and_covers_input() -> None:
    text = "Lorem ipsum dolor sit amet consectetur. " * 100
    cfg = ChunkingConfig()
    chunks = PageAwareChunker(cfg).split(text)

    assert len(chunks) > 2
    _assert_well_formed(text, chunks, cfg)
    assert chunks[0].start_char == 0
    assert chunks[-1].end_char == len(text)
    # Every full window stops right after a sentence end
    for c in chunks[:-1]:
        assert c.content.endswith(".")


def test_no_period_falls_back_to_raw_window() -> None:
    text = "A" * 3000 + " This is the end marker."
    cfg = ChunkingConfig()
    chunks = PageAwareChunker(cfg).split(text)

    assert len(chunks) == 3
    _assert_well_formed(text, chunks, cfg)
    assert [c.start_char for c in chunks] == [0, 1350, 2700]
    assert chunks[0].end_char == 1500
    assert chunks[-1].content.endswith("end marker.")


def test_sentence_boundary_preferred_near_window_end() -> None:
    cfg = ChunkingConfig(chunk_size=100, chunk_overlap=10)
    text = "x" * 80 + ". " + "y" * 100
    first = PageAwareChunker(cfg).split(text)[0]
    assert first.content == "x" * 80 + "."
    assert first.end_char == 81


def test_paragraph_break_used_when_no_sentence_end() -> None:
    cfg = ChunkingConfig(chunk_size=100, chunk_overlap=10)
    text = "a" * 60 + "\n\n" + "b" * 100
    first = PageAwareChunker(cfg).split(text)[0]
    assert first.content == "a" * 60
    assert first.end_char == 62


def test_page_markers_split_pages_and_keep_absolute_offsets() -> None:
    p1 = "Page one talks about renewable energy and the grid in some detail here."
    p2 = "Page two covers battery storage, inverters and maintenance schedules."
    text = f"\n\n[Page 1]\n{p1}\n\n[Page 2]\n{p2}"

    chunks = PageAwareChunker().split(text)

    assert [c.page_number for c in chunks] == [1, 2]
    assert [c.content for c in chunks] == [p1, p2]
    assert [c.id for c in chunks] == ["chunk_0", "chunk_1"]
    for c in chunks:
        assert "[Page" not in c.content
        assert text[c.start_char : c.end_char].strip() == c.content


def test_text_before_first_marker_has_no_page() -> None:
    intro = "Preface text that comes before any page marker and is long enough."
    body = "The first real page of content, also comfortably above the minimum."
    text = f"{intro}\n[Page 1]\n{body}"

    chunks = PageAwareChunker().split(text)

    assert [(c.page_number, c.content) for c in chunks] == [(None, intro), (1, body)]


def test_tiny_pages_fall_back_to_whole_text() -> None:
    text = "[Page 1]\nshort text here\n[Page 2]\nmore short text\n[Page 3]\nand a bit more"
    chunks = PageAwareChunker().split(text)
    assert len(chunks) == 1
    assert chunks[0].page_number is None
    assert chunks[0].content == text.strip()


def test_segmentation_is_deterministic() -> None:
    text = ("Alpha beta gamma delta. " * 80) + "\n\n[Page 2]\n" + ("Epsilon zeta eta. " * 90)
    a = PageAwareChunker().split(text)
    b = PageAwareChunker().split(text)
    assert a == b


def test_overlap_not_smaller_than_size_still_terminates() -> None:
    cfg = ChunkingConfig(chunk_size=60, chunk_overlap=100, min_chunk_chars=10)
    text = "z" * 300
    chunks = PageAwareChunker(cfg).split(text)
    assert chunks
    assert chunks[-1].end_char == 300
    assert all(len(c.content) <= 62 for c in chunks)
