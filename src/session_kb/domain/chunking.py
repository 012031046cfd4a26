from __future__ import annotations

import re
from dataclasses import dataclass

from session_kb.domain.document import Chunk

_PAGE_MARKER_RE = re.compile(r"\[Page (\d+)\]")


@dataclass
class ChunkingConfig:
    chunk_size: int = 1500
    chunk_overlap: int = 150
    min_chunk_chars: int = 50
    # Cut at a "." only if it lies in the last 30% of the window, at "\n\n" in the last 50%.
    sentence_window: float = 0.7
    paragraph_window: float = 0.5


class PageAwareChunker:
    """Fixed-size window chunker with overlap and boundary preference.

    Text carrying ``[Page N]`` markers is cut into pages first and every page is
    chunked on its own, so chunks never straddle a page break. Inside a page the
    window end is moved back to the nearest sentence end or paragraph break when
    one is close enough to the raw cut.

    Pure and deterministic; offsets are absolute positions in the input text.
    """

    def __init__(self, cfg: ChunkingConfig | None = None) -> None:
        self.cfg = cfg or ChunkingConfig()

    def split(self, text: str) -> list[Chunk]:
        if not text or not text.strip():
            return []

        chunks: list[Chunk] = []
        for seg_start, seg_end, page in self._page_segments(text):
            chunks.extend(
                self._chunk_segment(
                    text[seg_start:seg_end], seg_start, page, first_index=len(chunks)
                )
            )

        # Markers present but every page too short: chunk the whole text as one run.
        if not chunks and _PAGE_MARKER_RE.search(text):
            chunks = self._chunk_segment(text, 0, None, first_index=0)
        return chunks

    def _page_segments(self, text: str) -> list[tuple[int, int, int | None]]:
        markers = list(_PAGE_MARKER_RE.finditer(text))
        if not markers:
            return [(0, len(text), None)]

        segments: list[tuple[int, int, int | None]] = []
        if markers[0].start() > 0:
            segments.append((0, markers[0].start(), None))
        for i, m in enumerate(markers):
            end = markers[i + 1].start() if i + 1 < len(markers) else len(text)
            segments.append((m.end(), end, int(m.group(1))))
        return segments

    def _chunk_segment(
        self, text: str, offset: int, page: int | None, *, first_index: int
    ) -> list[Chunk]:
        size = int(self.cfg.chunk_size)
        overlap = max(0, int(self.cfg.chunk_overlap))
        min_chars = max(1, int(self.cfg.min_chunk_chars))
        n = len(text)

        out: list[Chunk] = []
        start = 0
        while start < n:
            end = min(start + size, n)
            if end < n:
                end = self._boundary(text, start, end)

            content = text[start:end].strip()
            if len(content) >= min_chars:
                out.append(
                    Chunk(
                        id=f"chunk_{first_index + len(out)}",
                        content=content,
                        start_char=offset + start,
                        end_char=offset + end,
                        page_number=page,
                    )
                )

            if end >= n:
                break
            start = max(end - overlap, start + 1)
        return out

    def _boundary(self, text: str, start: int, end: int) -> int:
        size = self.cfg.chunk_size
        sentence_end = text.rfind(".", start, end + 1)
        if sentence_end > start + size * self.cfg.sentence_window:
            return sentence_end + 1
        paragraph_end = text.rfind("\n\n", start, end + 2)
        if paragraph_end > start + size * self.cfg.paragraph_window:
            return paragraph_end + 2
        return end
