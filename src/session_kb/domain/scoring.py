from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "from", "as", "is", "was", "are", "were", "been", "have", "has", "had", "do",
        "does", "did", "will", "would", "could", "should", "may", "might", "must",
        "can", "this", "that", "these", "those",
    }
)  # fmt: skip

_PUNCT_RE = re.compile(r"[^\w\s]", re.UNICODE)
_MIN_TERM_LEN = 3


@dataclass
class ScoringConfig:
    exact_phrase_bonus: float = 2.0
    term_bonus: float = 0.5
    whole_word_bonus: float = 0.2
    coverage_weight: float = 0.5
    short_chunk_chars: int = 100
    short_chunk_penalty: float = 0.8
    max_score: float = 5.0


def extract_search_terms(query: str) -> list[str]:
    """Lowercased query terms without punctuation, short words or stop words.

    Duplicates are dropped; first occurrence wins.
    """
    words = _PUNCT_RE.sub(" ", (query or "").lower()).split()
    terms: list[str] = []
    for w in words:
        if len(w) < _MIN_TERM_LEN or w in STOP_WORDS or w in terms:
            continue
        terms.append(w)
    return terms


def _whole_word(term: str, text: str) -> bool:
    return re.search(rf"\b{re.escape(term)}\b", text) is not None


def relevance_score(
    content: str,
    terms: Sequence[str],
    query: str,
    cfg: ScoringConfig | None = None,
) -> float:
    """Score a chunk against a query; the result lies in ``[0, cfg.max_score]``.

    Components: exact phrase bonus, per-term substring bonus, extra bonus for
    whole-word hits, and a coverage bonus for the share of terms found. Chunks
    shorter than ``short_chunk_chars`` are down-weighted.
    """
    cfg = cfg or ScoringConfig()
    text = (content or "").lower()
    phrase = (query or "").lower().strip()

    score = 0.0
    if phrase and phrase in text:
        score += cfg.exact_phrase_bonus

    hits = 0
    for term in terms:
        if term in text:
            hits += 1
            score += cfg.term_bonus
            if _whole_word(term, text):
                score += cfg.whole_word_bonus

    coverage = hits / max(len(terms), 1)
    score += coverage * cfg.coverage_weight

    if len(content or "") < cfg.short_chunk_chars:
        score *= cfg.short_chunk_penalty

    return max(0.0, min(score, cfg.max_score))


def matched_terms(content: str, terms: Sequence[str]) -> list[str]:
    text = (content or "").lower()
    return [t for t in terms if t in text]


def score_chunk(
    content: str,
    terms: Sequence[str],
    query: str,
    cfg: ScoringConfig | None = None,
) -> tuple[float, list[str]]:
    return relevance_score(content, terms, query, cfg), matched_terms(content, terms)
