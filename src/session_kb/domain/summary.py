from __future__ import annotations

import re

_SENTENCE_BREAK_RE = re.compile(r"[.!?]+")


def build_summary(
    content: str,
    filename: str,
    *,
    max_chars: int = 300,
    fallback_chars: int = 200,
    max_sentences: int = 10,
) -> str:
    """Extractive summary: the leading sentences up to ``max_chars``.

    Falls back to a raw prefix when the text has no usable sentences.
    """
    sentences = [s for s in _SENTENCE_BREAK_RE.split(content or "") if len(s.strip()) > 10]

    summary = ""
    for sentence in sentences[:max_sentences]:
        if len(summary) + len(sentence) > max_chars:
            break
        summary += sentence.strip() + ". "

    if not summary:
        summary = (content or "")[:fallback_chars] + "..."

    return f"Document: {filename}\n\n{summary.strip()}"
