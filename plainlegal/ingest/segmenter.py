from __future__ import annotations
import re
from typing import List

from plainlegal.utils.types import Segment
from plainlegal.utils.logger import logger

# Blank-line paragraph breaks are consumed; numbered ("3." / "3)") and section
# symbol ("§") markers at line start are split *before*, so the marker stays
# with the section it introduces.
STRUCTURE_RE = re.compile(
    r"\n[ \t]*(?:\n[ \t]*)+"
    r"|(?=^[ \t]*\d{1,3}[.)][ \t]+\S)"
    r"|(?=^[ \t]*§)",
    re.M,
)
SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")


def _structural_split(text: str, min_chars: int) -> List[str]:
    parts = STRUCTURE_RE.split(text)
    return [p.strip() for p in parts if p and len(p.strip()) > min_chars]


def _sentence_chunks(text: str, n_chunks: int, min_chars: int) -> List[str]:
    sentences = [s.strip() for s in SENTENCE_RE.split(text) if s.strip()]
    if len(sentences) < 2:
        return []
    # balanced groups: the first r chunks take one extra sentence
    q, r = divmod(len(sentences), n_chunks)
    chunks, start = [], 0
    for i in range(min(n_chunks, len(sentences))):
        end = start + q + (1 if i < r else 0)
        chunks.append(" ".join(sentences[start:end]))
        start = end
    return [c for c in chunks if len(c) > min_chars]


def split_into_segments(
    text: str,
    min_chars: int = 30,
    sentence_fallback_chars: int = 2000,
    sentence_chunks: int = 3,
) -> List[Segment]:
    """Split document text into ordered, non-trivial segments.

    1. structural split on paragraph breaks, numbered sections and § markers,
       dropping fragments of ``min_chars`` or fewer characters;
    2. if that leaves a single segment of a long (> ``sentence_fallback_chars``)
       input, regroup its sentences into ``sentence_chunks`` chunks;
    3. if nothing survives, the whole text becomes the only segment.

    The result is never empty and indices run 0..n-1.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    pieces = _structural_split(text, min_chars)
    if len(pieces) == 1 and len(text) > sentence_fallback_chars:
        chunks = _sentence_chunks(text, sentence_chunks, min_chars)
        if len(chunks) > 1:
            logger.debug("No structure in %d-char input; using %d sentence chunks", len(text), len(chunks))
            pieces = chunks
    if not pieces:
        pieces = [text.strip() or text]
    return [Segment(index=i, text=p) for i, p in enumerate(pieces)]
