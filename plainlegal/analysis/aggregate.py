from __future__ import annotations
from typing import List, Optional, Sequence

from plainlegal.utils.types import (
    AnalysisResult, ConfusingClause, SegmentAnalysis, SimplifiedSection, SuggestedQuestion,
)


def aggregate(slots: Sequence[Optional[SegmentAnalysis]]) -> AnalysisResult:
    """Merge per-segment slots into the final result.

    ``slots[i]`` must hold the analysis of segment ``i``. Sections come out one
    per slot in index order; clauses and questions are concatenated slot by
    slot without reordering or deduplication.
    """
    sections: List[SimplifiedSection] = []
    clauses: List[ConfusingClause] = []
    questions: List[SuggestedQuestion] = []
    for i, slot in enumerate(slots):
        if slot is None:
            raise ValueError(f"segment slot {i} was never filled")
        if slot.segment.index != i or slot.section.section_index != i:
            raise ValueError(f"segment slot {i} holds analysis for segment {slot.segment.index}")
        sections.append(slot.section)
        clauses.extend(slot.clauses)
        questions.extend(slot.questions)
    return AnalysisResult(
        simplified_sections=tuple(sections),
        confusing_clauses=tuple(clauses),
        suggested_questions=tuple(questions),
    )
