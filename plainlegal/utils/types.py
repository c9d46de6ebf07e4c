from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

RISK_LEVELS = ("low", "medium", "high")
DEFAULT_RISK_LEVEL = "medium"


@dataclass(frozen=True)
class Segment:
    index: int
    text: str


class TaskKind(str, Enum):
    SIMPLIFY = "simplify"
    EXTRACT_CLAUSES = "extract_clauses"
    GENERATE_QUESTIONS = "generate_questions"


@dataclass(frozen=True)
class SimplifiedSection:
    original_text: str
    simplified_text: str
    section_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "originalText": self.original_text,
            "simplifiedText": self.simplified_text,
            "sectionIndex": self.section_index,
        }


@dataclass(frozen=True)
class ConfusingClause:
    clause: str
    why_confusing: str
    section_index: int
    risk_level: str = DEFAULT_RISK_LEVEL
    suggested_rewrite: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "clause": self.clause,
            "whyConfusing": self.why_confusing,
            "riskLevel": self.risk_level,
            "sectionIndex": self.section_index,
        }
        if self.suggested_rewrite is not None:
            out["suggestedRewrite"] = self.suggested_rewrite
        return out


@dataclass(frozen=True)
class SuggestedQuestion:
    question: str
    context: str
    related_clause: str  # <= 100 chars

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "context": self.context, "relatedClause": self.related_clause}


@dataclass(frozen=True)
class TaskOutcome:
    """Settled result of one analysis task: either the parsed value or its fallback."""
    kind: TaskKind
    value: Any
    fallback: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class SegmentAnalysis:
    segment: Segment
    section: SimplifiedSection
    clauses: Tuple[ConfusingClause, ...] = ()
    questions: Tuple[SuggestedQuestion, ...] = ()
    outcomes: Tuple[TaskOutcome, ...] = field(default=(), compare=False)

    @property
    def degraded(self) -> bool:
        return any(o.fallback for o in self.outcomes)


@dataclass(frozen=True)
class AnalysisResult:
    simplified_sections: Tuple[SimplifiedSection, ...]
    confusing_clauses: Tuple[ConfusingClause, ...]
    suggested_questions: Tuple[SuggestedQuestion, ...]

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            "simplifiedSections": [s.to_dict() for s in self.simplified_sections],
            "confusingClauses": [c.to_dict() for c in self.confusing_clauses],
            "suggestedQuestions": [q.to_dict() for q in self.suggested_questions],
        }
