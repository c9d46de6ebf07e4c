"""Plain-text exports of an analysis (simplified document, clauses, questions, full report)."""
from __future__ import annotations
from datetime import datetime
from typing import Optional

from plainlegal.utils.types import AnalysisResult

RULE = "=" * 50
WIDE_RULE = "=" * 60
NO_CLAUSES = "No confusing clauses were identified in this document."
NO_QUESTIONS = "No specific questions were generated for this document."


def simplified_text(result: AnalysisResult) -> str:
    return "".join(
        f"SECTION {i + 1}\n\nOriginal:\n{s.original_text}\n\nSimplified:\n{s.simplified_text}\n\n{RULE}\n\n"
        for i, s in enumerate(result.simplified_sections)
    )


def clauses_text(result: AnalysisResult) -> str:
    if not result.confusing_clauses:
        return NO_CLAUSES
    blocks = []
    for i, c in enumerate(result.confusing_clauses):
        rewrite = f"Suggested rewrite:\n{c.suggested_rewrite}\n\n" if c.suggested_rewrite else ""
        blocks.append(
            f"CONFUSING CLAUSE {i + 1} ({c.risk_level.upper()} RISK)\n\n"
            f"Clause:\n{c.clause}\n\n"
            f"Why it's confusing:\n{c.why_confusing}\n\n"
            f"{rewrite}{RULE}\n\n"
        )
    return "".join(blocks)


def questions_text(result: AnalysisResult) -> str:
    if not result.suggested_questions:
        return NO_QUESTIONS
    return "".join(
        f"{i + 1}. {q.question}\n   Context: {q.context}\n   Related to: {q.related_clause}...\n\n"
        for i, q in enumerate(result.suggested_questions)
    )


def full_report(result: AnalysisResult, generated: Optional[datetime] = None) -> str:
    stamp = (generated or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    parts = [
        "SPEAK LEGAL - DOCUMENT ANALYSIS REPORT",
        f"Generated: {stamp}",
        "",
        WIDE_RULE, "SIMPLIFIED DOCUMENT", WIDE_RULE, "",
        simplified_text(result),
        WIDE_RULE, "CONFUSING CLAUSES", WIDE_RULE, "",
        clauses_text(result),
        "",
        WIDE_RULE, "SUGGESTED QUESTIONS", WIDE_RULE, "",
        questions_text(result),
    ]
    return "\n".join(parts)
