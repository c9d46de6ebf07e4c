from __future__ import annotations
import json
from typing import Any, Dict, Optional

from plainlegal.analysis.analyzer import SIMPLIFY_FALLBACK
from plainlegal.utils.types import AnalysisResult, RISK_LEVELS


def analysis_stats(result: AnalysisResult) -> Dict[str, Any]:
    by_risk = {level: 0 for level in RISK_LEVELS}
    for c in result.confusing_clauses:
        by_risk[c.risk_level] = by_risk.get(c.risk_level, 0) + 1
    return {
        "sections": len(result.simplified_sections),
        "fallback_sections": sum(1 for s in result.simplified_sections if s.simplified_text == SIMPLIFY_FALLBACK),
        "clauses": len(result.confusing_clauses),
        "clauses_by_risk": by_risk,
        "questions": len(result.suggested_questions),
    }


def build_analysis_json(result: AnalysisResult, meta: Optional[Dict[str, Any]] = None) -> str:
    """Return a structured JSON snapshot of the analysis suitable for downstream storage.

    meta can include build/version timestamps, model info, etc.
    """
    payload = {
        "meta": meta or {},
        **result.to_dict(),
        "stats": analysis_stats(result),
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)
