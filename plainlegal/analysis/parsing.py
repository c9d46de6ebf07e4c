"""Tolerant decoding of the clause / question payloads returned by the model.

The model's output is untrusted text that is *supposed* to be a JSON array of
records. Anything else - prose, a JSON object, a truncated array - decodes to
an empty list. Nothing in this module raises past its public functions.
"""
from __future__ import annotations
import json
from typing import Any, List, Optional

from plainlegal.utils.exceptions import ParseError
from plainlegal.utils.logger import logger
from plainlegal.utils.types import (
    ConfusingClause, SuggestedQuestion, RISK_LEVELS, DEFAULT_RISK_LEVEL,
)

RELATED_CLAUSE_MAX = 100
DEFAULT_QUESTION = "What should I ask my lawyer about this section?"
DEFAULT_CONTEXT = "General"


def _strip_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        body = text.split("\n", 1)[1] if "\n" in text else ""
        text = body.rsplit("```", 1)[0].strip()
    return text


def _load_array(payload: Any) -> List[Any]:
    if not isinstance(payload, str):
        raise ParseError(f"payload is {type(payload).__name__}, not text")
    try:
        data = json.loads(_strip_fence(payload))
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"not JSON: {e}") from e
    if not isinstance(data, list):
        raise ParseError(f"expected JSON array, got {type(data).__name__}")
    return data


def decode_array(payload: Any) -> List[Any]:
    """Decode ``payload`` as a JSON array; return [] on any failure."""
    try:
        return _load_array(payload)
    except ParseError as e:
        logger.debug("Discarding unparsable payload: %s", e)
        return []


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_risk_level(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in RISK_LEVELS:
        return value.strip().lower()
    return DEFAULT_RISK_LEVEL


def parse_clauses(payload: Any, section_index: int) -> List[ConfusingClause]:
    clauses: List[ConfusingClause] = []
    for item in decode_array(payload):
        if not isinstance(item, dict):
            continue
        clause = _text(item.get("clause"))
        why = _text(item.get("whyConfusing"))
        # Records without both the clause and the explanation are useless.
        if clause is None or why is None:
            continue
        clauses.append(ConfusingClause(
            clause=clause,
            why_confusing=why,
            suggested_rewrite=_text(item.get("suggestedRewrite")),
            risk_level=normalize_risk_level(item.get("riskLevel")),
            section_index=section_index,
        ))
    return clauses


def parse_questions(payload: Any, segment_text: str) -> List[SuggestedQuestion]:
    questions: List[SuggestedQuestion] = []
    for item in decode_array(payload):
        if not isinstance(item, dict):
            continue
        related = _text(item.get("relatedClause")) or segment_text
        questions.append(SuggestedQuestion(
            question=_text(item.get("question")) or DEFAULT_QUESTION,
            context=_text(item.get("context")) or DEFAULT_CONTEXT,
            related_clause=related[:RELATED_CLAUSE_MAX],
        ))
    return questions
