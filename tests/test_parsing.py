import json

from plainlegal.analysis.parsing import (
    decode_array, parse_clauses, parse_questions, DEFAULT_QUESTION, DEFAULT_CONTEXT,
)


def test_decode_array_never_raises():
    for payload in ["", "not json at all", "{\"clause\": \"x\"}", "[1, 2", None, 42, "null"]:
        assert decode_array(payload) == []


def test_decode_array_strips_markdown_fence():
    payload = "```json\n[{\"a\": 1}]\n```"
    assert decode_array(payload) == [{"a": 1}]


def test_clauses_unparsable_payload_is_empty():
    assert parse_clauses("I could not find any confusing clauses.", 0) == []


def test_clause_missing_risk_level_defaults_to_medium():
    payload = json.dumps([{"clause": "at its sole discretion", "whyConfusing": "One-sided."}])
    clauses = parse_clauses(payload, 3)
    assert len(clauses) == 1
    assert clauses[0].risk_level == "medium"
    assert clauses[0].section_index == 3
    assert clauses[0].suggested_rewrite is None


def test_clause_risk_level_normalised_or_defaulted():
    payload = json.dumps([
        {"clause": "a", "whyConfusing": "b", "riskLevel": "HIGH"},
        {"clause": "c", "whyConfusing": "d", "riskLevel": "catastrophic"},
        {"clause": "e", "whyConfusing": "f", "riskLevel": 3},
        {"clause": "g", "whyConfusing": "h", "riskLevel": "low", "suggestedRewrite": "plain g"},
    ])
    clauses = parse_clauses(payload, 0)
    assert [c.risk_level for c in clauses] == ["high", "medium", "medium", "low"]
    assert clauses[3].suggested_rewrite == "plain g"


def test_clause_records_missing_required_fields_are_skipped():
    payload = json.dumps([
        {"clause": "only the clause"},
        {"whyConfusing": "only the why"},
        "a bare string",
        {"clause": "  ", "whyConfusing": "blank clause"},
        {"clause": "kept", "whyConfusing": "complete"},
    ])
    clauses = parse_clauses(payload, 1)
    assert [c.clause for c in clauses] == ["kept"]


def test_question_defaults():
    segment = "X" * 250
    questions = parse_questions(json.dumps([{}]), segment)
    assert len(questions) == 1
    q = questions[0]
    assert q.question == DEFAULT_QUESTION
    assert q.context == DEFAULT_CONTEXT
    assert q.related_clause == "X" * 100


def test_question_related_clause_always_truncated():
    long_clause = "The Licensee shall " + "not " * 60 + "sublicense."
    payload = json.dumps([{"question": "Can I sublicense?", "context": "Licensing", "relatedClause": long_clause}])
    q = parse_questions(payload, "segment text")[0]
    assert q.related_clause == long_clause[:100]
    assert len(q.related_clause) == 100


def test_questions_non_array_is_empty():
    assert parse_questions(json.dumps({"question": "?"}), "segment") == []
