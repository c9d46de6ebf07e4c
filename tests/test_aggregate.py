import pytest

from plainlegal.analysis.aggregate import aggregate
from plainlegal.utils.types import (
    ConfusingClause, Segment, SegmentAnalysis, SimplifiedSection, SuggestedQuestion,
)


def slot(i: int, n_clauses: int = 1, n_questions: int = 1) -> SegmentAnalysis:
    seg = Segment(i, f"segment {i}")
    return SegmentAnalysis(
        segment=seg,
        section=SimplifiedSection(seg.text, f"plain {i}", i),
        clauses=tuple(ConfusingClause(f"c{i}.{k}", "why", i) for k in range(n_clauses)),
        questions=tuple(SuggestedQuestion(f"q{i}.{k}", "General", seg.text) for k in range(n_questions)),
    )


def test_aggregate_concatenates_in_segment_order():
    result = aggregate([slot(0, 2, 1), slot(1, 0, 2), slot(2, 1, 0)])
    assert [s.section_index for s in result.simplified_sections] == [0, 1, 2]
    assert [c.clause for c in result.confusing_clauses] == ["c0.0", "c0.1", "c2.0"]
    assert [q.question for q in result.suggested_questions] == ["q0.0", "q1.0", "q1.1"]


def test_aggregate_keeps_duplicates():
    a, b = slot(0), slot(1)
    dup = SegmentAnalysis(b.segment, b.section, clauses=a.clauses, questions=a.questions)
    result = aggregate([a, dup])
    assert len(result.confusing_clauses) == 2
    assert result.confusing_clauses[0].clause == result.confusing_clauses[1].clause


def test_aggregate_rejects_unfilled_slot():
    with pytest.raises(ValueError):
        aggregate([slot(0), None])


def test_aggregate_rejects_misplaced_slot():
    with pytest.raises(ValueError):
        aggregate([slot(1), slot(0)])


def test_result_to_dict_uses_wire_keys():
    d = aggregate([slot(0)]).to_dict()
    assert set(d) == {"simplifiedSections", "confusingClauses", "suggestedQuestions"}
    assert d["simplifiedSections"][0] == {"originalText": "segment 0", "simplifiedText": "plain 0", "sectionIndex": 0}
    assert "suggestedRewrite" not in d["confusingClauses"][0]
    assert d["confusingClauses"][0]["riskLevel"] == "medium"
