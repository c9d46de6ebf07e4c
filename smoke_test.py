"""Quick smoke test for the analysis pipeline (no network, no API key).

Run with:  python smoke_test.py
"""
from __future__ import annotations
import json

from plainlegal.analysis.analyzer import analyze
from plainlegal.report.text_report import full_report
from plainlegal.utils.config import AppConfig


class StubClient:
    async def generate(self, messages, params) -> str:  # noqa: D401
        system = messages[0].content
        if "clause analyzer" in system:
            return json.dumps([{"clause": "sole discretion", "whyConfusing": "One-sided right.", "riskLevel": "high"}])
        if "question generator" in system:
            return json.dumps([{"question": "Can they end this without notice?", "context": "Termination"}])
        return "(stub) plain-language version"

    async def aclose(self) -> None:
        return None


DOCUMENT = (
    "1. The Provider may terminate this Agreement at its sole discretion at any time.\n\n"
    "2. The Customer shall indemnify the Provider for any and all claims arising out of use."
)


def main():
    result = analyze(DOCUMENT, config=AppConfig(), client=StubClient())
    print(full_report(result))
    assert len(result.simplified_sections) == 2, "Expected two numbered sections"
    assert all(c.risk_level == "high" for c in result.confusing_clauses)
    print("Smoke test passed.")


if __name__ == "__main__":
    main()
