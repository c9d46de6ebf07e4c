from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Tuple

from plainlegal.llm.base import ChatMessage
from plainlegal.utils.types import TaskKind

PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"

_FILE_STEMS = {
    TaskKind.SIMPLIFY: "simplify",
    TaskKind.EXTRACT_CLAUSES: "clauses",
    TaskKind.GENERATE_QUESTIONS: "questions",
}


def _read(name: str) -> str:
    with open(PROMPT_DIR / name, "r", encoding="utf-8") as f:
        return f.read().strip()


def load_templates() -> Dict[TaskKind, Tuple[str, str]]:
    """(system, user) template pair per task kind; ``{text}`` is the segment."""
    return {
        kind: (_read(f"{stem}_system.txt"), _read(f"{stem}_user.txt"))
        for kind, stem in _FILE_STEMS.items()
    }


TEMPLATES = load_templates()


def build_messages(kind: TaskKind, segment_text: str) -> List[ChatMessage]:
    system, user = TEMPLATES[kind]
    return [
        ChatMessage("system", system.format(text=segment_text)),
        ChatMessage("user", user.format(text=segment_text)),
    ]
