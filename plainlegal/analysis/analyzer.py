from __future__ import annotations
import asyncio
from typing import Any, List, Optional

from plainlegal.analysis.aggregate import aggregate
from plainlegal.analysis.parsing import parse_clauses, parse_questions
from plainlegal.analysis.prompts import build_messages
from plainlegal.ingest.segmenter import split_into_segments
from plainlegal.llm.base import GenerationClient
from plainlegal.llm.factory import get_client
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import GenerationTimeout, ValidationError
from plainlegal.utils.logger import logger
from plainlegal.utils.types import (
    AnalysisResult, Segment, SegmentAnalysis, SimplifiedSection, TaskKind, TaskOutcome,
)

SIMPLIFY_FALLBACK = "Unable to simplify this section."
TASK_ORDER = (TaskKind.SIMPLIFY, TaskKind.EXTRACT_CLAUSES, TaskKind.GENERATE_QUESTIONS)


def validate_input(text: Any, min_chars: int = 50) -> str:
    """Return the trimmed text or raise ValidationError."""
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Please enter some text to analyze.")
    trimmed = text.strip()
    if len(trimmed) < min_chars:
        raise ValidationError(
            f"Document text must be at least {min_chars} characters long for meaningful analysis."
        )
    return trimmed


def fallback_analysis(segment: Segment, error: Optional[str] = None) -> SegmentAnalysis:
    return SegmentAnalysis(
        segment=segment,
        section=SimplifiedSection(segment.text, SIMPLIFY_FALLBACK, segment.index),
        outcomes=tuple(TaskOutcome(kind, None, fallback=True, error=error) for kind in TASK_ORDER),
    )


class DocumentAnalyzer:
    """Runs the three analysis tasks per segment and the segments themselves concurrently.

    Every generation call gets its own deadline; a failed, timed-out or
    cancelled call degrades to that task's fallback without touching its
    siblings, and an unexpected error inside a segment degrades only that
    segment. Results land in per-index slots so output order never depends on
    completion order.
    """

    def __init__(self, config: AppConfig, client: GenerationClient):
        self.config = config
        self.client = client
        self.params = config.generation_params()

    async def _call(self, kind: TaskKind, segment: Segment) -> str:
        messages = build_messages(kind, segment.text)
        try:
            return await asyncio.wait_for(self.client.generate(messages, self.params), timeout=self.params.timeout)
        except asyncio.TimeoutError as e:
            raise GenerationTimeout(self.params.timeout) from e

    def _settle(self, kind: TaskKind, segment: Segment, result: Any) -> TaskOutcome:
        if isinstance(result, BaseException):
            logger.warning("Segment %d %s failed, using fallback: %r", segment.index, kind.value, result)
            if kind is TaskKind.SIMPLIFY:
                return TaskOutcome(kind, SIMPLIFY_FALLBACK, fallback=True, error=str(result) or type(result).__name__)
            return TaskOutcome(kind, [], fallback=True, error=str(result) or type(result).__name__)
        if kind is TaskKind.SIMPLIFY:
            return TaskOutcome(kind, result.strip())
        if kind is TaskKind.EXTRACT_CLAUSES:
            return TaskOutcome(kind, parse_clauses(result, segment.index))
        return TaskOutcome(kind, parse_questions(result, segment.text))

    async def analyze_segment(self, segment: Segment) -> SegmentAnalysis:
        settled = await asyncio.gather(
            *(self._call(kind, segment) for kind in TASK_ORDER),
            return_exceptions=True,
        )
        simplify, clauses, questions = (
            self._settle(kind, segment, result) for kind, result in zip(TASK_ORDER, settled)
        )
        return SegmentAnalysis(
            segment=segment,
            section=SimplifiedSection(segment.text, simplify.value, segment.index),
            clauses=tuple(clauses.value),
            questions=tuple(questions.value),
            outcomes=(simplify, clauses, questions),
        )

    async def _analyze_isolated(self, segment: Segment) -> SegmentAnalysis:
        try:
            return await self.analyze_segment(segment)
        except Exception as e:
            logger.exception("Segment %d failed unexpectedly; substituting fallbacks", segment.index)
            return fallback_analysis(segment, error=str(e) or type(e).__name__)

    async def analyze_segments(self, segments: List[Segment]) -> AnalysisResult:
        limit = self.config.max_concurrent_segments
        sem = asyncio.Semaphore(limit if limit > 0 else max(len(segments), 1))
        slots: List[Optional[SegmentAnalysis]] = [None] * len(segments)

        async def run(segment: Segment) -> None:
            async with sem:
                slots[segment.index] = await self._analyze_isolated(segment)

        await asyncio.gather(*(run(s) for s in segments))
        result = aggregate(slots)
        degraded = sum(1 for s in slots if s is not None and s.degraded)
        logger.info(
            "Analysis done: %d sections, %d clauses, %d questions (%d segments degraded)",
            len(result.simplified_sections), len(result.confusing_clauses),
            len(result.suggested_questions), degraded,
        )
        return result

    async def analyze(self, text: Any) -> AnalysisResult:
        trimmed = validate_input(text, self.config.min_input_chars)
        segments = split_into_segments(
            trimmed,
            min_chars=self.config.min_segment_chars,
            sentence_fallback_chars=self.config.sentence_fallback_chars,
            sentence_chunks=self.config.sentence_chunks,
        )
        logger.info("Analyzing %d chars in %d segments", len(trimmed), len(segments))
        return await self.analyze_segments(segments)


async def analyze_document(
    text: Any,
    config: Optional[AppConfig] = None,
    client: Optional[GenerationClient] = None,
) -> AnalysisResult:
    """Analyze operation: validate, segment, fan out, aggregate.

    Raises ValidationError for missing/short input before any other work;
    otherwise always returns a complete (possibly degraded) result. A client
    created here is closed here; an injected one is left to its owner.
    """
    config = config or AppConfig.from_env()
    validate_input(text, config.min_input_chars)
    if client is not None:
        return await DocumentAnalyzer(config, client).analyze(text)
    owned = get_client(config)
    try:
        return await DocumentAnalyzer(config, owned).analyze(text)
    finally:
        await owned.aclose()


def analyze(
    text: Any,
    config: Optional[AppConfig] = None,
    client: Optional[GenerationClient] = None,
) -> AnalysisResult:
    """Blocking wrapper around :func:`analyze_document`."""
    return asyncio.run(analyze_document(text, config=config, client=client))
