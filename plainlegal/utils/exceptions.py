"""Error taxonomy for the analysis pipeline.

Only ValidationError is meant to reach callers of the Analyze operation;
generation errors are turned into fallbacks by the analyzer and ParseError
never leaves the parsing module.
"""
from __future__ import annotations
from typing import Optional


class PlainLegalError(Exception):
    """Base class for all package errors."""


class ValidationError(PlainLegalError):
    """Input rejected before any segmentation or generation work."""


class GenerationError(PlainLegalError):
    """A single generation call did not produce a usable text payload."""


class GenerationTimeout(GenerationError):
    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        msg = f"generation call exceeded {timeout:.1f}s" if timeout is not None else "generation call timed out"
        super().__init__(msg)


class UpstreamError(GenerationError):
    def __init__(self, status: Optional[int], detail: str = ""):
        self.status = status
        self.detail = detail
        msg = f"upstream error (status {status})"
        if detail:
            msg += f": {detail[:200]}"
        super().__init__(msg)


class MalformedEnvelope(GenerationError):
    """The service answered, but not with the expected response envelope."""


class ParseError(PlainLegalError):
    """Payload could not be decoded into the expected structured shape."""
