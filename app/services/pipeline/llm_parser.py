"""Parsing and validation of the raw Gemini reply into a PrepGuide."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from pydantic import ValidationError

from app.core.exceptions import MalformedResponseError, SchemaViolationError
from app.schemas.interview import PrepGuide

logger = logging.getLogger(__name__)

# At most one opening fence (``` or ```json) and one closing fence.
_LEADING_FENCE = re.compile(r'^```(?:json)?[ \t]*\r?\n?', re.IGNORECASE)
_TRAILING_FENCE = re.compile(r'\r?\n?```$')

ParseFailure = Union[MalformedResponseError, SchemaViolationError]


@dataclass(frozen=True)
class ParseResult:
    """Either a validated guide or the failure that prevented one."""
    guide: Optional[PrepGuide] = None
    error: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PrepGuide:
        """Return the guide or raise the recorded failure."""
        if self.error is not None:
            raise self.error
        return self.guide


def strip_code_fences(raw_text: str) -> str:
    """Trim whitespace and remove one optional leading and trailing code fence."""
    text = raw_text.strip()
    text = _LEADING_FENCE.sub('', text, count=1)
    text = _TRAILING_FENCE.sub('', text, count=1)
    return text.strip()


def format_error_path(loc: Sequence[Union[str, int]]) -> str:
    """('codingRound', 'sampleProblems', 0, 'solution') -> 'codingRound.sampleProblems[0].solution'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "$"


def _schema_violation(exc: ValidationError) -> SchemaViolationError:
    # Pydantic reports errors in field declaration order, depth first.
    first = exc.errors()[0]
    path = format_error_path(first["loc"])
    if first["type"] == "missing":
        reason = "is missing"
    else:
        reason = f"is invalid ({first['msg']})"
    return SchemaViolationError(
        f"The AI's response did not match the expected format: '{path}' {reason}.",
        path=path,
        details={"error_count": exc.error_count()},
    )


def parse_prep_guide(raw_text: str) -> ParseResult:
    """
    Parse the raw model output into a validated PrepGuide.

    Never raises for bad input: malformed JSON and schema mismatches come back
    as the ``error`` of the result. No repair is attempted beyond fence stripping.
    """
    text = strip_code_fences(raw_text or "")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Gemini response is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})")
        logger.debug(f"Raw output (first 500 chars): {text[:500]}...")
        error = MalformedResponseError(
            "Failed to parse the AI's response. The format was invalid.",
            {"reason": e.msg},
        )
        return ParseResult(error=error)

    if not isinstance(data, dict):
        logger.error(f"Gemini response is JSON {type(data).__name__}, expected an object")
        error = SchemaViolationError(
            "The AI's response did not match the expected format: expected a JSON object.",
            path="$",
        )
        return ParseResult(error=error)

    try:
        guide = PrepGuide.model_validate(data)
    except ValidationError as e:
        error = _schema_violation(e)
        logger.error(f"Schema violation at '{error.path}' ({e.error_count()} error(s) total)")
        return ParseResult(error=error)

    logger.info(f"Parsed prep guide for '{guide.company_name}'")
    return ParseResult(guide=guide)
