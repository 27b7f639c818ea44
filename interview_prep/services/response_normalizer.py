"""Turn raw LLM completions into typed results.

Every completion goes through the same steps: strip markdown code fences,
parse strict JSON, pull out the expected shape, then default missing fields.
Parse failures are fatal for questions, explanations and cover letters
(``ResponseParseError``) and recoverable for match analysis, which falls back
to ``MatchAnalysis()``.
"""

import json
import logging
import math
import re
from enum import Enum
from typing import Any, Union

from interview_prep.schemas.ai import ExplanationResponse, GeneratedQuestion, MatchAnalysis

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


class TaskKind(str, Enum):
    QUESTIONS = "questions"
    EXPLANATION = "explanation"
    MATCH_ANALYSIS = "matchAnalysis"
    COVER_LETTER = "coverLetter"


class ResponseParseError(ValueError):
    """The completion could not be turned into the shape ``kind`` requires."""

    def __init__(self, kind: TaskKind, message: str):
        super().__init__(message)
        self.kind = kind


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence, then trim."""
    cleaned = (text or "").strip()
    cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_completion(raw: str, kind: TaskKind) -> Any:
    cleaned = strip_code_fences(raw)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(kind, f"Model returned invalid JSON: {e}") from e


def extract_field(parsed: Any, field: str) -> Any:
    """Return ``parsed[field]`` for a wrapped payload, else the payload itself."""
    if isinstance(parsed, dict) and field in parsed:
        return parsed[field]
    return parsed


def normalize_questions(raw: str) -> list[GeneratedQuestion]:
    data = extract_field(parse_completion(raw, TaskKind.QUESTIONS), "questions")
    if not isinstance(data, list):
        raise ResponseParseError(TaskKind.QUESTIONS, "Expected a list of questions")

    questions: list[GeneratedQuestion] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        question = item.get("question")
        answer = item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            continue
        questions.append(GeneratedQuestion(question=question, answer=answer))

    if len(questions) < len(data):
        logger.warning("Dropped %d malformed question entries", len(data) - len(questions))
    return questions


def normalize_explanation(raw: str) -> ExplanationResponse:
    data = parse_completion(raw, TaskKind.EXPLANATION)
    if not isinstance(data, dict):
        raise ResponseParseError(TaskKind.EXPLANATION, "Expected an explanation object")

    title = data.get("title")
    explanation = data.get("explanation")
    return ExplanationResponse(
        title=title if isinstance(title, str) else "",
        explanation=explanation if isinstance(explanation, str) else "",
    )


def _coerce_percentage(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        try:
            value = float(value)
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or math.isnan(value):
        return 0
    return int(round(max(0, min(100, value))))


def normalize_match_analysis(raw: str) -> MatchAnalysis:
    try:
        data = parse_completion(raw, TaskKind.MATCH_ANALYSIS)
    except ResponseParseError as e:
        logger.warning("Match analysis unparseable, using defaults: %s", e)
        return MatchAnalysis()

    if not isinstance(data, dict):
        logger.warning("Match analysis was not an object, using defaults")
        return MatchAnalysis()

    summary = data.get("matchSummary")
    return MatchAnalysis(
        match_percentage=_coerce_percentage(data.get("matchPercentage")),
        match_summary=summary if isinstance(summary, str) else "",
    )


def normalize_cover_letter(raw: str) -> str:
    data = extract_field(parse_completion(raw, TaskKind.COVER_LETTER), "coverLetter")
    if not isinstance(data, str) or not data.strip():
        raise ResponseParseError(TaskKind.COVER_LETTER, "Expected cover letter text")
    return data.strip()


_NORMALIZERS = {
    TaskKind.QUESTIONS: normalize_questions,
    TaskKind.EXPLANATION: normalize_explanation,
    TaskKind.MATCH_ANALYSIS: normalize_match_analysis,
    TaskKind.COVER_LETTER: normalize_cover_letter,
}


def normalize(
    raw: str, kind: Union[TaskKind, str]
) -> Union[list[GeneratedQuestion], ExplanationResponse, MatchAnalysis, str]:
    """Dispatch to the normalizer for ``kind``."""
    return _NORMALIZERS[TaskKind(kind)](raw)
