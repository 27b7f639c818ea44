import json

import pytest

from interview_prep.schemas.ai import ExplanationResponse, GeneratedQuestion, MatchAnalysis
from interview_prep.services.response_normalizer import (
    ResponseParseError,
    TaskKind,
    extract_field,
    normalize,
    normalize_cover_letter,
    normalize_explanation,
    normalize_match_analysis,
    normalize_questions,
    strip_code_fences,
)

QUESTIONS = [
    {"question": "What is the event loop?", "answer": "It schedules callbacks."},
    {"question": "What is an index?", "answer": "A lookup structure."},
]


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"a": 1}\n```',
        '```json{"a": 1}```',
        '```\n{"a": 1}\n```',
        '```javascript\n{"a": 1}\n```   \n',
        '  {"a": 1}  ',
        '{"a": 1}',
    ],
)
def test_strip_code_fences_variants(raw):
    assert strip_code_fences(raw) == '{"a": 1}'


def test_strip_code_fences_leaves_inner_fences():
    raw = '```json\n{"answer": "use ```code``` blocks"}\n```'
    assert json.loads(strip_code_fences(raw)) == {"answer": "use ```code``` blocks"}


def test_strip_code_fences_handles_empty():
    assert strip_code_fences("") == ""
    assert strip_code_fences(None) == ""


def test_fenced_and_unfenced_completions_normalize_identically():
    body = json.dumps({"questions": QUESTIONS})
    assert normalize_questions(f"```json\n{body}\n```") == normalize_questions(body)


def test_wrapped_and_bare_questions_produce_same_list():
    wrapped = normalize_questions(json.dumps({"questions": QUESTIONS}))
    bare = normalize_questions(json.dumps(QUESTIONS))
    assert wrapped == bare
    assert wrapped == [GeneratedQuestion(**q) for q in QUESTIONS]


def test_extract_field_prefers_named_field():
    assert extract_field({"questions": [1]}, "questions") == [1]
    assert extract_field([1], "questions") == [1]
    assert extract_field({"other": 1}, "questions") == {"other": 1}


def test_questions_skip_malformed_entries():
    raw = json.dumps([QUESTIONS[0], "junk", {"question": "no answer"}])
    assert normalize_questions(raw) == [GeneratedQuestion(**QUESTIONS[0])]


@pytest.mark.parametrize("raw", ["[]", '{"questions": []}', '[{"question": "q", "answer": 3}]'])
def test_questions_with_no_usable_entries_are_empty(raw):
    assert normalize_questions(raw) == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        '{"questions": [',
        '{"title": "object, not a list"}',
    ],
)
def test_questions_failures_are_fatal(raw):
    with pytest.raises(ResponseParseError) as exc_info:
        normalize_questions(raw)
    assert exc_info.value.kind == TaskKind.QUESTIONS


def test_explanation_parses_and_defaults_missing_fields():
    result = normalize_explanation('```json\n{"explanation": "Closures capture scope."}\n```')
    assert result == ExplanationResponse(title="", explanation="Closures capture scope.")


def test_explanation_failures_are_fatal():
    with pytest.raises(ResponseParseError):
        normalize_explanation("{broken")
    with pytest.raises(ResponseParseError):
        normalize_explanation('["not", "an", "object"]')


def test_match_analysis_parses():
    result = normalize_match_analysis('{"matchPercentage": 72, "matchSummary": "Good fit"}')
    assert result == MatchAnalysis(match_percentage=72, match_summary="Good fit")


def test_match_analysis_malformed_json_falls_back_to_defaults():
    assert normalize_match_analysis("Sorry, I cannot do that") == MatchAnalysis()
    assert normalize_match_analysis("[1, 2]") == MatchAnalysis()


def test_match_analysis_missing_fields_default():
    assert normalize_match_analysis("{}") == MatchAnalysis(match_percentage=0, match_summary="")


@pytest.mark.parametrize(
    "value,expected",
    [(150, 100), (-5, 0), (66.6, 67), ("85%", 85), ("lots", 0), (None, 0), (True, 0)],
)
def test_match_percentage_is_clamped_and_coerced(value, expected):
    raw = json.dumps({"matchPercentage": value, "matchSummary": "x"})
    assert normalize_match_analysis(raw).match_percentage == expected


def test_cover_letter_wrapped_and_bare():
    assert normalize_cover_letter('{"coverLetter": "Dear team,"}') == "Dear team,"
    assert normalize_cover_letter('"Dear team,"') == "Dear team,"


def test_cover_letter_failures_are_fatal():
    with pytest.raises(ResponseParseError):
        normalize_cover_letter("Dear team, (not json)")
    with pytest.raises(ResponseParseError):
        normalize_cover_letter('{"letter": "wrong key"}')
    with pytest.raises(ResponseParseError):
        normalize_cover_letter('{"coverLetter": "   "}')


def test_normalize_dispatches_on_kind():
    assert normalize(json.dumps(QUESTIONS), "questions") == normalize_questions(json.dumps(QUESTIONS))
    assert normalize("oops", TaskKind.MATCH_ANALYSIS) == MatchAnalysis()
    with pytest.raises(ValueError):
        normalize("{}", "unknown")
