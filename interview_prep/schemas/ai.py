from pydantic import Field, field_validator
from typing import Union

from interview_prep.schemas.base import CamelModel


class GenerateQuestionsRequest(CamelModel):
    role: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    topics_to_focus: Union[str, list[str]]
    number_of_questions: int = Field(ge=1, le=50)

    @field_validator("topics_to_focus")
    @classmethod
    def topics_not_blank(cls, value):
        topics = value.split(",") if isinstance(value, str) else value
        if not any(topic.strip() for topic in topics):
            raise ValueError("at least one topic is required")
        return value


class GeneratedQuestion(CamelModel):
    question: str
    answer: str


class GenerateExplanationRequest(CamelModel):
    question: str = Field(min_length=1)


class ExplanationResponse(CamelModel):
    title: str = ""
    explanation: str = ""


class GenerateCoverLetterRequest(CamelModel):
    company_description: str = Field(min_length=1)


class MatchAnalysis(CamelModel):
    match_percentage: int = 0
    match_summary: str = ""


class CoverLetterResponse(CamelModel):
    cover_letter: str
    match_percentage: int = 0
    match_summary: str = ""
