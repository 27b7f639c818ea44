from pydantic import Field
from typing import Optional
from datetime import datetime

from interview_prep.schemas.base import CamelModel


class QuestionInput(CamelModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    notes: Optional[str] = None


class QuestionResponse(CamelModel):
    id: int
    session_id: int
    question: str
    answer: str
    notes: Optional[str] = None
    is_pinned: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class SessionCreate(CamelModel):
    role: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    topics_to_focus: str = Field(min_length=1)
    description: Optional[str] = None
    questions: Optional[list[QuestionInput]] = None


class SessionSummary(CamelModel):
    id: int
    user_id: int
    role: str
    experience: str
    topics_to_focus: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class SessionResponse(SessionSummary):
    # Ordered pinned-first, then oldest-first
    questions: list[QuestionResponse] = []


class SessionCreateResponse(CamelModel):
    success: bool = True
    session: SessionResponse


class AddQuestionsRequest(CamelModel):
    session_id: int
    questions: list[QuestionInput]


class QuestionNoteUpdate(CamelModel):
    note: Optional[str] = None


class QuestionActionResponse(CamelModel):
    success: bool = True
    question: QuestionResponse
