from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from interview_prep.database import get_db
from interview_prep.dependencies import get_current_user
from interview_prep.models.user import User
from interview_prep.schemas.session import (
    AddQuestionsRequest,
    QuestionActionResponse,
    QuestionNoteUpdate,
    QuestionResponse,
)
from interview_prep.services import session_store

router = APIRouter(prefix="/api/v1/questions", tags=["questions"])


@router.post("/add", response_model=list[QuestionResponse], status_code=status.HTTP_201_CREATED)
async def add_questions(
    request: AddQuestionsRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add questions to a session the user owns."""
    session = session_store.get_owned_session(db, request.session_id, current_user.id)
    return session_store.add_questions(db, session, request.questions)


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return session_store.get_owned_question(db, question_id, current_user.id)


@router.patch("/{question_id}/pin", response_model=QuestionActionResponse)
async def toggle_pin_question(
    question_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Toggle the pin status of a question."""
    question = session_store.get_owned_question(db, question_id, current_user.id)
    question = session_store.toggle_pin(db, question)
    return QuestionActionResponse(question=QuestionResponse.model_validate(question))


@router.post("/{question_id}/note", response_model=QuestionActionResponse)
async def update_question_note(
    question_id: int,
    request: QuestionNoteUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the note attached to a question."""
    question = session_store.get_owned_question(db, question_id, current_user.id)
    question = session_store.update_note(db, question, request.note)
    return QuestionActionResponse(question=QuestionResponse.model_validate(question))
