"""Session and question persistence with ownership checks."""

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from interview_prep.errors import ForbiddenError, NotFoundError
from interview_prep.models.interview_session import InterviewSession
from interview_prep.models.question import Question
from interview_prep.models.user import User
from interview_prep.schemas.session import (
    QuestionInput,
    QuestionResponse,
    SessionResponse,
    SessionSummary,
)

logger = logging.getLogger(__name__)


def _new_question(session_id: int, item: QuestionInput) -> Question:
    return Question(
        session_id=session_id,
        question=item.question,
        answer=item.answer,
        notes=item.notes or None,
        is_pinned=False,
    )


def create_session(
    db: Session,
    user: User,
    role: str,
    experience: str,
    topics_to_focus: str,
    description: Optional[str] = None,
    questions: Optional[Iterable[QuestionInput]] = None,
) -> InterviewSession:
    """Create a session, then its initial question batch."""
    session = InterviewSession(
        user_id=user.id,
        role=role,
        experience=experience,
        topics_to_focus=topics_to_focus,
        description=description,
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    items = list(questions or [])
    if items:
        db.add_all([_new_question(session.id, item) for item in items])
        db.commit()
        db.refresh(session)

    logger.info("Created session %s with %d questions for user %s", session.id, len(items), user.id)
    return session


def list_sessions(db: Session, user_id: int, limit: int = 50, offset: int = 0) -> list[InterviewSession]:
    """The user's sessions, newest first."""
    return (
        db.query(InterviewSession)
        .filter(InterviewSession.user_id == user_id)
        .order_by(InterviewSession.created_at.desc(), InterviewSession.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


def get_owned_session(db: Session, session_id: int, user_id: int) -> InterviewSession:
    session = db.query(InterviewSession).filter(InterviewSession.id == session_id).first()
    if not session:
        raise NotFoundError("Session not found")
    if session.user_id != user_id:
        raise ForbiddenError("Unauthorized")
    return session


def delete_session(db: Session, session: InterviewSession) -> None:
    """Delete the session's questions, then the session itself.

    Two separate commits: a failure in between leaves orphaned questions.
    """
    session_id = session.id
    removed = (
        db.query(Question)
        .filter(Question.session_id == session_id)
        .delete(synchronize_session=False)
    )
    db.commit()

    db.query(InterviewSession).filter(InterviewSession.id == session_id).delete(
        synchronize_session=False
    )
    db.commit()
    db.expire_all()
    logger.info("Deleted session %s and %d questions", session_id, removed)


def add_questions(db: Session, session: InterviewSession, items: Iterable[QuestionInput]) -> list[Question]:
    created = [_new_question(session.id, item) for item in items]
    db.add_all(created)
    db.commit()
    for question in created:
        db.refresh(question)
    return created


def get_owned_question(db: Session, question_id: int, user_id: int) -> Question:
    question = db.query(Question).filter(Question.id == question_id).first()
    if not question:
        raise NotFoundError("Question not found")

    # Ownership lives on the parent session
    session = db.query(InterviewSession).filter(InterviewSession.id == question.session_id).first()
    if not session or session.user_id != user_id:
        raise ForbiddenError("Unauthorized")
    return question


def toggle_pin(db: Session, question: Question) -> Question:
    question.is_pinned = not question.is_pinned
    db.commit()
    db.refresh(question)
    return question


def update_note(db: Session, question: Question, note: Optional[str]) -> Question:
    question.notes = note or ""
    db.commit()
    db.refresh(question)
    return question


def session_questions(db: Session, session_id: int) -> list[Question]:
    """Questions in display order: pinned first, then oldest first."""
    return (
        db.query(Question)
        .filter(Question.session_id == session_id)
        .order_by(Question.is_pinned.desc(), Question.created_at.asc(), Question.id.asc())
        .all()
    )


def build_session_view(db: Session, session: InterviewSession) -> SessionResponse:
    summary = SessionSummary.model_validate(session)
    questions = [QuestionResponse.model_validate(q) for q in session_questions(db, session.id)]
    return SessionResponse(**summary.model_dump(), questions=questions)
