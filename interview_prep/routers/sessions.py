from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from interview_prep.database import get_db
from interview_prep.dependencies import get_current_user
from interview_prep.models.user import User
from interview_prep.schemas.base import MessageResponse
from interview_prep.schemas.session import (
    SessionCreate,
    SessionCreateResponse,
    SessionResponse,
)
from interview_prep.services import session_store

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post("/create", response_model=SessionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: SessionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new session and its initial questions."""
    session = session_store.create_session(
        db=db,
        user=current_user,
        role=request.role,
        experience=request.experience,
        topics_to_focus=request.topics_to_focus,
        description=request.description,
        questions=request.questions,
    )
    return SessionCreateResponse(session=session_store.build_session_view(db, session))


@router.get("/my-sessions", response_model=list[SessionResponse])
async def get_my_sessions(
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the user's sessions, newest first."""
    sessions = session_store.list_sessions(db, current_user.id, limit=limit, offset=offset)
    return [session_store.build_session_view(db, s) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a session with its questions, pinned first."""
    session = session_store.get_owned_session(db, session_id, current_user.id)
    return session_store.build_session_view(db, session)


@router.delete("/{session_id}", response_model=MessageResponse)
async def delete_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a session and all of its questions."""
    session = session_store.get_owned_session(db, session_id, current_user.id)
    session_store.delete_session(db, session)
    return MessageResponse(message="Session deleted successfully")
