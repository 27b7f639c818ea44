from interview_prep.routers.auth import router as auth_router
from interview_prep.routers.sessions import router as sessions_router
from interview_prep.routers.questions import router as questions_router
from interview_prep.routers.ai import router as ai_router

__all__ = ["auth_router", "sessions_router", "questions_router", "ai_router"]
