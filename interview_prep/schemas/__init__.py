from interview_prep.schemas.base import MessageResponse
from interview_prep.schemas.user import (
    UserCreate,
    UserLogin,
    UserResponse,
    AuthResponse,
    ProfileDescriptionUpdate,
    ImageUploadResponse,
)
from interview_prep.schemas.session import (
    QuestionInput,
    QuestionResponse,
    SessionCreate,
    SessionSummary,
    SessionResponse,
    SessionCreateResponse,
    AddQuestionsRequest,
    QuestionNoteUpdate,
    QuestionActionResponse,
)
from interview_prep.schemas.ai import (
    GenerateQuestionsRequest,
    GeneratedQuestion,
    GenerateExplanationRequest,
    ExplanationResponse,
    GenerateCoverLetterRequest,
    MatchAnalysis,
    CoverLetterResponse,
)

__all__ = [
    "MessageResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "ProfileDescriptionUpdate",
    "ImageUploadResponse",
    "QuestionInput",
    "QuestionResponse",
    "SessionCreate",
    "SessionSummary",
    "SessionResponse",
    "SessionCreateResponse",
    "AddQuestionsRequest",
    "QuestionNoteUpdate",
    "QuestionActionResponse",
    "GenerateQuestionsRequest",
    "GeneratedQuestion",
    "GenerateExplanationRequest",
    "ExplanationResponse",
    "GenerateCoverLetterRequest",
    "MatchAnalysis",
    "CoverLetterResponse",
]
