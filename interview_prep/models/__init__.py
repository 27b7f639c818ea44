from interview_prep.models.user import User
from interview_prep.models.interview_session import InterviewSession
from interview_prep.models.question import Question

__all__ = ["User", "InterviewSession", "Question"]
