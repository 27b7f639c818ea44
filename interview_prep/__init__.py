"""Interview prep backend: sessions, questions and AI-generated content."""

__version__ = "1.0.0"
