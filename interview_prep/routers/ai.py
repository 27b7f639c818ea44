import logging

from fastapi import APIRouter, Depends, HTTPException, status

from interview_prep.dependencies import get_current_user
from interview_prep.models.user import User
from interview_prep.schemas.ai import (
    CoverLetterResponse,
    ExplanationResponse,
    GenerateCoverLetterRequest,
    GenerateExplanationRequest,
    GeneratedQuestion,
    GenerateQuestionsRequest,
)
from interview_prep.services.llm import (
    CompletionClient,
    LLMBusyError,
    LLMNotConfiguredError,
    LLMTimeoutError,
    get_completion_client,
)
from interview_prep.services.prompts import (
    concept_explanation_prompt,
    cover_letter_prompt,
    interview_questions_prompt,
    match_analysis_prompt,
)
from interview_prep.services.response_normalizer import (
    normalize_cover_letter,
    normalize_explanation,
    normalize_match_analysis,
    normalize_questions,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


def _upstream_error(e: Exception, message: str) -> HTTPException:
    """Map a completion/normalization failure to an HTTP error."""
    if isinstance(e, LLMNotConfiguredError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(e)},
        )
    if isinstance(e, LLMBusyError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": str(e)},
        )
    if isinstance(e, LLMTimeoutError):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail={"message": str(e)},
        )
    logger.error("%s: %s", message, e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": message, "error": str(e)},
    )


@router.post("/generate-questions", response_model=list[GeneratedQuestion])
async def generate_interview_questions(
    request: GenerateQuestionsRequest,
    current_user: User = Depends(get_current_user),
    llm: CompletionClient = Depends(get_completion_client),
):
    """Generate interview questions for a role, experience level and topics."""
    prompt = interview_questions_prompt(
        request.role,
        request.experience,
        request.topics_to_focus,
        request.number_of_questions,
    )
    try:
        raw = await llm.complete(prompt)
        return normalize_questions(raw)
    except HTTPException:
        raise
    except Exception as e:
        raise _upstream_error(e, "Error generating interview questions")


@router.post("/generate-explanation", response_model=ExplanationResponse)
async def generate_concept_explanation(
    request: GenerateExplanationRequest,
    current_user: User = Depends(get_current_user),
    llm: CompletionClient = Depends(get_completion_client),
):
    """Explain the concept behind an interview question."""
    try:
        raw = await llm.complete(concept_explanation_prompt(request.question))
        return normalize_explanation(raw)
    except HTTPException:
        raise
    except Exception as e:
        raise _upstream_error(e, "Error generating concept explanation")


@router.post("/generate-cover-letter", response_model=CoverLetterResponse)
async def generate_cover_letter(
    request: GenerateCoverLetterRequest,
    current_user: User = Depends(get_current_user),
    llm: CompletionClient = Depends(get_completion_client),
):
    """Write a cover letter from the saved profile plus a best-effort match score."""
    profile = (current_user.profile_description or "").strip()
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Profile description is required. Please save your profile first.",
        )

    try:
        # Secondary step: an unparseable answer degrades to 0% / "" instead of failing
        match_raw = await llm.complete(
            match_analysis_prompt(profile, request.company_description)
        )
        match = normalize_match_analysis(match_raw)

        letter_raw = await llm.complete(
            cover_letter_prompt(profile, request.company_description)
        )
        cover_letter = normalize_cover_letter(letter_raw)
    except HTTPException:
        raise
    except Exception as e:
        raise _upstream_error(e, "Error generating cover letter")

    return CoverLetterResponse(
        cover_letter=cover_letter,
        match_percentage=match.match_percentage,
        match_summary=match.match_summary,
    )
