"""Prompt templates for the AI endpoints."""

from typing import Sequence, Union


def _topics_text(topics_to_focus: Union[str, Sequence[str]]) -> str:
    if isinstance(topics_to_focus, str):
        topics = topics_to_focus.split(",")
    else:
        topics = list(topics_to_focus)
    return ", ".join(t.strip() for t in topics if t and t.strip())


def interview_questions_prompt(
    role: str,
    experience: str,
    topics_to_focus: Union[str, Sequence[str]],
    number_of_questions: int,
) -> str:
    return f"""
    You are an AI trained to generate technical interview questions and answers.

    Task:
    - Role: {role}
    - Candidate Experience: {experience}
    - Focus Topics: {_topics_text(topics_to_focus)}
    - Write {number_of_questions} interview questions.
    - For each question, generate a detailed but beginner-friendly answer.
    - If the answer needs a code example, add a small code block inside.
    - Keep formatting very clean.
    - Return a JSON object with a "questions" array like:
    {{
      "questions": [
        {{"question": "Question 1", "answer": "Answer 1"}},
        {{"question": "Question 2", "answer": "Answer 2"}}
      ]
    }}
    Important: Do NOT add any extra text. Only return valid JSON.
    """


def concept_explanation_prompt(question: str) -> str:
    return f"""
    You are an AI trained to generate explanations for a given interview question.

    Task:
    - Explain the following interview question and its concept in depth as if you're teaching a beginner developer.
    - Question: {question}
    - After the explanation, provide a short and clear title that summarizes the concept for the article or page header.
    - If the explanation includes a code example, provide a small code block.
    - Keep the formatting very clean and clear.
    - Return the result as a valid JSON object in the following format:
    {{
      "title": "Title of the concept",
      "explanation": "Explanation of the concept"
    }}

    Important: Do NOT add any extra text. Only return valid JSON.
    """


def match_analysis_prompt(profile_description: str, company_description: str) -> str:
    return f"""
    You are an experienced technical recruiter comparing a candidate with a job.

    CANDIDATE PROFILE:
    {profile_description}

    JOB / COMPANY DESCRIPTION:
    {company_description}

    Task:
    - Estimate how well the candidate fits this job as an integer percentage from 0 to 100.
    - Be realistic: only give 80+ when the profile covers most of the stated requirements.
    - Write a 2-3 sentence summary naming the strongest overlaps and the most important gaps.
    - Return the result as a valid JSON object in the following format:
    {{
      "matchPercentage": 75,
      "matchSummary": "Short summary of the fit"
    }}

    Important: Do NOT add any extra text. Only return valid JSON.
    """


def cover_letter_prompt(profile_description: str, company_description: str) -> str:
    return f"""
    You are an expert career coach who writes concise, specific cover letters.

    CANDIDATE PROFILE:
    {profile_description}

    JOB / COMPANY DESCRIPTION:
    {company_description}

    Task:
    - Write a professional cover letter of 3-4 short paragraphs for this candidate and this job.
    - Only use experience and skills that appear in the candidate profile. Do not invent facts.
    - Connect the candidate's concrete achievements to the company's needs.
    - Use a confident, warm tone. No placeholders like [Company Name] if the name is known.
    - Return the result as a valid JSON object in the following format:
    {{
      "coverLetter": "Full cover letter text with paragraphs separated by blank lines"
    }}

    Important: Do NOT add any extra text. Only return valid JSON.
    """
