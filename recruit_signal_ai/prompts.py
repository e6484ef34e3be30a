"""Instruction prompts for every completion call site.

Each builder returns the user instruction as a single string; ``messages_for``
pairs it with the call site's system prompt. Parse and search prompts spell out
the exact JSON schema and forbid prose, since the normalizer depends on the
model at least attempting schema compliance.
"""

import json
from typing import Dict, List, Optional, Sequence, Tuple

from recruit_signal_ai.schemas.candidate_profile import CandidateProfile
from recruit_signal_ai.schemas.generation import JobContext

Message = Dict[str, str]

PARSE_SYSTEM_PROMPT = """You are an expert resume parsing system. Extract information from resume text and return ONLY a valid JSON object.
Your response must start with { and end with }. No explanations, no markdown, no code block.
Extract information exactly as found; do not invent details."""

PARSE_SCHEMA = """{
  "full_name": "string",
  "email": "string",
  "phone_number": "string",
  "linkedin_url": "string",
  "location": "string",
  "professional_summary": "string",
  "work_experience": [
    {"job_title": "string", "company_name": "string", "start_date": "string", "end_date": "string or Present", "responsibilities_achievements": ["string"]}
  ],
  "education": [
    {"degree": "string", "field": "string", "institution": "string", "graduation_date": "string"}
  ],
  "skills": ["string"],
  "projects": [
    {"name": "string", "description": "string", "technologies": ["string"]}
  ]
}"""

SEARCH_SYSTEM_PROMPT = (
    "You are a talent sourcing expert. Analyze the search query and candidate profiles "
    "to find the best matches. Return ONLY a valid JSON array without any markdown formatting."
)

OUTREACH_SYSTEM_PROMPT = (
    "You are an expert recruiter who writes compelling, personalized outreach messages that get responses."
)

SCREENING_SYSTEM_PROMPT = (
    "You are an expert interviewer. Generate thoughtful screening questions based on a candidate's profile. "
    "Return ONLY a valid JSON array without any markdown formatting."
)


def build_parse_prompt(excerpt: str) -> str:
    """Instruction for turning a resume excerpt into one CandidateProfile JSON object."""
    return (
        "Extract information from this resume text and return ONLY a JSON object with exactly these fields:\n"
        f"{PARSE_SCHEMA}\n\n"
        "Rules:\n"
        "- Use an empty string for missing text fields and [] for missing lists.\n"
        "- skills is a flat list of strings.\n"
        "- Do not add fields, comments or any text outside the JSON object.\n\n"
        f"Resume text:\n---\n{excerpt}\n---"
    )


def build_search_prompt(query: str, candidates: Sequence[Tuple[str, CandidateProfile]]) -> str:
    """Instruction for scoring (resume_id, profile) pairs against a free-text query."""
    profiles = [{"resume_id": rid, **profile.model_dump()} for rid, profile in candidates]
    return (
        f'Search query: "{query}"\n\n'
        f"Candidate profiles:\n{json.dumps(profiles, indent=2, ensure_ascii=False)}\n\n"
        "Analyze each candidate against the search query and return the top 10 most relevant matches "
        "as a JSON array:\n"
        "[\n"
        '  {"resume_id": "string", "relevance_score": number (0-1), '
        '"justification": "string (1-2 sentences explaining why this candidate matches)"}\n'
        "]\n\n"
        "Sort by relevance_score descending. Only include candidates with relevance_score > 0.3. "
        "Use resume_id values exactly as given. Return only the JSON array."
    )


def build_outreach_prompt(profile: CandidateProfile, job_context: Optional[JobContext] = None) -> str:
    """Instruction for a short personalized outreach email."""
    if job_context and (job_context.job_title or job_context.company):
        title = job_context.job_title or "an open role"
        company = job_context.company or "our company"
        context_line = f"We are hiring for {title} at {company}."
    else:
        context_line = "We are interested in connecting with talented professionals."
    return (
        "Draft a personalized outreach email for this candidate:\n\n"
        f"Name: {profile.full_name or 'there'}\n"
        f"Current Role: {profile.current_role() or 'Professional'}\n"
        f"Skills: {', '.join(profile.skills[:5])}\n"
        f"Experience: {profile.professional_summary}\n\n"
        f"Context: {context_line}\n\n"
        "Write an engaging email that:\n"
        "1. Addresses them by name\n"
        "2. References 1-2 specific skills/experiences from their background\n"
        "3. Expresses genuine interest\n"
        "4. Includes a clear, friendly call to action\n"
        "5. Keeps it concise (under 200 words)\n"
        "6. Maintains a professional but warm tone\n\n"
        "Return only the email content, no additional formatting or subject line."
    )


def _experience_line(profile: CandidateProfile) -> str:
    parts = []
    for exp in profile.work_experience:
        if not isinstance(exp, dict):
            continue
        title = exp.get("job_title") or exp.get("title") or ""
        company = exp.get("company_name") or exp.get("company") or ""
        if title and company:
            parts.append(f"{title} at {company}")
        elif title or company:
            parts.append(str(title or company))
    return ", ".join(parts)


def build_screening_prompt(profile: CandidateProfile) -> str:
    """Instruction for technical and behavioral screening questions as a JSON array."""
    return (
        "Generate 5-7 technical and 2-3 behavioral screening questions for a candidate with this profile:\n\n"
        f"Name: {profile.full_name}\n"
        f"Skills: {', '.join(profile.skills)}\n"
        f"Experience: {_experience_line(profile)}\n"
        f"Summary: {profile.professional_summary}\n\n"
        "Tailor questions to assess:\n"
        "1. Technical proficiency in their core skills\n"
        "2. Experience depth and problem-solving ability\n"
        "3. Cultural fit and motivation\n"
        "4. Specific technologies/tools they've used\n\n"
        "Return as JSON array of question objects:\n"
        "[\n"
        '  {"category": "technical|behavioral", "question": "string", '
        '"purpose": "string (what this question aims to assess)"}\n'
        "]"
    )


def messages_for(system_prompt: str, instruction: str) -> List[Message]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": instruction},
    ]
