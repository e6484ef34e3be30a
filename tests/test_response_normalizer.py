import json

import pytest

from recruit_signal_ai.schemas.candidate_profile import PROFILE_FIELDS, CandidateProfile
from recruit_signal_ai.services.response_normalizer import (
    DEFAULT_SCREENING_QUESTIONS,
    coerce_profile,
    normalize_list,
    normalize_profile,
    normalize_screening_questions,
)

JOHN = {"full_name": "John Doe", "email": "john@x.com", "skills": ["Python", "Java"]}
EXPECTED_JOHN = {
    "full_name": "John Doe",
    "email": "john@x.com",
    "phone_number": "",
    "linkedin_url": "",
    "location": "",
    "professional_summary": "",
    "work_experience": [],
    "education": [],
    "skills": ["Python", "Java"],
    "projects": [],
}


def _assert_fully_typed(profile: CandidateProfile):
    dumped = profile.model_dump()
    assert set(dumped) == set(PROFILE_FIELDS)
    for name in ("full_name", "email", "phone_number", "linkedin_url", "location", "professional_summary"):
        assert isinstance(dumped[name], str)
    for name in ("work_experience", "education", "skills", "projects"):
        assert isinstance(dumped[name], list)


@pytest.mark.parametrize(
    "raw",
    [
        json.dumps(JOHN),
        "Here is the data: " + json.dumps(JOHN) + " Hope that helps!",
        "```json\n" + json.dumps(JOHN, indent=2) + "\n```",
        "Sure!\n```\n" + json.dumps(JOHN) + "\n```\nLet me know.",
    ],
)
def test_object_anywhere_in_text_is_extracted(raw):
    outcome = normalize_profile(raw)
    assert outcome.status == "parsed"
    _assert_fully_typed(outcome.profile)
    assert outcome.profile.model_dump() == EXPECTED_JOHN


@pytest.mark.parametrize("raw", ["not json at all", "", "{broken: json", "} reversed {", "[1, 2, 3]"])
def test_unparseable_text_yields_canonical_defaults(raw):
    outcome = normalize_profile(raw)
    assert outcome.is_defaulted
    assert outcome.reason
    assert outcome.profile == CandidateProfile()


def test_trailing_commas_are_tolerated():
    outcome = normalize_profile('{"full_name": "Ann Lee", "skills": ["Go", "Rust",],}')
    assert outcome.status == "parsed"
    assert outcome.profile.full_name == "Ann Lee"
    assert outcome.profile.skills == ["Go", "Rust"]


def test_wrong_typed_fields_fall_back_to_defaults():
    profile = coerce_profile(
        {
            "full_name": "  Ana Ruiz  ",
            "email": None,
            "phone_number": 5551234567,
            "linkedin_url": ["not", "a", "string"],
            "location": "null",
            "professional_summary": True,
            "work_experience": {"job_title": "not a list"},
            "education": [None, "", {}, {"degree": "BSc"}, "  MSc  "],
            "skills": ["SQL", " SQL ", None, 3, "", {"name": "x"}],
            "projects": "nope",
        }
    )
    assert profile.full_name == "Ana Ruiz"
    assert profile.email == ""
    assert profile.phone_number == "5551234567"
    assert profile.linkedin_url == ""
    assert profile.location == ""
    assert profile.professional_summary == ""
    assert profile.work_experience == []
    assert profile.education == [{"degree": "BSc"}, "MSc"]
    assert profile.skills == ["SQL", "3"]
    assert profile.projects == []


def test_renormalizing_a_normalized_profile_is_identity():
    first = normalize_profile(
        json.dumps(
            {
                "full_name": " Kim ",
                "phone_number": 42,
                "skills": ["a", "a", " b "],
                "work_experience": [{"job_title": "Dev"}, None, "  intern  "],
            }
        )
    ).profile
    again = coerce_profile(first.model_dump())
    assert again == first
    assert normalize_profile(first.model_dump_json()).profile == first


def test_array_returned_for_object_request_degrades_without_raising():
    outcome = normalize_profile('[{"full_name": "A"}, {"full_name": "B"}]')
    # the object span is ambiguous; whatever comes back is fully typed
    _assert_fully_typed(outcome.profile)


def test_list_path_not_json_returns_empty():
    assert normalize_list("not json at all") == []


@pytest.mark.parametrize("raw", ['{"a": 1}', "[oops", "```json\n```"])
def test_list_path_non_array_returns_empty(raw):
    assert normalize_list(raw) == []


def test_list_path_extracts_fenced_array_with_prose():
    raw = 'Results:\n```json\n[{"resume_id": "r1", "relevance_score": 0.9}]\n```'
    assert normalize_list(raw) == [{"resume_id": "r1", "relevance_score": 0.9}]


def test_screening_questions_are_coerced():
    raw = json.dumps(
        [
            {"category": "Technical", "question": "Explain Python's GIL.", "purpose": "Depth"},
            {"category": "culture", "question": "Why us?"},
            {"category": "behavioral", "question": ""},
            "stray string",
        ]
    )
    questions = normalize_screening_questions(raw)
    assert [(q.category, q.question, q.purpose) for q in questions] == [
        ("technical", "Explain Python's GIL.", "Depth"),
        ("technical", "Why us?", ""),
    ]


@pytest.mark.parametrize("raw", ["no questions today", "[]", '{"question": "x"}'])
def test_screening_questions_fall_back_to_generic_five(raw):
    questions = normalize_screening_questions(raw)
    assert len(questions) == 5
    assert questions == DEFAULT_SCREENING_QUESTIONS


def test_oversized_integer_literal_yields_defaults():
    outcome = normalize_profile('{"full_name": "A", "phone_number": ' + "9" * 5000 + "}")
    assert outcome.is_defaulted
    assert outcome.profile == CandidateProfile()


def test_deeply_nested_list_yields_empty_list():
    assert normalize_list("[" * 100000 + "]" * 100000) == []
