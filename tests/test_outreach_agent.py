import asyncio
import json

import pytest

from recruit_signal_ai.agents.extractor_agent import upload_resume
from recruit_signal_ai.agents.outreach_agent import (
    draft_outreach,
    generate_outreach,
    generate_screening_questions,
)
from recruit_signal_ai.errors import InvalidStateError, ResponseShapeError
from recruit_signal_ai.schemas.candidate_profile import CandidateProfile
from recruit_signal_ai.schemas.generation import JobContext
from recruit_signal_ai.services.profile_store import ProfileStore

from tests.helpers import StubCompletion

PROFILE = CandidateProfile(
    full_name="Grace Hopper",
    professional_summary="Compiler pioneer.",
    skills=["COBOL", "Compilers", "Leadership", "Teaching", "Navy", "Math"],
    work_experience=[{"job_title": "Rear Admiral", "company_name": "US Navy"}],
)


@pytest.fixture
def parsed_id(pipeline, ctx):
    record = upload_resume(pipeline, ctx, "grace.txt", b"Grace Hopper resume", "text/plain")
    store = ProfileStore(pipeline.resumes)
    store.mark_parsing(ctx, record.id)
    store.save_profile(ctx, record.id, PROFILE)
    return record.id


def test_outreach_uses_profile_and_job_context(pipeline, ctx, completion, parsed_id):
    completion.queue("Hi Grace,\n\nWe'd love to talk.")
    message = asyncio.run(
        generate_outreach(pipeline, ctx, parsed_id, JobContext(job_title="Staff Engineer", company="Acme"))
    )
    assert message == "Hi Grace,\n\nWe'd love to talk."
    call = completion.calls[0]
    prompt = call["messages"][1]["content"]
    assert "Name: Grace Hopper" in prompt
    assert "Current Role: Rear Admiral" in prompt
    assert "Skills: COBOL, Compilers, Leadership, Teaching, Navy\n" in prompt
    assert "We are hiring for Staff Engineer at Acme." in prompt
    assert call["temperature"] == 0.4


def test_outreach_without_job_context_uses_generic_line():
    stub = StubCompletion(["Hello!"])
    asyncio.run(draft_outreach(stub, PROFILE))
    assert "We are interested in connecting with talented professionals." in stub.calls[0]["messages"][1]["content"]


def test_blank_outreach_text_is_a_response_shape_error():
    with pytest.raises(ResponseShapeError):
        asyncio.run(draft_outreach(StubCompletion(["```\n```"]), PROFILE))


def test_screening_questions_parsed_from_reply(pipeline, ctx, completion, parsed_id):
    completion.queue(
        "```json\n"
        + json.dumps(
            [
                {"category": "technical", "question": "How does a compiler optimize loops?", "purpose": "Depth"},
                {"category": "behavioral", "question": "How do you teach hard ideas?", "purpose": "Communication"},
            ]
        )
        + "\n```"
    )
    questions = asyncio.run(generate_screening_questions(pipeline, ctx, parsed_id))
    assert [q.category for q in questions] == ["technical", "behavioral"]
    prompt = completion.calls[0]["messages"][1]["content"]
    assert "Experience: Rear Admiral at US Navy" in prompt
    assert completion.calls[0]["temperature"] == 0.3


def test_screening_questions_fall_back_when_unparseable(pipeline, ctx, completion, parsed_id):
    completion.queue("I'd ask about their background.")
    questions = asyncio.run(generate_screening_questions(pipeline, ctx, parsed_id))
    assert len(questions) == 5


def test_generation_requires_a_parsed_record(pipeline, ctx, completion):
    record = upload_resume(pipeline, ctx, "new.txt", b"fresh upload text", "text/plain")
    with pytest.raises(InvalidStateError):
        asyncio.run(generate_outreach(pipeline, ctx, record.id))
    with pytest.raises(InvalidStateError):
        asyncio.run(generate_screening_questions(pipeline, ctx, record.id))
    assert completion.call_count == 0
