import asyncio
import logging
import re

from study_group_api.config import Settings
from study_group_api.content.schemas import QUIZ_JSON_SCHEMA, SUMMARY_JSON_SCHEMA
from study_group_api.providers.llm.gemini import LLMParseError
from study_group_api.service.envelope import make_request_id
from study_group_api.service.generator import ContentService

QUIZ = {
    "title": "Photosynthesis quiz",
    "questions": [
        {
            "id": "q1",
            "question": "What does photosynthesis convert?",
            "choices": [{"id": "A", "text": "Light"}, {"id": "B", "text": "Sound"}],
            "answer": "A",
            "explanation": None,
            "difficulty": "medium",
        }
    ],
}


class _FakeProvider:
    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    async def generate_json(self, prompt: str, schema: dict, timeout: float | None = None):
        self.calls.append((prompt, schema))
        if self.error is not None:
            raise self.error
        return self.result


def _service(provider: _FakeProvider) -> ContentService:
    return ContentService(provider=provider, settings=Settings(GEMINI_API_KEY="k"))


def test_make_request_id_shape() -> None:
    assert re.fullmatch(r"req_[0-9a-f]{12}_\d+", make_request_id())


def test_summarize_success_envelope() -> None:
    provider = _FakeProvider(result={"title": "t", "bullets": ["a", "b", "c"], "keyTerms": []})
    status, body = asyncio.run(_service(provider).summarize({"id": "n1", "text": "note"}))

    assert status == 200
    assert body["success"] is True
    assert body["error"] is None
    assert body["type"] == "summary"
    assert body["noteId"] == "n1"
    assert body["requestId"].startswith("req_")
    assert len(body["summary"]["bullets"]) >= 3
    assert provider.calls[0][1] is SUMMARY_JSON_SCHEMA
    assert "Style: bullet" in provider.calls[0][0]


def test_quiz_passes_resolved_options_to_prompt() -> None:
    provider = _FakeProvider(result=QUIZ)
    status, body = asyncio.run(_service(provider).quiz({"text": "note"}, {"numQuestions": 3, "difficulty": "easy"}))

    assert status == 200
    assert body["noteId"] is None
    assert body["quiz"] == QUIZ
    prompt, schema = provider.calls[0]
    assert schema is QUIZ_JSON_SCHEMA
    assert "- 3 questions" in prompt
    assert "- 4 choices per question" in prompt
    assert "Create a easy MCQ quiz" in prompt


def test_quiz_validation_short_circuits_before_model() -> None:
    provider = _FakeProvider(result=QUIZ)
    service = _service(provider)

    status, body = asyncio.run(service.quiz({"text": ""}, {"numQuestions": 50}))
    assert (status, body["error"]) == (400, "missing-note-text")

    status, body = asyncio.run(service.quiz({"text": "note"}, {"numQuestions": 50}))
    assert (status, body["error"], body["message"]) == (400, "invalid-options", "Invalid quiz options")
    assert body["success"] is False
    assert provider.calls == []


def test_parse_failure_maps_to_llm_failed() -> None:
    provider = _FakeProvider(error=LLMParseError("Gemini returned invalid JSON: Expecting value"))
    status, body = asyncio.run(_service(provider).summarize({"text": "note"}))

    assert status == 500
    assert body["error"] == "llm-failed"
    assert body["message"] == "Failed to generate summary"
    assert "invalid JSON" in body["details"]


def test_summary_non_object_is_invalid_llm_json() -> None:
    provider = _FakeProvider(result=["not", "an", "object"])
    status, body = asyncio.run(_service(provider).summarize({"text": "note"}))
    assert (status, body["error"]) == (500, "invalid-llm-json")


def test_quiz_answer_outside_choices_is_logged_not_rejected(caplog) -> None:
    quiz = {"title": "t", "questions": [dict(QUIZ["questions"][0], answer="Z")]}
    provider = _FakeProvider(result=quiz)

    with caplog.at_level(logging.WARNING, logger="study_group_api.service.generator"):
        status, body = asyncio.run(_service(provider).quiz({"text": "note"}))

    assert status == 200
    assert body["quiz"]["questions"][0]["answer"] == "Z"
    assert any("quiz.answer_not_in_choices" in record.getMessage() for record in caplog.records)


def test_health_envelope() -> None:
    assert ContentService.health() == (200, {"success": True, "message": "RAG API is healthy", "error": None})


def test_quiz_tolerates_malformed_choices_and_answers(caplog) -> None:
    questions = [
        {"id": "q1", "question": "?", "choices": 5, "answer": "A", "difficulty": "easy"},
        {"id": "q2", "question": "?", "choices": [{"id": "A", "text": "x"}], "answer": ["A"], "difficulty": "easy"},
        {"id": "q3", "question": "?", "choices": [{"id": {"k": 1}, "text": "x"}, "B"], "answer": {"k": 2}, "difficulty": "easy"},
    ]
    provider = _FakeProvider(result={"title": "t", "questions": questions})

    with caplog.at_level(logging.WARNING, logger="study_group_api.service.generator"):
        status, body = asyncio.run(_service(provider).quiz({"text": "note"}))

    assert status == 200
    assert body["quiz"]["questions"] == questions
    warnings = [record.getMessage() for record in caplog.records if "quiz.answer_not_in_choices" in record.getMessage()]
    assert warnings and "q2" in warnings[0] and "q3" in warnings[0] and "q1" not in warnings[0]


def test_summary_tolerates_non_list_bullets() -> None:
    provider = _FakeProvider(result={"title": "t", "bullets": 3, "keyTerms": []})
    status, body = asyncio.run(_service(provider).summarize({"text": "note"}))

    assert status == 200
    assert body["summary"]["bullets"] == 3
