import logging
from collections.abc import Mapping
from typing import Any, Protocol

from study_group_api.config import Settings, get_settings
from study_group_api.content.prompts import build_quiz_prompt, build_summary_prompt
from study_group_api.content.schemas import QUIZ_JSON_SCHEMA, SUMMARY_JSON_SCHEMA
from study_group_api.content.validators import (
    ErrorKind,
    QuizOptions,
    SummaryOptions,
    validate_note,
    validate_quiz_options,
)
from study_group_api.providers.llm.gemini import GeminiProvider
from study_group_api.service.envelope import error_envelope, make_request_id, ok_envelope

logger = logging.getLogger(__name__)

NOTE_ERROR_MESSAGES = {
    ErrorKind.MISSING_NOTE: "note is required",
    ErrorKind.MISSING_NOTE_TEXT: "note.text is required",
}


class JsonModel(Protocol):
    async def generate_json(self, prompt: str, schema: dict[str, Any], timeout: float | None = None) -> Any: ...


class ContentService:
    """Summary and quiz generation; every outcome becomes a ``(status, envelope)`` pair."""

    def __init__(self, provider: JsonModel | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.provider = provider or GeminiProvider(self.settings)

    async def summarize(self, note: Any, options: Any = None) -> tuple[int, dict[str, Any]]:
        request_id = make_request_id()
        note_error = validate_note(note)
        if note_error:
            logger.info("summary.rejected request_id=%s error=%s", request_id, note_error.value)
            return error_envelope(400, note_error, NOTE_ERROR_MESSAGES[note_error], request_id)

        prompt = build_summary_prompt(note["text"], SummaryOptions.from_raw(options))
        try:
            llm_json = await self.provider.generate_json(prompt, SUMMARY_JSON_SCHEMA)
        except Exception as exc:
            logger.exception("summary.llm_failed request_id=%s type=%s", request_id, exc.__class__.__name__)
            return error_envelope(
                500,
                ErrorKind.LLM_FAILED,
                "Failed to generate summary",
                request_id,
                details=str(exc) or exc.__class__.__name__,
            )

        if not isinstance(llm_json, Mapping):
            logger.warning("summary.invalid_json request_id=%s type=%s", request_id, type(llm_json).__name__)
            return error_envelope(500, ErrorKind.INVALID_LLM_JSON, "LLM returned invalid JSON", request_id)

        bullets = llm_json.get("bullets")
        logger.info(
            "summary.generated request_id=%s bullets=%d",
            request_id,
            len(bullets) if isinstance(bullets, list) else 0,
        )
        return ok_envelope(
            "Summary generated successfully",
            requestId=request_id,
            noteId=note.get("id"),
            type="summary",
            summary=dict(llm_json),
        )

    async def quiz(self, note: Any, options: Any = None) -> tuple[int, dict[str, Any]]:
        request_id = make_request_id()
        note_error = validate_note(note)
        if note_error:
            logger.info("quiz.rejected request_id=%s error=%s", request_id, note_error.value)
            return error_envelope(400, note_error, NOTE_ERROR_MESSAGES[note_error], request_id)

        options_error = validate_quiz_options(options)
        if options_error:
            logger.info("quiz.rejected request_id=%s error=%s options=%s", request_id, options_error.value, options)
            return error_envelope(400, options_error, "Invalid quiz options", request_id)

        prompt = build_quiz_prompt(note["text"], QuizOptions.from_raw(options))
        try:
            llm_json = await self.provider.generate_json(prompt, QUIZ_JSON_SCHEMA)
        except Exception as exc:
            logger.exception("quiz.llm_failed request_id=%s type=%s", request_id, exc.__class__.__name__)
            return error_envelope(
                500,
                ErrorKind.LLM_FAILED,
                "Failed to generate quiz",
                request_id,
                details=str(exc) or exc.__class__.__name__,
            )

        if not isinstance(llm_json, Mapping) or not isinstance(llm_json.get("questions"), list):
            logger.warning("quiz.invalid_json request_id=%s", request_id)
            return error_envelope(500, ErrorKind.INVALID_LLM_JSON, "LLM returned invalid quiz JSON", request_id)

        unmatched = self._unmatched_answers(llm_json["questions"])
        if unmatched:
            logger.warning("quiz.answer_not_in_choices request_id=%s questions=%s", request_id, unmatched)
        logger.info("quiz.generated request_id=%s questions=%d", request_id, len(llm_json["questions"]))
        return ok_envelope(
            "Quiz generated successfully",
            requestId=request_id,
            noteId=note.get("id"),
            type="quiz",
            quiz=dict(llm_json),
        )

    @staticmethod
    def health() -> tuple[int, dict[str, Any]]:
        return ok_envelope("RAG API is healthy")

    @staticmethod
    def _unmatched_answers(questions: list[Any]) -> list[str]:
        unmatched: list[str] = []
        for index, question in enumerate(questions):
            if not isinstance(question, Mapping):
                continue
            choices = question.get("choices")
            if not isinstance(choices, list):
                continue
            answer = question.get("answer")
            if not any(isinstance(choice, Mapping) and choice.get("id") == answer for choice in choices):
                unmatched.append(str(question.get("id") or index))
        return unmatched
