from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Stable error codes surfaced in the ``error`` field of every envelope."""

    MISSING_NOTE = "missing-note"
    MISSING_NOTE_TEXT = "missing-note-text"
    INVALID_OPTIONS = "invalid-options"
    INVALID_REQUEST = "invalid-request"
    UNAUTHORIZED = "unauthorized"
    LLM_FAILED = "llm-failed"
    INVALID_LLM_JSON = "invalid-llm-json"


DEFAULT_FOCUS = ("key ideas", "definitions", "examples")
QUIZ_DIFFICULTIES = ("easy", "medium", "hard")
NUM_QUESTIONS_RANGE = (1, 30)
NUM_CHOICES_RANGE = (2, 6)


@dataclass(frozen=True)
class SummaryOptions:
    style: str = "bullet"
    length: str = "medium"
    focus: tuple[str, ...] = field(default=DEFAULT_FOCUS)

    @classmethod
    def from_raw(cls, options: Any) -> "SummaryOptions":
        """Resolve a loosely-typed option bag, falling back to defaults per field."""
        if isinstance(options, cls):
            return options
        raw = options if isinstance(options, Mapping) else {}
        defaults = cls()
        style = raw.get("style")
        length = raw.get("length")
        return cls(
            style=style if isinstance(style, str) and style.strip() else defaults.style,
            length=length if isinstance(length, str) and length.strip() else defaults.length,
            focus=cls._resolve_focus(raw.get("focus")),
        )

    @staticmethod
    def _resolve_focus(focus: Any) -> tuple[str, ...]:
        if isinstance(focus, str) and focus.strip():
            return (focus,)
        if isinstance(focus, (list, tuple)):
            items = tuple(str(item) for item in focus if str(item).strip())
            if items:
                return items
        return DEFAULT_FOCUS


@dataclass(frozen=True)
class QuizOptions:
    """Quiz generation options after defaults are applied.

    Field values are taken verbatim from the request, so an instance may hold
    out-of-range or wrongly-typed values until :meth:`validate` approves it.
    """

    num_questions: Any = 10
    num_choices: Any = 4
    difficulty: Any = "medium"
    include_explanations: Any = True

    @classmethod
    def from_raw(cls, options: Any) -> "QuizOptions":
        if isinstance(options, cls):
            return options
        raw = options if isinstance(options, Mapping) else {}
        defaults = cls()
        return cls(
            num_questions=_pick(raw, "numQuestions", defaults.num_questions),
            num_choices=_pick(raw, "numChoices", defaults.num_choices),
            difficulty=_pick(raw, "difficulty", defaults.difficulty),
            include_explanations=_pick(raw, "includeExplanations", defaults.include_explanations),
        )

    def validate(self) -> ErrorKind | None:
        if not _int_in_range(self.num_questions, NUM_QUESTIONS_RANGE):
            return ErrorKind.INVALID_OPTIONS
        if not _int_in_range(self.num_choices, NUM_CHOICES_RANGE):
            return ErrorKind.INVALID_OPTIONS
        if self.difficulty not in QUIZ_DIFFICULTIES:
            return ErrorKind.INVALID_OPTIONS
        if not isinstance(self.include_explanations, bool):
            return ErrorKind.INVALID_OPTIONS
        return None


def validate_note(note: Any) -> ErrorKind | None:
    if not isinstance(note, Mapping):
        return ErrorKind.MISSING_NOTE
    text = note.get("text")
    if not isinstance(text, str) or not text.strip():
        return ErrorKind.MISSING_NOTE_TEXT
    return None


def validate_quiz_options(options: Any) -> ErrorKind | None:
    if options is not None and not isinstance(options, (Mapping, QuizOptions)):
        return ErrorKind.INVALID_OPTIONS
    return QuizOptions.from_raw(options).validate()


def _pick(raw: Mapping, key: str, default: Any) -> Any:
    # null counts as "not provided"
    value = raw.get(key)
    return default if value is None else value


def _int_in_range(value: Any, bounds: tuple[int, int]) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    low, high = bounds
    return low <= value <= high
