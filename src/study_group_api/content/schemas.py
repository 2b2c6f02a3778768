"""JSON-schema descriptors sent to Gemini as ``responseJsonSchema``."""

from typing import Any

SUMMARY_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Short title for the summary."},
        "bullets": {
            "type": "array",
            "description": "Bullet-point summary. Each item is one bullet.",
            "items": {"type": "string"},
            "minItems": 3,
        },
        "keyTerms": {
            "type": "array",
            "description": "Key terms and definitions from the note.",
            "items": {
                "type": "object",
                "properties": {
                    "term": {"type": "string"},
                    "definition": {"type": "string"},
                },
                "required": ["term", "definition"],
            },
        },
    },
    "required": ["title", "bullets", "keyTerms"],
    "additionalProperties": False,
}

_CHOICE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "description": "Choice label like A/B/C/D."},
        "text": {"type": "string", "description": "Choice text."},
    },
    "required": ["id", "text"],
}

_QUESTION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "description": "Unique question id like q1, q2, ..."},
        "question": {"type": "string", "description": "The question text."},
        "choices": {
            "type": "array",
            "description": "Multiple choice options.",
            "minItems": 2,
            "items": _CHOICE_SCHEMA,
        },
        # Not cross-checked against choices[].id here; see ContentService.
        "answer": {"type": "string", "description": "Correct choice id (e.g., 'B')."},
        "explanation": {"type": ["string", "null"], "description": "Short explanation (optional)."},
        "difficulty": {"type": "string", "description": "easy|medium|hard"},
    },
    "required": ["id", "question", "choices", "answer", "difficulty"],
    "additionalProperties": False,
}

QUIZ_JSON_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Short title for the quiz."},
        "questions": {
            "type": "array",
            "description": "List of multiple choice questions.",
            "minItems": 1,
            "items": _QUESTION_SCHEMA,
        },
    },
    "required": ["title", "questions"],
    "additionalProperties": False,
}
