from typing import Any

from study_group_api.content.validators import QuizOptions, SummaryOptions


def build_summary_prompt(note_text: str, opts: SummaryOptions | dict[str, Any] | None = None) -> str:
    options = SummaryOptions.from_raw(opts)
    return "\n".join(
        [
            "You are a helpful study assistant.",
            "Summarize the note below.",
            "",
            f"Style: {options.style}",
            f"Length: {options.length}",
            f"Focus: {', '.join(options.focus)}",
            "",
            "Return JSON ONLY:",
            "{",
            '  "title": "string",',
            '  "bullets": ["string", "..."],',
            '  "keyTerms": [{"term":"string","definition":"string"}]',
            "}",
            "",
            "NOTE:",
            note_text,
        ]
    ).strip()


def build_quiz_prompt(note_text: str, opts: QuizOptions | dict[str, Any] | None = None) -> str:
    options = QuizOptions.from_raw(opts)
    include_explanations = "true" if options.include_explanations else "false"
    return "\n".join(
        [
            "You are a helpful study assistant.",
            f"Create a {options.difficulty} MCQ quiz from the note below.",
            "",
            "Rules:",
            f"- {options.num_questions} questions",
            f"- {options.num_choices} choices per question",
            "- Exactly ONE correct answer",
            "- Clear questions",
            f"- includeExplanations={include_explanations}",
            "",
            "Return JSON ONLY:",
            "{",
            '  "title": "string",',
            '  "questions": [',
            "    {",
            '      "id": "q1",',
            '      "question": "string",',
            f'      "choices": [{_example_choices(options.num_choices)}],',
            '      "answer": "B",',
            '      "explanation": "string",',
            f'      "difficulty": "{options.difficulty}"',
            "    }",
            "  ]",
            "}",
            "",
            "NOTE:",
            note_text,
        ]
    ).strip()


def _example_choices(num_choices: Any) -> str:
    count = num_choices if isinstance(num_choices, int) and not isinstance(num_choices, bool) else 4
    labels = [chr(ord("A") + index) for index in range(max(2, min(count, 6)))]
    return ",".join(f'{{"id":"{label}","text":"..."}}' for label in labels)
