from study_group_api.content.prompts import build_quiz_prompt, build_summary_prompt
from study_group_api.content.validators import QuizOptions, SummaryOptions

NOTE = "Photosynthesis converts light to energy."


def test_summary_prompt_defaults() -> None:
    prompt = build_summary_prompt(NOTE)
    assert prompt.startswith("You are a helpful study assistant.")
    assert "Style: bullet" in prompt
    assert "Length: medium" in prompt
    assert "Focus: key ideas, definitions, examples" in prompt
    assert "Return JSON ONLY:" in prompt
    assert '"keyTerms"' in prompt
    assert prompt.endswith(f"NOTE:\n{NOTE}")


def test_summary_prompt_is_deterministic() -> None:
    options = {"style": "outline", "focus": ["dates"]}
    assert build_summary_prompt(NOTE, options) == build_summary_prompt(NOTE, options)
    assert build_summary_prompt(NOTE, options) == build_summary_prompt(NOTE, SummaryOptions.from_raw(options))
    assert build_summary_prompt(NOTE) == build_summary_prompt(NOTE, {})


def test_summary_prompt_uses_options() -> None:
    prompt = build_summary_prompt(NOTE, {"style": "paragraph", "length": "short", "focus": ["causes", "effects"]})
    assert "Style: paragraph" in prompt
    assert "Length: short" in prompt
    assert "Focus: causes, effects" in prompt


def test_quiz_prompt_defaults() -> None:
    prompt = build_quiz_prompt(NOTE)
    assert "Create a medium MCQ quiz" in prompt
    assert "- 10 questions" in prompt
    assert "- 4 choices per question" in prompt
    assert "- Exactly ONE correct answer" in prompt
    assert "- includeExplanations=true" in prompt
    assert '{"id":"D","text":"..."}' in prompt
    assert '"difficulty": "medium"' in prompt
    assert prompt.endswith(f"NOTE:\n{NOTE}")


def test_quiz_prompt_uses_options() -> None:
    options = QuizOptions.from_raw({"numQuestions": 3, "numChoices": 2, "difficulty": "hard", "includeExplanations": False})
    prompt = build_quiz_prompt(NOTE, options)
    assert "Create a hard MCQ quiz" in prompt
    assert "- 3 questions" in prompt
    assert "- 2 choices per question" in prompt
    assert "- includeExplanations=false" in prompt
    assert '{"id":"B","text":"..."}]' in prompt
    assert '"id":"C"' not in prompt
    assert build_quiz_prompt(NOTE, options) == build_quiz_prompt(NOTE, options)
