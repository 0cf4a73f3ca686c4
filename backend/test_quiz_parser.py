"""
写真から生成された問題セットJSONのパーステスト
"""
import json
import sys
from pathlib import Path

import pytest

# app モジュールをインポート可能にする
sys.path.insert(0, str(Path(__file__).parent))

from app.llm.prompt import build_image_quiz_prompt
from app.quiz.parser import QuizParseError, extract_json_object, parse_quiz_result

VALID_PAYLOAD = {
    "title": "Fotosynthese",
    "questions": [
        {
            "type": "short_answer",
            "difficulty": "easy",
            "question": "Welk proces zet licht om in energie?",
            "answer": "fotosynthese",
            "explanation": "Planten gebruiken licht.",
            "evidence": "Fotosynthese zet licht om in chemische energie.",
        },
        {
            "type": "multiple_choice",
            "difficulty": "medium",
            "question": "Waar vindt fotosynthese plaats?",
            "choices": ["Mitochondrion", "Bladgroenkorrel", "Celkern", "Ribosoom"],
            "answer": "Bladgroenkorrel",
            "explanation": "In de bladgroenkorrels.",
            "evidence": "... in de bladgroenkorrels ...",
        },
    ],
}


def test_parse_plain_json():
    result = parse_quiz_result(json.dumps(VALID_PAYLOAD))
    assert result.title == "Fotosynthese"
    assert [q.type for q in result.questions] == ["short_answer", "multiple_choice"]
    assert result.questions[1].choices[1] == "Bladgroenkorrel"


def test_parse_json_wrapped_in_text_and_fence():
    text = "Hier is de quiz:\n```json\n" + json.dumps(VALID_PAYLOAD) + "\n```\nSucces!"
    result = parse_quiz_result(text)
    assert len(result.questions) == 2


def test_invalid_questions_are_skipped():
    payload = {
        "title": "Mix",
        "questions": [
            {"type": "essay", "question": "?", "answer": "x"},
            {"type": "short_answer", "question": "zonder antwoord"},
            "geen object",
            {"type": "true_false", "question": "De zon is een ster.", "answer": True},
        ],
    }
    result = parse_quiz_result(json.dumps(payload))
    assert len(result.questions) == 1
    assert result.questions[0].answer == "true"
    assert result.questions[0].difficulty == "medium"


def test_missing_title_defaults():
    payload = {"questions": VALID_PAYLOAD["questions"][:1]}
    assert parse_quiz_result(json.dumps(payload)).title == "Quiz"


def test_no_valid_questions_raises():
    with pytest.raises(QuizParseError):
        parse_quiz_result(json.dumps({"title": "Leeg", "questions": []}))
    with pytest.raises(QuizParseError):
        parse_quiz_result(json.dumps({"title": "Geen lijst"}))


def test_extract_json_object_errors():
    with pytest.raises(QuizParseError, match="empty_response"):
        extract_json_object("   ")
    with pytest.raises(QuizParseError):
        extract_json_object("geen json hier")
    with pytest.raises(QuizParseError):
        extract_json_object("{ kapot }")
    with pytest.raises(QuizParseError):
        extract_json_object("[1, 2, 3]")


def test_prompt_mentions_count_and_mix():
    prompt = build_image_quiz_prompt(10)
    assert "exact 10 oefenvragen" in prompt
    assert "4 easy, 4 medium, 2 hard" in prompt
    assert "Minstens 3 multiple_choice" in prompt

    small = build_image_quiz_prompt(2)
    assert "Minstens 2 multiple_choice" in small
