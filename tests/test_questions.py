"""Tests for question loading."""

import json
from collections import Counter

import pytest

from survivescale.models.question import Question, load_questions


def test_bundled_questions():
    """The bundled set has two valid questions for each of the 25 years."""
    questions = load_questions()

    assert len(questions) == 50
    assert [q.id for q in questions] == list(range(1, 51))
    assert Counter(q.year for q in questions) == {year: 2 for year in range(1, 26)}
    for question in questions:
        assert question.text
        assert len(question.options) >= 2
        assert 0 <= question.correct_index < len(question.options)


def test_load_sorts_by_id(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(
        json.dumps(
            [
                {"id": 3, "year": 2, "text": "C?", "options": ["x", "y"], "correctIndex": 1},
                {"id": 1, "year": 1, "text": "A?", "options": ["x", "y"], "correctIndex": 0},
                {"id": 2, "year": 1, "text": "B?", "options": ["x", "y"], "correct_index": 1, "explanation": "Because."},
            ]
        )
    )

    questions = load_questions(path)

    assert isinstance(questions, tuple)
    assert [q.id for q in questions] == [1, 2, 3]
    assert questions[1].correct_index == 1
    assert questions[1].explanation == "Because."
    assert questions[0].explanation is None


def test_questions_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(
        json.dumps([{"id": 7, "year": 1, "text": "Q?", "options": ["a"], "correctIndex": 0}])
    )
    monkeypatch.setenv("QUESTIONS_PATH", str(path))

    questions = load_questions()

    assert [q.id for q in questions] == [7]


def test_load_rejects_non_list(tmp_path):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps({"questions": []}))

    with pytest.raises(ValueError):
        load_questions(path)


@pytest.mark.parametrize(
    "data",
    [
        {"id": 1, "year": 1, "text": "Q?", "options": ["a", "b"], "correctIndex": 2},
        {"id": 1, "year": 1, "text": "Q?", "options": ["a", "b"], "correctIndex": -1},
        {"id": 1, "year": 1, "text": "Q?", "options": [], "correctIndex": 0},
        {"id": 1, "year": 1, "text": "Q?", "options": ["a", "b"]},
    ],
)
def test_invalid_question_rejected(data):
    with pytest.raises(ValueError):
        Question.from_dict(data)


def test_questions_are_immutable():
    question = Question(id=1, year=1, text="Q?", options=("a", "b"), correct_index=0)

    with pytest.raises(AttributeError):
        question.correct_index = 1

    assert question.is_correct(0)
    assert not question.is_correct(1)
