import random

import pytest

from vocaboost.models.exercise import ExerciseQuestion, QuestionType
from vocaboost.models.flashcard import Flashcard
from vocaboost.services.exercise_builder import (
    BLANK,
    NotEnoughCardsError,
    _blank_out,
    build_exercise,
    score_answers,
)


def _card(i: int, word: str, definition: str, example: str) -> Flashcard:
    return Flashcard(
        id=f"card-{i}",
        deck_id="deck-1",
        word=word,
        definition_vn=definition,
        example_en=example,
        example_vn="",
        level=None,
        position=i,
        interval=0,
        ease_factor=2.5,
        repetition_count=0,
        next_review_at=None,
        last_reviewed_at=None,
        created_at=0,
    )


WORDS = [
    ("ubiquitous", "có mặt ở khắp nơi", "Smartphones are ubiquitous today."),
    ("meticulous", "tỉ mỉ", "She keeps meticulous records."),
    ("ephemeral", "phù du", "Fame is often ephemeral."),
    ("resilient", "kiên cường", "Children are remarkably resilient."),
    ("candid", "thẳng thắn", "He gave a candid answer."),
    ("diligent", "siêng năng", "A diligent student reviews daily."),
    ("frugal", "tiết kiệm", "They live a frugal life."),
    ("obsolete", "lỗi thời", "Fax machines are nearly obsolete."),
    ("pragmatic", "thực dụng", "We need a pragmatic solution."),
    ("tenacious", "bền bỉ", "She is a tenacious negotiator."),
    ("verbose", "dài dòng", "The report was too verbose."),
    ("zealous", "nhiệt tình", "He is a zealous supporter."),
]


@pytest.fixture
def cards():
    return [_card(i, *w) for i, w in enumerate(WORDS)]


def test_requires_three_cards(cards):
    with pytest.raises(NotEnoughCardsError):
        build_exercise(cards[:2])


def test_builds_ten_question_mix(cards):
    questions = build_exercise(cards, random.Random(7))

    assert len(questions) == 10
    assert len({q.id for q in questions}) == 10
    assert len({q.word_id for q in questions}) == 10
    kinds = [q.type for q in questions]
    assert kinds.count(QuestionType.GAP_FILL) == 3
    assert kinds.count(QuestionType.MCQ) == 7


def test_mcq_options_contain_answer_once(cards):
    for q in build_exercise(cards, random.Random(3)):
        if q.type is not QuestionType.MCQ:
            continue
        assert len(q.options) == 4
        assert q.options.count(q.answer) == 1
        assert len(set(q.options)) == 4


def test_gap_fill_blanks_the_word(cards):
    by_id = {c.id: c for c in cards}
    gaps = [q for q in build_exercise(cards, random.Random(11)) if q.type is QuestionType.GAP_FILL]

    assert gaps
    for q in gaps:
        card = by_id[q.word_id]
        assert q.answer == card.word
        assert q.context == card.example_en
        assert BLANK in q.question
        assert card.word.lower() not in q.question.lower()
        assert q.options is None


@pytest.mark.parametrize(
    "sentence, word, expected",
    [
        ("The cat sat in a category.", "cat", "The ____ sat in a category."),
        ("Cat owners love their cat.", "cat", "____ owners love their ____."),
        ("She will look up the word.", "look up", "She will ____ the word."),
        ("Artistic skill is rare.", "art", None),
    ],
)
def test_blank_out_matches_whole_words_only(sentence, word, expected):
    assert _blank_out(sentence, word) == expected


def test_gap_fill_falls_back_when_word_only_inside_longer_word():
    cards = [_card(i, w, d, f"Nothing about {w}s-ish here.") for i, (w, d, _) in enumerate(WORDS[:3])]
    cards[2] = _card(2, "cat", "con mèo", "A category of animals.")
    questions = build_exercise(cards, random.Random(4))

    cat_question = next(q for q in questions if q.word_id == "card-2")
    assert cat_question.type is QuestionType.MCQ
    assert all(q.type is QuestionType.MCQ or BLANK in q.question for q in questions)


def test_gap_fill_falls_back_when_word_missing_from_example():
    cards = [_card(i, w, d, "No usage here.") for i, (w, d, _) in enumerate(WORDS[:3])]
    questions = build_exercise(cards, random.Random(1))
    assert all(q.type is QuestionType.MCQ for q in questions)


def test_small_deck_has_fewer_options():
    cards = [_card(i, *w) for i, w in enumerate(WORDS[:3])]
    questions = build_exercise(cards, random.Random(5))

    assert len(questions) == 3
    for q in questions:
        if q.type is QuestionType.MCQ:
            assert len(q.options) == 3
            assert q.answer in q.options


def test_only_first_twenty_cards_are_used():
    many = [_card(i, f"word{i}", f"nghĩa {i}", f"Use word{i} here.") for i in range(30)]
    questions = build_exercise(many, random.Random(2))
    assert all(int(q.word_id.split("-")[1]) < 20 for q in questions)


def test_score_answers_ignores_case_and_whitespace():
    questions = [
        ExerciseQuestion(id="q1", type=QuestionType.GAP_FILL, question="x", answer="Candid", word_id="a"),
        ExerciseQuestion(id="q2", type=QuestionType.MCQ, question="y", options=["a", "b"], answer="tỉ mỉ", word_id="b"),
        ExerciseQuestion(id="q3", type=QuestionType.MCQ, question="z", options=["a", "b"], answer="bền bỉ", word_id="c"),
    ]
    result = score_answers(questions, {"q1": "  candid ", "q2": "phù du"})

    assert result.score == 1
    assert result.total == 3
    assert result.percent == 33
    assert [o.correct for o in result.outcomes] == [True, False, False]
    assert result.outcomes[2].given is None
