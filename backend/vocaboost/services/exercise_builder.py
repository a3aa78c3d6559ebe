"""
Quiz builder for a deck.

Questions are assembled from the deck's own cards:
  - MCQ, English word -> pick the Vietnamese definition
  - MCQ, Vietnamese definition -> pick the English word
  - Gap-fill, the card's example sentence with the word blanked out
Distractors are drawn from the other cards in the same deck.
"""
from __future__ import annotations

import logging
import random
import re

from vocaboost.models.exercise import (
    ExerciseQuestion,
    ExerciseResult,
    QuestionOutcome,
    QuestionType,
)
from vocaboost.models.flashcard import Flashcard

logger = logging.getLogger(__name__)

MIN_CARDS = 3
MAX_SOURCE_CARDS = 20
MAX_QUESTIONS = 10
OPTION_COUNT = 4
BLANK = "____"

_WORD_TO_DEF = "word_to_definition"
_DEF_TO_WORD = "definition_to_word"
_GAP_FILL = "gap_fill"

# 4 word->definition, 3 definition->word, 3 gap-fill per ten questions
_MIX = (
    _WORD_TO_DEF, _DEF_TO_WORD, _GAP_FILL,
    _WORD_TO_DEF, _DEF_TO_WORD, _GAP_FILL,
    _WORD_TO_DEF, _DEF_TO_WORD, _GAP_FILL,
    _WORD_TO_DEF,
)


class NotEnoughCardsError(Exception):
    """Raised when a deck is too small to build a quiz from."""


def normalize_answer(text: str) -> str:
    return text.strip().casefold()


def _options(
    correct: str,
    candidates: list[str],
    rng: random.Random,
) -> list[str]:
    seen = {normalize_answer(correct)}
    distractors: list[str] = []
    for value in candidates:
        key = normalize_answer(value)
        if not key or key in seen:
            continue
        seen.add(key)
        distractors.append(value)
    picked = rng.sample(distractors, min(len(distractors), OPTION_COUNT - 1))
    options = [correct, *picked]
    rng.shuffle(options)
    return options


def _blank_out(sentence: str, word: str) -> str | None:
    word = word.strip()
    # Whole-word matches only: "cat" must not blank the start of "category".
    pattern = re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE)
    if not word or not pattern.search(sentence):
        return None
    return pattern.sub(BLANK, sentence)


def _question(
    index: int,
    kind: str,
    card: Flashcard,
    deck_cards: list[Flashcard],
    rng: random.Random,
) -> ExerciseQuestion:
    qid = f"q{index + 1}"
    others = [c for c in deck_cards if c.id != card.id]

    if kind == _GAP_FILL:
        blanked = _blank_out(card.example_en, card.word)
        if blanked is not None:
            return ExerciseQuestion(
                id=qid,
                type=QuestionType.GAP_FILL,
                question=blanked,
                answer=card.word,
                word_id=card.id,
                context=card.example_en,
            )
        kind = _WORD_TO_DEF

    if kind == _DEF_TO_WORD:
        return ExerciseQuestion(
            id=qid,
            type=QuestionType.MCQ,
            question=f'Which English word means "{card.definition_vn}"?',
            options=_options(card.word, [c.word for c in others], rng),
            answer=card.word,
            word_id=card.id,
        )

    return ExerciseQuestion(
        id=qid,
        type=QuestionType.MCQ,
        question=f'What does "{card.word}" mean?',
        options=_options(card.definition_vn, [c.definition_vn for c in others], rng),
        answer=card.definition_vn,
        word_id=card.id,
    )


def build_exercise(
    cards: list[Flashcard],
    rng: random.Random | None = None,
    max_questions: int = MAX_QUESTIONS,
) -> list[ExerciseQuestion]:
    """Build up to ``max_questions`` questions, one per sampled card."""
    if len(cards) < MIN_CARDS:
        raise NotEnoughCardsError(
            f"Need at least {MIN_CARDS} cards to build a quiz, got {len(cards)}"
        )
    rng = rng or random.Random()

    source = cards[:MAX_SOURCE_CARDS]
    picked = rng.sample(source, min(len(source), max_questions))
    questions = [
        _question(i, _MIX[i % len(_MIX)], card, source, rng)
        for i, card in enumerate(picked)
    ]
    logger.debug("Built %d questions from %d cards", len(questions), len(source))
    return questions


def score_answers(
    questions: list[ExerciseQuestion],
    answers: dict[str, str],
) -> ExerciseResult:
    outcomes: list[QuestionOutcome] = []
    for q in questions:
        given = answers.get(q.id)
        correct = given is not None and normalize_answer(given) == normalize_answer(q.answer)
        outcomes.append(
            QuestionOutcome(question_id=q.id, given=given, expected=q.answer, correct=correct)
        )

    score = sum(1 for o in outcomes if o.correct)
    total = len(outcomes)
    percent = int(score * 100 / total + 0.5) if total else 0
    return ExerciseResult(score=score, total=total, percent=percent, outcomes=outcomes)
