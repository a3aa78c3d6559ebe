import logging

from fastapi import APIRouter, Depends, HTTPException

from vocaboost.models.exercise import AnswerSubmission, Exercise, ExerciseResult
from vocaboost.services.deck_store import DeckStore, get_store
from vocaboost.services.exercise_builder import (
    NotEnoughCardsError,
    build_exercise,
    score_answers,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/score", response_model=ExerciseResult)
async def score_exercise(body: AnswerSubmission) -> ExerciseResult:
    return score_answers(body.questions, body.answers)


@router.post("/{deck_id}", response_model=Exercise)
async def create_exercise(
    deck_id: str, store: DeckStore = Depends(get_store)
) -> Exercise:
    deck = await store.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    try:
        questions = build_exercise(deck.cards)
    except NotEnoughCardsError as e:
        logger.info("Quiz refused for deck %s: %s", deck_id, e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    return Exercise(deck_id=deck_id, questions=questions)
