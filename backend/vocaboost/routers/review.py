"""
Spaced repetition review router.

Endpoints:
  GET  /review/due         - due cards across all decks, deck order then card order
  POST /review/{card_id}   - submit a hard/good/easy grade and reschedule the card
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from vocaboost.models.flashcard import FlashcardList, ReviewRequest, ReviewResult
from vocaboost.services.deck_store import DeckStore, get_store
from vocaboost.services.scheduler import now_ms

router = APIRouter()


@router.get("/due", response_model=FlashcardList)
async def get_due(
    limit: int | None = Query(default=None, ge=1, le=1000),
    store: DeckStore = Depends(get_store),
) -> FlashcardList:
    """Due cards across every deck. ``total`` counts all due cards, even past ``limit``."""
    now = now_ms()
    items = await store.due_cards(now=now, limit=limit)
    total = len(items) if limit is None else await store.count_due(now)
    return FlashcardList(items=items, total=total)


@router.post("/{card_id}", response_model=ReviewResult)
async def review_card(
    card_id: str,
    body: ReviewRequest,
    store: DeckStore = Depends(get_store),
) -> ReviewResult:
    """Grade a card. Only its scheduling fields change."""
    card = await store.grade_card(card_id, body.grade)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")

    return ReviewResult(
        id=card.id,
        interval=card.interval,
        ease_factor=card.ease_factor,
        repetition_count=card.repetition_count,
        next_review_at=card.next_review_at,
        last_reviewed_at=card.last_reviewed_at,
    )
