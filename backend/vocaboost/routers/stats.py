from fastapi import APIRouter, Depends, HTTPException

from vocaboost.models.stats import StatsSummary
from vocaboost.services.deck_store import DeckStore, get_store

router = APIRouter()


@router.get("/", response_model=StatsSummary)
async def overall_stats(store: DeckStore = Depends(get_store)):
    """Card counts across every deck: total, new, learning, mastered, due now."""
    return await store.stats()


@router.get("/{deck_id}", response_model=StatsSummary)
async def deck_stats(deck_id: str, store: DeckStore = Depends(get_store)):
    stats = await store.stats(deck_id)
    if stats is None:
        raise HTTPException(status_code=404, detail="Deck not found")
    return stats
