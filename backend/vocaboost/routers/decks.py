from fastapi import APIRouter, Depends, HTTPException

from vocaboost.models.deck import CardsAppend, Deck, DeckCreate, DeckList, DeckUpdate
from vocaboost.models.flashcard import Flashcard, FlashcardCreate, FlashcardUpdate
from vocaboost.services.deck_store import DeckStore, get_store

router = APIRouter()


@router.post("/", response_model=Deck, status_code=201)
async def create_deck(body: DeckCreate, store: DeckStore = Depends(get_store)):
    return await store.create_deck(body.name, body.cards)


@router.get("/", response_model=DeckList)
async def list_decks(store: DeckStore = Depends(get_store)):
    items = await store.list_decks()
    return DeckList(items=items, total=len(items))


@router.post("/quick-save", response_model=Flashcard, status_code=201)
async def quick_save(body: FlashcardCreate, store: DeckStore = Depends(get_store)):
    return await store.quick_save(body)


@router.patch("/cards/{card_id}", response_model=Flashcard)
async def edit_card(
    card_id: str, body: FlashcardUpdate, store: DeckStore = Depends(get_store)
):
    card = await store.update_card(card_id, body)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return card


@router.delete("/cards/{card_id}", status_code=204)
async def remove_card(card_id: str, store: DeckStore = Depends(get_store)):
    if not await store.delete_card(card_id):
        raise HTTPException(status_code=404, detail="Flashcard not found")


@router.get("/{deck_id}", response_model=Deck)
async def get_deck(deck_id: str, store: DeckStore = Depends(get_store)):
    deck = await store.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.patch("/{deck_id}", response_model=Deck)
async def rename_deck(
    deck_id: str, body: DeckUpdate, store: DeckStore = Depends(get_store)
):
    if body.name is None:
        deck = await store.get_deck(deck_id)
    else:
        deck = await store.rename_deck(deck_id, body.name)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.delete("/{deck_id}", status_code=204)
async def delete_deck(deck_id: str, store: DeckStore = Depends(get_store)):
    if not await store.delete_deck(deck_id):
        raise HTTPException(status_code=404, detail="Deck not found")


@router.post("/{deck_id}/cards", response_model=Deck, status_code=201)
async def add_cards(
    deck_id: str, body: CardsAppend, store: DeckStore = Depends(get_store)
):
    deck = await store.add_cards(deck_id, body.cards)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck
