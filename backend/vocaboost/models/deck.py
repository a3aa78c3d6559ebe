from __future__ import annotations

from pydantic import BaseModel, Field

from vocaboost.models.flashcard import Flashcard, FlashcardCreate


class DeckCreate(BaseModel):
    name: str = ""
    cards: list[FlashcardCreate] = Field(default_factory=list)


class DeckUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)


class CardsAppend(BaseModel):
    cards: list[FlashcardCreate] = Field(min_length=1)


class DeckSummary(BaseModel):
    id: str
    name: str
    position: int
    created_at: int
    card_count: int
    due_count: int


class Deck(BaseModel):
    id: str
    name: str
    position: int
    created_at: int
    cards: list[Flashcard] = Field(default_factory=list)


class DeckList(BaseModel):
    items: list[DeckSummary]
    total: int
