"""
Deck store: the service object that owns a user's decks and their cards.

Reads go straight to SQLite; every commit operation persists before returning,
so there is no in-memory copy to keep in sync. Scheduling is delegated to the
pure functions in scheduler.py.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import aiosqlite
from fastapi import Depends

from vocaboost.config import settings
from vocaboost.db import sqlite as store_db
from vocaboost.models.deck import Deck, DeckSummary
from vocaboost.models.flashcard import (
    Flashcard,
    FlashcardCreate,
    FlashcardUpdate,
    Grade,
)
from vocaboost.models.stats import StatsSummary
from vocaboost.services.scheduler import is_due, now_ms, schedule_review

logger = logging.getLogger(__name__)

MASTERED_AFTER = 5  # passing reviews; more than this counts as mastered


def summarize(cards: list[Flashcard], now: int) -> StatsSummary:
    new = learning = mastered = due = 0
    for card in cards:
        if card.repetition_count == 0:
            new += 1
        elif card.repetition_count <= MASTERED_AFTER:
            learning += 1
        else:
            mastered += 1
        if is_due(card.schedule, now):
            due += 1
    return StatsSummary(
        total=len(cards), new=new, learning=learning, mastered=mastered, due=due
    )


class DeckStore:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    # --- Reads ---

    async def list_decks(self, now: int | None = None) -> list[DeckSummary]:
        return await store_db.list_deck_summaries(self._db, now)

    async def get_deck(self, deck_id: str) -> Deck | None:
        return await store_db.get_deck(self._db, deck_id)

    async def get_card(self, card_id: str) -> Flashcard | None:
        return await store_db.get_card(self._db, card_id)

    async def due_cards(
        self, now: int | None = None, limit: int | None = None
    ) -> list[Flashcard]:
        """Due cards across every deck, in deck order then card order."""
        return await store_db.list_due_cards(
            self._db, now if now is not None else now_ms(), limit
        )

    async def count_due(self, now: int | None = None) -> int:
        return await store_db.count_due_cards(
            self._db, now if now is not None else now_ms()
        )

    async def stats(self, deck_id: str | None = None, now: int | None = None) -> StatsSummary | None:
        if now is None:
            now = now_ms()
        if deck_id is None:
            cards = await store_db.list_all_cards(self._db)
        else:
            deck = await self.get_deck(deck_id)
            if deck is None:
                return None
            cards = deck.cards
        return summarize(cards, now)

    # --- Commits ---

    async def create_deck(
        self,
        name: str,
        cards: list[FlashcardCreate] | None = None,
        now: int | None = None,
    ) -> Deck:
        name = name.strip() or settings.default_deck_name
        deck_id = await store_db.create_deck(self._db, name, now)
        if cards:
            await store_db.insert_cards(self._db, deck_id, cards, now)
        logger.info("Created deck %s (%r) with %d cards", deck_id, name, len(cards or []))
        return await self.get_deck(deck_id)  # type: ignore[return-value]

    async def rename_deck(self, deck_id: str, name: str) -> Deck | None:
        name = name.strip() or settings.default_deck_name
        if not await store_db.rename_deck(self._db, deck_id, name):
            return None
        return await self.get_deck(deck_id)

    async def delete_deck(self, deck_id: str) -> bool:
        return await store_db.delete_deck(self._db, deck_id)

    async def add_cards(
        self,
        deck_id: str,
        cards: list[FlashcardCreate],
        now: int | None = None,
    ) -> Deck | None:
        if await self.get_deck(deck_id) is None:
            return None
        await store_db.insert_cards(self._db, deck_id, cards, now)
        return await self.get_deck(deck_id)

    async def quick_save(
        self, card: FlashcardCreate, now: int | None = None
    ) -> Flashcard:
        """Append a single card to the quick-save deck, creating the deck on first use."""
        deck_name = settings.quick_save_deck_name
        deck_id = await store_db.find_deck_by_name(self._db, deck_name)
        if deck_id is None:
            deck_id = await store_db.create_deck(self._db, deck_name, now)
        (card_id,) = await store_db.insert_cards(self._db, deck_id, [card], now)
        return await self.get_card(card_id)  # type: ignore[return-value]

    async def update_card(
        self, card_id: str, update: FlashcardUpdate
    ) -> Flashcard | None:
        return await store_db.update_card_content(self._db, card_id, update)

    async def delete_card(self, card_id: str) -> bool:
        return await store_db.delete_card(self._db, card_id)

    async def grade_card(
        self, card_id: str, grade: Grade, now: int | None = None
    ) -> Flashcard | None:
        """
        Apply a graded review to one card. Returns None if the card does not exist.

        The read-compute-write runs under BEGIN IMMEDIATE, so concurrent grades
        of the same card from other connections are serialized.
        """
        await self._db.execute("BEGIN IMMEDIATE")
        try:
            card = await self.get_card(card_id)
            if card is None:
                await self._db.rollback()
                logger.warning("Review for unknown card %s", card_id)
                return None

            new_state = schedule_review(card.schedule, grade, now)
            # commits the transaction
            updated = await store_db.update_card_schedule(self._db, card_id, new_state)
        except Exception:
            await self._db.rollback()
            raise
        logger.info(
            "Card %s graded %s: interval %d -> %d days, ease %.2f",
            card_id,
            Grade(grade).value,
            card.interval,
            new_state.interval,
            new_state.ease_factor,
        )
        return updated


async def get_store(
    db: aiosqlite.Connection = Depends(store_db.get_db),
) -> AsyncIterator[DeckStore]:
    yield DeckStore(db)
