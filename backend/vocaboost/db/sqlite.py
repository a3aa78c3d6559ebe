import uuid
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from vocaboost.config import settings
from vocaboost.models.deck import Deck, DeckSummary
from vocaboost.models.flashcard import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL,
    Flashcard,
    FlashcardCreate,
    FlashcardUpdate,
    ScheduleState,
)
from vocaboost.services.scheduler import now_ms

_db_path: Path | None = None

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS decks (
    id          TEXT PRIMARY KEY,
    name        TEXT NOT NULL,
    position    INTEGER NOT NULL,
    created_at  INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_decks_position ON decks(position);

CREATE TABLE IF NOT EXISTS cards (
    id               TEXT PRIMARY KEY,
    deck_id          TEXT NOT NULL REFERENCES decks(id) ON DELETE CASCADE,
    word             TEXT NOT NULL,
    definition_vn    TEXT NOT NULL DEFAULT '',
    example_en       TEXT NOT NULL DEFAULT '',
    example_vn       TEXT NOT NULL DEFAULT '',
    level            TEXT,
    position         INTEGER NOT NULL,
    interval         INTEGER NOT NULL DEFAULT 0,
    ease_factor      REAL NOT NULL DEFAULT 2.5,
    repetition_count INTEGER NOT NULL DEFAULT 0,
    next_review_at   INTEGER,
    last_reviewed_at INTEGER,
    created_at       INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_cards_deck ON cards(deck_id, position);
CREATE INDEX IF NOT EXISTS idx_cards_review ON cards(next_review_at);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
INSERT OR IGNORE INTO schema_version(version) VALUES (1);
"""

# Ordered by collection insertion, then card insertion within each collection.
_CARD_ORDER = "ORDER BY d.position ASC, c.position ASC"


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON")
        yield db


def _row_to_card(row: aiosqlite.Row) -> Flashcard:
    return Flashcard(**dict(row))


async def _next_position(db: aiosqlite.Connection, sql: str, params: tuple = ()) -> int:
    cursor = await db.execute(sql, params)
    row = await cursor.fetchone()
    return (row[0] + 1) if row and row[0] is not None else 0


# --- Decks ---


async def create_deck(
    db: aiosqlite.Connection, name: str, now: int | None = None
) -> str:
    deck_id = str(uuid.uuid4())
    position = await _next_position(db, "SELECT MAX(position) FROM decks")
    await db.execute(
        "INSERT INTO decks (id, name, position, created_at) VALUES (?, ?, ?, ?)",
        (deck_id, name, position, now if now is not None else now_ms()),
    )
    await db.commit()
    return deck_id


async def get_deck(db: aiosqlite.Connection, deck_id: str) -> Deck | None:
    cursor = await db.execute("SELECT * FROM decks WHERE id = ?", (deck_id,))
    row = await cursor.fetchone()
    if row is None:
        return None
    cursor = await db.execute(
        "SELECT * FROM cards WHERE deck_id = ? ORDER BY position ASC", (deck_id,)
    )
    cards = [_row_to_card(r) for r in await cursor.fetchall()]
    return Deck(**dict(row), cards=cards)


async def find_deck_by_name(db: aiosqlite.Connection, name: str) -> str | None:
    cursor = await db.execute(
        "SELECT id FROM decks WHERE name = ? ORDER BY position ASC LIMIT 1", (name,)
    )
    row = await cursor.fetchone()
    return row[0] if row else None


async def list_deck_summaries(
    db: aiosqlite.Connection, now: int | None = None
) -> list[DeckSummary]:
    if now is None:
        now = now_ms()
    cursor = await db.execute(
        """SELECT d.id, d.name, d.position, d.created_at,
                  COUNT(c.id) AS card_count,
                  SUM(CASE WHEN c.id IS NOT NULL
                            AND (c.next_review_at IS NULL OR c.next_review_at <= ?)
                       THEN 1 ELSE 0 END) AS due_count
           FROM decks d
           LEFT JOIN cards c ON c.deck_id = d.id
           GROUP BY d.id
           ORDER BY d.position ASC""",
        (now,),
    )
    rows = await cursor.fetchall()
    return [
        DeckSummary(
            id=row["id"],
            name=row["name"],
            position=row["position"],
            created_at=row["created_at"],
            card_count=row["card_count"],
            due_count=row["due_count"] or 0,
        )
        for row in rows
    ]


async def rename_deck(db: aiosqlite.Connection, deck_id: str, name: str) -> bool:
    cursor = await db.execute("UPDATE decks SET name = ? WHERE id = ?", (name, deck_id))
    await db.commit()
    return (cursor.rowcount or 0) > 0


async def delete_deck(db: aiosqlite.Connection, deck_id: str) -> bool:
    cursor = await db.execute("DELETE FROM decks WHERE id = ?", (deck_id,))
    await db.commit()
    return (cursor.rowcount or 0) > 0


# --- Cards ---


async def insert_cards(
    db: aiosqlite.Connection,
    deck_id: str,
    cards: list[FlashcardCreate],
    now: int | None = None,
) -> list[str]:
    """Append cards to a deck with a fresh schedule. Returns the generated card IDs."""
    if now is None:
        now = now_ms()
    position = await _next_position(
        db, "SELECT MAX(position) FROM cards WHERE deck_id = ?", (deck_id,)
    )
    card_ids: list[str] = []
    for offset, card in enumerate(cards):
        card_id = str(uuid.uuid4())
        card_ids.append(card_id)
        await db.execute(
            """INSERT INTO cards
               (id, deck_id, word, definition_vn, example_en, example_vn, level,
                position, interval, ease_factor, repetition_count,
                next_review_at, last_reviewed_at, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 0, NULL, NULL, ?)""",
            (
                card_id,
                deck_id,
                card.word.strip(),
                card.definition_vn.strip(),
                card.example_en.strip(),
                card.example_vn.strip(),
                card.level.value if card.level else None,
                position + offset,
                DEFAULT_INTERVAL,
                DEFAULT_EASE_FACTOR,
                now,
            ),
        )
    await db.commit()
    return card_ids


async def get_card(db: aiosqlite.Connection, card_id: str) -> Flashcard | None:
    cursor = await db.execute("SELECT * FROM cards WHERE id = ?", (card_id,))
    row = await cursor.fetchone()
    return _row_to_card(row) if row else None


async def list_all_cards(db: aiosqlite.Connection) -> list[Flashcard]:
    cursor = await db.execute(
        f"SELECT c.* FROM cards c JOIN decks d ON d.id = c.deck_id {_CARD_ORDER}"  # noqa: S608
    )
    rows = await cursor.fetchall()
    return [_row_to_card(r) for r in rows]


async def list_due_cards(
    db: aiosqlite.Connection, now: int, limit: int | None = None
) -> list[Flashcard]:
    sql = (
        "SELECT c.* FROM cards c JOIN decks d ON d.id = c.deck_id "
        "WHERE c.next_review_at IS NULL OR c.next_review_at <= ? "
        f"{_CARD_ORDER}"
    )
    params: tuple = (now,)
    if limit is not None:
        sql += " LIMIT ?"
        params = (now, limit)
    cursor = await db.execute(sql, params)  # noqa: S608
    rows = await cursor.fetchall()
    return [_row_to_card(r) for r in rows]


async def count_due_cards(db: aiosqlite.Connection, now: int) -> int:
    cursor = await db.execute(
        "SELECT COUNT(*) FROM cards WHERE next_review_at IS NULL OR next_review_at <= ?",
        (now,),
    )
    row = await cursor.fetchone()
    return row[0] if row else 0


async def update_card_content(
    db: aiosqlite.Connection, card_id: str, update: FlashcardUpdate
) -> Flashcard | None:
    fields = update.model_dump(exclude_none=True)
    if not fields:
        return await get_card(db, card_id)

    for key, val in fields.items():
        if hasattr(val, "value"):
            fields[key] = val.value
        elif isinstance(val, str):
            fields[key] = val.strip()

    set_clause = ", ".join(f"{k} = ?" for k in fields)
    cursor = await db.execute(
        f"UPDATE cards SET {set_clause} WHERE id = ?",  # noqa: S608
        list(fields.values()) + [card_id],
    )
    await db.commit()
    if not cursor.rowcount:
        return None
    return await get_card(db, card_id)


async def update_card_schedule(
    db: aiosqlite.Connection, card_id: str, state: ScheduleState
) -> Flashcard | None:
    """Write only the scheduling columns; card content is never touched here."""
    await db.execute(
        """UPDATE cards
           SET interval = ?, ease_factor = ?, repetition_count = ?,
               next_review_at = ?, last_reviewed_at = ?
           WHERE id = ?""",
        (
            state.interval,
            state.ease_factor,
            state.repetition_count,
            state.next_review_at,
            state.last_reviewed_at,
            card_id,
        ),
    )
    await db.commit()
    return await get_card(db, card_id)


async def delete_card(db: aiosqlite.Connection, card_id: str) -> bool:
    cursor = await db.execute("DELETE FROM cards WHERE id = ?", (card_id,))
    await db.commit()
    return (cursor.rowcount or 0) > 0
