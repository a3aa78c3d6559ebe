import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from vocaboost import app
from vocaboost.config import settings
from vocaboost.db.sqlite import get_db, init_sqlite
from vocaboost.models.flashcard import FlashcardCreate
from vocaboost.services.deck_store import DeckStore

NOW = 1_700_000_000_000  # fixed clock, epoch millis


@pytest.fixture
def now() -> int:
    return NOW


@pytest_asyncio.fixture
async def db(tmp_path):
    await init_sqlite(tmp_path)
    async for conn in get_db():
        yield conn


@pytest_asyncio.fixture
async def store(db):
    return DeckStore(db)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path / "data")
    with TestClient(app) as c:
        yield c


def make_card(word: str, definition: str = "", example: str = "") -> FlashcardCreate:
    return FlashcardCreate(
        word=word,
        definition_vn=definition or f"nghĩa của {word}",
        example_en=example or f"This sentence uses {word} in context.",
        example_vn=f"Câu này dùng {word}.",
    )


@pytest.fixture
def vocab() -> list[FlashcardCreate]:
    return [
        make_card("ubiquitous", "có mặt ở khắp nơi", "Smartphones are ubiquitous today."),
        make_card("meticulous", "tỉ mỉ", "She keeps meticulous records."),
        make_card("ephemeral", "phù du, chóng tàn", "Fame is often ephemeral."),
        make_card("resilient", "kiên cường", "Children are remarkably resilient."),
        make_card("candid", "thẳng thắn", "He gave a candid answer."),
    ]
