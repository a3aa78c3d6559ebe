from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_INTERVAL = 0
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


class Grade(str, Enum):
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class VocabularyLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class ScheduleState(BaseModel):
    interval: int = DEFAULT_INTERVAL              # days until next review, 0 = due now
    ease_factor: float = DEFAULT_EASE_FACTOR      # never below MIN_EASE_FACTOR
    repetition_count: int = 0                     # consecutive passing reviews
    next_review_at: int | None = None             # epoch millis, None = due immediately
    last_reviewed_at: int | None = None           # epoch millis

    model_config = {"frozen": True}


class FlashcardCreate(BaseModel):
    word: str = Field(min_length=1)
    definition_vn: str
    example_en: str = ""
    example_vn: str = ""
    level: VocabularyLevel | None = None


class FlashcardUpdate(BaseModel):
    word: str | None = Field(default=None, min_length=1)
    definition_vn: str | None = None
    example_en: str | None = None
    example_vn: str | None = None
    level: VocabularyLevel | None = None


class Flashcard(BaseModel):
    id: str
    deck_id: str
    word: str
    definition_vn: str
    example_en: str
    example_vn: str
    level: VocabularyLevel | None
    position: int
    interval: int
    ease_factor: float
    repetition_count: int
    next_review_at: int | None
    last_reviewed_at: int | None
    created_at: int

    @property
    def schedule(self) -> ScheduleState:
        return ScheduleState(
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetition_count=self.repetition_count,
            next_review_at=self.next_review_at,
            last_reviewed_at=self.last_reviewed_at,
        )


class FlashcardList(BaseModel):
    items: list[Flashcard]
    total: int


class ReviewRequest(BaseModel):
    grade: Grade


class ReviewResult(BaseModel):
    id: str
    interval: int
    ease_factor: float
    repetition_count: int
    next_review_at: int
    last_reviewed_at: int
