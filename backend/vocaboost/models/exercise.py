from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class QuestionType(str, Enum):
    MCQ = "mcq"
    GAP_FILL = "gap-fill"


class ExerciseQuestion(BaseModel):
    id: str
    type: QuestionType
    question: str
    options: list[str] | None = None  # MCQ only
    answer: str
    word_id: str
    context: str | None = None  # source example sentence for gap-fill


class Exercise(BaseModel):
    deck_id: str
    questions: list[ExerciseQuestion]


class AnswerSubmission(BaseModel):
    questions: list[ExerciseQuestion] = Field(min_length=1)
    answers: dict[str, str]  # question id -> learner answer


class QuestionOutcome(BaseModel):
    question_id: str
    given: str | None
    expected: str
    correct: bool


class ExerciseResult(BaseModel):
    score: int
    total: int
    percent: int
    outcomes: list[QuestionOutcome]
