from vocaboost.models.deck import (
    CardsAppend,
    Deck,
    DeckCreate,
    DeckList,
    DeckSummary,
    DeckUpdate,
)
from vocaboost.models.exercise import (
    AnswerSubmission,
    Exercise,
    ExerciseQuestion,
    ExerciseResult,
    QuestionOutcome,
    QuestionType,
)
from vocaboost.models.flashcard import (
    Flashcard,
    FlashcardCreate,
    FlashcardList,
    FlashcardUpdate,
    Grade,
    ReviewRequest,
    ReviewResult,
    ScheduleState,
    VocabularyLevel,
)
from vocaboost.models.stats import StatsSummary

__all__ = [
    "AnswerSubmission",
    "CardsAppend",
    "Deck",
    "DeckCreate",
    "DeckList",
    "DeckSummary",
    "DeckUpdate",
    "Exercise",
    "ExerciseQuestion",
    "ExerciseResult",
    "Flashcard",
    "FlashcardCreate",
    "FlashcardList",
    "FlashcardUpdate",
    "Grade",
    "QuestionOutcome",
    "QuestionType",
    "ReviewRequest",
    "ReviewResult",
    "ScheduleState",
    "StatsSummary",
    "VocabularyLevel",
]
