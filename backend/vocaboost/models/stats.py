from pydantic import BaseModel


class StatsSummary(BaseModel):
    total: int
    new: int        # never reviewed
    learning: int   # 1-5 passing reviews
    mastered: int   # more than 5 passing reviews
    due: int
